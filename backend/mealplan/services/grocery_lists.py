"""
Grocery list operations exposed to the API layer: list the user's periods,
generate a period's list from scheduled meals, and check items off.
"""

import logging
from datetime import date

from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, selectinload

from mealplan.config import get_settings
from mealplan.errors import NoMealPlans, StoreUnavailable
from mealplan.models.grocery import GroceryList
from mealplan.models.meal_plan import MealPlan
from mealplan.models.recipe import Recipe
from mealplan.services import grocery_store
from mealplan.services.aggregator import MealPlanEntry, aggregate
from mealplan.services.periods import PeriodMode, format_period_name, period_from_range
from mealplan.services.presenter import PeriodSummary, present_periods

logger = logging.getLogger(__name__)


def fetch_meal_plan_entries(db: Session, user_id, start: date, end: date) -> list[MealPlanEntry]:
    """Recipe-backed meals scheduled in [start, end] with their ingredient lines."""
    try:
        plans = db.query(MealPlan).options(
            selectinload(MealPlan.recipe).selectinload(Recipe.ingredients)
        ).filter(
            MealPlan.user_id == user_id,
            MealPlan.plan_date >= start,
            MealPlan.plan_date <= end,
            MealPlan.recipe_id.isnot(None),
        ).order_by(MealPlan.plan_date.asc(), MealPlan.meal_type.asc()).all()
    except DBAPIError as e:
        db.rollback()
        logger.error(f"Meal plan lookup failed for user {user_id}: {e}")
        raise StoreUnavailable("Meal plan store unavailable") from e

    entries = []
    for mp in plans:
        recipe = mp.recipe
        if recipe is None:
            continue
        entries.append(MealPlanEntry(
            date=mp.plan_date,
            meal_type=mp.meal_type,
            recipe_id=recipe.id,
            recipe_name=recipe.name,
            ingredients=[
                {"name": ing.ingredient_name, "amount": ing.quantity, "unit": ing.unit}
                for ing in recipe.ingredients if not ing.optional
            ],
            servings=mp.servings or recipe.servings,
        ))
    return entries


def list_periods(
    db: Session,
    user_id,
    mode: PeriodMode,
    today: date | None = None,
) -> list[PeriodSummary]:
    settings = get_settings()
    return present_periods(
        db,
        user_id,
        mode,
        today or date.today(),
        settings.WINDOW_PAST_PERIODS,
        settings.WINDOW_FUTURE_PERIODS,
    )


def generate_list(
    db: Session,
    user_id,
    period_start: date,
    period_end: date,
    name: str | None = None,
) -> GroceryList:
    logger.info(f"Generating grocery list for user {user_id} from {period_start} to {period_end}")
    period = period_from_range(period_start, period_end)

    entries = fetch_meal_plan_entries(db, user_id, period_start, period_end)
    if not entries:
        raise NoMealPlans(f"No meal plans found between {period_start} and {period_end}")
    logger.info(f"Found {len(entries)} planned meals")

    result = aggregate(entries)
    logger.info(
        f"Aggregated {len(result.items)} items (est. ${result.estimated_cost:.2f}, "
        f"{result.skipped_lines} lines skipped)"
    )

    list_name = name or f"Grocery List - {format_period_name(period_start, period_end)}"
    return grocery_store.generate_or_update(
        db, user_id, period, result.items_as_dicts(), result.estimated_cost, list_name,
    )


def toggle_item(
    db: Session,
    user_id,
    list_id,
    item_index: int,
    expected_revision: int | None = None,
    today: date | None = None,
) -> GroceryList:
    return grocery_store.toggle_item_checked(
        db, user_id, list_id, item_index,
        today=today or date.today(),
        expected_revision=expected_revision,
    )


def list_summaries(db: Session, user_id) -> list[GroceryList]:
    return db.query(GroceryList).filter(
        GroceryList.user_id == user_id,
    ).order_by(GroceryList.created_at.desc()).all()
