"""
Meal-plan history: groups a user's scheduled meals by period and reports
how much of each period was planned. Also replays a past period's plan
onto a new start date.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from sqlalchemy.orm import Session, joinedload

from mealplan.config import get_settings
from mealplan.errors import NoMealPlans
from mealplan.models.meal_plan import MealPlan
from mealplan.services.grocery_store import transaction
from mealplan.services.periods import (
    Period, PeriodMode, format_period_name, period_end, period_for, total_possible_meals,
)

logger = logging.getLogger(__name__)

PLANNED_THRESHOLD = 80


@dataclass
class PeriodHistory:
    period: Period
    name: str
    total_possible_meals: int
    meals_planned: int = 0
    recipe_ids: set = field(default_factory=set)
    # date ISO string -> meal_type -> {"recipe_id", "recipe_name"}
    meals: dict[str, dict[str, dict]] = field(default_factory=dict)

    @property
    def total_recipes(self) -> int:
        return len(self.recipe_ids)

    @property
    def planning_percentage(self) -> int:
        if self.total_possible_meals <= 0:
            return 0
        return round(self.meals_planned / self.total_possible_meals * 100)

    @property
    def status(self) -> str:
        return "completed" if self.planning_percentage >= PLANNED_THRESHOLD else "partial"


def meal_plan_history(db: Session, user_id, mode: PeriodMode) -> list[PeriodHistory]:
    mode = PeriodMode(mode)
    meals_per_day = get_settings().MEALS_PER_DAY
    plans = db.query(MealPlan).options(joinedload(MealPlan.recipe)).filter(
        MealPlan.user_id == user_id,
    ).order_by(MealPlan.plan_date.asc()).all()

    periods: dict[date, PeriodHistory] = {}
    for mp in plans:
        period = period_for(mp.plan_date, mode)
        hist = periods.get(period.start_date)
        if hist is None:
            hist = PeriodHistory(
                period=period,
                name=format_period_name(period.start_date, period.end_date),
                total_possible_meals=total_possible_meals(period, meals_per_day),
            )
            periods[period.start_date] = hist
        hist.meals.setdefault(mp.plan_date.isoformat(), {})[mp.meal_type] = {
            "recipe_id": mp.recipe_id,
            "recipe_name": mp.recipe.name if mp.recipe else None,
        }
        hist.meals_planned += 1
        if mp.recipe_id:
            hist.recipe_ids.add(mp.recipe_id)

    return sorted(periods.values(), key=lambda h: h.period.start_date, reverse=True)


def copy_period(
    db: Session,
    user_id,
    source_start: date,
    mode: PeriodMode,
    target_start: date,
) -> list[MealPlan]:
    """Schedule every meal of the source period at the same offset from target_start."""
    mode = PeriodMode(mode)
    source_end = period_end(source_start, mode)
    plans = db.query(MealPlan).filter(
        MealPlan.user_id == user_id,
        MealPlan.plan_date >= source_start,
        MealPlan.plan_date <= source_end,
    ).order_by(MealPlan.plan_date.asc()).all()
    if not plans:
        raise NoMealPlans(f"No meal plans found between {source_start} and {source_end}")

    created = []
    with transaction(db, "copy"):
        for mp in plans:
            offset = (mp.plan_date - source_start).days
            copy = MealPlan(
                user_id=user_id,
                plan_date=target_start + timedelta(days=offset),
                meal_type=mp.meal_type,
                recipe_id=mp.recipe_id,
                servings=mp.servings,
                notes=mp.notes,
            )
            db.add(copy)
            created.append(copy)
    for mp in created:
        db.refresh(mp)
    logger.info(f"Copied {len(created)} meals from {source_start} to {target_start}")
    return created
