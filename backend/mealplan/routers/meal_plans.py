from datetime import date, datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from mealplan.database import get_db
from mealplan.models.meal_plan import MealPlan
from mealplan.models.recipe import Recipe
from mealplan.models.user import User
from mealplan.schemas.meal_plan import (
    MealPlanCreate, MealPlanUpdate, MealPlanResponse,
    PeriodHistoryResponse, CopyPeriodRequest,
)
from mealplan.services.history import copy_period, meal_plan_history
from mealplan.services.periods import PeriodMode, period_for
from mealplan.utils.auth import get_current_user

router = APIRouter()


def _get_plan(db: Session, plan_id: UUID, user_id) -> MealPlan:
    plan = db.query(MealPlan).filter(
        MealPlan.id == plan_id, MealPlan.user_id == user_id
    ).first()
    if not plan:
        raise HTTPException(status_code=404, detail="Meal plan not found")
    return plan


def _check_recipe(db: Session, recipe_id: UUID | None, user_id) -> None:
    if recipe_id is None:
        return
    exists = db.query(Recipe.id).filter(
        Recipe.id == recipe_id, Recipe.user_id == user_id
    ).first()
    if not exists:
        raise HTTPException(status_code=404, detail="Recipe not found")


@router.get("/", response_model=list[MealPlanResponse])
def list_plans(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    mode: PeriodMode = Query(PeriodMode.WEEK),
    on: date | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Plans in an explicit range, or in the `mode` period containing `on` (default today)."""
    if start_date is None or end_date is None:
        period = period_for(on or date.today(), mode)
        start_date, end_date = period.start_date, period.end_date
    return db.query(MealPlan).filter(
        MealPlan.user_id == current_user.id,
        MealPlan.plan_date >= start_date,
        MealPlan.plan_date <= end_date,
    ).order_by(MealPlan.plan_date.asc(), MealPlan.meal_type.asc()).all()


@router.post("/", response_model=MealPlanResponse, status_code=201)
def create_plan(
    body: MealPlanCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _check_recipe(db, body.recipe_id, current_user.id)
    plan = MealPlan(**body.model_dump(), user_id=current_user.id)
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


@router.get("/history", response_model=list[PeriodHistoryResponse])
def history(
    mode: PeriodMode = Query(PeriodMode.WEEK),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [
        PeriodHistoryResponse(
            key=h.period.key,
            mode=h.period.mode,
            start_date=h.period.start_date,
            end_date=h.period.end_date,
            name=h.name,
            meals_planned=h.meals_planned,
            total_possible_meals=h.total_possible_meals,
            total_recipes=h.total_recipes,
            planning_percentage=h.planning_percentage,
            status=h.status,
            meals=h.meals,
        )
        for h in meal_plan_history(db, current_user.id, mode)
    ]


@router.post("/history/copy", response_model=list[MealPlanResponse], status_code=201)
def copy_history_period(
    body: CopyPeriodRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return copy_period(db, current_user.id, body.source_start, body.mode, body.target_start)


@router.get("/{plan_id}", response_model=MealPlanResponse)
def get_plan(
    plan_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_plan(db, plan_id, current_user.id)


@router.patch("/{plan_id}", response_model=MealPlanResponse)
def update_plan(
    plan_id: UUID,
    body: MealPlanUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    plan = _get_plan(db, plan_id, current_user.id)
    data = body.model_dump(exclude_unset=True)
    if "recipe_id" in data:
        _check_recipe(db, data["recipe_id"], current_user.id)
    for k, v in data.items():
        setattr(plan, k, v)
    plan.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(plan)
    return plan


@router.delete("/{plan_id}", status_code=204)
def delete_plan(
    plan_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    plan = _get_plan(db, plan_id, current_user.id)
    db.delete(plan)
    db.commit()
