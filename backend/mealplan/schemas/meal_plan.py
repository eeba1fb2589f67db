from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel

from mealplan.services.periods import PeriodMode


class MealPlanCreate(BaseModel):
    plan_date: date
    meal_type: str
    recipe_id: UUID | None = None
    servings: int | None = None
    notes: str | None = None


class MealPlanUpdate(BaseModel):
    plan_date: date | None = None
    meal_type: str | None = None
    recipe_id: UUID | None = None
    servings: int | None = None
    notes: str | None = None


class MealPlanResponse(BaseModel):
    id: UUID
    user_id: UUID
    plan_date: date
    meal_type: str
    recipe_id: UUID | None
    servings: int | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PlannedMealSlot(BaseModel):
    recipe_id: UUID | None
    recipe_name: str | None


class PeriodHistoryResponse(BaseModel):
    key: str
    mode: PeriodMode
    start_date: date
    end_date: date
    name: str
    meals_planned: int
    total_possible_meals: int
    total_recipes: int
    planning_percentage: int
    status: str
    meals: dict[str, dict[str, PlannedMealSlot]] = {}


class CopyPeriodRequest(BaseModel):
    source_start: date
    mode: PeriodMode = PeriodMode.WEEK
    target_start: date
