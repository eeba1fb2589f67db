from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field, model_validator

from mealplan.services.periods import PeriodMode


class GroceryItemSchema(BaseModel):
    """Stored/wire shape of one entry of a list's `items` array."""
    name: str
    amount: float
    unit: str = ""
    recipes: list[str] = []
    checked: bool = False
    estimated_price: float = 0.0


class GroceryListResponse(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    period_start: date | None
    period_end: date | None
    items: list[GroceryItemSchema] = []
    estimated_cost: float
    created_from_meal_plan: bool
    revision: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class GroceryListSummaryResponse(BaseModel):
    """Lighter response for list views (no nested items)."""
    id: UUID
    name: str
    period_start: date | None
    period_end: date | None
    estimated_cost: float
    revision: int
    item_count: int = 0
    checked_count: int = 0
    completion_percentage: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class GenerateFromPlanRequest(BaseModel):
    period_start: date
    period_end: date
    name: str | None = None

    @model_validator(mode="after")
    def _ordered(self):
        if self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self


class ToggleItemRequest(BaseModel):
    expected_revision: int | None = Field(default=None, ge=1)


class PeriodSummaryResponse(BaseModel):
    key: str
    mode: PeriodMode
    start_date: date
    end_date: date
    name: str
    is_past: bool
    is_current: bool
    is_future: bool
    has_list: bool
    list_id: UUID | None = None
    revision: int | None = None
    total_items: int
    checked_items: int
    estimated_cost: float
    completion_percentage: int
    status: str
