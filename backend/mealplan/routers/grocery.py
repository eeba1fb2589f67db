from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from mealplan.database import get_db
from mealplan.models.user import User
from mealplan.schemas.grocery import (
    GroceryListResponse, GroceryListSummaryResponse, GenerateFromPlanRequest,
    PeriodSummaryResponse, ToggleItemRequest,
)
from mealplan.services import grocery_lists, grocery_store
from mealplan.services.periods import PeriodMode
from mealplan.services.presenter import list_progress
from mealplan.utils.auth import get_current_user

router = APIRouter()


@router.get("/", response_model=list[GroceryListSummaryResponse])
def list_grocery_lists(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    results = []
    for gl in grocery_lists.list_summaries(db, current_user.id):
        progress = list_progress(gl)
        data = GroceryListSummaryResponse.model_validate(gl).model_dump()
        data["item_count"] = progress.total_items
        data["checked_count"] = progress.checked_items
        data["completion_percentage"] = progress.completion_percentage
        results.append(data)
    return results


@router.get("/periods", response_model=list[PeriodSummaryResponse])
def list_periods(
    mode: PeriodMode = Query(PeriodMode.WEEK),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    summaries = grocery_lists.list_periods(db, current_user.id, mode)
    return [
        PeriodSummaryResponse(
            key=s.period.key,
            mode=s.period.mode,
            start_date=s.period.start_date,
            end_date=s.period.end_date,
            name=s.name,
            is_past=s.is_past,
            is_current=s.is_current,
            is_future=s.is_future,
            has_list=s.has_list,
            list_id=s.list_id,
            revision=s.revision,
            total_items=s.total_items,
            checked_items=s.checked_items,
            estimated_cost=s.estimated_cost,
            completion_percentage=s.completion_percentage,
            status=s.status,
        )
        for s in summaries
    ]


@router.post("/generate", response_model=GroceryListResponse)
def generate_from_plan(
    body: GenerateFromPlanRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return grocery_lists.generate_list(
        db, current_user.id, body.period_start, body.period_end, name=body.name,
    )


@router.get("/{list_id}", response_model=GroceryListResponse)
def get_list(
    list_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return grocery_store.get_list(db, current_user.id, list_id)


@router.post("/{list_id}/items/{item_index}/toggle", response_model=GroceryListResponse)
def toggle_item(
    list_id: UUID,
    item_index: int,
    body: ToggleItemRequest | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    expected = body.expected_revision if body else None
    return grocery_lists.toggle_item(
        db, current_user.id, list_id, item_index, expected_revision=expected,
    )
