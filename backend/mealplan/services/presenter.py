"""
Period Presenter: joins the period window with persisted grocery lists.

Summaries are recomputed from the store on every read.
"""

from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from mealplan.models.grocery import GroceryList
from mealplan.services import grocery_store
from mealplan.services.periods import (
    Period, PeriodMode, PeriodWindowEntry, format_period_name, generate_window,
    period_start, shift_periods,
)

# Fixed business rule: a list counts as done at 80% checked
COMPLETION_THRESHOLD = 80


@dataclass
class ListProgress:
    total_items: int
    checked_items: int
    estimated_cost: float
    completion_percentage: int


@dataclass
class PeriodSummary:
    period: Period
    name: str
    is_past: bool
    is_current: bool
    is_future: bool
    has_list: bool
    list_id: object | None
    revision: int | None
    total_items: int
    checked_items: int
    estimated_cost: float
    completion_percentage: int
    status: str


def completion_percentage(checked: int, total: int) -> int:
    if total <= 0:
        return 0
    return round(checked / total * 100)


def list_progress(gl: GroceryList | None) -> ListProgress:
    if gl is None:
        return ListProgress(0, 0, 0.0, 0)
    items = gl.items or []
    checked = sum(1 for i in items if i.get("checked") is True)
    return ListProgress(
        total_items=len(items),
        checked_items=checked,
        estimated_cost=round(gl.estimated_cost or 0.0, 2),
        completion_percentage=completion_percentage(checked, len(items)),
    )


def period_status(percentage: int, is_past: bool) -> str:
    if percentage >= COMPLETION_THRESHOLD:
        return "completed"
    if is_past:
        return "incomplete"
    return "partial"


def summarize(entry: PeriodWindowEntry, gl: GroceryList | None) -> PeriodSummary:
    progress = list_progress(gl)
    return PeriodSummary(
        period=entry.period,
        name=format_period_name(entry.period.start_date, entry.period.end_date),
        is_past=entry.is_past,
        is_current=entry.is_current,
        is_future=entry.is_future,
        has_list=entry.has_list,
        list_id=gl.id if gl else None,
        revision=gl.revision if gl else None,
        total_items=progress.total_items,
        checked_items=progress.checked_items,
        estimated_cost=progress.estimated_cost,
        completion_percentage=progress.completion_percentage,
        status=period_status(progress.completion_percentage, entry.is_past),
    )


def present_periods(
    db: Session,
    user_id,
    mode: PeriodMode,
    today: date,
    past_count: int,
    future_count: int,
) -> list[PeriodSummary]:
    mode = PeriodMode(mode)
    first = period_start(shift_periods(today, mode, -past_count), mode)
    last = period_start(shift_periods(today, mode, future_count), mode)
    lists = grocery_store.lists_for_range(db, user_id, first, last)

    def covering(period: Period) -> GroceryList | None:
        # A list starting on the same day but ending elsewhere belongs to another mode
        gl = lists.get(period.start_date)
        if gl is not None and gl.period_end == period.end_date:
            return gl
        return None

    window = generate_window(
        today, mode, past_count, future_count,
        list_exists=lambda p: covering(p) is not None,
    )
    return [summarize(entry, covering(entry.period)) for entry in window]
