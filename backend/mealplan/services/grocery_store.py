"""
Grocery List Store Adapter: persistence for period grocery lists.

One meal-plan list exists per (user, period_start). Generation overwrites
that row in place; item toggles rewrite the full item array. Every call is
a single transaction: it commits on success and rolls back on any failure.
"""

import logging
from contextlib import contextmanager
from datetime import date, datetime, timezone

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from mealplan.errors import (
    ItemIndexOutOfRange, ListNotFound, ReadOnlyPeriod, StaleRevision, StoreUnavailable,
)
from mealplan.models.grocery import GroceryList
from mealplan.services.periods import Period

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session, action: str):
    try:
        yield
        db.commit()
    except StaleDataError as e:
        db.rollback()
        raise StaleRevision(f"Grocery list changed concurrently during {action}") from e
    except IntegrityError:
        db.rollback()
        raise
    except DBAPIError as e:
        db.rollback()
        logger.error(f"Store failure during {action}: {e}")
        raise StoreUnavailable(f"Store unavailable during {action}") from e
    except Exception:
        db.rollback()
        raise


def _find_period_list(db: Session, user_id, start: date, lock: bool = False) -> GroceryList | None:
    q = db.query(GroceryList).filter(
        GroceryList.user_id == user_id,
        GroceryList.period_start == start,
        GroceryList.created_from_meal_plan.is_(True),
    )
    if lock:
        q = q.with_for_update()
    return q.first()


def _apply(gl: GroceryList, name: str, items: list[dict], estimated_cost: float) -> None:
    gl.name = name
    gl.items = [dict(i) for i in items]
    gl.estimated_cost = estimated_cost
    gl.updated_at = datetime.now(timezone.utc)


def generate_or_update(
    db: Session,
    user_id,
    period: Period,
    items: list[dict],
    estimated_cost: float,
    name: str,
) -> GroceryList:
    """Insert the period's list, or overwrite it when one already exists."""
    try:
        with transaction(db, "generate"):
            gl = _find_period_list(db, user_id, period.start_date, lock=True)
            if gl:
                _apply(gl, name, items, estimated_cost)
                gl.period_end = period.end_date
                logger.info(f"Updated grocery list {gl.id} for {period.key}")
            else:
                gl = GroceryList(
                    user_id=user_id,
                    name=name,
                    period_start=period.start_date,
                    period_end=period.end_date,
                    items=[dict(i) for i in items],
                    estimated_cost=estimated_cost,
                    created_from_meal_plan=True,
                )
                db.add(gl)
                db.flush()
                logger.info(f"Created grocery list {gl.id} for {period.key}")
    except IntegrityError:
        # Lost the insert race for this period; the winner's row gets our items
        logger.info(f"Concurrent insert for {period.key}; updating existing list")
        with transaction(db, "generate"):
            gl = _find_period_list(db, user_id, period.start_date, lock=True)
            if gl is None:
                raise StoreUnavailable(f"Grocery list for {period.key} vanished during upsert")
            _apply(gl, name, items, estimated_cost)
            gl.period_end = period.end_date
    db.refresh(gl)
    return gl


def get_list(db: Session, user_id, list_id) -> GroceryList:
    gl = db.query(GroceryList).filter(
        GroceryList.id == list_id, GroceryList.user_id == user_id
    ).first()
    if not gl:
        raise ListNotFound("Grocery list not found")
    return gl


def lists_for_range(db: Session, user_id, first_start: date, last_start: date) -> dict[date, GroceryList]:
    """Meal-plan lists keyed by period start, for starts within the range."""
    rows = db.query(GroceryList).filter(
        GroceryList.user_id == user_id,
        GroceryList.created_from_meal_plan.is_(True),
        GroceryList.period_start >= first_start,
        GroceryList.period_start <= last_start,
    ).all()
    return {gl.period_start: gl for gl in rows}


def is_read_only(gl: GroceryList, today: date) -> bool:
    return gl.period_end is not None and gl.period_end < today


def toggle_item_checked(
    db: Session,
    user_id,
    list_id,
    item_index: int,
    today: date,
    expected_revision: int | None = None,
) -> GroceryList:
    with transaction(db, "toggle"):
        gl = db.query(GroceryList).filter(
            GroceryList.id == list_id, GroceryList.user_id == user_id
        ).with_for_update().first()
        if not gl:
            raise ListNotFound("Grocery list not found")
        if is_read_only(gl, today):
            logger.info(f"Rejected toggle on past list {gl.id} (ended {gl.period_end})")
            raise ReadOnlyPeriod(f"Grocery list for period ending {gl.period_end} is read-only")
        if expected_revision is not None and expected_revision != gl.revision:
            raise StaleRevision(
                f"Grocery list is at revision {gl.revision}, not {expected_revision}"
            )
        items = [dict(i) for i in (gl.items or [])]
        if not 0 <= item_index < len(items):
            raise ItemIndexOutOfRange(
                f"Item index {item_index} out of range for {len(items)} items"
            )
        items[item_index]["checked"] = not bool(items[item_index].get("checked", False))
        gl.items = items
        gl.updated_at = datetime.now(timezone.utc)
    db.refresh(gl)
    return gl
