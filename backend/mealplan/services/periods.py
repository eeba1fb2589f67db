"""
Period Calculus and Window Generator.

Maps calendar dates onto week / two-week / month buckets and builds the
window of periods a user sees when reviewing grocery lists. All functions
here are pure; "today" is always passed in by the caller.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable


class PeriodMode(str, Enum):
    WEEK = "week"
    TWO_WEEK = "2weeks"
    MONTH = "month"


# Two-week boundaries are counted from this Monday so every caller
# derives the same period keys.
TWO_WEEK_EPOCH = date(2024, 1, 1)

_FIXED_LENGTH_DAYS = {
    PeriodMode.WEEK: 7,
    PeriodMode.TWO_WEEK: 14,
}


@dataclass(frozen=True)
class Period:
    start_date: date
    end_date: date
    # None for an ad-hoc date range that matches no canonical period
    mode: PeriodMode | None

    @property
    def key(self) -> str:
        return self.start_date.isoformat()

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class PeriodWindowEntry:
    period: Period
    is_past: bool
    is_current: bool
    is_future: bool
    has_list: bool


def _week_start(day: date) -> date:
    # weekday(): Monday=0 .. Sunday=6, so Sunday walks back six days
    return day - timedelta(days=day.weekday())


def _add_months(day: date, months: int) -> date:
    """First day of the month `months` away from `day`'s month."""
    total = day.year * 12 + (day.month - 1) + months
    return date(total // 12, total % 12 + 1, 1)


def period_start(day: date, mode: PeriodMode) -> date:
    mode = PeriodMode(mode)
    if mode is PeriodMode.WEEK:
        return _week_start(day)
    if mode is PeriodMode.TWO_WEEK:
        week_start = _week_start(day)
        index = (week_start - TWO_WEEK_EPOCH).days // 14
        return TWO_WEEK_EPOCH + timedelta(days=index * 14)
    return day.replace(day=1)


def period_end(start: date, mode: PeriodMode) -> date:
    mode = PeriodMode(mode)
    if mode is PeriodMode.MONTH:
        last_day = calendar.monthrange(start.year, start.month)[1]
        return start.replace(day=last_day)
    return start + timedelta(days=_FIXED_LENGTH_DAYS[mode] - 1)


def period_for(day: date, mode: PeriodMode) -> Period:
    mode = PeriodMode(mode)
    start = period_start(day, mode)
    return Period(start_date=start, end_date=period_end(start, mode), mode=mode)


def period_from_range(start: date, end: date) -> Period:
    """Wrap a caller-supplied range, tagging the mode whose canonical period it is."""
    if end < start:
        raise ValueError(f"Period end {end} is before start {start}")
    for mode in PeriodMode:
        if period_start(start, mode) == start and period_end(start, mode) == end:
            return Period(start_date=start, end_date=end, mode=mode)
    return Period(start_date=start, end_date=end, mode=None)


def next_period_start(start: date, mode: PeriodMode) -> date:
    mode = PeriodMode(mode)
    if mode is PeriodMode.MONTH:
        return _add_months(start, 1)
    return start + timedelta(days=_FIXED_LENGTH_DAYS[mode])


def shift_periods(day: date, mode: PeriodMode, count: int) -> date:
    """Move `day` by `count` period lengths; months step by calendar month."""
    mode = PeriodMode(mode)
    if mode is PeriodMode.MONTH:
        return _add_months(day, count)
    return day + timedelta(days=_FIXED_LENGTH_DAYS[mode] * count)


def total_possible_meals(period: Period, meals_per_day: int = 3) -> int:
    return period.days * meals_per_day


def format_period_name(start: date, end: date) -> str:
    """Human label such as "Jan 1 - Jan 7, 2024"."""
    def _short(d: date) -> str:
        return f"{d.strftime('%b')} {d.day}"

    if start.year == end.year:
        return f"{_short(start)} - {_short(end)}, {end.year}"
    return f"{_short(start)}, {start.year} - {_short(end)}, {end.year}"


def classify(period: Period, today: date) -> tuple[bool, bool, bool]:
    """Return (is_past, is_current, is_future) for `period` relative to `today`."""
    is_past = period.end_date < today
    is_future = period.start_date > today
    return is_past, not is_past and not is_future, is_future


def generate_window(
    today: date,
    mode: PeriodMode,
    past_count: int,
    future_count: int,
    list_exists: Callable[[Period], bool],
) -> list[PeriodWindowEntry]:
    """
    Build the ordered, gap-free window of periods around `today`.

    Past periods are kept only when `list_exists` says a list was saved for
    them; current and future periods are always returned so a list can be
    generated for them. Result is newest first with unique start dates.
    """
    mode = PeriodMode(mode)
    oldest = period_start(shift_periods(today, mode, -past_count), mode)
    newest = period_start(shift_periods(today, mode, future_count), mode)

    entries: dict[date, PeriodWindowEntry] = {}
    cursor = oldest
    while cursor <= newest:
        period = Period(start_date=cursor, end_date=period_end(cursor, mode), mode=mode)
        cursor = next_period_start(cursor, mode)
        if period.start_date in entries:
            continue
        is_past, is_current, is_future = classify(period, today)
        has_list = bool(list_exists(period))
        if is_past and not has_list:
            continue
        entries[period.start_date] = PeriodWindowEntry(
            period=period,
            is_past=is_past,
            is_current=is_current,
            is_future=is_future,
            has_list=has_list,
        )

    return sorted(entries.values(), key=lambda e: e.period.start_date, reverse=True)
