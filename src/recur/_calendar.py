from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date, timedelta

from ._rule import Weekday

# Every function here takes and returns plain `date` values. A `datetime`
# works too: candidates are built from the base value with `replace` and
# `timedelta` arithmetic, so its time of day is carried through.


def day_number(d: date) -> int:
    """Day number of `d`: Sunday=0, Monday=1, ..., Saturday=6."""
    return (d.weekday() + 1) % 7


def days_in_month(year: int, month: int) -> int:
    _, last = calendar.monthrange(year, month)
    return last


def shift_month(year: int, month: int, months: int) -> tuple[int, int]:
    total = year * 12 + (month - 1) + months
    return total // 12, total % 12 + 1


def normalize_numbers(values: Iterable[int] | None, lo: int, hi: int) -> list[int]:
    """Keep the integers in ``[lo, hi]``, deduplicated and sorted ascending."""
    if not values:
        return []
    return sorted(
        {
            v
            for v in values
            if isinstance(v, int) and not isinstance(v, bool) and lo <= v <= hi
        }
    )


def to_month_day_date(base: date, year: int, month: int, day: int) -> date:
    """`base` moved to `day` of (`year`, `month`), clamped to the month's last day."""
    return base.replace(year=year, month=month, day=min(day, days_in_month(year, month)))


def add_months(base: date, months: int) -> date:
    year, month = shift_month(base.year, base.month, months)
    return to_month_day_date(base, year, month, base.day)


def create_week_of_month_date(
    base: date, year: int, month: int, week: int, day_of_week: Weekday
) -> date | None:
    """The `week`-th `day_of_week` of (`year`, `month`); week 5 is the last one."""
    if week < 1 or week > 5:
        return None

    month_start = base.replace(year=year, month=month, day=1)

    if week == 5:
        last = month_start.replace(day=days_in_month(year, month))
        days_back = (day_number(last) - day_of_week.number) % 7
        return last - timedelta(days=days_back)

    days_to_add = (day_of_week.number - day_number(month_start)) % 7 + (week - 1) * 7
    candidate = month_start + timedelta(days=days_to_add)
    if candidate.month != month:
        return None
    return candidate


def create_week_of_period_date(
    period_start: date, period_length_months: int, week: int, day_of_week: Weekday
) -> date | None:
    """First `day_of_week` on or after the start of the period's `week`-th week.

    Returns None when that day is not inside the period.
    """
    if week < 1 or (week - 1) * 7 >= period_length_months * 31:
        return None

    week_start = period_start + timedelta(days=(week - 1) * 7)
    candidate = week_start + timedelta(days=(day_of_week.number - day_number(week_start)) % 7)

    period_end = add_months(period_start, period_length_months)
    return candidate if candidate < period_end else None


def pick_next_candidate(reference: date, candidates: Iterable[date]) -> date | None:
    """Earliest candidate strictly after `reference`."""
    future = [c for c in candidates if c > reference]
    if not future:
        return None
    return min(future)
