from __future__ import annotations

from datetime import date, datetime

import pytest

from recur import (
    ExtendedMonthlyPattern,
    RecurrenceRule,
    RecurrenceUnit,
    Weekday,
    WeekdaySelector,
)


def d(s: str) -> date:
    """Parse '2024-01-15' into a date."""
    return date.fromisoformat(s)


def monthly(
    days: tuple[int, ...] = (),
    weeks: tuple[tuple[int, Weekday], ...] = (),
    interval: int = 1,
) -> RecurrenceRule:
    return RecurrenceRule(
        unit=RecurrenceUnit.MONTH,
        interval=interval,
        pattern=ExtendedMonthlyPattern(
            days_of_month=days,
            weeks_of_month=tuple(WeekdaySelector(w, wd) for w, wd in weeks),
        ),
    )


@pytest.fixture(scope="session")
def now() -> datetime:
    """Fixed validation time so end-date checks are deterministic."""
    return datetime(2024, 1, 15, 12, 0, 0)
