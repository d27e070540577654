from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from ._error import RecurError


class Weekday(Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def number(self) -> int:
        """Day number: Sunday=0, Monday=1, ..., Saturday=6."""
        return _WEEKDAY_NUMBERS[self]

    @classmethod
    def from_number(cls, n: int) -> Weekday | None:
        return _NUMBER_TO_WEEKDAY.get(n)

    @classmethod
    def try_parse(cls, s: str) -> Weekday | None:
        return _WEEKDAY_PARSE.get(s.lower())

    @classmethod
    def parse(cls, s: str) -> Weekday:
        weekday = cls.try_parse(s)
        if weekday is None:
            raise RecurError.rule(f"unknown weekday: {s!r}")
        return weekday

    def __str__(self) -> str:
        return self.value


_WEEKDAY_NUMBERS = {
    Weekday.SUNDAY: 0,
    Weekday.MONDAY: 1,
    Weekday.TUESDAY: 2,
    Weekday.WEDNESDAY: 3,
    Weekday.THURSDAY: 4,
    Weekday.FRIDAY: 5,
    Weekday.SATURDAY: 6,
}

_NUMBER_TO_WEEKDAY = {v: k for k, v in _WEEKDAY_NUMBERS.items()}

_WEEKDAY_PARSE: dict[str, Weekday] = {
    "monday": Weekday.MONDAY,
    "mon": Weekday.MONDAY,
    "tuesday": Weekday.TUESDAY,
    "tue": Weekday.TUESDAY,
    "wednesday": Weekday.WEDNESDAY,
    "wed": Weekday.WEDNESDAY,
    "thursday": Weekday.THURSDAY,
    "thu": Weekday.THURSDAY,
    "friday": Weekday.FRIDAY,
    "fri": Weekday.FRIDAY,
    "saturday": Weekday.SATURDAY,
    "sat": Weekday.SATURDAY,
    "sunday": Weekday.SUNDAY,
    "sun": Weekday.SUNDAY,
}


class RecurrenceUnit(Enum):
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    HALFYEAR = "halfyear"
    YEAR = "year"

    @classmethod
    def try_parse(cls, s: str) -> RecurrenceUnit | None:
        try:
            return cls(s.lower())
        except ValueError:
            return None

    @classmethod
    def parse(cls, s: str) -> RecurrenceUnit:
        unit = cls.try_parse(s)
        if unit is None:
            raise RecurError.rule(f"unknown recurrence unit: {s!r}")
        return unit

    def __str__(self) -> str:
        return self.value


# Calendar months covered by one unit, for the month-based units.
UNIT_MONTHS: dict[RecurrenceUnit, int] = {
    RecurrenceUnit.MONTH: 1,
    RecurrenceUnit.QUARTER: 3,
    RecurrenceUnit.HALFYEAR: 6,
    RecurrenceUnit.YEAR: 12,
}


# --- Selectors ---


@dataclass(frozen=True, slots=True)
class WeekdaySelector:
    """The Nth `day_of_week` of a month or period.

    Within a month, `week` 1-4 is the 1st-4th occurrence and 5 means the last
    occurrence. Within a quarter or half-year, `week` counts seven-day blocks
    from the period start and is not capped at 5; a week that starts past the
    period end never matches.
    """

    week: int
    day_of_week: Weekday


# --- Extended patterns ---


@dataclass(frozen=True, slots=True)
class ExtendedWeeklyPattern:
    days_of_week: tuple[Weekday, ...] = ()


@dataclass(frozen=True, slots=True)
class ExtendedMonthlyPattern:
    days_of_month: tuple[int, ...] = ()
    weeks_of_month: tuple[WeekdaySelector, ...] = ()


@dataclass(frozen=True, slots=True)
class ExtendedQuarterlyPattern:
    offset_months: tuple[int, ...] = ()
    days_of_month: tuple[int, ...] = ()
    weeks_of_quarter: tuple[WeekdaySelector, ...] = ()


@dataclass(frozen=True, slots=True)
class ExtendedHalfyearPattern:
    offset_months: tuple[int, ...] = ()
    days_of_month: tuple[int, ...] = ()
    weeks_of_halfyear: tuple[WeekdaySelector, ...] = ()


@dataclass(frozen=True, slots=True)
class YearlyMonthPattern:
    month: int
    days_of_month: tuple[int, ...] = ()
    weeks_of_month: tuple[WeekdaySelector, ...] = ()


@dataclass(frozen=True, slots=True)
class ExtendedYearlyPattern:
    months: tuple[YearlyMonthPattern, ...] = ()


ExtendedPattern = (
    ExtendedWeeklyPattern
    | ExtendedMonthlyPattern
    | ExtendedQuarterlyPattern
    | ExtendedHalfyearPattern
    | ExtendedYearlyPattern
)


def pattern_unit(pattern: ExtendedPattern) -> RecurrenceUnit:
    match pattern:
        case ExtendedWeeklyPattern():
            return RecurrenceUnit.WEEK
        case ExtendedMonthlyPattern():
            return RecurrenceUnit.MONTH
        case ExtendedQuarterlyPattern():
            return RecurrenceUnit.QUARTER
        case ExtendedHalfyearPattern():
            return RecurrenceUnit.HALFYEAR
        case ExtendedYearlyPattern():
            return RecurrenceUnit.YEAR
    raise TypeError(f"unknown pattern type: {type(pattern)}")  # pragma: no cover


# --- Rule (top-level) ---


@dataclass(frozen=True, slots=True)
class RecurrenceRule:
    unit: RecurrenceUnit | None
    interval: int = 1
    days_of_week: tuple[Weekday, ...] = ()
    pattern: ExtendedPattern | None = None
    end_date: date | None = None
    max_occurrences: int | None = None

    @property
    def effective_interval(self) -> int:
        """The interval the calculators step by; never less than 1."""
        return max(1, self.interval)
