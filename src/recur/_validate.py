from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

from ._error import RecurError
from ._rule import (
    ExtendedHalfyearPattern,
    ExtendedMonthlyPattern,
    ExtendedPattern,
    ExtendedQuarterlyPattern,
    ExtendedWeeklyPattern,
    ExtendedYearlyPattern,
    RecurrenceRule,
    RecurrenceUnit,
    pattern_unit,
)

ViolationField = Literal[
    "unit", "interval", "days_of_week", "max_occurrences", "end_date", "pattern"
]

ViolationCode = Literal[
    "missing_unit",
    "invalid_interval",
    "missing_weekdays",
    "invalid_max_occurrences",
    "end_date_not_future",
    "empty_pattern",
    "pattern_unit_mismatch",
]


@dataclass(frozen=True, slots=True)
class Violation:
    field: ViolationField
    code: ViolationCode
    message: str

    def __str__(self) -> str:
        return self.message


_PATTERN_NAMES: dict[RecurrenceUnit, str] = {
    RecurrenceUnit.WEEK: "weekly",
    RecurrenceUnit.MONTH: "monthly",
    RecurrenceUnit.QUARTER: "quarterly",
    RecurrenceUnit.HALFYEAR: "half-year",
    RecurrenceUnit.YEAR: "yearly",
}


def validate_recurrence_rule(
    rule: RecurrenceRule, now: datetime | None = None
) -> list[Violation]:
    """Check `rule` for internal consistency.

    Returns every violation found; an empty list means the rule is valid. The
    rule is never modified and calculation does not depend on the result.
    `now` is the reference point for the end date check and defaults to the
    current local time.
    """
    violations: list[Violation] = []

    if rule.unit is None:
        violations.append(Violation("unit", "missing_unit", "Select a recurrence unit."))

    if rule.interval < 1:
        violations.append(
            Violation("interval", "invalid_interval", "The interval must be at least 1.")
        )

    if rule.unit is RecurrenceUnit.WEEK and not _selects_weekday(rule):
        violations.append(
            Violation(
                "days_of_week",
                "missing_weekdays",
                "Select at least one day of the week.",
            )
        )

    # 0 means no limit
    if rule.max_occurrences and rule.max_occurrences < 1:
        violations.append(
            Violation(
                "max_occurrences",
                "invalid_max_occurrences",
                "The maximum number of occurrences must be at least 1.",
            )
        )

    if rule.end_date is not None and not _is_future(rule.end_date, now or datetime.now()):
        violations.append(
            Violation("end_date", "end_date_not_future", "The end date must be in the future.")
        )

    if rule.pattern is not None:
        violations.extend(_check_pattern(rule.unit, rule.pattern))

    return violations


def ensure_valid(rule: RecurrenceRule, now: datetime | None = None) -> RecurrenceRule:
    """Return `rule` unchanged, or raise RecurError listing its violations."""
    violations = validate_recurrence_rule(rule, now)
    if violations:
        raise RecurError.validation(violations)
    return rule


def _selects_weekday(rule: RecurrenceRule) -> bool:
    if rule.days_of_week:
        return True
    return isinstance(rule.pattern, ExtendedWeeklyPattern) and bool(rule.pattern.days_of_week)


def _is_future(end_date: date, now: datetime) -> bool:
    if isinstance(end_date, datetime):
        return end_date > now
    return end_date > now.date()


def _check_pattern(unit: RecurrenceUnit | None, pattern: ExtendedPattern) -> list[Violation]:
    violations: list[Violation] = []
    kind = pattern_unit(pattern)
    name = _PATTERN_NAMES[kind]

    if unit is not None and unit is not kind:
        violations.append(
            Violation(
                "pattern",
                "pattern_unit_mismatch",
                f"A {name} pattern cannot be used with a {unit} recurrence.",
            )
        )

    empty = False
    match pattern:
        case ExtendedMonthlyPattern(days_of_month=days, weeks_of_month=weeks):
            empty = not days and not weeks
        case ExtendedQuarterlyPattern(days_of_month=days, weeks_of_quarter=weeks):
            empty = not days and not weeks
        case ExtendedHalfyearPattern(days_of_month=days, weeks_of_halfyear=weeks):
            empty = not days and not weeks
        case ExtendedYearlyPattern(months=months):
            empty = not months

    if empty:
        if isinstance(pattern, ExtendedYearlyPattern):
            message = "The yearly pattern needs at least one month."
        else:
            message = f"The {name} pattern needs at least one day of the month or weekday."
        violations.append(Violation("pattern", "empty_pattern", message))

    return violations
