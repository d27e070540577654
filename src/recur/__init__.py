from __future__ import annotations

from collections.abc import Iterator
from datetime import date, datetime

from ._calendar import (
    create_week_of_month_date,
    create_week_of_period_date,
    normalize_numbers,
    pick_next_candidate,
    to_month_day_date,
)
from ._display import display
from ._error import RecurError, RecurErrorKind
from ._eval import between as _between
from ._eval import next_from as _next_from
from ._eval import next_n_from as _next_n_from
from ._eval import occurrences as _occurrences
from ._extended import (
    MAX_LOOKAHEAD_CYCLES,
    calculate_extended_halfyear_next,
    calculate_extended_monthly_next,
    calculate_extended_quarterly_next,
    calculate_extended_weekly_next,
    calculate_extended_yearly_next,
)
from ._rule import (
    ExtendedHalfyearPattern,
    ExtendedMonthlyPattern,
    ExtendedPattern,
    ExtendedQuarterlyPattern,
    ExtendedWeeklyPattern,
    ExtendedYearlyPattern,
    RecurrenceRule,
    RecurrenceUnit,
    Weekday,
    WeekdaySelector,
    YearlyMonthPattern,
    pattern_unit,
)
from ._validate import (
    Violation,
    ViolationCode,
    ViolationField,
    ensure_valid,
    validate_recurrence_rule,
)
from ._weekly import calculate_weekly_next


class Recurrence:
    _rule: RecurrenceRule
    _max_cycles: int

    def __init__(self, rule: RecurrenceRule, *, max_cycles: int = MAX_LOOKAHEAD_CYCLES) -> None:
        self._rule = rule
        self._max_cycles = max_cycles

    @classmethod
    def checked(
        cls,
        rule: RecurrenceRule,
        now: datetime | None = None,
        *,
        max_cycles: int = MAX_LOOKAHEAD_CYCLES,
    ) -> Recurrence:
        """Like the constructor, but raises RecurError if the rule has violations."""
        return cls(ensure_valid(rule, now), max_cycles=max_cycles)

    def next_from(self, reference: date) -> date | None:
        return _next_from(self._rule, reference, max_cycles=self._max_cycles)

    def next_n_from(self, reference: date, n: int) -> list[date]:
        return _next_n_from(self._rule, reference, n, max_cycles=self._max_cycles)

    def occurrences(self, from_: date) -> Iterator[date]:
        """Returns a lazy iterator of occurrences starting after `from_`.

        The iterator is unbounded for satisfiable rules (will iterate forever unless
        limited). The rule's `end_date` and `max_occurrences` are left to the caller.
        """
        return _occurrences(self._rule, from_, max_cycles=self._max_cycles)

    def between(self, from_: date, to: date) -> Iterator[date]:
        """Returns a bounded iterator of occurrences where `from_ < occurrence <= to`."""
        return _between(self._rule, from_, to, max_cycles=self._max_cycles)

    def violations(self, now: datetime | None = None) -> list[Violation]:
        return validate_recurrence_rule(self._rule, now)

    def is_valid(self, now: datetime | None = None) -> bool:
        return not self.violations(now)

    def __str__(self) -> str:
        return display(self._rule)

    def __repr__(self) -> str:
        return f"Recurrence({display(self._rule)!r})"

    @property
    def rule(self) -> RecurrenceRule:
        return self._rule

    @property
    def unit(self) -> RecurrenceUnit | None:
        return self._rule.unit


__all__ = [
    "Recurrence",
    "RecurError",
    "RecurErrorKind",
    "MAX_LOOKAHEAD_CYCLES",
    "RecurrenceRule",
    "RecurrenceUnit",
    "Weekday",
    "WeekdaySelector",
    "ExtendedPattern",
    "ExtendedWeeklyPattern",
    "ExtendedMonthlyPattern",
    "ExtendedQuarterlyPattern",
    "ExtendedHalfyearPattern",
    "ExtendedYearlyPattern",
    "YearlyMonthPattern",
    "pattern_unit",
    "Violation",
    "ViolationCode",
    "ViolationField",
    "validate_recurrence_rule",
    "ensure_valid",
    "calculate_weekly_next",
    "calculate_extended_weekly_next",
    "calculate_extended_monthly_next",
    "calculate_extended_quarterly_next",
    "calculate_extended_halfyear_next",
    "calculate_extended_yearly_next",
    "normalize_numbers",
    "to_month_day_date",
    "create_week_of_month_date",
    "create_week_of_period_date",
    "pick_next_candidate",
    "display",
]
