from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import MAXYEAR, date, datetime, time, timedelta

from ._calendar import add_months
from ._extended import (
    MAX_LOOKAHEAD_CYCLES,
    calculate_extended_halfyear_next,
    calculate_extended_monthly_next,
    calculate_extended_quarterly_next,
    calculate_extended_weekly_next,
    calculate_extended_yearly_next,
)
from ._rule import (
    UNIT_MONTHS,
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
from ._weekly import calculate_weekly_next

logger = logging.getLogger(__name__)


def _as_datetime(d: date) -> datetime:
    """Sub-day units need a time of day; a plain date counts as midnight."""
    if isinstance(d, datetime):
        return d
    return datetime.combine(d, time())


# --- Public API ---


def next_from(
    rule: RecurrenceRule,
    reference: date,
    *,
    max_cycles: int = MAX_LOOKAHEAD_CYCLES,
) -> date | None:
    """Next occurrence of `rule` strictly after `reference`, or None."""
    try:
        if rule.pattern is not None:
            return _next_extended(rule, rule.pattern, reference, max_cycles)
        return _next_plain(rule, reference)
    except (OverflowError, ValueError):
        # Stepping past date.max; the calendar has no later occurrence
        logger.debug(
            "no %s occurrence after %s before year %d", rule.unit, reference, MAXYEAR + 1
        )
        return None


def _next_plain(rule: RecurrenceRule, reference: date) -> date | None:
    interval = rule.effective_interval
    match rule.unit:
        case RecurrenceUnit.MINUTE:
            return _as_datetime(reference) + timedelta(minutes=interval)
        case RecurrenceUnit.HOUR:
            return _as_datetime(reference) + timedelta(hours=interval)
        case RecurrenceUnit.DAY:
            return reference + timedelta(days=interval)
        case RecurrenceUnit.WEEK:
            return calculate_weekly_next(reference, rule)
        case None:
            return None
        case unit:
            # Month-based units keep the day of month, clamped to the target month
            return add_months(reference, interval * UNIT_MONTHS[unit])


def _next_extended(
    rule: RecurrenceRule,
    pattern: ExtendedPattern,
    reference: date,
    max_cycles: int,
) -> date | None:
    kind = pattern_unit(pattern)
    if rule.unit is not kind:
        logger.warning("%s pattern does not apply to a %s rule; skipping", kind, rule.unit)
        return None

    match pattern:
        case ExtendedWeeklyPattern():
            return calculate_extended_weekly_next(reference, rule)
        case ExtendedMonthlyPattern():
            return calculate_extended_monthly_next(reference, rule, max_cycles=max_cycles)
        case ExtendedQuarterlyPattern():
            return calculate_extended_quarterly_next(reference, rule, max_cycles=max_cycles)
        case ExtendedHalfyearPattern():
            return calculate_extended_halfyear_next(reference, rule, max_cycles=max_cycles)
        case ExtendedYearlyPattern():
            return calculate_extended_yearly_next(reference, rule, max_cycles=max_cycles)
    return None  # pragma: no cover


def next_n_from(
    rule: RecurrenceRule,
    reference: date,
    n: int,
    *,
    max_cycles: int = MAX_LOOKAHEAD_CYCLES,
) -> list[date]:
    results: list[date] = []
    current = reference
    for _ in range(n):
        nxt = next_from(rule, current, max_cycles=max_cycles)
        if nxt is None:
            break
        results.append(nxt)
        current = nxt
    return results


# --- Iterator functions ---


def occurrences(
    rule: RecurrenceRule,
    from_: date,
    *,
    max_cycles: int = MAX_LOOKAHEAD_CYCLES,
) -> Iterator[date]:
    """Returns a lazy iterator of occurrences starting after `from_`.

    The iterator is unbounded for satisfiable rules. `end_date` and
    `max_occurrences` are not applied; limit the iterator to honour them.
    """
    current = from_
    while True:
        nxt = next_from(rule, current, max_cycles=max_cycles)
        if nxt is None:
            return
        current = nxt
        yield nxt


def between(
    rule: RecurrenceRule,
    from_: date,
    to: date,
    *,
    max_cycles: int = MAX_LOOKAHEAD_CYCLES,
) -> Iterator[date]:
    """Returns a bounded iterator of occurrences where `from_ < occurrence <= to`."""
    for d in occurrences(rule, from_, max_cycles=max_cycles):
        if d > to:
            return
        yield d
