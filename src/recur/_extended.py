from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from datetime import MAXYEAR, date

from ._calendar import (
    create_week_of_month_date,
    create_week_of_period_date,
    normalize_numbers,
    pick_next_candidate,
    shift_month,
    to_month_day_date,
)
from ._rule import (
    ExtendedHalfyearPattern,
    ExtendedMonthlyPattern,
    ExtendedQuarterlyPattern,
    ExtendedWeeklyPattern,
    ExtendedYearlyPattern,
    RecurrenceRule,
    WeekdaySelector,
)
from ._weekly import calculate_weekly_next

logger = logging.getLogger(__name__)

# =============================================================================
# Lookahead Horizon
# =============================================================================
# Every search below walks forward one cycle (month, period or year, scaled by
# the rule interval) at a time and stops after MAX_LOOKAHEAD_CYCLES cycles.
# A pattern that yields no candidate within the horizon returns None.
#
# Valid patterns match in the first or second cycle. Only patterns that can
# never match (a period week past the period end, a yearly entry with no
# valid month) run the loop to the end.
# The search also ends early once a cycle would reach past MAXYEAR.
# =============================================================================

MAX_LOOKAHEAD_CYCLES = 48


def _month_selectors(selectors: Iterable[WeekdaySelector]) -> list[WeekdaySelector]:
    return [s for s in selectors if 1 <= s.week <= 5]


def _period_selectors(selectors: Iterable[WeekdaySelector]) -> list[WeekdaySelector]:
    return [s for s in selectors if s.week >= 1]


def _month_candidates(
    base: date,
    year: int,
    month: int,
    days_of_month: list[int],
    weeks_of_month: list[WeekdaySelector],
) -> list[date]:
    candidates = [to_month_day_date(base, year, month, day) for day in days_of_month]
    for selector in weeks_of_month:
        candidate = create_week_of_month_date(
            base, year, month, selector.week, selector.day_of_week
        )
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def _horizon_exhausted(kind: str, reference: date, max_cycles: int) -> None:
    logger.debug(
        "no %s occurrence after %s within %d lookahead cycles",
        kind,
        reference.isoformat(),
        max_cycles,
    )


# --- Public API ---


def calculate_extended_weekly_next(reference: date, rule: RecurrenceRule) -> date | None:
    pattern = rule.pattern
    if not isinstance(pattern, ExtendedWeeklyPattern) or not pattern.days_of_week:
        return None
    return calculate_weekly_next(
        reference, dataclasses.replace(rule, days_of_week=pattern.days_of_week)
    )


def calculate_extended_monthly_next(
    reference: date,
    rule: RecurrenceRule,
    *,
    max_cycles: int = MAX_LOOKAHEAD_CYCLES,
) -> date | None:
    pattern = rule.pattern
    if not isinstance(pattern, ExtendedMonthlyPattern):
        return None

    days_of_month = normalize_numbers(pattern.days_of_month, 1, 31)
    weeks_of_month = _month_selectors(pattern.weeks_of_month)
    if not days_of_month and not weeks_of_month:
        return None

    interval = rule.effective_interval
    for cycle in range(max_cycles):
        year, month = shift_month(reference.year, reference.month, cycle * interval)
        if year > MAXYEAR:
            break
        candidates = _month_candidates(reference, year, month, days_of_month, weeks_of_month)
        nxt = pick_next_candidate(reference, candidates)
        if nxt is not None:
            return nxt

    _horizon_exhausted("monthly", reference, max_cycles)
    return None


def _calculate_extended_period_next(
    reference: date,
    interval_months: int,
    period_length_months: int,
    offset_months: Iterable[int],
    days_of_month: Iterable[int],
    weeks_of_period: Iterable[WeekdaySelector],
    max_cycles: int,
) -> date | None:
    offsets = normalize_numbers(offset_months, 0, period_length_months - 1) or [0]
    days = normalize_numbers(days_of_month, 1, 31)
    selectors = _period_selectors(weeks_of_period)
    if not days and not selectors:
        return None

    first_month = reference.replace(day=1)

    for cycle in range(max_cycles):
        year, month = shift_month(first_month.year, first_month.month, cycle * interval_months)
        end_year, _ = shift_month(year, month, period_length_months)
        if end_year > MAXYEAR:
            break
        period_start = first_month.replace(year=year, month=month)

        candidates: list[date] = []
        for offset in offsets:
            offset_year, offset_month = shift_month(year, month, offset)
            candidates.extend(
                to_month_day_date(reference, offset_year, offset_month, day) for day in days
            )
        for selector in selectors:
            candidate = create_week_of_period_date(
                period_start, period_length_months, selector.week, selector.day_of_week
            )
            if candidate is not None:
                candidates.append(candidate)

        nxt = pick_next_candidate(reference, candidates)
        if nxt is not None:
            return nxt

    _horizon_exhausted(f"{period_length_months}-month period", reference, max_cycles)
    return None


def calculate_extended_quarterly_next(
    reference: date,
    rule: RecurrenceRule,
    *,
    max_cycles: int = MAX_LOOKAHEAD_CYCLES,
) -> date | None:
    pattern = rule.pattern
    if not isinstance(pattern, ExtendedQuarterlyPattern):
        return None
    return _calculate_extended_period_next(
        reference,
        rule.effective_interval * 3,
        3,
        pattern.offset_months,
        pattern.days_of_month,
        pattern.weeks_of_quarter,
        max_cycles,
    )


def calculate_extended_halfyear_next(
    reference: date,
    rule: RecurrenceRule,
    *,
    max_cycles: int = MAX_LOOKAHEAD_CYCLES,
) -> date | None:
    pattern = rule.pattern
    if not isinstance(pattern, ExtendedHalfyearPattern):
        return None
    return _calculate_extended_period_next(
        reference,
        rule.effective_interval * 6,
        6,
        pattern.offset_months,
        pattern.days_of_month,
        pattern.weeks_of_halfyear,
        max_cycles,
    )


def calculate_extended_yearly_next(
    reference: date,
    rule: RecurrenceRule,
    *,
    max_cycles: int = MAX_LOOKAHEAD_CYCLES,
) -> date | None:
    pattern = rule.pattern
    if not isinstance(pattern, ExtendedYearlyPattern) or not pattern.months:
        return None

    # (month, days, selectors) per valid entry, normalized once for all cycles
    entries = [
        (
            entry.month,
            normalize_numbers(entry.days_of_month, 1, 31),
            _month_selectors(entry.weeks_of_month),
        )
        for entry in pattern.months
        if isinstance(entry.month, int) and 1 <= entry.month <= 12
    ]

    interval = rule.effective_interval
    for cycle in range(max_cycles):
        year = reference.year + cycle * interval
        if year > MAXYEAR:
            break
        candidates: list[date] = []
        for month, days, selectors in entries:
            candidates.extend(_month_candidates(reference, year, month, days, selectors))
        nxt = pick_next_candidate(reference, candidates)
        if nxt is not None:
            return nxt

    _horizon_exhausted("yearly", reference, max_cycles)
    return None
