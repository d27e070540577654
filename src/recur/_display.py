from __future__ import annotations

import calendar

from ._calendar import normalize_numbers
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
)

_UNIT_PLURALS: dict[RecurrenceUnit, str] = {
    RecurrenceUnit.MINUTE: "minutes",
    RecurrenceUnit.HOUR: "hours",
    RecurrenceUnit.DAY: "days",
    RecurrenceUnit.WEEK: "weeks",
    RecurrenceUnit.MONTH: "months",
    RecurrenceUnit.QUARTER: "quarters",
    RecurrenceUnit.HALFYEAR: "half-years",
    RecurrenceUnit.YEAR: "years",
}

_WEEK_ORDINALS = {1: "first", 2: "second", 3: "third", 4: "fourth", 5: "last"}


def display(rule: RecurrenceRule) -> str:
    if rule.unit is None:
        return "no recurrence"

    if rule.interval == 1:
        unit_name = "half-year" if rule.unit is RecurrenceUnit.HALFYEAR else str(rule.unit)
        out = f"every {unit_name}"
    else:
        out = f"every {rule.interval} {_UNIT_PLURALS[rule.unit]}"

    if rule.pattern is not None:
        target = _display_pattern(rule.pattern)
        if target:
            out += f" on {target}"
    elif rule.days_of_week:
        out += f" on {_format_weekdays(rule.days_of_week)}"

    return out


def _display_pattern(pattern: ExtendedPattern) -> str:
    match pattern:
        case ExtendedWeeklyPattern(days_of_week=days):
            return _format_weekdays(days)

        case ExtendedMonthlyPattern(days_of_month=days, weeks_of_month=weeks):
            parts = _format_month_targets(days, weeks)
            return f"the {parts}" if parts else ""

        case ExtendedQuarterlyPattern(
            offset_months=offsets, days_of_month=days, weeks_of_quarter=weeks
        ):
            return _format_period_targets(offsets, 3, days, weeks)

        case ExtendedHalfyearPattern(
            offset_months=offsets, days_of_month=days, weeks_of_halfyear=weeks
        ):
            return _format_period_targets(offsets, 6, days, weeks)

        case ExtendedYearlyPattern(months=months):
            segments: list[str] = []
            for entry in months:
                if not isinstance(entry.month, int) or not 1 <= entry.month <= 12:
                    continue
                parts = _format_month_targets(entry.days_of_month, entry.weeks_of_month)
                if parts:
                    segments.append(f"the {parts} of {calendar.month_abbr[entry.month].lower()}")
            return " and ".join(segments)

    # Should be unreachable
    raise ValueError(f"unknown pattern type: {type(pattern)}")  # pragma: no cover


def _format_weekdays(days: tuple[Weekday, ...]) -> str:
    return ", ".join(str(d) for d in days)


def _format_month_targets(
    days: tuple[int, ...], weeks: tuple[WeekdaySelector, ...]
) -> str:
    parts = [f"{d}{_ordinal_suffix(d)}" for d in normalize_numbers(days, 1, 31)]
    parts.extend(
        f"{_WEEK_ORDINALS[s.week]} {s.day_of_week}" for s in weeks if s.week in _WEEK_ORDINALS
    )
    return ", ".join(parts)


def _format_period_targets(
    offsets: tuple[int, ...],
    period_length_months: int,
    days: tuple[int, ...],
    weeks: tuple[WeekdaySelector, ...],
) -> str:
    segments: list[str] = []

    day_numbers = normalize_numbers(days, 1, 31)
    if day_numbers:
        segment = "the " + ", ".join(f"{d}{_ordinal_suffix(d)}" for d in day_numbers)
        months = [o + 1 for o in normalize_numbers(offsets, 0, period_length_months - 1)]
        if months:
            noun = "month" if len(months) == 1 else "months"
            segment += f" of {noun} " + ", ".join(str(m) for m in months)
        segments.append(segment)

    segments.extend(f"the {s.day_of_week} of week {s.week}" for s in weeks if s.week >= 1)
    return " and ".join(segments)


def _ordinal_suffix(n: int) -> str:
    mod100 = n % 100
    if 11 <= mod100 <= 13:
        return "th"
    match n % 10:
        case 1:
            return "st"
        case 2:
            return "nd"
        case 3:
            return "rd"
        case _:
            return "th"
