from __future__ import annotations

from datetime import date, timedelta

from ._calendar import day_number
from ._rule import RecurrenceRule


def calculate_weekly_next(reference: date, rule: RecurrenceRule) -> date:
    """Next occurrence of a plain weekly rule.

    Without weekdays the rule repeats every `interval` weeks from `reference`.
    With weekdays, the next selected day later in the same Sunday-based week
    wins; otherwise the earliest selected day `interval` weeks on.
    """
    interval = rule.effective_interval

    if not rule.days_of_week:
        return reference + timedelta(weeks=interval)

    targets = sorted({wd.number for wd in rule.days_of_week})
    current = day_number(reference)

    for target in targets:
        if target > current:
            return reference + timedelta(days=target - current)

    return reference + timedelta(days=interval * 7 + (targets[0] - current))
