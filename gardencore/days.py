"""Day scheduling, success predicate and calendar-day arithmetic.

Days are YYYY-MM-DD strings throughout; every caller resolves "today" once in
the reference timezone and passes it down.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from datetime import date, timedelta

from gardencore.models import Habit


WEEKDAYS = {1, 2, 3, 4, 5}  # Mon..Fri, Sunday=0
WEEKENDS = {0, 6}


def parse_day(day: str | date) -> date:
    if isinstance(day, date):
        return day
    return date.fromisoformat(day)


def shift_day(day: str, days: int) -> str:
    """Move a calendar day by *days* (negative goes back)."""
    return (parse_day(day) + timedelta(days=days)).isoformat()


def days_between(start: str, end: str) -> int:
    """Whole calendar days from *start* to *end* (negative if end is earlier)."""
    return (parse_day(end) - parse_day(start)).days


def iter_days(start: str, end: str) -> Iterator[str]:
    """Yield every day from *start* through *end*, inclusive."""
    current = parse_day(start)
    stop = parse_day(end)
    while current <= stop:
        yield current.isoformat()
        current += timedelta(days=1)


def day_of_week(day: str | date) -> int:
    """Day of week with Sunday=0 .. Saturday=6."""
    return (parse_day(day).weekday() + 1) % 7


def is_tracked_day(habit: Habit, day: str | date) -> bool:
    """Whether *day* counts for the habit's frequency schedule.

    Unknown frequencies count every day; a custom schedule with a missing or
    malformed day list counts no day.
    """
    dow = day_of_week(day)
    frequency = habit.frequency
    if frequency == "daily":
        return True
    if frequency == "weekdays":
        return dow in WEEKDAYS
    if frequency == "weekends":
        return dow in WEEKENDS
    if frequency == "custom":
        custom = habit.custom_days
        if not isinstance(custom, (list, tuple)) or len(custom) <= dow:
            return False
        return custom[dow] is True
    return True


def is_success(habit: Habit, completed: bool | None) -> bool:
    """Build habits succeed on completed=True, break habits on completed=False."""
    if completed is None:
        return False
    if habit.is_building:
        return completed is True
    return completed is False


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upward (2.5 -> 3), unlike Python's banker's rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_percent(numerator: float, denominator: float) -> int:
    """Integer percentage, 0 when the denominator is zero."""
    if denominator <= 0:
        return 0
    return int(round_half_up(numerator / denominator * 100))
