"""Completion-rate aggregation for single habits and whole gardens.

Two window styles coexist on purpose:

- flat windows (7/30/90/all-time stats, content figures) count completed rows
  by the day they were created and divide by the window length;
- trailing windows (7-day mood, 14-day zone) walk calendar days, skip days
  before creation or off-schedule, and check each day's entry.
"""

from __future__ import annotations

from typing import Any

from gardencore.days import (
    days_between,
    is_success,
    is_tracked_day,
    round_half_up,
    round_percent,
    shift_day,
)
from gardencore.models import CheckIn, CompletionRate, Habit, HabitStats, MeasuredRate
from gardencore.streaks import build_day_map


STAT_WINDOWS = (7, 30, 90)
MEASURED_ALL_TIME_DAYS = 365
ZONE_WINDOW_DAYS = 14
MOOD_WINDOW_DAYS = 7


def _in_window(ci: CheckIn, window_days: int, today: str) -> bool:
    created = ci.created_day
    return shift_day(today, -window_days) <= created <= today


# ── Flat windows ──────────────────────────────────────────────


def completion_rate(check_ins: list[CheckIn], window_days: int, today: str) -> CompletionRate:
    """Completed rows created within [today - window_days, today] over the window length."""
    total = max(0, window_days)
    completed = sum(
        1 for ci in check_ins
        if ci.completed is True and _in_window(ci, total, today)
    )
    return CompletionRate(rate=round_percent(completed, total), completed=completed, total=total)


def measured_rate(check_ins: list[CheckIn], window_days: int, today: str) -> MeasuredRate:
    """Average logged value over the window; the caller compares it to the target."""
    values = [
        ci.value for ci in check_ins
        if ci.value is not None and _in_window(ci, window_days, today)
    ]
    if not values:
        return MeasuredRate()
    average = sum(values) / len(values)
    return MeasuredRate(
        rate=int(round_half_up(average)),
        average_value=round_half_up(average, 1),
    )


def days_since_creation(habit: Habit, today: str) -> int:
    created = habit.created_day
    if not created:
        return 0
    return max(0, days_between(created, today))


def all_time_rate(habit: Habit, check_ins: list[CheckIn], today: str) -> CompletionRate:
    return completion_rate(check_ins, days_since_creation(habit, today), today)


def _measured_as_completion(measured: MeasuredRate, habit: Habit) -> CompletionRate:
    return CompletionRate(
        rate=measured.rate,
        completed=measured.average_value,
        total=habit.target_value or 0,
    )


def habit_stats(habit: Habit, check_ins: list[CheckIn], today: str) -> HabitStats:
    """7/30/90-day and all-time rates; measured habits report average values."""
    if habit.type != "measured":
        r7, r30, r90 = (completion_rate(check_ins, days, today) for days in STAT_WINDOWS)
        return HabitStats(
            habit_id=habit.id,
            completion_rate_7d=r7,
            completion_rate_30d=r30,
            completion_rate_90d=r90,
            completion_rate_all_time=all_time_rate(habit, check_ins, today),
            target_value=habit.target_value or None,
        )

    m7, m30, m90 = (measured_rate(check_ins, days, today) for days in STAT_WINDOWS)
    m_all = measured_rate(check_ins, MEASURED_ALL_TIME_DAYS, today)
    return HabitStats(
        habit_id=habit.id,
        completion_rate_7d=_measured_as_completion(m7, habit),
        completion_rate_30d=_measured_as_completion(m30, habit),
        completion_rate_90d=_measured_as_completion(m90, habit),
        completion_rate_all_time=_measured_as_completion(m_all, habit),
        average_value=m30.average_value,
        target_value=habit.target_value or None,
    )


# ── Trailing windows ──────────────────────────────────────────


def trailing_rate(
    habit: Habit,
    check_ins: list[CheckIn],
    today: str,
    days: int,
) -> tuple[float, int]:
    """Unrounded success percentage over the last *days* days, and the days counted.

    Days before the habit's creation day and untracked days are left out of
    both numerator and denominator.
    """
    day_map = build_day_map(check_ins)
    created = habit.created_day or ""
    counted = 0
    succeeded = 0
    for offset in range(days):
        day = shift_day(today, -offset)
        if day < created or not is_tracked_day(habit, day):
            continue
        counted += 1
        if is_success(habit, day_map.get(day)):
            succeeded += 1
    if counted == 0:
        return 0.0, 0
    return succeeded / counted * 100, counted


def fourteen_day_rate(habit: Habit, check_ins: list[CheckIn], today: str) -> float:
    """Trailing 14-day rate used for garden zone health."""
    return trailing_rate(habit, check_ins, today, ZONE_WINDOW_DAYS)[0]


def average_completion_rate(
    habits: list[Habit],
    check_ins_by_habit: dict[int, list[CheckIn]],
    today: str,
) -> tuple[float, int]:
    """Mean 14-day rate over active habits, with the number of habits averaged."""
    active = [h for h in habits if h.active]
    if not active:
        return 0.0, 0
    total = sum(fourteen_day_rate(h, check_ins_by_habit.get(h.id, []), today) for h in active)
    return total / len(active), len(active)


# ── User-level stats ──────────────────────────────────────────


def global_stats(habits: list[Habit], check_ins: list[CheckIn], today: str) -> dict[str, Any]:
    """Totals across a user's active habits for the stats page."""
    active = [h for h in habits if h.active]
    if not active:
        return {
            "totalCheckIns": 0,
            "overallCompletionRate": 0,
            "combinedStreak": 0,
            "habitCount": 0,
        }

    active_ids = {h.id for h in active}
    total = sum(1 for ci in check_ins if ci.completed is True)

    weekly = [
        ci for ci in check_ins
        if ci.habit_id in active_ids and ci.completed is True and _in_window(ci, 7, today)
    ]
    overall = round_percent(len(weekly), len(active) * 7)

    per_day: dict[str, int] = {}
    for ci in weekly:
        per_day[ci.date] = per_day.get(ci.date, 0) + 1
    combined = 0
    for offset in range(7):
        if per_day.get(shift_day(today, -offset)) == len(active):
            combined += 1
        else:
            break

    return {
        "totalCheckIns": total,
        "overallCompletionRate": overall,
        "combinedStreak": combined,
        "habitCount": len(active),
    }
