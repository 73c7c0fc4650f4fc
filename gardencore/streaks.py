"""Streak calculation over a habit's check-in history.

Everything here is a pure function of the habit, its check-in rows and the
caller's "today"; nothing is read from or written to storage.
"""

from __future__ import annotations

from gardencore.days import (
    is_success,
    is_tracked_day,
    iter_days,
    round_percent,
    shift_day,
)
from gardencore.models import CheckIn, Habit, StreakCheckpoint, StreakInfo


STREAK_LOOKBACK_DAYS = 365


def build_day_map(check_ins: list[CheckIn]) -> dict[str, bool]:
    """Map day -> completed, skipping rows whose completed flag is unset."""
    return {ci.date: ci.completed for ci in check_ins if ci.completed is not None}


def current_streak(
    habit: Habit,
    day_map: dict[str, bool],
    today: str,
    lookback_days: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Consecutive successful tracked days walking back from today.

    Today never breaks the streak: a failed or missing entry for today just
    isn't counted yet. The walk is capped at *lookback_days* iterations.
    """
    streak = 0
    day = today
    for _ in range(lookback_days):
        if is_tracked_day(habit, day):
            completed = day_map.get(day)
            if completed is not None and is_success(habit, completed):
                streak += 1
            elif day != today:
                break
        day = shift_day(day, -1)
    return streak


def scan_longest(
    habit: Habit,
    day_map: dict[str, bool],
    start: str,
    end: str,
    carry: StreakCheckpoint | None = None,
) -> StreakCheckpoint:
    """Fold the longest-streak counter forward over start..end inclusive.

    Untracked days leave the counter alone; tracked failures and tracked days
    without an entry reset it. Starting from *carry* continues a previous scan.
    """
    run = carry.run if carry else 0
    best = carry.best if carry else 0
    through = carry.through if carry else ""
    for day in iter_days(start, end):
        if is_tracked_day(habit, day):
            completed = day_map.get(day)
            if completed is not None and is_success(habit, completed):
                run += 1
                best = max(best, run)
            else:
                run = 0
        through = day
    return StreakCheckpoint(through=through, run=run, best=best)


def longest_streak(
    habit: Habit,
    day_map: dict[str, bool],
    today: str,
    checkpoint: StreakCheckpoint | None = None,
) -> int:
    """Longest run of successful tracked days from the first entry through today."""
    if checkpoint and checkpoint.through and checkpoint.through < today:
        return scan_longest(habit, day_map, shift_day(checkpoint.through, 1), today, checkpoint).best
    start = min(day_map) if day_map else today
    if start > today:
        return 0
    return scan_longest(habit, day_map, start, today).best


def advance_checkpoint(
    habit: Habit,
    check_ins: list[CheckIn],
    through: str,
    checkpoint: StreakCheckpoint | None = None,
) -> StreakCheckpoint | None:
    """Checkpoint of the longest-streak scan after *through*.

    Returns None when no entry exists on or before *through*, since the scan
    would not have started yet.
    """
    day_map = build_day_map(check_ins)
    earliest = min(day_map) if day_map else None
    if earliest is None or earliest > through:
        return None
    if checkpoint and checkpoint.through:
        if checkpoint.through >= through:
            return checkpoint
        return scan_longest(habit, day_map, shift_day(checkpoint.through, 1), through, checkpoint)
    return scan_longest(habit, day_map, earliest, through)


def expected_days(habit: Habit, today: str) -> int:
    """Tracked days from the habit's creation day through today."""
    start = habit.created_day or today
    if start > today:
        return 0
    return sum(1 for day in iter_days(start, today) if is_tracked_day(habit, day))


def calculate_streak(
    habit: Habit,
    check_ins: list[CheckIn],
    today: str,
    checkpoint: StreakCheckpoint | None = None,
    lookback_days: int = STREAK_LOOKBACK_DAYS,
) -> StreakInfo:
    """Compute the full StreakInfo for one habit."""
    if not check_ins:
        return StreakInfo()

    day_map = build_day_map(check_ins)
    total = sum(1 for ci in check_ins if is_success(habit, ci.completed))

    return StreakInfo(
        current_streak=current_streak(habit, day_map, today, lookback_days),
        longest_streak=longest_streak(habit, day_map, today, checkpoint),
        total_check_ins=total,
        completion_rate=round_percent(total, expected_days(habit, today)),
        last_check_in_date=max(ci.date for ci in check_ins),
        is_active_today=today in day_map,
    )
