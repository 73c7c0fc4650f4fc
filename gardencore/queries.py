"""Read operations: streaks, stats, the garden view and motivational content.

Each operation loads the workspace once, resolves "today" once in the
reference timezone, and hands already-loaded rows to the pure calculators.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from gardencore.config import load_settings
from gardencore.content import (
    CONTEXTS,
    MESSAGE_TYPES,
    TRIGGERS,
    CursorStore,
    get_content_message,
)
from gardencore.days import shift_day
from gardencore.errors import InvalidInput
from gardencore.models import (
    CheckIn,
    ContentMessage,
    ContentStats,
    GardenSummary,
    Habit,
    HabitStats,
    Milestone,
    StreakCheckpoint,
    StreakInfo,
    ZoneSummary,
)
from gardencore.moods import habit_mood
from gardencore.rates import (
    ZONE_WINDOW_DAYS,
    average_completion_rate,
    completion_rate,
    days_since_creation,
    fourteen_day_rate,
    global_stats,
    habit_stats,
)
from gardencore.store import (
    get_checkpoint,
    get_habit,
    group_by_habit,
    habit_check_ins,
    habit_milestones,
    load_garden,
    user_check_ins,
    user_habits,
)
from gardencore.streaks import calculate_streak
from gardencore.workspace import today_str
from gardencore.zones import atmosphere_message, get_atmosphere, get_zone_state, zone_state_config

logger = logging.getLogger(__name__)


def get_streak_info(
    habit_id: int,
    user_id: int,
    root: Path | None = None,
    today: str | None = None,
) -> StreakInfo:
    today = today or today_str(root)
    settings = load_settings(root)
    data = load_garden(root)
    habit = get_habit(data, habit_id, user_id)
    return calculate_streak(
        habit,
        habit_check_ins(data, habit.id, user_id),
        today,
        checkpoint=get_checkpoint(data, habit.id),
        lookback_days=settings.streak_lookback_days,
    )


def get_habit_stats(
    habit_id: int,
    user_id: int,
    root: Path | None = None,
    today: str | None = None,
) -> HabitStats:
    today = today or today_str(root)
    data = load_garden(root)
    habit = get_habit(data, habit_id, user_id)
    return habit_stats(habit, habit_check_ins(data, habit.id, user_id), today)


def get_global_stats(
    user_id: int,
    root: Path | None = None,
    today: str | None = None,
) -> dict[str, Any]:
    today = today or today_str(root)
    data = load_garden(root)
    return global_stats(user_habits(data, user_id), user_check_ins(data, user_id), today)


def list_check_ins(
    user_id: int,
    habit_id: int | None = None,
    start: str | None = None,
    end: str | None = None,
    root: Path | None = None,
) -> list[CheckIn]:
    data = load_garden(root)
    if habit_id is None:
        return user_check_ins(data, user_id, start, end)
    return habit_check_ins(data, habit_id, user_id, start, end)


def list_milestones(habit_id: int, user_id: int, root: Path | None = None) -> list[Milestone]:
    data = load_garden(root)
    habit = get_habit(data, habit_id, user_id)
    return habit_milestones(data, habit.id, user_id)


# ── Garden ────────────────────────────────────────────────────


def build_garden(
    habits: list[Habit],
    check_ins_by_habit: dict[int, list[CheckIn]],
    today: str,
    grace_days: int = 3,
) -> GardenSummary:
    """Zones for the active habits plus the overall atmosphere."""
    active = sorted((h for h in habits if h.active), key=lambda h: (h.sort_order, h.id))
    zones = []
    for habit in active:
        rows = check_ins_by_habit.get(habit.id, [])
        mood_info = habit_mood(habit, rows, today, grace_days)
        rate_14 = fourteen_day_rate(habit, rows, today)
        state = get_zone_state(rate_14)
        config = zone_state_config(state)
        zones.append(ZoneSummary(
            habit_id=habit.id,
            name=habit.name,
            emoji_buddy=habit.emoji_buddy,
            mood=mood_info.mood,
            completion_rate_7_days=mood_info.completion_rate_7_days,
            completion_rate_14_days=rate_14,
            zone_state=state,
            zone_label=config["label"],
            zone_elements=config["elements"],
            sort_order=habit.sort_order,
        ))

    average, habit_count = average_completion_rate(active, check_ins_by_habit, today)
    atmosphere = get_atmosphere(average, habit_count)
    return GardenSummary(
        zones=zones,
        atmosphere=atmosphere,
        atmosphere_message=atmosphere_message(atmosphere, habit_count),
        average_completion_rate=average,
        habit_count=habit_count,
    )


def get_garden(
    user_id: int,
    root: Path | None = None,
    today: str | None = None,
) -> GardenSummary:
    today = today or today_str(root)
    settings = load_settings(root)
    data = load_garden(root)
    habits = user_habits(data, user_id, active=True)
    # One range query covers both the 7-day mood and 14-day zone windows.
    since = shift_day(today, -(ZONE_WINDOW_DAYS - 1))
    rows = group_by_habit(user_check_ins(data, user_id, start=since, end=today))
    return build_garden(habits, rows, today, settings.grace_period_days)


# ── Content ───────────────────────────────────────────────────


def content_stats(
    habit: Habit,
    check_ins: list[CheckIn],
    today: str,
    checkpoint: StreakCheckpoint | None = None,
    lookback_days: int = 365,
) -> ContentStats:
    streak = calculate_streak(habit, check_ins, today, checkpoint, lookback_days)
    return ContentStats(
        current_streak=streak.current_streak,
        longest_streak=streak.longest_streak,
        total_check_ins=streak.total_check_ins,
        is_active_today=streak.is_active_today,
        completion_rate_7_days=completion_rate(check_ins, 7, today).rate,
        completion_rate_30_days=completion_rate(check_ins, 30, today).rate,
        days_since_start=days_since_creation(habit, today),
    )


def validate_content_request(
    message_type: str,
    trigger: str | None,
    context: str | None,
) -> list[str]:
    errors = []
    if message_type not in MESSAGE_TYPES:
        errors.append(f"Invalid message type: {message_type}")
    if trigger is not None and trigger not in TRIGGERS:
        errors.append(f"Invalid trigger: {trigger}")
    if context is not None and context not in CONTEXTS:
        errors.append(f"Invalid context: {context}")
    return errors


def get_content(
    habit_id: int,
    user_id: int,
    message_type: str,
    cursors: CursorStore,
    trigger: str | None = None,
    context: str | None = None,
    just_checked_in: bool = False,
    was_broken: bool = False,
    root: Path | None = None,
    today: str | None = None,
) -> ContentMessage:
    errors = validate_content_request(message_type, trigger, context)
    if errors:
        raise InvalidInput(errors)

    today = today or today_str(root)
    settings = load_settings(root)
    data = load_garden(root)
    habit = get_habit(data, habit_id, user_id)
    stats = content_stats(
        habit,
        habit_check_ins(data, habit.id, user_id),
        today,
        get_checkpoint(data, habit.id),
        settings.streak_lookback_days,
    )
    return get_content_message(
        habit,
        stats,
        message_type,
        cursors,
        trigger=trigger,
        context=context,
        just_checked_in=just_checked_in,
        was_broken=was_broken,
    )
