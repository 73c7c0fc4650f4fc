"""The daily check-in write and everything it sets off.

The check-in pipeline:
1. Resolve today and the owner's habit
2. Upsert the single check-in row for today
3. Recompute the streak (resuming the longest-streak checkpoint)
4. Award newly crossed milestones
5. Move the checkpoint forward to yesterday
6. Save the workspace (load through save runs under the garden lock)
7. Run hooks (best-effort)
"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from pathlib import Path
from typing import Any

from gardencore.config import load_settings
from gardencore.days import shift_day
from gardencore.errors import InvalidInput
from gardencore.hooks import run_hooks
from gardencore.milestones import check_milestones, milestone_message
from gardencore.notifications import streak_notification
from gardencore.store import (
    add_milestones,
    get_checkpoint,
    get_habit,
    habit_check_ins,
    locked_garden,
    set_checkpoint,
    upsert_check_in,
    user_milestones,
)
from gardencore.streaks import advance_checkpoint, calculate_streak
from gardencore.workspace import now_local

logger = logging.getLogger(__name__)


def validate_check_in(completed: Any, value: Any) -> list[str]:
    errors = []
    if completed is not None and not isinstance(completed, bool):
        errors.append("completed must be true, false or null")
    if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
        errors.append("value must be numeric")
    return errors


def record_check_in(
    habit_id: int,
    user_id: int,
    completed: bool | None = None,
    value: float | int | None = None,
    root: Path | None = None,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> dict[str, Any]:
    """Upsert today's check-in for a habit and award any milestones it earns.

    Calling it again on the same day updates the same row; milestones already
    held are never awarded twice.
    """
    errors = validate_check_in(completed, value)
    if errors:
        raise InvalidInput(errors)

    # 1. Resolve today and the habit
    now = now or now_local(root)
    today = now.date().isoformat()
    now_iso = now.isoformat(timespec="seconds")
    settings = load_settings(root)
    with locked_garden(root) as data:
        habit = get_habit(data, habit_id, user_id)
        if not habit.active:
            raise InvalidInput("Cannot check in to an archived habit")

        # 2. Upsert
        check_in, created = upsert_check_in(data, habit, today, completed, value, now_iso)
        logger.info(
            "%s check-in %s for habit %s on %s (completed=%s)",
            "Created" if created else "Updated", check_in.id, habit.id, today, check_in.completed,
        )

        # 3. Streak
        rows = habit_check_ins(data, habit.id, user_id)
        checkpoint = get_checkpoint(data, habit.id)
        streak = calculate_streak(habit, rows, today, checkpoint, settings.streak_lookback_days)

        # 4. Milestones
        earned = check_milestones(
            habit, user_milestones(data, user_id), streak.current_streak, now_iso, rng,
        )
        earned = add_milestones(data, earned)
        for milestone in earned:
            logger.info(
                "Habit %s earned %s (%s %s)",
                habit.id, milestone.type, milestone.cosmetic.type, milestone.cosmetic.value,
            )

        # 5. Checkpoint through yesterday
        set_checkpoint(data, habit.id, advance_checkpoint(habit, rows, shift_day(today, -1), checkpoint))

    # 7. Hooks
    run_hooks("post_check_in", {
        "habitId": habit.id,
        "userId": user_id,
        "date": today,
        "completed": check_in.completed,
        "value": check_in.value,
        "streak": streak.to_dict(),
    }, root)
    for milestone in earned:
        run_hooks("on_milestone", {
            "habitId": habit.id,
            "userId": user_id,
            "milestone": milestone.to_dict(),
            "message": milestone_message(milestone.type, habit.emoji_buddy, milestone.cosmetic.value),
            "notification": streak_notification(
                milestone.streak_snapshot, milestone.cosmetic.value, habit.emoji_buddy, rng,
            ),
        }, root)

    return {
        "ok": True,
        "created": created,
        "checkIn": check_in.to_dict(),
        "streak": streak.to_dict(),
        "milestones": [
            {
                **m.to_dict(),
                "message": milestone_message(m.type, habit.emoji_buddy, m.cosmetic.value),
            }
            for m in earned
        ],
    }
