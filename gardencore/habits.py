"""Habit validation and lifecycle: create, edit, archive, delete."""

from __future__ import annotations

import re
from typing import Any

from gardencore.errors import InvalidInput
from gardencore.models import GardenData, Habit
from gardencore.store import get_habit, set_checkpoint, user_habits


VALID_DIRECTIONS = {"build", "break"}
VALID_TYPES = {"binary", "measured"}
VALID_FREQUENCIES = {"daily", "weekdays", "weekends", "custom"}
PROTECTED_FIELDS = ("emojiBuddy", "direction", "type")
EDITABLE_FIELDS = ("name", "reminderTime", "frequency", "customDays", "sortOrder")
MAX_NAME_LENGTH = 50
MAX_BUDDY_LENGTH = 10

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_habit(habit: dict[str, Any]) -> list[str]:
    """Validate a habit payload (camelCase keys) and return errors (empty if valid)."""
    errors = []

    name = habit.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Missing required field: name")
    elif len(name) > MAX_NAME_LENGTH:
        errors.append(f"name must be at most {MAX_NAME_LENGTH} characters")

    buddy = habit.get("emojiBuddy")
    if not isinstance(buddy, str) or not buddy.strip():
        errors.append("Missing required field: emojiBuddy")
    elif len(buddy) > MAX_BUDDY_LENGTH:
        errors.append(f"emojiBuddy must be at most {MAX_BUDDY_LENGTH} characters")

    if (habit.get("direction") or "build") not in VALID_DIRECTIONS:
        errors.append(f"Invalid direction: {habit['direction']}")
    if (habit.get("type") or "binary") not in VALID_TYPES:
        errors.append(f"Invalid type: {habit['type']}")

    target = habit.get("targetValue")
    if target is not None and (isinstance(target, bool) or not isinstance(target, (int, float))):
        errors.append("targetValue must be numeric")

    frequency = habit.get("frequency") or "daily"
    if frequency not in VALID_FREQUENCIES:
        errors.append(f"Invalid frequency: {frequency}")

    custom = habit.get("customDays")
    if custom is not None:
        if not isinstance(custom, list) or len(custom) != 7 or not all(isinstance(d, bool) for d in custom):
            errors.append("customDays must be a list of 7 booleans (Sunday first)")
    if frequency == "custom" and not (isinstance(custom, list) and any(d is True for d in custom)):
        errors.append("custom frequency needs at least one day in customDays")

    reminder = habit.get("reminderTime")
    if reminder is not None and (not isinstance(reminder, str) or not _TIME_RE.match(reminder)):
        errors.append("reminderTime must be HH:MM")

    sort_order = habit.get("sortOrder")
    if sort_order is not None and (isinstance(sort_order, bool) or not isinstance(sort_order, int)):
        errors.append("sortOrder must be an integer")

    return errors


def create_habit(
    data: GardenData,
    user_id: int,
    payload: dict[str, Any],
    now_iso: str,
    max_active: int = 3,
) -> Habit:
    """Add a new active habit for *user_id*. Raises InvalidInput."""
    errors = validate_habit(payload)
    if errors:
        raise InvalidInput(errors)

    active = user_habits(data, user_id, active=True)
    if len(active) >= max_active:
        raise InvalidInput(
            f"Maximum of {max_active} active habits allowed. Archive an existing habit first."
        )

    habit = Habit.from_dict({
        "direction": "build",
        "type": "binary",
        "frequency": "daily",
        **{k: v for k, v in payload.items() if v is not None},
    })
    habit.id = data.allocate_id("habit")
    habit.user_id = user_id
    habit.name = habit.name.strip()
    habit.active = True
    habit.sort_order = len(active) if payload.get("sortOrder") is None else int(payload["sortOrder"])
    habit.created_at = now_iso
    habit.updated_at = now_iso
    data.habits.append(habit)
    return habit


def update_habit(
    data: GardenData,
    habit_id: int,
    user_id: int,
    updates: dict[str, Any],
    now_iso: str,
) -> Habit:
    """Apply settings edits. Buddy, direction and type are fixed after creation."""
    habit = get_habit(data, habit_id, user_id)

    protected = [k for k in PROTECTED_FIELDS if k in updates]
    if protected:
        raise InvalidInput("Cannot change emoji, direction, or type after creation")

    merged = habit.to_dict()
    merged.update({k: v for k, v in updates.items() if k in EDITABLE_FIELDS})
    errors = validate_habit(merged)
    if errors:
        raise InvalidInput(errors)

    schedule_changed = (
        merged["frequency"] != habit.frequency or merged["customDays"] != habit.custom_days
    )
    updated = Habit.from_dict(merged)
    updated.updated_at = now_iso
    for i, h in enumerate(data.habits):
        if h.id == habit.id:
            data.habits[i] = updated
            break
    if schedule_changed:
        set_checkpoint(data, habit.id, None)
    return updated


def archive_habit(data: GardenData, habit_id: int, user_id: int, now_iso: str) -> Habit:
    """Soft delete: the habit stays with its history but leaves the garden."""
    habit = get_habit(data, habit_id, user_id)
    habit.active = False
    habit.updated_at = now_iso
    return habit


def delete_habit(data: GardenData, habit_id: int, user_id: int) -> Habit:
    """Hard delete, cascading to check-ins, milestones and the streak checkpoint."""
    habit = get_habit(data, habit_id, user_id)
    data.habits = [h for h in data.habits if h.id != habit.id]
    data.check_ins = [ci for ci in data.check_ins if ci.habit_id != habit.id]
    data.milestones = [m for m in data.milestones if m.habit_id != habit.id]
    set_checkpoint(data, habit.id, None)
    return habit
