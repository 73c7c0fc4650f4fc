"""Workspace-backed storage for habits, check-ins and milestones.

garden.json is loaded into a GardenData model, queried and mutated in memory,
then saved back atomically; writers hold locked_garden() across the whole
cycle. Query helpers mirror the lookups the calculation layer needs: by
habit and owner, by owner and active flag, by date range.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from gardencore.errors import HabitNotFound
from gardencore.fileio import locked, read_json, write_json_atomic
from gardencore.models import CheckIn, GardenData, Habit, Milestone, StreakCheckpoint
from gardencore.workspace import data_path

logger = logging.getLogger(__name__)


def load_garden(root: Path | None = None) -> GardenData:
    return GardenData.from_dict(read_json(data_path(root)))


def save_garden(data: GardenData, root: Path | None = None) -> None:
    write_json_atomic(data_path(root), data.to_dict())


@contextmanager
def locked_garden(root: Path | None = None) -> Iterator[GardenData]:
    """Load garden.json under an exclusive lock and save it when the block exits.

    Nothing is saved if the block raises.
    """
    path = data_path(root)
    with locked(path):
        data = load_garden(root)
        yield data
        save_garden(data, root)


# ── Habits ────────────────────────────────────────────────────


def find_habit(data: GardenData, habit_id: int, user_id: int) -> Habit | None:
    for habit in data.habits:
        if habit.id == habit_id and habit.user_id == user_id:
            return habit
    return None


def get_habit(data: GardenData, habit_id: int, user_id: int) -> Habit:
    """Resolve a habit for its owner, raising HabitNotFound otherwise."""
    habit = find_habit(data, habit_id, user_id)
    if habit is None:
        logger.info("Habit %s not found for user %s", habit_id, user_id)
        raise HabitNotFound(habit_id, user_id)
    return habit


def user_habits(data: GardenData, user_id: int, active: bool | None = None) -> list[Habit]:
    """A user's habits in sort order, optionally filtered by the active flag."""
    habits = [
        h for h in data.habits
        if h.user_id == user_id and (active is None or h.active == active)
    ]
    return sorted(habits, key=lambda h: (h.sort_order, h.id))


# ── Check-ins ─────────────────────────────────────────────────


def _in_range(ci: CheckIn, start: str | None, end: str | None) -> bool:
    if start and ci.date < start:
        return False
    if end and ci.date > end:
        return False
    return True


def habit_check_ins(
    data: GardenData,
    habit_id: int,
    user_id: int,
    start: str | None = None,
    end: str | None = None,
) -> list[CheckIn]:
    """Check-ins for one habit, newest date first."""
    rows = [
        ci for ci in data.check_ins
        if ci.habit_id == habit_id and ci.user_id == user_id and _in_range(ci, start, end)
    ]
    return sorted(rows, key=lambda ci: ci.date, reverse=True)


def user_check_ins(
    data: GardenData,
    user_id: int,
    start: str | None = None,
    end: str | None = None,
) -> list[CheckIn]:
    """All of a user's check-ins in one pass, newest date first."""
    rows = [ci for ci in data.check_ins if ci.user_id == user_id and _in_range(ci, start, end)]
    return sorted(rows, key=lambda ci: ci.date, reverse=True)


def group_by_habit(check_ins: list[CheckIn]) -> dict[int, list[CheckIn]]:
    grouped: dict[int, list[CheckIn]] = defaultdict(list)
    for ci in check_ins:
        grouped[ci.habit_id].append(ci)
    return dict(grouped)


def upsert_check_in(
    data: GardenData,
    habit: Habit,
    day: str,
    completed: bool | None,
    value: float | int | None,
    now_iso: str,
) -> tuple[CheckIn, bool]:
    """Create or update the single row for (habit, day). Returns (row, created).

    Updates keep the stored completed/value when the new one is not given.
    Writing a day the longest-streak checkpoint already covers drops it.
    """
    checkpoint = data.checkpoints.get(habit.id)
    if checkpoint and day <= checkpoint.through:
        del data.checkpoints[habit.id]

    for ci in data.check_ins:
        if ci.habit_id == habit.id and ci.date == day:
            if completed is not None:
                ci.completed = completed
            if value is not None:
                ci.value = value
            ci.updated_at = now_iso
            return ci, False

    ci = CheckIn(
        id=data.allocate_id("checkIn"),
        habit_id=habit.id,
        user_id=habit.user_id,
        date=day,
        completed=completed if completed is not None else False,
        value=value,
        created_at=now_iso,
        updated_at=now_iso,
    )
    data.check_ins.append(ci)
    return ci, True


# ── Milestones ────────────────────────────────────────────────


def habit_milestones(data: GardenData, habit_id: int, user_id: int) -> list[Milestone]:
    rows = [m for m in data.milestones if m.habit_id == habit_id and m.user_id == user_id]
    return sorted(rows, key=lambda m: m.earned_at)


def user_milestones(data: GardenData, user_id: int) -> list[Milestone]:
    return [m for m in data.milestones if m.user_id == user_id]


def add_milestones(data: GardenData, milestones: list[Milestone]) -> list[Milestone]:
    """Store new milestones, skipping any type the habit already holds."""
    added = []
    for milestone in milestones:
        duplicate = any(
            m.habit_id == milestone.habit_id and m.type == milestone.type
            for m in data.milestones
        )
        if duplicate:
            continue
        milestone.id = data.allocate_id("milestone")
        data.milestones.append(milestone)
        added.append(milestone)
    return added


# ── Streak checkpoints ────────────────────────────────────────


def get_checkpoint(data: GardenData, habit_id: int) -> StreakCheckpoint | None:
    return data.checkpoints.get(habit_id)


def set_checkpoint(data: GardenData, habit_id: int, checkpoint: StreakCheckpoint | None) -> None:
    if checkpoint is None:
        data.checkpoints.pop(habit_id, None)
    else:
        data.checkpoints[habit_id] = checkpoint
