"""Motivational content: trigger/context classification and message cycling.

Message pools live in YAML under gardencore/messages/. Which message comes
next is tracked by a cursor store handed in by the caller, so the selector
itself holds no state.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from gardencore.fileio import locked, read_json, read_yaml, write_json_atomic
from gardencore.models import ContentMessage, ContentStats, Habit
from gardencore.workspace import cursors_path

logger = logging.getLogger(__name__)


MESSAGES_DIR = Path(__file__).parent / "messages"

TRIGGERS = (
    "first_steps",
    "building_momentum",
    "streak_broken",
    "hitting_wall",
    "long_term",
    "breaking_bad_early",
    "breaking_bad_urge",
)
CONTEXTS = ("streak_active", "just_checked_in", "comeback")
MESSAGE_TYPES = ("habit_science", "encouragement")


# ── Classification ────────────────────────────────────────────


def determine_trigger(
    direction: str,
    days_since_start: int,
    current_streak: int,
    was_broken: bool = False,
) -> str:
    """Classify where the habit is in its lifecycle."""
    breaking = direction == "break"

    if was_broken:
        return "breaking_bad_urge" if breaking else "streak_broken"

    if breaking:
        return "breaking_bad_early" if days_since_start <= 7 else "breaking_bad_urge"

    if current_streak == 0 and days_since_start <= 3:
        return "first_steps"
    if 1 <= current_streak < 14:
        return "building_momentum"
    if 14 <= current_streak < 30:
        return "hitting_wall"
    return "long_term"


def determine_context(current_streak: int, just_checked_in: bool, was_broken: bool) -> str:
    if just_checked_in:
        if was_broken or current_streak == 1:
            return "comeback"
        return "just_checked_in"
    if current_streak > 0:
        return "streak_active"
    return "comeback"


# ── Pools ─────────────────────────────────────────────────────


@lru_cache(maxsize=None)
def _load_pool_file(path: Path) -> dict[str, tuple[str, ...]]:
    data = read_yaml(path)
    return {
        str(key): tuple(str(m) for m in messages)
        for key, messages in data.items()
        if isinstance(messages, list)
    }


def message_pool(message_type: str, key: str, messages_dir: Path = MESSAGES_DIR) -> tuple[str, ...]:
    """Ordered messages for a trigger (habit_science) or context (encouragement)."""
    pools = _load_pool_file(messages_dir / f"{message_type}.yaml")
    return pools.get(key, ())


# ── Cursor stores ─────────────────────────────────────────────


class CursorStore(Protocol):
    def advance(self, habit_id: int, category: str, pool_size: int) -> int:
        """Return the current index for (habit, category) and move it forward one."""
        ...


class MemoryCursorStore:
    """Process-local cursors; reset when the process restarts."""

    def __init__(self) -> None:
        self._positions: dict[tuple[int, str], int] = {}
        self._lock = threading.Lock()

    def advance(self, habit_id: int, category: str, pool_size: int) -> int:
        if pool_size <= 0:
            return 0
        key = (habit_id, category)
        with self._lock:
            current = self._positions.get(key, 0) % pool_size
            self._positions[key] = (current + 1) % pool_size
        return current

    def position(self, habit_id: int, category: str) -> int:
        return self._positions.get((habit_id, category), 0)


class JsonCursorStore:
    """Cursors persisted to garden/cursors.json so rotation survives restarts."""

    def __init__(self, root: Path | None = None) -> None:
        self.path = cursors_path(root)

    def advance(self, habit_id: int, category: str, pool_size: int) -> int:
        if pool_size <= 0:
            return 0
        with locked(self.path):
            data = read_json(self.path)
            habit_cursors = data.setdefault(str(habit_id), {})
            current = int(habit_cursors.get(category, 0)) % pool_size
            habit_cursors[category] = (current + 1) % pool_size
            write_json_atomic(self.path, data)
        return current

    def forget(self, habit_id: int) -> None:
        """Drop a deleted habit's cursors."""
        with locked(self.path):
            data = read_json(self.path)
            if data.pop(str(habit_id), None) is not None:
                write_json_atomic(self.path, data)


# ── Rendering ─────────────────────────────────────────────────


def template_variables(habit: Habit, stats: ContentStats) -> dict[str, str]:
    return {
        "streak": str(stats.current_streak),
        "habit_name": habit.name,
        "buddy": habit.emoji_buddy,
        "completion_7d": str(stats.completion_rate_7_days),
        "completion_30d": str(stats.completion_rate_30_days),
        "days_since_start": str(stats.days_since_start),
        "best_streak": str(stats.longest_streak),
        "total_checkins": str(stats.total_check_ins),
    }


def render_template(template: str, variables: dict[str, str]) -> str:
    """Literal {name} replacement; unknown placeholders are left as written."""
    for name, value in variables.items():
        template = template.replace("{" + name + "}", value)
    return template


def select_message(
    habit: Habit,
    message_type: str,
    key: str,
    cursors: CursorStore,
    messages_dir: Path = MESSAGES_DIR,
) -> str:
    """Next message in the (habit, category) rotation; empty if the pool is empty."""
    pool = message_pool(message_type, key, messages_dir)
    prefix = "science" if message_type == "habit_science" else "encouragement"
    index = cursors.advance(habit.id, f"{prefix}_{key}", len(pool))
    if not pool:
        logger.warning("No %s messages for %r", message_type, key)
        return ""
    return pool[index]


def get_content_message(
    habit: Habit,
    stats: ContentStats,
    message_type: str,
    cursors: CursorStore,
    trigger: str | None = None,
    context: str | None = None,
    just_checked_in: bool = False,
    was_broken: bool = False,
    messages_dir: Path = MESSAGES_DIR,
) -> ContentMessage:
    """Pick and render a message, resolving trigger/context unless overridden."""
    variables = template_variables(habit, stats)

    if message_type == "habit_science":
        resolved = trigger or determine_trigger(
            habit.direction, stats.days_since_start, stats.current_streak, was_broken,
        )
        message = select_message(habit, message_type, resolved, cursors, messages_dir)
        return ContentMessage(
            type="habit_science",
            message=render_template(message, variables),
            trigger=resolved,
        )

    resolved = context or determine_context(stats.current_streak, just_checked_in, was_broken)
    message = select_message(habit, "encouragement", resolved, cursors, messages_dir)
    return ContentMessage(
        type="encouragement",
        message=render_template(message, variables),
        context=resolved,
    )
