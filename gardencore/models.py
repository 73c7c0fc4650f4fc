"""Typed dataclasses for the garden data model.

Stored records use from_dict/to_dict for JSON serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def _optional_number(v: Any) -> float | int | None:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return v
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return int(f) if f.is_integer() else f


def _optional_bool(v: Any) -> bool | None:
    if v is None:
        return None
    return bool(v)


# ── Habits ────────────────────────────────────────────────────


@dataclass
class Habit:
    id: int = 0
    user_id: int = 0
    name: str = ""
    emoji_buddy: str = ""
    direction: str = "build"  # build, break
    type: str = "binary"  # binary, measured
    target_value: float | int | None = None
    target_unit: str | None = None
    frequency: str = "daily"  # daily, weekdays, weekends, custom
    custom_days: list[bool] = field(default_factory=lambda: [False] * 7)  # Sun..Sat
    reminder_time: str | None = None
    active: bool = True
    sort_order: int = 0
    created_at: str = ""
    updated_at: str = ""

    @property
    def is_building(self) -> bool:
        return self.direction != "break"

    @property
    def created_day(self) -> str | None:
        """Calendar day of creation (YYYY-MM-DD), or None if unknown."""
        if not self.created_at:
            return None
        try:
            return datetime.fromisoformat(self.created_at).date().isoformat()
        except ValueError:
            return self.created_at[:10] or None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Habit:
        custom = d.get("customDays")
        return cls(
            id=int(d.get("id", 0)),
            user_id=int(d.get("userId", 0)),
            name=str(d.get("name", "")),
            emoji_buddy=str(d.get("emojiBuddy", "")),
            direction=str(d.get("direction", "build")),
            type=str(d.get("type", "binary")),
            target_value=_optional_number(d.get("targetValue")),
            target_unit=d.get("targetUnit"),
            frequency=str(d.get("frequency", "daily")),
            custom_days=list(custom) if isinstance(custom, list) else [False] * 7,
            reminder_time=d.get("reminderTime"),
            active=bool(d.get("active", True)),
            sort_order=int(d.get("sortOrder", 0) or 0),
            created_at=str(d.get("createdAt", "")),
            updated_at=str(d.get("updatedAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "emojiBuddy": self.emoji_buddy,
            "direction": self.direction,
            "type": self.type,
            "targetValue": self.target_value,
            "targetUnit": self.target_unit,
            "frequency": self.frequency,
            "customDays": list(self.custom_days),
            "reminderTime": self.reminder_time,
            "active": self.active,
            "sortOrder": self.sort_order,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


# ── Check-ins ─────────────────────────────────────────────────


@dataclass
class CheckIn:
    id: int = 0
    habit_id: int = 0
    user_id: int = 0
    date: str = ""  # YYYY-MM-DD
    completed: bool | None = None  # None means no entry
    value: float | int | None = None
    created_at: str = ""
    updated_at: str = ""

    @property
    def created_day(self) -> str:
        """Calendar day the row was first written, falling back to its date."""
        if self.created_at:
            try:
                return datetime.fromisoformat(self.created_at).date().isoformat()
            except ValueError:
                pass
        return self.date

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CheckIn:
        return cls(
            id=int(d.get("id", 0)),
            habit_id=int(d.get("habitId", 0)),
            user_id=int(d.get("userId", 0)),
            date=str(d.get("date", "")),
            completed=_optional_bool(d.get("completed")),
            value=_optional_number(d.get("value")),
            created_at=str(d.get("createdAt", "")),
            updated_at=str(d.get("updatedAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "habitId": self.habit_id,
            "userId": self.user_id,
            "date": self.date,
            "completed": self.completed,
            "value": self.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


# ── Milestones ────────────────────────────────────────────────


@dataclass
class Cosmetic:
    type: str = ""  # hat, companion, landmark
    value: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> Cosmetic:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(type=str(d.get("type", "")), value=str(d.get("value", "")))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value}


@dataclass
class Milestone:
    id: int = 0
    habit_id: int = 0
    user_id: int = 0
    type: str = ""  # streak_7, streak_30, streak_100
    cosmetic: Cosmetic = field(default_factory=Cosmetic)
    streak_snapshot: int = 0
    earned_at: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Milestone:
        return cls(
            id=int(d.get("id", 0)),
            habit_id=int(d.get("habitId", 0)),
            user_id=int(d.get("userId", 0)),
            type=str(d.get("type", "")),
            cosmetic=Cosmetic.from_dict(d.get("cosmetic")),
            streak_snapshot=int(d.get("streakSnapshot", 0) or 0),
            earned_at=str(d.get("earnedAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "habitId": self.habit_id,
            "userId": self.user_id,
            "type": self.type,
            "cosmetic": self.cosmetic.to_dict(),
            "streakSnapshot": self.streak_snapshot,
            "earnedAt": self.earned_at,
        }


# ── Streaks ───────────────────────────────────────────────────


@dataclass
class StreakCheckpoint:
    """Longest-streak scan state after evaluating every day up to `through`."""

    through: str = ""
    run: int = 0
    best: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> StreakCheckpoint:
        return cls(
            through=str(d.get("through", "")),
            run=int(d.get("run", 0)),
            best=int(d.get("best", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"through": self.through, "run": self.run, "best": self.best}


@dataclass
class StreakInfo:
    current_streak: int = 0
    longest_streak: int = 0
    total_check_ins: int = 0
    completion_rate: int = 0
    last_check_in_date: str | None = None
    is_active_today: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "totalCheckIns": self.total_check_ins,
            "completionRate": self.completion_rate,
            "lastCheckInDate": self.last_check_in_date,
            "isActiveToday": self.is_active_today,
        }


# ── Rates ─────────────────────────────────────────────────────


@dataclass
class CompletionRate:
    rate: int = 0
    completed: float = 0
    total: float = 0

    def to_dict(self) -> dict[str, Any]:
        return {"rate": self.rate, "completed": self.completed, "total": self.total}


@dataclass
class MeasuredRate:
    rate: int = 0
    average_value: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"rate": self.rate, "averageValue": self.average_value}


@dataclass
class HabitStats:
    habit_id: int = 0
    completion_rate_7d: CompletionRate = field(default_factory=CompletionRate)
    completion_rate_30d: CompletionRate = field(default_factory=CompletionRate)
    completion_rate_90d: CompletionRate = field(default_factory=CompletionRate)
    completion_rate_all_time: CompletionRate = field(default_factory=CompletionRate)
    average_value: float | None = None
    target_value: float | int | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "habitId": self.habit_id,
            "completionRate7d": self.completion_rate_7d.to_dict(),
            "completionRate30d": self.completion_rate_30d.to_dict(),
            "completionRate90d": self.completion_rate_90d.to_dict(),
            "completionRateAllTime": self.completion_rate_all_time.to_dict(),
        }
        if self.average_value is not None:
            d["averageValue"] = self.average_value
        if self.target_value is not None:
            d["targetValue"] = self.target_value
        return d


# ── Garden ────────────────────────────────────────────────────


@dataclass
class MoodResult:
    mood: str = "dormant"
    emoji: str = ""
    label: str = ""
    animation: str = "none"  # bounce, pulse, none

    def to_dict(self) -> dict[str, Any]:
        return {
            "mood": self.mood,
            "emoji": self.emoji,
            "label": self.label,
            "animation": self.animation,
        }


@dataclass
class HabitMoodInfo:
    habit_id: int = 0
    mood: MoodResult = field(default_factory=MoodResult)
    completion_rate_7_days: float = 0.0
    days_tracked: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "habitId": self.habit_id,
            "mood": self.mood.to_dict(),
            "completionRate7Days": self.completion_rate_7_days,
            "daysTracked": self.days_tracked,
        }


@dataclass
class ZoneSummary:
    habit_id: int = 0
    name: str = ""
    emoji_buddy: str = ""
    mood: MoodResult = field(default_factory=MoodResult)
    completion_rate_7_days: float = 0.0
    completion_rate_14_days: float = 0.0
    zone_state: str = "neglected"
    zone_label: str = ""
    zone_elements: list[str] = field(default_factory=list)
    sort_order: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "habitId": self.habit_id,
            "name": self.name,
            "emojiBuddy": self.emoji_buddy,
            "mood": self.mood.to_dict(),
            "completionRate7Days": self.completion_rate_7_days,
            "completionRate14Days": self.completion_rate_14_days,
            "zoneState": self.zone_state,
            "zoneLabel": self.zone_label,
            "zoneElements": list(self.zone_elements),
            "sortOrder": self.sort_order,
        }


@dataclass
class GardenSummary:
    zones: list[ZoneSummary] = field(default_factory=list)
    atmosphere: str = "cloudy"
    atmosphere_message: str = ""
    average_completion_rate: float = 0.0
    habit_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "zones": [z.to_dict() for z in self.zones],
            "atmosphere": self.atmosphere,
            "atmosphereMessage": self.atmosphere_message,
            "averageCompletionRate": self.average_completion_rate,
            "habitCount": self.habit_count,
            "totalHabits": len(self.zones),
        }


# ── Content ───────────────────────────────────────────────────


@dataclass
class ContentStats:
    """Streak and rate figures the content selector classifies and templates."""

    current_streak: int = 0
    longest_streak: int = 0
    total_check_ins: int = 0
    is_active_today: bool = False
    completion_rate_7_days: int = 0
    completion_rate_30_days: int = 0
    days_since_start: int = 0


@dataclass
class ContentMessage:
    type: str = "encouragement"  # habit_science, encouragement
    message: str = ""
    trigger: str | None = None
    context: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type, "message": self.message}
        if self.trigger is not None:
            d["trigger"] = self.trigger
        if self.context is not None:
            d["context"] = self.context
        return d


# ── Stored workspace ──────────────────────────────────────────


@dataclass
class GardenData:
    """Everything persisted in garden.json."""

    habits: list[Habit] = field(default_factory=list)
    check_ins: list[CheckIn] = field(default_factory=list)
    milestones: list[Milestone] = field(default_factory=list)
    checkpoints: dict[int, StreakCheckpoint] = field(default_factory=dict)
    next_ids: dict[str, int] = field(default_factory=dict)

    def allocate_id(self, kind: str) -> int:
        """Next id for "habit", "checkIn" or "milestone", never reusing a stored one."""
        records = {
            "habit": self.habits,
            "checkIn": self.check_ins,
            "milestone": self.milestones,
        }[kind]
        highest = max((r.id for r in records), default=0)
        next_id = max(self.next_ids.get(kind, 1), highest + 1)
        self.next_ids[kind] = next_id + 1
        return next_id

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> GardenData:
        if not d or not isinstance(d, dict):
            return cls()
        checkpoints = {}
        for key, cp in (d.get("streakCheckpoints") or {}).items():
            if isinstance(cp, dict):
                checkpoints[int(key)] = StreakCheckpoint.from_dict(cp)
        return cls(
            habits=[Habit.from_dict(h) for h in (d.get("habits") or [])],
            check_ins=[CheckIn.from_dict(c) for c in (d.get("checkIns") or [])],
            milestones=[Milestone.from_dict(m) for m in (d.get("milestones") or [])],
            checkpoints=checkpoints,
            next_ids={str(k): int(v) for k, v in (d.get("nextIds") or {}).items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "habits": [h.to_dict() for h in self.habits],
            "checkIns": [c.to_dict() for c in self.check_ins],
            "milestones": [m.to_dict() for m in self.milestones],
            "streakCheckpoints": {str(k): v.to_dict() for k, v in self.checkpoints.items()},
            "nextIds": dict(self.next_ids),
        }
