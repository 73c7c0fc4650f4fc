"""Workspace settings loaded from garden/settings.yaml."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gardencore.fileio import read_yaml, write_yaml_atomic
from gardencore.workspace import settings_path


@dataclass
class Settings:
    timezone: str = "UTC"
    max_active_habits: int = 3
    grace_period_days: int = 3
    streak_lookback_days: int = 365
    default_user_id: int = 1

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        """Build settings, keeping defaults for missing or unusable values."""
        if not d or not isinstance(d, dict):
            return cls()
        defaults = cls()

        def _positive_int(key: str, fallback: int) -> int:
            try:
                value = int(d.get(key, fallback))
            except (TypeError, ValueError):
                return fallback
            return value if value > 0 else fallback

        timezone = d.get("timezone")
        return cls(
            timezone=timezone if isinstance(timezone, str) and timezone else defaults.timezone,
            max_active_habits=_positive_int("max_active_habits", defaults.max_active_habits),
            grace_period_days=_positive_int("grace_period_days", defaults.grace_period_days),
            streak_lookback_days=_positive_int("streak_lookback_days", defaults.streak_lookback_days),
            default_user_id=_positive_int("default_user_id", defaults.default_user_id),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timezone": self.timezone,
            "max_active_habits": self.max_active_habits,
            "grace_period_days": self.grace_period_days,
            "streak_lookback_days": self.streak_lookback_days,
            "default_user_id": self.default_user_id,
        }


def load_settings(root: Path | None = None) -> Settings:
    return Settings.from_dict(read_yaml(settings_path(root)))


def save_settings(settings: Settings, root: Path | None = None) -> None:
    write_yaml_atomic(settings_path(root), settings.to_dict())
