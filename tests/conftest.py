"""Shared test fixtures for Buddy Garden tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml


TODAY = "2026-02-11"  # a Wednesday


def _rows(habit_id: int, user_id: int, days: list[str], completed: bool | None, start_id: int) -> list[dict]:
    return [
        {
            "id": start_id + i,
            "habitId": habit_id,
            "userId": user_id,
            "date": day,
            "completed": completed,
            "value": None,
            "createdAt": f"{day}T20:00:00",
            "updatedAt": f"{day}T20:00:00",
        }
        for i, day in enumerate(days)
    ]


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with settings and a seeded garden."""
    root = tmp_path / "workspace"
    (root / "garden").mkdir(parents=True)

    settings = {
        "timezone": "UTC",
        "max_active_habits": 3,
        "grace_period_days": 3,
        "streak_lookback_days": 365,
        "default_user_id": 1,
    }
    (root / "garden" / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    habits = [
        {
            "id": 1,
            "userId": 1,
            "name": "Morning walk",
            "emojiBuddy": "\U0001f422",
            "direction": "build",
            "type": "binary",
            "frequency": "daily",
            "active": True,
            "sortOrder": 0,
            "createdAt": "2026-02-01T08:00:00",
            "updatedAt": "2026-02-01T08:00:00",
        },
        {
            "id": 2,
            "userId": 1,
            "name": "No soda",
            "emojiBuddy": "\U0001f98a",
            "direction": "break",
            "type": "binary",
            "frequency": "daily",
            "active": True,
            "sortOrder": 1,
            "createdAt": "2026-02-01T08:00:00",
            "updatedAt": "2026-02-01T08:00:00",
        },
        {
            "id": 3,
            "userId": 1,
            "name": "Journal",
            "emojiBuddy": "\U0001f40c",
            "direction": "build",
            "type": "binary",
            "frequency": "daily",
            "active": False,
            "sortOrder": 2,
            "createdAt": "2026-01-01T08:00:00",
            "updatedAt": "2026-01-15T08:00:00",
        },
        {
            "id": 4,
            "userId": 2,
            "name": "Stretch",
            "emojiBuddy": "\U0001f431",
            "direction": "build",
            "type": "binary",
            "frequency": "daily",
            "active": True,
            "sortOrder": 0,
            "createdAt": "2026-02-01T08:00:00",
            "updatedAt": "2026-02-01T08:00:00",
        },
    ]

    # Morning walk: 3-day run, a miss, a gap, then a 6-day run ending yesterday.
    check_ins = (
        _rows(1, 1, ["2026-02-01", "2026-02-02", "2026-02-03"], True, 1)
        + _rows(1, 1, ["2026-02-04"], False, 4)
        + _rows(1, 1, [f"2026-02-{d:02d}" for d in range(5, 11)], True, 5)
        # No soda: three clean days ending yesterday.
        + _rows(2, 1, ["2026-02-08", "2026-02-09", "2026-02-10"], False, 11)
        + _rows(4, 2, ["2026-02-10"], True, 14)
    )

    garden = {"habits": habits, "checkIns": check_ins, "milestones": []}
    (root / "garden" / "garden.json").write_text(
        json.dumps(garden, indent=2, ensure_ascii=False), encoding="utf-8"
    )

    # Set env var
    os.environ["GARDEN_ROOT"] = str(root)
    yield root
    # Cleanup
    if "GARDEN_ROOT" in os.environ:
        del os.environ["GARDEN_ROOT"]
