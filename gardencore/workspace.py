"""Workspace root, reference timezone and path helpers."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from gardencore.fileio import read_yaml


def workspace_root() -> Path:
    """Get the workspace root directory (contains garden/)."""
    return Path(
        os.environ.get("GARDEN_ROOT", str(Path.home() / "buddy-garden"))
    ).expanduser().resolve()


def get_timezone(root: Path | None = None) -> ZoneInfo:
    """Reference timezone from settings.yaml, defaulting to UTC."""
    settings = read_yaml(settings_path(root))
    name = settings.get("timezone")
    if isinstance(name, str) and name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return ZoneInfo("UTC")


def now_local(root: Path | None = None) -> datetime:
    """Current datetime in the reference timezone."""
    return datetime.now(get_timezone(root))


def today_str(root: Path | None = None) -> str:
    """Today's calendar day (YYYY-MM-DD) in the reference timezone."""
    return now_local(root).date().isoformat()


# ── Path helpers ──────────────────────────────────────────────

def garden_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "garden"


def settings_path(root: Path | None = None) -> Path:
    return garden_dir(root) / "settings.yaml"


def data_path(root: Path | None = None) -> Path:
    return garden_dir(root) / "garden.json"


def cursors_path(root: Path | None = None) -> Path:
    return garden_dir(root) / "cursors.json"


def hooks_config_path(root: Path | None = None) -> Path:
    return garden_dir(root) / "hooks.yaml"
