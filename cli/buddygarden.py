#!/usr/bin/env python3
"""Buddy Garden TUI: tend your habit garden from the terminal, powered by Textual."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.reactive import reactive
from textual.widgets import DataTable, Footer, Header, Label, Static

from gardencore import (
    GardenError,
    GardenSummary,
    MemoryCursorStore,
    Settings,
    get_content,
    get_garden,
    get_streak_info,
    load_garden,
    load_settings,
    record_check_in,
    save_settings,
    workspace_root,
)
from gardencore.days import round_half_up
from gardencore.models import Habit, StreakInfo
from gardencore.store import user_habits
from gardencore.workspace import settings_path

logger = logging.getLogger(__name__)


# ── View helpers ──────────────────────────────────────────────


def zone_rows(garden: GardenSummary) -> list[tuple[str, ...]]:
    """One table row per zone, in garden order."""
    rows = []
    for zone in garden.zones:
        rows.append((
            str(zone.habit_id),
            f"{zone.emoji_buddy} {zone.name}",
            f"{zone.mood.emoji} {zone.mood.label}",
            f"{round_half_up(zone.completion_rate_7_days):.0f}%",
            f"{round_half_up(zone.completion_rate_14_days):.0f}%",
            zone.zone_label,
            "".join(zone.zone_elements),
        ))
    return rows


def garden_header(garden: GardenSummary) -> str:
    if garden.habit_count == 0:
        return garden.atmosphere_message
    return (
        f"Atmosphere: {garden.atmosphere.replace('_', ' ')} "
        f"({round_half_up(garden.average_completion_rate):.0f}% over 14 days)\n{garden.atmosphere_message}"
    )


def habit_row(habit: Habit, streak: StreakInfo) -> tuple[str, ...]:
    schedule = habit.frequency
    if habit.frequency == "custom":
        names = ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]
        schedule = " ".join(n for n, on in zip(names, habit.custom_days) if on is True) or "none"
    return (
        str(habit.id),
        f"{habit.emoji_buddy} {habit.name}",
        habit.direction,
        schedule,
        str(streak.current_streak),
        str(streak.longest_streak),
        f"{streak.completion_rate}%",
        "yes" if streak.is_active_today else "no",
    )


def check_in_summary(result: dict[str, Any]) -> str:
    """Notification text for a completed check-in."""
    streak = result.get("streak", {})
    parts = [f"Streak: {streak.get('currentStreak', 0)} days"]
    for milestone in result.get("milestones", []):
        parts.append(milestone.get("message", ""))
    return "\n".join(p for p in parts if p)


# ── Screens ───────────────────────────────────────────────────


CSS = """
.section-title {
    text-style: bold;
    padding: 0 1;
    margin-top: 1;
}
#garden-header {
    padding: 0 1;
    height: auto;
}
#buddy-message {
    padding: 1;
    height: auto;
    color: $text-muted;
}
"""


class HabitsScreen(Vertical):
    """All habits with their streaks."""

    def compose(self) -> ComposeResult:
        yield Label("Habits", classes="section-title")
        yield DataTable(id="habits-table")

    def on_mount(self) -> None:
        table: DataTable = self.query_one("#habits-table", DataTable)
        table.add_columns("ID", "Habit", "Direction", "Schedule", "Streak", "Best", "Rate", "Today")

        root = workspace_root()
        user_id = load_settings(root).default_user_id
        for habit in user_habits(load_garden(root), user_id):
            try:
                streak = get_streak_info(habit.id, user_id, root)
            except GardenError as e:
                logger.warning("Skipping habit %s: %s", habit.id, e)
                continue
            table.add_row(*habit_row(habit, streak))


# ── Main app ──────────────────────────────────────────────────


class BuddyGardenApp(App):
    """Buddy Garden: one emoji buddy per habit."""

    TITLE = "Buddy Garden"
    CSS = CSS

    BINDINGS = [
        Binding("g", "show_garden", "Garden"),
        Binding("h", "show_habits", "Habits"),
        Binding("c", "check_in(True)", "Done"),
        Binding("x", "check_in(False)", "Missed"),
        Binding("r", "refresh", "Refresh"),
        Binding("q", "quit", "Quit"),
    ]

    current_view: reactive[str] = reactive("garden")

    def __init__(self) -> None:
        super().__init__()
        self._cursors = MemoryCursorStore()
        self._user_id = load_settings(workspace_root()).default_user_id

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Static(id="garden-header"),
            Label("Garden", classes="section-title"),
            DataTable(id="garden-table", cursor_type="row"),
            Static(id="buddy-message"),
            id="garden-view",
        )
        yield Footer()

    def on_mount(self) -> None:
        table: DataTable = self.query_one("#garden-table", DataTable)
        table.add_columns("ID", "Buddy", "Mood", "7d", "14d", "Zone", "")
        self._load_data()

    def _load_data(self) -> None:
        garden = get_garden(self._user_id, workspace_root())
        self.query_one("#garden-header", Static).update(garden_header(garden))
        table: DataTable = self.query_one("#garden-table", DataTable)
        table.clear()
        for row in zone_rows(garden):
            table.add_row(*row, key=row[0])

    def _selected_habit_id(self) -> int | None:
        table: DataTable = self.query_one("#garden-table", DataTable)
        if table.row_count == 0:
            return None
        row = table.get_row_at(table.cursor_row)
        return int(row[0])

    def action_show_garden(self) -> None:
        for old in self.query(".overlay-screen"):
            old.remove()
        self.query_one("#garden-view").display = True
        self.current_view = "garden"

    def action_show_habits(self) -> None:
        for old in self.query(".overlay-screen"):
            old.remove()
        self.query_one("#garden-view").display = False
        self.mount(HabitsScreen(classes="overlay-screen"), before=self.query_one(Footer))
        self.current_view = "habits"

    def action_refresh(self) -> None:
        self._load_data()

    def action_check_in(self, completed: bool) -> None:
        habit_id = self._selected_habit_id()
        if habit_id is None:
            self.notify("Plant a habit first", severity="warning")
            return
        self._do_check_in(habit_id, completed)

    @work(thread=True)
    def _do_check_in(self, habit_id: int, completed: bool) -> None:
        """Write the check-in off the UI thread, then redraw the garden."""
        root = workspace_root()
        try:
            result = record_check_in(habit_id, self._user_id, completed=completed, root=root)
            message = get_content(
                habit_id,
                self._user_id,
                "encouragement",
                self._cursors,
                just_checked_in=True,
                root=root,
            )
        except GardenError as e:
            self.call_from_thread(self.notify, str(e), title="Check-in failed", severity="error")
            return
        self.call_from_thread(self.notify, check_in_summary(result), title="Checked in")
        self.call_from_thread(self.query_one("#buddy-message", Static).update, message.message)
        self.call_from_thread(self._load_data)


# ── Entry point ───────────────────────────────────────────────


def main() -> None:
    logging.basicConfig(level=os.environ.get("GARDEN_LOG_LEVEL", "WARNING").upper())
    root = workspace_root()
    if not root.exists():
        print(f"Workspace not found: {root}")
        print("Set GARDEN_ROOT to an existing directory.")
        sys.exit(1)
    if not settings_path(root).exists():
        save_settings(Settings(), root)

    app = BuddyGardenApp()
    app.run()


if __name__ == "__main__":
    main()
