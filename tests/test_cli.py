"""Tests for the Textual client's row builders."""

from cli.buddygarden import check_in_summary, garden_header, habit_row, zone_rows
from gardencore.models import GardenSummary, Habit, StreakInfo, ZoneSummary
from gardencore.queries import get_garden
from gardencore.zones import EMPTY_GARDEN_MESSAGE


def test_zone_rows(workspace):
    garden = get_garden(1, workspace, today="2026-02-11")
    rows = zone_rows(garden)
    assert [r[0] for r in rows] == ["1", "2"]
    assert rows[0][1] == "\U0001f422 Morning walk"
    assert rows[0][2].endswith("Thriving")
    assert rows[0][3] == "86%"
    assert rows[0][5] == "Healthy"


def test_garden_header():
    assert garden_header(GardenSummary(atmosphere_message=EMPTY_GARDEN_MESSAGE)) == EMPTY_GARDEN_MESSAGE
    header = garden_header(GardenSummary(
        atmosphere="partly_cloudy", atmosphere_message="Mostly sunny.",
        average_completion_rate=72.5, habit_count=2,
    ))
    assert header.startswith("Atmosphere: partly cloudy (73% over 14 days)")


def test_zone_rows_round_rates():
    garden = GardenSummary(zones=[ZoneSummary(
        habit_id=5, name="Read", emoji_buddy="\U0001f989",
        completion_rate_7_days=400 / 7, completion_rate_14_days=12.5,
    )])
    row = zone_rows(garden)[0]
    assert row[3] == "57%"
    assert row[4] == "13%"


def test_habit_row_custom_schedule():
    habit = Habit(id=3, name="Swim", emoji_buddy="\U0001f433", frequency="custom",
                  custom_days=[True, False, False, True, False, False, False])
    row = habit_row(habit, StreakInfo(current_streak=2, longest_streak=5, completion_rate=40, is_active_today=True))
    assert row == ("3", "\U0001f433 Swim", "build", "Su We", "2", "5", "40%", "yes")


def test_check_in_summary():
    result = {
        "streak": {"currentStreak": 7},
        "milestones": [{"type": "streak_7", "message": "7 days straight!"}],
    }
    assert check_in_summary(result) == "Streak: 7 days\n7 days straight!"
