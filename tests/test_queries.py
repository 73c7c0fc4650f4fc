"""Tests for gardencore/queries.py: read operations over a workspace."""

import pytest

from gardencore.content import MemoryCursorStore
from gardencore.errors import HabitNotFound, InvalidInput
from gardencore.models import CheckIn, Habit
from gardencore.queries import (
    build_garden,
    get_content,
    get_garden,
    get_global_stats,
    get_habit_stats,
    get_streak_info,
    list_check_ins,
    list_milestones,
)
from gardencore.zones import EMPTY_GARDEN_MESSAGE


TODAY = "2026-02-11"


def test_streak_info(workspace):
    info = get_streak_info(1, 1, workspace, today=TODAY)
    assert info.current_streak == 6
    assert info.longest_streak == 6
    assert info.total_check_ins == 9
    assert info.completion_rate == 82
    assert info.last_check_in_date == "2026-02-10"
    assert info.is_active_today is False


def test_streak_info_break_habit(workspace):
    info = get_streak_info(2, 1, workspace, today=TODAY)
    assert info.current_streak == 3
    assert info.total_check_ins == 3


def test_streak_info_not_found(workspace):
    with pytest.raises(HabitNotFound):
        get_streak_info(4, 1, workspace, today=TODAY)


def test_garden(workspace):
    garden = get_garden(1, workspace, today=TODAY)
    assert [z.habit_id for z in garden.zones] == [1, 2]

    walk, soda = garden.zones
    assert walk.mood.mood == "happy"
    assert walk.zone_state == "healthy"
    assert walk.completion_rate_14_days == pytest.approx(900 / 11)
    assert soda.mood.mood == "sad"
    assert soda.zone_state == "struggling"

    assert garden.habit_count == 2
    assert garden.average_completion_rate == pytest.approx(600 / 11)
    assert garden.atmosphere == "cloudy"

    d = garden.to_dict()
    assert d["totalHabits"] == 2
    assert d["zones"][0]["zoneLabel"] == "Healthy"


def test_empty_garden(workspace):
    garden = get_garden(3, workspace, today=TODAY)
    assert garden.zones == []
    assert garden.habit_count == 0
    assert garden.average_completion_rate == 0.0
    assert garden.atmosphere == "cloudy"
    assert garden.atmosphere_message == EMPTY_GARDEN_MESSAGE


def test_build_garden_orders_by_sort_order():
    habits = [
        Habit(id=1, sort_order=2, created_at="2026-01-01T08:00:00"),
        Habit(id=2, sort_order=0, created_at="2026-01-01T08:00:00"),
        Habit(id=3, sort_order=1, active=False),
    ]
    rows = {2: [CheckIn(habit_id=2, date=TODAY, completed=True)]}
    garden = build_garden(habits, rows, TODAY)
    assert [z.habit_id for z in garden.zones] == [2, 1]
    assert garden.zones[1].mood.mood == "dormant"


def test_habit_stats(workspace):
    stats = get_habit_stats(1, 1, workspace, today=TODAY)
    assert stats.completion_rate_7d.rate == 86
    assert stats.completion_rate_all_time.completed == 9
    assert stats.completion_rate_all_time.total == 10


def test_global_stats(workspace):
    assert get_global_stats(1, workspace, today=TODAY) == {
        "totalCheckIns": 9,
        "overallCompletionRate": 43,
        "combinedStreak": 0,
        "habitCount": 2,
    }


def test_list_check_ins(workspace):
    assert len(list_check_ins(1, root=workspace)) == 13
    rows = list_check_ins(1, habit_id=2, start="2026-02-09", root=workspace)
    assert [r.date for r in rows] == ["2026-02-10", "2026-02-09"]
    assert list_check_ins(1, habit_id=4, root=workspace) == []


def test_list_milestones(workspace):
    assert list_milestones(1, 1, workspace) == []
    with pytest.raises(HabitNotFound):
        list_milestones(4, 1, workspace)


def test_content_encouragement(workspace):
    message = get_content(1, 1, "encouragement", MemoryCursorStore(), root=workspace, today=TODAY)
    assert message.context == "streak_active"
    assert message.message == "\U0001f422 is proud of you: 6 days and counting on Morning walk!"


def test_content_habit_science(workspace):
    message = get_content(1, 1, "habit_science", MemoryCursorStore(), root=workspace, today=TODAY)
    assert message.trigger == "building_momentum"

    breaking = get_content(2, 1, "habit_science", MemoryCursorStore(), root=workspace, today=TODAY)
    assert breaking.trigger == "breaking_bad_urge"


def test_content_rejects_bad_request(workspace):
    with pytest.raises(InvalidInput):
        get_content(1, 1, "poetry", MemoryCursorStore(), root=workspace, today=TODAY)
    with pytest.raises(InvalidInput):
        get_content(1, 1, "habit_science", MemoryCursorStore(), trigger="nope", root=workspace, today=TODAY)
    with pytest.raises(HabitNotFound):
        get_content(99, 1, "encouragement", MemoryCursorStore(), root=workspace, today=TODAY)
