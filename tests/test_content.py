"""Tests for gardencore/content.py: classification, pools and cursors."""

import threading

import pytest

from gardencore.content import (
    CONTEXTS,
    TRIGGERS,
    JsonCursorStore,
    MemoryCursorStore,
    determine_context,
    determine_trigger,
    get_content_message,
    message_pool,
    render_template,
)
from gardencore.fileio import read_json
from gardencore.models import ContentStats, Habit
from gardencore.workspace import cursors_path


def _habit(**kw) -> Habit:
    fields = {"id": 1, "user_id": 1, "name": "Morning walk", "emoji_buddy": "\U0001f422"}
    fields.update(kw)
    return Habit(**fields)


STATS = ContentStats(
    current_streak=6,
    longest_streak=8,
    total_check_ins=20,
    is_active_today=False,
    completion_rate_7_days=86,
    completion_rate_30_days=60,
    days_since_start=25,
)


@pytest.mark.parametrize("direction,days,streak,expected", [
    ("build", 2, 0, "first_steps"),
    ("build", 3, 0, "first_steps"),
    ("build", 10, 5, "building_momentum"),
    ("build", 20, 14, "hitting_wall"),
    ("build", 40, 30, "long_term"),
    ("build", 10, 0, "long_term"),
    ("break", 5, 0, "breaking_bad_early"),
    ("break", 8, 3, "breaking_bad_urge"),
])
def test_determine_trigger(direction, days, streak, expected):
    assert determine_trigger(direction, days, streak) == expected


def test_determine_trigger_after_break():
    assert determine_trigger("build", 40, 0, was_broken=True) == "streak_broken"
    assert determine_trigger("break", 3, 0, was_broken=True) == "breaking_bad_urge"


def test_determine_context():
    assert determine_context(5, True, False) == "just_checked_in"
    assert determine_context(1, True, False) == "comeback"
    assert determine_context(3, True, True) == "comeback"
    assert determine_context(3, False, False) == "streak_active"
    assert determine_context(0, False, False) == "comeback"


def test_every_category_has_messages():
    for trigger in TRIGGERS:
        assert message_pool("habit_science", trigger), trigger
    for context in CONTEXTS:
        assert message_pool("encouragement", context), context


def test_memory_cursor_advances_and_wraps():
    store = MemoryCursorStore()
    assert [store.advance(1, "encouragement_comeback", 3) for _ in range(4)] == [0, 1, 2, 0]
    assert store.position(1, "encouragement_comeback") == 1
    assert store.advance(2, "encouragement_comeback", 3) == 0
    assert store.advance(1, "science_first_steps", 0) == 0


def test_json_cursor_persists(workspace):
    first = JsonCursorStore(workspace)
    assert first.advance(1, "science_long_term", 3) == 0
    assert first.advance(1, "science_long_term", 3) == 1

    second = JsonCursorStore(workspace)
    assert second.advance(1, "science_long_term", 3) == 2
    assert second.advance(1, "science_long_term", 3) == 0

    second.forget(1)
    assert JsonCursorStore(workspace).advance(1, "science_long_term", 3) == 0


def test_json_cursors_for_different_habits_do_not_interfere(workspace):
    rounds = 40

    def advance(habit_id):
        for _ in range(rounds):
            JsonCursorStore(workspace).advance(habit_id, "encouragement_comeback", 1000)

    threads = [threading.Thread(target=advance, args=(habit_id,)) for habit_id in range(1, 9)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    cursors = read_json(cursors_path(workspace))
    assert {int(k): v["encouragement_comeback"] for k, v in cursors.items()} == {
        habit_id: rounds for habit_id in range(1, 9)
    }


def test_message_rotation_wraps():
    store = MemoryCursorStore()
    pool_size = len(message_pool("encouragement", "streak_active"))
    messages = [
        get_content_message(_habit(), STATS, "encouragement", store).message
        for _ in range(pool_size + 1)
    ]
    assert messages[0] == messages[-1]
    assert len(set(messages[:pool_size])) == pool_size


def test_encouragement_is_rendered():
    result = get_content_message(_habit(), STATS, "encouragement", MemoryCursorStore())
    assert result.context == "streak_active"
    assert result.trigger is None
    assert result.message == "\U0001f422 is proud of you: 6 days and counting on Morning walk!"


def test_habit_science_resolves_trigger():
    result = get_content_message(_habit(), STATS, "habit_science", MemoryCursorStore())
    assert result.trigger == "building_momentum"
    assert result.to_dict()["type"] == "habit_science"
    assert "context" not in result.to_dict()


def test_was_broken_and_overrides():
    broken = get_content_message(_habit(), STATS, "habit_science", MemoryCursorStore(), was_broken=True)
    assert broken.trigger == "streak_broken"

    forced = get_content_message(_habit(), STATS, "encouragement", MemoryCursorStore(), context="comeback")
    assert forced.context == "comeback"


def test_render_template_leaves_unknown_placeholders():
    assert render_template("{buddy} {mystery}", {"buddy": "\U0001f422"}) == "\U0001f422 {mystery}"
