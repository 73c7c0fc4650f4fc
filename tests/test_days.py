"""Tests for gardencore/days.py: schedules, success predicate, rounding."""

from gardencore.days import (
    day_of_week,
    days_between,
    is_success,
    is_tracked_day,
    iter_days,
    round_half_up,
    round_percent,
    shift_day,
)
from gardencore.models import Habit


WEEK = list(iter_days("2026-02-08", "2026-02-14"))  # Sunday .. Saturday


def test_day_of_week_sunday_first():
    assert day_of_week("2026-02-08") == 0
    assert day_of_week("2026-02-11") == 3
    assert day_of_week("2026-02-14") == 6


def test_daily_tracks_every_day():
    habit = Habit(frequency="daily")
    assert all(is_tracked_day(habit, d) for d in iter_days("2026-01-01", "2026-03-01"))


def test_weekdays_and_weekends():
    weekdays = Habit(frequency="weekdays")
    weekends = Habit(frequency="weekends")
    assert [is_tracked_day(weekdays, d) for d in WEEK] == [False, True, True, True, True, True, False]
    assert [is_tracked_day(weekends, d) for d in WEEK] == [True, False, False, False, False, False, True]


def test_custom_weekend_only():
    habit = Habit(frequency="custom", custom_days=[True, False, False, False, False, False, True])
    tracked = [d for d in iter_days("2026-02-01", "2026-02-28") if is_tracked_day(habit, d)]
    assert tracked
    assert all(day_of_week(d) in (0, 6) for d in tracked)
    assert len(tracked) == 8


def test_custom_malformed_tracks_nothing():
    habit = Habit(frequency="custom", custom_days=[])
    assert not any(is_tracked_day(habit, d) for d in WEEK)


def test_unknown_frequency_tracks_every_day():
    habit = Habit(frequency="fortnightly")
    assert all(is_tracked_day(habit, d) for d in WEEK)


def test_is_success_build_and_break():
    build = Habit(direction="build")
    breaking = Habit(direction="break")
    assert is_success(build, True) is True
    assert is_success(build, False) is False
    assert is_success(breaking, False) is True
    assert is_success(breaking, True) is False
    assert is_success(build, None) is False
    assert is_success(breaking, None) is False


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(72.5) == 73
    assert round_half_up(12.25, 1) == 12.3
    assert round_half_up(12.24, 1) == 12.2


def test_round_percent():
    assert round_percent(8, 11) == 73
    assert round_percent(1, 2) == 50
    assert round_percent(5, 0) == 0


def test_day_arithmetic():
    assert shift_day("2026-03-01", -1) == "2026-02-28"
    assert days_between("2026-02-01", "2026-02-11") == 10
    assert days_between("2026-02-11", "2026-02-01") == -10
    assert list(iter_days("2026-02-10", "2026-02-11")) == ["2026-02-10", "2026-02-11"]
    assert list(iter_days("2026-02-11", "2026-02-10")) == []
