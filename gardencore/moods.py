"""Buddy moods derived from the trailing 7-day completion rate."""

from __future__ import annotations

from gardencore.models import CheckIn, Habit, HabitMoodInfo, MoodResult
from gardencore.rates import MOOD_WINDOW_DAYS, days_since_creation, trailing_rate


GRACE_PERIOD_DAYS = 3

# (lower bound, mood, emoji, label, animation), checked top-down.
MOOD_TABLE = [
    (100, "ecstatic", "\U0001f929", "On Fire!", "bounce"),
    (85, "happy", "\U0001f604", "Thriving", "pulse"),
    (70, "content", "\U0001f60a", "Growing", "pulse"),
    (50, "neutral", "\U0001f610", "Getting There", "none"),
    (25, "sad", "\U0001f61f", "Struggling", "none"),
]


def calculate_mood_from_rate(rate: float) -> MoodResult:
    """Map a completion percentage to a mood; bounds are inclusive lower limits."""
    for bound, mood, emoji, label, animation in MOOD_TABLE:
        if rate >= bound:
            return MoodResult(mood=mood, emoji=emoji, label=label, animation=animation)
    if rate > 0:
        return MoodResult(mood="very_sad", emoji="\U0001f622", label="Needs Love", animation="none")
    return MoodResult(mood="dormant", emoji="\U0001f634", label="Dormant", animation="none")


def settling_in_mood() -> MoodResult:
    return MoodResult(mood="content", emoji="\U0001f60a", label="Settling In", animation="pulse")


def waiting_mood() -> MoodResult:
    """Mood shown for a zone whose habit could not be resolved."""
    return MoodResult(mood="dormant", emoji="\U0001f634", label="Waiting", animation="none")


def habit_mood(
    habit: Habit | None,
    check_ins: list[CheckIn],
    today: str,
    grace_days: int = GRACE_PERIOD_DAYS,
) -> HabitMoodInfo:
    """Mood for one habit; brand-new habits are "Settling In" whatever their rate."""
    if habit is None:
        return HabitMoodInfo(mood=waiting_mood())
    rate, days_tracked = trailing_rate(habit, check_ins, today, MOOD_WINDOW_DAYS)
    if days_since_creation(habit, today) < grace_days:
        mood = settling_in_mood()
    else:
        mood = calculate_mood_from_rate(rate)
    return HabitMoodInfo(
        habit_id=habit.id,
        mood=mood,
        completion_rate_7_days=rate,
        days_tracked=days_tracked,
    )
