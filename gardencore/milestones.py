"""Streak milestones and the cosmetics buddies earn for them."""

from __future__ import annotations

import random

from gardencore.models import Cosmetic, Habit, Milestone


# (streak threshold, milestone type, cosmetic category), ascending.
MILESTONE_TIERS = [
    (7, "streak_7", "hat"),
    (30, "streak_30", "companion"),
    (100, "streak_100", "landmark"),
]

TIER_COSMETICS: dict[str, list[str]] = {
    "hat": ["\U0001f3a9", "\U0001f576️", "\U0001f451", "\U0001f380", "\U0001f9e2", "\U0001f3aa", "\U0001f338", "\U0001f33a"],
    "companion": ["\U0001f415", "\U0001f408", "\U0001f426", "\U0001f43f️", "\U0001f98a", "\U0001f438", "\U0001f422", "\U0001f98b"],
    "landmark": ["\U0001f3f0", "\U0001f308", "⛲", "\U0001f3aa", "\U0001f5ff", "\U0001f3a0", "\U0001f33b", "\U0001f332"],
}

MILESTONE_MESSAGES = {
    "streak_7": "\U0001f525 7 days straight! {buddy} earned a {cosmetic}!",
    "streak_30": "⭐ 30 days! {buddy} made a new friend: {cosmetic}!",
    "streak_100": "\U0001f3c6 100 DAYS! {buddy} built something amazing: {cosmetic}!",
}


def pick_cosmetic(category: str, awarded: set[str], rng: random.Random | None = None) -> str:
    """Random cosmetic from the category pool, preferring ones not yet awarded.

    Once every value has been handed out the whole pool is eligible again.
    """
    rng = rng or random.Random()
    pool = TIER_COSMETICS[category]
    available = [value for value in pool if value not in awarded]
    return rng.choice(available or pool)


def awarded_values(user_milestones: list[Milestone], category: str) -> set[str]:
    """Cosmetic values of *category* the user already holds, across all habits."""
    return {
        m.cosmetic.value for m in user_milestones
        if m.cosmetic.type == category and m.cosmetic.value
    }


def check_milestones(
    habit: Habit,
    user_milestones: list[Milestone],
    current_streak: int,
    earned_at: str,
    rng: random.Random | None = None,
) -> list[Milestone]:
    """Milestones newly earned by *habit* at *current_streak*.

    *user_milestones* are all milestones already held by the habit's owner.
    Every threshold is checked independently, so a long streak with no prior
    awards earns several tiers at once. Returned records are unsaved (id 0).
    """
    held_types = {m.type for m in user_milestones if m.habit_id == habit.id}
    granted: list[Milestone] = []

    for threshold, milestone_type, category in MILESTONE_TIERS:
        if current_streak < threshold or milestone_type in held_types:
            continue
        awarded = awarded_values(user_milestones + granted, category)
        cosmetic = Cosmetic(type=category, value=pick_cosmetic(category, awarded, rng))
        granted.append(Milestone(
            habit_id=habit.id,
            user_id=habit.user_id,
            type=milestone_type,
            cosmetic=cosmetic,
            streak_snapshot=current_streak,
            earned_at=earned_at,
        ))
    return granted


def milestone_message(milestone_type: str, buddy: str, cosmetic: str) -> str:
    template = MILESTONE_MESSAGES.get(milestone_type, MILESTONE_MESSAGES["streak_7"])
    return template.replace("{buddy}", buddy).replace("{cosmetic}", cosmetic)
