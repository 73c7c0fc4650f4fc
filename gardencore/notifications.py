"""Notification templates for reminders and celebrations.

Delivery is handled outside the garden (see the on_milestone hook); this
module only chooses and fills in the text.
"""

from __future__ import annotations

import random
from typing import Any

from gardencore.content import render_template


NOTIFICATION_TEMPLATES: dict[str, list[dict[str, str]]] = {
    "reminder": [
        {"title": "Time to check in!", "body": "{buddy} is waiting for you today \U0001f331"},
        {"title": "Hey, {buddy} misses you!", "body": "Don't forget to check in today"},
        {"title": "Quick check-in?", "body": "{habit_name} is just one tap away"},
    ],
    "missed": [
        {"title": "Still time!", "body": "{habit_name} is waiting for you today"},
        {"title": "Don't break the streak", "body": "You're at {streak} days. Keep it going!"},
    ],
    "streak": [
        {"title": "\U0001f389 Amazing!", "body": "{streak} days straight! You earned a {reward}!"},
        {"title": "\U0001f525 On fire!", "body": "{streak} days! {buddy} is so proud!"},
    ],
    "reengagement": [
        {"title": "Your garden misses you \U0001f331", "body": "Your buddies are getting lonely"},
        {"title": "We miss you!", "body": "Come back to your garden. It's not the same without you"},
    ],
    "weekly_summary": [
        {"title": "\U0001f4ca Weekly Summary", "body": "This week: {summary}. Your garden is looking good!"},
    ],
}


def build_notification(
    kind: str,
    variables: dict[str, Any],
    rng: random.Random | None = None,
) -> dict[str, str]:
    """Pick a template of *kind* (reminder if unknown) and fill in *variables*."""
    rng = rng or random.Random()
    if kind not in NOTIFICATION_TEMPLATES:
        kind = "reminder"
    template = rng.choice(NOTIFICATION_TEMPLATES[kind])
    values = {k: str(v) for k, v in variables.items()}
    return {
        "type": kind,
        "title": render_template(template["title"], values),
        "body": render_template(template["body"], values),
    }


def streak_notification(streak: int, reward: str, buddy: str, rng: random.Random | None = None) -> dict[str, str]:
    return build_notification("streak", {"streak": streak, "reward": reward, "buddy": buddy}, rng)
