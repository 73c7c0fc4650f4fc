"""Tests for gardencore/notifications.py."""

import random

from gardencore.notifications import NOTIFICATION_TEMPLATES, build_notification, streak_notification


def test_unknown_kind_falls_back_to_reminder():
    note = build_notification("carrier_pigeon", {"buddy": "\U0001f422", "habit_name": "Walk"})
    assert note["type"] == "reminder"
    titles = [t["title"].replace("{buddy}", "\U0001f422") for t in NOTIFICATION_TEMPLATES["reminder"]]
    assert note["title"] in titles


def test_reminder_fills_placeholders():
    for seed in range(10):
        note = build_notification("reminder", {"buddy": "\U0001f422", "habit_name": "Walk"}, random.Random(seed))
        assert "{" not in note["title"] + note["body"]


def test_streak_notification():
    note = streak_notification(12, "\U0001f451", "\U0001f422", random.Random(0))
    assert note["type"] == "streak"
    assert "12 days" in note["body"]


def test_weekly_summary():
    note = build_notification("weekly_summary", {"summary": "5 of 7 days"})
    assert "5 of 7 days" in note["body"]
