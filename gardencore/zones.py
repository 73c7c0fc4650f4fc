"""Garden zone health and overall atmosphere."""

from __future__ import annotations

from typing import Any


ZONE_THRESHOLDS = [
    (90, "thriving"),
    (70, "healthy"),
    (50, "okay"),
    (25, "struggling"),
]

ATMOSPHERE_THRESHOLDS = [
    (85, "sunny"),
    (70, "partly_cloudy"),
    (50, "cloudy"),
    (25, "overcast"),
]

ZONE_CONFIGS: dict[str, dict[str, Any]] = {
    "thriving": {"label": "Thriving", "elements": ["\U0001f333", "\U0001f33b", "\U0001f98b", "✨"]},
    "healthy": {"label": "Healthy", "elements": ["\U0001f33f", "\U0001f338", "\U0001f33c"]},
    "okay": {"label": "Okay", "elements": ["\U0001f331", "\U0001f33e"]},
    "struggling": {"label": "Struggling", "elements": ["\U0001f342", "\U0001f940"]},
    "neglected": {"label": "Neglected", "elements": ["\U0001f342", "\U0001f4a8", "\U0001f578️"]},
}

ATMOSPHERE_MESSAGES = {
    "sunny": "Clear skies over the garden. Everyone is thriving!",
    "partly_cloudy": "Mostly sunny, with a few clouds drifting by.",
    "cloudy": "A few clouds today. A check-in or two will bring the sun back.",
    "overcast": "The sky is heavy. Your buddies could use some attention.",
    "rainy": "It's raining in the garden. One small check-in is a great start.",
}

EMPTY_GARDEN_MESSAGE = "Your garden is waiting. Plant a habit to bring out the sun."


def get_zone_state(rate: float) -> str:
    """Zone state from a 14-day completion percentage."""
    for bound, state in ZONE_THRESHOLDS:
        if rate >= bound:
            return state
    return "neglected"


def zone_state_config(state: str) -> dict[str, Any]:
    config = ZONE_CONFIGS.get(state, ZONE_CONFIGS["neglected"])
    return {"label": config["label"], "elements": list(config["elements"])}


def get_atmosphere(average_rate: float, habit_count: int) -> str:
    """Whole-garden weather; an empty garden is always cloudy."""
    if habit_count == 0:
        return "cloudy"
    for bound, atmosphere in ATMOSPHERE_THRESHOLDS:
        if average_rate >= bound:
            return atmosphere
    return "rainy"


def atmosphere_message(atmosphere: str, habit_count: int) -> str:
    if habit_count == 0:
        return EMPTY_GARDEN_MESSAGE
    return ATMOSPHERE_MESSAGES.get(atmosphere, ATMOSPHERE_MESSAGES["cloudy"])
