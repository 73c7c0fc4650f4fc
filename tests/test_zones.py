"""Tests for gardencore/zones.py."""

from gardencore.zones import (
    EMPTY_GARDEN_MESSAGE,
    atmosphere_message,
    get_atmosphere,
    get_zone_state,
    zone_state_config,
)


def test_zone_states():
    assert get_zone_state(90) == "thriving"
    assert get_zone_state(89.99) == "healthy"
    assert get_zone_state(70) == "healthy"
    assert get_zone_state(50) == "okay"
    assert get_zone_state(25) == "struggling"
    assert get_zone_state(24) == "neglected"
    assert get_zone_state(0) == "neglected"


def test_zone_config():
    config = zone_state_config("thriving")
    assert config["label"] == "Thriving"
    assert config["elements"]
    config["elements"].clear()
    assert zone_state_config("thriving")["elements"]


def test_zone_config_unknown_state():
    assert zone_state_config("flooded")["label"] == "Neglected"


def test_atmosphere():
    assert get_atmosphere(85, 2) == "sunny"
    assert get_atmosphere(70, 1) == "partly_cloudy"
    assert get_atmosphere(50, 1) == "cloudy"
    assert get_atmosphere(25, 3) == "overcast"
    assert get_atmosphere(10, 1) == "rainy"


def test_empty_garden_is_cloudy():
    assert get_atmosphere(0, 0) == "cloudy"
    assert get_atmosphere(100, 0) == "cloudy"
    assert atmosphere_message("cloudy", 0) == EMPTY_GARDEN_MESSAGE
    assert atmosphere_message("cloudy", 1) != EMPTY_GARDEN_MESSAGE
