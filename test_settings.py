"""Tests for loading the picker's start-up settings."""

import json

from calendar_models import SelectionMode, Weekday
from settings import CalendarSettings, load_settings


def _write(tmp_path, payload):
    path = tmp_path / "settings.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return str(path)


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(str(tmp_path / "absent.json")) == CalendarSettings()


def test_corrupt_file_gives_defaults(tmp_path):
    assert load_settings(_write(tmp_path, "{not json")) == CalendarSettings()


def test_non_object_gives_defaults(tmp_path):
    assert load_settings(_write(tmp_path, [1, 2, 3])) == CalendarSettings()


def test_valid_values_are_loaded(tmp_path):
    settings = load_settings(_write(tmp_path, {
        "theme": "dark",
        "expanded": False,
        "selection_mode": "range",
        "first_day_of_week": "sunday",
        "show_week_numbers": False,
        "allow_past_selection": False,
    }))
    assert settings.theme == "dark"
    assert settings.expanded is False
    assert settings.selection_mode is SelectionMode.RANGE
    assert settings.first_day_of_week is Weekday.SUNDAY
    assert settings.show_week_numbers is False
    assert settings.allow_past_selection is False
    assert settings.allow_future_selection is True


def test_bad_values_fall_back_per_key(tmp_path):
    settings = load_settings(_write(tmp_path, {
        "theme": "neon",
        "expanded": "yes",
        "selection_mode": ["single"],
        "first_day_of_week": 3,
        "grid_cols": 5,
    }))
    assert settings == CalendarSettings()


def test_to_configuration():
    config = CalendarSettings(selection_mode=SelectionMode.MULTIPLE, allow_future_selection=False).to_configuration()
    assert config.selection_mode is SelectionMode.MULTIPLE
    assert config.first_day_of_week is Weekday.MONDAY
    assert config.allow_future_selection is False
    assert config.show_week_numbers is True
