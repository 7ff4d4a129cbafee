"""JSON-based settings for the calendar picker window (read-only)."""

import json
import os

import structlog
from pydantic import BaseModel, ConfigDict

from calendar_models import CalendarConfiguration, SelectionMode, Weekday
from calendar_theme import THEMES

logger = structlog.get_logger(__name__)

SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".calendar-picker-settings.json")

_BOOL_KEYS = ("expanded", "show_week_numbers", "allow_past_selection", "allow_future_selection")


class CalendarSettings(BaseModel):
    """Start-up options for the desktop picker."""

    model_config = ConfigDict(frozen=True)

    theme: str = "default"
    expanded: bool = True
    selection_mode: SelectionMode = SelectionMode.SINGLE
    first_day_of_week: Weekday = Weekday.MONDAY
    show_week_numbers: bool = True
    allow_past_selection: bool = True
    allow_future_selection: bool = True

    def to_configuration(self) -> CalendarConfiguration:
        return CalendarConfiguration(
            selection_mode=self.selection_mode,
            first_day_of_week=self.first_day_of_week,
            show_week_numbers=self.show_week_numbers,
            allow_past_selection=self.allow_past_selection,
            allow_future_selection=self.allow_future_selection,
        )


def load_settings(path: str | None = None) -> CalendarSettings:
    """Load settings from disk, returning defaults for missing or bad keys."""
    path = path or SETTINGS_PATH
    values: dict = {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return CalendarSettings()
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Unreadable settings file, using defaults", path=path, error=str(exc))
        return CalendarSettings()

    if not isinstance(stored, dict):
        logger.warning("Settings file is not a JSON object", path=path)
        return CalendarSettings()

    if isinstance(stored.get("theme"), str) and stored["theme"] in THEMES:
        values["theme"] = stored["theme"]
    for key in _BOOL_KEYS:
        if key in stored and isinstance(stored[key], bool):
            values[key] = stored[key]
    mode = stored.get("selection_mode")
    if isinstance(mode, str) and mode in {m.value for m in SelectionMode}:
        values["selection_mode"] = SelectionMode(mode)
    day = stored.get("first_day_of_week")
    if isinstance(day, str) and day.upper() in Weekday.__members__:
        values["first_day_of_week"] = Weekday[day.upper()]

    ignored = sorted(set(stored) - set(values))
    if ignored:
        logger.warning("Ignored settings keys", keys=ignored)
    return CalendarSettings(**values)
