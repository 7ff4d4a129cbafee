"""Theme tables: colours, fonts, spacing and sizes consumed by renderers.

Themes are immutable data.  Nothing in the grid, selection or paging code
looks at them; only the Pillow renderer and the tkinter window do.
"""

from __future__ import annotations

from enum import Enum

import structlog
from pydantic import BaseModel, ConfigDict

from calendar_models import CalendarDay, EventColor

logger = structlog.get_logger(__name__)


class BoxShape(str, Enum):
    CIRCLE = "circle"
    ROUNDED = "rounded"
    SQUARE = "square"


class IndicatorStyle(str, Enum):
    DOT = "dot"
    BAR = "bar"
    BADGE = "badge"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ThemeColors(_Frozen):
    primary: str = "#0078D4"
    secondary: str = "#888888"
    background: str = "#FFFFFF"
    surface: str = "#F3F3F3"
    on_background: str = "#333333"
    selected_background: str = "#0078D4"
    selected_foreground: str = "#FFFFFF"
    today_background: str = "#B3D7F2"
    today_foreground: str = "#000000"
    weekend_foreground: str = "#CC0000"
    disabled_foreground: str = "#BBBBBB"
    event_indicator: str = "#4CAF50"
    border: str = "#DDDDDD"


class ThemeTypography(_Frozen):
    family: str = "Segoe UI"
    header_size: int = 14
    day_size: int = 11
    weekday_size: int = 9
    event_size: int = 8


class ThemeSpacing(_Frozen):
    small: int = 4
    medium: int = 8
    large: int = 16
    day_spacing: int = 2
    week_spacing: int = 8
    header_spacing: int = 16


class ThemeSizing(_Frozen):
    day_size: int = 40
    event_indicator_size: int = 6
    corner_radius: int = 8
    border_width: int = 1
    box_shape: BoxShape = BoxShape.ROUNDED
    indicator_style: IndicatorStyle = IndicatorStyle.DOT


class CalendarTheme(_Frozen):
    name: str = "default"
    colors: ThemeColors = ThemeColors()
    typography: ThemeTypography = ThemeTypography()
    spacing: ThemeSpacing = ThemeSpacing()
    sizing: ThemeSizing = ThemeSizing()


DEFAULT_THEME = CalendarTheme()

DARK_THEME = CalendarTheme(
    name="dark",
    colors=ThemeColors(
        primary="#FFFFFF",
        secondary="#8A8A8A",
        background="#1E1E1E",
        surface="#2A2A2A",
        on_background="#FFFFFF",
        selected_background="#0A84FF",
        selected_foreground="#FFFFFF",
        today_background="#FF9F0A",
        today_foreground="#FFFFFF",
        weekend_foreground="#FF6961",
        disabled_foreground="#5A5A5A",
        event_indicator="#32D74B",
        border="#3A3A3A",
    ),
)

MINIMAL_THEME = CalendarTheme(
    name="minimal",
    colors=ThemeColors(
        primary="#000000",
        secondary="#888888",
        surface="#FFFFFF",
        on_background="#000000",
        selected_background="#000000",
        selected_foreground="#FFFFFF",
        today_background="#FFFFFF",
        today_foreground="#000000",
        weekend_foreground="#000000",
        disabled_foreground="#C0C0C0",
        event_indicator="#000000",
        border="#FFFFFF",
    ),
    spacing=ThemeSpacing(day_spacing=1, week_spacing=4, header_spacing=12),
    sizing=ThemeSizing(corner_radius=0, border_width=0, box_shape=BoxShape.SQUARE,
                       indicator_style=IndicatorStyle.BAR),
)

COLORFUL_THEME = CalendarTheme(
    name="colorful",
    colors=ThemeColors(
        primary="#AF52DE",
        secondary="#FF2D55",
        selected_background="#AF52DE",
        selected_foreground="#FFFFFF",
        today_background="#FF2D55",
        today_foreground="#FFFFFF",
        weekend_foreground="#C58BE8",
        event_indicator="#FF9500",
    ),
    sizing=ThemeSizing(corner_radius=12, box_shape=BoxShape.CIRCLE,
                       indicator_style=IndicatorStyle.BADGE),
)

THEMES: dict[str, CalendarTheme] = {
    theme.name: theme
    for theme in (DEFAULT_THEME, DARK_THEME, MINIMAL_THEME, COLORFUL_THEME)
}

EVENT_COLORS: dict[EventColor, str] = {
    EventColor.RED: "#FF3B30",
    EventColor.BLUE: "#007AFF",
    EventColor.GREEN: "#34C759",
    EventColor.ORANGE: "#FF9500",
    EventColor.PURPLE: "#AF52DE",
    EventColor.PINK: "#FF2D55",
    EventColor.YELLOW: "#FFCC00",
    EventColor.GRAY: "#8E8E93",
}


def get_theme(name: str) -> CalendarTheme:
    """Look up a preset by name, falling back to the default theme."""
    theme = THEMES.get(name)
    if theme is None:
        logger.warning("Unknown theme, using default", theme=name)
        return DEFAULT_THEME
    return theme


def event_color_hex(color: EventColor) -> str:
    return EVENT_COLORS[color]


class DayStyle(_Frozen):
    """Resolved colours for one day cell."""

    background: str
    foreground: str
    border: str
    border_width: int
    bold: bool = False


def day_style(theme: CalendarTheme, day: CalendarDay) -> DayStyle:
    """Selected wins over today, today over outside-month, then weekend."""
    c = theme.colors
    background = c.background
    foreground = c.on_background

    if day.is_selected:
        background, foreground = c.selected_background, c.selected_foreground
    elif day.is_today:
        background, foreground = c.today_background, c.today_foreground
    elif not day.is_current_month:
        foreground = c.disabled_foreground
    elif day.is_weekend:
        foreground = c.weekend_foreground

    return DayStyle(
        background=background,
        foreground=foreground,
        border=c.border,
        border_width=theme.sizing.border_width if day.is_today and not day.is_selected else 0,
        bold=day.is_today,
    )
