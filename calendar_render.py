"""Render day cells and whole months to in-memory PIL images."""

from __future__ import annotations

from typing import Callable, Optional

from PIL import Image, ImageDraw, ImageFont

from calendar_logic import iso_week_numbers, weekday_headers
from calendar_models import CalendarDay, CalendarMonth, Weekday
from calendar_theme import (
    BoxShape,
    CalendarTheme,
    DEFAULT_THEME,
    IndicatorStyle,
    day_style,
    event_color_hex,
)

MAX_INDICATORS = 3

DayRenderer = Callable[[CalendarDay, CalendarTheme], Image.Image]

_font_cache: dict[tuple[str, int, bool], ImageFont.ImageFont] = {}


def load_font(family: str, size: int, bold: bool = False):
    """Return a TrueType font, or Pillow's built-in font if none is found."""
    key = (family, size, bold)
    if key in _font_cache:
        return _font_cache[key]
    candidates = [
        f"{family} Bold.ttf" if bold else f"{family}.ttf",
        "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf",
        "segoeuib.ttf" if bold else "segoeui.ttf",
    ]
    font = None
    for name in candidates:
        try:
            font = ImageFont.truetype(name, size)
            break
        except OSError:
            continue
    if font is None:
        font = ImageFont.load_default()
    _font_cache[key] = font
    return font


def _draw_centered(draw: ImageDraw.ImageDraw, box: tuple[int, int, int, int],
                   text: str, fill: str, font) -> None:
    # Centre the visible pixels, compensating for font metric offsets
    x0, y0, x1, y1 = box
    bbox = draw.textbbox((0, 0), text, font=font)
    x = x0 + ((x1 - x0) - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = y0 + ((y1 - y0) - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill=fill, font=font)


def _draw_box(draw: ImageDraw.ImageDraw, size: int, theme: CalendarTheme,
              fill: str, outline: str, width: int) -> None:
    shape = theme.sizing.box_shape
    box = (1, 1, size - 2, size - 2)
    kwargs = {"fill": fill, "outline": outline if width else None, "width": width}
    if shape is BoxShape.CIRCLE:
        draw.ellipse(box, **kwargs)
    elif shape is BoxShape.ROUNDED and theme.sizing.corner_radius:
        draw.rounded_rectangle(box, radius=theme.sizing.corner_radius, **kwargs)
    else:
        draw.rectangle(box, **kwargs)


def _draw_indicators(draw: ImageDraw.ImageDraw, day: CalendarDay,
                     theme: CalendarTheme, size: int) -> None:
    dot = theme.sizing.event_indicator_size
    shown = day.events[:MAX_INDICATORS]
    overflow = len(day.events) - len(shown)
    y = size - dot - 3
    style = theme.sizing.indicator_style

    if style is IndicatorStyle.BADGE:
        font = load_font(theme.typography.family, theme.typography.event_size, bold=True)
        r = max(dot, theme.typography.event_size)
        draw.ellipse((size - 2 * r - 1, 0, size - 1, 2 * r), fill=theme.colors.event_indicator)
        _draw_centered(draw, (size - 2 * r - 1, 0, size - 1, 2 * r),
                       str(len(day.events)), "#FFFFFF", font)
        return

    total_w = len(shown) * dot + (len(shown) - 1) * 2
    x = (size - total_w) // 2
    for event in shown:
        color = event_color_hex(event.color)
        if style is IndicatorStyle.BAR:
            draw.rectangle((x, y + dot // 2, x + dot, y + dot // 2 + 1), fill=color)
        else:
            draw.ellipse((x, y, x + dot, y + dot), fill=color)
        x += dot + 2

    if overflow > 0:
        font = load_font(theme.typography.family, theme.typography.event_size)
        draw.text((x + 1, y - 2), f"+{overflow}", fill=theme.colors.secondary, font=font)


def render_day_cell(day: CalendarDay, theme: CalendarTheme = DEFAULT_THEME) -> Image.Image:
    """Default day renderer: a ``day_size`` square RGBA image."""
    size = theme.sizing.day_size
    style = day_style(theme, day)
    img = Image.new("RGBA", (size, size), theme.colors.background)
    draw = ImageDraw.Draw(img)

    if style.background != theme.colors.background or style.border_width:
        _draw_box(draw, size, theme, style.background, style.border, style.border_width)

    font = load_font(theme.typography.family, theme.typography.day_size, bold=style.bold)
    _draw_centered(draw, (0, 0, size, size), str(day.day), style.foreground, font)

    if day.events:
        _draw_indicators(draw, day, theme, size)
    if not day.is_current_month:
        faded = Image.new("RGBA", (size, size), theme.colors.background)
        img = Image.blend(faded, img, 0.5)
    return img


def render_month_image(
    month: CalendarMonth,
    theme: CalendarTheme = DEFAULT_THEME,
    day_renderer: Optional[DayRenderer] = None,
    first_day_of_week: Weekday = Weekday.SUNDAY,
    show_week_numbers: bool = False,
) -> Image.Image:
    """Lay out the title, weekday header and week rows of ``month``."""
    renderer = day_renderer or render_day_cell
    cell = theme.sizing.day_size
    gap = theme.spacing.day_spacing
    row_gap = theme.spacing.week_spacing
    pad = theme.spacing.medium
    title_h = theme.typography.header_size * 2
    header_h = int(cell * 0.6)
    wn_w = cell if show_week_numbers else 0

    width = pad * 2 + wn_w + 7 * cell + 6 * gap
    height = pad * 2 + title_h + header_h + len(month.weeks) * (cell + row_gap)

    img = Image.new("RGBA", (width, height), theme.colors.background)
    draw = ImageDraw.Draw(img)

    font_title = load_font(theme.typography.family, theme.typography.header_size, bold=True)
    _draw_centered(draw, (0, pad, width, pad + title_h), month.display_name,
                   theme.colors.on_background, font_title)

    font_wd = load_font(theme.typography.family, theme.typography.weekday_size, bold=True)
    top = pad + title_h
    left = pad + wn_w
    for col, name in enumerate(weekday_headers(first_day_of_week)):
        x = left + col * (cell + gap)
        _draw_centered(draw, (x, top, x + cell, top + header_h), name,
                       theme.colors.secondary, font_wd)

    top += header_h
    week_numbers = iso_week_numbers([[d.date for d in week] for week in month.weeks])
    for row, week in enumerate(month.weeks):
        y = top + row * (cell + row_gap)
        if show_week_numbers:
            _draw_centered(draw, (pad, y, pad + wn_w, y + cell), str(week_numbers[row]),
                           theme.colors.secondary, font_wd)
        for col, day in enumerate(week):
            tile = renderer(day, theme)
            if tile.size != (cell, cell):
                tile = tile.resize((cell, cell))
            tile = tile.convert("RGBA")
            img.paste(tile, (left + col * (cell + gap), y), tile)
    return img
