"""Assemble renderable month view-models from grid, selection and events."""

from __future__ import annotations

import calendar as _cal
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import AbstractSet

from calendar_logic import build_weeks, is_weekend, normalize_day
from calendar_models import CalendarConfiguration, CalendarDay, CalendarEvent, CalendarMonth


def assemble_month(
    anchor: date | datetime,
    config: CalendarConfiguration,
    selected: AbstractSet[date],
    events_by_day: Mapping[date, Sequence[CalendarEvent]],
    today: date,
) -> CalendarMonth:
    """Build the ``CalendarMonth`` for ``anchor``'s month.

    Pure: the result depends only on the arguments, and none of them is
    modified, so it is safe to call again after any mutation.
    """
    anchor_day = normalize_day(anchor)
    today = normalize_day(today)
    selected_days = {normalize_day(s) for s in selected}

    weeks = []
    for week in build_weeks(anchor_day, config.first_day_of_week):
        weeks.append(tuple(
            CalendarDay(
                date=d,
                day=d.day,
                is_current_month=(d.year, d.month) == (anchor_day.year, anchor_day.month),
                is_today=d == today,
                is_selected=d in selected_days,
                is_weekend=is_weekend(d),
                events=tuple(events_by_day.get(d, ())),
            )
            for d in week
        ))

    return CalendarMonth(
        anchor_date=anchor_day,
        weeks=tuple(weeks),
        month_name=_cal.month_name[anchor_day.month],
        year=anchor_day.year,
    )


def visible_weeks(
    month: CalendarMonth, expanded: bool, selected_row: int = 0,
) -> tuple[tuple[CalendarDay, ...], ...]:
    """All weeks when expanded, otherwise just the week at ``selected_row``."""
    if expanded or not month.weeks:
        return month.weeks
    row = max(0, min(selected_row, len(month.weeks) - 1))
    return (month.weeks[row],)
