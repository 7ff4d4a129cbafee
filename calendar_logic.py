"""Pure calendar calculations: date arithmetic and week grids, no UI."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

import structlog

from calendar_models import Weekday

logger = structlog.get_logger(__name__)

DAYS_PER_WEEK = 7


def normalize_day(value: date | datetime) -> date:
    """Strip the time of day, returning the canonical day key."""
    if isinstance(value, datetime):
        return value.date()
    return value


def first_of_month(d: date) -> date:
    return d.replace(day=1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def add_days(d: date, days: int) -> date:
    """Calendar-day addition; falls back to ``d`` outside the date range."""
    try:
        return d + timedelta(days=days)
    except OverflowError:
        logger.warning("Day offset out of range", date=d.isoformat(), days=days)
        return d


def add_months(d: date, months: int) -> date:
    """Shift ``d`` by whole months, clamping the day to the target month."""
    total = d.year * 12 + (d.month - 1) + months
    year, month0 = divmod(total, 12)
    if not date.min.year <= year <= date.max.year:
        logger.warning("Month offset out of range", date=d.isoformat(), months=months)
        return d
    month = month0 + 1
    return date(year, month, min(d.day, days_in_month(year, month)))


def months_between(start: date, end: date) -> int:
    """Signed number of months from ``start``'s month to ``end``'s month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def weekday_of(d: date) -> Weekday:
    return Weekday.from_date(d)


def is_weekend(d: date) -> bool:
    """Saturday and Sunday count as weekend days."""
    return d.weekday() >= 5


def weekday_headers(first_day_of_week: Weekday) -> list[str]:
    """Return the short weekday names in display order."""
    return [wd.short_name for wd in Weekday.ordered_from(first_day_of_week)]


def build_weeks(anchor: date | datetime, first_day_of_week: Weekday) -> list[list[date]]:
    """Return the weeks needed to display ``anchor``'s month.

    The grid starts on ``first_day_of_week`` on or before the 1st and stops
    with the week containing the month's last day, whose trailing slots are
    filled with days of the next month.  Every week has exactly 7 days and
    a month takes 4 to 6 weeks; no week lies entirely outside the month.
    """
    first = first_of_month(normalize_day(anchor))
    last = first.replace(day=days_in_month(first.year, first.month))

    days_from_start = (weekday_of(first) - first_day_of_week) % DAYS_PER_WEEK
    current = add_days(first, -days_from_start)

    weeks: list[list[date]] = []
    while current <= last:
        week: list[date] = []
        for _ in range(DAYS_PER_WEEK):
            week.append(current)
            nxt = add_days(current, 1)
            if nxt == current:
                # date.max reached; close the grid instead of looping forever
                return weeks + [week + [current] * (DAYS_PER_WEEK - len(week))]
            current = nxt
        weeks.append(week)
    return weeks


def week_row_of(weeks: list[list[date]], d: date | datetime | None) -> int | None:
    """Return the index of the week containing ``d``, or None."""
    if d is None:
        return None
    day = normalize_day(d)
    for index, week in enumerate(weeks):
        if day in week:
            return index
    return None


def iso_week_numbers(weeks: list[list[date]]) -> list[int]:
    """Return the ISO week number of each grid row.

    Rows are labelled by their Thursday-equivalent, i.e. the ISO week of the
    row's fourth day, so Sunday-first grids are labelled consistently.
    """
    return [week[3].isocalendar()[1] for week in weeks]


def day_of_year(d: date) -> int:
    """Return the 1-based day-of-year for the given date."""
    return d.timetuple().tm_yday
