"""Selection state machine: single, multiple, range and none policies.

A selection is a ``frozenset`` of days.  Every operation returns a new set
and leaves its input untouched; a rejected tap returns the input itself.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable

import structlog

from calendar_logic import normalize_day
from calendar_models import CalendarConfiguration, SelectionMode

logger = structlog.get_logger(__name__)


def can_select(d: date | datetime, config: CalendarConfiguration, today: date) -> bool:
    """Return True if ``d`` passes the configuration's date constraints."""
    day = normalize_day(d)
    today = normalize_day(today)

    if not config.allow_past_selection and day < today:
        return False
    if not config.allow_future_selection and day > today:
        return False
    if config.minimum_date is not None and day < config.minimum_date:
        return False
    if config.maximum_date is not None and day > config.maximum_date:
        return False
    return True


def date_range(start: date, end: date) -> list[date]:
    """Every day from ``start`` to ``end`` inclusive, in either order."""
    lo, hi = min(start, end), max(start, end)
    return [lo + timedelta(days=i) for i in range((hi - lo).days + 1)]


def selection_bounds(selected: Iterable[date]) -> tuple[date, date] | None:
    days = list(selected)
    if not days:
        return None
    return min(days), max(days)


def is_contiguous(selected: Iterable[date]) -> bool:
    """True for an empty set, a single day, or an unbroken run of days."""
    days = set(selected)
    bounds = selection_bounds(days)
    if bounds is None:
        return True
    lo, hi = bounds
    return len(days) == (hi - lo).days + 1


def _select_range(day: date, selected: frozenset[date]) -> frozenset[date]:
    if not selected:
        return frozenset({day})
    if len(selected) == 1:
        (existing,) = selected
        return frozenset(date_range(existing, day))
    # a completed range restarts on the next tap
    return frozenset({day})


def select(
    d: date | datetime,
    selected: frozenset[date],
    config: CalendarConfiguration,
    today: date,
) -> frozenset[date]:
    """Apply a tap on ``d`` to ``selected`` under ``config.selection_mode``."""
    if not can_select(d, config, today):
        logger.debug("Selection rejected", date=normalize_day(d).isoformat())
        return selected

    day = normalize_day(d)
    mode = config.selection_mode

    if mode is SelectionMode.SINGLE:
        return frozenset({day})
    if mode is SelectionMode.MULTIPLE:
        if day in selected:
            return selected - {day}
        return selected | {day}
    if mode is SelectionMode.RANGE:
        return _select_range(day, selected)
    return selected


def sanitize_selection(
    selected: Iterable[date | datetime],
    config: CalendarConfiguration,
    today: date,
) -> frozenset[date]:
    """Bring a host-supplied selection in line with ``config``.

    Days that fail ``can_select`` are dropped.  Under single mode more than
    one day, and under range mode a broken run, cannot arise from taps, so
    such sets are reset to empty.
    """
    days = {normalize_day(d) for d in selected}
    kept = frozenset(d for d in days if can_select(d, config, today))
    mode = config.selection_mode
    if mode is SelectionMode.SINGLE and len(kept) > 1:
        kept = frozenset()
    elif mode is SelectionMode.RANGE and not is_contiguous(kept):
        kept = frozenset()
    if len(kept) != len(days):
        logger.warning(
            "Initial selection adjusted",
            given=len(days),
            kept=len(kept),
            selection_mode=mode.value,
        )
    return kept
