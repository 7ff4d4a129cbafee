"""In-memory events-by-day store owned by the host application."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Iterator

import structlog

from calendar_logic import normalize_day
from calendar_models import CalendarEvent

logger = structlog.get_logger(__name__)


class EventStore(Mapping):
    """Mapping of normalized day -> ordered tuple of events.

    Only ``add`` and ``remove`` mutate the store; a day whose last event is
    removed disappears from the mapping.
    """

    def __init__(self, events: list[CalendarEvent] | None = None) -> None:
        self._events: dict[date, list[CalendarEvent]] = {}
        for event in events or []:
            self.add(event)

    # Mapping protocol
    def __getitem__(self, key: date) -> tuple[CalendarEvent, ...]:
        return tuple(self._events[normalize_day(key)])

    def __iter__(self) -> Iterator[date]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, date):
            return False
        return normalize_day(key) in self._events

    def events_for(self, d: date | datetime) -> tuple[CalendarEvent, ...]:
        return tuple(self._events.get(normalize_day(d), ()))

    def add(self, event: CalendarEvent, day: date | datetime | None = None) -> date:
        """Append ``event`` under ``day`` (default: the event's own date)."""
        key = normalize_day(day) if day is not None else event.date
        self._events.setdefault(key, []).append(event)
        logger.debug("Event added", date=key.isoformat(), event_id=event.id, title=event.title)
        return key

    def remove(self, event: CalendarEvent, day: date | datetime | None = None) -> bool:
        """Remove ``event`` (matched by id) from ``day``; False if absent."""
        key = normalize_day(day) if day is not None else event.date
        bucket = self._events.get(key, [])
        keep = [item for item in bucket if item.id != event.id]
        if len(keep) == len(bucket):
            return False
        if keep:
            self._events[key] = keep
        else:
            self._events.pop(key, None)
        logger.debug("Event removed", date=key.isoformat(), event_id=event.id)
        return True

    def dates_with_events(self, year: int, month: int) -> set[date]:
        return {d for d in self._events if d.year == year and d.month == month}

    def clear(self) -> None:
        self._events.clear()
