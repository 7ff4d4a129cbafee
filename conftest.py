"""Shared fixtures: a frozen "today" and ready-made view models."""

from datetime import date

import pytest

from calendar_events import EventStore
from calendar_models import CalendarConfiguration, CalendarEvent, EventColor, EventType
from calendar_view_model import CalendarViewModel

TODAY = date(2024, 3, 20)  # a Wednesday


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return lambda: TODAY


@pytest.fixture
def sample_events():
    return [
        CalendarEvent(title="Standup", date=date(2024, 3, 15), type=EventType.MEETING),
        CalendarEvent(title="Birthday", date=date(2024, 3, 28),
                      color=EventColor.PINK, type=EventType.BIRTHDAY),
    ]


@pytest.fixture
def make_vm(clock):
    """Build a CalendarViewModel with the frozen clock and recorded callbacks."""

    def _make(config=None, events=None, **kwargs):
        calls = {"tapped": [], "long_press": [], "selection": [], "events": [], "month": []}
        vm = CalendarViewModel(
            configuration=config or CalendarConfiguration(),
            events=EventStore(events) if events is not None else None,
            today=clock,
            on_date_tapped=calls["tapped"].append,
            on_date_long_press=calls["long_press"].append,
            on_selection_changed=calls["selection"].append,
            on_events_changed=calls["events"].append,
            on_month_changed=calls["month"].append,
            **kwargs,
        )
        vm.calls = calls
        return vm

    return _make
