"""Value types shared by the grid builder, selection engine and renderers."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Any, Iterator, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_time(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    return value


class Weekday(IntEnum):
    """Day of week, numbered Sunday=1 .. Saturday=7."""

    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7

    @property
    def short_name(self) -> str:
        return self.name[:3].title()

    @property
    def full_name(self) -> str:
        return self.name.title()

    @classmethod
    def from_date(cls, d: date) -> "Weekday":
        # date.weekday() is Monday=0 .. Sunday=6
        return cls((d.weekday() + 1) % 7 + 1)

    @classmethod
    def ordered_from(cls, first: "Weekday") -> list["Weekday"]:
        """All seven weekdays, starting with ``first``."""
        days = list(cls)
        start = days.index(first)
        return days[start:] + days[:start]


class SelectionMode(str, Enum):
    """How taps mutate the selection."""

    SINGLE = "single"
    MULTIPLE = "multiple"
    RANGE = "range"
    NONE = "none"


class DisplayMode(str, Enum):
    MONTH = "month"
    WEEK = "week"
    AGENDA = "agenda"


class EventColor(str, Enum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    ORANGE = "orange"
    PURPLE = "purple"
    PINK = "pink"
    YELLOW = "yellow"
    GRAY = "gray"


class EventType(str, Enum):
    EVENT = "event"
    REMINDER = "reminder"
    BIRTHDAY = "birthday"
    HOLIDAY = "holiday"
    MEETING = "meeting"

    @property
    def label(self) -> str:
        return self.value.title()


class CalendarEvent(BaseModel):
    """An annotation attached to a single day."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    title: str
    date: date
    color: EventColor = EventColor.BLUE
    type: EventType = EventType.EVENT

    @field_validator("date", mode="before")
    @classmethod
    def strip_time(cls, value: Any) -> Any:
        return _strip_time(value)


class CalendarDay(BaseModel):
    """One cell of the month grid. Identified by its ``date``."""

    model_config = ConfigDict(frozen=True)

    date: date
    day: int
    is_current_month: bool
    is_today: bool = False
    is_selected: bool = False
    is_weekend: bool = False
    events: tuple[CalendarEvent, ...] = ()

    @property
    def has_events(self) -> bool:
        return bool(self.events)


class CalendarMonth(BaseModel):
    """A month laid out as 4-6 weeks of 7 days each."""

    model_config = ConfigDict(frozen=True)

    anchor_date: date
    weeks: tuple[tuple[CalendarDay, ...], ...]
    month_name: str
    year: int

    @field_validator("weeks")
    @classmethod
    def full_weeks(cls, weeks: tuple[tuple[CalendarDay, ...], ...]) -> tuple[tuple[CalendarDay, ...], ...]:
        for week in weeks:
            if len(week) != 7:
                raise ValueError(f"week has {len(week)} days, expected 7")
        return weeks

    @property
    def display_name(self) -> str:
        return f"{self.month_name} {self.year}"

    @property
    def days(self) -> Iterator[CalendarDay]:
        for week in self.weeks:
            yield from week

    def day_for(self, d: date) -> Optional[CalendarDay]:
        d = _strip_time(d)
        return next((day for day in self.days if day.date == d), None)

    def week_index_of(self, d: date) -> Optional[int]:
        d = _strip_time(d)
        for index, week in enumerate(self.weeks):
            if any(day.date == d for day in week):
                return index
        return None


class CalendarConfiguration(BaseModel):
    """Per-instance picker behaviour. Replacing it clears the selection."""

    model_config = ConfigDict(frozen=True)

    selection_mode: SelectionMode = SelectionMode.SINGLE
    display_mode: DisplayMode = DisplayMode.MONTH
    first_day_of_week: Weekday = Weekday.SUNDAY
    show_week_numbers: bool = False
    allow_past_selection: bool = True
    allow_future_selection: bool = True
    minimum_date: Optional[date] = None
    maximum_date: Optional[date] = None

    @field_validator("minimum_date", "maximum_date", mode="before")
    @classmethod
    def strip_time(cls, value: Any) -> Any:
        return _strip_time(value)

    def replace(self, **changes: Any) -> "CalendarConfiguration":
        return self.model_validate({**self.model_dump(), **changes})
