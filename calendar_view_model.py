"""Calendar view model: selection, events and paging behind one object.

There is no implicit change tracking.  Every mutating method regenerates
``current_month`` itself and then calls the host's callbacks synchronously.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional

import structlog

from calendar_events import EventStore
from calendar_logic import normalize_day
from calendar_models import CalendarConfiguration, CalendarDay, CalendarEvent, CalendarMonth
from calendar_pager import CalendarPager, LayoutMetrics
from calendar_selection import can_select, sanitize_selection, select, selection_bounds
from calendar_theme import DEFAULT_THEME, CalendarTheme
from month_view import assemble_month, visible_weeks

logger = structlog.get_logger(__name__)

DateCallback = Callable[[date], None]
SelectionCallback = Callable[[frozenset], None]
MonthCallback = Callable[[CalendarMonth], None]
EventsCallback = Callable[[EventStore], None]
DayRenderer = Callable[[CalendarDay, CalendarTheme], Any]


class CalendarViewModel:
    """Owns the picker state and keeps ``current_month`` in sync with it."""

    def __init__(
        self,
        initial_date: Optional[date] = None,
        configuration: Optional[CalendarConfiguration] = None,
        events: Optional[EventStore] = None,
        selected_dates: Iterable[date] = (),
        theme: CalendarTheme = DEFAULT_THEME,
        day_renderer: Optional[DayRenderer] = None,
        today: Callable[[], date] = date.today,
        expanded: bool = True,
        layout: Optional[LayoutMetrics] = None,
        on_date_tapped: Optional[DateCallback] = None,
        on_date_long_press: Optional[DateCallback] = None,
        on_selection_changed: Optional[SelectionCallback] = None,
        on_events_changed: Optional[EventsCallback] = None,
        on_month_changed: Optional[MonthCallback] = None,
    ) -> None:
        self.logger = logger.bind(component="calendar_view_model")
        self._today = today
        self._configuration = configuration or CalendarConfiguration()
        self.events = events if events is not None else EventStore()
        self._last_selected: Optional[date] = None
        self.theme = theme
        self.day_renderer = day_renderer

        self.on_date_tapped = on_date_tapped
        self.on_date_long_press = on_date_long_press
        self.on_selection_changed = on_selection_changed
        self.on_events_changed = on_events_changed
        self.on_month_changed = on_month_changed

        now = self.today
        self._selected: frozenset[date] = sanitize_selection(
            selected_dates, self._configuration, now,
        )
        self.pager = CalendarPager(
            today=now,
            first_day_of_week=self._configuration.first_day_of_week,
            metrics=layout,
            active_date=self._initial_active_date(now),
            expanded=expanded,
        )
        if initial_date is not None:
            self.pager.go_to_date(initial_date)

        self.current_month: CalendarMonth = self._assemble()

    def _initial_active_date(self, now: date) -> date:
        bounds = selection_bounds(self._selected)
        return bounds[0] if bounds else now

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def today(self) -> date:
        return normalize_day(self._today())

    @property
    def configuration(self) -> CalendarConfiguration:
        return self._configuration

    @property
    def selected_dates(self) -> frozenset[date]:
        return self._selected

    @property
    def selected_date(self) -> Optional[date]:
        """The most recently tapped day that is still selected."""
        if self._last_selected in self._selected:
            return self._last_selected
        bounds = selection_bounds(self._selected)
        return bounds[0] if bounds else None

    @property
    def selected_range(self) -> Optional[tuple[date, date]]:
        return selection_bounds(self._selected)

    @property
    def expanded(self) -> bool:
        return self.pager.expanded

    @property
    def selected_row(self) -> int:
        return self.pager.selected_row

    @property
    def display_height(self) -> float:
        return self.pager.height

    @property
    def visible_weeks(self) -> tuple[tuple[CalendarDay, ...], ...]:
        return visible_weeks(self.current_month, self.expanded, self.selected_row)

    def can_select(self, d: date | datetime) -> bool:
        return can_select(d, self._configuration, self.today)

    def events_for(self, d: date | datetime) -> tuple[CalendarEvent, ...]:
        return self.events.events_for(d)

    # ------------------------------------------------------------------
    # Regeneration
    # ------------------------------------------------------------------
    def _sync_today(self) -> date:
        """Read the clock and re-anchor the pager if the day has moved on."""
        today = self.today
        self.pager.set_today(today)
        return today

    def _assemble(self) -> CalendarMonth:
        today = self._sync_today()
        return assemble_month(
            self.pager.current_month,
            self._configuration,
            self._selected,
            self.events,
            today,
        )

    def refresh(self) -> CalendarMonth:
        """Rebuild ``current_month`` from the current state."""
        self.current_month = self._assemble()
        self.logger.debug(
            "Month regenerated",
            month=self.current_month.display_name,
            selected=len(self._selected),
        )
        return self.current_month

    def _set_selection(self, selected: frozenset[date]) -> None:
        self._selected = selected
        self.refresh()
        if self.on_selection_changed is not None:
            self.on_selection_changed(selected)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_date(self, d: date | datetime) -> bool:
        """Apply a selection tap. Returns False when the selection is unchanged."""
        day = normalize_day(d)
        new = select(day, self._selected, self._configuration, self.today)
        if new == self._selected:
            return False
        self._last_selected = day
        if day in new:
            self.pager.set_active_date(day)
        self._set_selection(new)
        return True

    def tap(self, d: date | datetime) -> bool:
        day = normalize_day(d)
        if self.on_date_tapped is not None:
            self.on_date_tapped(day)
        return self.select_date(day)

    def long_press(self, d: date | datetime) -> None:
        if self.on_date_long_press is not None:
            self.on_date_long_press(normalize_day(d))

    def clear_selection(self) -> bool:
        if not self._selected:
            return False
        self._last_selected = None
        self._set_selection(frozenset())
        return True

    def update_configuration(self, configuration: CalendarConfiguration) -> None:
        """Replace the configuration; the current selection is always dropped."""
        self._configuration = configuration
        self.pager.set_first_day_of_week(configuration.first_day_of_week)
        self.logger.info(
            "Configuration replaced",
            selection_mode=configuration.selection_mode.value,
            first_day_of_week=configuration.first_day_of_week.full_name,
        )
        if not self.clear_selection():
            self.refresh()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def _events_changed(self) -> None:
        self.refresh()
        if self.on_events_changed is not None:
            self.on_events_changed(self.events)

    def add_event(self, event: CalendarEvent, day: date | datetime | None = None) -> None:
        self.events.add(event, day)
        self._events_changed()

    def remove_event(self, event: CalendarEvent, day: date | datetime | None = None) -> bool:
        if not self.events.remove(event, day):
            return False
        self._events_changed()
        return True

    def clear_events(self) -> bool:
        if not self.events:
            return False
        self.events.clear()
        self._events_changed()
        return True

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _after_navigation(self, changed: bool) -> bool:
        if changed:
            self.refresh()
            if self.on_month_changed is not None:
                self.on_month_changed(self.current_month)
        return changed

    def next_month(self) -> bool:
        self._sync_today()
        return self._after_navigation(self.pager.next())

    def previous_month(self) -> bool:
        self._sync_today()
        return self._after_navigation(self.pager.previous())

    def navigate(self, to: date | datetime) -> bool:
        self._sync_today()
        return self._after_navigation(self.pager.go_to_date(to))

    def go_to_today(self) -> bool:
        return self._after_navigation(self.pager.go_to_date(self._sync_today()))

    # ------------------------------------------------------------------
    # Expansion and rendering
    # ------------------------------------------------------------------
    def set_expanded(self, expanded: bool) -> None:
        self.pager.set_expanded(expanded)

    def toggle_expanded(self) -> bool:
        self.pager.set_expanded(not self.pager.expanded)
        return self.pager.expanded

    def render_day(self, day: CalendarDay) -> Any:
        """Run the injected day renderer, or return None without one."""
        if self.day_renderer is None:
            return None
        return self.day_renderer(day, self.theme)
