"""Virtual month paging, page window tracking and display-height layout.

Pages are numbered 0 .. MAX_PAGE_INDEX; page START_PAGE_INDEX shows the
month containing "today" and every other page is a whole-month offset from
it.  Only a window of PAGE_WINDOW_SIZE pages around the current page is
realized by the renderer.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, NamedTuple, Optional

import structlog
from pydantic import BaseModel, ConfigDict

from calendar_logic import (
    add_months,
    build_weeks,
    first_of_month,
    months_between,
    normalize_day,
    week_row_of,
)
from calendar_models import Weekday

logger = structlog.get_logger(__name__)

START_PAGE_INDEX = 500
PAGE_COUNT = 1000
MAX_PAGE_INDEX = PAGE_COUNT - 1
PAGE_WINDOW_SIZE = 7

PageChangedCallback = Callable[[int, date], None]


class LayoutMetrics(BaseModel):
    """Fixed sizes used to compute the grid's display height."""

    model_config = ConfigDict(frozen=True)

    row_height: float = 48.0
    row_spacing: float = 10.0
    top_spacing: float = 10.0
    header_height: float = 20.0
    collapsed_padding: float = 30.0


class PagerLayout(NamedTuple):
    selected_row: int
    visible_rows: int
    height: float


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(value, hi))


class CalendarPager:
    """Maps page indexes to months and keeps the realized-page window."""

    def __init__(
        self,
        today: Optional[date] = None,
        first_day_of_week: Weekday = Weekday.SUNDAY,
        metrics: Optional[LayoutMetrics] = None,
        active_date: Optional[date] = None,
        expanded: bool = True,
        on_page_changed: Optional[PageChangedCallback] = None,
    ) -> None:
        self.logger = logger.bind(component="calendar_pager")
        self.today = normalize_day(today or date.today())
        self.first_day_of_week = first_day_of_week
        self.metrics = metrics or LayoutMetrics()
        self.on_page_changed = on_page_changed

        self.start_page_index = START_PAGE_INDEX
        self.max_page_index = MAX_PAGE_INDEX
        self.window_size = PAGE_WINDOW_SIZE

        self.current_page_index = self.start_page_index
        self.window_start = _clamp(
            self.current_page_index - self.window_size // 2,
            0, self.max_page_index - self.window_size + 1,
        )
        self.active_date = normalize_day(active_date or self.today)
        self.expanded = expanded

        self.layout = self.recalculate()

    # ------------------------------------------------------------------
    # Page <-> month mapping
    # ------------------------------------------------------------------
    def page_for_date(self, d: date | datetime) -> int:
        offset = months_between(self.today, normalize_day(d))
        return _clamp(self.start_page_index + offset, 0, self.max_page_index)

    def month_for_page(self, page: int) -> date:
        """First day of the month shown on ``page``."""
        return add_months(first_of_month(self.today), page - self.start_page_index)

    @property
    def current_month(self) -> date:
        return self.month_for_page(self.current_page_index)

    # ------------------------------------------------------------------
    # Window
    # ------------------------------------------------------------------
    @property
    def window_end(self) -> int:
        return self.window_start + self.window_size - 1

    @property
    def window_pages(self) -> range:
        return range(self.window_start, self.window_end + 1)

    def is_realized(self, page: int) -> bool:
        return page in self.window_pages

    def _slide_window(self) -> None:
        page = self.current_page_index
        if page <= self.window_start:
            self.window_start = max(0, page - 1)
        elif page >= self.window_end:
            self.window_start = min(
                self.max_page_index - self.window_size + 1,
                page - self.window_size + 2,
            )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def previous(self) -> bool:
        return self.go_to_page(self.current_page_index - 1)

    def next(self) -> bool:
        return self.go_to_page(self.current_page_index + 1)

    def go_to_page(self, page: int) -> bool:
        """Move to ``page`` (clamped). Returns False when nothing changed."""
        target = _clamp(page, 0, self.max_page_index)
        if target == self.current_page_index:
            return False

        delta = target - self.current_page_index
        self.current_page_index = target
        self.active_date = add_months(self.active_date, delta)
        self._slide_window()
        self.recalculate()

        self.logger.debug(
            "Page changed",
            page=target,
            month=self.current_month.isoformat(),
            window_start=self.window_start,
        )
        if self.on_page_changed is not None:
            self.on_page_changed(target, self.current_month)
        return True

    def go_to_date(self, d: date | datetime) -> bool:
        """Show ``d``'s month and make ``d`` the active date."""
        day = normalize_day(d)
        changed = self.go_to_page(self.page_for_date(day))
        if self.page_for_date(day) == self.current_page_index:
            self.set_active_date(day)
        return changed

    def go_to_today(self) -> bool:
        return self.go_to_date(self.today)

    def set_today(self, today: date | datetime) -> bool:
        """Re-anchor page numbering on a new "today", keeping the shown month.

        Returns False when the day is unchanged.  No page-changed callback
        fires.
        """
        day = normalize_day(today)
        if day == self.today:
            return False
        shown = self.current_month
        self.today = day
        page = self.page_for_date(shown)
        delta = page - self.current_page_index
        self.current_page_index = page
        self.window_start = _clamp(
            self.window_start + delta, 0, self.max_page_index - self.window_size + 1,
        )
        self._slide_window()
        self.recalculate()
        self.logger.info("Today changed", today=day.isoformat(), page=page)
        return True

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def set_active_date(self, d: date | datetime) -> None:
        day = normalize_day(d)
        if day != self.active_date:
            self.active_date = day
            self.recalculate()

    def set_expanded(self, expanded: bool) -> None:
        if expanded != self.expanded:
            self.expanded = expanded
            self.recalculate()

    def set_first_day_of_week(self, first_day_of_week: Weekday) -> None:
        if first_day_of_week != self.first_day_of_week:
            self.first_day_of_week = first_day_of_week
            self.recalculate()

    def recalculate(self) -> PagerLayout:
        """Recompute the active row and display height for the current page."""
        weeks = build_weeks(self.current_month, self.first_day_of_week)
        row = week_row_of(weeks, self.active_date)
        selected_row = row if row is not None else 0

        m = self.metrics
        if self.expanded:
            rows = len(weeks)
            height = (m.row_height + m.row_spacing) * rows - m.row_spacing / 2 \
                + m.top_spacing + m.header_height
        else:
            rows = 1
            height = m.row_height + m.collapsed_padding + m.top_spacing

        self.layout = PagerLayout(selected_row, rows, height)
        return self.layout

    @property
    def selected_row(self) -> int:
        return self.layout.selected_row

    @property
    def height(self) -> float:
        return self.layout.height
