"""Tests for the selection engine."""

from datetime import date, datetime

import pytest

from calendar_models import CalendarConfiguration, SelectionMode
from calendar_selection import (
    can_select,
    date_range,
    is_contiguous,
    sanitize_selection,
    select,
    selection_bounds,
)


def _config(**kwargs):
    return CalendarConfiguration(**kwargs)


class TestCanSelect:
    def test_everything_allowed_by_default(self, today):
        config = _config()
        assert can_select(date(1999, 1, 1), config, today)
        assert can_select(date(2099, 1, 1), config, today)

    def test_past_selection_blocked(self, today):
        config = _config(allow_past_selection=False)
        assert not can_select(date(2024, 3, 19), config, today)
        assert can_select(date(2024, 3, 20), config, today)
        assert can_select(datetime(2024, 3, 20, 0, 0, 1), config, today)
        assert can_select(date(2024, 3, 21), config, today)

    def test_future_selection_blocked(self, today):
        config = _config(allow_future_selection=False)
        assert not can_select(date(2024, 3, 21), config, today)
        assert can_select(datetime(2024, 3, 20, 23, 59), config, today)

    def test_bounds_are_inclusive(self, today):
        config = _config(minimum_date=date(2024, 3, 5), maximum_date=datetime(2024, 3, 25, 18, 0))
        assert config.maximum_date == date(2024, 3, 25)
        assert not can_select(date(2024, 3, 4), config, today)
        assert can_select(date(2024, 3, 5), config, today)
        assert can_select(date(2024, 3, 25), config, today)
        assert can_select(datetime(2024, 3, 25, 23, 59), config, today)
        assert not can_select(date(2024, 3, 26), config, today)

    def test_inverted_bounds_reject_everything(self, today):
        config = _config(minimum_date=date(2024, 3, 25), maximum_date=date(2024, 3, 5))
        assert not any(can_select(d, config, today) for d in date_range(date(2024, 3, 1), date(2024, 3, 31)))


class TestSingle:
    def test_replaces_selection(self, today):
        config = _config(selection_mode=SelectionMode.SINGLE)
        state = select(date(2024, 3, 15), frozenset(), config, today)
        assert state == {date(2024, 3, 15)}
        state = select(datetime(2024, 3, 16, 9, 30), state, config, today)
        assert state == {date(2024, 3, 16)}

    def test_rejected_date_returns_same_state(self, today):
        config = _config(maximum_date=date(2024, 3, 10))
        state = frozenset({date(2024, 3, 1)})
        assert select(date(2024, 3, 15), state, config, today) is state


class TestMultiple:
    def test_toggles_membership(self, today):
        config = _config(selection_mode=SelectionMode.MULTIPLE)
        state = select(date(2024, 3, 1), frozenset(), config, today)
        state = select(date(2024, 3, 8), state, config, today)
        assert state == {date(2024, 3, 1), date(2024, 3, 8)}
        state = select(date(2024, 3, 1), state, config, today)
        assert state == {date(2024, 3, 8)}

    @pytest.mark.parametrize("initial", [frozenset(), frozenset({date(2024, 3, 3)})])
    def test_double_tap_restores_membership(self, today, initial):
        config = _config(selection_mode=SelectionMode.MULTIPLE)
        d = date(2024, 3, 3)
        assert select(d, select(d, initial, config, today), config, today) == initial


class TestRange:
    config = _config(selection_mode=SelectionMode.RANGE)

    def test_first_tap_anchors(self, today):
        assert select(date(2024, 3, 10), frozenset(), self.config, today) == {date(2024, 3, 10)}

    def test_second_tap_fills_backwards_range(self, today):
        state = select(date(2024, 3, 10), frozenset(), self.config, today)
        state = select(date(2024, 3, 5), state, self.config, today)
        assert state == {date(2024, 3, d) for d in range(5, 11)}
        assert len(state) == 6

    def test_range_is_order_independent(self, today):
        a, b = date(2024, 2, 27), date(2024, 3, 2)
        forward = select(b, select(a, frozenset(), self.config, today), self.config, today)
        backward = select(a, select(b, frozenset(), self.config, today), self.config, today)
        assert forward == backward
        assert len(forward) == (b - a).days + 1
        assert is_contiguous(forward)

    def test_third_tap_restarts(self, today):
        state = frozenset(date_range(date(2024, 3, 5), date(2024, 3, 10)))
        assert select(date(2024, 3, 20), state, self.config, today) == {date(2024, 3, 20)}

    def test_same_day_twice_keeps_single_day(self, today):
        state = select(date(2024, 3, 5), frozenset(), self.config, today)
        assert select(date(2024, 3, 5), state, self.config, today) == {date(2024, 3, 5)}


def test_none_mode_never_changes(today):
    config = _config(selection_mode=SelectionMode.NONE)
    state = frozenset({date(2024, 3, 1)})
    assert select(date(2024, 3, 2), state, config, today) == state
    assert select(date(2024, 3, 2), frozenset(), config, today) == frozenset()


def test_range_helpers():
    assert date_range(date(2024, 3, 3), date(2024, 3, 1)) == [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)]
    assert selection_bounds([]) is None
    assert selection_bounds({date(2024, 3, 9), date(2024, 3, 2)}) == (date(2024, 3, 2), date(2024, 3, 9))
    assert is_contiguous(set())
    assert not is_contiguous({date(2024, 3, 1), date(2024, 3, 3)})


class TestSanitizeSelection:
    def test_drops_unselectable_days(self, today):
        config = _config(selection_mode=SelectionMode.MULTIPLE, allow_past_selection=False)
        kept = sanitize_selection([date(2024, 3, 1), datetime(2024, 3, 22, 9, 0)], config, today)
        assert kept == {date(2024, 3, 22)}

    def test_single_mode_keeps_at_most_one_day(self, today):
        assert sanitize_selection([date(2024, 3, 1)], _config(), today) == {date(2024, 3, 1)}
        assert sanitize_selection([date(2024, 3, 1), date(2024, 3, 2)], _config(), today) == frozenset()

    def test_range_mode_needs_an_unbroken_run(self, today):
        config = _config(selection_mode=SelectionMode.RANGE)
        run = date_range(date(2024, 3, 1), date(2024, 3, 4))
        assert sanitize_selection(run, config, today) == frozenset(run)
        assert sanitize_selection([date(2024, 3, 1), date(2024, 3, 4)], config, today) == frozenset()

    def test_range_trimmed_by_bounds_keeps_remaining_run(self, today):
        config = _config(selection_mode=SelectionMode.RANGE, maximum_date=date(2024, 3, 2))
        run = date_range(date(2024, 3, 1), date(2024, 3, 4))
        assert sanitize_selection(run, config, today) == {date(2024, 3, 1), date(2024, 3, 2)}
