"""Window smoke tests; skipped where no display is available."""

from datetime import date
import tkinter as tk

import pytest
from PIL import Image

from calendar_models import CalendarConfiguration, SelectionMode


@pytest.fixture
def root():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    root.withdraw()
    yield root
    try:
        root.destroy()
    except tk.TclError:
        pass


@pytest.fixture
def make_window(root, make_vm):
    from calendar_window import CalendarWindow

    def _make(**kwargs):
        vm = make_vm(**kwargs)
        return CalendarWindow(vm, root=root)

    return _make


class _Event:
    def __init__(self, widget):
        self.widget = widget


def _click(window, row, col):
    cell = window._panel.day_cells[row][col]
    window._on_press(_Event(cell))
    window._on_release(_Event(cell))


def test_initial_layout(make_window):
    window = make_window()
    assert window._panel.header.cget("text") == "March 2024"
    assert window.root.title() == "Calendar  Day: 80"
    assert len(window._widget_dates) == 42
    assert window._footer_label.cget("text") == "Today: 20.03.2024"


def test_click_selects_and_updates_footer(make_window):
    window = make_window()
    _click(window, 2, 5)  # Friday 15 March
    assert window.vm.selected_dates == {date(2024, 3, 15)}
    assert window._footer_label.cget("text").startswith("15.03.2024")


def test_range_footer(make_window):
    window = make_window(config=CalendarConfiguration(selection_mode=SelectionMode.RANGE))
    _click(window, 1, 0)  # 3 March
    _click(window, 2, 6)  # 16 March
    assert window._footer_label.cget("text").startswith("03.03 → 16.03:  14 days  (2 weeks)")


def test_context_click_is_long_press(make_window):
    window = make_window()
    window._on_context(_Event(window._panel.day_cells[0][0]))
    assert window.vm.calls["long_press"] == [date(2024, 2, 25)]
    assert window.vm.selected_dates == frozenset()


def test_navigation_and_collapse(make_window):
    window = make_window()
    window._navigate(1)
    assert window._panel.header.cget("text") == "April 2024"
    window._go_today()
    assert window._panel.header.cget("text") == "March 2024"
    window._toggle_expanded()
    assert len(window._widget_dates) == 7
    assert window._toggle_label.cget("text") == "▼"


def test_escape_clears_selection_first(make_window):
    window = make_window()
    _click(window, 3, 3)
    window._on_escape(None)
    assert window.vm.selected_dates == frozenset()


def test_custom_renderer_images_are_kept(make_window):
    window = make_window(day_renderer=lambda day, theme: Image.new("RGB", (10, 10), "#FF0000"))
    assert len(window._photos) == 42


def test_default_cells_use_the_theme_renderer(make_window):
    window = make_window()
    assert len(window._photos) == 42
    assert window._photos[0].width() == window.theme.sizing.day_size


@pytest.mark.parametrize("theme_name", ["minimal", "colorful"])
def test_window_draws_every_theme(make_window, theme_name):
    from calendar_theme import get_theme

    window = make_window(theme=get_theme(theme_name))
    assert len(window._photos) == 42
    assert window._photos[0].width() == get_theme(theme_name).sizing.day_size


def test_week_number_key_toggles_column(make_window):
    window = make_window()
    assert not window.vm.configuration.show_week_numbers
    window._toggle_week_numbers()
    assert window.vm.configuration.show_week_numbers
    assert window._panel.week_nums[0].cget("text") == "9"
    assert window._panel.wk_header.winfo_manager() == "grid"
