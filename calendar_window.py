"""Month picker window (tkinter) driven by a CalendarViewModel."""

from datetime import date
from tkinter import font as tkfont
import tkinter as tk

import structlog
from PIL import Image, ImageTk

from calendar_logic import day_of_year, iso_week_numbers, weekday_headers
from calendar_models import CalendarDay
from calendar_render import render_day_cell
from calendar_view_model import CalendarViewModel

logger = structlog.get_logger(__name__)

LONG_PRESS_MS = 500
MAX_ROWS = 6


class _MonthPanel:
    """Pre-allocated widget pool for one month (header + 6 weeks max)."""

    __slots__ = ("frame", "header", "wk_header", "day_headers",
                 "week_nums", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict, colors,
                 on_press, on_release, on_context) -> None:
        self.frame = tk.Frame(parent, bg=colors.background)

        self.header = tk.Label(
            self.frame, font=fonts["header"], bg=colors.surface, fg=colors.on_background,
        )
        self.header.grid(row=0, column=0, columnspan=8, sticky="we", pady=(0, 2))

        self.wk_header = tk.Label(
            self.frame, text="Wk", font=fonts["bold"], bg=colors.background,
            fg=colors.secondary, width=3,
        )

        self.day_headers: list[tk.Label] = []
        for col in range(7):
            lbl = tk.Label(
                self.frame, font=fonts["bold"], bg=colors.background,
                fg=colors.secondary, width=3,
            )
            lbl.grid(row=1, column=col + 1)
            self.day_headers.append(lbl)

        cell_size = fonts["cell"]
        self.week_nums: list[tk.Label] = []
        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(MAX_ROWS):
            grid_row = r + 2
            wn = tk.Label(
                self.frame, font=fonts["wn"], bg=colors.background,
                fg=colors.secondary, width=3,
            )
            self.week_nums.append(wn)

            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    self.frame, width=cell_size, height=cell_size,
                    bg=colors.background, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=grid_row, column=c + 1)
                # Bound once; handlers look the date up in _widget_dates
                cell.bind("<ButtonPress-1>", on_press)
                cell.bind("<ButtonRelease-1>", on_release)
                cell.bind("<Button-3>", on_context)
                row_cells.append(cell)
            self.day_cells.append(row_cells)

    def show_week_numbers(self, visible: bool) -> None:
        if visible:
            self.wk_header.grid(row=1, column=0)
            for r, wn in enumerate(self.week_nums):
                wn.grid(row=r + 2, column=0)
        else:
            self.wk_header.grid_forget()
            for wn in self.week_nums:
                wn.grid_forget()


class CalendarWindow:
    """Single-month picker with paging, collapse toggle and selection footer."""

    def __init__(self, view_model: CalendarViewModel, root: tk.Tk | None = None) -> None:
        self.vm = view_model
        self.theme = view_model.theme
        self.root = root or tk.Tk()
        self.root.title(self._title())
        self.root.resizable(False, False)
        self.root.configure(bg=self.theme.colors.background)
        self.logger = logger.bind(component="calendar_window")

        self._setup_fonts()

        # Widget-to-date mapping (filled during _rebuild)
        self._widget_dates: dict[int, date] = {}
        # PhotoImages must stay referenced while shown
        self._photos: list[ImageTk.PhotoImage] = []
        self._press_after_id: str | None = None
        self._pressed_date: date | None = None
        self._long_pressed = False

        self._build_shell()
        self._rebuild()

        self.root.bind("<Escape>", self._on_escape)
        self.root.bind("<Key-w>", self._toggle_week_numbers)

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        typo = self.theme.typography
        families = tkfont.families(self.root)
        base = typo.family if typo.family in families else "TkDefaultFont"
        self.font_bold = tkfont.Font(family=base, size=typo.day_size, weight="bold")
        self.font_header = tkfont.Font(family=base, size=typo.header_size, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=typo.header_size, weight="bold")
        self.font_wn = tkfont.Font(family=base, size=typo.event_size)
        self.font_footer = tkfont.Font(family=base, size=typo.weekday_size)

    def _title(self) -> str:
        return f"Calendar  Day: {day_of_year(self.vm.today)}"

    # ------------------------------------------------------------------
    # Build shell (once): nav bar + month panel + collapse toggle + footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        colors = self.theme.colors
        self._outer = tk.Frame(self.root, bg=colors.background)
        self._outer.pack(padx=6, pady=4)

        # Navigation row:  ◀  Today  ▶
        nav = tk.Frame(self._outer, bg=colors.background)
        nav.pack(fill="x", pady=(0, 2))

        btn_prev = tk.Label(
            nav, text="◀", font=self.font_nav, bg=colors.background,
            fg=colors.primary, cursor="hand2",
        )
        btn_prev.pack(side="left", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self._navigate(-1))

        btn_next = tk.Label(
            nav, text="▶", font=self.font_nav, bg=colors.background,
            fg=colors.primary, cursor="hand2",
        )
        btn_next.pack(side="right", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self._navigate(1))

        btn_today = tk.Label(
            nav, text="Today", font=self.font_bold, bg=colors.background,
            fg=colors.primary, cursor="hand2",
        )
        btn_today.pack(side="top", padx=6)
        btn_today.bind("<Button-1>", lambda _e: self._go_today())

        fonts = {
            "header": self.font_header, "bold": self.font_bold,
            "wn": self.font_wn, "cell": self.theme.sizing.day_size,
        }
        self._panel = _MonthPanel(
            self._outer, fonts, colors,
            self._on_press, self._on_release, self._on_context,
        )
        self._panel.frame.pack()

        self._toggle_label = tk.Label(
            self._outer, font=self.font_bold, bg=colors.background,
            fg=colors.primary, cursor="hand2",
        )
        self._toggle_label.pack(pady=(2, 0))
        self._toggle_label.bind("<Button-1>", lambda _e: self._toggle_expanded())

        self._footer_label = tk.Label(
            self._outer, font=self.font_footer, bg=colors.background, fg=colors.secondary,
        )
        self._footer_label.pack(pady=(4, 0))

    # ------------------------------------------------------------------
    # Redraw from the view model (no widget creation)
    # ------------------------------------------------------------------
    def _rebuild(self) -> None:
        self._widget_dates.clear()
        self._photos.clear()
        panel = self._panel
        month = self.vm.current_month
        config = self.vm.configuration

        panel.header.configure(text=month.display_name)
        for lbl, name in zip(panel.day_headers, weekday_headers(config.first_day_of_week)):
            lbl.configure(text=name)
        panel.show_week_numbers(config.show_week_numbers)

        weeks = self.vm.visible_weeks
        week_numbers = iso_week_numbers([[d.date for d in week] for week in weeks])
        for r in range(MAX_ROWS):
            visible = r < len(weeks)
            for c, cell in enumerate(panel.day_cells[r]):
                if visible:
                    cell.grid()
                    self._draw_day(cell, weeks[r][c])
                else:
                    cell.grid_remove()
            panel.week_nums[r].configure(text=str(week_numbers[r]) if visible else "")

        self._toggle_label.configure(text="▲" if self.vm.expanded else "▼")
        self._footer_label.configure(text=self._footer_text())

    def _draw_day(self, cell: tk.Canvas, day: CalendarDay) -> None:
        self._widget_dates[id(cell)] = day.date
        cell.delete("all")
        size = self.theme.sizing.day_size

        # Same tiles as the PNG export; an injected renderer takes precedence
        rendered = self.vm.render_day(day)
        if not isinstance(rendered, Image.Image):
            rendered = render_day_cell(day, self.theme)
        if rendered.size != (size, size):
            rendered = rendered.resize((size, size))
        photo = ImageTk.PhotoImage(rendered)
        self._photos.append(photo)
        cell.create_image(0, 0, image=photo, anchor="nw")
        cell.configure(cursor="hand2")

    # ------------------------------------------------------------------
    # Tap / long press
    # ------------------------------------------------------------------
    def _on_press(self, event: tk.Event) -> None:
        d = self._widget_dates.get(id(event.widget))
        if d is None:
            return
        self._pressed_date = d
        self._long_pressed = False
        self._press_after_id = self.root.after(LONG_PRESS_MS, self._fire_long_press)

    def _fire_long_press(self) -> None:
        self._press_after_id = None
        if self._pressed_date is not None:
            self._long_pressed = True
            self.vm.long_press(self._pressed_date)

    def _on_release(self, event: tk.Event) -> None:
        if self._press_after_id is not None:
            self.root.after_cancel(self._press_after_id)
            self._press_after_id = None
        d = self._pressed_date
        self._pressed_date = None
        if d is None or self._long_pressed:
            return
        self.vm.tap(d)
        self._rebuild()

    def _on_context(self, event: tk.Event) -> None:
        d = self._widget_dates.get(id(event.widget))
        if d is not None:
            self.vm.long_press(d)

    # ------------------------------------------------------------------
    # Footer text
    # ------------------------------------------------------------------
    def _footer_text(self) -> str:
        today_str = f"Today: {self.vm.today.strftime('%d.%m.%Y')}"
        bounds = self.vm.selected_range
        if bounds is None:
            return today_str
        sel_lo, sel_hi = bounds
        if sel_lo == sel_hi:
            return f"{sel_lo.strftime('%d.%m.%Y')}     {today_str}"

        count = len(self.vm.selected_dates)
        total_days = (sel_hi - sel_lo).days + 1
        if count != total_days:
            return f"{count} days selected     {today_str}"

        full_weeks, rem_days = divmod(total_days, 7)
        parts: list[str] = []
        if full_weeks:
            parts.append(f"{full_weeks} week{'s' if full_weeks != 1 else ''}")
        if rem_days:
            parts.append(f"{rem_days} day{'s' if rem_days != 1 else ''}")

        range_str = f"{sel_lo.strftime('%d.%m')} → {sel_hi.strftime('%d.%m')}"
        return f"{range_str}:  {total_days} days  ({', '.join(parts)})     {today_str}"

    # ------------------------------------------------------------------
    # ESC clears selection first, then closes
    # ------------------------------------------------------------------
    def _on_escape(self, _event: tk.Event) -> None:
        if self.vm.clear_selection():
            self._rebuild()
        else:
            self.root.destroy()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _navigate(self, direction: int) -> None:
        changed = self.vm.previous_month() if direction < 0 else self.vm.next_month()
        if changed:
            self._rebuild()

    def _go_today(self) -> None:
        self.vm.go_to_today()
        self._rebuild()

    def _toggle_expanded(self) -> None:
        self.vm.toggle_expanded()
        self._rebuild()

    def _toggle_week_numbers(self, _event: tk.Event | None = None) -> None:
        config = self.vm.configuration
        self.vm.update_configuration(config.replace(show_week_numbers=not config.show_week_numbers))
        self._rebuild()

    def show(self) -> None:
        self.root.deiconify()
        self.root.lift()
        self.root.focus_force()
