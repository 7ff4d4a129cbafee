"""Entry point: open the picker window, or export the current month as PNG."""

import argparse
import logging
import os

import structlog

from calendar_render import render_month_image
from calendar_theme import get_theme
from calendar_view_model import CalendarViewModel
from settings import load_settings

logger = structlog.get_logger(__name__)


def configure_logging(level_name: str | None = None) -> int:
    """Apply ``level_name`` (default: $LOG_LEVEL) to stdlib logging and structlog."""
    name = (level_name or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))
    return level


def build_view_model(settings_path: str | None = None) -> CalendarViewModel:
    settings = load_settings(settings_path)

    def on_selection_changed(selected: frozenset) -> None:
        logger.info("Selection changed", dates=sorted(d.isoformat() for d in selected))

    vm = CalendarViewModel(
        configuration=settings.to_configuration(),
        theme=get_theme(settings.theme),
        expanded=settings.expanded,
        on_selection_changed=on_selection_changed,
    )

    def on_long_press(d) -> None:
        logger.info(
            "Date long-pressed",
            date=d.isoformat(),
            events=[f"{e.type.label}: {e.title}" for e in vm.events_for(d)],
        )

    vm.on_date_long_press = on_long_press
    return vm


def main(argv: list[str] | None = None) -> None:
    configure_logging()

    parser = argparse.ArgumentParser(description="Themeable month calendar picker")
    parser.add_argument("--settings", help="path to a JSON settings file")
    parser.add_argument("--png", metavar="PATH", help="render the current month to PATH and exit")
    args = parser.parse_args(argv)

    vm = build_view_model(args.settings)

    if args.png:
        image = render_month_image(
            vm.current_month,
            vm.theme,
            first_day_of_week=vm.configuration.first_day_of_week,
            show_week_numbers=vm.configuration.show_week_numbers,
        )
        image.save(args.png)
        logger.info("Month exported", path=args.png, month=vm.current_month.display_name)
        return

    # tkinter is only needed for the interactive window
    from calendar_window import CalendarWindow

    window = CalendarWindow(vm)
    window.show()
    window.root.mainloop()


if __name__ == "__main__":
    main()
