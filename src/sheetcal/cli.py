from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pydantic import ValidationError

from .calendar import DayOfWeek, calculate
from .config import CalendarConfig
from .errors import SheetCalError
from .renderer import render_calendar
from .sheets.openpyxl_sink import open_workbook_sink

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run the calendar rendering entrypoint.

    Args:
        argv: Optional CLI arguments for testing.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    try:
        config = _parse_args(argv)
    except ValidationError as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.error("Invalid configuration: %s", exc)
        return 1
    _configure_logging(config)
    try:
        run(config)
    except (SheetCalError, OSError) as exc:
        logger.error("Calendar rendering failed: %s", exc)
        return 1
    return 0


def run(config: CalendarConfig) -> None:
    """Compute the configured calendar and render it into the workbook."""
    calendar = calculate(config.first_day_of_week, config.year)
    logger.info(
        "Rendering %s (weeks start on %s) into %s.",
        config.year,
        config.first_day_of_week.display_name,
        config.output,
    )
    with open_workbook_sink(config.output) as sink:
        render_calendar(sink, calendar, config.sheet_id)


def _parse_args(argv: list[str] | None) -> CalendarConfig:
    """Parse CLI arguments into a calendar config.

    Args:
        argv: Optional CLI argument list.

    Returns:
        Parsed calendar configuration.
    """
    parser = argparse.ArgumentParser(description="Render a yearly week calendar into a workbook.")
    parser.add_argument("--year", type=int, required=True, help="Calendar year.")
    parser.add_argument(
        "--first-day-of-week",
        type=DayOfWeek.parse,
        default=DayOfWeek.MONDAY,
        help="Weekday each week starts on (name or 0=Sunday..6=Saturday).",
    )
    parser.add_argument("--sheet-id", type=int, default=0, help="Target sheet index.")
    parser.add_argument("--output", type=Path, required=True, help="Output .xlsx path.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )
    parser.add_argument("--log-file", type=Path, help="Optional log file path.")
    args = parser.parse_args(argv)
    return CalendarConfig(
        year=args.year,
        first_day_of_week=args.first_day_of_week,
        sheet_id=args.sheet_id,
        output=args.output,
        log_level=args.log_level,
        log_file=args.log_file,
    )


def _configure_logging(config: CalendarConfig) -> None:
    """Configure logging for the process.

    Args:
        config: Calendar configuration.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file is not None:
        handlers.append(logging.FileHandler(config.log_file))
    logging.basicConfig(
        level=config.log_level.upper(),
        handlers=handlers,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
