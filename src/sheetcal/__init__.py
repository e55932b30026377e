"""Compute yearly week calendars and render them into spreadsheets."""

from __future__ import annotations

from .calendar import Calendar, DayOfWeek, Month, Week, calculate
from .errors import (
    EndIndexUndefinedError,
    RangesNotAdjacentError,
    SheetCalError,
    SinkCallFailedError,
)
from .grid import GridRange, Range
from .renderer import (
    CalendarLayout,
    build_structural_requests,
    build_value_updates,
    render_calendar,
)

__all__ = [
    "Calendar",
    "CalendarLayout",
    "DayOfWeek",
    "EndIndexUndefinedError",
    "GridRange",
    "Month",
    "Range",
    "RangesNotAdjacentError",
    "SheetCalError",
    "SinkCallFailedError",
    "Week",
    "build_structural_requests",
    "build_value_updates",
    "calculate",
    "render_calendar",
]
