"""Partition a year into months and weeks for a configurable week start.

Each month owns its own boundary weeks: a week that straddles two months
appears once in each, with ``days_active`` marking which of its seven days
belong to the owning month.
"""

from __future__ import annotations

import calendar as _cal
from datetime import date, timedelta
from enum import IntEnum
import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
MONTHS_PER_YEAR = 12
# Boundary weeks of years 1 and 9999 spill outside the range of datetime.date.
MIN_YEAR = date.min.year + 1
MAX_YEAR = date.max.year - 1


class DayOfWeek(IntEnum):
    """Day of week numbered from Sunday."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def from_date(cls, value: date) -> DayOfWeek:
        # date.weekday() counts from Monday.
        return cls((value.weekday() + 1) % DAYS_PER_WEEK)

    @classmethod
    def parse(cls, value: str) -> DayOfWeek:
        """Parse a day name (``monday``, ``Mon``) or its number (``1``)."""
        text = value.strip()
        if text.isdigit():
            return cls(int(text))
        lowered = text.lower()
        for member in cls:
            if member.name.lower() == lowered or member.name.lower()[:3] == lowered:
                return member
        raise ValueError(f"Invalid day of week: {value}")

    def add_days(self, days: int) -> DayOfWeek:
        return DayOfWeek((int(self) + days) % DAYS_PER_WEEK)

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


def day_of_week_diff(x: DayOfWeek, y: DayOfWeek) -> int:
    """Return how many days ``x`` comes after ``y`` within one week."""
    return (int(x) - int(y) + DAYS_PER_WEEK) % DAYS_PER_WEEK


class Week(BaseModel):
    """Seven consecutive days starting on the configured first day of week."""

    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date
    days_active: tuple[bool, ...] = Field(
        ..., description="Whether each day (by offset from start_date) is in the owning month."
    )

    @field_validator("days_active")
    @classmethod
    def _validate_days_active(cls, value: tuple[bool, ...]) -> tuple[bool, ...]:
        if len(value) != DAYS_PER_WEEK:
            raise ValueError(f"days_active must have {DAYS_PER_WEEK} entries.")
        return value

    def active_dates(self) -> list[date]:
        return [
            self.start_date + timedelta(days=offset)
            for offset, active in enumerate(self.days_active)
            if active
        ]


class Month(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, le=MONTHS_PER_YEAR)
    weeks: tuple[Week, ...]


class Calendar(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    months: tuple[Month, ...]


def _calculate_month(first_day_of_week: DayOfWeek, year: int, month: int) -> Month:
    day_count = _cal.monthrange(year, month)[1]
    start_date = date(year, month, 1)
    month_first_day_of_week = day_of_week_diff(
        DayOfWeek.from_date(start_date), first_day_of_week
    )
    week_numbers = sorted(
        {(day - 1 + month_first_day_of_week) // DAYS_PER_WEEK for day in range(1, day_count + 1)}
    )
    weeks: list[Week] = []
    for week_number in week_numbers:
        start_day = week_number * DAYS_PER_WEEK - month_first_day_of_week
        weeks.append(
            Week(
                start_date=start_date + timedelta(days=start_day),
                end_date=start_date + timedelta(days=start_day + DAYS_PER_WEEK - 1),
                days_active=tuple(
                    0 <= start_day + offset <= day_count - 1
                    for offset in range(DAYS_PER_WEEK)
                ),
            )
        )
    return Month(month=month, weeks=tuple(weeks))


def calculate(first_day_of_week: DayOfWeek, year: int) -> Calendar:
    """Compute the twelve months of ``year`` split into weeks.

    Raises:
        ValueError: If ``year`` is outside ``MIN_YEAR``..``MAX_YEAR``.
    """
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}: {year}")
    first_day_of_week = DayOfWeek(first_day_of_week)
    months = tuple(
        _calculate_month(first_day_of_week, year, month)
        for month in range(1, MONTHS_PER_YEAR + 1)
    )
    logger.debug(
        "Calculated calendar for %s starting on %s: %s weeks.",
        year,
        first_day_of_week.display_name,
        sum(len(month.weeks) for month in months),
    )
    return Calendar(year=year, months=months)


def get_months(calendar: Calendar) -> list[Month]:
    return list(calendar.months)


def get_weeks(calendar: Calendar) -> list[Week]:
    """Return all weeks in month order; this is the row order of the sheet."""
    return [week for month in calendar.months for week in month.weeks]


def get_week_number_ranges(calendar: Calendar) -> list[tuple[int, int]]:
    """Return ``(first_week_index, week_count)`` for each month.

    Indices refer to positions in ``get_weeks(calendar)``.
    """
    ranges: list[tuple[int, int]] = []
    next_start = 0
    for month in calendar.months:
        ranges.append((next_start, len(month.weeks)))
        next_start += len(month.weeks)
    return ranges


def get_first_day_of_week(calendar: Calendar) -> DayOfWeek:
    """Return the weekday the layout actually starts on.

    Taken from the first week whose first slot belongs to its month, so the
    header labels always agree with the dates written below them.
    """
    for week in get_weeks(calendar):
        if week.days_active[0]:
            return DayOfWeek.from_date(week.start_date)
    raise ValueError("Calendar has no week starting inside its month.")


__all__ = [
    "DAYS_PER_WEEK",
    "MAX_YEAR",
    "MIN_YEAR",
    "Calendar",
    "DayOfWeek",
    "Month",
    "Week",
    "calculate",
    "day_of_week_diff",
    "get_first_day_of_week",
    "get_months",
    "get_week_number_ranges",
    "get_weeks",
]
