from __future__ import annotations

import pytest

from sheetcal.calendar import Calendar, DayOfWeek, calculate


@pytest.fixture
def calendar_2024() -> Calendar:
    """2024 with weeks starting on Monday; January 1st is a Monday."""
    return calculate(DayOfWeek.MONDAY, 2024)
