from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .calendar import MAX_YEAR, MIN_YEAR, DayOfWeek

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CalendarConfig(BaseModel):
    """Settings for one calendar rendering run."""

    year: int = Field(
        ..., ge=MIN_YEAR, le=MAX_YEAR, description="Calendar year to render."
    )
    first_day_of_week: DayOfWeek = Field(
        default=DayOfWeek.MONDAY, description="Weekday each week row starts on."
    )
    sheet_id: int = Field(default=0, ge=0, description="Target sheet id.")
    output: Path = Field(..., description="Workbook (.xlsx) to render into.")
    log_level: str = Field(default="INFO", description="Logging level.")
    log_file: Path | None = Field(default=None, description="Optional log file path.")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}: {value}"
            )
        return normalized
