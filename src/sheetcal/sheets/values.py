from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..grid.grid_range import GridRange


class Formula(BaseModel):
    """Spreadsheet formula text, always starting with ``=``."""

    model_config = ConfigDict(frozen=True)

    expression: str

    @field_validator("expression")
    @classmethod
    def _validate_expression(cls, value: str) -> str:
        if not value.startswith("="):
            raise ValueError("Formula expression must start with '='.")
        return value

    def __str__(self) -> str:
        return self.expression


CellValue = date | str | Formula


class ValueUpdate(BaseModel):
    """Row-major block of values written into ``range``.

    The block's shape must match the range's extent; the sink rejects
    mismatches.
    """

    model_config = ConfigDict(frozen=True)

    range: GridRange
    values: list[list[CellValue]] = Field(default_factory=list)

    def shape(self) -> tuple[int, int]:
        width = max((len(row) for row in self.values), default=0)
        return len(self.values), width


def to_wire_value(value: CellValue) -> str:
    """Serialize one cell for ``USER_ENTERED`` input."""
    if isinstance(value, Formula):
        return value.expression
    if isinstance(value, date):
        return value.isoformat()
    return value


def to_wire_value_ranges(
    sheet_id: int, updates: Sequence[ValueUpdate]
) -> list[dict[str, Any]]:
    """Serialize value blocks as ``DataFilterValueRange`` payloads."""
    payload: list[dict[str, Any]] = []
    for update in updates:
        grid_range = update.range
        if grid_range.sheet_id is None:
            grid_range = grid_range.with_sheet_id(sheet_id)
        payload.append(
            {
                "dataFilter": {"gridRange": grid_range.to_wire()},
                "majorDimension": "ROWS",
                "values": [[to_wire_value(cell) for cell in row] for row in update.values],
            }
        )
    return payload


__all__ = [
    "CellValue",
    "Formula",
    "ValueUpdate",
    "to_wire_value",
    "to_wire_value_ranges",
]
