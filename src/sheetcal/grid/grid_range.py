from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .a1 import column_index_to_label, format_r1c1_cell, parse_r1c1_cell
from .range import Range


class GridRange(BaseModel):
    """Rectangle of rows x columns, optionally scoped to one sheet."""

    model_config = ConfigDict(frozen=True)

    rows: Range = Field(default_factory=Range)
    columns: Range = Field(default_factory=Range)
    sheet_id: int | None = Field(
        default=None, description="Target sheet; None means the sink's default sheet."
    )

    @classmethod
    def unbounded(cls, sheet_id: int | None = None) -> GridRange:
        return cls(rows=Range.unbounded(), columns=Range.unbounded(), sheet_id=sheet_id)

    @classmethod
    def from_r1c1(cls, value: str, *, sheet_id: int | None = None) -> GridRange:
        """Parse ``R1C1:R2C2`` notation (either token may omit R or C)."""
        start_ref, sep, end_ref = value.strip().partition(":")
        if not sep:
            end_ref = start_ref
        start_row, start_column = parse_r1c1_cell(start_ref)
        end_row, end_column = parse_r1c1_cell(end_ref)
        return cls(
            rows=Range(start_index=start_row, end_index=end_row),
            columns=Range(start_index=start_column, end_index=end_column),
            sheet_id=sheet_id,
        )

    def with_sheet_id(self, sheet_id: int | None) -> GridRange:
        return self.model_copy(update={"sheet_id": sheet_id})

    def to_wire(self) -> dict[str, Any]:
        """Return the Sheets API ``GridRange`` object.

        Internal indices are inclusive; the wire format uses exclusive end
        indices, so every defined end is shifted by one. Unset bounds are
        left out of the payload.
        """
        payload: dict[str, Any] = {}
        if self.sheet_id is not None:
            payload["sheetId"] = self.sheet_id
        if self.rows.start_index is not None:
            payload["startRowIndex"] = self.rows.start_index
        if self.rows.end_index is not None:
            payload["endRowIndex"] = self.rows.end_index + 1
        if self.columns.start_index is not None:
            payload["startColumnIndex"] = self.columns.start_index
        if self.columns.end_index is not None:
            payload["endColumnIndex"] = self.columns.end_index + 1
        return payload

    def to_r1c1(self) -> str:
        start = format_r1c1_cell(self.rows.start_index, self.columns.start_index)
        end = format_r1c1_cell(self.rows.end_index, self.columns.end_index)
        return f"{start}:{end}"

    def to_a1(self) -> str:
        """Return A1 notation; both dimensions must be bounded."""
        start_row = self.rows.get_start_index_value()
        end_row = self.rows.get_end_index_value()
        start_column = self.columns.get_start_index_value()
        end_column = self.columns.get_end_index_value()
        return (
            f"{column_index_to_label(start_column + 1)}{start_row + 1}:"
            f"{column_index_to_label(end_column + 1)}{end_row + 1}"
        )


__all__ = ["GridRange"]
