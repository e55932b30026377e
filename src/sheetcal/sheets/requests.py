"""Structural (formatting/layout) requests and their Sheets API payloads."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..grid.grid_range import GridRange
from .types import BorderStyle, Dimension, MergeType, StructuralRequestKind


class Color(BaseModel):
    """RGB colour with channels in the 0..1 range."""

    model_config = ConfigDict(frozen=True)

    red: float = Field(default=0.0, ge=0.0, le=1.0)
    green: float = Field(default=0.0, ge=0.0, le=1.0)
    blue: float = Field(default=0.0, ge=0.0, le=1.0)

    @classmethod
    def grey(cls, intensity: float) -> Color:
        return cls(red=intensity, green=intensity, blue=intensity)

    def to_wire(self) -> dict[str, float]:
        return {"red": self.red, "green": self.green, "blue": self.blue}

    def to_argb(self) -> str:
        """Return the colour as AARRGGBB hex, the form openpyxl stores."""
        channels = (self.red, self.green, self.blue)
        return "FF" + "".join(f"{round(channel * 255):02X}" for channel in channels)


class Border(BaseModel):
    model_config = ConfigDict(frozen=True)

    style: BorderStyle = "SOLID"
    color: Color | None = None

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"style": self.style}
        if self.color is not None:
            payload["color"] = self.color.to_wire()
        return payload


class Borders(BaseModel):
    """Outer edges of a range; unset sides are left untouched."""

    model_config = ConfigDict(frozen=True)

    top: Border | None = None
    bottom: Border | None = None
    left: Border | None = None
    right: Border | None = None

    @classmethod
    def none(cls) -> Borders:
        return cls()

    @classmethod
    def outer(cls, border: Border) -> Borders:
        return cls(top=border, bottom=border, left=border, right=border)

    def to_wire(self) -> dict[str, Any]:
        sides = {
            "top": self.top,
            "bottom": self.bottom,
            "left": self.left,
            "right": self.right,
        }
        return {name: side.to_wire() for name, side in sides.items() if side is not None}


class _RequestBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_wire(self, sheet_id: int) -> list[dict[str, Any]]:  # pragma: no cover
        raise NotImplementedError


def _scoped(grid_range: GridRange, sheet_id: int) -> dict[str, Any]:
    """Return the wire range, defaulting to the batch's sheet."""
    if grid_range.sheet_id is None:
        grid_range = grid_range.with_sheet_id(sheet_id)
    return grid_range.to_wire()


class ClearFormattingRequest(_RequestBase):
    kind: Literal["clear_formatting"] = "clear_formatting"
    range: GridRange = Field(default_factory=GridRange)

    def to_wire(self, sheet_id: int) -> list[dict[str, Any]]:
        return [
            {
                "updateCells": {
                    "range": _scoped(self.range, sheet_id),
                    "fields": "userEnteredFormat",
                }
            }
        ]


class SetSheetPropertiesRequest(_RequestBase):
    kind: Literal["set_sheet_properties"] = "set_sheet_properties"
    frozen_row_count: int | None = Field(default=None, ge=0)
    frozen_column_count: int | None = Field(default=None, ge=0)

    def to_wire(self, sheet_id: int) -> list[dict[str, Any]]:
        grid_properties: dict[str, int] = {}
        fields: list[str] = []
        if self.frozen_row_count is not None:
            grid_properties["frozenRowCount"] = self.frozen_row_count
            fields.append("gridProperties.frozenRowCount")
        if self.frozen_column_count is not None:
            grid_properties["frozenColumnCount"] = self.frozen_column_count
            fields.append("gridProperties.frozenColumnCount")
        if not fields:
            return []
        return [
            {
                "updateSheetProperties": {
                    "properties": {"sheetId": sheet_id, "gridProperties": grid_properties},
                    "fields": ",".join(fields),
                }
            }
        ]


class SetDimensionLengthRequest(_RequestBase):
    """Force a sheet to exactly ``length`` rows or columns."""

    kind: Literal["set_dimension_length"] = "set_dimension_length"
    dimension: Dimension
    length: int = Field(..., ge=1)

    def to_wire(self, sheet_id: int) -> list[dict[str, Any]]:
        # Appending first guarantees the delete range is never empty.
        return [
            {
                "appendDimension": {
                    "sheetId": sheet_id,
                    "dimension": self.dimension,
                    "length": self.length,
                }
            },
            {
                "deleteDimension": {
                    "range": {
                        "sheetId": sheet_id,
                        "dimension": self.dimension,
                        "startIndex": self.length,
                    }
                }
            },
        ]


class UnmergeCellsRequest(_RequestBase):
    kind: Literal["unmerge_cells"] = "unmerge_cells"
    range: GridRange

    def to_wire(self, sheet_id: int) -> list[dict[str, Any]]:
        return [{"unmergeCells": {"range": _scoped(self.range, sheet_id)}}]


class MergeCellsRequest(_RequestBase):
    kind: Literal["merge_cells"] = "merge_cells"
    range: GridRange
    merge_type: MergeType = "MERGE_ALL"

    def to_wire(self, sheet_id: int) -> list[dict[str, Any]]:
        return [
            {
                "mergeCells": {
                    "range": _scoped(self.range, sheet_id),
                    "mergeType": self.merge_type,
                }
            }
        ]


class UpdateBordersRequest(_RequestBase):
    kind: Literal["update_borders"] = "update_borders"
    range: GridRange
    borders: Borders

    def to_wire(self, sheet_id: int) -> list[dict[str, Any]]:
        payload: dict[str, Any] = {"range": _scoped(self.range, sheet_id)}
        payload.update(self.borders.to_wire())
        return [{"updateBorders": payload}]


class SetBackgroundColorRequest(_RequestBase):
    kind: Literal["set_background_color"] = "set_background_color"
    range: GridRange
    color: Color

    def to_wire(self, sheet_id: int) -> list[dict[str, Any]]:
        return [
            {
                "repeatCell": {
                    "range": _scoped(self.range, sheet_id),
                    "cell": {"userEnteredFormat": {"backgroundColor": self.color.to_wire()}},
                    "fields": "userEnteredFormat.backgroundColor",
                }
            }
        ]


StructuralRequest = Annotated[
    ClearFormattingRequest
    | SetSheetPropertiesRequest
    | SetDimensionLengthRequest
    | UnmergeCellsRequest
    | MergeCellsRequest
    | UpdateBordersRequest
    | SetBackgroundColorRequest,
    Field(discriminator="kind"),
]


def to_wire_requests(
    sheet_id: int, requests: Sequence[StructuralRequest]
) -> list[dict[str, Any]]:
    """Serialize structural requests into one ``batchUpdate`` request list."""
    payload: list[dict[str, Any]] = []
    for request in requests:
        payload.extend(request.to_wire(sheet_id))
    return payload


def summarize_requests(
    requests: Sequence[StructuralRequest],
) -> dict[StructuralRequestKind, int]:
    """Count requests per kind, in first-seen order."""
    return dict(Counter(request.kind for request in requests))


__all__ = [
    "Border",
    "Borders",
    "ClearFormattingRequest",
    "Color",
    "MergeCellsRequest",
    "SetBackgroundColorRequest",
    "SetDimensionLengthRequest",
    "SetSheetPropertiesRequest",
    "StructuralRequest",
    "UnmergeCellsRequest",
    "UpdateBordersRequest",
    "summarize_requests",
    "to_wire_requests",
]
