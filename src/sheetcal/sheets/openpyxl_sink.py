"""Sink that applies request batches to a local openpyxl workbook.

Sheet ids are worksheet positions in ``workbook.worksheets``. Open-ended
ranges are clamped to the sheet's extent: the length last set through
``SetDimensionLengthRequest``, or openpyxl's ``max_row``/``max_column``.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from copy import copy
from datetime import date
import logging
from pathlib import Path
from typing import Any

from openpyxl.cell.cell import MergedCell
from openpyxl.styles import Alignment, Border as OpenpyxlBorder, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.utils.cell import column_index_from_string, coordinate_from_string

from ..errors import SheetCalError, SinkCallFailedError
from ..grid.grid_range import GridRange
from ..io import ensure_output_dir, openpyxl_workbook
from .requests import (
    Border,
    Borders,
    ClearFormattingRequest,
    MergeCellsRequest,
    SetBackgroundColorRequest,
    SetDimensionLengthRequest,
    SetSheetPropertiesRequest,
    StructuralRequest,
    UnmergeCellsRequest,
    UpdateBordersRequest,
    summarize_requests,
)
from .types import BorderStyle, Dimension
from .values import Formula, ValueUpdate

logger = logging.getLogger(__name__)

_BORDER_STYLES: dict[BorderStyle, str | None] = {
    "DOTTED": "dotted",
    "DASHED": "dashed",
    "SOLID": "thin",
    "SOLID_MEDIUM": "medium",
    "SOLID_THICK": "thick",
    "DOUBLE": "double",
    "NONE": None,
}

# (min_row, min_col, max_row, max_col), 1-based and inclusive.
_Bounds = tuple[int, int, int, int]


class OpenpyxlSink:
    """Apply structural requests and value blocks to an openpyxl workbook."""

    def __init__(self, workbook: Any) -> None:
        self._workbook = workbook
        self._dimension_lengths: dict[tuple[int, Dimension], int] = {}

    @property
    def workbook(self) -> Any:
        return self._workbook

    def apply_structural_requests(
        self, sheet_id: int, requests: Sequence[StructuralRequest]
    ) -> None:
        sheet = self._sheet(sheet_id)
        logger.info(
            "Applying %s structural requests to sheet %s: %s",
            len(requests),
            sheet_id,
            summarize_requests(requests),
        )
        for index, request in enumerate(requests):
            try:
                self._apply_structural_request(sheet_id, sheet, request)
            except SheetCalError:
                raise
            except Exception as exc:
                raise SinkCallFailedError(
                    f"structural request [{index}] {request.kind}", str(exc)
                ) from exc

    def apply_value_updates(
        self, sheet_id: int, updates: Sequence[ValueUpdate]
    ) -> None:
        sheet = self._sheet(sheet_id)
        logger.info("Writing %s value ranges to sheet %s.", len(updates), sheet_id)
        for index, update in enumerate(updates):
            try:
                _write_values(sheet, update)
            except SheetCalError:
                raise
            except Exception as exc:
                raise SinkCallFailedError(f"value update [{index}]", str(exc)) from exc

    def _sheet(self, sheet_id: int) -> Any:
        worksheets = self._workbook.worksheets
        if not 0 <= sheet_id < len(worksheets):
            raise SinkCallFailedError(
                "resolve sheet",
                f"sheet id {sheet_id} is out of range (workbook has {len(worksheets)}).",
            )
        return worksheets[sheet_id]

    def _apply_structural_request(
        self, sheet_id: int, sheet: Any, request: StructuralRequest
    ) -> None:
        if isinstance(request, ClearFormattingRequest):
            _clear_formatting(sheet, self._resolve_bounds(sheet_id, sheet, request.range))
        elif isinstance(request, SetSheetPropertiesRequest):
            _set_frozen_panes(sheet, request)
        elif isinstance(request, SetDimensionLengthRequest):
            _set_dimension_length(sheet, request)
            self._dimension_lengths[(sheet_id, request.dimension)] = request.length
        elif isinstance(request, UnmergeCellsRequest):
            _unmerge_cells(sheet, self._resolve_bounds(sheet_id, sheet, request.range))
        elif isinstance(request, MergeCellsRequest):
            _merge_cells(sheet, self._resolve_bounds(sheet_id, sheet, request.range))
        elif isinstance(request, UpdateBordersRequest):
            _update_borders(
                sheet,
                self._resolve_bounds(sheet_id, sheet, request.range),
                request.borders,
            )
        elif isinstance(request, SetBackgroundColorRequest):
            _set_background_color(
                sheet,
                self._resolve_bounds(sheet_id, sheet, request.range),
                request.color.to_argb(),
            )
        else:  # pragma: no cover - exhaustive over StructuralRequest
            raise ValueError(f"Unsupported structural request: {request!r}")

    def _resolve_bounds(
        self, sheet_id: int, sheet: Any, grid_range: GridRange
    ) -> _Bounds | None:
        """Convert a grid range to 1-based bounds, clamping open ends.

        Returns None when the clamped range is empty.
        """
        row_extent = self._dimension_lengths.get((sheet_id, "ROWS"), sheet.max_row)
        column_extent = self._dimension_lengths.get(
            (sheet_id, "COLUMNS"), sheet.max_column
        )
        rows, columns = grid_range.rows, grid_range.columns
        min_row = rows.get_start_index_value() + 1
        min_col = columns.get_start_index_value() + 1
        max_row = row_extent if rows.end_index is None else rows.end_index + 1
        max_col = column_extent if columns.end_index is None else columns.end_index + 1
        if max_row < min_row or max_col < min_col:
            return None
        return min_row, min_col, max_row, max_col


@contextmanager
def open_workbook_sink(path: Path) -> Iterator[OpenpyxlSink]:
    """Yield a sink over the workbook at ``path`` and save it on success.

    Nothing is written when the block raises, so a failed run never leaves a
    half-rendered workbook behind.
    """
    with openpyxl_workbook(path) as workbook:
        sink = OpenpyxlSink(workbook)
        yield sink
        ensure_output_dir(path)
        workbook.save(path)
        logger.info("Saved workbook to %s.", path)


def _iter_cells(sheet: Any, bounds: _Bounds) -> Iterator[Any]:
    min_row, min_col, max_row, max_col = bounds
    for row in sheet.iter_rows(
        min_row=min_row, max_row=max_row, min_col=min_col, max_col=max_col
    ):
        yield from row


def _clear_formatting(sheet: Any, bounds: _Bounds | None) -> None:
    if bounds is None:
        return
    for cell in _iter_cells(sheet, bounds):
        cell.font = Font()
        cell.fill = PatternFill()
        cell.border = OpenpyxlBorder()
        cell.alignment = Alignment()
        cell.number_format = "General"


def _set_frozen_panes(sheet: Any, request: SetSheetPropertiesRequest) -> None:
    frozen_rows, frozen_columns = _current_frozen_counts(sheet)
    if request.frozen_row_count is not None:
        frozen_rows = request.frozen_row_count
    if request.frozen_column_count is not None:
        frozen_columns = request.frozen_column_count
    if frozen_rows == 0 and frozen_columns == 0:
        sheet.freeze_panes = None
        return
    sheet.freeze_panes = f"{get_column_letter(frozen_columns + 1)}{frozen_rows + 1}"


def _current_frozen_counts(sheet: Any) -> tuple[int, int]:
    anchor = sheet.freeze_panes
    if not anchor:
        return 0, 0
    column_label, row = coordinate_from_string(anchor)
    return row - 1, column_index_from_string(column_label) - 1


def _set_dimension_length(sheet: Any, request: SetDimensionLengthRequest) -> None:
    # openpyxl sheets grow on demand, so only the excess needs removing.
    # delete_rows/delete_cols leave merged ranges in place; unmerge the ones
    # reaching past the new length first.
    if request.dimension == "ROWS":
        excess = sheet.max_row - request.length
        if excess > 0:
            _unmerge_beyond(sheet, max_row=request.length)
            sheet.delete_rows(request.length + 1, excess)
        return
    excess = sheet.max_column - request.length
    if excess > 0:
        _unmerge_beyond(sheet, max_col=request.length)
        sheet.delete_cols(request.length + 1, excess)


def _unmerge_beyond(
    sheet: Any, *, max_row: int | None = None, max_col: int | None = None
) -> None:
    for merged in list(sheet.merged_cells.ranges):
        _, _, merged_max_col, merged_max_row = merged.bounds
        if (max_row is not None and merged_max_row > max_row) or (
            max_col is not None and merged_max_col > max_col
        ):
            sheet.unmerge_cells(str(merged))


def _overlaps(left: _Bounds, right: _Bounds) -> bool:
    left_min_row, left_min_col, left_max_row, left_max_col = left
    right_min_row, right_min_col, right_max_row, right_max_col = right
    return not (
        left_max_col < right_min_col
        or right_max_col < left_min_col
        or left_max_row < right_min_row
        or right_max_row < left_min_row
    )


def _unmerge_cells(sheet: Any, bounds: _Bounds | None) -> None:
    if bounds is None:
        return
    for merged in list(sheet.merged_cells.ranges):
        min_col, min_row, max_col, max_row = merged.bounds
        if _overlaps(bounds, (min_row, min_col, max_row, max_col)):
            sheet.unmerge_cells(str(merged))


def _merge_cells(sheet: Any, bounds: _Bounds | None) -> None:
    if bounds is None:
        raise ValueError("merge_cells requires a non-empty range.")
    min_row, min_col, max_row, max_col = bounds
    for merged in sheet.merged_cells.ranges:
        m_min_col, m_min_row, m_max_col, m_max_row = merged.bounds
        if _overlaps(bounds, (m_min_row, m_min_col, m_max_row, m_max_col)):
            raise ValueError(f"merge range overlaps existing merged range {merged}.")
    sheet.merge_cells(
        start_row=min_row, start_column=min_col, end_row=max_row, end_column=max_col
    )


def _to_side(border: Border) -> Side:
    color = border.color.to_argb() if border.color is not None else "FF000000"
    return Side(style=_BORDER_STYLES[border.style], color=color)


def _update_borders(sheet: Any, bounds: _Bounds | None, borders: Borders) -> None:
    """Draw the outer edges of ``bounds``; inner cell edges are untouched."""
    if bounds is None:
        return
    min_row, min_col, max_row, max_col = bounds
    edges = {
        "top": borders.top,
        "bottom": borders.bottom,
        "left": borders.left,
        "right": borders.right,
    }
    sides = {name: _to_side(border) for name, border in edges.items() if border is not None}
    if not sides:
        return
    for cell in _iter_cells(sheet, bounds):
        row, column = cell.row, cell.column
        touched = {
            "top": row == min_row,
            "bottom": row == max_row,
            "left": column == min_col,
            "right": column == max_col,
        }
        if not any(touched[name] for name in sides):
            continue
        border = copy(cell.border)
        for name, side in sides.items():
            if touched[name]:
                setattr(border, name, side)
        cell.border = border


def _set_background_color(sheet: Any, bounds: _Bounds | None, argb: str) -> None:
    if bounds is None:
        return
    for cell in _iter_cells(sheet, bounds):
        cell.fill = PatternFill(fill_type="solid", start_color=argb, end_color=argb)


def _write_values(sheet: Any, update: ValueUpdate) -> None:
    rows, columns = update.range.rows, update.range.columns
    row_count, column_count = update.shape()
    if rows.end_index is not None and rows.get_count() != row_count:
        raise ValueError(
            f"values have {row_count} rows but range {update.range.to_r1c1()} "
            f"spans {rows.get_count()}."
        )
    if columns.end_index is not None and any(
        len(row) != columns.get_count() for row in update.values
    ):
        raise ValueError(
            f"values do not span the {columns.get_count()} columns of range "
            f"{update.range.to_r1c1()}."
        )
    base_row = rows.get_start_index_value() + 1
    base_column = columns.get_start_index_value() + 1
    for row_offset, row_values in enumerate(update.values):
        for column_offset, value in enumerate(row_values):
            cell = sheet.cell(row=base_row + row_offset, column=base_column + column_offset)
            if isinstance(cell, MergedCell):
                # Covered by a merge; only the top-left cell holds a value.
                continue
            cell.value = _to_cell_value(value)


def _to_cell_value(value: Formula | date | str) -> date | str:
    if isinstance(value, Formula):
        return value.expression
    return value


__all__ = ["OpenpyxlSink", "open_workbook_sink"]
