from __future__ import annotations

import pytest

from sheetcal.errors import EndIndexUndefinedError
from sheetcal.grid import GridRange, Range
from sheetcal.grid.a1 import (
    column_index_to_label,
    format_r1c1_cell,
    parse_r1c1_cell,
)


def test_to_wire_uses_exclusive_end_indices() -> None:
    grid_range = GridRange(
        rows=Range.from_bounds(0, 4), columns=Range.from_bounds(2, 3), sheet_id=7
    )
    assert grid_range.to_wire() == {
        "sheetId": 7,
        "startRowIndex": 0,
        "endRowIndex": 5,
        "startColumnIndex": 2,
        "endColumnIndex": 4,
    }


def test_to_wire_omits_open_bounds() -> None:
    assert GridRange.unbounded(3).to_wire() == {"sheetId": 3}
    assert GridRange.unbounded().to_wire() == {}
    partial = GridRange(rows=Range.starting_from(1), columns=Range.ending_with(0))
    assert partial.to_wire() == {"startRowIndex": 1, "endColumnIndex": 1}


def test_to_r1c1() -> None:
    grid_range = GridRange(rows=Range.single(1), columns=Range.from_bounds(2, 8))
    assert grid_range.to_r1c1() == "R2C3:R2C9"
    column = GridRange(rows=Range.unbounded(), columns=Range.single(0))
    assert column.to_r1c1() == "C1:C1"


def test_from_r1c1_reads_back_rendered_reference() -> None:
    grid_range = GridRange.from_r1c1("R2C3:R5C9", sheet_id=1)
    assert grid_range == GridRange(
        rows=Range.from_bounds(1, 4), columns=Range.from_bounds(2, 8), sheet_id=1
    )
    assert GridRange.from_r1c1("r4c2").to_r1c1() == "R4C2:R4C2"
    assert GridRange.from_r1c1("C3:C3").rows == Range.unbounded()


def test_from_r1c1_rejects_a1() -> None:
    with pytest.raises(ValueError, match="Invalid R1C1 reference"):
        GridRange.from_r1c1("A1:B2")


def test_to_a1() -> None:
    grid_range = GridRange(rows=Range.from_bounds(0, 4), columns=Range.from_bounds(2, 27))
    assert grid_range.to_a1() == "C1:AB5"
    with pytest.raises(EndIndexUndefinedError):
        GridRange.unbounded().to_a1()


def test_with_sheet_id_returns_copy() -> None:
    grid_range = GridRange(rows=Range.single(0), columns=Range.single(0))
    scoped = grid_range.with_sheet_id(4)
    assert scoped.sheet_id == 4
    assert grid_range.sheet_id is None


def test_column_index_to_label() -> None:
    assert column_index_to_label(1) == "A"
    assert column_index_to_label(28) == "AB"
    with pytest.raises(ValueError, match="must be positive"):
        column_index_to_label(0)


def test_r1c1_cell_tokens() -> None:
    assert format_r1c1_cell(0, 0) == "R1C1"
    assert format_r1c1_cell(None, 4) == "C5"
    assert format_r1c1_cell(2, None) == "R3"
    assert parse_r1c1_cell("R3") == (2, None)
    assert parse_r1c1_cell("") == (None, None)
