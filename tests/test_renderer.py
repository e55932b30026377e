from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from openpyxl import Workbook
import pytest

from sheetcal.calendar import Calendar, DayOfWeek, calculate, get_weeks
from sheetcal.errors import SinkCallFailedError
from sheetcal.grid import GridRange, Range
from sheetcal.renderer import (
    CalendarLayout,
    build_structural_requests,
    build_value_updates,
    render_calendar,
)
from sheetcal.sheets.openpyxl_sink import OpenpyxlSink
from sheetcal.sheets.requests import (
    ClearFormattingRequest,
    MergeCellsRequest,
    SetBackgroundColorRequest,
    SetDimensionLengthRequest,
    SetSheetPropertiesRequest,
    StructuralRequest,
    UpdateBordersRequest,
)
from sheetcal.sheets.values import Formula, ValueUpdate

SHEET_ID = 3


class _RecordingSink:
    def __init__(self, fail_structural: bool = False) -> None:
        self.calls: list[str] = []
        self.fail_structural = fail_structural

    def apply_structural_requests(
        self, sheet_id: int, requests: Sequence[StructuralRequest]
    ) -> None:
        self.calls.append(f"structural:{sheet_id}:{len(requests)}")
        if self.fail_structural:
            raise SinkCallFailedError("batchUpdate", "boom")

    def apply_value_updates(self, sheet_id: int, updates: Sequence[ValueUpdate]) -> None:
        self.calls.append(f"values:{sheet_id}:{len(updates)}")


def test_layout_chains_blocks_from_origin(calendar_2024: Calendar) -> None:
    layout = CalendarLayout.from_calendar(calendar_2024, SHEET_ID)
    assert len(get_weeks(calendar_2024)) == 62
    assert layout.header_rows == Range.single(0)
    assert layout.week_rows == Range.from_bounds(1, 62)
    assert layout.total_rows == Range.single(63)
    assert layout.data_rows == Range.from_bounds(1, 63)
    assert layout.name_columns == Range.from_bounds(0, 1)
    assert layout.day_of_week_columns == Range.from_bounds(2, 8)
    assert layout.week_total_columns == Range.single(9)
    assert layout.month_total_columns == Range.single(10)
    assert layout.data_columns == Range.from_bounds(2, 10)
    assert layout.row_count == 64
    assert layout.column_count == 11
    assert layout.month_rows()[0] == Range.from_bounds(1, 5)
    assert layout.month_rows()[-1] == Range.from_bounds(57, 62)


def test_structural_requests(calendar_2024: Calendar) -> None:
    requests = build_structural_requests(calendar_2024, SHEET_ID)
    assert requests[0] == ClearFormattingRequest(range=GridRange.unbounded(SHEET_ID))
    assert requests[1] == SetSheetPropertiesRequest(frozen_row_count=1, frozen_column_count=2)
    assert requests[2] == SetDimensionLengthRequest(dimension="COLUMNS", length=11)
    assert requests[3] == SetDimensionLengthRequest(dimension="ROWS", length=64)

    merges = [r for r in requests if isinstance(r, MergeCellsRequest)]
    assert len(merges) == 12
    assert merges[0].range == GridRange(
        rows=Range.from_bounds(1, 5), columns=Range.single(10), sheet_id=SHEET_ID
    )

    borders = [r for r in requests if isinstance(r, UpdateBordersRequest)]
    assert len(borders) == 1 + 12 + 2
    assert borders[0].range == GridRange.unbounded(SHEET_ID)
    assert borders[-2].range.columns == Range.from_bounds(2, 8)
    assert borders[-1].range.columns == Range.single(9)

    fills = [r for r in requests if isinstance(r, SetBackgroundColorRequest)]
    inactive = sum(
        not active for week in get_weeks(calendar_2024) for active in week.days_active
    )
    assert len(fills) == inactive
    # Last January week: Jan 29-31 active, Feb 1-4 greyed out.
    assert fills[0].range == GridRange(
        rows=Range.single(5), columns=Range.single(5), sheet_id=SHEET_ID
    )
    assert fills[0].color.red == 0.75


def test_value_updates(calendar_2024: Calendar) -> None:
    header, dates, week_totals, month_totals, totals = build_value_updates(
        calendar_2024, SHEET_ID
    )
    assert header.values == [
        [
            "Start Date",
            "End Date",
            "Monday",
            "Tuesday",
            "Wednesday",
            "Thursday",
            "Friday",
            "Saturday",
            "Sunday",
            "Week Total",
            "Month Total",
        ]
    ]
    assert header.range.columns == Range.unbounded()

    assert dates.range.rows == Range.from_bounds(1, 62)
    assert dates.values[0] == [date(2024, 1, 1), date(2024, 1, 7)]
    assert len(dates.values) == 62

    assert week_totals.values[0] == [Formula(expression='=SUM(INDIRECT("R2C3:R2C9", FALSE))')]
    assert week_totals.values[-1] == [
        Formula(expression='=SUM(INDIRECT("R63C3:R63C9", FALSE))')
    ]

    january_total = Formula(expression='=SUM(INDIRECT("R2C10:R6C10", FALSE))')
    assert month_totals.values[:5] == [[january_total]] * 5
    assert month_totals.values[5] != [january_total]
    assert len(month_totals.values) == 62

    assert totals.range.rows == Range.single(63)
    assert len(totals.values[0]) == 9
    assert totals.values[0][0] == Formula(expression='=SUM(INDIRECT("R2C3:R63C3", FALSE))')
    assert totals.values[0][-1] == Formula(
        expression='=SUM(INDIRECT("R2C11:R63C11", FALSE))'
    )


def test_header_follows_week_start() -> None:
    header = build_value_updates(calculate(DayOfWeek.SUNDAY, 2025), 0)[0]
    assert header.values[0][2] == "Sunday"
    assert header.values[0][8] == "Saturday"


def test_render_applies_structure_before_values(calendar_2024: Calendar) -> None:
    sink = _RecordingSink()
    render_calendar(sink, calendar_2024, SHEET_ID)
    assert sink.calls[0].startswith(f"structural:{SHEET_ID}:")
    assert sink.calls[1] == f"values:{SHEET_ID}:5"


def test_render_stops_after_failed_batch(calendar_2024: Calendar) -> None:
    sink = _RecordingSink(fail_structural=True)
    with pytest.raises(SinkCallFailedError):
        render_calendar(sink, calendar_2024, SHEET_ID)
    assert len(sink.calls) == 1


def test_render_into_openpyxl_workbook(calendar_2024: Calendar) -> None:
    workbook = Workbook()
    sheet = workbook.active
    render_calendar(OpenpyxlSink(workbook), calendar_2024, 0)

    assert sheet["A1"].value == "Start Date"
    assert sheet["C1"].value == "Monday"
    assert sheet["K1"].value == "Month Total"
    assert sheet["A2"].value == date(2024, 1, 1)
    assert sheet["B63"].value == date(2025, 1, 5)
    assert sheet["J2"].value == '=SUM(INDIRECT("R2C3:R2C9", FALSE))'
    assert sheet["K2"].value == '=SUM(INDIRECT("R2C10:R6C10", FALSE))'
    assert sheet["K3"].value is None
    assert sheet["C64"].value == '=SUM(INDIRECT("R2C3:R63C3", FALSE))'

    assert sheet.freeze_panes == "C2"
    merged = {str(item) for item in sheet.merged_cells.ranges}
    assert len(merged) == 12
    assert "K2:K6" in merged

    assert sheet["F6"].fill.fill_type == "solid"
    assert sheet["E6"].fill.fill_type is None
    assert sheet["A1"].border.top.style == "thin"
    assert sheet["K64"].border.bottom.style == "thin"
    assert sheet["K64"].border.right.style == "thin"


def test_rerender_shorter_year_into_same_workbook() -> None:
    workbook = Workbook()
    sheet = workbook.active
    sink = OpenpyxlSink(workbook)
    render_calendar(sink, calculate(DayOfWeek.MONDAY, 2026), 0)
    assert sheet.max_row == 65
    render_calendar(sink, calculate(DayOfWeek.MONDAY, 2021), 0)

    assert sheet.max_row == 63
    merged = {str(item) for item in sheet.merged_cells.ranges}
    assert len(merged) == 12
    assert "K58:K62" in merged
    assert all(item.max_row <= 62 for item in sheet.merged_cells.ranges)
    assert sheet["C63"].value == '=SUM(INDIRECT("R2C3:R62C3", FALSE))'
    assert sheet["K63"].border.bottom.style == "thin"
