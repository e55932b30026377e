"""Lay a computed calendar out on a sheet.

Sheet layout::

    | Start Date | End Date | <7 day columns> | Week Total | Month Total |   header row
    | <one row per week, months in order>                               |   week rows
    | <column totals>                                                   |   totals row

Every row and column block is chained from the origin with
``next_range_with_count``/``next_single_range``, so changing the number of
day or name columns needs no other edits.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from .calendar import (
    DAYS_PER_WEEK,
    Calendar,
    get_first_day_of_week,
    get_week_number_ranges,
    get_weeks,
)
from .grid.grid_range import GridRange
from .grid.range import Range, union, union_all
from .sheets.formula import sum_of_range
from .sheets.requests import (
    Border,
    Borders,
    ClearFormattingRequest,
    Color,
    MergeCellsRequest,
    SetBackgroundColorRequest,
    SetDimensionLengthRequest,
    SetSheetPropertiesRequest,
    StructuralRequest,
    UnmergeCellsRequest,
    UpdateBordersRequest,
)
from .sheets.sink import SheetSink
from .sheets.values import CellValue, ValueUpdate

logger = logging.getLogger(__name__)

NAME_COLUMN_TITLES = ("Start Date", "End Date")
WEEK_TOTAL_TITLE = "Week Total"
MONTH_TOTAL_TITLE = "Month Total"
INACTIVE_DAY_COLOR = Color.grey(0.75)
SOLID_BORDER = Border(style="SOLID")


class CalendarLayout(BaseModel):
    """Row and column blocks of the rendered calendar table."""

    model_config = ConfigDict(frozen=True)

    sheet_id: int
    header_rows: Range
    week_rows: Range
    total_rows: Range
    data_rows: Range
    name_columns: Range
    day_of_week_columns: Range
    week_total_columns: Range
    month_total_columns: Range
    data_columns: Range
    month_week_ranges: tuple[tuple[int, int], ...]

    @classmethod
    def from_calendar(cls, calendar: Calendar, sheet_id: int) -> CalendarLayout:
        week_count = len(get_weeks(calendar))
        header_rows = Range.single(0)
        week_rows = header_rows.next_range_with_count(week_count)
        total_rows = week_rows.next_single_range()

        name_columns = Range.from_start_and_count(0, len(NAME_COLUMN_TITLES))
        day_of_week_columns = name_columns.next_range_with_count(DAYS_PER_WEEK)
        week_total_columns = day_of_week_columns.next_single_range()
        month_total_columns = week_total_columns.next_single_range()

        return cls(
            sheet_id=sheet_id,
            header_rows=header_rows,
            week_rows=week_rows,
            total_rows=total_rows,
            data_rows=union(week_rows, total_rows),
            name_columns=name_columns,
            day_of_week_columns=day_of_week_columns,
            week_total_columns=week_total_columns,
            month_total_columns=month_total_columns,
            data_columns=union_all(
                [day_of_week_columns, week_total_columns, month_total_columns]
            ),
            month_week_ranges=tuple(get_week_number_ranges(calendar)),
        )

    @property
    def row_count(self) -> int:
        return self.data_rows.get_end_index_value() + 1

    @property
    def column_count(self) -> int:
        return self.data_columns.get_end_index_value() + 1

    def grid(self, rows: Range, columns: Range) -> GridRange:
        return GridRange(rows=rows, columns=columns, sheet_id=self.sheet_id)

    def month_rows(self) -> list[Range]:
        """Return the block of week rows belonging to each month."""
        return [
            self.week_rows.subrange_with_start_and_count(start, count)
            for start, count in self.month_week_ranges
        ]


def build_structural_requests(
    calendar: Calendar, sheet_id: int
) -> list[StructuralRequest]:
    """Build formatting, sizing, merge, border and fill requests."""
    layout = CalendarLayout.from_calendar(calendar, sheet_id)
    whole_sheet = GridRange.unbounded(sheet_id)
    outer = Borders.outer(SOLID_BORDER)
    unbounded = Range.unbounded()

    requests: list[StructuralRequest] = [
        ClearFormattingRequest(range=whole_sheet),
        SetSheetPropertiesRequest(
            frozen_row_count=layout.header_rows.get_count(),
            frozen_column_count=layout.name_columns.get_count(),
        ),
        SetDimensionLengthRequest(dimension="COLUMNS", length=layout.column_count),
        SetDimensionLengthRequest(dimension="ROWS", length=layout.row_count),
        UnmergeCellsRequest(range=whole_sheet),
    ]
    requests.extend(
        MergeCellsRequest(range=layout.grid(rows, layout.month_total_columns))
        for rows in layout.month_rows()
    )
    requests.append(UpdateBordersRequest(range=whole_sheet, borders=outer))
    requests.extend(
        UpdateBordersRequest(range=layout.grid(rows, unbounded), borders=outer)
        for rows in layout.month_rows()
    )
    requests.append(
        UpdateBordersRequest(
            range=layout.grid(unbounded, layout.day_of_week_columns), borders=outer
        )
    )
    requests.append(
        UpdateBordersRequest(
            range=layout.grid(unbounded, layout.week_total_columns), borders=outer
        )
    )
    for week_number, week in enumerate(get_weeks(calendar)):
        for day_number, active in enumerate(week.days_active):
            if active:
                continue
            requests.append(
                SetBackgroundColorRequest(
                    range=layout.grid(
                        layout.week_rows.subrange_single(week_number),
                        layout.day_of_week_columns.subrange_single(day_number),
                    ),
                    color=INACTIVE_DAY_COLOR,
                )
            )
    return requests


def build_value_updates(calendar: Calendar, sheet_id: int) -> list[ValueUpdate]:
    """Build header labels, week dates and the aggregate formulas."""
    layout = CalendarLayout.from_calendar(calendar, sheet_id)
    weeks = get_weeks(calendar)
    first_day = get_first_day_of_week(calendar)
    day_names = [first_day.add_days(offset).display_name for offset in range(DAYS_PER_WEEK)]

    header: list[CellValue] = [
        *NAME_COLUMN_TITLES,
        *day_names,
        WEEK_TOTAL_TITLE,
        MONTH_TOTAL_TITLE,
    ]
    dates: list[list[CellValue]] = [[week.start_date, week.end_date] for week in weeks]
    week_totals: list[list[CellValue]] = [
        [sum_of_range(layout.grid(Range.single(row), layout.day_of_week_columns))]
        for row in layout.week_rows.get_index_values()
    ]
    month_totals: list[list[CellValue]] = []
    for rows in layout.month_rows():
        formula = sum_of_range(layout.grid(rows, layout.week_total_columns))
        month_totals.extend([formula] for _ in range(rows.get_count()))
    column_totals: list[CellValue] = [
        sum_of_range(layout.grid(layout.week_rows, Range.single(column)))
        for column in layout.data_columns.get_index_values()
    ]

    return [
        ValueUpdate(
            range=layout.grid(layout.header_rows, Range.unbounded()), values=[header]
        ),
        ValueUpdate(range=layout.grid(layout.week_rows, layout.name_columns), values=dates),
        ValueUpdate(
            range=layout.grid(layout.week_rows, layout.week_total_columns),
            values=week_totals,
        ),
        ValueUpdate(
            range=layout.grid(layout.week_rows, layout.month_total_columns),
            values=month_totals,
        ),
        ValueUpdate(
            range=layout.grid(layout.total_rows, layout.data_columns),
            values=[column_totals],
        ),
    ]


def render_calendar(sink: SheetSink, calendar: Calendar, sheet_id: int) -> None:
    """Render ``calendar`` into ``sheet_id``: structure first, then values.

    Both batches are computed before anything is sent, so a layout error
    never leaves a partially rendered sheet.
    """
    structural_requests = build_structural_requests(calendar, sheet_id)
    value_updates = build_value_updates(calendar, sheet_id)
    logger.info(
        "Rendering %s calendar into sheet %s (%s structural requests, %s value ranges).",
        calendar.year,
        sheet_id,
        len(structural_requests),
        len(value_updates),
    )
    sink.apply_structural_requests(sheet_id, structural_requests)
    sink.apply_value_updates(sheet_id, value_updates)


__all__ = [
    "CalendarLayout",
    "build_structural_requests",
    "build_value_updates",
    "render_calendar",
]
