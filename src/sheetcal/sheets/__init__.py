from __future__ import annotations

from .formula import aggregate_of_range, sum_of_range
from .openpyxl_sink import OpenpyxlSink, open_workbook_sink
from .requests import (
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
    to_wire_requests,
)
from .sink import GoogleSheetsSink, SheetSink
from .values import CellValue, Formula, ValueUpdate, to_wire_value_ranges

__all__ = [
    "Border",
    "Borders",
    "CellValue",
    "ClearFormattingRequest",
    "Color",
    "Formula",
    "GoogleSheetsSink",
    "MergeCellsRequest",
    "OpenpyxlSink",
    "SetBackgroundColorRequest",
    "SetDimensionLengthRequest",
    "SetSheetPropertiesRequest",
    "SheetSink",
    "StructuralRequest",
    "UnmergeCellsRequest",
    "UpdateBordersRequest",
    "ValueUpdate",
    "aggregate_of_range",
    "open_workbook_sink",
    "sum_of_range",
    "to_wire_requests",
    "to_wire_value_ranges",
]
