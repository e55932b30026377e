from __future__ import annotations

from typing import Literal

StructuralRequestKind = Literal[
    "clear_formatting",
    "set_sheet_properties",
    "set_dimension_length",
    "unmerge_cells",
    "merge_cells",
    "update_borders",
    "set_background_color",
]
Dimension = Literal["ROWS", "COLUMNS"]
MergeType = Literal["MERGE_ALL", "MERGE_COLUMNS", "MERGE_ROWS"]
BorderStyle = Literal[
    "DOTTED",
    "DASHED",
    "SOLID",
    "SOLID_MEDIUM",
    "SOLID_THICK",
    "DOUBLE",
    "NONE",
]
AggregateFunction = Literal["SUM", "AVERAGE", "COUNT", "MIN", "MAX"]
ValueInputOption = Literal["RAW", "USER_ENTERED"]
