from __future__ import annotations

from .a1 import (
    column_index_to_label,
    format_r1c1_cell,
    parse_r1c1_cell,
)
from .grid_range import GridRange
from .range import Range, union, union_all

__all__ = [
    "GridRange",
    "Range",
    "column_index_to_label",
    "format_r1c1_cell",
    "parse_r1c1_cell",
    "union",
    "union_all",
]
