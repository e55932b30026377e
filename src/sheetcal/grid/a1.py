from __future__ import annotations

import re

_R1C1_CELL_PATTERN = re.compile(r"^(?:R(?P<row>[1-9][0-9]*))?(?:C(?P<col>[1-9][0-9]*))?$")


def column_index_to_label(index: int) -> str:
    """Convert 1-based column index to Excel-style column label."""
    if index < 1:
        raise ValueError("Column index must be positive.")
    chunks: list[str] = []
    current = index
    while current > 0:
        current -= 1
        chunks.append(chr(ord("A") + (current % 26)))
        current //= 26
    return "".join(reversed(chunks))


def format_r1c1_cell(row: int | None, column: int | None) -> str:
    """Render zero-based row/column indices as one R1C1 token.

    Either index may be None, in which case its part is left out
    (``R3``, ``C2`` or an empty string).
    """
    row_part = "" if row is None else f"R{row + 1}"
    column_part = "" if column is None else f"C{column + 1}"
    return f"{row_part}{column_part}"


def parse_r1c1_cell(value: str) -> tuple[int | None, int | None]:
    """Parse one R1C1 token into zero-based (row, column) indices."""
    match = _R1C1_CELL_PATTERN.match(value.strip().upper())
    if match is None:
        raise ValueError(f"Invalid R1C1 reference: {value}")
    row = match.group("row")
    column = match.group("col")
    return (
        None if row is None else int(row) - 1,
        None if column is None else int(column) - 1,
    )
