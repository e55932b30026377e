from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .grid.range import Range


class SheetCalError(Exception):
    """Base class for sheetcal errors."""


class EndIndexUndefinedError(SheetCalError, ValueError):
    """Raised when a concrete end index is requested from an open-ended range."""

    def __init__(self, range_: Range) -> None:
        super().__init__(
            f"Range has no end index: {range_!r}. "
            "Establish a concrete extent before using it in size-dependent layout."
        )
        self.range = range_


class RangesNotAdjacentError(SheetCalError, ValueError):
    """Raised when a union is attempted on ranges that do not touch."""

    def __init__(self, first: Range, second: Range) -> None:
        super().__init__(
            f"Ranges are not adjacent: {first!r} and {second!r}. "
            "The second range must start right after the first one ends."
        )
        self.first = first
        self.second = second


class SinkCallFailedError(SheetCalError, RuntimeError):
    """Raised when a spreadsheet sink fails to apply a batch."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


__all__ = [
    "EndIndexUndefinedError",
    "RangesNotAdjacentError",
    "SheetCalError",
    "SinkCallFailedError",
]
