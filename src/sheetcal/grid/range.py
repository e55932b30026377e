"""One-dimensional, optionally bounded intervals of row or column indices.

Both ends are inclusive. ``None`` on either side means the range is open in
that direction, which the sinks interpret as "up to the edge of the sheet".
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import reduce

from pydantic import BaseModel, ConfigDict

from ..errors import EndIndexUndefinedError, RangesNotAdjacentError


class Range(BaseModel):
    """Inclusive interval of zero-based indices."""

    model_config = ConfigDict(frozen=True)

    start_index: int | None = None
    end_index: int | None = None

    @classmethod
    def unbounded(cls) -> Range:
        return cls()

    @classmethod
    def starting_from(cls, index: int) -> Range:
        return cls(start_index=index)

    @classmethod
    def ending_with(cls, index: int) -> Range:
        return cls(end_index=index)

    @classmethod
    def from_bounds(cls, start: int, end: int) -> Range:
        """Build a closed range. Callers guarantee ``start <= end``."""
        return cls(start_index=start, end_index=end)

    @classmethod
    def single(cls, index: int) -> Range:
        return cls.from_bounds(index, index)

    @classmethod
    def from_start_and_count(cls, start: int, count: int) -> Range:
        if count < 1:
            raise ValueError(f"Range count must be at least 1, got {count}.")
        return cls.from_bounds(start, start + count - 1)

    def is_bounded(self) -> bool:
        return self.start_index is not None and self.end_index is not None

    def get_start_index_value(self) -> int:
        return 0 if self.start_index is None else self.start_index

    def get_end_index_value(self) -> int:
        """Return the end index.

        Raises:
            EndIndexUndefinedError: If the range is open at the end.
        """
        if self.end_index is None:
            raise EndIndexUndefinedError(self)
        return self.end_index

    def get_count(self) -> int:
        return self.get_end_index_value() - self.get_start_index_value() + 1

    def get_index_values(self) -> list[int]:
        return list(range(self.get_start_index_value(), self.get_end_index_value() + 1))

    def next_range_with_count(self, count: int) -> Range:
        """Return the range of ``count`` indices right after this one."""
        return Range.from_start_and_count(self.get_end_index_value() + 1, count)

    def next_single_range(self) -> Range:
        return self.next_range_with_count(1)

    def subrange_with_bounds(self, start: int, end: int) -> Range:
        """Return a sub-range; bounds are offsets from this range's start."""
        base = self.get_start_index_value()
        return Range.from_bounds(base + start, base + end)

    def subrange_with_start_and_count(self, start: int, count: int) -> Range:
        base = self.get_start_index_value()
        return Range.from_start_and_count(base + start, count)

    def subrange_single(self, index: int) -> Range:
        return self.subrange_with_bounds(index, index)


def union(first: Range, second: Range) -> Range:
    """Join two ranges where ``second`` starts right after ``first`` ends.

    Raises:
        EndIndexUndefinedError: If ``first`` is open at the end.
        RangesNotAdjacentError: If the ranges do not touch.
    """
    if second.get_start_index_value() - first.get_end_index_value() != 1:
        raise RangesNotAdjacentError(first, second)
    return Range(start_index=first.start_index, end_index=second.end_index)


def union_all(ranges: Iterable[Range]) -> Range:
    """Left-fold ``union`` over consecutive ranges."""
    items = list(ranges)
    if not items:
        raise ValueError("union_all requires at least one range.")
    return reduce(union, items)


__all__ = ["Range", "union", "union_all"]
