from __future__ import annotations

from ..grid.grid_range import GridRange
from .types import AggregateFunction
from .values import Formula


def indirect_reference(grid_range: GridRange) -> str:
    """Return an ``INDIRECT`` call addressing ``grid_range`` in R1C1 style."""
    return f'INDIRECT("{grid_range.to_r1c1()}", FALSE)'


def aggregate_of_range(function: AggregateFunction, grid_range: GridRange) -> Formula:
    return Formula(expression=f"={function}({indirect_reference(grid_range)})")


def sum_of_range(grid_range: GridRange) -> Formula:
    """Build ``=SUM(...)`` over ``grid_range``.

    The reference goes through ``INDIRECT`` so the formula keeps pointing at
    the same cells when the sheet is recalculated after edits.
    """
    return aggregate_of_range("SUM", grid_range)


__all__ = ["aggregate_of_range", "indirect_reference", "sum_of_range"]
