from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any
import warnings

from openpyxl import Workbook, load_workbook


@contextmanager
def openpyxl_workbook(file_path: Path) -> Iterator[Any]:
    """Open (or create) an openpyxl workbook and ensure it is closed.

    Args:
        file_path: Workbook path. A new single-sheet workbook is created when
            the file does not exist yet.

    Yields:
        openpyxl workbook instance.
    """
    if file_path.exists():
        with warnings.catch_warnings():
            warnings.filterwarnings(
                "ignore",
                message="Unknown extension is not supported and will be removed",
                category=UserWarning,
                module="openpyxl",
            )
            warnings.filterwarnings(
                "ignore",
                message="Conditional Formatting extension is not supported and will be removed",
                category=UserWarning,
                module="openpyxl",
            )
            wb = load_workbook(file_path)
    else:
        wb = Workbook()
    try:
        yield wb
    finally:
        wb.close()


def ensure_output_dir(path: Path) -> None:
    """Ensure parent directory exists for output path."""
    path.parent.mkdir(parents=True, exist_ok=True)


__all__ = ["ensure_output_dir", "openpyxl_workbook"]
