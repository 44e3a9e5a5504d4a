from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

import pandas as pd

"""Workbook reader over pandas.

Reads a whole worksheet without header interpretation (header=None) and exposes it
through the Workbook / Worksheet protocols consumed by RowImporter:

    open_workbook(path).worksheet(index).row(n)  -> list of raw cells
    open_workbook(path).worksheet(index).row_count

Empty cells come back as None. Strings such as "NA" or "null" are kept as text;
only truly empty cells are treated as missing. Date cells are returned as datetime
objects. Errors opening or decoding the file propagate unchanged.
"""

__all__ = [
    "ExcelWorkbook",
    "FrameWorksheet",
    "Workbook",
    "Worksheet",
    "is_blank_row",
    "open_workbook",
]


class Worksheet(Protocol):
    @property
    def row_count(self) -> int: ...

    def row(self, n: int) -> list[Any]: ...


class Workbook(Protocol):
    def worksheet(self, index: int) -> Worksheet: ...


def _clean_cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):  # pragma: no cover (array-like cell)
        pass
    return value


def is_blank_row(cells: list[Any]) -> bool:
    """True when every cell is absent or empty text (rows carrying only styling)."""
    return all(c is None or (isinstance(c, str) and c == "") for c in cells)


class FrameWorksheet:
    """Worksheet view over a header-less DataFrame."""

    def __init__(self, df: pd.DataFrame, name: str = "") -> None:
        self.name = name
        self._rows: list[list[Any]] = [
            [_clean_cell(v) for v in raw] for raw in df.itertuples(index=False, name=None)
        ]

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def row(self, n: int) -> list[Any]:
        if n < 0 or n >= len(self._rows):
            return []
        return list(self._rows[n])


class ExcelWorkbook:
    """Spreadsheet file opened through pd.ExcelFile (openpyxl for .xlsx)."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._book = pd.ExcelFile(self.path)

    @property
    def sheet_names(self) -> list[str]:
        return [str(n) for n in self._book.sheet_names]

    def worksheet(self, index: int) -> FrameWorksheet:
        name = self._book.sheet_names[index]
        # keep_default_na=False: only empty cells are NA, "NA"/"null" stay text
        df = self._book.parse(
            name,
            header=None,
            dtype=object,
            keep_default_na=False,
            na_values=[""],
        )
        return FrameWorksheet(df, name=str(name))

    def close(self) -> None:
        self._book.close()


def open_workbook(path: Path | str) -> ExcelWorkbook:
    return ExcelWorkbook(path)
