# Shared pytest fixtures
from __future__ import annotations
import re
import tempfile
from decimal import Decimal
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from sheetrecords.models import ColumnSpec, Schema


class ListWorksheet:
    """In-memory worksheet: rows given as lists of raw cells."""

    def __init__(self, rows: list[list[Any]]) -> None:
        self._rows = rows

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def row(self, n: int) -> list[Any]:
        return list(self._rows[n]) if 0 <= n < len(self._rows) else []


class ListWorkbook:
    def __init__(self, sheets: list[list[list[Any]]]) -> None:
        self.sheets = [ListWorksheet(s) for s in sheets]
        self.closed = False

    def worksheet(self, index: int) -> ListWorksheet:
        return self.sheets[index]

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def product_schema() -> Schema:
    return Schema.of(
        ColumnSpec("Name", str, required=True),
        ColumnSpec("Price", Decimal, formats=(re.compile(r"^\d+(\.\d+)?$"),), required=True),
    )


@pytest.fixture()
def workbook_opener():
    """Return opener(rows...) -> (opener callable, workbook) for in-memory sheets."""
    def make(*sheets: list[list[Any]]):
        book = ListWorkbook(list(sheets))

        def opener(source: Any) -> ListWorkbook:
            return book
        return opener, book
    return make


@pytest.fixture()
def sample_schema_yaml() -> str:
    return """name: products
sheet_index: 0
columns:
  - name: Name
    type: string
    required: true
  - name: Price
    type: decimal
    required: true
    format:
      - pattern: '^\\d+(\\.\\d+)?$'
  - name: Stock
    type: integer
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_schema_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "schema.yml"
    cfg.write_text(sample_schema_yaml, encoding="utf-8")
    return cfg


def make_excel(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    with pd.ExcelWriter(path) as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def excel_factory(temp_workdir: Path):
    def make(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        return make_excel(temp_workdir / "data" / name, sheets)
    return make
