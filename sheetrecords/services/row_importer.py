from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from ..excel.reader import Workbook, Worksheet, is_blank_row, open_workbook
from ..models.column_spec import CellValidationError, ColumnSpec, cell_text
from ..models.import_result import ImportResult
from ..models.record import Record
from ..models.schema import Schema

logger = logging.getLogger(__name__)

"""Row import service.

Reads one worksheet, matches the header row against a Schema and builds one Record
per non-blank data row:

1. Row 0 is the header; each cell is matched by exact name to a ColumnSpec
2. Required ColumnSpecs without a header position abort the import (MissingColumnError)
3. Blank rows are skipped
4. Each matched cell is validated then coerced; failures go to Record.errors
5. Schema.validate_all runs once over all Records
"""

__all__ = [
    "MissingColumnError",
    "RowImporter",
    "import_records",
]


class MissingColumnError(Exception):
    """Raised when required columns have no matching header cell.

    Attributes:
        missing: Names of the required columns not found
        headers: Header row text actually found
    """

    def __init__(self, missing: list[str], headers: list[str]) -> None:
        self.missing = list(missing)
        self.headers = list(headers)
        cols = ", ".join(f"'{m}'" for m in self.missing)
        found = ", ".join(f"'{h}'" for h in self.headers)
        super().__init__(f"required columns {cols} not found in header [{found}]")


class RowImporter:
    """Imports worksheets described by one Schema.

    The Schema is immutable, so a single RowImporter (or Schema) may be shared by
    any number of import calls.
    """

    def __init__(self, schema: Schema, opener: Callable[[Any], Workbook] = open_workbook) -> None:
        self.schema = schema
        self.opener = opener

    def import_records(self, source: Any, sheet_index: int = 0) -> ImportResult:
        """Import the worksheet at sheet_index of source.

        Raises:
            MissingColumnError: a required column is absent from the header row
            Any error from the workbook opener, unchanged
        """
        workbook = self.opener(source)
        try:
            worksheet = workbook.worksheet(sheet_index)
            result = self._import_sheet(worksheet, source, sheet_index)
        finally:
            close = getattr(workbook, "close", None)
            if close is not None:
                close()
        return result

    def _import_sheet(self, worksheet: Worksheet, source: Any, sheet_index: int) -> ImportResult:
        headers = [cell_text(c) for c in worksheet.row(0)]
        columns = self.schema.match_header(headers)

        missing = self.schema.missing_required(columns)
        if missing:
            raise MissingColumnError([c.name for c in missing], headers)

        unmatched = [h for h, c in zip(headers, columns) if c is None and h != ""]
        if unmatched:
            logger.debug(f"ignored header cells: {unmatched}")

        records: list[Record] = []
        skipped = 0
        for row_number in range(1, worksheet.row_count):
            cells = worksheet.row(row_number)
            if is_blank_row(cells):
                skipped += 1
                continue
            records.append(self._build_record(row_number, cells, columns))

        if self.schema.validate_all is not None:
            self.schema.validate_all(records)

        result = ImportResult(
            records=tuple(records),
            headers=tuple(headers),
            source=source,
            sheet_index=sheet_index,
            skipped_rows=skipped,
            unmatched_headers=tuple(unmatched),
        )
        logger.info(
            f"imported sheet={sheet_index} records={len(result)} "
            f"valid={len(result.valid)} invalid={len(result.invalid)} skipped_rows={skipped}"
        )
        return result

    def _build_record(self, row_number: int, cells: list[Any], columns: list[ColumnSpec | None]) -> Record:
        attributes: dict[str, Any] = {}
        errors: dict[str, CellValidationError] = {}
        # Partially built record given to callable format matchers
        context = Record(row_number)
        for index, column in enumerate(columns):
            if column is None:
                continue
            raw = cells[index] if index < len(cells) else None
            # absent -> "", dates -> fixed text; other cells pass through as read
            value = cell_text(raw) if raw is None or isinstance(raw, date) else raw

            outcome = column.validate(value, context)
            if not outcome.ok:
                errors[column.name.lower()] = outcome.error
                continue
            try:
                attributes[column.name] = column.coerce(value)
            except CellValidationError as e:
                errors[column.name.lower()] = e
        return Record(row_number, attributes, errors)


def import_records(schema: Schema, source: Any, sheet_index: int = 0, opener: Callable[[Any], Workbook] = open_workbook) -> ImportResult:
    """Convenience wrapper: RowImporter(schema, opener).import_records(source, sheet_index)."""
    return RowImporter(schema, opener).import_records(source, sheet_index)
