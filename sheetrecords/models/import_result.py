from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, overload

from .record import Record

"""ImportResult model: ordered Records produced by one import call.

Behaves as a read-only sequence of Records and exposes the all / valid / invalid
views. valid and invalid are computed on access, so errors attached by a batch hook
are reflected.
"""

__all__ = [
    "ImportResult",
]


@dataclass(frozen=True)
class ImportResult(Sequence):
    """Result of RowImporter.import_records().

    Attributes:
        records: Records in worksheet row order
        headers: Header row text as found in the worksheet
        source: Source passed to the workbook opener
        sheet_index: Worksheet index that was read
        skipped_rows: Number of blank data rows that produced no Record
    """
    records: tuple[Record, ...]
    headers: tuple[str, ...] = ()
    source: Any = None
    sheet_index: int = 0
    skipped_rows: int = 0
    unmatched_headers: tuple[str, ...] = field(default=())

    @overload
    def __getitem__(self, index: int) -> Record: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Record]: ...

    def __getitem__(self, index):
        return self.records[index]

    def __len__(self) -> int:
        return len(self.records)

    @property
    def all(self) -> list[Record]:
        return list(self.records)

    @property
    def valid(self) -> list[Record]:
        return [r for r in self.records if r.is_valid]

    @property
    def invalid(self) -> list[Record]:
        return [r for r in self.records if not r.is_valid]
