from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Aggregated result of a command line run over several spreadsheet files."""


@dataclass(frozen=True)
class FileStat:
    """Per-file import statistics."""
    file_name: str
    status: str  # success / failed
    records: int
    valid: int
    invalid: int
    skipped_rows: int
    elapsed_seconds: float
    error: str | None = None


@dataclass(frozen=True)
class RunResult:
    """Totals over all files of one run, rendered as the SUMMARY line."""
    success_files: int
    failed_files: int
    total_records: int
    valid_records: int
    invalid_records: int
    skipped_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
