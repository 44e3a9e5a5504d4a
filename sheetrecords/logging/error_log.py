from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from sheetrecords.models.error_record import ErrorRecord
from sheetrecords.models.import_result import ImportResult

"""Error log buffering.

- JSON Lines, one ErrorRecord per line (no extra keys)
- One `logs/errors-YYYYMMDD-HHMMSS.log` (UTC) per run, created on first access
- Records are buffered and appended on flush()
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. flush() appends JSON Lines to the log file.

    Not thread-safe; the command line runs files serially.
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def extend_from_result(self, file: str, result: ImportResult) -> int:
        """Buffer one ErrorRecord per cell error of the invalid records in result."""
        added = 0
        for record in result.invalid:
            for column, error in record.errors.items():
                self.append(
                    ErrorRecord.create(
                        file=file,
                        sheet=result.sheet_index,
                        row=record.row_number,
                        column=column,
                        error_type=f"{error.reason.upper()}_MISMATCH" if error.reason != "batch" else "BATCH_VALIDATION",
                        message=str(error),
                    )
                )
                added += 1
        return added

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path:
        if not self._records:
            return self.file_path
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
