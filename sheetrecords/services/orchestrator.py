from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..config.loader import SchemaConfig
from ..excel.reader import Workbook, open_workbook
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import ErrorRecord
from ..models.run_result import FileStat, RunResult
from .progress import ProgressTracker
from .row_importer import MissingColumnError, RowImporter

logger = logging.getLogger(__name__)

"""Service orchestration for command line runs.

Imports every given spreadsheet with the configured Schema, buffers per-cell errors
into the error log and aggregates the totals of the run.

A file counts as failed when its header lacks a required column or the workbook
cannot be read; invalid records do not fail a file.
"""

SUPPORTED_SUFFIXES = {".xlsx", ".xlsm", ".xls", ".ods"}


class ProcessingError(Exception):
    """Fatal error preventing the run from starting."""


def collect_files(paths: Iterable[Path]) -> list[Path]:
    """Expand directories (non-recursive) into supported spreadsheet files.

    Raises:
        ProcessingError: a given path does not exist
    """
    files: list[Path] = []
    for p in paths:
        if not p.exists():
            raise ProcessingError(f"path not found: {p}")
        if p.is_dir():
            files.extend(sorted(f for f in p.iterdir() if f.is_file() and f.suffix.lower() in SUPPORTED_SUFFIXES))
        else:
            files.append(p)
    return files


def process_all(
    config: SchemaConfig,
    paths: Iterable[Path],
    error_log: ErrorLogBuffer | None = None,
    opener: Callable[[Any], Workbook] = open_workbook,
) -> RunResult:
    """Import each file and return aggregated totals.

    Args:
        config: Loaded schema definition
        paths: Files or directories to import
        error_log: Buffer receiving one ErrorRecord per failed cell / failed file
        opener: Workbook opener (pandas reader by default)
    """
    start_time = datetime.now(UTC)
    files = collect_files(paths)
    importer = RowImporter(config.schema, opener)

    file_stats: list[FileStat] = []

    with ProgressTracker(len(files)) as progress:
        for path in files:
            progress.start_file(path)
            t0 = time.perf_counter()
            try:
                result = importer.import_records(path, config.sheet_index)
            except MissingColumnError as e:
                logger.error(f"{path.name}: {e}")
                _log_file_error(error_log, path, config.sheet_index, "MISSING_COLUMNS", str(e))
                file_stats.append(_failed_stat(path, time.perf_counter() - t0, str(e)))
                progress.finish_file(status="failed")
                continue
            except Exception as e:
                # unreadable file, missing reader engine or missing worksheet: fails this file only
                logger.error(f"{path.name}: cannot read workbook: {e}")
                _log_file_error(error_log, path, config.sheet_index, "READ_ERROR", str(e))
                file_stats.append(_failed_stat(path, time.perf_counter() - t0, str(e)))
                progress.finish_file(status="failed")
                continue

            elapsed = time.perf_counter() - t0
            invalid = len(result.invalid)
            if error_log is not None and invalid:
                error_log.extend_from_result(path.name, result)
            if invalid:
                logger.warning(f"{path.name}: {invalid} of {len(result)} records invalid")
            else:
                logger.info(f"{path.name}: {len(result)} records imported")
            file_stats.append(
                FileStat(
                    file_name=path.name,
                    status="success",
                    records=len(result),
                    valid=len(result) - invalid,
                    invalid=invalid,
                    skipped_rows=result.skipped_rows,
                    elapsed_seconds=elapsed,
                )
            )
            progress.finish_file(records=len(result))

    end_time = datetime.now(UTC)
    ok = [s for s in file_stats if s.status == "success"]
    return RunResult(
        success_files=len(ok),
        failed_files=len(file_stats) - len(ok),
        total_records=sum(s.records for s in ok),
        valid_records=sum(s.valid for s in ok),
        invalid_records=sum(s.invalid for s in ok),
        skipped_rows=sum(s.skipped_rows for s in ok),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )


def _failed_stat(path: Path, elapsed: float, error: str) -> FileStat:
    return FileStat(
        file_name=path.name,
        status="failed",
        records=0,
        valid=0,
        invalid=0,
        skipped_rows=0,
        elapsed_seconds=elapsed,
        error=error,
    )


def _log_file_error(error_log: ErrorLogBuffer | None, path: Path, sheet: int, error_type: str, message: str) -> None:
    if error_log is None:
        return
    error_log.append(
        ErrorRecord.create(file=path.name, sheet=sheet, row=-1, column="", error_type=error_type, message=message)
    )
