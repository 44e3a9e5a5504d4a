from __future__ import annotations

from ..models.run_result import RunResult

"""SUMMARY line rendering for command line runs."""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small values
        return f"{seconds:.6f}".rstrip('0').rstrip('.')
    return f"{seconds:.3f}".rstrip('0').rstrip('.')


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line of a run.

    Format:
    SUMMARY files={total} failed={failed} records={records} valid={valid}
    invalid={invalid} skipped_rows={skipped} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2023, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2023, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     success_files=1, failed_files=0, total_records=10, valid_records=9,
        ...     invalid_records=1, skipped_rows=2, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=1 failed=0 records=10 valid=9 invalid=1 skipped_rows=2 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"failed={result.failed_files} "
        f"records={result.total_records} "
        f"valid={result.valid_records} "
        f"invalid={result.invalid_records} "
        f"skipped_rows={result.skipped_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
