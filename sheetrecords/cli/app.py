from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_schema_config
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, setup_logging
from ..services.orchestrator import ProcessingError, process_all
from ..services.summary import render_summary_line

"""Command line entrypoint.

    python -m sheetrecords.cli [--config config/schema.yml] [--sheet N] [--debug] FILE_OR_DIR...

Flow:
- Load and validate the schema definition
- Import every file, buffering cell errors into logs/errors-*.log
- Print the SUMMARY line and exit with the run status
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sheetrecords", description="Validate spreadsheet rows against a column schema")
    p.add_argument("paths", nargs="+", type=Path, help="Spreadsheet files or directories")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Schema definition YAML")
    p.add_argument("--sheet", type=int, default=None, help="Worksheet index (overrides config)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an empty list from tests must not fall back to pytest's argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    try:
        cfg = load_schema_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if args.sheet is not None:
        cfg = replace(cfg, sheet_index=args.sheet)

    error_log = ErrorLogBuffer()
    try:
        result = process_all(cfg, args.paths, error_log=error_log)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if len(error_log):
        path = error_log.flush()
        logger.info(f"error log written: {path}")

    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0 or result.invalid_records > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
