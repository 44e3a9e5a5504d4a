"""Domain models for the spreadsheet record importer.

Column declarations, schemas, imported records and the result containers returned
by the import and command line services.
"""

from .column_spec import CellValidationError, ColumnSpec, ValidationResult
from .error_record import ErrorRecord
from .import_result import ImportResult
from .record import Record
from .run_result import FileStat, RunResult
from .schema import Schema, SchemaError

__all__ = [
    # Declarations
    "ColumnSpec",
    "Schema",
    "SchemaError",
    # Import results
    "CellValidationError",
    "ValidationResult",
    "ImportResult",
    "Record",
    # Run reporting
    "ErrorRecord",
    "FileStat",
    "RunResult",
]
