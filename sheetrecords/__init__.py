r"""Spreadsheet rows -> typed, validated records.

    schema = Schema.of(
        ColumnSpec("Name", str, required=True),
        ColumnSpec("Price", Decimal, formats=(re.compile(r"^\d+(\.\d+)?$"),), required=True),
    )
    result = RowImporter(schema).import_records("products.xlsx")
    for record in result.invalid:
        print(record.row_number, dict(record.errors))

    translator = Translator(schema)
    translator.bind(Product)
    products = translator.translate_valid(result)
"""

from .excel.reader import open_workbook
from .models import (
    CellValidationError,
    ColumnSpec,
    ImportResult,
    Record,
    Schema,
    SchemaError,
    ValidationResult,
)
from .services.row_importer import MissingColumnError, RowImporter, import_records
from .services.translator import TranslationBinding, TranslationError, Translator

__all__ = [
    "CellValidationError",
    "ColumnSpec",
    "ImportResult",
    "MissingColumnError",
    "Record",
    "RowImporter",
    "Schema",
    "SchemaError",
    "TranslationBinding",
    "TranslationError",
    "Translator",
    "ValidationResult",
    "import_records",
    "open_workbook",
]
