from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from .column_spec import CellValidationError

"""Record model: one imported worksheet row.

A Record holds the coerced attributes of the columns that passed validation and the
per-column validation errors (keyed by lower-cased column name). Attributes are
read-only once the importer has built the Record; batch validation hooks may still
add errors through add_error().
"""

__all__ = [
    "Record",
]


class Record:
    """Imported row.

    Attributes:
        row_number: 1-based index of the row in the source worksheet (header is row 0)
        attributes: Column name -> coerced value (read-only mapping)
        errors: Lower-cased column name -> CellValidationError
        translated_object: Last object produced by a Translator for this record
    """

    __slots__ = ("_row_number", "_attributes", "_errors", "translated_object")

    def __init__(
        self,
        row_number: int,
        attributes: Mapping[str, Any] | None = None,
        errors: Mapping[str, CellValidationError] | None = None,
    ) -> None:
        self._row_number = row_number
        self._attributes = MappingProxyType(dict(attributes or {}))
        self._errors: dict[str, CellValidationError] = dict(errors or {})
        self.translated_object: Any = None

    @property
    def row_number(self) -> int:
        return self._row_number

    @property
    def attributes(self) -> Mapping[str, Any]:
        return self._attributes

    @property
    def errors(self) -> Mapping[str, CellValidationError]:
        return MappingProxyType(self._errors)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    def __getitem__(self, name: str) -> Any:
        return self._attributes[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def add_error(self, column: str, error: CellValidationError | str) -> None:
        """Attach an error found after the row pass (e.g. by a cross-row check)."""
        if isinstance(error, str):
            error = CellValidationError(
                column=column,
                value=self._attributes.get(column),
                constraints=(error,),
                reason="batch",
            )
        self._errors[column.lower()] = error

    def __repr__(self) -> str:  # pragma: no cover (debug aid)
        return (
            f"Record(row_number={self._row_number}, attributes={dict(self._attributes)!r}, "
            f"errors={sorted(self._errors)!r})"
        )
