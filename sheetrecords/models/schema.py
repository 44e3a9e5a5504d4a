from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .column_spec import ColumnSpec, SchemaError

if TYPE_CHECKING:
    from .record import Record

"""Schema: ordered ColumnSpecs of one record type.

Header matching is by name; declaration order only drives translation order.
"""

__all__ = [
    "Schema",
    "SchemaError",
]


@dataclass(frozen=True)
class Schema:
    """Column declarations plus an optional cross-row validation hook.

    validate_all is called once per import with the full ordered Record list and may
    attach errors through Record.add_error().
    """

    columns: tuple[ColumnSpec, ...]
    validate_all: Callable[[list[Record]], None] | None = field(default=None, compare=False)
    name: str | None = None

    def __post_init__(self) -> None:
        columns = tuple(self.columns)
        object.__setattr__(self, "columns", columns)
        # errors are keyed by lower-cased name, so names must differ beyond case
        seen: set[str] = set()
        duplicates = []
        for col in columns:
            key = col.name.lower()
            if key in seen:
                duplicates.append(col.name)
            seen.add(key)
        if duplicates:
            raise SchemaError(f"duplicate column names: {sorted(set(duplicates))}")

    @classmethod
    def of(cls, *columns: ColumnSpec, validate_all: Callable[[list[Record]], None] | None = None, name: str | None = None) -> Schema:
        return cls(columns=tuple(columns), validate_all=validate_all, name=name)

    def __iter__(self):
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def required_columns(self) -> list[ColumnSpec]:
        return [c for c in self.columns if c.required]

    def column(self, name: str) -> ColumnSpec | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def match_header(self, header: Sequence[str]) -> list[ColumnSpec | None]:
        """Map each header position to the ColumnSpec with exactly that name (or None)."""
        return [self.column(text) for text in header]

    def missing_required(self, matched: Iterable[ColumnSpec | None]) -> list[ColumnSpec]:
        present = {c.name for c in matched if c is not None}
        return [c for c in self.required_columns if c.name not in present]
