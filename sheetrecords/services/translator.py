from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..models.import_result import ImportResult
from ..models.record import Record
from ..models.schema import Schema

logger = logging.getLogger(__name__)

"""Translation of imported Records onto a target type.

A Translator holds the Schema and a TranslationBinding (target type, optional custom
constructor, optional after-translate hook). Each column is copied onto the target in
Schema declaration order, either by the column's own translate rule or by setting the
same-named attribute when the Record has a value for it.

Binding is configuration: bind() replaces any previous binding and is not synchronized
against translations running at the same time.
"""

__all__ = [
    "TranslationBinding",
    "TranslationError",
    "Translator",
]


class TranslationError(Exception):
    """Raised when translating without a binding."""


@dataclass(frozen=True)
class TranslationBinding:
    """Target of a translation.

    Attributes:
        target_type: Type instantiated (without arguments) for each Record
        constructor: Optional Record -> instance factory used instead of target_type()
        after_translate: Optional hook called once per batch with the original Records
    """
    target_type: type
    constructor: Callable[[Record], Any] | None = field(default=None, compare=False)
    after_translate: Callable[[list[Record]], None] | None = field(default=None, compare=False)


class Translator:
    def __init__(self, schema: Schema, binding: TranslationBinding | None = None) -> None:
        self.schema = schema
        self.binding = binding

    def bind(
        self,
        target_type: type,
        constructor: Callable[[Record], Any] | None = None,
        after_translate: Callable[[list[Record]], None] | None = None,
    ) -> TranslationBinding:
        """Register the target type; a later call replaces the earlier binding."""
        self.binding = TranslationBinding(
            target_type=target_type,
            constructor=constructor,
            after_translate=after_translate,
        )
        logger.debug(f"translation bound to {target_type.__name__}")
        return self.binding

    def _require_binding(self) -> TranslationBinding:
        if self.binding is None:
            raise TranslationError("no target type bound; call bind() first")
        return self.binding

    def translate_one(self, record: Record) -> Any:
        """Build a fresh target instance for record and remember it as translated_object."""
        binding = self._require_binding()
        if binding.constructor is not None:
            target = binding.constructor(record)
        else:
            target = binding.target_type()
        for column in self.schema.columns:
            column.translate_onto(target, record)
        record.translated_object = target
        return target

    def translate_batch(self, records: Sequence[Record]) -> list[Any]:
        """Translate records in order, then run the after-translate hook once."""
        binding = self._require_binding()
        # caller's sequence goes to the hook unchanged
        translated = [self.translate_one(r) for r in list(records)]
        if binding.after_translate is not None:
            binding.after_translate(records)
        logger.debug(f"translated {len(translated)} records to {binding.target_type.__name__}")
        return translated

    def translate_all(self, result: ImportResult) -> list[Any]:
        return self.translate_batch(result.all)

    def translate_valid(self, result: ImportResult) -> list[Any]:
        return self.translate_batch(result.valid)

    def translate_invalid(self, result: ImportResult) -> list[Any]:
        return self.translate_batch(result.invalid)
