from __future__ import annotations

from decimal import Decimal

import pytest

from sheetrecords import TranslationError, Translator
from sheetrecords.models import CellValidationError, ColumnSpec, ImportResult, Record, Schema


class Product:
    def __init__(self) -> None:
        self.Name = None
        self.Price = Decimal("0")
        self.source_row = None


@pytest.fixture()
def records() -> list[Record]:
    return [
        Record(1, {"Name": "Widget", "Price": Decimal("9.99")}),
        Record(2, {"Name": "Gadget"}, {"price": CellValidationError("Price", "bad")}),
        Record(4, {"Name": "Gizmo", "Price": Decimal("1")}),
    ]


@pytest.fixture()
def result(records) -> ImportResult:
    return ImportResult(records=tuple(records))


@pytest.fixture()
def translator(product_schema) -> Translator:
    t = Translator(product_schema)
    t.bind(Product)
    return t


def test_translate_one_copies_columns(translator, records):
    product = translator.translate_one(records[0])
    assert isinstance(product, Product)
    assert product.Name == "Widget"
    assert product.Price == Decimal("9.99")
    assert records[0].translated_object is product


def test_translate_one_keeps_target_default_for_missing_attribute(translator, records):
    product = translator.translate_one(records[1])
    assert product.Name == "Gadget"
    assert product.Price == Decimal("0")


def test_retranslation_replaces_translated_object(translator, records):
    first = translator.translate_one(records[0])
    second = translator.translate_one(records[0])
    assert first is not second
    assert records[0].translated_object is second


def test_custom_constructor(product_schema, records):
    t = Translator(product_schema)

    def build(record):
        p = Product()
        p.source_row = record.row_number
        return p

    t.bind(Product, constructor=build)
    product = t.translate_one(records[2])
    assert product.source_row == 4
    assert product.Name == "Gizmo"


def test_columns_translated_in_declaration_order(records):
    order = []

    def rule(name):
        def apply(target, record):
            order.append(name)
        return apply

    schema = Schema.of(ColumnSpec("Price", translate=rule("Price")), ColumnSpec("Name", translate=rule("Name")))
    t = Translator(schema)
    t.bind(Product)
    t.translate_one(records[0])
    assert order == ["Price", "Name"]


def test_translate_batch_preserves_order_and_calls_hook_with_records(translator, records):
    hook_calls = []
    translator.bind(Product, after_translate=lambda rs: hook_calls.append(rs))

    products = translator.translate_batch(records)

    assert [p.Name for p in products] == ["Widget", "Gadget", "Gizmo"]
    assert len(hook_calls) == 1
    assert hook_calls[0] == records
    assert all(isinstance(r, Record) for r in hook_calls[0])
    assert [r.translated_object for r in records] == products


def test_translate_all_valid_invalid(translator, result):
    assert len(translator.translate_all(result)) == len(result)
    assert [p.Name for p in translator.translate_valid(result)] == ["Widget", "Gizmo"]
    assert [p.Name for p in translator.translate_invalid(result)] == ["Gadget"]


def test_translate_valid_only_touches_valid_records(product_schema, result):
    t = Translator(product_schema)
    t.bind(Product)
    t.translate_valid(result)
    assert result.invalid[0].translated_object is None
    assert all(r.translated_object is not None for r in result.valid)


def test_bind_last_registration_wins(product_schema, records):
    class Other:
        pass

    t = Translator(product_schema)
    t.bind(Product, after_translate=lambda rs: pytest.fail("replaced hook called"))
    binding = t.bind(Other)
    assert t.binding is binding
    assert binding.after_translate is None
    assert isinstance(t.translate_batch(records)[0], Other)


def test_translate_without_binding_raises(product_schema, records):
    with pytest.raises(TranslationError):
        Translator(product_schema).translate_one(records[0])
    with pytest.raises(TranslationError):
        Translator(product_schema).translate_batch(records)


def test_translate_empty_batch_still_calls_hook(product_schema):
    calls = []
    t = Translator(product_schema)
    t.bind(Product, after_translate=calls.append)
    assert t.translate_batch([]) == []
    assert calls == [[]]


def test_after_translate_receives_callers_list(translator, records):
    received = []
    translator.bind(Product, after_translate=received.append)
    translator.translate_batch(records)
    assert received[0] is records
