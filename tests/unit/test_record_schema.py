from __future__ import annotations

from decimal import Decimal

import pytest

from sheetrecords.models import CellValidationError, ColumnSpec, ImportResult, Record, Schema, SchemaError


def test_record_creation_minimal():
    record = Record(3)
    assert record.row_number == 3
    assert dict(record.attributes) == {}
    assert dict(record.errors) == {}
    assert record.translated_object is None
    assert record.is_valid is True


def test_record_attribute_lookup():
    record = Record(1, {"Name": "Widget", "Price": Decimal("9.99")})
    assert record["Name"] == "Widget"
    assert record.get("Price") == Decimal("9.99")
    assert record.get("Missing", "x") == "x"
    with pytest.raises(KeyError):
        record["Missing"]


def test_record_row_number_and_attributes_are_read_only():
    record = Record(1, {"Name": "Widget"})
    with pytest.raises(AttributeError):
        record.row_number = 2
    with pytest.raises(TypeError):
        record.attributes["Name"] = "Other"
    with pytest.raises(TypeError):
        record.errors["name"] = CellValidationError("Name", "")


def test_record_copies_input_mappings():
    attrs = {"Name": "Widget"}
    record = Record(1, attrs)
    attrs["Name"] = "Changed"
    assert record["Name"] == "Widget"


def test_record_add_error_lower_cases_key():
    record = Record(1, {"SKU": "A1"})
    record.add_error("SKU", "duplicate SKU")
    assert record.is_valid is False
    err = record.errors["sku"]
    assert err.reason == "batch"
    assert err.value == "A1"
    assert "duplicate SKU" in str(err)


def test_schema_rejects_duplicate_names():
    with pytest.raises(SchemaError) as e:
        Schema.of(ColumnSpec("A"), ColumnSpec("B"), ColumnSpec("A"))
    assert "'A'" in str(e.value)


def test_schema_keeps_declaration_order():
    schema = Schema.of(ColumnSpec("B"), ColumnSpec("A"), ColumnSpec("C", required=True))
    assert schema.names == ["B", "A", "C"]
    assert [c.name for c in schema] == ["B", "A", "C"]
    assert len(schema) == 3
    assert [c.name for c in schema.required_columns] == ["C"]


def test_schema_match_header_by_exact_name():
    schema = Schema.of(ColumnSpec("Name"), ColumnSpec("Price"))
    matched = schema.match_header(["Price", "Notes", "name", "Name"])
    assert [c.name if c else None for c in matched] == ["Price", None, None, "Name"]


def test_schema_missing_required():
    schema = Schema.of(ColumnSpec("Name", required=True), ColumnSpec("Price", required=True), ColumnSpec("Notes"))
    matched = schema.match_header(["Name", "Notes"])
    assert [c.name for c in schema.missing_required(matched)] == ["Price"]


def test_import_result_views_partition_all():
    good = Record(1, {"Name": "A"})
    bad = Record(2, {}, {"price": CellValidationError("Price", "bad")})
    later = Record(4, {"Name": "C"})
    result = ImportResult(records=(good, bad, later), headers=("Name", "Price"))

    assert len(result) == 3
    assert result[1] is bad
    assert result.all == [good, bad, later]
    assert result.valid == [good, later]
    assert result.invalid == [bad]
    assert len(result.valid) + len(result.invalid) == len(result.all)


def test_import_result_reflects_errors_added_later():
    record = Record(1, {"Name": "A"})
    result = ImportResult(records=(record,))
    assert result.valid == [record]
    record.add_error("Name", "taken")
    assert result.invalid == [record]
    assert result.valid == []


def test_schema_rejects_names_differing_only_by_case():
    # errors are keyed by lower-cased column name
    with pytest.raises(SchemaError) as e:
        Schema.of(ColumnSpec("Price"), ColumnSpec("price"))
    assert "'price'" in str(e.value)
