from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.column_spec import TYPE_NAMES, ColumnSpec
from ..models.schema import Schema, SchemaError

"""Schema definition loader.

Responsibilities:
- Load a YAML schema definition (config/schema.yml by default)
- Validate it against the bundled JSON schema (schema_definition.json)
- Build the immutable Schema / ColumnSpec objects used by RowImporter
- Apply defaults (type=string, required=false, sheet_index=0)

Example::

    sheet_index: 0
    columns:
      - name: Name
        required: true
      - name: Price
        type: decimal
        required: true
        format:
          - pattern: '^\\d+(\\.\\d+)?$'
"""

SCHEMA_PATH = Path(__file__).parent / "schema_definition.json"
DEFAULT_CONFIG_PATH = Path("config/schema.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class SchemaConfig:
    schema: Schema
    sheet_index: int = 0


def _validate_definition(data: dict[str, Any]) -> None:
    """Validate the raw definition against the JSON schema.

    Raises:
        ConfigError: the JSON schema file is missing/invalid, or data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"definition schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"schema definition validation failed: {e.message}") from e


def _build_format(entry: Any, column: str) -> Any:
    if isinstance(entry, str):
        return entry
    try:
        return re.compile(entry["pattern"])
    except re.error as e:
        raise ConfigError(f"column '{column}': invalid pattern {entry['pattern']!r}: {e}") from e


def _build_column(raw: dict[str, Any]) -> ColumnSpec:
    name = raw["name"]
    return ColumnSpec(
        name=name,
        value_type=TYPE_NAMES[raw.get("type", "string")],
        formats=tuple(_build_format(f, name) for f in raw.get("format", [])),
        required=bool(raw.get("required", False)),
        attribute=raw.get("attribute"),
    )


def build_schema_config(data: dict[str, Any]) -> SchemaConfig:
    _validate_definition(data)
    try:
        schema = Schema(
            columns=tuple(_build_column(c) for c in data["columns"]),
            name=data.get("name"),
        )
    except SchemaError as e:
        raise ConfigError(str(e)) from e
    return SchemaConfig(schema=schema, sheet_index=data.get("sheet_index", 0))


def load_schema_config(path: Path) -> SchemaConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")
    return build_schema_config(data)
