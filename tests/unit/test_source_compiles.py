from __future__ import annotations

import warnings
from pathlib import Path

import pytest

import sheetrecords

PACKAGE_DIR = Path(sheetrecords.__file__).parent


@pytest.mark.parametrize("path", sorted(PACKAGE_DIR.rglob("*.py")), ids=lambda p: str(p.relative_to(PACKAGE_DIR)))
def test_module_source_has_no_invalid_escapes(path: Path):
    source = path.read_text(encoding="utf-8")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(source, str(path), "exec")
