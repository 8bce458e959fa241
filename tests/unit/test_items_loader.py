"""Tests for loading classifier output into work items."""

from __future__ import annotations

from pathlib import Path

import pytest

from quote_estimator.adapters.items_loader import load_items, parse_items
from quote_estimator.core.errors import InvalidInput, UnknownCategory, UnknownComplexity
from quote_estimator.core.models import Category, Complexity

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


def _write(tmp_path: Path, content: str, filename: str = "items.yaml") -> Path:
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")
    return path


def test_load_items_fixture() -> None:
    items = load_items(FIXTURES / "items_basic.yaml")
    assert [item.category for item in items] == [Category.TABLE, Category.PAGE_CARD, Category.REPORT]
    assert all(item.complexity is Complexity.SIMPLE for item in items)
    assert items[0].title == "Customer table"


def test_load_items_bare_list(tmp_path: Path) -> None:
    path = _write(tmp_path, "- {category: enum, complexity: simple, baseHours: 1}\n")
    (item,) = load_items(path)
    assert item.category is Category.ENUM


def test_load_items_json_file(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        '{"items": [{"category": "query", "complexity": "very-complex", "baseHours": 2}]}',
        filename="items.json",
    )
    (item,) = load_items(path)
    assert item.complexity is Complexity.VERY_COMPLEX


def test_load_items_empty_file(tmp_path: Path) -> None:
    assert load_items(_write(tmp_path, "")) == []


def test_load_items_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_items(tmp_path / "absent.yaml")


def test_load_items_unparseable(tmp_path: Path) -> None:
    with pytest.raises(InvalidInput, match="Failed to parse"):
        load_items(_write(tmp_path, "items: [\n"))


def test_load_items_missing_items_key(tmp_path: Path) -> None:
    with pytest.raises(InvalidInput, match="missing 'items' key"):
        load_items(_write(tmp_path, "tasks: []\n"))


def test_load_items_scalar_root(tmp_path: Path) -> None:
    with pytest.raises(InvalidInput, match="expected a list or a mapping"):
        load_items(_write(tmp_path, "42\n"))


def test_parse_items_prefixes_index_and_keeps_error_type() -> None:
    records = [
        {"category": "table", "complexity": "simple", "baseHours": 2},
        {"category": "gizmo", "complexity": "simple", "baseHours": 2},
    ]
    with pytest.raises(UnknownCategory, match=r"^items\[1\]: Unknown category"):
        parse_items(records)


def test_parse_items_bad_complexity() -> None:
    with pytest.raises(UnknownComplexity, match=r"items\[0\]"):
        parse_items([{"category": "table", "complexity": "huge", "baseHours": 2}])


def test_parse_items_non_mapping_record() -> None:
    with pytest.raises(InvalidInput, match="expected a mapping, got str"):
        parse_items(["table"])


def test_load_items_non_utf8_file(tmp_path: Path) -> None:
    path = tmp_path / "items.yaml"
    path.write_bytes(b"items:\n  - {category: table, complexity: simple, baseHours: 2, title: \xff}\n")
    with pytest.raises(InvalidInput, match="not valid UTF-8"):
        load_items(path)
