"""Load classifier output (YAML or JSON) into WorkItem lists."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from quote_estimator.core.errors import EstimationError, InvalidInput
from quote_estimator.core.models import WorkItem


def load_items(path: str | Path) -> list[WorkItem]:
    """Load work items from a classifier output file.

    Expected format (YAML, or JSON since JSON is valid YAML)::

        items:
          - {category: table, complexity: simple, baseHours: 3}

    A bare top-level list of items is accepted as well.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidInput: If the file is not UTF-8, cannot be parsed, or has the
            wrong shape.
        UnknownCategory / UnknownComplexity / InvalidInput: For a bad item,
            with the offending index prefixed to the message.
    """
    items_path = Path(path)
    if not items_path.exists():
        raise FileNotFoundError(f"Items file not found: {items_path}")

    try:
        raw = yaml.safe_load(items_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InvalidInput(f"Failed to parse items file {items_path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InvalidInput(f"Items file {items_path} is not valid UTF-8: {exc}") from exc

    return parse_items(_extract_item_list(raw, items_path))


def parse_items(records: list[Any]) -> list[WorkItem]:
    """Convert raw classifier records into WorkItems, failing on the first bad one."""
    items: list[WorkItem] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise InvalidInput(f"items[{index}]: expected a mapping, got {type(record).__name__}")
        try:
            items.append(WorkItem.from_mapping(record))
        except EstimationError as exc:
            raise type(exc)(f"items[{index}]: {exc}") from exc
    return items


def _extract_item_list(raw: object, path: Path) -> list[Any]:
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        records = raw.get("items")
        if records is None:
            raise InvalidInput(f"Items file {path}: missing 'items' key")
        if not isinstance(records, list):
            raise InvalidInput(f"Items file {path}: 'items' is not a list")
        return records
    if raw is None:
        return []
    raise InvalidInput(f"Items file {path}: expected a list or a mapping, got {type(raw).__name__}")
