"""YAML-backed estimation settings: load, merge over defaults, and write back."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from importlib.resources import as_file, files
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from quote_estimator.core.errors import InvalidSettings
from quote_estimator.core.models import EstimationSettings

DEFAULT_SETTINGS_FILENAME = "default_settings.yaml"
logger = logging.getLogger("quote_estimator")


def load_settings(path: str | Path) -> EstimationSettings:
    """Load and validate a settings file.

    Fields absent from the file take their documented defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidSettings: If the file is not UTF-8 or not valid YAML, its root is not a
            mapping, or a field fails validation.
    """
    settings_path = Path(path)
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    try:
        raw_data = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InvalidSettings(f"Failed to parse YAML settings at {settings_path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InvalidSettings(f"Settings file {settings_path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise OSError(f"Failed to read settings file {settings_path}: {exc}") from exc

    if raw_data is None:
        raw_data = {}
    if not isinstance(raw_data, dict):
        raise InvalidSettings(
            f"Invalid settings file at {settings_path}: root must be a YAML mapping"
        )

    try:
        settings = settings_from_mapping(raw_data)
    except InvalidSettings as exc:
        raise InvalidSettings(f"Invalid settings file at {settings_path}:\n{exc}") from exc
    logger.debug("Loaded settings from %s", settings_path)
    return settings


def load_default_settings() -> EstimationSettings:
    """Load the packaged default settings."""
    resource = files("quote_estimator").joinpath(DEFAULT_SETTINGS_FILENAME)
    with as_file(resource) as default_path:
        return load_settings(default_path)


def settings_from_mapping(raw: Mapping[str, Any]) -> EstimationSettings:
    """Merge a partial settings record over the defaults.

    Keys may be snake_case (``hours_per_day``) or camelCase (``hoursPerDay``).

    Raises:
        InvalidSettings: One ``- field: message`` line per failing field.
    """
    try:
        return EstimationSettings.model_validate(dict(raw))
    except ValidationError as exc:
        raise InvalidSettings(_format_validation_errors(exc)) from exc


def dump_settings(settings: EstimationSettings, path: str | Path) -> Path:
    """Write settings as YAML with camelCase keys and return the path."""
    settings_path = Path(path)
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    payload = settings.model_dump(by_alias=True)
    settings_path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
    return settings_path


def _format_validation_errors(exc: ValidationError) -> str:
    details: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        details.append(f"{location}: {error['msg']}")
    return "\n".join(f"- {line}" for line in details)
