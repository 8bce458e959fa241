"""Tests for YAML settings loading, validation and write-back."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from quote_estimator.adapters.settings_loader import (
    dump_settings,
    load_default_settings,
    load_settings,
    settings_from_mapping,
)
from quote_estimator.core.errors import InvalidSettings
from quote_estimator.core.models import EstimationSettings


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")
    return path


def test_packaged_defaults_match_model_defaults() -> None:
    assert load_default_settings() == EstimationSettings()


def test_load_settings_partial_file_merges_over_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path, "settings.yaml", "complexityMedium: 1.5\nhourlyRate: 120\n")

    settings = load_settings(path)

    assert settings.complexity_medium == 1.5
    assert settings.hourly_rate == 120.0
    assert settings.complexity_simple == 1.0


def test_load_settings_snake_case_keys(tmp_path: Path) -> None:
    path = _write(tmp_path, "settings.yaml", "hours_per_day: 8\n")
    assert load_settings(path).hours_per_day == 8.0


def test_load_settings_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path, "settings.yaml", "")
    assert load_settings(path) == EstimationSettings()


def test_load_settings_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Settings file not found"):
        load_settings(tmp_path / "nope.yaml")


def test_load_settings_invalid_yaml_raises(tmp_path: Path) -> None:
    path = _write(tmp_path, "settings.yaml", "complexitySimple: [1.0\n")
    with pytest.raises(InvalidSettings, match="Failed to parse YAML"):
        load_settings(path)


def test_load_settings_non_mapping_root_raises(tmp_path: Path) -> None:
    path = _write(tmp_path, "settings.yaml", "- 1.0\n- 1.3\n")
    with pytest.raises(InvalidSettings, match="root must be a YAML mapping"):
        load_settings(path)


def test_load_settings_unknown_key_names_field(tmp_path: Path) -> None:
    path = _write(tmp_path, "settings.yaml", "complexityEpic: 4.0\n")
    with pytest.raises(InvalidSettings) as exc_info:
        load_settings(path)
    message = str(exc_info.value)
    assert message.startswith(f"Invalid settings file at {path}")
    assert "- complexityEpic:" in message


def test_settings_from_mapping_lists_each_failing_field() -> None:
    with pytest.raises(InvalidSettings) as exc_info:
        settings_from_mapping({"hoursPerDay": "long", "testingPercent": "some"})
    lines = str(exc_info.value).splitlines()
    assert len(lines) == 2
    assert all(line.startswith("- ") for line in lines)


def test_dump_settings_round_trip(tmp_path: Path) -> None:
    settings = EstimationSettings(complexity_complex=1.85, hourly_rate=95.0)

    written = dump_settings(settings, tmp_path / "out" / "settings.yaml")

    assert written.exists()
    assert load_settings(written) == settings


def test_dump_settings_writes_camel_case_keys(tmp_path: Path) -> None:
    written = dump_settings(EstimationSettings(), tmp_path / "settings.yaml")
    data = yaml.safe_load(written.read_text(encoding="utf-8"))
    assert list(data)[0] == "complexitySimple"
    assert data["projectManagementPercent"] == 5.0


def test_load_settings_non_utf8_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_bytes(b"hourlyRate: \xff\n")
    with pytest.raises(InvalidSettings, match="not valid UTF-8"):
        load_settings(path)
