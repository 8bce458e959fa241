"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer

from quote_estimator.adapters.settings_loader import load_default_settings, load_settings
from quote_estimator.core.errors import InvalidSettings
from quote_estimator.core.models import EstimationSettings

OUTPUT_FORMATS = ("markdown", "json")


def resolve_settings(path: Optional[Path]) -> EstimationSettings:
    """Load settings from ``path`` or the packaged defaults, exiting on error."""
    try:
        return load_settings(path) if path else load_default_settings()
    except FileNotFoundError:
        error(f"Settings file not found: {path}", 2)
    except InvalidSettings as exc:
        error(f"Settings validation error: {exc}", 2)


def check_format(format: str) -> None:
    """Exit with a usage error unless ``format`` is a known output format."""
    if format not in OUTPUT_FORMATS:
        error(f"Unknown format: {format!r}. Use markdown or json.", 2)


def error(message: str, exit_code: int) -> NoReturn:
    """Print error to stderr and exit."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=exit_code)


def require_database(db: Path) -> None:
    """Exit with a runtime error when the quote database does not exist."""
    if not db.exists():
        typer.echo("Error: No quote database found.", err=True)
        typer.echo(f"Expected: {db}", err=True)
        raise typer.Exit(code=1)
