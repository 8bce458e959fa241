"""Calibrate command: suggest multipliers from rated history."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

import typer

from quote_estimator.adapters.settings_loader import dump_settings
from quote_estimator.adapters.sqlite_store import DEFAULT_DB_PATH, SQLiteQuoteStore
from quote_estimator.cli.commands._common import (
    check_format,
    error,
    require_database,
    resolve_settings,
)
from quote_estimator.core.calibration import accept_suggestions, build_calibration_report
from quote_estimator.core.errors import EstimationError
from quote_estimator.render import render_calibration_json, render_calibration_markdown


def run(
    db: Path = typer.Option(
        DEFAULT_DB_PATH,
        "--db",
        help="Path to quote database.",
    ),
    settings: Optional[Path] = typer.Option(
        None, "--settings", "-s", help="Settings YAML whose multipliers are being corrected."
    ),
    format: str = typer.Option(
        "markdown", "--format", help="Output format: markdown or json."
    ),
    accept: Optional[Path] = typer.Option(
        None,
        "--accept",
        help="Write the settings with suggested multipliers applied to this path.",
    ),
) -> None:
    """Suggest complexity multipliers from tasks rated inaccurate."""
    check_format(format)
    require_database(db)

    cfg = resolve_settings(settings)
    try:
        with SQLiteQuoteStore(db) as store:
            points = store.query_rated_points()
    except (sqlite3.Error, EstimationError) as exc:
        error(f"Failed to read rated tasks: {exc}", 1)

    report = build_calibration_report(points, cfg)
    if format == "markdown":
        typer.echo(render_calibration_markdown(report))
    else:
        typer.echo(render_calibration_json(report), nl=False)

    if accept is None:
        return
    if not report.suggestions:
        typer.echo("No suggestions to accept; settings not written.", err=True)
        return
    written = dump_settings(accept_suggestions(cfg, report.suggestions), accept)
    typer.echo(f"Accepted settings written to {written}", err=True)
