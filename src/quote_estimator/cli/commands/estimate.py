"""Estimate command: work items to an hours and cost breakdown."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Optional

import typer

from quote_estimator.adapters.items_loader import load_items
from quote_estimator.adapters.sqlite_store import SQLiteQuoteStore
from quote_estimator.cli.commands._common import check_format, error, resolve_settings
from quote_estimator.core.calculator import compute_breakdown
from quote_estimator.core.errors import EstimationError
from quote_estimator.render import BreakdownReport, render_json_report, render_markdown_report

logger = logging.getLogger("quote_estimator")


def run(
    items_file: Path = typer.Argument(
        ..., help="Classifier output (YAML or JSON) listing work items."
    ),
    settings: Optional[Path] = typer.Option(
        None, "--settings", "-s", help="Path to a settings YAML (partial files allowed)."
    ),
    format: str = typer.Option(
        "markdown", "--format", help="Output format: markdown or json."
    ),
    title: str = typer.Option(
        "Effort Estimate", "--title", "-t", help="Report title (also the saved quote title)."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Reject settings outside their typical ranges."
    ),
    db: Optional[Path] = typer.Option(
        None, "--db", help="Save the quote and its tasks to this database for later rating."
    ),
) -> None:
    """Estimate hours and cost for a list of classified work items."""
    check_format(format)
    cfg = resolve_settings(settings)

    try:
        items = load_items(items_file)
    except FileNotFoundError:
        error(f"Items file not found: {items_file}", 2)
    except EstimationError as exc:
        error(f"Invalid items: {exc}", 2)

    try:
        breakdown = compute_breakdown(items, cfg, strict=strict)
    except EstimationError as exc:
        error(f"Estimation error: {exc}", 2)

    report = BreakdownReport.from_breakdown(breakdown, cfg, title=title)
    if format == "markdown":
        typer.echo(render_markdown_report(report))
    else:
        typer.echo(render_json_report(report), nl=False)

    if db is not None:
        try:
            with SQLiteQuoteStore(db) as store:
                saved = store.save_quote(breakdown, cfg, title=title)
        except (sqlite3.Error, OSError, ValueError) as exc:
            error(f"Failed to save quote: {exc}", 1)
        logger.info("Saved quote %d with %d tasks", saved.quote_id, len(saved.task_ids))
        task_ids = ", ".join(str(task_id) for task_id in saved.task_ids) or "none"
        typer.echo(f"Quote saved (id={saved.quote_id}, task ids: {task_ids}) in {db}", err=True)
