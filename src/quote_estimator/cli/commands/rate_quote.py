"""Rate-quote command: record actual total hours and notes for a saved quote."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

import typer

from quote_estimator.adapters.sqlite_store import DEFAULT_DB_PATH, SQLiteQuoteStore
from quote_estimator.cli.commands._common import error, require_database
from quote_estimator.core.errors import InvalidInput


def run(
    quote_id: int = typer.Argument(..., help="Saved quote id (see `history`)."),
    actual_total_hours: Optional[float] = typer.Option(
        None, "--actual-total-hours", help="Hours the whole quote actually took."
    ),
    notes: Optional[str] = typer.Option(None, "--notes", help="Free-text feedback."),
    db: Path = typer.Option(
        DEFAULT_DB_PATH,
        "--db",
        help="Path to quote database.",
    ),
) -> None:
    """Record feedback on a whole quote."""
    if actual_total_hours is None and not (notes and notes.strip()):
        error("Provide --actual-total-hours, --notes, or both.", 2)
    require_database(db)

    try:
        with SQLiteQuoteStore(db) as store:
            rating = store.rate_quote(quote_id, actual_total_hours, notes)
            total_hours = store.get_quote(quote_id)["quote"]["total_hours"]
    except InvalidInput as exc:
        error(str(exc), 2)
    except KeyError:
        error(f"Quote not found: {quote_id}", 1)
    except sqlite3.Error as exc:
        error(f"Failed to rate quote: {exc}", 1)

    typer.echo(f"Quote {quote_id} rated (rating id={rating['id']})")
    if rating["actual_total_hours"] is not None:
        typer.echo(f"Estimated:  {total_hours:.1f} h")
        typer.echo(f"Actual:     {rating['actual_total_hours']:.1f} h")
        if total_hours > 0:
            typer.echo(f"Ratio:      {rating['actual_total_hours'] / total_hours:.2f}")
