"""Rate command: record whether a saved task's estimate held."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

import typer

from quote_estimator.adapters.sqlite_store import DEFAULT_DB_PATH, SQLiteQuoteStore
from quote_estimator.cli.commands._common import error, require_database
from quote_estimator.core.errors import InvalidInput
from quote_estimator.core.models import TaskRating


def run(
    task_id: int = typer.Argument(..., help="Saved task id (printed by `estimate --db`)."),
    accurate: bool = typer.Option(
        False, "--accurate", help="The estimate held; no actual hours are recorded."
    ),
    actual_hours: Optional[float] = typer.Option(
        None, "--actual-hours", help="The estimate missed; record the hours actually spent."
    ),
    db: Path = typer.Option(
        DEFAULT_DB_PATH,
        "--db",
        help="Path to quote database.",
    ),
) -> None:
    """Rate a saved task as accurate, or inaccurate with actual hours."""
    if accurate == (actual_hours is not None):
        error("Provide exactly one of --accurate or --actual-hours.", 2)

    require_database(db)

    rating = TaskRating.ACCURATE if accurate else TaskRating.INACCURATE
    try:
        with SQLiteQuoteStore(db) as store:
            row = store.rate_task(task_id, rating, actual_hours)
    except InvalidInput as exc:
        error(str(exc), 2)
    except KeyError:
        error(f"Task not found: {task_id}", 1)
    except sqlite3.Error as exc:
        error(f"Failed to rate task: {exc}", 1)

    typer.echo(f"Task {task_id} rated {rating.value}")
    if row["actual_hours"] is not None:
        typer.echo(f"Estimated:  {row['adjusted_hours']:.1f} h")
        typer.echo(f"Actual:     {row['actual_hours']:.1f} h")
        if row["adjusted_hours"] > 0:
            typer.echo(f"Ratio:      {row['actual_hours'] / row['adjusted_hours']:.2f}")
