"""History command: list saved quotes or show one quote's tasks and ratings."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

import typer

from quote_estimator.adapters.sqlite_store import DEFAULT_DB_PATH, SQLiteQuoteStore
from quote_estimator.cli.commands._common import check_format, error, require_database
from quote_estimator.render import (
    render_history_json,
    render_quote_detail_markdown,
    render_quote_list_markdown,
)


def run(
    quote_id: Optional[int] = typer.Argument(
        None, help="Show this quote's tasks and ratings instead of the quote list."
    ),
    db: Path = typer.Option(
        DEFAULT_DB_PATH,
        "--db",
        help="Path to quote database.",
    ),
    format: str = typer.Option(
        "markdown", "--format", help="Output format: markdown or json."
    ),
) -> None:
    """List saved quotes, newest first, or show one quote in detail."""
    check_format(format)
    require_database(db)

    try:
        with SQLiteQuoteStore(db) as store:
            payload = store.list_quotes() if quote_id is None else store.get_quote(quote_id)
    except KeyError:
        error(f"Quote not found: {quote_id}", 1)
    except sqlite3.Error as exc:
        error(f"Failed to read quote history: {exc}", 1)

    if format == "json":
        typer.echo(render_history_json(payload), nl=False)
    elif quote_id is None:
        typer.echo(render_quote_list_markdown(payload))
    else:
        typer.echo(render_quote_detail_markdown(payload))
