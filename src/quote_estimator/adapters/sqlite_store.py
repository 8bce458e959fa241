"""SQLite persistence adapter for saved quotes and task ratings."""

from __future__ import annotations

import json
import math
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from threading import RLock
from typing import Any

from quote_estimator.core.calculator import multiplier_used
from quote_estimator.core.errors import InvalidInput
from quote_estimator.core.models import (
    Breakdown,
    EstimationSettings,
    RatedDataPoint,
    TaskRating,
    parse_complexity,
)

DEFAULT_DB_PATH = Path.home() / ".quote-estimator" / "quotes.db"


@dataclass(frozen=True)
class SavedQuote:
    """Identifiers assigned when a breakdown is saved."""

    quote_id: int
    task_ids: tuple[int, ...]


class SQLiteQuoteStore:
    """SQLite-backed storage for quotes, their tasks, and task and quote ratings."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = RLock()
        self._connection = sqlite3.connect(self._path, check_same_thread=False)
        self._connection.row_factory = sqlite3.Row
        self._enable_pragmas()
        self._create_schema()

    def __enter__(self) -> SQLiteQuoteStore:
        """Allow `with SQLiteQuoteStore(...) as store:` usage."""
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the backing SQLite connection."""
        with self._lock:
            self._connection.close()

    def journal_mode(self) -> str:
        """Return the active SQLite journal mode."""
        with self._lock:
            row = self._connection.execute("PRAGMA journal_mode").fetchone()
        if row is None:
            return ""
        return str(row[0]).lower()

    def save_quote(
        self,
        breakdown: Breakdown,
        settings: EstimationSettings,
        *,
        title: str,
        created_at: str | None = None,
    ) -> SavedQuote:
        """Persist a breakdown, its tasks, and the settings it was computed with."""
        if not title.strip():
            raise ValueError("title must be non-empty")
        timestamp = _normalize_timestamp(created_at)
        snapshot = json.dumps(settings.model_dump(by_alias=True), sort_keys=True)

        task_ids: list[int] = []
        with self._lock:
            with self._connection:
                cursor = self._connection.execute(
                    """
                    INSERT INTO quotes (
                      title,
                      created_at,
                      settings_snapshot,
                      subtotal_hours,
                      total_hours,
                      total_days,
                      task_count
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        title.strip(),
                        timestamp,
                        snapshot,
                        breakdown.subtotal_hours,
                        breakdown.total_hours,
                        breakdown.total_days,
                        len(breakdown.items),
                    ),
                )
                quote_id = int(cursor.lastrowid)
                for index, entry in enumerate(breakdown.items):
                    item = entry.item
                    task_cursor = self._connection.execute(
                        """
                        INSERT INTO quote_tasks (
                          quote_id,
                          task_index,
                          title,
                          category,
                          complexity,
                          base_hours,
                          adjusted_hours,
                          multiplier_used,
                          created_at
                        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            quote_id,
                            index,
                            item.title or "",
                            item.category.value,
                            item.complexity.value,
                            item.base_hours,
                            entry.adjusted_hours,
                            multiplier_used(item.base_hours, entry.adjusted_hours, settings),
                            timestamp,
                        ),
                    )
                    task_ids.append(int(task_cursor.lastrowid))
        return SavedQuote(quote_id=quote_id, task_ids=tuple(task_ids))

    def rate_task(
        self,
        task_id: int,
        rating: TaskRating | str,
        actual_hours: float | None = None,
    ) -> dict[str, Any]:
        """Record a rating against a saved task and return the updated row.

        An inaccurate rating requires actual hours > 0. An accurate rating
        clears any actual hours previously recorded.

        Raises:
            InvalidInput: If an inaccurate rating has no usable actual hours.
            KeyError: If the task does not exist.
        """
        resolved = TaskRating(rating)
        _validate_rating(resolved, actual_hours)
        stored_actual = actual_hours if resolved is TaskRating.INACCURATE else None

        with self._lock:
            with self._connection:
                cursor = self._connection.execute(
                    "UPDATE quote_tasks SET rating = ?, actual_hours = ? WHERE id = ?",
                    (resolved.value, stored_actual, task_id),
                )
            if cursor.rowcount == 0:
                raise KeyError(f"Task not found: {task_id}")
            row = self._connection.execute(
                "SELECT * FROM quote_tasks WHERE id = ?",
                (task_id,),
            ).fetchone()
        return dict(row)

    def list_quotes(self) -> list[dict[str, Any]]:
        """Return quote summaries, newest first."""
        with self._lock:
            rows = self._connection.execute(
                """
                SELECT id, title, created_at, subtotal_hours, total_hours, total_days, task_count
                FROM quotes
                ORDER BY created_at DESC, id DESC
                """,
            ).fetchall()
        return [dict(row) for row in rows]

    def get_quote_tasks(self, quote_id: int) -> list[dict[str, Any]]:
        """Return the tasks saved with a quote, in input order."""
        with self._lock:
            rows = self._connection.execute(
                """
                SELECT * FROM quote_tasks
                WHERE quote_id = ?
                ORDER BY task_index ASC
                """,
                (quote_id,),
            ).fetchall()
        return [dict(row) for row in rows]

    def get_quote(self, quote_id: int) -> dict[str, Any]:
        """Return one quote with its tasks and quote-level ratings.

        Raises:
            KeyError: If the quote does not exist.
        """
        with self._lock:
            row = self._connection.execute(
                "SELECT * FROM quotes WHERE id = ?",
                (quote_id,),
            ).fetchone()
            if row is None:
                raise KeyError(f"Quote not found: {quote_id}")
            ratings = self._connection.execute(
                """
                SELECT id, quote_id, actual_total_hours, notes, created_at
                FROM quote_ratings
                WHERE quote_id = ?
                ORDER BY created_at ASC, id ASC
                """,
                (quote_id,),
            ).fetchall()
            tasks = self.get_quote_tasks(quote_id)
        return {
            "quote": dict(row),
            "tasks": tasks,
            "ratings": [dict(rating) for rating in ratings],
        }

    def rate_quote(
        self,
        quote_id: int,
        actual_total_hours: float | None = None,
        notes: str | None = None,
        *,
        created_at: str | None = None,
    ) -> dict[str, Any]:
        """Record feedback on a whole quote and return the stored rating.

        Each call appends a rating; earlier ratings are kept.

        Raises:
            InvalidInput: If actual_total_hours is given but not finite and > 0.
            KeyError: If the quote does not exist.
        """
        if actual_total_hours is not None and (
            not math.isfinite(actual_total_hours) or actual_total_hours <= 0
        ):
            raise InvalidInput(
                f"actual_total_hours must be finite and > 0, got {actual_total_hours}"
            )
        cleaned_notes = notes.strip() if notes is not None else None
        timestamp = _normalize_timestamp(created_at)

        with self._lock:
            exists = self._connection.execute(
                "SELECT 1 FROM quotes WHERE id = ?",
                (quote_id,),
            ).fetchone()
            if exists is None:
                raise KeyError(f"Quote not found: {quote_id}")
            with self._connection:
                cursor = self._connection.execute(
                    """
                    INSERT INTO quote_ratings (quote_id, actual_total_hours, notes, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (quote_id, actual_total_hours, cleaned_notes or None, timestamp),
                )
            row = self._connection.execute(
                "SELECT * FROM quote_ratings WHERE id = ?",
                (cursor.lastrowid,),
            ).fetchone()
        return dict(row)

    def query_rated_points(self) -> list[RatedDataPoint]:
        """Return calibration input: tasks rated inaccurate with actual hours.

        Tasks rated accurate are not returned, so they never pull the
        weighted correction toward 1.0.
        """
        with self._lock:
            rows = self._connection.execute(
                """
                SELECT complexity, adjusted_hours, actual_hours, created_at
                FROM quote_tasks
                WHERE rating = ? AND actual_hours IS NOT NULL
                ORDER BY created_at ASC, id ASC
                """,
                (TaskRating.INACCURATE.value,),
            ).fetchall()
        return [
            RatedDataPoint(
                complexity=parse_complexity(row["complexity"]),
                adjusted_hours=float(row["adjusted_hours"]),
                actual_hours=float(row["actual_hours"]),
                created_at=_parse_timestamp(row["created_at"]),
            )
            for row in rows
        ]

    def _enable_pragmas(self) -> None:
        with self._lock:
            self._connection.execute("PRAGMA journal_mode=WAL")
            self._connection.execute("PRAGMA foreign_keys=ON")
            self._connection.execute("PRAGMA busy_timeout=5000")

    def _create_schema(self) -> None:
        with self._lock:
            with self._connection:
                self._connection.execute(
                    """
                    CREATE TABLE IF NOT EXISTS quotes (
                      id INTEGER PRIMARY KEY AUTOINCREMENT,
                      title TEXT NOT NULL,
                      created_at TEXT NOT NULL,
                      settings_snapshot TEXT NOT NULL,
                      subtotal_hours REAL NOT NULL,
                      total_hours REAL NOT NULL,
                      total_days REAL NOT NULL,
                      task_count INTEGER NOT NULL
                    )
                    """,
                )
                self._connection.execute(
                    """
                    CREATE TABLE IF NOT EXISTS quote_tasks (
                      id INTEGER PRIMARY KEY AUTOINCREMENT,
                      quote_id INTEGER NOT NULL,
                      task_index INTEGER NOT NULL,
                      title TEXT NOT NULL,
                      category TEXT NOT NULL,
                      complexity TEXT NOT NULL,
                      base_hours REAL NOT NULL,
                      adjusted_hours REAL NOT NULL,
                      multiplier_used REAL NOT NULL,
                      rating TEXT,
                      actual_hours REAL,
                      created_at TEXT NOT NULL,
                      FOREIGN KEY (quote_id) REFERENCES quotes(id) ON DELETE CASCADE
                    )
                    """,
                )
                self._connection.execute(
                    """
                    CREATE INDEX IF NOT EXISTS quote_tasks_quote_id_idx
                    ON quote_tasks (quote_id)
                    """,
                )
                self._connection.execute(
                    """
                    CREATE TABLE IF NOT EXISTS quote_ratings (
                      id INTEGER PRIMARY KEY AUTOINCREMENT,
                      quote_id INTEGER NOT NULL,
                      actual_total_hours REAL,
                      notes TEXT,
                      created_at TEXT NOT NULL,
                      FOREIGN KEY (quote_id) REFERENCES quotes(id) ON DELETE CASCADE
                    )
                    """,
                )
                self._connection.execute(
                    """
                    CREATE INDEX IF NOT EXISTS quote_ratings_quote_id_idx
                    ON quote_ratings (quote_id)
                    """,
                )
                self._connection.execute(
                    """
                    CREATE TABLE IF NOT EXISTS schema_version (
                      version INTEGER PRIMARY KEY,
                      applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
                    )
                    """,
                )
                # 1: quotes and tasks, 2: quote_ratings
                self._connection.executemany(
                    "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
                    [(1,), (2,)],
                )


def _validate_rating(rating: TaskRating, actual_hours: float | None) -> None:
    if rating is not TaskRating.INACCURATE:
        return
    if actual_hours is None:
        raise InvalidInput("actual_hours is required for an inaccurate rating")
    if not math.isfinite(actual_hours) or actual_hours <= 0:
        raise InvalidInput(f"actual_hours must be finite and > 0, got {actual_hours}")


def _normalize_timestamp(value: str | None) -> str:
    if value is None:
        return datetime.now(timezone.utc).isoformat(timespec="seconds")
    return _parse_timestamp(value).astimezone(timezone.utc).isoformat(timespec="seconds")


def _parse_timestamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
