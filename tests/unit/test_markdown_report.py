"""Tests for the Markdown report renderer."""

from __future__ import annotations

import pytest

from quote_estimator.core.calculator import compute_breakdown
from quote_estimator.core.models import (
    CalibrationReport,
    Category,
    Complexity,
    EstimationSettings,
    MultiplierSuggestion,
    WorkItem,
)
from quote_estimator.render.markdown_report import (
    render_calibration_markdown,
    render_markdown_report,
    render_quote_detail_markdown,
    render_quote_list_markdown,
)
from quote_estimator.render.report_models import BreakdownReport


def _report(
    items: list[WorkItem], settings: EstimationSettings | None = None, **kwargs: str
) -> BreakdownReport:
    settings = settings or EstimationSettings()
    return BreakdownReport.from_breakdown(compute_breakdown(items, settings), settings, **kwargs)


def test_renders_title_and_sections(three_simple_items: list[WorkItem]) -> None:
    output = render_markdown_report(_report(three_simple_items, title="Customer module"))

    assert output.startswith("# Customer module\n")
    assert "## Work Items" in output
    assert "## Summary" in output
    assert "## Base Hour Checks" in output
    assert output.endswith("\n")


def test_item_rows_use_labels(three_simple_items: list[WorkItem]) -> None:
    output = render_markdown_report(_report(three_simple_items))

    assert "| Customer table | New Table | Simple | 5h | 5h |" in output
    assert "| Sales report | Report / Report Extension | Simple | 8h | 8h |" in output


def test_summary_rows(three_simple_items: list[WorkItem]) -> None:
    output = render_markdown_report(_report(three_simple_items))

    assert "| Subtotal | 23h |" in output
    assert "| Code review | 2.3h |" in output
    assert "| Testing | 2.3h |" in output
    assert "| Project management | 1.2h |" in output
    assert "| Contingency | 2.9h |" in output
    assert "| **Total** | **31.7h** |" in output
    assert "| Total days | 4.2 |" in output


def test_cost_row_only_when_rate_set(three_simple_items: list[WorkItem]) -> None:
    without_rate = render_markdown_report(_report(three_simple_items))
    with_rate = render_markdown_report(
        _report(three_simple_items, EstimationSettings(hourly_rate=1000))
    )

    assert "Estimated cost" not in without_rate
    assert "| Estimated cost (at 1,000.00/h) | 31,700.00 |" in with_rate


def test_atypical_base_hours_flagged(three_simple_items: list[WorkItem]) -> None:
    output = render_markdown_report(_report(three_simple_items))

    assert "- **Customer table**: 5h is outside the typical 2h-4h for New Table" in output
    assert "- **Customer card**: 10h is outside the typical 3h-6h for Card Page" in output
    assert "Sales report**" not in output


def test_all_typical_message() -> None:
    items = [WorkItem(Category.TABLE, Complexity.COMPLEX, 3.0, title="Ledger")]
    output = render_markdown_report(_report(items))

    assert "All base hours are within typical category ranges." in output
    assert "| Ledger | New Table | Complex | 3h | 4.8h |" in output


def test_untitled_items_named_by_position() -> None:
    items = [
        WorkItem(Category.ENUM, Complexity.SIMPLE, 1.0),
        WorkItem(Category.QUERY, Complexity.SIMPLE, 2.0),
    ]
    output = render_markdown_report(_report(items))

    assert "| Task 1 | Enum / Enum Extension |" in output
    assert "| Task 2 | Query Object |" in output


def test_empty_items_renders_placeholder_row() -> None:
    output = render_markdown_report(_report([]))

    assert "| N/A | N/A | N/A | 0h | 0h |" in output
    assert "| **Total** | **0h** |" in output


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Pipe | split", "Pipe \\| split"),
        ("Two\nlines", "Two<br>lines"),
    ],
)
def test_cell_escaping(title: str, expected: str) -> None:
    items = [WorkItem(Category.TABLE, Complexity.SIMPLE, 3.0, title=title)]
    output = render_markdown_report(_report(items))
    assert f"| {expected} | New Table |" in output


def test_calibration_markdown_table() -> None:
    report = CalibrationReport(
        suggestions=(
            MultiplierSuggestion(
                complexity=Complexity.VERY_COMPLEX,
                current_multiplier=2.5,
                suggested_multiplier=3.1,
                correction=1.24,
                data_points=4,
            ),
        ),
        total_data_points=7,
    )
    output = render_calibration_markdown(report)

    assert output.startswith("# Multiplier Suggestions\n")
    assert "Rated data points considered: 7" in output
    assert "| Very Complex | 2.50 | 3.10 | 1.24x | 4 |" in output


def test_calibration_markdown_without_suggestions() -> None:
    output = render_calibration_markdown(CalibrationReport(suggestions=(), total_data_points=2))

    assert "Rated data points considered: 2" in output
    assert "Not enough rated data for any suggestion." in output
    assert "| Complexity |" not in output


def test_hours_on_a_half_tenth_round_up() -> None:
    items = [WorkItem(Category.TABLE, Complexity.SIMPLE, 2.25)]
    output = render_markdown_report(_report(items))
    assert "| Task 1 | New Table | Simple | 2.3h | 2.3h |" in output


def _quote_row(**overrides: object) -> dict:
    row = {
        "id": 7,
        "title": "Customer module",
        "created_at": "2026-01-15T09:30:00+00:00",
        "subtotal_hours": 23.0,
        "total_hours": 31.7,
        "total_days": 4.2,
        "task_count": 3,
    }
    row.update(overrides)
    return row


def _task_row(**overrides: object) -> dict:
    row = {
        "id": 21,
        "task_index": 0,
        "title": "Customer table",
        "category": "table",
        "complexity": "simple",
        "adjusted_hours": 5.0,
        "rating": None,
        "actual_hours": None,
    }
    row.update(overrides)
    return row


def test_quote_list_empty() -> None:
    output = render_quote_list_markdown([])
    assert output.startswith("# Saved Quotes\n")
    assert "No saved quotes." in output
    assert "| ID |" not in output


def test_quote_list_rows() -> None:
    output = render_quote_list_markdown(
        [_quote_row(), _quote_row(id=8, title="Pipe | split", total_hours=12.0, total_days=1.6)]
    )

    assert "| ID | Title | Created | Tasks | Total | Days |" in output
    assert "| 7 | Customer module | 2026-01-15T09:30:00+00:00 | 3 | 31.7h | 4.2 |" in output
    assert "| 8 | Pipe \\| split |" in output
    assert "| 12h | 1.6 |" in output


def test_quote_detail_tasks_and_no_ratings() -> None:
    detail = {
        "quote": _quote_row(),
        "tasks": [
            _task_row(),
            _task_row(id=22, task_index=1, title="", rating="inaccurate", actual_hours=14.0),
        ],
        "ratings": [],
    }

    output = render_quote_detail_markdown(detail)

    assert output.startswith("# Quote 7: Customer module\n")
    assert "Total: 31.7h (4.2 days)" in output
    assert "| 21 | Customer table | table | simple | 5h | unrated | - |" in output
    assert "| 22 | Task 2 | table | simple | 5h | inaccurate | 14h |" in output
    assert "No quote ratings recorded." in output


def test_quote_detail_ratings_table() -> None:
    detail = {
        "quote": _quote_row(),
        "tasks": [_task_row()],
        "ratings": [
            {
                "id": 1,
                "quote_id": 7,
                "actual_total_hours": 40.0,
                "notes": "Scope grew",
                "created_at": "2026-02-01T10:00:00+00:00",
            },
            {
                "id": 2,
                "quote_id": 7,
                "actual_total_hours": None,
                "notes": None,
                "created_at": "2026-03-01T10:00:00+00:00",
            },
        ],
    }

    output = render_quote_detail_markdown(detail)

    assert "| Rated | Actual total | Notes |" in output
    assert "| 2026-02-01T10:00:00+00:00 | 40h | Scope grew |" in output
    assert "| 2026-03-01T10:00:00+00:00 | - |  |" in output
    assert "No quote ratings recorded." not in output
