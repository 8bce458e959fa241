"""Markdown report renderer."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from quote_estimator.core.catalog import complexity_label
from quote_estimator.core.models import CalibrationReport
from quote_estimator.core.rounding import round1
from quote_estimator.render.report_models import BreakdownReport


def render_markdown_report(report: BreakdownReport) -> str:
    """Render an estimate breakdown as GitHub-compatible Markdown."""
    lines: list[str] = [
        f"# {report.title}",
        "",
    ]
    lines.extend(_render_item_table(report))
    lines.extend([""])
    lines.extend(_render_summary(report))
    lines.extend([""])
    lines.extend(_render_range_notes(report))
    lines.append("")
    return "\n".join(lines)


def render_calibration_markdown(report: CalibrationReport) -> str:
    """Render multiplier suggestions as Markdown."""
    lines: list[str] = [
        "# Multiplier Suggestions",
        "",
        f"Rated data points considered: {report.total_data_points}",
        "",
    ]
    if not report.suggestions:
        lines.append("Not enough rated data for any suggestion.")
        lines.append("")
        return "\n".join(lines)

    lines.extend(
        [
            "| Complexity | Current | Suggested | Correction | Data Points |",
            "| --- | --- | --- | --- | --- |",
        ]
    )
    for suggestion in report.suggestions:
        lines.append(
            f"| {complexity_label(suggestion.complexity)} | "
            f"{suggestion.current_multiplier:.2f} | "
            f"{suggestion.suggested_multiplier:.2f} | "
            f"{suggestion.correction:.2f}x | "
            f"{suggestion.data_points} |"
        )
    lines.append("")
    return "\n".join(lines)


def render_quote_list_markdown(quotes: Sequence[Mapping[str, Any]]) -> str:
    """Render saved quote summaries (as returned by the store) as Markdown."""
    lines: list[str] = ["# Saved Quotes", ""]
    if not quotes:
        lines.append("No saved quotes.")
        lines.append("")
        return "\n".join(lines)

    lines.extend(
        [
            "| ID | Title | Created | Tasks | Total | Days |",
            "| --- | --- | --- | --- | --- | --- |",
        ]
    )
    for quote in quotes:
        lines.append(
            f"| {quote['id']} | {_escape_cell(str(quote['title']))} | {quote['created_at']} | "
            f"{quote['task_count']} | {_format_hours(quote['total_hours'])} | "
            f"{quote['total_days']:.1f} |"
        )
    lines.append("")
    return "\n".join(lines)


def render_quote_detail_markdown(detail: Mapping[str, Any]) -> str:
    """Render one saved quote with its tasks and quote ratings as Markdown."""
    quote = detail["quote"]
    lines: list[str] = [
        f"# Quote {quote['id']}: {quote['title']}",
        "",
        f"Created: {quote['created_at']}",
        f"Total: {_format_hours(quote['total_hours'])} ({quote['total_days']:.1f} days)",
        "",
        "## Tasks",
        "",
        "| Task ID | Task | Category | Complexity | Adjusted | Rating | Actual |",
        "| --- | --- | --- | --- | --- | --- | --- |",
    ]
    for task in detail["tasks"]:
        name = task["title"] or f"Task {task['task_index'] + 1}"
        actual = task["actual_hours"]
        lines.append(
            f"| {task['id']} | {_escape_cell(name)} | {task['category']} | "
            f"{task['complexity']} | {_format_hours(task['adjusted_hours'])} | "
            f"{task['rating'] or 'unrated'} | "
            f"{_format_hours(actual) if actual is not None else '-'} |"
        )

    lines.extend(["", "## Quote Ratings", ""])
    ratings = detail["ratings"]
    if not ratings:
        lines.append("No quote ratings recorded.")
    else:
        lines.extend(["| Rated | Actual total | Notes |", "| --- | --- | --- |"])
        for rating in ratings:
            actual_total = rating["actual_total_hours"]
            lines.append(
                f"| {rating['created_at']} | "
                f"{_format_hours(actual_total) if actual_total is not None else '-'} | "
                f"{_escape_cell(rating['notes'] or '')} |"
            )
    lines.append("")
    return "\n".join(lines)


def _render_item_table(report: BreakdownReport) -> list[str]:
    lines = [
        "## Work Items",
        "",
        "| Task | Category | Complexity | Base | Adjusted |",
        "| --- | --- | --- | --- | --- |",
    ]
    if not report.items:
        lines.append("| N/A | N/A | N/A | 0h | 0h |")
        return lines
    for item in report.items:
        lines.append(
            f"| {_escape_cell(item.name)} | {item.category_label} | {item.complexity_label} | "
            f"{_format_hours(item.base_hours)} | {_format_hours(item.adjusted_hours)} |"
        )
    return lines


def _render_summary(report: BreakdownReport) -> list[str]:
    breakdown = report.breakdown
    lines = [
        "## Summary",
        "",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Subtotal | {_format_hours(breakdown.subtotal_hours)} |",
        f"| Code review | {_format_hours(breakdown.code_review_hours)} |",
        f"| Testing | {_format_hours(breakdown.testing_hours)} |",
        f"| Project management | {_format_hours(breakdown.project_management_hours)} |",
        f"| Contingency | {_format_hours(breakdown.contingency_hours)} |",
        f"| **Total** | **{_format_hours(breakdown.total_hours)}** |",
        f"| Total days | {breakdown.total_days:.1f} |",
    ]
    if breakdown.total_cost is not None:
        lines.append(
            f"| Estimated cost (at {report.hourly_rate:,.2f}/h) | {breakdown.total_cost:,.2f} |"
        )
    return lines


def _render_range_notes(report: BreakdownReport) -> list[str]:
    lines = ["## Base Hour Checks", ""]
    atypical = report.atypical_items
    if not atypical:
        lines.append("All base hours are within typical category ranges.")
        return lines
    for item in atypical:
        lines.append(
            f"- **{_escape_cell(item.name)}**: {_format_hours(item.base_hours)} is outside the "
            f"typical {_format_hours(item.typical_low_hours)}-"
            f"{_format_hours(item.typical_high_hours)} for {item.category_label}"
        )
    return lines


def _format_hours(value: float) -> str:
    rounded = round1(value)
    if abs(rounded - int(rounded)) < 1e-9:
        return f"{int(rounded)}h"
    return f"{rounded:.1f}h"


def _escape_cell(value: str) -> str:
    normalized = value.replace("\r\n", "\n").replace("\r", "\n").replace("\n", "<br>")
    return normalized.replace("|", "\\|")
