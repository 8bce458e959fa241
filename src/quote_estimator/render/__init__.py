"""Output rendering modules."""

from quote_estimator.render.json_report import (
    render_calibration_json,
    render_history_json,
    render_json_report,
)
from quote_estimator.render.markdown_report import (
    render_calibration_markdown,
    render_markdown_report,
    render_quote_detail_markdown,
    render_quote_list_markdown,
)
from quote_estimator.render.report_models import BreakdownReport, ReportItem

__all__ = [
    "BreakdownReport",
    "ReportItem",
    "render_calibration_json",
    "render_calibration_markdown",
    "render_history_json",
    "render_json_report",
    "render_markdown_report",
    "render_quote_detail_markdown",
    "render_quote_list_markdown",
]
