"""JSON report renderer."""

from __future__ import annotations

import json
from typing import Any

from quote_estimator.core.models import CalibrationReport
from quote_estimator.render.report_models import BreakdownReport


def render_json_report(report: BreakdownReport) -> str:
    """Render an estimate breakdown as canonical JSON."""
    return json.dumps(_build_payload(report), indent=2, sort_keys=True) + "\n"


def render_calibration_json(report: CalibrationReport) -> str:
    """Render multiplier suggestions as canonical JSON."""
    payload = {
        "total_data_points": report.total_data_points,
        "suggestions": [
            {
                "complexity": suggestion.complexity.value,
                "current_multiplier": suggestion.current_multiplier,
                "suggested_multiplier": suggestion.suggested_multiplier,
                "correction": suggestion.correction,
                "data_points": suggestion.data_points,
            }
            for suggestion in report.suggestions
        ],
    }
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"


def render_history_json(payload: Any) -> str:
    """Render store rows (a quote list or one quote detail) as canonical JSON."""
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"


def _build_payload(report: BreakdownReport) -> dict[str, Any]:
    breakdown = report.breakdown
    return {
        "title": report.title,
        "items": [
            {
                "name": item.name,
                "category": item.category,
                "complexity": item.complexity,
                "base_hours": item.base_hours,
                "adjusted_hours": item.adjusted_hours,
                "typical_base_hours": [item.typical_low_hours, item.typical_high_hours],
                "is_typical": item.is_typical,
            }
            for item in report.items
        ],
        "breakdown": {
            "subtotal_hours": breakdown.subtotal_hours,
            "code_review_hours": breakdown.code_review_hours,
            "testing_hours": breakdown.testing_hours,
            "project_management_hours": breakdown.project_management_hours,
            "contingency_hours": breakdown.contingency_hours,
            "total_hours": breakdown.total_hours,
            "total_days": breakdown.total_days,
            "total_cost": breakdown.total_cost,
        },
    }
