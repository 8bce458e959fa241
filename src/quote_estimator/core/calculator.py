"""Estimate arithmetic: adjusted hours, overhead, contingency, and totals."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from quote_estimator.core.errors import InvalidSettings
from quote_estimator.core.models import (
    COMPLEXITY_SETTING_FIELDS,
    Breakdown,
    Complexity,
    EstimatedItem,
    EstimationSettings,
    WorkItem,
    check_base_hours,
    parse_complexity,
)
from quote_estimator.core.rounding import round1, round2

logger = logging.getLogger("quote_estimator")

# Typical ranges enforced only under strict validation (inclusive).
_STRICT_RANGES: dict[str, tuple[float, float]] = {
    "complexity_simple": (0.5, 5.0),
    "complexity_medium": (0.5, 5.0),
    "complexity_complex": (0.5, 5.0),
    "complexity_very_complex": (0.5, 5.0),
    "global_multiplier": (0.3, 2.0),
    "code_review_percent": (0.0, 30.0),
    "testing_percent": (0.0, 30.0),
    "project_management_percent": (0.0, 30.0),
    "contingency_percent": (0.0, 50.0),
}


def validate_settings(settings: EstimationSettings, *, strict: bool = False) -> None:
    """Check that settings can drive a breakdown.

    Args:
        settings: Settings to check.
        strict: Also require every multiplier and percentage to sit inside
            its typical range.

    Raises:
        InvalidSettings: If hours_per_day is not positive, or (strict only)
            a field is outside its typical range.
    """
    if settings.hours_per_day <= 0:
        raise InvalidSettings(f"hours_per_day must be > 0, got {settings.hours_per_day}")
    if not strict:
        return
    for name, (lo, hi) in _STRICT_RANGES.items():
        _validate_range(name, getattr(settings, name), lo, hi)
    if settings.hourly_rate < 0:
        raise InvalidSettings(f"hourly_rate must be >= 0, got {settings.hourly_rate}")


def complexity_multiplier(complexity: Complexity | str, settings: EstimationSettings) -> float:
    """Return the settings multiplier for a complexity bucket."""
    return float(getattr(settings, COMPLEXITY_SETTING_FIELDS[parse_complexity(complexity)]))


def adjusted_hours(
    base_hours: float,
    complexity: Complexity | str,
    settings: EstimationSettings,
) -> float:
    """Apply the complexity and global multipliers to base hours.

    Raises:
        InvalidInput: If base_hours is not a finite positive number.
        UnknownComplexity: If complexity is not one of the four buckets.
    """
    hours = check_base_hours(base_hours)
    multiplier = complexity_multiplier(complexity, settings)
    return round1(hours * multiplier * settings.global_multiplier)


def estimate_items(
    items: Sequence[WorkItem],
    settings: EstimationSettings,
) -> tuple[EstimatedItem, ...]:
    """Pair every work item with its adjusted hours, preserving order."""
    return tuple(
        EstimatedItem(
            item=item,
            adjusted_hours=adjusted_hours(item.base_hours, item.complexity, settings),
        )
        for item in items
    )


def compute_breakdown(
    items: Sequence[WorkItem],
    settings: EstimationSettings | None = None,
    *,
    strict: bool = False,
) -> Breakdown:
    """Compute the full hours/cost breakdown for a list of work items.

    Stages, each rounded on its own:

        subtotal     = sum(adjusted hours)              (kept unrounded)
        overheads    = round1(subtotal * percent / 100) (review, testing, PM)
        before       = subtotal + rounded overheads
        contingency  = round1(before * contingency / 100)
        total_hours  = round1(before + contingency)
        total_days   = round1(total_hours / hours_per_day)

    The reported ``subtotal_hours`` is ``round1(subtotal)`` and never feeds
    a later stage.

    Args:
        items: Work items in display order; may be empty.
        settings: Estimation settings; defaults are used when omitted.
        strict: Enforce typical ranges on every settings field.

    Returns:
        A new Breakdown.

    Raises:
        InvalidSettings: If hours_per_day <= 0, or strict validation fails.
        InvalidInput: If an item has non-positive or non-finite base hours.
        UnknownComplexity: If an item's complexity is unknown.
    """
    if settings is None:
        settings = EstimationSettings()
    validate_settings(settings, strict=strict)

    estimated = estimate_items(items, settings)
    raw_subtotal = sum(entry.adjusted_hours for entry in estimated)

    code_review = round1(raw_subtotal * (settings.code_review_percent / 100))
    testing = round1(raw_subtotal * (settings.testing_percent / 100))
    project_management = round1(raw_subtotal * (settings.project_management_percent / 100))

    before_contingency = raw_subtotal + code_review + testing + project_management
    contingency = round1(before_contingency * (settings.contingency_percent / 100))

    total_hours = round1(before_contingency + contingency)
    total_days = round1(total_hours / settings.hours_per_day)
    total_cost = round2(total_hours * settings.hourly_rate) if settings.hourly_rate > 0 else None

    logger.debug(
        "Breakdown for %d items: subtotal=%.1fh total=%.1fh (%.1f days)",
        len(estimated),
        raw_subtotal,
        total_hours,
        total_days,
    )
    return Breakdown(
        items=estimated,
        subtotal_hours=round1(raw_subtotal),
        code_review_hours=code_review,
        testing_hours=testing,
        project_management_hours=project_management,
        contingency_hours=contingency,
        total_hours=total_hours,
        total_days=total_days,
        total_cost=total_cost,
    )


def multiplier_used(
    base_hours: float,
    adjusted: float,
    settings: EstimationSettings,
) -> float:
    """Return the effective complexity multiplier behind an adjusted figure.

    Falls back to 1.0 when the ratio is undefined.
    """
    denominator = base_hours * settings.global_multiplier
    if denominator <= 0 or adjusted <= 0:
        return 1.0
    return adjusted / denominator


def _validate_range(name: str, value: float, lo: float, hi: float) -> None:
    if not (lo <= value <= hi):
        raise InvalidSettings(f"{name} must be between {lo} and {hi}, got {value}")
