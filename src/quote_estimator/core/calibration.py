"""Recency-weighted multiplier calibration from rated estimates."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from quote_estimator.core.models import (
    COMPLEXITY_SETTING_FIELDS,
    CalibrationReport,
    Complexity,
    EstimationSettings,
    MultiplierSuggestion,
    RatedDataPoint,
    parse_complexity,
)
from quote_estimator.core.rounding import round2

logger = logging.getLogger("quote_estimator")

HALF_LIFE_DAYS = 90.0
MIN_DATA_POINTS = 3
MIN_MULTIPLIER = 0.5
MAX_MULTIPLIER = 5.0

_SECONDS_PER_DAY = 86400.0
_MIN_WEIGHT = math.ulp(0.0)


def recency_weight(created_at: datetime, now: datetime | None = None) -> float:
    """Return the exponential-decay weight of a data point.

    ``0.5 ** (age_days / 90)``: 1.0 when fresh, 0.5 at the 90-day half-life.
    Naive datetimes are read as UTC; points dated after ``now`` count as fresh.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    age_days = (_as_utc(now) - _as_utc(created_at)).total_seconds() / _SECONDS_PER_DAY
    if age_days < 0:
        age_days = 0.0
    # Floored at the smallest positive float so very old points keep a weight.
    return max(0.5 ** (age_days / HALF_LIFE_DAYS), _MIN_WEIGHT)


def suggest_multipliers(
    data_points: Iterable[RatedDataPoint],
    current_settings: EstimationSettings,
    *,
    now: datetime | None = None,
) -> tuple[MultiplierSuggestion, ...]:
    """Propose complexity multipliers from rated history.

    Points without actual hours are ignored. Buckets with fewer than
    ``MIN_DATA_POINTS`` points produce no suggestion. Within a bucket each
    point contributes ``actual / adjusted`` weighted by recency; points with
    non-positive adjusted hours are skipped. The suggested multiplier is the
    current one scaled by the weighted average correction, clamped to
    ``[MIN_MULTIPLIER, MAX_MULTIPLIER]``.

    Args:
        data_points: Rated history, typically only items rated inaccurate.
        current_settings: Settings whose multipliers are being corrected.
            Never modified.
        now: Reference time for recency (default: now, UTC).

    Returns:
        One suggestion per qualifying bucket, ordered simple to very-complex.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    buckets: dict[Complexity, list[RatedDataPoint]] = {}
    for point in data_points:
        if point.actual_hours is None:
            continue
        buckets.setdefault(parse_complexity(point.complexity), []).append(point)

    suggestions: list[MultiplierSuggestion] = []
    for complexity in Complexity:
        points = buckets.get(complexity, [])
        if len(points) < MIN_DATA_POINTS:
            if points:
                logger.debug(
                    "Not enough rated %s points for a suggestion (%d < %d)",
                    complexity.value,
                    len(points),
                    MIN_DATA_POINTS,
                )
            continue
        suggestion = _suggest_for_bucket(complexity, points, current_settings, now)
        if suggestion is not None:
            suggestions.append(suggestion)
    return tuple(suggestions)


def build_calibration_report(
    data_points: Sequence[RatedDataPoint],
    current_settings: EstimationSettings,
    *,
    now: datetime | None = None,
) -> CalibrationReport:
    """Run suggest_multipliers and record how many points were supplied."""
    return CalibrationReport(
        suggestions=suggest_multipliers(data_points, current_settings, now=now),
        total_data_points=len(data_points),
    )


def accept_suggestions(
    settings: EstimationSettings,
    suggestions: Iterable[MultiplierSuggestion],
) -> EstimationSettings:
    """Return a copy of ``settings`` with suggested multipliers applied.

    Only the complexity multipliers named by the suggestions change.
    """
    update = {
        COMPLEXITY_SETTING_FIELDS[suggestion.complexity]: suggestion.suggested_multiplier
        for suggestion in suggestions
    }
    for field_name, value in update.items():
        logger.info("Accepting %s: %.2f -> %.2f", field_name, getattr(settings, field_name), value)
    return settings.model_copy(update=update)


def _suggest_for_bucket(
    complexity: Complexity,
    points: Sequence[RatedDataPoint],
    settings: EstimationSettings,
    now: datetime,
) -> MultiplierSuggestion | None:
    usable: list[RatedDataPoint] = []
    for point in points:
        if point.adjusted_hours <= 0 or point.actual_hours is None:
            logger.warning(
                "Skipping rated %s point with adjusted_hours=%r",
                complexity.value,
                point.adjusted_hours,
            )
            continue
        usable.append(point)
    if not usable:
        return None

    # Weights relative to the newest point give the same weighted mean as
    # weights relative to ``now`` without underflowing for an all-old bucket.
    reference = min(max(_as_utc(point.created_at) for point in usable), _as_utc(now))
    weighted_sum = 0.0
    total_weight = 0.0
    for point in usable:
        weight = recency_weight(point.created_at, reference)
        weighted_sum += (point.actual_hours / point.adjusted_hours) * weight  # type: ignore[operator]
        total_weight += weight

    avg_correction = weighted_sum / total_weight
    current = float(getattr(settings, COMPLEXITY_SETTING_FIELDS[complexity]))
    raw = current * avg_correction
    suggested = min(MAX_MULTIPLIER, max(MIN_MULTIPLIER, raw))
    if suggested != raw:
        logger.warning(
            "Suggested %s multiplier %.2f clamped to %.2f",
            complexity.value,
            raw,
            suggested,
        )

    return MultiplierSuggestion(
        complexity=complexity,
        current_multiplier=current,
        suggested_multiplier=round2(suggested),
        correction=round2(avg_correction),
        data_points=len(points),
    )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
