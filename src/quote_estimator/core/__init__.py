"""Core estimation arithmetic and multiplier calibration."""

from quote_estimator.core.calculator import (
    adjusted_hours,
    complexity_multiplier,
    compute_breakdown,
    estimate_items,
    multiplier_used,
    validate_settings,
)
from quote_estimator.core.calibration import (
    HALF_LIFE_DAYS,
    MAX_MULTIPLIER,
    MIN_DATA_POINTS,
    MIN_MULTIPLIER,
    accept_suggestions,
    build_calibration_report,
    recency_weight,
    suggest_multipliers,
)
from quote_estimator.core.catalog import (
    base_hours_range,
    category_label,
    complexity_label,
    is_typical_base_hours,
)
from quote_estimator.core.errors import (
    EstimationError,
    InvalidInput,
    InvalidSettings,
    UnknownCategory,
    UnknownComplexity,
)
from quote_estimator.core.models import (
    Breakdown,
    CalibrationReport,
    Category,
    Complexity,
    EstimatedItem,
    EstimationSettings,
    MultiplierSuggestion,
    RatedDataPoint,
    TaskRating,
    WorkItem,
    parse_category,
    parse_complexity,
)
from quote_estimator.core.rounding import round1, round2

__all__ = [
    "HALF_LIFE_DAYS",
    "MAX_MULTIPLIER",
    "MIN_DATA_POINTS",
    "MIN_MULTIPLIER",
    "Breakdown",
    "CalibrationReport",
    "Category",
    "Complexity",
    "EstimatedItem",
    "EstimationError",
    "EstimationSettings",
    "InvalidInput",
    "InvalidSettings",
    "MultiplierSuggestion",
    "RatedDataPoint",
    "TaskRating",
    "UnknownCategory",
    "UnknownComplexity",
    "WorkItem",
    "accept_suggestions",
    "adjusted_hours",
    "base_hours_range",
    "build_calibration_report",
    "category_label",
    "complexity_label",
    "complexity_multiplier",
    "compute_breakdown",
    "estimate_items",
    "is_typical_base_hours",
    "multiplier_used",
    "parse_category",
    "parse_complexity",
    "recency_weight",
    "round1",
    "round2",
    "suggest_multipliers",
    "validate_settings",
]
