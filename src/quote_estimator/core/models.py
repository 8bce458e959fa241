"""Pydantic settings model, closed enums, and frozen result dataclasses."""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from quote_estimator.core.errors import InvalidInput, UnknownCategory, UnknownComplexity

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Category(enum.Enum):
    """Closed set of work-item categories produced by the classifier."""

    TABLE = "table"
    TABLE_EXTENSION = "table-extension"
    PAGE_CARD = "page-card"
    PAGE_LIST = "page-list"
    PAGE_EXTENSION = "page-extension"
    CODEUNIT_SIMPLE = "codeunit-simple"
    CODEUNIT_COMPLEX = "codeunit-complex"
    REPORT = "report"
    API_INTEGRATION = "api-integration"
    DATA_MIGRATION = "data-migration"
    ENUM = "enum"
    PERMISSION_SET = "permission-set"
    EVENT_SUBSCRIBER = "event-subscriber"
    WORKFLOW = "workflow"
    NOTIFICATION = "notification"
    XMLPORT = "xmlport"
    QUERY = "query"
    CONFIGURATION = "configuration"
    TESTING = "testing"
    DOCUMENTATION = "documentation"
    DEPLOYMENT = "deployment"


class Complexity(enum.Enum):
    """Complexity bucket; each bucket owns one multiplier in the settings."""

    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"
    VERY_COMPLEX = "very-complex"


class TaskRating(enum.Enum):
    """Feedback recorded against a saved task.

    ACCURATE   : the estimate held; no actual hours are kept
    INACCURATE : the estimate missed; actual hours are required

    Legacy aliases kept for stored thumbs ratings:
      "up"   → ACCURATE
      "down" → INACCURATE
    """

    ACCURATE = "accurate"
    INACCURATE = "inaccurate"

    @classmethod
    def _missing_(cls, value: object) -> "TaskRating | None":
        """Accept legacy thumbs values."""
        _legacy: dict[str, "TaskRating"] = {
            "up": cls.ACCURATE,
            "down": cls.INACCURATE,
        }
        if isinstance(value, str):
            return _legacy.get(value)
        return None


def parse_category(value: object) -> Category:
    """Return the Category for ``value`` or raise UnknownCategory."""
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        known = ", ".join(c.value for c in Category)
        raise UnknownCategory(f"Unknown category: {value!r}. Known categories: {known}") from None


def parse_complexity(value: object) -> Complexity:
    """Return the Complexity for ``value`` or raise UnknownComplexity.

    Unknown values are never mapped to a default bucket.
    """
    if isinstance(value, Complexity):
        return value
    try:
        return Complexity(value)
    except ValueError:
        known = ", ".join(c.value for c in Complexity)
        raise UnknownComplexity(
            f"Unknown complexity: {value!r}. Known complexities: {known}"
        ) from None


def check_base_hours(value: object) -> float:
    """Return ``value`` as a float, requiring a finite positive number."""
    if isinstance(value, bool):
        raise InvalidInput(f"base_hours must be a number, got {value!r}")
    try:
        hours = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidInput(f"base_hours must be a number, got {value!r}") from None
    if not math.isfinite(hours) or hours <= 0:
        raise InvalidInput(f"base_hours must be finite and > 0, got {value!r}")
    return hours


# ---------------------------------------------------------------------------
# Pydantic settings model (input validation)
# ---------------------------------------------------------------------------


class EstimationSettings(BaseModel):
    """Numeric knobs consumed by the calculator and proposed by the calibrator.

    Every field has a documented default, so a partial record is completed
    rather than rejected. Fields load from snake_case or camelCase keys.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        allow_inf_nan=False,
    )

    complexity_simple: float = 1.0
    complexity_medium: float = 1.3
    complexity_complex: float = 1.6
    complexity_very_complex: float = 2.5
    global_multiplier: float = 1.0
    code_review_percent: float = 10.0
    testing_percent: float = 10.0
    project_management_percent: float = 5.0
    contingency_percent: float = 10.0
    hours_per_day: float = 7.5
    hourly_rate: float = 0.0


#: Settings field holding each complexity bucket's multiplier.
COMPLEXITY_SETTING_FIELDS: dict[Complexity, str] = {
    Complexity.SIMPLE: "complexity_simple",
    Complexity.MEDIUM: "complexity_medium",
    Complexity.COMPLEX: "complexity_complex",
    Complexity.VERY_COMPLEX: "complexity_very_complex",
}


# ---------------------------------------------------------------------------
# Work items and breakdown (frozen)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkItem:
    """One classified unit of work, as produced by the external classifier."""

    category: Category
    complexity: Complexity
    base_hours: float
    title: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "WorkItem":
        """Build a WorkItem from a classifier record.

        Accepts ``baseHours`` or ``base_hours``.

        Raises:
            UnknownCategory: If ``category`` is not a known category.
            UnknownComplexity: If ``complexity`` is not a known complexity.
            InvalidInput: If base hours are missing, non-finite, or <= 0.
        """
        base = raw.get("baseHours", raw.get("base_hours"))
        title = raw.get("title")
        return cls(
            category=parse_category(raw.get("category")),
            complexity=parse_complexity(raw.get("complexity")),
            base_hours=check_base_hours(base),
            title=str(title) if title is not None else None,
        )


@dataclass(frozen=True)
class EstimatedItem:
    """A work item paired with its adjusted hours."""

    item: WorkItem
    adjusted_hours: float


@dataclass(frozen=True)
class Breakdown:
    """Hours and cost summary for a list of work items.

    ``subtotal_hours`` is display-only; overhead percentages are taken from
    the unrounded subtotal.
    """

    items: tuple[EstimatedItem, ...]
    subtotal_hours: float
    code_review_hours: float
    testing_hours: float
    project_management_hours: float
    contingency_hours: float
    total_hours: float
    total_days: float
    total_cost: float | None = None


# ---------------------------------------------------------------------------
# Calibration (frozen)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RatedDataPoint:
    """A previously estimated item with its observed outcome."""

    complexity: Complexity
    adjusted_hours: float
    actual_hours: float | None
    created_at: datetime


@dataclass(frozen=True)
class MultiplierSuggestion:
    """Proposed replacement multiplier for one complexity bucket."""

    complexity: Complexity
    current_multiplier: float
    suggested_multiplier: float
    correction: float
    data_points: int


@dataclass(frozen=True)
class CalibrationReport:
    """Suggestions together with the size of the history they came from."""

    suggestions: tuple[MultiplierSuggestion, ...]
    total_data_points: int
