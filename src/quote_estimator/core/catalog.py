"""Display labels and typical base-hour ranges per category and complexity."""

from __future__ import annotations

from quote_estimator.core.models import Category, Complexity

# Typical base hours (low, high) the classifier picks from, before multipliers.
_BASE_HOURS: dict[Category, tuple[float, float]] = {
    Category.TABLE: (2.0, 4.0),
    Category.TABLE_EXTENSION: (1.0, 3.0),
    Category.PAGE_CARD: (3.0, 6.0),
    Category.PAGE_LIST: (3.0, 6.0),
    Category.PAGE_EXTENSION: (2.0, 4.0),
    Category.CODEUNIT_SIMPLE: (4.0, 8.0),
    Category.CODEUNIT_COMPLEX: (8.0, 20.0),
    Category.REPORT: (4.0, 12.0),
    Category.API_INTEGRATION: (8.0, 24.0),
    Category.DATA_MIGRATION: (4.0, 16.0),
    Category.ENUM: (0.5, 1.0),
    Category.PERMISSION_SET: (1.0, 2.0),
    Category.EVENT_SUBSCRIBER: (2.0, 4.0),
    Category.WORKFLOW: (4.0, 12.0),
    Category.NOTIFICATION: (2.0, 4.0),
    Category.XMLPORT: (4.0, 8.0),
    Category.QUERY: (2.0, 4.0),
    Category.CONFIGURATION: (2.0, 4.0),
    Category.TESTING: (2.0, 6.0),
    Category.DOCUMENTATION: (1.0, 4.0),
    Category.DEPLOYMENT: (2.0, 4.0),
}

_CATEGORY_LABELS: dict[Category, str] = {
    Category.TABLE: "New Table",
    Category.TABLE_EXTENSION: "Table Extension",
    Category.PAGE_CARD: "Card Page",
    Category.PAGE_LIST: "List Page",
    Category.PAGE_EXTENSION: "Page Extension",
    Category.CODEUNIT_SIMPLE: "Codeunit (Simple)",
    Category.CODEUNIT_COMPLEX: "Codeunit (Complex)",
    Category.REPORT: "Report / Report Extension",
    Category.API_INTEGRATION: "API / Integration",
    Category.DATA_MIGRATION: "Data Migration",
    Category.ENUM: "Enum / Enum Extension",
    Category.PERMISSION_SET: "Permission Set",
    Category.EVENT_SUBSCRIBER: "Event Subscriber",
    Category.WORKFLOW: "Workflow / Approval",
    Category.NOTIFICATION: "Notification",
    Category.XMLPORT: "XMLport",
    Category.QUERY: "Query Object",
    Category.CONFIGURATION: "Configuration / Setup",
    Category.TESTING: "Testing & QA",
    Category.DOCUMENTATION: "Documentation",
    Category.DEPLOYMENT: "Deployment & Release",
}

_COMPLEXITY_LABELS: dict[Complexity, str] = {
    Complexity.SIMPLE: "Simple",
    Complexity.MEDIUM: "Medium",
    Complexity.COMPLEX: "Complex",
    Complexity.VERY_COMPLEX: "Very Complex",
}


def category_label(category: Category) -> str:
    """Return the human-readable label for a category."""
    return _CATEGORY_LABELS[category]


def complexity_label(complexity: Complexity) -> str:
    """Return the human-readable label for a complexity bucket."""
    return _COMPLEXITY_LABELS[complexity]


def base_hours_range(category: Category) -> tuple[float, float]:
    """Return the typical (low, high) base hours for a category."""
    return _BASE_HOURS[category]


def is_typical_base_hours(category: Category, base_hours: float) -> bool:
    """Return True when ``base_hours`` falls inside the category's typical range.

    Out-of-range values are still valid input; renderers flag them so a
    reviewer can double-check the classifier's pick.
    """
    lo, hi = _BASE_HOURS[category]
    return lo <= base_hours <= hi
