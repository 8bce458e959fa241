"""Shared report data models for renderers."""

from __future__ import annotations

from dataclasses import dataclass

from quote_estimator.core.catalog import (
    base_hours_range,
    category_label,
    complexity_label,
    is_typical_base_hours,
)
from quote_estimator.core.models import Breakdown, EstimatedItem, EstimationSettings


@dataclass(frozen=True)
class ReportItem:
    """Flattened per-item report row for renderers."""

    name: str
    category: str
    category_label: str
    complexity: str
    complexity_label: str
    base_hours: float
    adjusted_hours: float
    typical_low_hours: float
    typical_high_hours: float
    is_typical: bool

    @classmethod
    def from_estimated(cls, entry: EstimatedItem, *, index: int) -> "ReportItem":
        """Construct a report row; untitled items are named by position."""
        item = entry.item
        lo, hi = base_hours_range(item.category)
        return cls(
            name=item.title or f"Task {index + 1}",
            category=item.category.value,
            category_label=category_label(item.category),
            complexity=item.complexity.value,
            complexity_label=complexity_label(item.complexity),
            base_hours=item.base_hours,
            adjusted_hours=entry.adjusted_hours,
            typical_low_hours=lo,
            typical_high_hours=hi,
            is_typical=is_typical_base_hours(item.category, item.base_hours),
        )


@dataclass(frozen=True)
class BreakdownReport:
    """Renderer input bundle for an estimate breakdown."""

    items: tuple[ReportItem, ...]
    breakdown: Breakdown
    hourly_rate: float = 0.0
    title: str = "Effort Estimate"

    @property
    def atypical_items(self) -> tuple[ReportItem, ...]:
        """Items whose base hours fall outside their category's typical range."""
        return tuple(item for item in self.items if not item.is_typical)

    @classmethod
    def from_breakdown(
        cls,
        breakdown: Breakdown,
        settings: EstimationSettings,
        *,
        title: str = "Effort Estimate",
    ) -> "BreakdownReport":
        """Build a report from a breakdown and the settings it used."""
        return cls(
            items=tuple(
                ReportItem.from_estimated(entry, index=index)
                for index, entry in enumerate(breakdown.items)
            ),
            breakdown=breakdown,
            hourly_rate=settings.hourly_rate,
            title=title,
        )

