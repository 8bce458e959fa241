"""Shared fixtures for quote_estimator test suite."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from quote_estimator.core.models import (
    Category,
    Complexity,
    EstimationSettings,
    WorkItem,
)


@pytest.fixture
def default_settings() -> EstimationSettings:
    """Settings with every documented default."""
    return EstimationSettings()


@pytest.fixture
def three_simple_items() -> list[WorkItem]:
    """Simple items whose adjusted hours are 5, 10 and 8 under defaults."""
    return [
        WorkItem(Category.TABLE, Complexity.SIMPLE, 5.0, title="Customer table"),
        WorkItem(Category.PAGE_CARD, Complexity.SIMPLE, 10.0, title="Customer card"),
        WorkItem(Category.REPORT, Complexity.SIMPLE, 8.0, title="Sales report"),
    ]


@pytest.fixture
def ref_time() -> datetime:
    """Fixed reference time for deterministic recency weighting."""
    return datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
