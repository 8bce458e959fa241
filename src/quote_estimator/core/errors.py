"""Typed errors raised by the estimation core."""

from __future__ import annotations


class EstimationError(ValueError):
    """Base class for malformed estimation input."""


class InvalidInput(EstimationError):
    """A work item carries a non-positive or non-finite number."""


class UnknownCategory(EstimationError):
    """A category value is outside the closed category set."""


class UnknownComplexity(EstimationError):
    """A complexity value is outside the closed complexity set."""


class InvalidSettings(EstimationError):
    """A settings record cannot be used for estimation."""
