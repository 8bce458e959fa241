"""Effort estimation and feedback-driven multiplier calibration."""

from quote_estimator.version import __version__

__all__ = ["__version__"]
