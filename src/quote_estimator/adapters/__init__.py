"""Persistence and file-format adapters around the estimation core."""
