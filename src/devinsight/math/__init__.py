"""Numeric helpers shared by the analytics engines."""

from .statistics import Statistics, clamp

__all__ = ["Statistics", "clamp"]
