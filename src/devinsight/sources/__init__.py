"""Collaborator adapters."""

from .metrics_file import UNAVAILABLE, MetricsFile

__all__ = ["MetricsFile", "UNAVAILABLE"]
