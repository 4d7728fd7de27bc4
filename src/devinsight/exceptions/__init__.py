"""Exception hierarchy for DevInsight."""

from .analysis import (
    AnalysisError,
    CollaboratorUnavailableError,
    InvalidInputError,
    NotFoundError,
)
from .base import DevInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "DevInsightError",
    "AnalysisError",
    "InvalidInputError",
    "NotFoundError",
    "CollaboratorUnavailableError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidPathError",
]
