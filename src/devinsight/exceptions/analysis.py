"""Analysis-related exceptions: bad input, unknown entities, failing collaborators."""

from typing import Optional

from .base import DevInsightError


class AnalysisError(DevInsightError):
    """Base class for analysis-related errors."""

    pass


class InvalidInputError(AnalysisError):
    """Raised when an identifier, time range or option is malformed.

    Always raised before any state is touched.
    """

    def __init__(self, field: str, value: object, reason: str):
        super().__init__(
            f"Invalid {field}: {value!r}",
            details={"field": field, "reason": reason},
        )
        self.field = field
        self.value = value
        self.reason = reason


class NotFoundError(AnalysisError):
    """Raised when an engine, algorithm or user id is unknown."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(
            f"Unknown {kind}: {identifier}",
            details={"kind": kind, "id": identifier},
        )
        self.kind = kind
        self.identifier = identifier


class CollaboratorUnavailableError(AnalysisError):
    """Raised when an external collaborator fails or times out.

    Retryable by the caller. Aggregating operations catch it and report the
    gap instead of failing the whole call.
    """

    retryable = True

    def __init__(self, collaborator: str, operation: str, reason: Optional[str] = None):
        details = {"collaborator": collaborator, "operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(f"{collaborator} unavailable during {operation}", details=details)
        self.collaborator = collaborator
        self.operation = operation
        self.reason = reason
