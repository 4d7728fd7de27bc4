"""Protocol for the code-source collaborator.

Adapters translate their own failures (scanner crashed, git timed out) into
``CollaboratorUnavailableError``; any other exception is a bug and propagates.
"""

from typing import Protocol

from .models import (
    ChangeSummary,
    DebtIssue,
    DeveloperActivity,
    FileSignals,
    PerformanceSignal,
    SecurityFinding,
)


class CodeSource(Protocol):
    """Workspace-scoped raw signals keyed by workspace identifier."""

    def capture_changes(self, workspace_id: str) -> ChangeSummary: ...

    def debt_issues(self, workspace_id: str, category: str) -> list[DebtIssue]: ...

    def measure_architecture(self, workspace_id: str, aspect: str) -> float: ...

    def measure_quality(self, path: str, aspect: str) -> float: ...

    def file_signals(self, workspace_id: str) -> list[FileSignals]: ...

    def performance_signals(self, workspace_id: str) -> list[PerformanceSignal]: ...

    def security_findings(self, workspace_id: str) -> list[SecurityFinding]: ...

    def developer_activity(self, user_id: str, period: str) -> DeveloperActivity: ...
