"""JSON metrics file implementing both ``CodeSource`` and ``KnowledgeSource``.

Lets the CLI (and tests) run the engines against pre-computed signals
exported by scanners and telemetry pipelines. Layout::

    {
      "workspaces": {
        ".": {
          "changes": {"lines_added": 120, ...},
          "debt": {"complexity": [{"id": ..., "severity": ..., ...}], "security": "unavailable"},
          "architecture": {"modularity": 72, "coupling": 35, ...},
          "files": [{"path": "src/app.py", "complexity": 24, "coverage": 40}],
          "performance": [{"location": ..., "type": "cpu", "description": ..., "estimated_impact": 45}],
          "security": [{"location": ..., "vulnerability_type": "xss", "cvss_score": 7.5}]
        }
      },
      "quality": {"src/app.py": {"complexity": 80, "coverage": 65, ...}},
      "developers": {"alice": {"2024-W01": {"commits_count": 14, ...}}},
      "cognitive": {
        "engines": [{"engine_id": "pln", "accuracy": 0.9, ...}],
        "algorithms": [{"algorithm_id": "moses", "convergence_rate": 0.8, ...}],
        "users": [{"user_id": "alice", "adaptation_score": 70, ...}],
        "knowledge_graph_size": 1200,
        "active_patterns": 40
      }
    }

Any section may be the string ``"unavailable"`` to simulate a failing
collaborator; queries touching it raise ``CollaboratorUnavailableError``.
"""

import json
from pathlib import Path
from typing import Any, Optional, Union

from ..code.models import (
    ChangeSummary,
    DebtIssue,
    DeveloperActivity,
    FileSignals,
    PerformanceSignal,
    SecurityFinding,
)
from ..cognitive.models import LearningAlgorithmMetrics, ReasoningEngineMetrics, UserAdaptationMetrics
from ..exceptions import CollaboratorUnavailableError, InvalidPathError
from ..logging_config import get_logger

logger = get_logger(__name__)

UNAVAILABLE = "unavailable"


class MetricsFile:
    """Read-only signal source backed by a parsed JSON document."""

    def __init__(self, data: dict, name: str = "metrics file") -> None:
        self._data = data
        self.name = name

    @classmethod
    def load(cls, path: Union[str, Path]) -> "MetricsFile":
        """Parse a metrics file.

        Raises:
            InvalidPathError: If the file is missing or is not a JSON object
        """
        path = Path(path)
        if not path.is_file():
            raise InvalidPathError(path, "metrics file does not exist")
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidPathError(path, f"cannot read metrics file: {e}")
        if not isinstance(data, dict):
            raise InvalidPathError(path, "top-level JSON value must be an object")
        logger.debug("Loaded metrics file %s", path)
        return cls(data, name=str(path))

    # ── Section lookup ────────────────────────────────────────────

    def _section(self, container: Any, key: str, operation: str, default: Any = None) -> Any:
        if container == UNAVAILABLE:
            raise CollaboratorUnavailableError(self.name, operation)
        if not isinstance(container, dict):
            return default
        value = container.get(key, default)
        if value == UNAVAILABLE:
            raise CollaboratorUnavailableError(self.name, operation, f"'{key}' marked unavailable")
        return value

    def _workspace(self, workspace_id: str, operation: str) -> dict:
        workspaces = self._section(self._data, "workspaces", operation, {})
        ws = self._section(workspaces, workspace_id, operation)
        if ws is None:
            raise CollaboratorUnavailableError(self.name, operation, f"no data for workspace '{workspace_id}'")
        return ws

    def _cognitive(self, key: str, operation: str, default: Any = None) -> Any:
        section = self._section(self._data, "cognitive", operation, {})
        return self._section(section, key, operation, default)

    # ── CodeSource ────────────────────────────────────────────────

    def capture_changes(self, workspace_id: str) -> ChangeSummary:
        raw = self._section(self._workspace(workspace_id, "capture_changes"), "changes", "capture_changes", {})
        return ChangeSummary(**raw)

    def debt_issues(self, workspace_id: str, category: str) -> list[DebtIssue]:
        debt = self._section(self._workspace(workspace_id, "debt_issues"), "debt", "debt_issues", {})
        raw = self._section(debt, category, f"debt_issues[{category}]", [])
        return [DebtIssue.from_dict({"category": category, **d}) for d in raw]

    def measure_architecture(self, workspace_id: str, aspect: str) -> float:
        operation = f"measure_architecture[{aspect}]"
        scores = self._section(self._workspace(workspace_id, operation), "architecture", operation, {})
        value = self._section(scores, aspect, operation)
        if value is None:
            raise CollaboratorUnavailableError(self.name, operation, "aspect not measured")
        return float(value)

    def measure_quality(self, path: str, aspect: str) -> float:
        operation = f"measure_quality[{aspect}]"
        quality = self._section(self._data, "quality", operation, {})
        scores = self._section(quality, path, operation)
        if scores is None:
            raise CollaboratorUnavailableError(self.name, operation, f"no quality data for '{path}'")
        value = self._section(scores, aspect, operation)
        if value is None:
            raise CollaboratorUnavailableError(self.name, operation, "aspect not measured")
        return float(value)

    def file_signals(self, workspace_id: str) -> list[FileSignals]:
        raw = self._section(self._workspace(workspace_id, "file_signals"), "files", "file_signals", [])
        return [FileSignals(**d) for d in raw]

    def performance_signals(self, workspace_id: str) -> list[PerformanceSignal]:
        ws = self._workspace(workspace_id, "performance_signals")
        raw = self._section(ws, "performance", "performance_signals", [])
        return [PerformanceSignal(**d) for d in raw]

    def security_findings(self, workspace_id: str) -> list[SecurityFinding]:
        ws = self._workspace(workspace_id, "security_findings")
        raw = self._section(ws, "security", "security_findings", [])
        return [SecurityFinding(**d) for d in raw]

    def developer_activity(self, user_id: str, period: str) -> DeveloperActivity:
        developers = self._section(self._data, "developers", "developer_activity", {})
        periods = self._section(developers, user_id, "developer_activity", {})
        raw = self._section(periods, period, "developer_activity")
        if raw is None:
            raise CollaboratorUnavailableError(
                self.name, "developer_activity", f"no activity for '{user_id}' in '{period}'"
            )
        return DeveloperActivity(**raw)

    # ── KnowledgeSource ───────────────────────────────────────────

    def query_engine_metrics(self, engine_id: str) -> Optional[ReasoningEngineMetrics]:
        for metrics in self.query_all_engines():
            if metrics.engine_id == engine_id:
                return metrics
        return None

    def query_all_engines(self) -> list[ReasoningEngineMetrics]:
        return [ReasoningEngineMetrics(**d) for d in self._cognitive("engines", "query_all_engines", [])]

    def query_algorithm_metrics(self, algorithm_id: str) -> Optional[LearningAlgorithmMetrics]:
        for metrics in self.query_all_algorithms():
            if metrics.algorithm_id == algorithm_id:
                return metrics
        return None

    def query_all_algorithms(self) -> list[LearningAlgorithmMetrics]:
        return [LearningAlgorithmMetrics(**d) for d in self._cognitive("algorithms", "query_all_algorithms", [])]

    def query_user_adaptation(self, user_id: str) -> Optional[UserAdaptationMetrics]:
        for d in self._cognitive("users", "query_user_adaptation", []):
            if d.get("user_id") == user_id:
                return UserAdaptationMetrics(**d)
        return None

    def query_knowledge_graph_size(self) -> int:
        value = self._cognitive("knowledge_graph_size", "query_knowledge_graph_size")
        if value is None:
            raise CollaboratorUnavailableError(self.name, "query_knowledge_graph_size", "not reported")
        return int(value)

    def query_active_pattern_count(self) -> int:
        value = self._cognitive("active_patterns", "query_active_pattern_count")
        if value is None:
            raise CollaboratorUnavailableError(self.name, "query_active_pattern_count", "not reported")
        return int(value)
