"""In-process telemetry recorder for reasoning engines and learning algorithms.

Instrumented code calls the ``record_*``/``set_*`` hooks as inferences and
training runs complete; the recorder answers the :class:`KnowledgeSource`
queries from what it has seen so far.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from ..exceptions import InvalidInputError
from ..validation import validate_identifier
from .models import LearningAlgorithmMetrics, ReasoningEngineMetrics, UserAdaptationMetrics


@dataclass
class _InferenceTally:
    total: int = 0
    failed: int = 0
    correct: int = 0
    confidence_sum: float = 0.0
    latency_sum: float = 0.0

    def metrics(self, engine_id: str) -> ReasoningEngineMetrics:
        n = self.total
        return ReasoningEngineMetrics(
            engine_id=engine_id,
            accuracy=self.correct / n if n else 0.0,
            average_confidence=self.confidence_sum / n if n else 0.0,
            average_latency=self.latency_sum / n if n else 0.0,
            success_rate=(n - self.failed) / n if n else 0.0,
            total_inferences=n,
            failed_inferences=self.failed,
        )


def _check_fraction(value: float, field: str) -> float:
    if not 0.0 <= value <= 1.0:
        raise InvalidInputError(field, value, "must be between 0.0 and 1.0")
    return float(value)


class TelemetryRecorder:
    """Thread-safe accumulator implementing ``KnowledgeSource``.

    Engine metrics are running totals. Algorithm and user metrics keep the
    most recent report.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._engines: dict[str, _InferenceTally] = {}
        self._algorithms: dict[str, LearningAlgorithmMetrics] = {}
        self._users: dict[str, UserAdaptationMetrics] = {}
        self._graph_size = 0
        self._active_patterns = 0

    # ── Hooks ─────────────────────────────────────────────────────

    def record_inference(
        self,
        engine_id: str,
        correct: bool,
        confidence: float,
        latency_ms: float,
        failed: bool = False,
    ) -> None:
        validate_identifier(engine_id, "engine_id")
        _check_fraction(confidence, "confidence")
        if latency_ms < 0:
            raise InvalidInputError("latency_ms", latency_ms, "must be non-negative")

        with self._lock:
            tally = self._engines.setdefault(engine_id, _InferenceTally())
            tally.total += 1
            tally.failed += int(failed)
            tally.correct += int(correct and not failed)
            tally.confidence_sum += confidence
            tally.latency_sum += latency_ms

    def record_training(
        self,
        algorithm_id: str,
        convergence_rate: float,
        accuracy: float,
        training_time_ms: float,
        sample_size: int,
        overfitting_risk: float = 0.0,
    ) -> None:
        validate_identifier(algorithm_id, "algorithm_id")
        metrics = LearningAlgorithmMetrics(
            algorithm_id=algorithm_id,
            convergence_rate=_check_fraction(convergence_rate, "convergence_rate"),
            accuracy=_check_fraction(accuracy, "accuracy"),
            training_time=float(training_time_ms),
            sample_size=int(sample_size),
            overfitting_risk=_check_fraction(overfitting_risk, "overfitting_risk"),
        )
        with self._lock:
            self._algorithms[algorithm_id] = metrics

    def record_user_adaptation(
        self,
        user_id: str,
        adaptation_score: float,
        preference_accuracy: float,
        workflow_optimization: float,
        suggestion_acceptance_rate: float,
        user_satisfaction: float,
    ) -> None:
        validate_identifier(user_id, "user_id")
        if not 0.0 <= user_satisfaction <= 5.0:
            raise InvalidInputError("user_satisfaction", user_satisfaction, "must be between 0 and 5")
        metrics = UserAdaptationMetrics(
            user_id=user_id,
            adaptation_score=float(adaptation_score),
            preference_accuracy=_check_fraction(preference_accuracy, "preference_accuracy"),
            workflow_optimization=float(workflow_optimization),
            suggestion_acceptance_rate=_check_fraction(
                suggestion_acceptance_rate, "suggestion_acceptance_rate"
            ),
            user_satisfaction=float(user_satisfaction),
        )
        with self._lock:
            self._users[user_id] = metrics

    def set_knowledge_graph_size(self, size: int) -> None:
        if size < 0:
            raise InvalidInputError("size", size, "must be non-negative")
        with self._lock:
            self._graph_size = int(size)

    def set_active_pattern_count(self, count: int) -> None:
        if count < 0:
            raise InvalidInputError("count", count, "must be non-negative")
        with self._lock:
            self._active_patterns = int(count)

    # ── KnowledgeSource ───────────────────────────────────────────

    def query_engine_metrics(self, engine_id: str) -> Optional[ReasoningEngineMetrics]:
        with self._lock:
            tally = self._engines.get(engine_id)
            return tally.metrics(engine_id) if tally is not None else None

    def query_all_engines(self) -> list[ReasoningEngineMetrics]:
        with self._lock:
            return [t.metrics(eid) for eid, t in sorted(self._engines.items())]

    def query_algorithm_metrics(self, algorithm_id: str) -> Optional[LearningAlgorithmMetrics]:
        with self._lock:
            return self._algorithms.get(algorithm_id)

    def query_all_algorithms(self) -> list[LearningAlgorithmMetrics]:
        with self._lock:
            return [m for _, m in sorted(self._algorithms.items())]

    def query_user_adaptation(self, user_id: str) -> Optional[UserAdaptationMetrics]:
        with self._lock:
            return self._users.get(user_id)

    def query_knowledge_graph_size(self) -> int:
        with self._lock:
            return self._graph_size

    def query_active_pattern_count(self) -> int:
        with self._lock:
            return self._active_patterns
