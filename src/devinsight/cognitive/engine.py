"""CognitiveAnalyticsEngine: reasoning/learning telemetry, history and health."""

import time
from typing import Callable, Optional, TypeVar, Union

from ..config import AnalyticsConfig
from ..exceptions import CollaboratorUnavailableError, NotFoundError
from ..logging_config import get_logger
from ..math import Statistics
from ..models import TimeRange
from ..storage.backend import KeyValueStore
from ..validation import validate_identifier, validate_time_range
from . import health
from .history import ConvergenceHistory, PerformanceHistory
from .models import (
    AccuracyPoint,
    CognitivePerformanceSnapshot,
    ConvergencePoint,
    LearningAlgorithmMetrics,
    ReasoningEngineMetrics,
    SystemHealth,
    UserAdaptationMetrics,
)
from .protocols import KnowledgeSource

logger = get_logger(__name__)

M = TypeVar("M")


class CognitiveAnalyticsEngine:
    """Aggregates knowledge-source telemetry into snapshots and health.

    Unknown ids are handled by ``config.unknown_id_policy``: "raise" raises
    :class:`NotFoundError`; "fallback" returns zeroed metrics with
    ``is_fallback=True``. The policy is fixed per engine instance.

    Args:
        source: Knowledge/reasoning collaborator
        config: Analytics configuration (defaults if omitted)
        store: Optional storage collaborator for the snapshot ring
        clock: Returns the current unix time in seconds
    """

    def __init__(
        self,
        source: KnowledgeSource,
        config: Optional[AnalyticsConfig] = None,
        store: Optional[KeyValueStore] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.source = source
        self.config = config or AnalyticsConfig()
        self._clock = clock
        self._history = PerformanceHistory(self.config.performance_history_size, store)
        self._convergence = ConvergenceHistory(self.config.convergence_history_size)

    # ── Lookup helpers ────────────────────────────────────────────

    def _resolve(self, found: Optional[M], kind: str, identifier: str, fallback: Callable[[str], M]) -> M:
        if found is not None:
            return found
        if self.config.unknown_id_policy == "fallback":
            logger.debug("Unknown %s '%s', returning fallback metrics", kind, identifier)
            return fallback(identifier)
        raise NotFoundError(kind, identifier)

    # ── Aggregate snapshot ────────────────────────────────────────

    def get_cognitive_performance_metrics(self) -> CognitivePerformanceSnapshot:
        """Compute the current aggregate and append it to the bounded history."""
        missing: list[str] = []
        now = self._clock()

        accuracy = latency = None
        try:
            engines = self.source.query_all_engines()
            accuracy = Statistics.mean([e.accuracy for e in engines])
            latency = Statistics.mean([e.average_latency for e in engines])
            if not engines:
                logger.warning("No reasoning engines registered")
        except CollaboratorUnavailableError as e:
            logger.warning("Reasoning engine metrics unavailable: %s", e)
        if accuracy is None:
            missing.extend(["reasoning_accuracy", "reasoning_latency"])

        convergence = prediction = None
        try:
            algorithms = self.source.query_all_algorithms()
            convergence = Statistics.mean([a.convergence_rate for a in algorithms])
            prediction = Statistics.mean([a.accuracy for a in algorithms])
            for algo in algorithms:
                self._convergence.record(algo.algorithm_id, ConvergencePoint(now, algo.convergence_rate))
            if not algorithms:
                logger.warning("No learning algorithms registered")
        except CollaboratorUnavailableError as e:
            logger.warning("Learning algorithm metrics unavailable: %s", e)
        if convergence is None:
            missing.extend(["learning_convergence", "prediction_accuracy"])

        graph_size = self._query_count(self.source.query_knowledge_graph_size, "knowledge_graph_size", missing)
        patterns = self._query_count(self.source.query_active_pattern_count, "active_patterns", missing)

        snapshot = CognitivePerformanceSnapshot(
            timestamp=now,
            reasoning_accuracy=accuracy,
            reasoning_latency=latency,
            learning_convergence=convergence,
            prediction_accuracy=prediction,
            knowledge_graph_size=graph_size,
            active_patterns=patterns,
            missing=tuple(missing),
        )
        self._history.append(snapshot)
        return snapshot

    @staticmethod
    def _query_count(query: Callable[[], int], name: str, missing: list[str]) -> Optional[int]:
        try:
            return int(query())
        except CollaboratorUnavailableError as e:
            logger.warning("%s unavailable: %s", name, e)
            missing.append(name)
            return None

    def get_performance_history(self) -> list[CognitivePerformanceSnapshot]:
        return self._history.snapshots()

    # ── Per-entity metrics ────────────────────────────────────────

    def get_reasoning_engine_metrics(self, engine_id: str) -> ReasoningEngineMetrics:
        validate_identifier(engine_id, "engine_id")
        return self._resolve(
            self.source.query_engine_metrics(engine_id),
            "reasoning engine",
            engine_id,
            ReasoningEngineMetrics.fallback,
        )

    def get_all_reasoning_engine_metrics(self) -> list[ReasoningEngineMetrics]:
        return list(self.source.query_all_engines())

    def get_learning_algorithm_metrics(self, algorithm_id: str) -> LearningAlgorithmMetrics:
        validate_identifier(algorithm_id, "algorithm_id")
        return self._resolve(
            self.source.query_algorithm_metrics(algorithm_id),
            "learning algorithm",
            algorithm_id,
            LearningAlgorithmMetrics.fallback,
        )

    def get_all_learning_algorithm_metrics(self) -> list[LearningAlgorithmMetrics]:
        return list(self.source.query_all_algorithms())

    def get_user_adaptation_metrics(self, user_id: str) -> UserAdaptationMetrics:
        validate_identifier(user_id, "user_id")
        return self._resolve(
            self.source.query_user_adaptation(user_id),
            "user",
            user_id,
            UserAdaptationMetrics.fallback,
        )

    # ── Recommendations and health ────────────────────────────────

    def get_optimization_recommendations(self) -> list[str]:
        snapshot = self.get_cognitive_performance_metrics()
        growth = health.knowledge_growth_rate(self._history.snapshots())
        return health.optimization_recommendations(snapshot, growth, self.config.thresholds)

    def get_cognitive_system_health(self) -> SystemHealth:
        snapshot = self.get_cognitive_performance_metrics()
        result = health.assess_health(snapshot)
        logger.debug("Cognitive health %s (score %.0f)", result.status, result.score)
        return result

    # ── Time-window queries ───────────────────────────────────────

    def track_reasoning_accuracy(self, time_range: Union[TimeRange, tuple]) -> list[AccuracyPoint]:
        time_range = validate_time_range(time_range)
        return [
            AccuracyPoint(s.timestamp, s.reasoning_accuracy)
            for s in self._history.snapshots()
            if s.reasoning_accuracy is not None and time_range.contains(s.timestamp)
        ]

    def track_learning_convergence(
        self, algorithm_id: str, time_range: Union[TimeRange, tuple]
    ) -> list[ConvergencePoint]:
        validate_identifier(algorithm_id, "algorithm_id")
        time_range = validate_time_range(time_range)

        series = self._convergence.series(algorithm_id)
        if not series and self.source.query_algorithm_metrics(algorithm_id) is None:
            if self.config.unknown_id_policy == "fallback":
                return []
            raise NotFoundError("learning algorithm", algorithm_id)

        return [p for p in series if time_range.contains(p.timestamp)]
