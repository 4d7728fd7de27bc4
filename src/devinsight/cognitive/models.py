"""Data models for cognitive (reasoning/learning) analytics."""

from dataclasses import asdict, dataclass, field
from typing import List, Literal, Optional

HealthStatus = Literal["healthy", "degraded", "critical"]


@dataclass(frozen=True)
class CognitivePerformanceSnapshot:
    """System-wide aggregate at one point in time.

    A field is None when it could not be computed (no engines/algorithms
    registered, or the knowledge source failed); its name is then listed in
    ``missing``.
    """

    timestamp: float
    reasoning_accuracy: Optional[float]  # 0-1
    reasoning_latency: Optional[float]  # ms
    learning_convergence: Optional[float]  # 0-1
    prediction_accuracy: Optional[float]  # 0-1
    knowledge_graph_size: Optional[int]
    active_patterns: Optional[int]
    missing: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        d = asdict(self)
        d["missing"] = list(self.missing)
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "CognitivePerformanceSnapshot":
        return cls(
            timestamp=float(d["timestamp"]),
            reasoning_accuracy=d.get("reasoning_accuracy"),
            reasoning_latency=d.get("reasoning_latency"),
            learning_convergence=d.get("learning_convergence"),
            prediction_accuracy=d.get("prediction_accuracy"),
            knowledge_graph_size=d.get("knowledge_graph_size"),
            active_patterns=d.get("active_patterns"),
            missing=tuple(d.get("missing", ())),
        )


@dataclass(frozen=True)
class ReasoningEngineMetrics:
    engine_id: str
    accuracy: float  # 0-1
    average_confidence: float  # 0-1
    average_latency: float  # ms
    success_rate: float  # 0-1
    total_inferences: int
    failed_inferences: int
    is_fallback: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def fallback(cls, engine_id: str) -> "ReasoningEngineMetrics":
        return cls(engine_id, 0.0, 0.0, 0.0, 0.0, 0, 0, is_fallback=True)


@dataclass(frozen=True)
class LearningAlgorithmMetrics:
    algorithm_id: str
    convergence_rate: float  # 0-1
    accuracy: float  # 0-1
    training_time: float  # ms
    sample_size: int
    overfitting_risk: float  # 0-1
    is_fallback: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def fallback(cls, algorithm_id: str) -> "LearningAlgorithmMetrics":
        return cls(algorithm_id, 0.0, 0.0, 0.0, 0, 0.0, is_fallback=True)


@dataclass(frozen=True)
class UserAdaptationMetrics:
    user_id: str
    adaptation_score: float  # 0-100
    preference_accuracy: float  # 0-1
    workflow_optimization: float  # percentage improvement
    suggestion_acceptance_rate: float  # 0-1
    user_satisfaction: float  # 0-5
    is_fallback: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def fallback(cls, user_id: str) -> "UserAdaptationMetrics":
        return cls(user_id, 0.0, 0.0, 0.0, 0.0, 0.0, is_fallback=True)


@dataclass(frozen=True)
class ConvergencePoint:
    timestamp: float
    convergence: float


@dataclass(frozen=True)
class AccuracyPoint:
    timestamp: float
    accuracy: float


@dataclass
class SystemHealth:
    status: HealthStatus
    score: float
    issues: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
