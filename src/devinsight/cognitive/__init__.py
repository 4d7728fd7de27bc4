"""Cognitive analytics: reasoning engine, learning algorithm and adaptation metrics."""

from .engine import CognitiveAnalyticsEngine
from .health import assess_health, knowledge_growth_rate, optimization_recommendations
from .models import (
    AccuracyPoint,
    CognitivePerformanceSnapshot,
    ConvergencePoint,
    HealthStatus,
    LearningAlgorithmMetrics,
    ReasoningEngineMetrics,
    SystemHealth,
    UserAdaptationMetrics,
)
from .protocols import KnowledgeSource
from .telemetry import TelemetryRecorder

__all__ = [
    "CognitiveAnalyticsEngine",
    "TelemetryRecorder",
    "KnowledgeSource",
    "assess_health",
    "knowledge_growth_rate",
    "optimization_recommendations",
    "AccuracyPoint",
    "CognitivePerformanceSnapshot",
    "ConvergencePoint",
    "HealthStatus",
    "LearningAlgorithmMetrics",
    "ReasoningEngineMetrics",
    "SystemHealth",
    "UserAdaptationMetrics",
]
