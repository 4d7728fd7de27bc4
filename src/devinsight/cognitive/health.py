"""Health classification and optimization rules for the cognitive subsystem.

Both are pure functions of a snapshot: status is recomputed from scratch on
every call, with no memory of the previous state.
"""

from typing import Sequence

from ..config import ThresholdConfig
from .models import CognitivePerformanceSnapshot, SystemHealth

HEALTHY_MIN_SCORE = 80.0
DEGRADED_MIN_SCORE = 50.0

# Growth rate assumed until two snapshots with a graph size exist.
DEFAULT_GROWTH_RATE = 0.1
GROWTH_LOOKBACK = 10

OPTIMAL_MESSAGE = "Cognitive system is performing optimally. Continue monitoring for any degradation."

METRIC_LABELS = {
    "reasoning_accuracy": "Reasoning accuracy",
    "reasoning_latency": "Reasoning latency",
    "learning_convergence": "Learning convergence",
    "prediction_accuracy": "Prediction accuracy",
    "knowledge_graph_size": "Knowledge graph size",
    "active_patterns": "Active pattern count",
}


def classify_score(score: float) -> str:
    if score >= HEALTHY_MIN_SCORE:
        return "healthy"
    if score >= DEGRADED_MIN_SCORE:
        return "degraded"
    return "critical"


def _missing_notes(snapshot: CognitivePerformanceSnapshot) -> tuple[list[str], list[str]]:
    issues = [f"{METRIC_LABELS.get(name, name)} unavailable" for name in snapshot.missing]
    recommendations = [
        f"Restore telemetry for {METRIC_LABELS.get(name, name).lower()} before trusting this assessment"
        for name in snapshot.missing
    ]
    return issues, recommendations


def assess_health(snapshot: CognitivePerformanceSnapshot) -> SystemHealth:
    """Start at 100 and subtract a fixed penalty for each violated threshold.

    accuracy < 0.7: -30, 0.7 <= accuracy < 0.8: -15, latency > 500: -20,
    200 < latency <= 500: -10, convergence < 0.6: -15, prediction < 0.7: -15.
    Unavailable metrics carry no penalty but are listed as issues.
    """
    issues: list[str] = []
    recommendations: list[str] = []
    score = 100.0

    accuracy = snapshot.reasoning_accuracy
    if accuracy is not None:
        if accuracy < 0.7:
            issues.append("Reasoning accuracy critically low")
            recommendations.append("Immediate model retraining required")
            score -= 30
        elif accuracy < 0.8:
            issues.append("Reasoning accuracy below optimal")
            recommendations.append("Schedule model retraining")
            score -= 15

    latency = snapshot.reasoning_latency
    if latency is not None:
        if latency > 500:
            issues.append("High reasoning latency detected")
            recommendations.append("Optimize query patterns and implement caching")
            score -= 20
        elif latency > 200:
            issues.append("Elevated reasoning latency")
            recommendations.append("Review and optimize critical paths")
            score -= 10

    if snapshot.learning_convergence is not None and snapshot.learning_convergence < 0.6:
        issues.append("Learning algorithms not converging well")
        recommendations.append("Review training data quality and hyperparameters")
        score -= 15

    if snapshot.prediction_accuracy is not None and snapshot.prediction_accuracy < 0.7:
        issues.append("Low prediction accuracy")
        recommendations.append("Enhance feature engineering and model selection")
        score -= 15

    missing_issues, missing_recommendations = _missing_notes(snapshot)
    issues.extend(missing_issues)
    recommendations.extend(missing_recommendations)

    return SystemHealth(
        status=classify_score(score),  # type: ignore[arg-type]
        score=score,
        issues=issues,
        recommendations=recommendations,
    )


def knowledge_growth_rate(history: Sequence[CognitivePerformanceSnapshot]) -> float:
    """Relative graph growth between the newest snapshot and one up to 9 entries older.

    Floored at 0. Returns DEFAULT_GROWTH_RATE with fewer than two sized snapshots.
    """
    sized = [s.knowledge_graph_size for s in history if s.knowledge_graph_size is not None]
    if len(sized) < 2:
        return DEFAULT_GROWTH_RATE
    recent = sized[-1]
    older = sized[max(0, len(sized) - GROWTH_LOOKBACK)]
    if older == 0:
        return 1.0 if recent > 0 else 0.0
    return max(0.0, (recent - older) / older)


def optimization_recommendations(
    snapshot: CognitivePerformanceSnapshot,
    growth_rate: float,
    thresholds: ThresholdConfig,
) -> list[str]:
    """Independent rules; several may fire. Exactly one "optimal" message when none do."""
    recommendations: list[str] = []

    if snapshot.reasoning_accuracy is not None and snapshot.reasoning_accuracy < thresholds.accuracy_target:
        recommendations.append(
            f"Reasoning accuracy is below target ({thresholds.accuracy_target:.0%}). "
            "Consider retraining models with more diverse data."
        )

    if snapshot.reasoning_latency is not None and snapshot.reasoning_latency > thresholds.latency_target_ms:
        recommendations.append(
            "Reasoning latency is high. Consider implementing caching for frequently accessed patterns."
        )

    if (
        snapshot.learning_convergence is not None
        and snapshot.learning_convergence < thresholds.convergence_target
    ):
        recommendations.append(
            "Learning algorithms are converging slowly. Review hyperparameters and training data quality."
        )

    if snapshot.prediction_accuracy is not None and snapshot.prediction_accuracy < thresholds.prediction_target:
        recommendations.append(
            "Prediction accuracy needs improvement. Evaluate feature engineering and model selection."
        )

    if snapshot.knowledge_graph_size is not None and growth_rate < thresholds.growth_rate_floor:
        recommendations.append(
            "Knowledge graph growth is stagnant. Increase active learning and knowledge acquisition."
        )

    _, missing_recommendations = _missing_notes(snapshot)
    recommendations.extend(missing_recommendations)

    if not recommendations:
        recommendations.append(OPTIMAL_MESSAGE)

    return recommendations
