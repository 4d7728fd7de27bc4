"""Insight scoring and ordering."""

from typing import Iterable

from .models import GeneratedInsight

PRIORITY_WEIGHT = {"critical": 4, "high": 3, "medium": 2, "low": 1}


def insight_score(insight: GeneratedInsight) -> float:
    """priority weight x impact x confidence."""
    return PRIORITY_WEIGHT[insight.priority] * insight.impact * insight.confidence


def prioritize(insights: Iterable[GeneratedInsight], limit: int) -> list[GeneratedInsight]:
    """Highest score first; equal scores put the most recent insight first."""
    ranked = sorted(insights, key=lambda i: (insight_score(i), i.timestamp), reverse=True)
    return ranked[:limit]
