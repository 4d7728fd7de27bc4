"""Composite code-quality and developer-productivity scores."""

from typing import Mapping

from ..math import Statistics, clamp
from .models import DeveloperActivity

# Weights of the composite quality score; they sum to exactly 1.0.
QUALITY_WEIGHTS: dict[str, float] = {
    "complexity": 0.25,
    "duplication": 0.20,
    "coverage": 0.25,
    "documentation": 0.15,
    "style": 0.15,
}


def composite_quality(sub_scores: Mapping[str, float]) -> float:
    """Weighted quality score over whichever sub-scores are present.

    With every sub-score present this is exactly
    0.25*complexity + 0.20*duplication + 0.25*coverage + 0.15*documentation + 0.15*style.
    With some missing, the remaining weights are renormalized.
    """
    if len(sub_scores) == len(QUALITY_WEIGHTS):
        return Statistics.weighted_sum(sub_scores, QUALITY_WEIGHTS)
    weights = {k: w for k, w in QUALITY_WEIGHTS.items() if k in sub_scores}
    total_weight = sum(weights.values())
    if total_weight == 0:
        return 0.0
    return Statistics.weighted_sum(sub_scores, weights) / total_weight


def productivity_score(activity: DeveloperActivity) -> float:
    """0.40*focus + 0.35*throughput + 0.25*cycle, clamped to [0, 100].

    throughput = min(100, 10*features + 5*bugs + 3*reviews)
    cycle      = max(0, 100 - 2.5*average cycle hours)
    """
    focus = clamp(activity.focus_time_percentage, 0.0, 100.0)
    throughput = min(
        100.0,
        10.0 * activity.features_completed + 5.0 * activity.bugs_fixed + 3.0 * activity.code_reviews_completed,
    )
    cycle = max(0.0, 100.0 - 2.5 * activity.average_cycle_time)
    return clamp(0.40 * focus + 0.35 * throughput + 0.25 * cycle, 0.0, 100.0)
