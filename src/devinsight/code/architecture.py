"""Architecture quality scoring and weak-point/strength classification.

Coupling is "lower is better", so it is inverted (100 - coupling) before it
is averaged or classified. Every aspect then shares one rule: below the weak
threshold is a weak point, above the strength threshold is a strength, and
the closed band in between is neither.
"""

from typing import Mapping

from ..math import Statistics

INVERTED_ASPECTS = frozenset({"coupling"})

WEAK_POINT_MESSAGES = {
    "modularity": "Low modularity - consider breaking down large modules",
    "cohesion": "Low cohesion - modules have too many unrelated responsibilities",
    "coupling": "High coupling - modules are too interdependent",
    "maintainability": "Low maintainability - code is difficult to modify",
    "testability": "Low testability - code is difficult to test",
}

STRENGTH_MESSAGES = {
    "modularity": "Excellent modularity",
    "cohesion": "High cohesion - well-focused modules",
    "coupling": "Low coupling - good separation of concerns",
    "maintainability": "High maintainability",
    "testability": "High testability",
}


def quality_view(aspect: str, score: float) -> float:
    """Map a raw sub-score onto the higher-is-better scale."""
    return 100.0 - score if aspect in INVERTED_ASPECTS else score


def overall_score(scores: Mapping[str, float]) -> float:
    """Mean of the available sub-scores on the higher-is-better scale."""
    mean = Statistics.mean([quality_view(a, s) for a, s in scores.items()])
    return 0.0 if mean is None else mean


def classify(scores: Mapping[str, float], weak_below: float, strong_above: float) -> tuple[list[str], list[str]]:
    """Split aspects into weak points and strengths."""
    weak_points: list[str] = []
    strengths: list[str] = []
    for aspect, score in scores.items():
        value = quality_view(aspect, score)
        if value < weak_below:
            weak_points.append(WEAK_POINT_MESSAGES[aspect])
        elif value > strong_above:
            strengths.append(STRENGTH_MESSAGES[aspect])
    return weak_points, strengths
