"""Technical-debt aggregation: recommendations and trend against a baseline."""

from typing import Mapping, Sequence

from ..config import ThresholdConfig
from ..math import Statistics
from .models import DebtIssue


def debt_hours(issues: Sequence[DebtIssue]) -> float:
    """Remediation effort of a category: the sum of its issues' estimates."""
    return float(sum(max(0.0, issue.estimated_effort) for issue in issues))


def recommend(
    debt_by_category: Mapping[str, float],
    critical_issues: Sequence[DebtIssue],
    missing_categories: Sequence[str],
    thresholds: ThresholdConfig,
) -> list[str]:
    """Fixed-threshold recommendations for a debt breakdown.

    Missing categories are reported too, so a gap in the totals is never silent.
    """
    recommendations: list[str] = []

    if critical_issues:
        n = len(critical_issues)
        noun = "issue" if n == 1 else "issues"
        recommendations.append(f"Address {n} critical {noun} immediately")

    if debt_by_category.get("complexity", 0.0) > thresholds.complexity_debt_hours:
        recommendations.append("Prioritize complexity reduction through refactoring")

    if debt_by_category.get("duplication", 0.0) > thresholds.duplication_debt_hours:
        recommendations.append("Eliminate code duplication through extraction and reuse")

    for category in missing_categories:
        recommendations.append(
            f"Debt for '{category}' could not be measured; total debt is understated until it is re-analyzed"
        )

    return recommendations


def classify_trend(current: float, previous_totals: Sequence[float], window: int, tolerance: float) -> str:
    """Compare ``current`` against the mean of the last ``window`` recorded totals.

    Returns "stable" when there is no baseline or the relative change is
    within ``tolerance``.
    """
    baseline = Statistics.mean(list(previous_totals)[-window:])
    if baseline is None:
        return "stable"
    if baseline == 0:
        return "increasing" if current > 0 else "stable"
    change = (current - baseline) / baseline
    if change > tolerance:
        return "increasing"
    if change < -tolerance:
        return "decreasing"
    return "stable"
