"""Tests for insight scoring, ordering and id assignment."""

import pytest

from devinsight.insights import GeneratedInsight, insight_score, prioritize
from devinsight.insights.ids import next_insight_id


def make_insight(insight_id, priority="medium", impact=50.0, confidence=0.5, timestamp=0.0):
    return GeneratedInsight(
        id=insight_id,
        key=f"quality:{insight_id}",
        category="quality",
        title=insight_id,
        description="",
        priority=priority,
        impact=impact,
        confidence=confidence,
        timestamp=timestamp,
    )


class TestScore:
    @pytest.mark.parametrize(
        "priority, expected",
        [("critical", 4 * 80 * 0.5), ("high", 3 * 80 * 0.5), ("medium", 2 * 80 * 0.5), ("low", 80 * 0.5)],
    )
    def test_weight_times_impact_times_confidence(self, priority, expected):
        assert insight_score(make_insight("a", priority, impact=80, confidence=0.5)) == pytest.approx(expected)


class TestPrioritize:
    def test_highest_score_first(self):
        ranked = prioritize(
            [
                make_insight("low", "low", impact=100, confidence=1.0),
                make_insight("crit", "critical", impact=90, confidence=0.95),
                make_insight("med", "medium", impact=90, confidence=0.82),
            ],
            limit=10,
        )
        assert [i.id for i in ranked] == ["crit", "med", "low"]

    def test_ties_prefer_newest(self):
        ranked = prioritize(
            [make_insight("old", timestamp=10.0), make_insight("new", timestamp=20.0)],
            limit=10,
        )
        assert [i.id for i in ranked] == ["new", "old"]

    def test_limit(self):
        insights = [make_insight(str(n), impact=n) for n in range(8)]
        ranked = prioritize(insights, limit=3)
        assert [i.id for i in ranked] == ["7", "6", "5"]

    def test_empty(self):
        assert prioritize([], limit=5) == []


class TestIds:
    def test_same_millisecond_still_unique(self):
        ids = {next_insight_id("security", 1_700_000_000.0) for _ in range(100)}
        assert len(ids) == 100

    def test_format(self):
        category, millis, _ = next_insight_id("quality", 12.3456).split("-")
        assert category == "quality"
        assert millis == "12345"
