"""Tests for CognitiveAnalyticsEngine: snapshots, per-entity metrics, health, recommendations."""

import pytest

from conftest import FakeKnowledgeSource
from devinsight.cognitive import CognitiveAnalyticsEngine
from devinsight.cognitive.health import OPTIMAL_MESSAGE
from devinsight.cognitive.models import UserAdaptationMetrics
from devinsight.config import AnalyticsConfig
from devinsight.exceptions import CollaboratorUnavailableError, InvalidInputError, NotFoundError
from devinsight.storage import MemoryStore


def make_engine(source, clock, **config):
    return CognitiveAnalyticsEngine(source, AnalyticsConfig(**config), MemoryStore(), clock)


class TestPerformanceSnapshot:
    def test_unweighted_means(self, clock):
        source = FakeKnowledgeSource()
        source.set_engine("a", accuracy=0.8, latency=100)
        source.set_engine("b", accuracy=0.9, latency=300)
        source.set_algorithm("x", convergence=0.6, accuracy=0.7)
        source.set_algorithm("y", convergence=0.8, accuracy=0.9)
        snapshot = make_engine(source, clock).get_cognitive_performance_metrics()

        assert snapshot.reasoning_accuracy == pytest.approx(0.85)
        assert snapshot.reasoning_latency == pytest.approx(200.0)
        assert snapshot.learning_convergence == pytest.approx(0.7)
        assert snapshot.prediction_accuracy == pytest.approx(0.8)
        assert snapshot.knowledge_graph_size == 1000
        assert snapshot.active_patterns == 20
        assert snapshot.missing == ()
        assert snapshot.timestamp == clock.now

    def test_ring_evicts_oldest(self, knowledge_source, clock):
        engine = make_engine(knowledge_source, clock, performance_history_size=3)
        for _ in range(5):
            engine.get_cognitive_performance_metrics()
            clock.advance(1)
        history = engine.get_performance_history()
        assert len(history) == 3
        assert [s.timestamp for s in history] == [clock.now - 3, clock.now - 2, clock.now - 1]

    def test_no_registered_entities(self, clock):
        snapshot = make_engine(FakeKnowledgeSource(), clock).get_cognitive_performance_metrics()
        assert snapshot.reasoning_accuracy is None
        assert "reasoning_accuracy" in snapshot.missing
        assert "learning_convergence" in snapshot.missing

    def test_unavailable_source_is_partial(self, knowledge_source, clock):
        knowledge_source.unavailable.add("graph")
        snapshot = make_engine(knowledge_source, clock).get_cognitive_performance_metrics()
        assert snapshot.knowledge_graph_size is None
        assert snapshot.missing == ("knowledge_graph_size",)
        assert snapshot.reasoning_accuracy == pytest.approx(0.95)

    def test_history_persists_in_store(self, knowledge_source, clock):
        store = MemoryStore()
        CognitiveAnalyticsEngine(knowledge_source, AnalyticsConfig(), store, clock).get_cognitive_performance_metrics()
        reopened = CognitiveAnalyticsEngine(knowledge_source, AnalyticsConfig(), store, clock)
        assert len(reopened.get_performance_history()) == 1


class TestEntityMetrics:
    def test_known_ids(self, cognitive_engine):
        assert cognitive_engine.get_reasoning_engine_metrics("pln").accuracy == 0.95
        assert cognitive_engine.get_learning_algorithm_metrics("moses").convergence_rate == 0.9
        assert [e.engine_id for e in cognitive_engine.get_all_reasoning_engine_metrics()] == ["pln"]
        assert [a.algorithm_id for a in cognitive_engine.get_all_learning_algorithm_metrics()] == ["moses"]

    def test_user_adaptation(self, cognitive_engine, knowledge_source):
        knowledge_source.users["alice"] = UserAdaptationMetrics("alice", 72.0, 0.8, 12.5, 0.6, 4.2)
        metrics = cognitive_engine.get_user_adaptation_metrics("alice")
        assert metrics.adaptation_score == 72.0
        assert metrics.is_fallback is False

    @pytest.mark.parametrize(
        "method",
        ["get_reasoning_engine_metrics", "get_learning_algorithm_metrics", "get_user_adaptation_metrics"],
    )
    def test_unknown_id_raises_by_default(self, cognitive_engine, method):
        with pytest.raises(NotFoundError) as exc_info:
            getattr(cognitive_engine, method)("ghost")
        assert exc_info.value.identifier == "ghost"

    @pytest.mark.parametrize(
        "method, id_field",
        [
            ("get_reasoning_engine_metrics", "engine_id"),
            ("get_learning_algorithm_metrics", "algorithm_id"),
            ("get_user_adaptation_metrics", "user_id"),
        ],
    )
    def test_unknown_id_fallback_policy(self, knowledge_source, clock, method, id_field):
        engine = make_engine(knowledge_source, clock, unknown_id_policy="fallback")
        metrics = getattr(engine, method)("ghost")
        assert metrics.is_fallback is True
        assert getattr(metrics, id_field) == "ghost"
        zeroed = {k: v for k, v in metrics.to_dict().items() if k not in (id_field, "is_fallback")}
        assert all(v == 0 for v in zeroed.values())

    def test_fallback_policy_keeps_known_ids_real(self, knowledge_source, clock):
        engine = make_engine(knowledge_source, clock, unknown_id_policy="fallback")
        assert engine.get_reasoning_engine_metrics("pln").is_fallback is False

    def test_invalid_id(self, cognitive_engine):
        with pytest.raises(InvalidInputError):
            cognitive_engine.get_reasoning_engine_metrics("")

    def test_unavailable_source_propagates(self, cognitive_engine, knowledge_source):
        knowledge_source.unavailable.add("engines")
        with pytest.raises(CollaboratorUnavailableError):
            cognitive_engine.get_reasoning_engine_metrics("pln")


class TestSystemHealth:
    def _health(self, clock, accuracy, latency=100.0, convergence=0.9, prediction=0.9):
        source = FakeKnowledgeSource()
        source.set_engine("pln", accuracy=accuracy, latency=latency)
        source.set_algorithm("moses", convergence=convergence, accuracy=prediction)
        return make_engine(source, clock).get_cognitive_system_health()

    def test_low_accuracy_is_degraded(self, clock):
        health = self._health(clock, accuracy=0.65)
        assert health.score == 70
        assert health.status == "degraded"
        assert "Reasoning accuracy critically low" in health.issues

    def test_good_metrics_are_healthy(self, clock):
        health = self._health(clock, accuracy=0.95)
        assert health.score == 100
        assert health.status == "healthy"
        assert health.issues == []

    def test_compounding_penalties_are_critical(self, clock):
        health = self._health(clock, accuracy=0.6, latency=600, convergence=0.5)
        assert health.score == 35
        assert health.status == "critical"
        assert len(health.recommendations) == 3

    @pytest.mark.parametrize(
        "accuracy, latency, expected",
        [
            (0.7, 100, 85),  # 0.7 is "below optimal", not "critically low"
            (0.8, 100, 100),
            (0.95, 500, 90),  # 500 is "elevated", not "high"
            (0.95, 501, 80),
            (0.95, 200, 100),
        ],
    )
    def test_threshold_boundaries(self, clock, accuracy, latency, expected):
        assert self._health(clock, accuracy=accuracy, latency=latency).score == expected

    def test_status_boundaries(self, clock):
        # 100 - 15 (accuracy) - 10 (latency) = 75
        assert self._health(clock, accuracy=0.75, latency=300).status == "degraded"
        # 100 - 30 - 20 = 50
        assert self._health(clock, accuracy=0.6, latency=600).status == "degraded"
        # 100 - 30 - 20 - 15 = 35
        assert self._health(clock, accuracy=0.6, latency=600, prediction=0.5).status == "critical"

    def test_recomputed_every_call(self, knowledge_source, clock):
        engine = make_engine(knowledge_source, clock)
        assert engine.get_cognitive_system_health().status == "healthy"
        knowledge_source.set_engine("pln", accuracy=0.6, latency=600)
        assert engine.get_cognitive_system_health().status == "degraded"
        knowledge_source.set_engine("pln", accuracy=0.95)
        assert engine.get_cognitive_system_health().status == "healthy"

    def test_missing_metrics_surface_without_penalty(self, knowledge_source, clock):
        knowledge_source.unavailable.add("engines")
        health = make_engine(knowledge_source, clock).get_cognitive_system_health()
        assert health.score == 100
        assert "Reasoning accuracy unavailable" in health.issues
        assert any("reasoning accuracy" in r for r in health.recommendations)


class TestOptimizationRecommendations:
    def test_optimal_when_nothing_fires(self, cognitive_engine):
        assert cognitive_engine.get_optimization_recommendations() == [OPTIMAL_MESSAGE]

    def test_each_rule_fires(self, clock):
        source = FakeKnowledgeSource()
        source.set_engine("pln", accuracy=0.75, latency=250)
        source.set_algorithm("moses", convergence=0.65, accuracy=0.7)
        recs = make_engine(source, clock).get_optimization_recommendations()
        assert len(recs) == 4
        assert recs[0].startswith("Reasoning accuracy is below target (80%)")
        assert OPTIMAL_MESSAGE not in recs

    def test_stagnant_knowledge_growth(self, cognitive_engine):
        cognitive_engine.get_cognitive_performance_metrics()
        cognitive_engine.get_cognitive_performance_metrics()
        recs = cognitive_engine.get_optimization_recommendations()
        assert recs == [
            "Knowledge graph growth is stagnant. Increase active learning and knowledge acquisition."
        ]

    def test_growing_knowledge_graph(self, cognitive_engine, knowledge_source):
        cognitive_engine.get_cognitive_performance_metrics()
        knowledge_source.graph_size = 1100
        assert cognitive_engine.get_optimization_recommendations() == [OPTIMAL_MESSAGE]

    def test_missing_metric_is_not_optimal(self, cognitive_engine, knowledge_source):
        knowledge_source.unavailable.add("algorithms")
        recs = cognitive_engine.get_optimization_recommendations()
        assert OPTIMAL_MESSAGE not in recs
        assert any("learning convergence" in r for r in recs)


class TestTimeWindows:
    def test_reasoning_accuracy_window(self, cognitive_engine, clock):
        start = clock.now
        for _ in range(3):
            cognitive_engine.get_cognitive_performance_metrics()
            clock.advance(10)
        points = cognitive_engine.track_reasoning_accuracy((start + 5, start + 25))
        assert [p.timestamp for p in points] == [start + 10, start + 20]
        assert all(p.accuracy == pytest.approx(0.95) for p in points)

    def test_learning_convergence_window(self, cognitive_engine, clock):
        start = clock.now
        cognitive_engine.get_cognitive_performance_metrics()
        clock.advance(10)
        cognitive_engine.get_cognitive_performance_metrics()
        points = cognitive_engine.track_learning_convergence("moses", (start, start))
        assert len(points) == 1
        assert points[0].convergence == 0.9

    def test_convergence_for_known_algorithm_without_history(self, cognitive_engine):
        assert cognitive_engine.track_learning_convergence("moses", (0, 1)) == []

    def test_convergence_unknown_algorithm(self, cognitive_engine, knowledge_source, clock):
        with pytest.raises(NotFoundError):
            cognitive_engine.track_learning_convergence("ghost", (0, clock.now))
        fallback = make_engine(knowledge_source, clock, unknown_id_policy="fallback")
        assert fallback.track_learning_convergence("ghost", (0, clock.now)) == []

    def test_inverted_window(self, cognitive_engine):
        with pytest.raises(InvalidInputError):
            cognitive_engine.track_reasoning_accuracy((10, 0))
