"""Tests for the in-process TelemetryRecorder."""

import threading

import pytest

from devinsight.cognitive import CognitiveAnalyticsEngine, TelemetryRecorder
from devinsight.config import AnalyticsConfig
from devinsight.exceptions import InvalidInputError


@pytest.fixture
def recorder():
    return TelemetryRecorder()


class TestInferenceTally:
    def test_running_averages(self, recorder):
        recorder.record_inference("pln", correct=True, confidence=0.9, latency_ms=100)
        recorder.record_inference("pln", correct=True, confidence=0.7, latency_ms=200)
        recorder.record_inference("pln", correct=False, confidence=0.5, latency_ms=300, failed=True)

        metrics = recorder.query_engine_metrics("pln")
        assert metrics.total_inferences == 3
        assert metrics.failed_inferences == 1
        assert metrics.accuracy == pytest.approx(2 / 3)
        assert metrics.success_rate == pytest.approx(2 / 3)
        assert metrics.average_confidence == pytest.approx(0.7)
        assert metrics.average_latency == pytest.approx(200.0)

    def test_failed_inference_never_counts_as_correct(self, recorder):
        recorder.record_inference("pln", correct=True, confidence=0.9, latency_ms=10, failed=True)
        assert recorder.query_engine_metrics("pln").accuracy == 0.0

    def test_unknown_engine(self, recorder):
        assert recorder.query_engine_metrics("ghost") is None
        assert recorder.query_all_engines() == []

    @pytest.mark.parametrize("confidence, latency", [(1.5, 10), (-0.1, 10), (0.5, -1)])
    def test_rejects_out_of_range(self, recorder, confidence, latency):
        with pytest.raises(InvalidInputError):
            recorder.record_inference("pln", correct=True, confidence=confidence, latency_ms=latency)

    def test_concurrent_recording(self, recorder):
        def worker():
            for _ in range(200):
                recorder.record_inference("pln", correct=True, confidence=0.8, latency_ms=5)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert recorder.query_engine_metrics("pln").total_inferences == 800


class TestTrainingAndAdaptation:
    def test_latest_training_run_wins(self, recorder):
        recorder.record_training("moses", convergence_rate=0.5, accuracy=0.6, training_time_ms=900, sample_size=100)
        recorder.record_training("moses", convergence_rate=0.8, accuracy=0.9, training_time_ms=800, sample_size=200)
        metrics = recorder.query_algorithm_metrics("moses")
        assert metrics.convergence_rate == 0.8
        assert metrics.sample_size == 200

    def test_all_algorithms_sorted(self, recorder):
        recorder.record_training("b", 0.5, 0.5, 1, 1)
        recorder.record_training("a", 0.5, 0.5, 1, 1)
        assert [m.algorithm_id for m in recorder.query_all_algorithms()] == ["a", "b"]

    def test_user_adaptation(self, recorder):
        recorder.record_user_adaptation("alice", 70.0, 0.8, 12.0, 0.6, 4.5)
        assert recorder.query_user_adaptation("alice").user_satisfaction == 4.5
        with pytest.raises(InvalidInputError):
            recorder.record_user_adaptation("bob", 70.0, 0.8, 12.0, 0.6, 6.0)

    def test_counts(self, recorder):
        recorder.set_knowledge_graph_size(1500)
        recorder.set_active_pattern_count(12)
        assert recorder.query_knowledge_graph_size() == 1500
        assert recorder.query_active_pattern_count() == 12
        with pytest.raises(InvalidInputError):
            recorder.set_knowledge_graph_size(-1)


class TestAsKnowledgeSource:
    def test_drives_cognitive_engine(self, recorder, clock):
        for _ in range(13):
            recorder.record_inference("pln", correct=True, confidence=0.9, latency_ms=50)
        for _ in range(7):
            recorder.record_inference("pln", correct=False, confidence=0.4, latency_ms=50)
        recorder.record_training("moses", 0.9, 0.9, 1000, 300)
        recorder.set_knowledge_graph_size(500)

        engine = CognitiveAnalyticsEngine(recorder, AnalyticsConfig(), clock=clock)
        health = engine.get_cognitive_system_health()
        # accuracy 13/20 = 0.65
        assert health.score == 70
        assert health.status == "degraded"
