"""Tests for the JSON metrics file signal source."""

import json

import pytest

from devinsight.code import CodeAnalyticsEngine
from devinsight.cognitive import CognitiveAnalyticsEngine
from devinsight.exceptions import CollaboratorUnavailableError, InvalidPathError
from devinsight.sources import UNAVAILABLE, MetricsFile

DATA = {
    "workspaces": {
        ".": {
            "changes": {"lines_added": 40, "files_changed": 3},
            "debt": {
                "complexity": [{"id": "c1", "severity": "critical", "estimated_effort": 12, "location": "a.py"}],
                "security": UNAVAILABLE,
            },
            "architecture": {"modularity": 72, "cohesion": 70, "coupling": 35, "maintainability": 68},
            "files": [{"path": "a.py", "complexity": 24, "coverage": 40}],
            "performance": [
                {"location": "b.py", "type": "io", "description": "sync reads", "estimated_impact": 45}
            ],
            "security": [{"location": "c.py", "vulnerability_type": "xss", "cvss_score": 7.5}],
        },
        "offline": UNAVAILABLE,
    },
    "quality": {"a.py": {"complexity": 80, "duplication": 70, "coverage": 60, "documentation": 50, "style": 90}},
    "developers": {"alice": {"2024-W01": {"commits_count": 14, "focus_time_percentage": 55}}},
    "cognitive": {
        "engines": [
            {
                "engine_id": "pln",
                "accuracy": 0.9,
                "average_confidence": 0.8,
                "average_latency": 120,
                "success_rate": 0.97,
                "total_inferences": 500,
                "failed_inferences": 15,
            }
        ],
        "algorithms": UNAVAILABLE,
        "users": [
            {
                "user_id": "alice",
                "adaptation_score": 70,
                "preference_accuracy": 0.8,
                "workflow_optimization": 10,
                "suggestion_acceptance_rate": 0.5,
                "user_satisfaction": 4.0,
            }
        ],
        "knowledge_graph_size": 1200,
    },
}


@pytest.fixture
def source():
    return MetricsFile(DATA)


class TestLoad:
    def test_load_from_disk(self, tmp_path):
        path = tmp_path / "metrics.json"
        path.write_text(json.dumps(DATA))
        source = MetricsFile.load(path)
        assert source.name == str(path)
        assert source.query_knowledge_graph_size() == 1200

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidPathError):
            MetricsFile.load(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(InvalidPathError):
            MetricsFile.load(path)

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(InvalidPathError):
            MetricsFile.load(path)


class TestCodeSource:
    def test_workspace_signals(self, source):
        assert source.capture_changes(".").lines_added == 40
        (issue,) = source.debt_issues(".", "complexity")
        assert issue.category == "complexity"
        assert issue.estimated_effort == 12.0
        assert source.file_signals(".")[0].coverage == 40
        assert source.performance_signals(".")[0].type == "io"
        assert source.security_findings(".")[0].cvss_score == 7.5

    def test_absent_debt_category_is_empty(self, source):
        assert source.debt_issues(".", "deprecated") == []

    def test_unavailable_markers(self, source):
        with pytest.raises(CollaboratorUnavailableError):
            source.debt_issues(".", "security")
        with pytest.raises(CollaboratorUnavailableError):
            source.capture_changes("offline")

    def test_unknown_workspace(self, source):
        with pytest.raises(CollaboratorUnavailableError):
            source.file_signals("elsewhere")

    def test_unmeasured_aspect(self, source):
        assert source.measure_architecture(".", "coupling") == 35.0
        with pytest.raises(CollaboratorUnavailableError):
            source.measure_architecture(".", "testability")

    def test_quality_and_activity(self, source):
        assert source.measure_quality("a.py", "style") == 90.0
        with pytest.raises(CollaboratorUnavailableError):
            source.measure_quality("b.py", "style")
        assert source.developer_activity("alice", "2024-W01").commits_count == 14
        with pytest.raises(CollaboratorUnavailableError):
            source.developer_activity("alice", "2024-W02")

    def test_drives_code_engine(self, source, clock):
        engine = CodeAnalyticsEngine(source, clock=clock)
        analysis = engine.analyze_technical_debt(".")
        assert analysis.total_debt == 12.0
        assert analysis.missing_categories == ["security"]
        assert engine.get_code_quality_score("a.py") == pytest.approx(70.0)


class TestKnowledgeSource:
    def test_engines_and_users(self, source):
        assert source.query_engine_metrics("pln").total_inferences == 500
        assert source.query_engine_metrics("ghost") is None
        assert source.query_user_adaptation("alice").user_satisfaction == 4.0
        assert source.query_user_adaptation("bob") is None

    def test_unavailable_and_unreported(self, source):
        with pytest.raises(CollaboratorUnavailableError):
            source.query_all_algorithms()
        with pytest.raises(CollaboratorUnavailableError):
            source.query_active_pattern_count()

    def test_drives_cognitive_engine(self, source, clock):
        snapshot = CognitiveAnalyticsEngine(source, clock=clock).get_cognitive_performance_metrics()
        assert snapshot.reasoning_accuracy == pytest.approx(0.9)
        assert snapshot.knowledge_graph_size == 1200
        assert set(snapshot.missing) == {"learning_convergence", "prediction_accuracy", "active_patterns"}
