"""Shared test fixtures for DevInsight: fake collaborators and a controllable clock."""

import pytest

from devinsight.code import CodeAnalyticsEngine
from devinsight.code.models import (
    ARCHITECTURE_ASPECTS,
    DEBT_CATEGORIES,
    ChangeSummary,
    DebtIssue,
    DeveloperActivity,
)
from devinsight.cognitive import CognitiveAnalyticsEngine
from devinsight.cognitive.models import LearningAlgorithmMetrics, ReasoningEngineMetrics
from devinsight.config import AnalyticsConfig
from devinsight.exceptions import CollaboratorUnavailableError
from devinsight.insights import InsightGenerationEngine
from devinsight.storage import MemoryStore


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCodeSource:
    """In-memory CodeSource. Names in ``unavailable`` raise CollaboratorUnavailableError.

    Names are operation names ("file_signals") or "<operation>:<category/aspect>"
    ("debt:security", "architecture:coupling", "quality:style").
    """

    def __init__(self):
        self.changes = ChangeSummary(lines_added=10, lines_removed=2, lines_modified=3, files_changed=2)
        self.debt = {c: [] for c in DEBT_CATEGORIES}
        self.architecture = {a: 70.0 for a in ARCHITECTURE_ASPECTS}
        self.architecture["coupling"] = 30.0
        self.quality = {
            "complexity": 80.0,
            "duplication": 70.0,
            "coverage": 60.0,
            "documentation": 50.0,
            "style": 90.0,
        }
        self.files = []
        self.performance = []
        self.security = []
        self.activity = DeveloperActivity()
        self.unavailable = set()

    def _check(self, name):
        if name in self.unavailable:
            raise CollaboratorUnavailableError("fake code source", name)

    def capture_changes(self, workspace_id):
        self._check("capture_changes")
        return self.changes

    def debt_issues(self, workspace_id, category):
        self._check(f"debt:{category}")
        return list(self.debt.get(category, []))

    def measure_architecture(self, workspace_id, aspect):
        self._check(f"architecture:{aspect}")
        return self.architecture[aspect]

    def measure_quality(self, path, aspect):
        self._check(f"quality:{aspect}")
        return self.quality[aspect]

    def file_signals(self, workspace_id):
        self._check("file_signals")
        return list(self.files)

    def performance_signals(self, workspace_id):
        self._check("performance_signals")
        return list(self.performance)

    def security_findings(self, workspace_id):
        self._check("security_findings")
        return list(self.security)

    def developer_activity(self, user_id, period):
        self._check("developer_activity")
        return self.activity


class FakeKnowledgeSource:
    """In-memory KnowledgeSource with the same ``unavailable`` convention."""

    def __init__(self):
        self.engines = {}
        self.algorithms = {}
        self.users = {}
        self.graph_size = 1000
        self.active_patterns = 20
        self.unavailable = set()

    def _check(self, name):
        if name in self.unavailable:
            raise CollaboratorUnavailableError("fake knowledge source", name)

    def set_engine(self, engine_id, accuracy=0.95, latency=100.0):
        self.engines[engine_id] = ReasoningEngineMetrics(
            engine_id=engine_id,
            accuracy=accuracy,
            average_confidence=0.9,
            average_latency=latency,
            success_rate=0.99,
            total_inferences=100,
            failed_inferences=1,
        )

    def set_algorithm(self, algorithm_id, convergence=0.9, accuracy=0.9):
        self.algorithms[algorithm_id] = LearningAlgorithmMetrics(
            algorithm_id=algorithm_id,
            convergence_rate=convergence,
            accuracy=accuracy,
            training_time=1200.0,
            sample_size=500,
            overfitting_risk=0.1,
        )

    def query_engine_metrics(self, engine_id):
        self._check("engines")
        return self.engines.get(engine_id)

    def query_all_engines(self):
        self._check("engines")
        return [self.engines[k] for k in sorted(self.engines)]

    def query_algorithm_metrics(self, algorithm_id):
        self._check("algorithms")
        return self.algorithms.get(algorithm_id)

    def query_all_algorithms(self):
        self._check("algorithms")
        return [self.algorithms[k] for k in sorted(self.algorithms)]

    def query_user_adaptation(self, user_id):
        self._check("users")
        return self.users.get(user_id)

    def query_knowledge_graph_size(self):
        self._check("graph")
        return self.graph_size

    def query_active_pattern_count(self):
        self._check("patterns")
        return self.active_patterns


def make_issue(issue_id, category="complexity", severity="medium", effort=5.0, location="src/app.py"):
    return DebtIssue(
        id=issue_id,
        category=category,
        severity=severity,
        location=location,
        description=f"Issue {issue_id}",
        estimated_effort=effort,
        impact=50.0,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def config():
    return AnalyticsConfig()


@pytest.fixture
def fallback_config():
    return AnalyticsConfig(unknown_id_policy="fallback")


@pytest.fixture
def code_source():
    return FakeCodeSource()


@pytest.fixture
def knowledge_source():
    """A healthy system: one accurate, fast engine and one converging algorithm."""
    source = FakeKnowledgeSource()
    source.set_engine("pln")
    source.set_algorithm("moses")
    return source


@pytest.fixture
def code_engine(code_source, config, store, clock):
    return CodeAnalyticsEngine(code_source, config, store, clock)


@pytest.fixture
def cognitive_engine(knowledge_source, config, store, clock):
    return CognitiveAnalyticsEngine(knowledge_source, config, store, clock)


@pytest.fixture
def insight_engine(code_engine, cognitive_engine, config, store, clock):
    return InsightGenerationEngine(code_engine, cognitive_engine, config, store, clock)
