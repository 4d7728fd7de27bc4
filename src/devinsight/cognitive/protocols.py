"""Protocol for the knowledge/reasoning collaborator.

Lookups by id return None for unknown ids; the engine applies its NotFound
policy. Failures are reported as ``CollaboratorUnavailableError``.
"""

from typing import Optional, Protocol

from .models import LearningAlgorithmMetrics, ReasoningEngineMetrics, UserAdaptationMetrics


class KnowledgeSource(Protocol):
    """Typed capability surface of the knowledge-graph/reasoning system."""

    def query_engine_metrics(self, engine_id: str) -> Optional[ReasoningEngineMetrics]: ...

    def query_all_engines(self) -> list[ReasoningEngineMetrics]: ...

    def query_algorithm_metrics(self, algorithm_id: str) -> Optional[LearningAlgorithmMetrics]: ...

    def query_all_algorithms(self) -> list[LearningAlgorithmMetrics]: ...

    def query_user_adaptation(self, user_id: str) -> Optional[UserAdaptationMetrics]: ...

    def query_knowledge_graph_size(self) -> int: ...

    def query_active_pattern_count(self) -> int: ...
