"""Public API for DevInsight.

Composes the three engines from their collaborators. The composing
application owns the collaborators and the store; nothing is registered
globally.

Example:
    >>> from devinsight import build_engines
    >>> from devinsight.sources import MetricsFile
    >>>
    >>> source = MetricsFile.load("signals.json")
    >>> engines = build_engines(source, source)
    >>> engines.insights.get_prioritized_insights(5)
"""

from __future__ import annotations

import time
from typing import Callable, NamedTuple, Optional

from .code import CodeAnalyticsEngine, CodeSource
from .cognitive import CognitiveAnalyticsEngine, KnowledgeSource
from .config import AnalyticsConfig
from .insights import InsightGenerationEngine
from .logging_config import get_logger
from .storage import KeyValueStore, MemoryStore, SQLiteStore

logger = get_logger(__name__)


class Engines(NamedTuple):
    config: AnalyticsConfig
    code: CodeAnalyticsEngine
    cognitive: CognitiveAnalyticsEngine
    insights: InsightGenerationEngine


def open_store(config: AnalyticsConfig) -> KeyValueStore:
    """SQLite store at ``config.storage_path`` (connected), else an in-memory store."""
    if config.storage_path:
        store = SQLiteStore(config.storage_path)
        store.connect()
        return store
    return MemoryStore()


def build_engines(
    code_source: CodeSource,
    knowledge_source: KnowledgeSource,
    config: Optional[AnalyticsConfig] = None,
    store: Optional[KeyValueStore] = None,
    clock: Callable[[], float] = time.time,
) -> Engines:
    """Wire code, cognitive and insight engines over a shared store and clock.

    Args:
        code_source: Code-source collaborator
        knowledge_source: Knowledge/reasoning collaborator
        config: Analytics configuration (defaults if omitted)
        store: Storage collaborator (in-memory if omitted)
        clock: Returns the current unix time in seconds

    Returns:
        Engines tuple of (config, code, cognitive, insights)
    """
    config = config or AnalyticsConfig()
    store = store if store is not None else MemoryStore()

    code = CodeAnalyticsEngine(code_source, config, store, clock)
    cognitive = CognitiveAnalyticsEngine(knowledge_source, config, store, clock)
    insights = InsightGenerationEngine(code, cognitive, config, store, clock)
    logger.debug("Engines built (workspace %s, policy %s)", config.default_workspace, config.unknown_id_policy)
    return Engines(config, code, cognitive, insights)
