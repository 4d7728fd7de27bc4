"""InsightGenerationEngine: turn analytics into ranked, actionable insights."""

import threading
import time
from typing import Callable, Optional, Union

from ..code.engine import CodeAnalyticsEngine
from ..cognitive.engine import CognitiveAnalyticsEngine
from ..config import AnalyticsConfig
from ..exceptions import CollaboratorUnavailableError, InvalidInputError
from ..logging_config import get_logger
from ..models import TimeRange
from ..storage.backend import KeyValueStore
from ..validation import validate_choice, validate_identifier, validate_positive_int, validate_time_range
from .generators import GENERATORS, GenerationContext
from .models import CATEGORIES, FeedbackRecord, GeneratedInsight
from .ranking import prioritize
from .store import InsightStore

logger = get_logger(__name__)


class InsightGenerationEngine:
    """Runs the category generators and manages acknowledgement and feedback.

    Generation passes are serialized; a generator whose collaborator is
    unavailable is skipped for that pass and listed in :attr:`skipped`.

    Args:
        code_engine: Code analytics to read debt, refactorings, bottlenecks and security from
        cognitive_engine: Cognitive analytics to read system health from
        config: Analytics configuration (defaults if omitted)
        store: Storage collaborator for insights and feedback
        clock: Returns the current unix time in seconds
    """

    def __init__(
        self,
        code_engine: CodeAnalyticsEngine,
        cognitive_engine: CognitiveAnalyticsEngine,
        config: Optional[AnalyticsConfig] = None,
        store: Optional[KeyValueStore] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.code = code_engine
        self.cognitive = cognitive_engine
        self.config = config or AnalyticsConfig()
        self.store = InsightStore(store)
        self._clock = clock
        self._generation_lock = threading.Lock()
        self._skipped: list[str] = []

    @property
    def skipped(self) -> list[str]:
        """Generators (``<category>:<generator>``) skipped in the last pass."""
        return list(self._skipped)

    # ── Generation ────────────────────────────────────────────────

    def _run(self, categories: tuple[str, ...]) -> list[GeneratedInsight]:
        with self._generation_lock:
            ctx = GenerationContext(
                code=self.code,
                cognitive=self.cognitive,
                workspace_id=self.config.default_workspace,
                thresholds=self.config.thresholds,
                timestamp=self._clock(),
            )
            insights: list[GeneratedInsight] = []
            skipped: list[str] = []
            for category in categories:
                for generator in GENERATORS[category]:
                    try:
                        insights.extend(generator(ctx))
                    except CollaboratorUnavailableError as e:
                        name = f"{category}:{generator.__name__}"
                        logger.warning("Skipping insight generator %s: %s", name, e)
                        skipped.append(name)

            for insight in insights:
                self.store.put(insight)
            self._skipped = skipped

        logger.debug("Generated %d insight(s), %d generator(s) skipped", len(insights), len(skipped))
        return insights

    def generate_insights(self) -> list[GeneratedInsight]:
        """Run every category generator and store what fired."""
        return self._run(CATEGORIES)

    def generate_insights_by_category(self, category: str) -> list[GeneratedInsight]:
        validate_choice(category, CATEGORIES, "category")
        return self._run((category,))

    # ── Delivery ──────────────────────────────────────────────────

    def get_prioritized_insights(self, limit: Optional[int] = None) -> list[GeneratedInsight]:
        """Regenerate, then return the top ``limit`` by priority weight x impact x confidence."""
        if limit is None:
            limit = self.config.default_insight_limit
        validate_positive_int(limit, "limit")
        return prioritize(self.generate_insights(), limit)

    def get_personalized_insights(self, user_id: str) -> list[GeneratedInsight]:
        """Regenerate and return the first unacknowledged insights in generation order.

        No per-user relevance model exists yet; ``user_id`` is validated only.
        """
        validate_identifier(user_id, "user_id")
        fresh = [i for i in self.generate_insights() if not self.store.is_acknowledged(i)]
        return fresh[: self.config.personalized_limit]

    def get_historical_insights(self, time_range: Union[TimeRange, tuple]) -> list[GeneratedInsight]:
        time_range = validate_time_range(time_range)
        matching = [i for i in self.store.all() if time_range.contains(i.timestamp)]
        matching.sort(key=lambda i: i.timestamp, reverse=True)
        return matching

    def get_insight(self, insight_id: str) -> Optional[GeneratedInsight]:
        validate_identifier(insight_id, "insight_id")
        return self.store.get(insight_id)

    # ── Feedback loop ─────────────────────────────────────────────

    def acknowledge_insight(self, insight_id: str) -> None:
        validate_identifier(insight_id, "insight_id")
        if self.store.acknowledge(insight_id):
            logger.debug("Acknowledged insight %s", insight_id)

    def provide_insight_feedback(self, insight_id: str, helpful: bool, comment: Optional[str] = None) -> None:
        validate_identifier(insight_id, "insight_id")
        if not isinstance(helpful, bool):
            raise InvalidInputError("helpful", helpful, "must be a boolean")
        self.store.add_feedback(FeedbackRecord(insight_id, helpful, comment, self._clock()))

    def get_insight_acceptance_rate(self) -> float:
        """Helpful share of all feedback ever recorded; 0 when there is none."""
        records = self.store.feedback()
        if not records:
            return 0.0
        return sum(1 for r in records if r.helpful) / len(records)
