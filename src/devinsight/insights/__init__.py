"""Insight generation, ranking and feedback."""

from .engine import InsightGenerationEngine
from .models import CATEGORIES, FeedbackRecord, GeneratedInsight, InsightCategory, Priority
from .ranking import PRIORITY_WEIGHT, insight_score, prioritize
from .store import InsightStore

__all__ = [
    "InsightGenerationEngine",
    "InsightStore",
    "GeneratedInsight",
    "FeedbackRecord",
    "InsightCategory",
    "Priority",
    "CATEGORIES",
    "PRIORITY_WEIGHT",
    "insight_score",
    "prioritize",
]
