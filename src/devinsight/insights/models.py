"""Data models for generated insights and their feedback."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

InsightCategory = Literal["performance", "quality", "productivity", "security", "collaboration"]
Priority = Literal["critical", "high", "medium", "low"]

CATEGORIES: tuple[str, ...] = ("performance", "quality", "productivity", "security", "collaboration")
PRIORITIES: tuple[str, ...] = ("critical", "high", "medium", "low")


@dataclass
class GeneratedInsight:
    """A ranked, actionable finding.

    ``id`` is unique per generated instance; ``key`` (``<category>:<rule>``)
    names the rule that fired and is shared by regenerations of the same
    finding.
    """

    id: str
    key: str
    category: InsightCategory
    title: str
    description: str
    priority: Priority
    impact: float  # 0-100
    confidence: float  # 0-1
    recommendations: List[str] = field(default_factory=list)
    supporting_data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "key": self.key,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "impact": self.impact,
            "confidence": self.confidence,
            "recommendations": list(self.recommendations),
            "supporting_data": self.supporting_data,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "GeneratedInsight":
        return cls(
            id=d["id"],
            key=d.get("key", ""),
            category=d["category"],
            title=d.get("title", ""),
            description=d.get("description", ""),
            priority=d["priority"],
            impact=float(d["impact"]),
            confidence=float(d["confidence"]),
            recommendations=list(d.get("recommendations", [])),
            supporting_data=dict(d.get("supporting_data", {})),
            timestamp=float(d.get("timestamp", 0.0)),
        )


@dataclass(frozen=True)
class FeedbackRecord:
    insight_id: str
    helpful: bool
    comment: Optional[str] = None
    timestamp: float = 0.0

    def to_dict(self) -> dict:
        return {
            "insight_id": self.insight_id,
            "helpful": self.helpful,
            "comment": self.comment,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "FeedbackRecord":
        return cls(
            insight_id=d["insight_id"],
            helpful=bool(d["helpful"]),
            comment=d.get("comment"),
            timestamp=float(d.get("timestamp", 0.0)),
        )
