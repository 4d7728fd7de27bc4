"""Shared data models for DevInsight."""

from dataclasses import dataclass
from typing import Dict, Literal

Severity = Literal["critical", "high", "medium", "low"]

# Lower rank sorts first.
SEVERITY_RANK: Dict[str, int] = {"critical": 0, "high": 1, "medium": 2, "low": 3}


@dataclass(frozen=True)
class TimeRange:
    """Closed interval [start, end] of unix timestamps (seconds)."""

    start: float
    end: float

    def contains(self, timestamp: float) -> bool:
        return self.start <= timestamp <= self.end

    @property
    def span(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class TrendPoint:
    timestamp: float
    value: float

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "value": self.value}
