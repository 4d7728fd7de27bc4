"""Insight store: generated insights, acknowledgements and feedback.

Everything lives in a :class:`KeyValueStore` so the store survives restarts
when backed by SQLite. Readers always get fresh objects, never live state.
"""

import threading
from typing import Optional

from ..models import SEVERITY_RANK
from ..storage.backend import KeyValueStore, MemoryStore
from .models import FeedbackRecord, GeneratedInsight

_INSIGHT_PREFIX = "insight:"
_FEEDBACK_PREFIX = "feedback:"
_ACK_KEY = "acknowledged"


class InsightStore:
    def __init__(self, store: Optional[KeyValueStore] = None) -> None:
        self._store = store if store is not None else MemoryStore()
        self._lock = threading.RLock()

    # ── Insights ──────────────────────────────────────────────────

    def put(self, insight: GeneratedInsight) -> None:
        """Insert or replace by id."""
        with self._lock:
            self._store.put(_INSIGHT_PREFIX + insight.id, insight.to_dict())

    def get(self, insight_id: str) -> Optional[GeneratedInsight]:
        with self._lock:
            d = self._store.get(_INSIGHT_PREFIX + insight_id)
        return GeneratedInsight.from_dict(d) if d is not None else None

    def all(self) -> list[GeneratedInsight]:
        with self._lock:
            raw = [self._store.get(k) for k in self._store.keys(_INSIGHT_PREFIX)]
        return [GeneratedInsight.from_dict(d) for d in raw if d is not None]

    def __len__(self) -> int:
        with self._lock:
            return len(self._store.keys(_INSIGHT_PREFIX))

    # ── Acknowledgements ──────────────────────────────────────────

    def _ack_state(self) -> dict:
        return self._store.get(_ACK_KEY) or {"ids": [], "keys": {}}

    def acknowledge(self, insight_id: str) -> bool:
        """Add to the acknowledged set. Returns False if it was already there.

        The insight's rule key is recorded with the most severe priority
        acknowledged for it.
        """
        with self._lock:
            state = self._ack_state()
            if insight_id in state["ids"]:
                return False
            state["ids"].append(insight_id)
            insight = self.get(insight_id)
            if insight is not None and insight.key:
                seen = state["keys"].get(insight.key)
                if seen is None or SEVERITY_RANK[insight.priority] < SEVERITY_RANK[seen]:
                    state["keys"][insight.key] = insight.priority
            self._store.put(_ACK_KEY, state)
            return True

    def acknowledged_ids(self) -> set[str]:
        with self._lock:
            return set(self._ack_state()["ids"])

    def is_acknowledged(self, insight: GeneratedInsight) -> bool:
        """True if this insight was acknowledged, or an earlier one from the same
        rule was acknowledged at the same or a more severe priority."""
        with self._lock:
            state = self._ack_state()
        if insight.id in state["ids"]:
            return True
        seen = state["keys"].get(insight.key) if insight.key else None
        return seen is not None and SEVERITY_RANK[insight.priority] >= SEVERITY_RANK[seen]

    # ── Feedback ──────────────────────────────────────────────────

    def add_feedback(self, record: FeedbackRecord) -> None:
        key = _FEEDBACK_PREFIX + record.insight_id
        with self._lock:
            records = self._store.get(key) or []
            records.append(record.to_dict())
            self._store.put(key, records)

    def feedback(self, insight_id: Optional[str] = None) -> list[FeedbackRecord]:
        """Feedback for one insight, or for every insight when ``insight_id`` is None."""
        with self._lock:
            if insight_id is not None:
                keys = [_FEEDBACK_PREFIX + insight_id]
            else:
                keys = self._store.keys(_FEEDBACK_PREFIX)
            raw = [d for k in keys for d in (self._store.get(k) or [])]
        return [FeedbackRecord.from_dict(d) for d in raw]
