"""Bounded cognitive histories: the snapshot ring and per-algorithm convergence."""

import threading
from collections import deque
from typing import Deque, Dict, List, Optional

from ..storage.backend import KeyValueStore
from .models import CognitivePerformanceSnapshot, ConvergencePoint


class PerformanceHistory:
    """Fixed-capacity ring of cognitive snapshots; the oldest is evicted first."""

    KEY = "cognitive:history"

    def __init__(self, capacity: int = 1000, store: Optional[KeyValueStore] = None) -> None:
        self._store = store
        self._lock = threading.RLock()
        self._ring: Deque[CognitivePerformanceSnapshot] = deque(maxlen=capacity)
        if store is not None:
            for d in store.get(self.KEY) or []:
                self._ring.append(CognitivePerformanceSnapshot.from_dict(d))

    @property
    def capacity(self) -> int:
        return self._ring.maxlen or 0

    def append(self, snapshot: CognitivePerformanceSnapshot) -> None:
        with self._lock:
            self._ring.append(snapshot)
            if self._store is not None:
                self._store.put(self.KEY, [s.to_dict() for s in self._ring])

    def snapshots(self) -> List[CognitivePerformanceSnapshot]:
        with self._lock:
            return list(self._ring)

    def __len__(self) -> int:
        with self._lock:
            return len(self._ring)


class ConvergenceHistory:
    """Per-algorithm convergence observations, each bounded by count."""

    def __init__(self, capacity: int = 200) -> None:
        self._capacity = capacity
        self._lock = threading.Lock()
        self._series: Dict[str, Deque[ConvergencePoint]] = {}

    def record(self, algorithm_id: str, point: ConvergencePoint) -> None:
        with self._lock:
            series = self._series.get(algorithm_id)
            if series is None:
                series = deque(maxlen=self._capacity)
                self._series[algorithm_id] = series
            series.append(point)

    def series(self, algorithm_id: str) -> List[ConvergencePoint]:
        with self._lock:
            return list(self._series.get(algorithm_id, ()))
