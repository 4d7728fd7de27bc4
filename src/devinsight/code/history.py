"""Per-workspace code histories: evolution snapshots and debt totals.

Each history owns its lock and hands out copies; callers never see a live
list. Snapshots are frozen dataclasses, so a shallow copy of the container is
an owned copy.
"""

import threading
from typing import Dict, List, Optional

from ..logging_config import get_logger
from ..storage.backend import KeyValueStore, MemoryStore
from .models import CodeEvolutionSnapshot

logger = get_logger(__name__)


class EvolutionHistory:
    """Per-workspace code-evolution snapshots, pruned by age."""

    KEY_PREFIX = "evolution:"

    def __init__(self, store: Optional[KeyValueStore] = None, retention_seconds: float = 90 * 86400.0) -> None:
        self._store = store if store is not None else MemoryStore()
        self._retention = retention_seconds
        self._lock = threading.RLock()
        self._cache: Dict[str, List[CodeEvolutionSnapshot]] = {}

    def _load(self, workspace_id: str) -> List[CodeEvolutionSnapshot]:
        snapshots = self._cache.get(workspace_id)
        if snapshots is None:
            raw = self._store.get(self.KEY_PREFIX + workspace_id) or []
            snapshots = [CodeEvolutionSnapshot.from_dict(d) for d in raw]
            snapshots.sort(key=lambda s: s.timestamp)
            self._cache[workspace_id] = snapshots
            logger.debug("Loaded %d evolution snapshots for %s", len(snapshots), workspace_id)
        return snapshots

    def append(self, workspace_id: str, snapshot: CodeEvolutionSnapshot, now: float) -> List[CodeEvolutionSnapshot]:
        """Append ``snapshot``, prune entries older than the retention window, return a copy."""
        with self._lock:
            snapshots = self._load(workspace_id)
            snapshots.append(snapshot)
            cutoff = now - self._retention
            retained = [s for s in snapshots if s.timestamp >= cutoff]
            pruned = len(snapshots) - len(retained)
            if pruned:
                logger.debug("Pruned %d evolution snapshots for %s", pruned, workspace_id)
            self._cache[workspace_id] = retained
            self._store.put(self.KEY_PREFIX + workspace_id, [s.to_dict() for s in retained])
            return list(retained)

    def get(self, workspace_id: str, now: Optional[float] = None) -> List[CodeEvolutionSnapshot]:
        """Copy of the history. With ``now``, snapshots past the retention window are left out."""
        with self._lock:
            snapshots = self._load(workspace_id)
            if now is None:
                return list(snapshots)
            cutoff = now - self._retention
            return [s for s in snapshots if s.timestamp >= cutoff]

    def workspaces(self) -> List[str]:
        with self._lock:
            stored = {k[len(self.KEY_PREFIX):] for k in self._store.keys(self.KEY_PREFIX)}
            return sorted(stored | set(self._cache))


class DebtHistory:
    """Recorded debt totals per workspace, used as the trend baseline."""

    KEY_PREFIX = "debt:"

    def __init__(self, store: Optional[KeyValueStore] = None, capacity: int = 50) -> None:
        self._store = store if store is not None else MemoryStore()
        self._capacity = capacity
        self._lock = threading.RLock()

    def totals(self, workspace_id: str) -> List[float]:
        with self._lock:
            raw = self._store.get(self.KEY_PREFIX + workspace_id) or []
            return [float(entry["total"]) for entry in raw]

    def record(self, workspace_id: str, total: float, timestamp: float) -> None:
        with self._lock:
            raw = self._store.get(self.KEY_PREFIX + workspace_id) or []
            raw.append({"timestamp": timestamp, "total": total})
            self._store.put(self.KEY_PREFIX + workspace_id, raw[-self._capacity:])
