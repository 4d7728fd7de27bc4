"""Insight id assignment.

Ids have the form ``<category>-<epoch ms>-<sequence>``. The sequence is shared
by every engine in the process, so two insights generated within the same
millisecond still get distinct ids.
"""

import itertools
import threading

_sequence = itertools.count(1)
_lock = threading.Lock()


def next_insight_id(category: str, timestamp: float) -> str:
    with _lock:
        seq = next(_sequence)
    return f"{category}-{int(timestamp * 1000)}-{seq}"
