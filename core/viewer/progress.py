# core/viewer/progress.py
"""In-session topic completion tracking.

Progress lives only in memory for the current viewer session. Updates
replace the whole map so readers never see a half-applied change.
"""

import math
from types import MappingProxyType
from typing import Iterable, Mapping

from core.resources.types import Topic


ProgressKey = tuple[int, int]  # (module_id, topic_id)


class ProgressTracker:
    """Tracks which (module, topic) pairs have been completed."""

    def __init__(self) -> None:
        self._progress: Mapping[ProgressKey, bool] = MappingProxyType({})

    @property
    def progress(self) -> Mapping[ProgressKey, bool]:
        """Read-only snapshot of the progress map."""
        return self._progress

    def is_complete(self, module_id: int, topic_id: int) -> bool:
        return self._progress.get((module_id, topic_id), False)

    def mark_complete(self, module_id: int, topic_id: int) -> bool:
        """Mark a topic complete. Returns False if it already was. Idempotent."""
        key = (module_id, topic_id)
        if self._progress.get(key):
            return False

        self._progress = MappingProxyType({**self._progress, key: True})
        return True

    def completed_count(self, module_id: int, topics: Iterable[Topic | int]) -> int:
        return sum(1 for topic_id in _topic_ids(topics) if self.is_complete(module_id, topic_id))

    def completion_ratio(self, module_id: int, topics: Iterable[Topic | int]) -> int:
        """
        Percentage of a module's known topics that are complete.

        Rounded half-up to the nearest integer; 0 when the module has no topics.
        """
        topic_ids = _topic_ids(topics)
        if not topic_ids:
            return 0
        done = sum(1 for topic_id in topic_ids if self.is_complete(module_id, topic_id))
        return math.floor(done * 100 / len(topic_ids) + 0.5)

    def reset(self) -> None:
        self._progress = MappingProxyType({})


def _topic_ids(topics: Iterable[Topic | int]) -> list[int]:
    return [t.id if isinstance(t, Topic) else t for t in topics]
