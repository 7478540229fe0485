"""
Process-lifetime memo for remotely inferred dependency records.

Keyed by normalized skill name. Storage is injectable so tests can hand in
a fresh mapping and hosts can plug in their own; access is serialized with
a lock because sync FastAPI handlers run on a thread pool.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import replace
from typing import Callable, MutableMapping, Optional, Tuple

from dependencies.models import DependencyRecord, SOURCE_CACHED
from memory.models import normalize_skill_name

logger = logging.getLogger(__name__)


class ResolutionCache:
    def __init__(
        self,
        storage: Optional[MutableMapping[str, Tuple[DependencyRecord, float]]] = None,
        max_entries: Optional[int] = None,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._storage = storage if storage is not None else OrderedDict()
        self._max_entries = max_entries if max_entries and max_entries > 0 else None
        self._ttl = ttl_seconds if ttl_seconds and ttl_seconds > 0 else None
        self._clock = clock
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def get(self, name: str) -> Optional[DependencyRecord]:
        key = normalize_skill_name(name)
        with self._lock:
            entry = self._storage.get(key)
            if entry is None:
                logger.debug("Cache miss for '%s'", key)
                return None

            record, stored_at = entry
            if self._ttl is not None and self._clock() - stored_at > self._ttl:
                logger.debug("Cache entry for '%s' expired", key)
                del self._storage[key]
                return None

            if hasattr(self._storage, "move_to_end"):
                self._storage.move_to_end(key)

        logger.debug("Cache hit for '%s'", key)
        return replace(
            record,
            dependencies=list(record.dependencies),
            enables=list(record.enables),
            source=SOURCE_CACHED,
        )

    def put(self, name: str, record: DependencyRecord) -> None:
        key = normalize_skill_name(name)
        with self._lock:
            if key in self._storage:
                del self._storage[key]
            stored = replace(record, dependencies=list(record.dependencies), enables=list(record.enables))
            self._storage[key] = (stored, self._clock())

            while self._max_entries is not None and len(self._storage) > self._max_entries:
                oldest = next(iter(self._storage))
                del self._storage[oldest]
                logger.debug("Evicted '%s' from resolution cache", oldest)

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()
