"""Per-employee cache for computed reporting structures.

The cache is not tied to employee writes: a stored result stays until the
eviction policy drops it or someone calls ``invalidate``/``clear``.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    value: V
    stored_at: float


class EvictionPolicy:
    """Decides which entries a ``ReportCache`` drops. The default never evicts."""

    def is_expired(self, entry: CacheEntry, now: float) -> bool:
        return False

    def overflow(self, size: int) -> int:
        """How many least-recently-used entries to drop at ``size``."""
        return 0


class NeverEvict(EvictionPolicy):
    pass


class TtlEviction(EvictionPolicy):
    def __init__(self, ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds

    def is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.stored_at >= self.ttl_seconds


class MaxEntriesEviction(EvictionPolicy):
    def __init__(self, max_entries: int) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries

    def overflow(self, size: int) -> int:
        return max(0, size - self.max_entries)


def build_policy(name: str, *, ttl_seconds: float = 300.0, max_entries: int = 1024) -> EvictionPolicy:
    key = name.strip().lower()
    if key in ("", "never", "none"):
        return NeverEvict()
    if key == "ttl":
        return TtlEviction(ttl_seconds)
    if key in ("lru", "max_entries"):
        return MaxEntriesEviction(max_entries)
    raise ValueError(f"Unknown reporting cache policy: {name!r}")


class ReportCache(Generic[V]):
    def __init__(
        self,
        policy: EvictionPolicy | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.policy = policy or NeverEvict()
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry[V]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> V | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self.policy.is_expired(entry, self._clock()):
                del self._entries[key]
                logger.debug("Reporting cache entry for %s expired", key)
                return None
            self._entries.move_to_end(key)
            return entry.value

    def put(self, key: str, value: V) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value=value, stored_at=self._clock())
            self._entries.move_to_end(key)
            for _ in range(self.policy.overflow(len(self._entries))):
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted reporting cache entry for %s", evicted)

    def invalidate(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
