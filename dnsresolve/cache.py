import logging
import threading
import time
from dataclasses import dataclass

from dnsresolve.records import RecordSet

logger = logging.getLogger(__name__)

DEFAULT_TTL = 600.0
DEFAULT_MAX_ENTRIES = 4096


@dataclass(frozen=True)
class CacheEntry:
    record_set: RecordSet
    expiry: float

    def expired(self, now: float) -> bool:
        return now >= self.expiry


class CacheStore:
    """Thread-safe map of normalized domain to its last resolved RecordSet.

    Expired entries are ignored on read and purged by ``sweep()``, which also
    runs when inserting a new domain into a full store. If the store is still
    full after the sweep, the oldest entries are evicted. ``max_entries=None``
    disables the bound.
    """

    def __init__(self, ttl: float = DEFAULT_TTL, max_entries: int | None = DEFAULT_MAX_ENTRIES, clock=time.monotonic):
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, domain: str) -> tuple[RecordSet | None, bool]:
        with self._lock:
            entry = self._entries.get(domain)
            if entry is None or entry.expired(self._clock()):
                self._misses += 1
                return None, False
            self._hits += 1
            return entry.record_set, True

    def put(self, domain: str, record_set: RecordSet):
        with self._lock:
            now = self._clock()
            # Replacing moves the domain to the newest position.
            self._entries.pop(domain, None)
            if self.max_entries is not None and len(self._entries) >= self.max_entries:
                self._sweep(now)
                while len(self._entries) >= self.max_entries:
                    oldest = next(iter(self._entries))
                    del self._entries[oldest]
                    logger.debug("Evicted %s from cache", oldest)
            self._entries[domain] = CacheEntry(record_set, now + self.ttl)

    def sweep(self) -> int:
        with self._lock:
            return self._sweep(self._clock())

    def _sweep(self, now: float) -> int:
        stale = [d for d, e in self._entries.items() if e.expired(now)]
        for d in stale:
            del self._entries[d]
        if stale:
            logger.debug("Purged %d expired cache entries", len(stale))
        return len(stale)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict:
        with self._lock:
            now = self._clock()
            expired = sum(1 for e in self._entries.values() if e.expired(now))
            return {"entries": len(self._entries), "expired": expired, "hits": self._hits, "misses": self._misses}

    def __contains__(self, domain: str) -> bool:
        with self._lock:
            entry = self._entries.get(domain)
            return entry is not None and not entry.expired(self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
