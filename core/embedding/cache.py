"""
DocRAG — Embedding Cache

Thread-safe mapping from a text fingerprint to a previously computed vector.

- Fingerprint = SHA-256 of the lower-cased text
- Unbounded by default
- Optional max_entries (oldest entry evicted first) and ttl_seconds
- Same-key races: last write wins
"""

import hashlib
import threading
import time
from collections import OrderedDict
from typing import List, Optional, Tuple


def normalize(text: str) -> str:
    return text.lower()


def fingerprint(text: str) -> str:
    return hashlib.sha256(normalize(text).encode("utf-8")).hexdigest()


class EmbeddingCache:

    def __init__(
        self,
        max_entries: int = 0,
        ttl_seconds: float = 0,
        clock=time.monotonic
    ):
        self.max_entries = max(int(max_entries or 0), 0)
        self.ttl_seconds = max(float(ttl_seconds or 0), 0.0)
        self._clock = clock
        self._lock = threading.RLock()
        self._entries: "OrderedDict[str, Tuple[float, List[float]]]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    @classmethod
    def from_config(cls, cache_cfg: Optional[dict]) -> "EmbeddingCache":
        cache_cfg = cache_cfg or {}
        return cls(
            max_entries=cache_cfg.get("max_entries", 0),
            ttl_seconds=cache_cfg.get("ttl_seconds", 0)
        )

    # -------------------------------------------------
    # Lookup
    # -------------------------------------------------

    def get(self, key: str) -> Optional[List[float]]:

        with self._lock:
            entry = self._entries.get(key)

            if entry is None:
                self.misses += 1
                return None

            stored_at, vector = entry

            if self.ttl_seconds and self._clock() - stored_at > self.ttl_seconds:
                del self._entries[key]
                self.misses += 1
                return None

            self.hits += 1
            return list(vector)

    # -------------------------------------------------
    # Store
    # -------------------------------------------------

    def put(self, key: str, vector: List[float]) -> None:

        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock(), list(vector))

            if self.max_entries:
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __bool__(self) -> bool:
        # an empty cache is still a cache
        return True

    def stats(self) -> dict:
        with self._lock:
            return {
                "entries": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
                "max_entries": self.max_entries,
                "ttl_seconds": self.ttl_seconds
            }
