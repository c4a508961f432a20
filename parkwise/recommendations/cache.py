"""
In-process cache of cost-ranked pricing results.

Entries are keyed by the pricing query and the catalog version they were
computed from. Writing an entry drops everything expired or computed from an
older catalog, then evicts the oldest entries beyond ``max_entries``.
"""
from __future__ import annotations

import hashlib
import json
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any, NamedTuple

from ..pricing.models import DiscountQualifier, PricingQuery
from .config import DEFAULT_RANKING_CONFIG


class _Entry(NamedTuple):
    created_at: float
    catalog_version: int
    value: Any


def _make_key(query: PricingQuery, catalog_version: int) -> str:
    payload = {
        "duration_minutes": query.duration_minutes,
        "spend_amount": float(query.spend_amount),
        "qualifiers": sorted(DiscountQualifier(q).value for q in query.qualifiers),
        "catalog_version": catalog_version,
    }
    normalized = json.dumps(payload, sort_keys=True)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


class PricingCache:
    """Thread-safe TTL cache with a size cap; oldest entries are evicted first."""

    def __init__(
        self,
        ttl: float,
        max_entries: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def _expired(self, entry: _Entry, now: float) -> bool:
        return now - entry.created_at >= self.ttl

    def get(self, query: PricingQuery, catalog_version: int) -> Any | None:
        key = _make_key(query, catalog_version)
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and not self._expired(entry, now):
                self._hits += 1
                return entry.value
            if entry is not None:
                self._entries.pop(key, None)
            self._misses += 1
            return None

    def set(self, query: PricingQuery, catalog_version: int, value: Any) -> None:
        key = _make_key(query, catalog_version)
        now = self._clock()
        with self._lock:
            stale = [
                k for k, entry in self._entries.items()
                if self._expired(entry, now) or entry.catalog_version < catalog_version
            ]
            for k in stale:
                del self._entries[k]

            self._entries[key] = _Entry(now, catalog_version, value)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "max_entries": self.max_entries,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0


_default_cache = PricingCache(
    ttl=DEFAULT_RANKING_CONFIG.cache_ttl_seconds,
    max_entries=DEFAULT_RANKING_CONFIG.cache_max_entries,
)


def cache_get(query: PricingQuery, catalog_version: int) -> Any | None:
    return _default_cache.get(query, catalog_version)


def cache_set(query: PricingQuery, catalog_version: int, value: Any) -> None:
    _default_cache.set(query, catalog_version, value)


def get_cache_stats() -> dict:
    return _default_cache.stats()


def clear_cache() -> None:
    _default_cache.clear()
