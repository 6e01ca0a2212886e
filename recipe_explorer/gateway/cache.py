"""In-process cache of decoded provider payloads.

Entries carry their own expiry. Every write sweeps expired entries and then
evicts the least recently used ones beyond ``MAX_ENTRIES``, so free-text
lookups cannot grow the cache without bound.
"""
from __future__ import annotations

import hashlib
import json
import time
from collections import OrderedDict
from typing import Any, NamedTuple

MAX_ENTRIES = 512
_DEFAULT_TTL = 300.0  # 5 minutes


class _Entry(NamedTuple):
    value: Any
    expires_at: float


_cache: OrderedDict[str, _Entry] = OrderedDict()
_stats = {"hits": 0, "misses": 0, "evictions": 0}


def _make_key(url: str, params: dict[str, str]) -> str:
    normalized = json.dumps([url, sorted(params.items())], default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()


def _sweep(now: float) -> None:
    expired = [key for key, entry in _cache.items() if entry.expires_at <= now]
    for key in expired:
        del _cache[key]
    while len(_cache) > MAX_ENTRIES:
        _cache.popitem(last=False)
        _stats["evictions"] += 1


def cache_get(url: str, params: dict[str, str]) -> Any | None:
    key = _make_key(url, params)
    entry = _cache.get(key)
    if entry is None or entry.expires_at <= time.time():
        _cache.pop(key, None)
        _stats["misses"] += 1
        return None
    _cache.move_to_end(key)
    _stats["hits"] += 1
    return entry.value


def cache_set(url: str, params: dict[str, str], value: Any, ttl: float = _DEFAULT_TTL) -> None:
    now = time.time()
    key = _make_key(url, params)
    _cache[key] = _Entry(value, now + ttl)
    _cache.move_to_end(key)
    _sweep(now)


def get_cache_stats() -> dict:
    lookups = _stats["hits"] + _stats["misses"]
    return {
        "size": len(_cache),
        "hits": _stats["hits"],
        "misses": _stats["misses"],
        "evictions": _stats["evictions"],
        "hit_rate": round(_stats["hits"] / lookups * 100, 1) if lookups else 0.0,
    }


def clear_cache() -> None:
    _cache.clear()
    for name in _stats:
        _stats[name] = 0
