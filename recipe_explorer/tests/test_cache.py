from __future__ import annotations

from unittest.mock import patch

from recipe_explorer.gateway import cache
from recipe_explorer.gateway.cache import cache_get, cache_set, get_cache_stats


def test_cache_miss_then_hit():
    assert cache_get("/lookup.php", {"i": "1"}) is None
    cache_set("/lookup.php", {"i": "1"}, {"meals": []})
    assert cache_get("/lookup.php", {"i": "1"}) == {"meals": []}

    stats = get_cache_stats()
    assert stats == {"size": 1, "hits": 1, "misses": 1, "evictions": 0, "hit_rate": 50.0}


def test_cache_different_params_miss():
    cache_set("/filter.php", {"c": "Beef"}, {"meals": []})
    assert cache_get("/filter.php", {"a": "Beef"}) is None
    assert cache_get("/search.php", {"c": "Beef"}) is None
    assert get_cache_stats()["hits"] == 0


@patch("recipe_explorer.gateway.cache.time.time")
def test_cache_entry_expires(mock_time):
    mock_time.return_value = 1000.0
    cache_set("/filter.php", {"a": "Thai"}, {"meals": None}, ttl=300)

    mock_time.return_value = 1000.0 + 299
    assert cache_get("/filter.php", {"a": "Thai"}) == {"meals": None}

    mock_time.return_value = 1000.0 + 301
    assert cache_get("/filter.php", {"a": "Thai"}) is None
    assert get_cache_stats()["size"] == 0


@patch("recipe_explorer.gateway.cache.time.time")
def test_write_sweeps_expired_entries(mock_time):
    mock_time.return_value = 1000.0
    for i in range(200):
        cache_set("/search.php", {"s": f"query {i}"}, {"meals": None}, ttl=300)

    mock_time.return_value = 1000.0 + 10_000
    cache_set("/search.php", {"s": "fresh"}, {"meals": None}, ttl=300)

    assert get_cache_stats()["size"] == 1
    assert cache_get("/search.php", {"s": "fresh"}) == {"meals": None}


@patch.object(cache, "MAX_ENTRIES", 3)
def test_least_recently_used_entry_is_evicted():
    for letter in "abc":
        cache_set("/search.php", {"f": letter}, {"meals": letter})

    # Reading "a" makes "b" the least recently used entry
    assert cache_get("/search.php", {"f": "a"}) == {"meals": "a"}
    cache_set("/search.php", {"f": "d"}, {"meals": "d"})

    assert get_cache_stats()["size"] == 3
    assert get_cache_stats()["evictions"] == 1
    assert cache_get("/search.php", {"f": "b"}) is None
    assert cache_get("/search.php", {"f": "a"}) == {"meals": "a"}
    assert cache_get("/search.php", {"f": "d"}) == {"meals": "d"}
