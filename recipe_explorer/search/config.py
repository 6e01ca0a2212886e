from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    random_sample_size: int = 12
    debounce_seconds: float = 0.3
    trending_count: int = 6
    max_trending_count: int = 24


DEFAULT_SEARCH_CONFIG = SearchConfig()
