from dataclasses import dataclass


@dataclass(frozen=True)
class RelatedConfig:
    default_limit: int = 6
    max_limit: int = 24


DEFAULT_RELATED_CONFIG = RelatedConfig()
