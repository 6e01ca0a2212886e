from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class GatewayConfig:
    base_url: str = os.getenv("MEALDB_BASE_URL", "https://www.themealdb.com/api/json/v1/1")
    timeout: float = float(os.getenv("MEALDB_TIMEOUT", "10.0"))
    cache_ttl: float = float(os.getenv("MEALDB_CACHE_TTL", "300"))
    cache_enabled: bool = True


DEFAULT_GATEWAY_CONFIG = GatewayConfig()
