from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .geo import EARTH_RADIUS_KM

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RankingConfig:
    max_distance_km: float = float(os.getenv("PARKWISE_MAX_DISTANCE_KM", "10.0"))
    earth_radius_km: float = EARTH_RADIUS_KM
    cache_ttl_seconds: float = float(os.getenv("PARKWISE_CACHE_TTL", "300"))
    cache_max_entries: int = int(os.getenv("PARKWISE_CACHE_MAX_ENTRIES", "256"))
    cache_enabled: bool = os.getenv("PARKWISE_CACHE_ENABLED", "true").lower() in ("1", "true", "yes")


DEFAULT_RANKING_CONFIG = RankingConfig()
