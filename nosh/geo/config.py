from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoConfig:
    earth_radius_miles: float = 3958.761
    cache_key: str = "nn_loc_cache"
    cache_ttl: float = 300.0  # 5 minutes
    lookup_timeout: float = 8.0


DEFAULT_GEO_CONFIG = GeoConfig()
