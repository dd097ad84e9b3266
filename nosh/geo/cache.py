from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, MutableMapping
from typing import Any

from .config import DEFAULT_GEO_CONFIG, GeoConfig
from .models import Coordinate

logger = logging.getLogger(__name__)


class GeoCache:
    """Most recent device coordinate, valid for ``config.cache_ttl`` seconds.

    The entry is kept as a JSON string in a caller-supplied mapping so any
    key/value store (a session dict, a cookie jar, shelve) can back it. A
    missing store or an unreadable entry reads as "nothing cached".
    """

    def __init__(
        self,
        store: MutableMapping[str, Any] | None = None,
        config: GeoConfig = DEFAULT_GEO_CONFIG,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._config = config
        self._clock = clock

    def get(self) -> Coordinate | None:
        if self._store is None:
            return None
        raw = self._store.get(self._config.cache_key)
        if not raw:
            return None
        try:
            entry = json.loads(raw)
            coord = Coordinate(lat=entry["lat"], lng=entry["lng"])
            ts = float(entry["ts"])
        except (TypeError, ValueError, KeyError):
            logger.debug("Discarding unreadable location cache entry: %r", raw)
            return None
        if self._clock() - ts < self._config.cache_ttl:
            return coord
        return None

    def set(self, coord: Coordinate) -> None:
        if self._store is None:
            return
        payload = json.dumps({"lat": coord.lat, "lng": coord.lng, "ts": self._clock()})
        try:
            self._store[self._config.cache_key] = payload
        except Exception:
            logger.warning("Could not write location cache", exc_info=True)
