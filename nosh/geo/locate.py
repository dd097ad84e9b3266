from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from .cache import GeoCache
from .config import DEFAULT_GEO_CONFIG
from .models import Coordinate

logger = logging.getLogger(__name__)

LocationProvider = Callable[[], Awaitable[Coordinate]]


class LocationUnavailable(Exception):
    """The device could not or would not report a position."""

    def __init__(self, reason: str = "unsupported") -> None:
        super().__init__(reason)
        self.reason = reason


async def resolve_location(
    cache: GeoCache,
    provider: LocationProvider | None = None,
    timeout: float = DEFAULT_GEO_CONFIG.lookup_timeout,
) -> Coordinate | None:
    """Return a usable coordinate or ``None``.

    A fresh cached value short-circuits the provider. Successful lookups are
    cached. Denials, missing support and timeouts all resolve to ``None`` so
    callers carry on without a location.
    """
    cached = cache.get()
    if cached is not None:
        return cached

    if provider is None:
        logger.info("No location provider available; continuing without location")
        return None

    try:
        coord = await asyncio.wait_for(provider(), timeout=timeout)
    except LocationUnavailable as exc:
        logger.info("Location unavailable (%s); continuing without location", exc.reason)
        return None
    except asyncio.TimeoutError:
        logger.info("Location lookup timed out after %.1fs", timeout)
        return None

    cache.set(coord)
    return coord


def static_provider(coord: Coordinate | None) -> LocationProvider | None:
    """Wrap a client-reported coordinate as a provider (``None`` if absent)."""
    if coord is None:
        return None

    async def _provide() -> Coordinate:
        return coord

    return _provide
