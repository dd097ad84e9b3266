from __future__ import annotations

import numpy as np

from .config import DEFAULT_GEO_CONFIG
from .models import Coordinate

EARTH_RADIUS_MILES = DEFAULT_GEO_CONFIG.earth_radius_miles


def haversine_miles(lat1, lng1, lat2, lng2):
    """Great-circle distance in miles.

    Accepts scalars, numpy arrays or pandas Series and broadcasts like any
    numpy expression, so the ranking engine can score a whole catalog frame
    in one call.
    """
    d_lat = np.radians(np.asarray(lat2, dtype=float) - np.asarray(lat1, dtype=float))
    d_lng = np.radians(np.asarray(lng2, dtype=float) - np.asarray(lng1, dtype=float))
    phi1 = np.radians(np.asarray(lat1, dtype=float))
    phi2 = np.radians(np.asarray(lat2, dtype=float))

    sin_d_lat = np.sin(d_lat / 2.0)
    sin_d_lng = np.sin(d_lng / 2.0)
    h = sin_d_lat * sin_d_lat + np.cos(phi1) * np.cos(phi2) * sin_d_lng * sin_d_lng
    # float error can push h a hair past 1 for antipodal points
    return 2.0 * EARTH_RADIUS_MILES * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))


def distance(a: Coordinate, b: Coordinate) -> float:
    """Distance in miles between two coordinates."""
    return float(haversine_miles(a.lat, a.lng, b.lat, b.lng))


def format_distance(miles: float | None) -> str:
    if miles is None:
        return "—"
    return f"{miles:.2f} mi" if miles < 1 else f"{miles:.1f} mi"
