from __future__ import annotations

import logging
import re

import numpy as np
import pandas as pd

from ..geo.distance import format_distance, haversine_miles
from ..geo.models import Coordinate
from .data_store import get_catalog, get_dataframe, get_restaurant
from .models import PriceTier, RankedResult, RestaurantOut, SearchFilter

logger = logging.getLogger(__name__)

RESULT_LIMIT = 3
ETA_SENTINEL = 999  # unparseable ETAs sort after every real one

_ETA_RE = re.compile(r"\d+")
_SPICE_NAME_RE = r"spic|chil+i|curry|\bhot\b"


def parse_min_eta(eta: str | None) -> int:
    """First number of a "min-max" window, e.g. "25-35 min" -> 25."""
    match = _ETA_RE.search(eta or "")
    return int(match.group(0)) if match else ETA_SENTINEL


def _with_distance(df: pd.DataFrame, location: Coordinate | None) -> pd.DataFrame:
    out = df.copy()
    if location is not None:
        out["distance"] = haversine_miles(location.lat, location.lng, out["lat"], out["lng"])
    else:
        out["distance"] = np.nan
    return out


def _sort_keys(flt: SearchFilter) -> tuple[list[str], list[bool]]:
    if flt.fastest:
        return ["eta_min", "rating", "distance"], [True, False, True]
    if flt.price == PriceTier.cheap:
        return ["item_price", "rating", "distance"], [True, False, True]
    return ["rating", "distance"], [False, True]


def rank(
    flt: SearchFilter,
    location: Coordinate | None = None,
    limit: int = RESULT_LIMIT,
) -> list[RankedResult]:
    df = get_dataframe()

    # --- Hard filters ---
    mask = pd.Series(True, index=df.index)

    if flt.cuisines:
        wanted = {c.strip().lower() for c in flt.cuisines}
        mask &= df["cuisines_list"].apply(lambda cl: bool(wanted & set(cl)))

    if flt.spicy:
        tagged = df["cuisines_list"].apply(lambda cl: "spicy" in cl)
        mask &= tagged | df["name"].str.contains(_SPICE_NAME_RE, case=False, regex=True)

    if flt.price is not None:
        priced = mask & (df["price_tier"] == flt.price.value)
        if priced.any() or flt.price is not PriceTier.cheap:
            mask = priced
        else:
            # "cheapest" with no cheap match falls back to the price-ascending sort.
            logger.debug("No cheap match for %s; relaxing price tier", flt.cuisines)

    candidates = df.loc[mask]
    if candidates.empty:
        return []

    # --- Derived sort keys ---
    candidates = _with_distance(candidates, location)
    candidates["eta_min"] = candidates["eta"].apply(parse_min_eta)

    by, ascending = _sort_keys(flt)
    top = candidates.sort_values(by=by, ascending=ascending, na_position="last").head(limit)

    results: list[RankedResult] = []
    for _, row in top.iterrows():
        dist = row["distance"]
        results.append(RankedResult(
            restaurant=get_restaurant(row["id"]),
            distance_miles=None if pd.isna(dist) else round(float(dist), 4),
            eta_min=int(row["eta_min"]),
        ))
    return results


def catalog_with_distances(location: Coordinate | None = None) -> list[RestaurantOut]:
    """Every catalog entry with its distance from ``location``, in catalog order."""
    df = _with_distance(get_dataframe(), location)
    distances = dict(zip(df["id"], df["distance"]))

    out: list[RestaurantOut] = []
    for record in get_catalog():
        dist = distances.get(record.id)
        miles = None if dist is None or pd.isna(dist) else float(dist)
        out.append(RestaurantOut(
            restaurant=record,
            distance_miles=miles,
            distance_text=format_distance(miles),
        ))
    return out
