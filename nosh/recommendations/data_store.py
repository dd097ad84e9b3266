from __future__ import annotations

import pandas as pd

from ..geo.models import Coordinate
from .models import FeaturedItem, PriceTier, RestaurantRecord

SEED_RESTAURANTS: tuple[RestaurantRecord, ...] = (
    RestaurantRecord(
        id=1,
        name="Mario's Pizzeria",
        cuisines=("Italian", "Pizza"),
        price_tier=PriceTier.moderate,
        rating=4.8,
        eta="25-35 min",
        location=Coordinate(lat=37.781, lng=-122.41),
        featured_item=FeaturedItem(name="Margherita Pizza", price=18.99),
    ),
    RestaurantRecord(
        id=2,
        name="Green Garden",
        cuisines=("Healthy", "Salads"),
        price_tier=PriceTier.premium,
        rating=4.9,
        eta="15-25 min",
        location=Coordinate(lat=37.786, lng=-122.407),
        featured_item=FeaturedItem(name="Caesar Salad", price=14.99),
    ),
    RestaurantRecord(
        id=3,
        name="Spice Route",
        cuisines=("Indian", "Spicy"),
        price_tier=PriceTier.cheap,
        rating=4.6,
        eta="30-40 min",
        location=Coordinate(lat=37.776, lng=-122.415),
        featured_item=FeaturedItem(name="Chicken Curry", price=12.99),
    ),
)

_by_id: dict[int, RestaurantRecord] = {r.id: r for r in SEED_RESTAURANTS}
_df: pd.DataFrame | None = None


def _load() -> pd.DataFrame:
    df = pd.DataFrame(
        [
            {
                "id": r.id,
                "name": r.name,
                "cuisines_list": [c.lower() for c in r.cuisines],
                "price_tier": r.price_tier.value,
                "rating": r.rating,
                "eta": r.eta,
                "lat": r.location.lat,
                "lng": r.location.lng,
                "item_price": r.featured_item.price,
            }
            for r in SEED_RESTAURANTS
        ]
    )
    return df


def get_catalog() -> tuple[RestaurantRecord, ...]:
    return SEED_RESTAURANTS


def get_restaurant(restaurant_id: int) -> RestaurantRecord | None:
    return _by_id.get(int(restaurant_id))


def get_dataframe() -> pd.DataFrame:
    """Return the catalog as a DataFrame, building it on first call."""
    global _df
    if _df is None:
        _df = _load()
    return _df
