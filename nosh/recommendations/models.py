from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..geo.models import Coordinate


class PriceTier(str, Enum):
    cheap = "$"
    moderate = "$$"
    premium = "$$$"


class FeaturedItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0.0)


class RestaurantRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str = Field(..., min_length=1)
    cuisines: tuple[str, ...]
    price_tier: PriceTier
    rating: float = Field(..., ge=0.0, le=5.0)
    eta: str = Field(..., description='Delivery window, e.g. "25-35 min"')
    location: Coordinate
    featured_item: FeaturedItem


class SearchFilter(BaseModel):
    cuisines: list[str] = Field(default_factory=list)
    price: PriceTier | None = None
    fastest: bool = False
    spicy: bool = False


class RankedResult(BaseModel):
    restaurant: RestaurantRecord
    distance_miles: float | None = None
    eta_min: int


class RestaurantOut(BaseModel):
    """Catalog entry as served to map and list renderers."""

    restaurant: RestaurantRecord
    distance_miles: float | None = None
    distance_text: str
