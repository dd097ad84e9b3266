from __future__ import annotations

import re

from ..recommendations.models import PriceTier, SearchFilter

# keyword -> canonical tag; order here is the order tags are reported in
_CUISINE_KEYWORDS: dict[str, str] = {
    "italian": "Italian",
    "pizza": "Pizza",
    "indian": "Indian",
    "salad": "Healthy",
    "healthy": "Healthy",
    "spicy": "Spicy",
}

_CUISINE_RE = re.compile(r"\b(" + "|".join(_CUISINE_KEYWORDS) + r")", re.IGNORECASE)

_CHEAP_RE = re.compile(r"\bcheap(?:est)?\b|(?<!\S)\$(?!\S)", re.IGNORECASE)
_MODERATE_RE = re.compile(r"\bmoderate\b|(?<!\S)\$\$(?!\S)", re.IGNORECASE)
_PREMIUM_RE = re.compile(r"\b(?:premium|expensive)\b|(?<!\S)\$\$\$(?!\S)", re.IGNORECASE)

_FAST_RE = re.compile(r"\b(?:fast|fastest|quick|quickest)\b", re.IGNORECASE)
_SPICY_RE = re.compile(r"\b(?:spicy|heat)\b", re.IGNORECASE)


def _parse_price(query: str) -> PriceTier | None:
    if _CHEAP_RE.search(query):
        return PriceTier.cheap
    if _MODERATE_RE.search(query):
        return PriceTier.moderate
    if _PREMIUM_RE.search(query):
        return PriceTier.premium
    return None


def parse_filter(query: str) -> SearchFilter:
    """Turn a free-text query into a ``SearchFilter``.

    Unrecognised words are ignored, so an empty or unmatched query gives a
    filter with no constraints.
    """
    query = query or ""

    found = {_CUISINE_KEYWORDS[m.lower()] for m in _CUISINE_RE.findall(query)}
    cuisines = [tag for tag in dict.fromkeys(_CUISINE_KEYWORDS.values()) if tag in found]

    return SearchFilter(
        cuisines=cuisines,
        price=_parse_price(query),
        fastest=bool(_FAST_RE.search(query)),
        spicy=bool(_SPICY_RE.search(query)),
    )
