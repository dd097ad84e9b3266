from __future__ import annotations

import logging
import re

from ..geo.distance import format_distance
from ..recommendations.data_store import get_catalog, get_restaurant
from ..recommendations.models import RankedResult, RestaurantRecord
from ..recommendations.retrieval import rank
from ..sessions import SessionContext
from .filters import parse_filter
from .models import ChatReply, Intent, Signal

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Canned replies
# ---------------------------------------------------------------------------

HELP_TEXT = (
    "I can find food and fill your cart. Try:\n"
    '- "cheapest italian" or "fastest salad" to search\n'
    '- "spicy" or "premium" to narrow by heat or price\n'
    '- "add #2" after a search, or "order a margherita pizza"\n'
    '- "show my cart" to review your order\n'
    '- "clear" to start over'
)
CLEARED_TEXT = "Conversation cleared. What are you in the mood for?"
CART_TEXT = "Opening your cart."
EMPTY_TEXT = 'Tell me what you\'re craving, like "cheap indian" or "fastest salad".'
NO_MATCH_TEXT = (
    "I couldn't find a restaurant matching that. "
    "Try a cuisine (Italian, Pizza, Indian, Healthy) or a price like cheap or premium."
)
ADD_MISS_TEXT = (
    "I couldn't tell which dish you meant. "
    'Search first and say "add #1", or name a restaurant like Mario\'s Pizzeria.'
)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_CLEAR_WORDS = {"clear", "reset"}
_HELP_RE = re.compile(r"^\s*(?:help|\?)|what can you do|how to|how do", re.IGNORECASE)
_VIEW_CART_RE = re.compile(r"\b(?:show|view|open|see)\b.*\b(?:cart|basket)\b", re.IGNORECASE)
_ADD_RE = re.compile(r"\b(?:add|order|buy|put)\b", re.IGNORECASE)

_POSITION_RE = re.compile(r"#\s*([1-3])\b|\b([1-3])\b")
_APOSTROPHE_RE = re.compile(r"['’]")

# keyword pattern -> restaurant name, checked in order
_DISH_HINTS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b(?:pizzas?|margheritas?)\b", re.IGNORECASE), "Mario's Pizzeria"),
    (re.compile(r"\b(?:salads?|caesars?)\b", re.IGNORECASE), "Green Garden"),
    (re.compile(r"\b(?:chicken\s+)?curr(?:y|ies)\b", re.IGNORECASE), "Spice Route"),
]


def _normalize(text: str) -> str:
    return _APOSTROPHE_RE.sub("", (text or "").strip().lower())


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_intent(text: str) -> Intent:
    """Priority-ordered: the first matching rule wins."""
    stripped = (text or "").strip()
    if stripped.lower() in _CLEAR_WORDS:
        return Intent.clear
    if _HELP_RE.search(stripped):
        return Intent.help
    if _VIEW_CART_RE.search(stripped):
        return Intent.view_cart
    if _ADD_RE.search(stripped):
        return Intent.add_to_cart
    return Intent.search


# ---------------------------------------------------------------------------
# Add-from-text resolution
# ---------------------------------------------------------------------------


def _by_position(text: str, last_results_ids: list[int]) -> RestaurantRecord | None:
    match = _POSITION_RE.search(text)
    if not match:
        return None
    index = int(match.group(1) or match.group(2)) - 1
    if index >= len(last_results_ids):
        return None
    return get_restaurant(last_results_ids[index])


def _by_name(text: str) -> RestaurantRecord | None:
    query = _normalize(text)
    for record in get_catalog():
        if _normalize(record.name) in query:
            return record
    return None


def _by_dish_hint(text: str) -> RestaurantRecord | None:
    for pattern, name in _DISH_HINTS:
        if pattern.search(text):
            return next((r for r in get_catalog() if r.name == name), None)
    return None


def resolve_add_target(text: str, ctx: SessionContext) -> RestaurantRecord | None:
    """Work out which restaurant's featured item an add request refers to."""
    return (
        _by_position(text, ctx.conversation.last_results_ids)
        or _by_name(text)
        or _by_dish_hint(text)
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def format_result_line(position: int, result: RankedResult) -> str:
    r = result.restaurant
    item = r.featured_item
    return (
        f"{position}. {r.name} ({' • '.join(r.cuisines)}) · {r.price_tier.value} · "
        f"⭐ {r.rating} · {r.eta} · {format_distance(result.distance_miles)} · "
        f'say "add #{position}" for {item.name} (${item.price:.2f})'
    )


def format_results(results: list[RankedResult]) -> str:
    if not results:
        return NO_MATCH_TEXT
    lines = [format_result_line(i, res) for i, res in enumerate(results, start=1)]
    return "Here are my top picks:\n" + "\n".join(lines)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_add(text: str, ctx: SessionContext) -> str:
    target = resolve_add_target(text, ctx)
    if target is None:
        return ADD_MISS_TEXT
    item = target.featured_item
    ctx.cart.add(target.name, item.name, item.price)
    return f"Added {item.name} from {target.name} to your cart."


def _handle_search(text: str, ctx: SessionContext) -> tuple[str, list[RankedResult]]:
    flt = parse_filter(text)
    results = rank(flt, ctx.geo.get())
    ctx.conversation.last_results_ids = [res.restaurant.id for res in results]
    return format_results(results), results


def process_message(text: str, ctx: SessionContext) -> ChatReply:
    """Route one chat message, applying its side effects to ``ctx``.

    Every call starts a new turn, which invalidates any reveal still
    streaming the previous reply.
    """
    token = ctx.turns.advance()
    text = text or ""

    if not text.strip():
        return ChatReply(message=EMPTY_TEXT, intent=Intent.help, turn=token)

    intent = classify_intent(text)
    logger.debug("Routed %r as %s", text, intent.value)

    if intent is Intent.clear:
        ctx.reset_conversation()
        return ChatReply(
            message=CLEARED_TEXT,
            intent=intent,
            signals=[Signal.clear_history],
            turn=token,
        )

    signals: list[Signal] = []
    results: list[RankedResult] = []

    if intent is Intent.help:
        message = HELP_TEXT
    elif intent is Intent.view_cart:
        message = CART_TEXT
        signals.append(Signal.navigate_cart)
    elif intent is Intent.add_to_cart:
        message = _handle_add(text, ctx)
    else:
        message, results = _handle_search(text, ctx)

    ctx.remember("user", text)
    ctx.remember("assistant", message)

    return ChatReply(
        message=message,
        intent=intent,
        signals=signals,
        results=results,
        turn=token,
    )
