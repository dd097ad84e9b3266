from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from .cart.store import CartStore
from .chat.models import ConversationState, ConversationTurn
from .chat.reveal import TurnTracker
from .geo.cache import GeoCache

logger = logging.getLogger(__name__)

_MAX_TURNS = 20
SESSION_IDLE_TTL = 1800.0  # 30 minutes, six location-cache windows


@dataclass
class SessionContext:
    """Everything one browsing session owns: cart, chat, location, turn token."""

    cart: CartStore = field(default_factory=CartStore)
    conversation: ConversationState = field(default_factory=ConversationState)
    turns: TurnTracker = field(default_factory=TurnTracker)
    location_store: dict[str, Any] = field(default_factory=dict)
    last_used: float = 0.0
    geo: GeoCache = field(init=False)

    def __post_init__(self) -> None:
        self.geo = GeoCache(self.location_store)

    def remember(self, role: str, content: str) -> None:
        self.conversation.turns.append(ConversationTurn(role=role, content=content))
        if len(self.conversation.turns) > _MAX_TURNS:
            self.conversation.turns = self.conversation.turns[-_MAX_TURNS:]

    def reset_conversation(self) -> None:
        self.conversation = ConversationState()


_sessions: dict[str, SessionContext] = {}


def new_session_id() -> str:
    return uuid4().hex


def prune_sessions(now: float, idle_ttl: float = SESSION_IDLE_TTL) -> int:
    """Drop every session unused for ``idle_ttl`` seconds; return how many went."""
    stale = [sid for sid, ctx in _sessions.items() if now - ctx.last_used >= idle_ttl]
    for sid in stale:
        drop_session(sid)
    if stale:
        logger.debug("Pruned %d idle sessions", len(stale))
    return len(stale)


def get_session(
    session_id: str,
    clock: Callable[[], float] = time.time,
) -> SessionContext:
    """Return the context for ``session_id``, creating it on first use.

    Idle sessions are pruned first, so an expired id starts over empty.
    """
    now = clock()
    prune_sessions(now)
    ctx = _sessions.get(session_id)
    if ctx is None:
        ctx = SessionContext()
        _sessions[session_id] = ctx
    ctx.last_used = now
    return ctx


def session_count() -> int:
    return len(_sessions)


def drop_session(session_id: str) -> None:
    _sessions.pop(session_id, None)


def clear_sessions() -> None:
    _sessions.clear()
