from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass


@dataclass(frozen=True)
class RevealConfig:
    step: int = 3  # characters per tick
    interval: float = 0.015  # seconds between ticks


DEFAULT_REVEAL_CONFIG = RevealConfig()


class TurnTracker:
    """Monotonic conversation turn counter.

    Each new exchange calls ``advance()``; anything holding an older token
    knows it has been superseded.
    """

    def __init__(self) -> None:
        self._current = 0

    def advance(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current


async def reveal(
    text: str,
    token: int,
    tracker: TurnTracker,
    config: RevealConfig = DEFAULT_REVEAL_CONFIG,
) -> AsyncIterator[str]:
    """Yield ``text`` a slice at a time until done or until ``token`` goes stale."""
    step = max(1, config.step)
    for start in range(0, len(text), step):
        if not tracker.is_current(token):
            return
        yield text[start:start + step]
        if start + step < len(text):
            await asyncio.sleep(config.interval)
