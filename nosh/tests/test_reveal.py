import asyncio

from nosh.chat.reveal import RevealConfig, TurnTracker, reveal

FAST = RevealConfig(step=4, interval=0.0)


async def _collect(gen, on_chunk=None):
    out = []
    async for chunk in gen:
        out.append(chunk)
        if on_chunk:
            on_chunk(len(out))
    return out


def test_tracker_is_monotonic():
    tracker = TurnTracker()
    first = tracker.advance()
    second = tracker.advance()
    assert second > first
    assert tracker.is_current(second)
    assert not tracker.is_current(first)


def test_reveal_yields_whole_text_for_current_turn():
    tracker = TurnTracker()
    token = tracker.advance()
    chunks = asyncio.run(_collect(reveal("Here are my top picks", token, tracker, FAST)))
    assert "".join(chunks) == "Here are my top picks"
    assert chunks[0] == "Here"


def test_stale_turn_stops_reveal():
    tracker = TurnTracker()
    token = tracker.advance()

    def _interrupt(n):
        if n == 2:
            tracker.advance()

    chunks = asyncio.run(_collect(reveal("a" * 40, token, tracker, FAST), _interrupt))
    assert len(chunks) == 2


def test_reveal_for_superseded_token_yields_nothing():
    tracker = TurnTracker()
    old = tracker.advance()
    tracker.advance()
    assert asyncio.run(_collect(reveal("hello", old, tracker, FAST))) == []


def test_empty_text_yields_nothing():
    tracker = TurnTracker()
    assert asyncio.run(_collect(reveal("", tracker.advance(), tracker, FAST))) == []
