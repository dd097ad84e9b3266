from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from nosh.app import app
from nosh.sessions import (
    SESSION_IDLE_TTL,
    clear_sessions,
    drop_session,
    get_session,
    prune_sessions,
    session_count,
)


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture(autouse=True)
def _empty_registry():
    clear_sessions()
    yield
    clear_sessions()


# ── Registry ─────────────────────────────────────────────────────────────


def test_same_id_returns_same_context():
    clock = FakeClock()
    first = get_session("a", clock)
    first.cart.add("Spice Route", "Chicken Curry", 12.99)
    assert get_session("a", clock) is first


def test_idle_sessions_are_evicted():
    clock = FakeClock()
    for i in range(50):
        get_session(f"anon-{i}", clock)
    assert session_count() == 50

    clock.now += SESSION_IDLE_TTL
    get_session("fresh", clock)

    assert session_count() == 1


def test_recently_used_session_survives_pruning():
    clock = FakeClock()
    kept = get_session("kept", clock)
    kept.cart.add("Green Garden", "Caesar Salad", 14.99)
    get_session("idle", clock)

    clock.now += SESSION_IDLE_TTL - 10
    get_session("kept", clock)
    clock.now += 20
    get_session("kept", clock)

    assert session_count() == 1
    assert get_session("kept", clock).cart.count == 1


def test_expired_id_starts_over_empty():
    clock = FakeClock()
    get_session("a", clock).cart.add("Spice Route", "Chicken Curry", 12.99)
    clock.now += SESSION_IDLE_TTL + 1
    assert get_session("a", clock).cart.count == 0


def test_prune_reports_count():
    clock = FakeClock()
    get_session("a", clock)
    get_session("b", clock)
    assert prune_sessions(clock.now) == 0
    assert prune_sessions(clock.now + SESSION_IDLE_TTL) == 2


def test_drop_session():
    get_session("a")
    drop_session("a")
    drop_session("missing")
    assert session_count() == 0


# ── Through the app ──────────────────────────────────────────────────────


def test_cookie_keeps_one_context_per_client():
    c = TestClient(app)
    for _ in range(5):
        c.get("/cart")
    assert session_count() == 1
