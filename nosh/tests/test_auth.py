from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from nosh.app import app
from nosh.auth.users import AuthError, authenticate, clear_users, register

ALICE = {"name": "Alice", "username": "Alice", "email": "Alice@Example.com", "password": "secret1"}


@pytest.fixture(autouse=True)
def _fresh_users():
    clear_users()
    yield
    clear_users()


# ── Users store ──────────────────────────────────────────────────────────


def test_register_normalises_username_and_email():
    user = register(**ALICE)
    assert user["username"] == "alice"
    assert user["email"] == "alice@example.com"
    assert "password_hash" not in user


@pytest.mark.parametrize("field,value", [("name", " "), ("username", ""), ("email", ""), ("password", "12345")])
def test_register_invalid_input(field, value):
    with pytest.raises(AuthError) as exc:
        register(**{**ALICE, field: value})
    assert exc.value.code == "invalid_input"
    assert exc.value.status_code == 400


def test_register_invalid_email():
    with pytest.raises(AuthError) as exc:
        register(**{**ALICE, "email": "not-an-email"})
    assert exc.value.code == "invalid_email"


def test_register_conflicts():
    register(**ALICE)
    with pytest.raises(AuthError) as exc:
        register(**{**ALICE, "email": "other@example.com"})
    assert (exc.value.code, exc.value.status_code) == ("username_taken", 409)

    with pytest.raises(AuthError) as exc:
        register(**{**ALICE, "username": "alice2"})
    assert exc.value.code == "email_taken"


def test_login_by_username_or_email():
    register(**ALICE)
    assert authenticate("ALICE", "secret1")["name"] == "Alice"
    assert authenticate(" alice@example.com ", "secret1")["username"] == "alice"


def test_login_failures():
    register(**ALICE)
    for login, password, code in [
        ("bob", "secret1", "not_found"),
        ("alice", "wrong!!", "bad_credentials"),
        ("", "secret1", "invalid_input"),
    ]:
        with pytest.raises(AuthError) as exc:
            authenticate(login, password)
        assert exc.value.code == code


# ── Endpoints ────────────────────────────────────────────────────────────


def test_register_endpoint_logs_in():
    c = TestClient(app)
    resp = c.post("/auth/register", json=ALICE)
    assert resp.status_code == 200
    assert resp.json()["ok"] is True
    me = c.get("/auth/me")
    assert me.status_code == 200
    assert me.json()["auth"] is True
    assert me.json()["user"]["username"] == "alice"


def test_register_endpoint_conflict():
    c = TestClient(app)
    c.post("/auth/register", json=ALICE)
    resp = c.post("/auth/register", json=ALICE)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "username_taken"


def test_register_endpoint_invalid():
    resp = TestClient(app).post("/auth/register", json={**ALICE, "password": "x"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "invalid_input"


def test_login_endpoint():
    register(**ALICE)
    c = TestClient(app)
    resp = c.post("/auth/login", json={"login": "alice", "password": "secret1"})
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "alice@example.com"
    assert c.get("/auth/me").status_code == 200


def test_login_endpoint_failures():
    register(**ALICE)
    c = TestClient(app)
    resp = c.post("/auth/login", json={"login": "nobody", "password": "secret1"})
    assert (resp.status_code, resp.json()["detail"]) == (401, "not_found")
    resp = c.post("/auth/login", json={"login": "alice", "password": "nope123"})
    assert (resp.status_code, resp.json()["detail"]) == (401, "bad_credentials")


def test_me_not_logged_in():
    assert TestClient(app).get("/auth/me").status_code == 401


def test_logout_keeps_cart():
    c = TestClient(app)
    c.post("/auth/register", json=ALICE)
    c.post("/chat", json={"message": "order pizza"})
    assert c.post("/auth/logout").json() == {"status": "logged_out"}
    assert c.get("/auth/me").status_code == 401
    assert c.get("/cart").json()["count"] == 1


def test_chat_does_not_require_login():
    resp = TestClient(app).post("/chat", json={"message": "help"})
    assert resp.status_code == 200
