from __future__ import annotations

import re
import time
from typing import Any

import bcrypt

MIN_PASSWORD_LENGTH = 6

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_users: dict[int, dict[str, Any]] = {}
_next_id = 1


class AuthError(Exception):
    """Auth outcome other than success; ``code`` is the client-facing error key."""

    def __init__(self, code: str, status_code: int) -> None:
        super().__init__(code)
        self.code = code
        self.status_code = status_code


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _public(record: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in record.items() if k != "password_hash"}


def _find(login: str) -> dict[str, Any] | None:
    for record in _users.values():
        if record["username"] == login or record["email"] == login:
            return record
    return None


def register(name: str, username: str, email: str, password: str) -> dict[str, Any]:
    """Create an account. Returns the public user dict."""
    global _next_id
    name = (name or "").strip()
    username = (username or "").strip().lower()
    email = (email or "").strip().lower()
    password = password or ""

    if not name or not username or not email or len(password) < MIN_PASSWORD_LENGTH:
        raise AuthError("invalid_input", 400)
    if not _EMAIL_RE.match(email):
        raise AuthError("invalid_email", 400)

    for record in _users.values():
        if record["username"] == username:
            raise AuthError("username_taken", 409)
        if record["email"] == email:
            raise AuthError("email_taken", 409)

    record = {
        "id": _next_id,
        "name": name,
        "username": username,
        "email": email,
        "password_hash": _hash_password(password),
        "created_at": time.time(),
    }
    _users[_next_id] = record
    _next_id += 1
    return _public(record)


def authenticate(login: str, password: str) -> dict[str, Any]:
    """Verify credentials by username or email. Returns the public user dict."""
    login = (login or "").strip().lower()
    if not login or not password:
        raise AuthError("invalid_input", 400)

    record = _find(login)
    if record is None:
        raise AuthError("not_found", 401)
    if not _verify_password(password, record["password_hash"]):
        raise AuthError("bad_credentials", 401)
    return _public(record)


def get_user(user_id: int) -> dict[str, Any] | None:
    record = _users.get(user_id)
    return _public(record) if record else None


def clear_users() -> None:
    global _next_id
    _users.clear()
    _next_id = 1
