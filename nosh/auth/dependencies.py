from __future__ import annotations

from fastapi import HTTPException, Request

from .users import get_user


def require_user(request: Request) -> dict:
    """Raise 401 if no user is logged in, 404 if the account is gone."""
    user_id = request.session.get("user_id")
    if user_id is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    user = get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
