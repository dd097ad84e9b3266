from __future__ import annotations

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    name: str = ""
    username: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    login: str = ""
    password: str = ""
