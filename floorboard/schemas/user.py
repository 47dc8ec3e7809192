"""Pydantic schemas for operator accounts and session tokens."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, field_validator

_USERNAME_RE = re.compile(r"^[A-Za-z0-9._-]{3,100}$")


class UserCreate(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def _username(cls, v: str) -> str:
        v = v.strip()
        if not _USERNAME_RE.match(v):
            raise ValueError("Username must be 3-100 letters, digits, '.', '_' or '-'")
        return v

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must not exceed 72 bytes")
        return v


class UserRead(BaseModel):
    id: int
    username: str
    is_active: bool
    created_at: datetime | None

    model_config = {"from_attributes": True}


# ── Tokens ──────────────────────────────────────────────────────────
class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str
