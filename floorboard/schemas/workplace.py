"""Pydantic schemas for Workplace CRUD and bulk import."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _clean_color(v: str | None) -> str | None:
    if v is None or not v.strip():
        return None
    v = v.strip()
    if not _COLOR_RE.match(v):
        raise ValueError("Color must be a #RRGGBB hex value")
    return v.upper()


class WorkplaceCreate(BaseModel):
    number: int = Field(ge=0)
    name: str
    color: str | None = None
    can_assign: bool = True

    _color = field_validator("color")(_clean_color)

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be empty")
        return v


class WorkplaceUpdate(BaseModel):
    number: int | None = Field(default=None, ge=0)
    name: str | None = None
    color: str | None = None
    can_assign: bool | None = None

    _color = field_validator("color")(_clean_color)


class WorkplaceRead(BaseModel):
    id: int
    number: int
    name: str
    color: str | None
    can_assign: bool
    created_at: datetime | None

    model_config = {"from_attributes": True}


# ── Bulk import ─────────────────────────────────────────────────────
class ImportFailure(BaseModel):
    index: int
    number: int | None
    error: str


class WorkplaceImportResponse(BaseModel):
    created: list[WorkplaceRead]
    failed: list[ImportFailure]
