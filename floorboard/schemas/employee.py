"""Pydantic schemas for Employee CRUD."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from floorboard.models.employee import DISPLAY_STATUSES, EMPLOYMENT_STATUSES


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Name must not be empty")
    if len(v) > 200:
        raise ValueError("Name must not exceed 200 characters")
    return v


def _clean_number(v: str) -> str:
    v = str(v).strip()
    if not v:
        raise ValueError("Employee number must not be empty")
    if len(v) > 32:
        raise ValueError("Employee number must not exceed 32 characters")
    return v


class EmployeeCreate(BaseModel):
    employee_number: str
    name: str
    position: str | None = None
    employment_status: str = "active"
    display_status: str = "shown"

    _name = field_validator("name")(_clean_name)
    _number = field_validator("employee_number", mode="before")(_clean_number)

    @field_validator("employment_status")
    @classmethod
    def _employment(cls, v: str) -> str:
        if v not in EMPLOYMENT_STATUSES:
            raise ValueError(f"employment_status must be one of: {EMPLOYMENT_STATUSES}")
        return v

    @field_validator("display_status")
    @classmethod
    def _display(cls, v: str) -> str:
        if v not in DISPLAY_STATUSES:
            raise ValueError(f"display_status must be one of: {DISPLAY_STATUSES}")
        return v


class EmployeeUpdate(BaseModel):
    employee_number: str | None = None
    name: str | None = None
    position: str | None = None
    employment_status: str | None = None
    display_status: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str | None) -> str | None:
        return None if v is None else _clean_name(v)

    @field_validator("employee_number", mode="before")
    @classmethod
    def _number(cls, v: str | None) -> str | None:
        return None if v is None else _clean_number(v)

    @field_validator("employment_status")
    @classmethod
    def _employment(cls, v: str | None) -> str | None:
        if v is not None and v not in EMPLOYMENT_STATUSES:
            raise ValueError(f"employment_status must be one of: {EMPLOYMENT_STATUSES}")
        return v

    @field_validator("display_status")
    @classmethod
    def _display(cls, v: str | None) -> str | None:
        if v is not None and v not in DISPLAY_STATUSES:
            raise ValueError(f"display_status must be one of: {DISPLAY_STATUSES}")
        return v


class EmployeeRead(BaseModel):
    id: int
    employee_number: str
    name: str
    position: str | None
    employment_status: str
    display_status: str
    created_at: datetime | None

    model_config = {"from_attributes": True}


# ── Bulk import ─────────────────────────────────────────────────────
class EmployeeImportFailure(BaseModel):
    index: int
    employee_number: str
    error: str


class EmployeeImportResponse(BaseModel):
    created: list[EmployeeRead]
    failed: list[EmployeeImportFailure]
