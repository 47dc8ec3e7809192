"""Shared schema helpers and generic responses."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from pydantic import BaseModel

from floorboard.core.exceptions import InvalidDate


def check_date(value: str | None) -> str:
    """Return ``value`` if it is a real ``YYYY-MM-DD`` calendar date."""
    if not value:
        raise InvalidDate("date is required (YYYY-MM-DD)")
    value = value.strip()
    try:
        parsed = date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDate(f"Invalid date '{value}', expected YYYY-MM-DD") from exc
    # fromisoformat accepts other ISO forms on newer Pythons (e.g. 20240601)
    if parsed.isoformat() != value:
        raise InvalidDate(f"Invalid date '{value}', expected YYYY-MM-DD")
    return value


def local_today(tz_offset: str) -> str:
    """Today's date in a ``+HH:MM`` / ``-HH:MM`` offset, as ``YYYY-MM-DD``."""
    sign = 1 if tz_offset[0] == "+" else -1
    offset_parts = tz_offset[1:].split(":")
    offset_hours = int(offset_parts[0])
    offset_mins = int(offset_parts[1]) if len(offset_parts) > 1 else 0
    local_tz = timezone(timedelta(hours=sign * offset_hours, minutes=sign * offset_mins))
    return datetime.now(local_tz).strftime("%Y-%m-%d")


class DeleteResponse(BaseModel):
    success: bool
    message: str | None = None


class LogoutResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    db: bool


class StatusResponse(BaseModel):
    date: str
    total_employees: int
    total_workplaces: int
    today_assignments: int
    active_layout_id: int | None = None
    status: str
