"""
Attendance endpoints - per-day presence and shift for every listed employee.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.api.v1.deps import get_current_active_user, get_db
from floorboard.models.employee import Attendance
from floorboard.models.user import User
from floorboard.schemas.attendance import (AttendanceRead, AttendanceRow,
                                           AttendanceUpsert)
from floorboard.schemas.common import check_date
from floorboard.services.daily_view import list_attendance, upsert_attendance

router = APIRouter(tags=["attendance"])


@router.get("/attendance", response_model=list[AttendanceRow])
async def get_attendance(
    date: str | None = None,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[AttendanceRow]:
    """Active, shown employees with attendance for ``date`` (default present / early)."""
    return await list_attendance(db, check_date(date))


@router.post("/attendance", response_model=AttendanceRead)
async def post_attendance(
    body: AttendanceUpsert,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Attendance:
    """Create or overwrite the attendance row for (employee, date)."""
    return await upsert_attendance(
        db, body.employee_id, body.date, body.attendance_status, body.shift_type
    )
