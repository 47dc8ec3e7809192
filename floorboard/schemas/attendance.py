"""Pydantic schemas for attendance, assignments and the daily view."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from floorboard.core.exceptions import InvalidDate
from floorboard.models.employee import (ATTENDANCE_STATUSES,
                                        DEFAULT_ATTENDANCE_STATUS,
                                        DEFAULT_SHIFT_TYPE, SHIFT_TYPES)
from floorboard.schemas.common import check_date


def _valid_date(v: str) -> str:
    try:
        return check_date(v)
    except InvalidDate as exc:
        raise ValueError(str(exc)) from exc


# ── Attendance ──────────────────────────────────────────────────────
class AttendanceUpsert(BaseModel):
    employee_id: int
    date: str
    attendance_status: str = DEFAULT_ATTENDANCE_STATUS
    shift_type: str = DEFAULT_SHIFT_TYPE

    _date = field_validator("date")(_valid_date)

    @field_validator("attendance_status")
    @classmethod
    def _status(cls, v: str) -> str:
        if v not in ATTENDANCE_STATUSES:
            raise ValueError(f"attendance_status must be one of: {ATTENDANCE_STATUSES}")
        return v

    @field_validator("shift_type")
    @classmethod
    def _shift(cls, v: str) -> str:
        if v not in SHIFT_TYPES:
            raise ValueError(f"shift_type must be one of: {SHIFT_TYPES}")
        return v


class AttendanceRead(BaseModel):
    id: int
    employee_id: int
    date: str
    attendance_status: str
    shift_type: str

    model_config = {"from_attributes": True}


class AttendanceRow(BaseModel):
    """One eligible employee with resolved attendance for a date."""

    employee_id: int
    employee_number: str
    name: str
    position: str | None = None
    attendance_status: str
    shift_type: str
    attendance_id: int | None = None


# ── Assignment ──────────────────────────────────────────────────────
class AssignmentCreate(BaseModel):
    employee_id: int
    workplace_id: int
    date: str

    _date = field_validator("date")(_valid_date)


class BulkAssignmentCreate(BaseModel):
    employee_ids: list[int] = Field(min_length=1)
    workplace_id: int
    date: str

    _date = field_validator("date")(_valid_date)


class AssignmentRead(BaseModel):
    id: int
    employee_id: int
    workplace_id: int
    date: str

    model_config = {"from_attributes": True}


# ── Daily view ──────────────────────────────────────────────────────
class DailyViewRow(BaseModel):
    employee_id: int
    employee_number: str
    name: str
    shift_type: str
    attendance_status: str
    workplace_id: int | None = None
    workplace_name: str | None = None
    workplace_number: int | None = None
    workplace_color: str | None = None
    workplace_can_assign: bool | None = None
    assignment_id: int | None = None

    @property
    def is_present(self) -> bool:
        return self.attendance_status == "present"


class WorkplaceSlot(BaseModel):
    workplace_id: int
    number: int
    name: str
    color: str | None
    can_assign: bool
    employees: list[DailyViewRow]


class AssignmentBoard(BaseModel):
    date: str
    unassigned: dict[str, list[DailyViewRow]]  # shift_type -> employees
    workplaces: list[WorkplaceSlot]


class AssignmentFailure(BaseModel):
    employee_id: int
    error: str


class BulkAssignmentResponse(BaseModel):
    assigned: list[AssignmentRead]
    failed: list[AssignmentFailure]
