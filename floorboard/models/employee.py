"""
Employee & Attendance models - who works here and whether they came in.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (Column, DateTime, ForeignKey, Index, Integer, String,
                        UniqueConstraint)

from floorboard.db.base import Base

EMPLOYMENT_STATUSES = ("active", "resigned")
DISPLAY_STATUSES = ("shown", "hidden")
ATTENDANCE_STATUSES = ("present", "absent")
SHIFT_TYPES = ("early", "late")

DEFAULT_ATTENDANCE_STATUS = "present"
DEFAULT_SHIFT_TYPE = "early"


class Employee(Base):
    __tablename__ = "employees"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_number: str = Column(String(32), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    position: str | None = Column(String(100), nullable=True)  # type: ignore[assignment]
    employment_status: str = Column(  # type: ignore[assignment]
        String(20),
        nullable=False,
        default="active",
        server_default="active",
    )  # active | resigned
    display_status: str = Column(  # type: ignore[assignment]
        String(20),
        nullable=False,
        default="shown",
        server_default="shown",
    )  # shown | hidden
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_attendance_emp_date"),
        Index("ix_attendance_employee_date", "employee_id", "date"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_id: int = Column(  # type: ignore[assignment]
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    date: str = Column(String(10), nullable=False, index=True)  # type: ignore[assignment]  # YYYY-MM-DD
    attendance_status: str = Column(  # type: ignore[assignment]
        String(20), nullable=False, default=DEFAULT_ATTENDANCE_STATUS
    )  # present | absent
    shift_type: str = Column(  # type: ignore[assignment]
        String(20), nullable=False, default=DEFAULT_SHIFT_TYPE
    )  # early | late
