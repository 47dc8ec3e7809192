"""
Workplace & Assignment models - stations and who staffs them on a given day.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (Boolean, Column, DateTime, ForeignKey, Index, Integer,
                        String, UniqueConstraint)

from floorboard.db.base import Base


class Workplace(Base):
    __tablename__ = "workplaces"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    number: int = Column(Integer, unique=True, nullable=False, index=True)  # type: ignore[assignment]
    name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    color: str | None = Column(String(7), nullable=True)  # type: ignore[assignment]  # #RRGGBB
    can_assign: bool = Column(Boolean, nullable=False, default=True, server_default="true")  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )


class Assignment(Base):
    __tablename__ = "assignments"
    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_assignment_emp_date"),
        Index("ix_assignment_date_workplace", "date", "workplace_id"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_id: int = Column(  # type: ignore[assignment]
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    workplace_id: int = Column(  # type: ignore[assignment]
        Integer, ForeignKey("workplaces.id", ondelete="CASCADE"), nullable=False
    )
    date: str = Column(String(10), nullable=False)  # type: ignore[assignment]  # YYYY-MM-DD
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
