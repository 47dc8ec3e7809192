"""
Assignment reconciliation - who is where on a given day.

Eligible employees are those with ``employment_status = active`` and
``display_status = shown``.  Attendance, assignment and workplace rows are
left-joined onto them; a missing attendance row means *present, early shift*.

Correctness under concurrent writes relies on the unique
``(employee_id, date)`` constraints on ``attendance`` and ``assignments``,
not on application locking.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy import and_, func, select
from sqlalchemy import delete as sa_delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.core.exceptions import (EmployeeNotFound,
                                        WorkplaceNotAssignable,
                                        WorkplaceNotFound)
from floorboard.models.employee import (DEFAULT_ATTENDANCE_STATUS,
                                        DEFAULT_SHIFT_TYPE, SHIFT_TYPES,
                                        Attendance, Employee)
from floorboard.models.workplace import Assignment, Workplace
from floorboard.schemas.attendance import (AssignmentBoard, AttendanceRow,
                                           DailyViewRow, WorkplaceSlot)

logger = logging.getLogger(__name__)

WORKPLACE_GRID = "workplace_grid"
EMPLOYEE_TILES = "employee_tiles"

_UPSERT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


def _eligible():
    return and_(
        Employee.employment_status == "active",
        Employee.display_status == "shown",
    )


def _resolved_status():
    return func.coalesce(Attendance.attendance_status, DEFAULT_ATTENDANCE_STATUS)


def _resolved_shift():
    return func.coalesce(Attendance.shift_type, DEFAULT_SHIFT_TYPE)


# ── Reads ───────────────────────────────────────────────────────────
async def list_attendance(db: AsyncSession, date_str: str) -> list[AttendanceRow]:
    """Every eligible employee with resolved attendance for ``date_str``."""
    result = await db.execute(
        select(
            Employee.id.label("employee_id"),
            Employee.employee_number,
            Employee.name,
            Employee.position,
            _resolved_status().label("attendance_status"),
            _resolved_shift().label("shift_type"),
            Attendance.id.label("attendance_id"),
        )
        .outerjoin(
            Attendance,
            and_(Attendance.employee_id == Employee.id, Attendance.date == date_str),
        )
        .where(_eligible())
        .order_by(Employee.employee_number)
    )
    return [AttendanceRow.model_validate(dict(row._mapping)) for row in result.all()]


async def build_daily_view(db: AsyncSession, date_str: str) -> list[DailyViewRow]:
    """One row per eligible employee with attendance, shift and (maybe) workplace."""
    result = await db.execute(
        select(
            Employee.id.label("employee_id"),
            Employee.employee_number,
            Employee.name,
            _resolved_shift().label("shift_type"),
            _resolved_status().label("attendance_status"),
            Workplace.id.label("workplace_id"),
            Workplace.name.label("workplace_name"),
            Workplace.number.label("workplace_number"),
            Workplace.color.label("workplace_color"),
            Workplace.can_assign.label("workplace_can_assign"),
            Assignment.id.label("assignment_id"),
        )
        .outerjoin(
            Attendance,
            and_(Attendance.employee_id == Employee.id, Attendance.date == date_str),
        )
        .outerjoin(
            Assignment,
            and_(Assignment.employee_id == Employee.id, Assignment.date == date_str),
        )
        .outerjoin(Workplace, Assignment.workplace_id == Workplace.id)
        .where(_eligible())
        .order_by(Employee.employee_number)
    )
    return [DailyViewRow.model_validate(dict(row._mapping)) for row in result.all()]


def assignable_rows(rows: list[DailyViewRow]) -> list[DailyViewRow]:
    """Only present employees take part in assignment editing."""
    return [row for row in rows if row.is_present]


def public_rows(rows: list[DailyViewRow], mode: str) -> list[DailyViewRow]:
    """Rows for the public display.

    ``workplace_grid`` omits absent employees entirely; ``employee_tiles``
    keeps them so they can be drawn with the absent treatment.
    """
    if mode == EMPLOYEE_TILES:
        return list(rows)
    return assignable_rows(rows)


async def build_assignment_board(db: AsyncSession, date_str: str) -> AssignmentBoard:
    """Group present employees into per-shift unassigned lists and per-workplace slots."""
    rows = assignable_rows(await build_daily_view(db, date_str))
    wp_result = await db.execute(select(Workplace).order_by(Workplace.number))
    workplaces = list(wp_result.scalars().all())

    by_workplace: dict[int, list[DailyViewRow]] = defaultdict(list)
    unassigned: dict[str, list[DailyViewRow]] = {shift: [] for shift in SHIFT_TYPES}
    for row in rows:
        if row.workplace_id is None:
            unassigned.setdefault(row.shift_type, []).append(row)
        else:
            by_workplace[row.workplace_id].append(row)

    return AssignmentBoard(
        date=date_str,
        unassigned=unassigned,
        workplaces=[
            WorkplaceSlot(
                workplace_id=wp.id,
                number=wp.number,
                name=wp.name,
                color=wp.color,
                can_assign=wp.can_assign,
                employees=by_workplace.get(wp.id, []),
            )
            for wp in workplaces
        ],
    )


# ── Writes ──────────────────────────────────────────────────────────
async def _require_employee(db: AsyncSession, employee_id: int) -> Employee:
    employee = await db.get(Employee, employee_id)
    if employee is None:
        raise EmployeeNotFound()
    return employee


async def upsert_attendance(
    db: AsyncSession,
    employee_id: int,
    date_str: str,
    attendance_status: str,
    shift_type: str,
) -> Attendance:
    """Write attendance for (employee, date); a second write overwrites the first."""
    await _require_employee(db, employee_id)
    values = {
        "employee_id": employee_id,
        "date": date_str,
        "attendance_status": attendance_status,
        "shift_type": shift_type,
    }

    insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(Attendance).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["employee_id", "date"],
            set_={"attendance_status": attendance_status, "shift_type": shift_type},
        )
        await db.execute(stmt)
    else:
        existing = await db.execute(
            select(Attendance).where(
                Attendance.employee_id == employee_id, Attendance.date == date_str
            )
        )
        row = existing.scalar_one_or_none()
        if row is None:
            db.add(Attendance(**values))
        else:
            row.attendance_status = attendance_status
            row.shift_type = shift_type
    await db.commit()

    result = await db.execute(
        select(Attendance)
        .where(Attendance.employee_id == employee_id, Attendance.date == date_str)
        .execution_options(populate_existing=True)
    )
    attendance = result.scalar_one()
    logger.info(
        "Attendance %s/%s for employee %d on %s",
        attendance_status,
        shift_type,
        employee_id,
        date_str,
    )
    return attendance


async def assign(
    db: AsyncSession, employee_id: int, workplace_id: int, date_str: str
) -> Assignment:
    """Place an employee at a workplace for a date, releasing any previous slot first."""
    workplace = await db.get(Workplace, workplace_id)
    if workplace is None:
        raise WorkplaceNotFound()
    if not workplace.can_assign:
        raise WorkplaceNotAssignable(
            f"Employees cannot be assigned to workplace '{workplace.name}'"
        )
    await _require_employee(db, employee_id)

    await db.execute(
        sa_delete(Assignment).where(
            Assignment.employee_id == employee_id, Assignment.date == date_str
        )
    )
    assignment = Assignment(employee_id=employee_id, workplace_id=workplace_id, date=date_str)
    db.add(assignment)
    await db.commit()
    await db.refresh(assignment)
    logger.info(
        "Assigned employee %d to workplace %d on %s", employee_id, workplace_id, date_str
    )
    return assignment


async def unassign(db: AsyncSession, employee_id: int, date_str: str) -> int:
    """Remove the (employee, date) assignment; returns rows removed (0 is fine)."""
    result = await db.execute(
        sa_delete(Assignment).where(
            Assignment.employee_id == employee_id, Assignment.date == date_str
        )
    )
    await db.commit()
    if result.rowcount:
        logger.info("Unassigned employee %d on %s", employee_id, date_str)
    return result.rowcount or 0
