"""
Employee CRUD endpoints.

All operations require an operator session.  Deleting an employee also
removes their attendance and assignment rows.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import delete as sa_delete
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.api.v1.deps import get_current_active_user, get_db
from floorboard.core.exceptions import DuplicateKeyError, EmployeeNotFound
from floorboard.models.employee import Attendance, Employee
from floorboard.models.user import User
from floorboard.models.workplace import Assignment
from floorboard.schemas.common import DeleteResponse
from floorboard.schemas.employee import (EmployeeCreate, EmployeeImportFailure,
                                         EmployeeImportResponse, EmployeeRead,
                                         EmployeeUpdate)

router = APIRouter(tags=["employees"])
logger = logging.getLogger(__name__)


async def _get_employee(db: AsyncSession, employee_id: int) -> Employee:
    emp = await db.get(Employee, employee_id)
    if emp is None:
        raise EmployeeNotFound()
    return emp


async def _ensure_number_free(
    db: AsyncSession, employee_number: str, exclude_id: int | None = None
) -> None:
    query = select(Employee.id).where(Employee.employee_number == employee_number)
    if exclude_id is not None:
        query = query.where(Employee.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise DuplicateKeyError(f"Employee number '{employee_number}' already in use")


async def _create(db: AsyncSession, body: EmployeeCreate) -> Employee:
    await _ensure_number_free(db, body.employee_number)
    employee = Employee(**body.model_dump())
    db.add(employee)
    await db.commit()
    await db.refresh(employee)
    logger.info("Created employee %s (%s)", employee.employee_number, employee.name)
    return employee


@router.get("/employees", response_model=list[EmployeeRead])
async def list_employees(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[Employee]:
    result = await db.execute(select(Employee).order_by(Employee.employee_number))
    return list(result.scalars().all())


@router.post("/employees", response_model=EmployeeRead, status_code=201)
async def create_employee(
    body: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Employee:
    return await _create(db, body)


@router.post("/employees/import", response_model=EmployeeImportResponse)
async def import_employees(
    body: list[EmployeeCreate],
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> EmployeeImportResponse:
    """Create employees from already-parsed rows; a failing row never undoes earlier ones."""
    created: list[Employee] = []
    failed: list[EmployeeImportFailure] = []
    for index, row in enumerate(body):
        try:
            created.append(await _create(db, row))
        except DuplicateKeyError as exc:
            failed.append(
                EmployeeImportFailure(
                    index=index, employee_number=row.employee_number, error=exc.detail
                )
            )
        except IntegrityError:
            await db.rollback()
            failed.append(
                EmployeeImportFailure(
                    index=index,
                    employee_number=row.employee_number,
                    error="Constraint violation",
                )
            )
    logger.info("Employee import: %d created, %d failed", len(created), len(failed))
    return EmployeeImportResponse(
        created=[EmployeeRead.model_validate(emp) for emp in created],
        failed=failed,
    )


@router.get("/employees/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Employee:
    return await _get_employee(db, employee_id)


@router.put("/employees/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: int,
    body: EmployeeUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Employee:
    emp = await _get_employee(db, employee_id)
    # position may be cleared; the other fields are only ever replaced
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field == "position"
    }
    if "employee_number" in changes:
        await _ensure_number_free(db, changes["employee_number"], exclude_id=employee_id)

    for field, value in changes.items():
        setattr(emp, field, value)

    await db.commit()
    await db.refresh(emp)
    logger.info("Updated employee %d: %s", employee_id, sorted(changes))
    return emp


@router.delete("/employees/{employee_id}", response_model=DeleteResponse)
async def delete_employee(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> DeleteResponse:
    """Delete an employee together with their attendance and assignments."""
    emp = await _get_employee(db, employee_id)
    name = emp.name

    await db.execute(sa_delete(Assignment).where(Assignment.employee_id == employee_id))
    await db.execute(sa_delete(Attendance).where(Attendance.employee_id == employee_id))
    await db.delete(emp)
    await db.commit()
    logger.info("Deleted employee %d (%s)", employee_id, name)
    return DeleteResponse(success=True, message=f"Employee '{name}' deleted")
