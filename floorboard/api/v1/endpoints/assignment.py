"""
Assignment endpoints - place present employees at workplaces for a date.

- ``GET /assignment?date=`` lists present employees with their workplace.
- ``POST /assignment`` replaces the employee's assignment for that date.
- ``DELETE /assignment?employee_id=&date=`` always succeeds, even if nothing matched.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.api.v1.deps import get_current_active_user, get_db
from floorboard.core.exceptions import FloorboardError
from floorboard.models.user import User
from floorboard.models.workplace import Assignment
from floorboard.schemas.attendance import (AssignmentBoard, AssignmentCreate,
                                           AssignmentFailure, AssignmentRead,
                                           BulkAssignmentCreate,
                                           BulkAssignmentResponse, DailyViewRow)
from floorboard.schemas.common import DeleteResponse, check_date
from floorboard.services.daily_view import (assign, assignable_rows,
                                            build_assignment_board,
                                            build_daily_view, unassign)

router = APIRouter(tags=["assignment"])
logger = logging.getLogger(__name__)


@router.get("/assignment", response_model=list[DailyViewRow])
async def get_assignments(
    date: str | None = None,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[DailyViewRow]:
    rows = await build_daily_view(db, check_date(date))
    return assignable_rows(rows)


@router.get("/assignment/board", response_model=AssignmentBoard)
async def get_assignment_board(
    date: str | None = None,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> AssignmentBoard:
    """Present employees grouped into unassigned-by-shift and per-workplace lists."""
    return await build_assignment_board(db, check_date(date))


@router.post("/assignment", response_model=AssignmentRead)
async def post_assignment(
    body: AssignmentCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Assignment:
    return await assign(db, body.employee_id, body.workplace_id, body.date)


@router.post("/assignment/bulk", response_model=BulkAssignmentResponse)
async def post_bulk_assignment(
    body: BulkAssignmentCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> BulkAssignmentResponse:
    """Assign several employees to one workplace, one independent write each."""
    assigned: list[AssignmentRead] = []
    failed: list[AssignmentFailure] = []
    for employee_id in body.employee_ids:
        try:
            row = await assign(db, employee_id, body.workplace_id, body.date)
        except FloorboardError as exc:
            failed.append(AssignmentFailure(employee_id=employee_id, error=exc.detail))
            continue
        assigned.append(AssignmentRead.model_validate(row))
    logger.info(
        "Bulk assignment to workplace %d on %s: %d assigned, %d failed",
        body.workplace_id,
        body.date,
        len(assigned),
        len(failed),
    )
    return BulkAssignmentResponse(assigned=assigned, failed=failed)


@router.delete("/assignment", response_model=DeleteResponse)
async def delete_assignment(
    employee_id: int,
    date: str | None = None,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> DeleteResponse:
    await unassign(db, employee_id, check_date(date))
    return DeleteResponse(success=True)
