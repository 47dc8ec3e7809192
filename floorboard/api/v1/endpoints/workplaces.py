"""
Workplace CRUD + bulk import endpoints.

Workplace numbers are unique.  Bulk import writes rows one at a time; a
failing row is reported and never undoes the rows before it.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import delete as sa_delete
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.api.v1.deps import get_current_active_user, get_db
from floorboard.core.exceptions import DuplicateKeyError, WorkplaceNotFound
from floorboard.models.user import User
from floorboard.models.workplace import Assignment, Workplace
from floorboard.schemas.common import DeleteResponse
from floorboard.schemas.workplace import (ImportFailure, WorkplaceCreate,
                                          WorkplaceImportResponse,
                                          WorkplaceRead, WorkplaceUpdate)

router = APIRouter(tags=["workplaces"])
logger = logging.getLogger(__name__)


async def _get_workplace(db: AsyncSession, workplace_id: int) -> Workplace:
    workplace = await db.get(Workplace, workplace_id)
    if workplace is None:
        raise WorkplaceNotFound()
    return workplace


async def _ensure_number_free(
    db: AsyncSession, number: int, exclude_id: int | None = None
) -> None:
    query = select(Workplace.id).where(Workplace.number == number)
    if exclude_id is not None:
        query = query.where(Workplace.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise DuplicateKeyError(f"Workplace number {number} already in use")


async def _create(db: AsyncSession, body: WorkplaceCreate) -> Workplace:
    await _ensure_number_free(db, body.number)
    workplace = Workplace(**body.model_dump())
    db.add(workplace)
    await db.commit()
    await db.refresh(workplace)
    logger.info("Created workplace %d (%s)", workplace.number, workplace.name)
    return workplace


@router.get("/workplaces", response_model=list[WorkplaceRead])
async def list_workplaces(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[Workplace]:
    result = await db.execute(select(Workplace).order_by(Workplace.number))
    return list(result.scalars().all())


@router.post("/workplaces", response_model=WorkplaceRead, status_code=201)
async def create_workplace(
    body: WorkplaceCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Workplace:
    return await _create(db, body)


@router.post("/workplaces/import", response_model=WorkplaceImportResponse)
async def import_workplaces(
    body: list[WorkplaceCreate],
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> WorkplaceImportResponse:
    """Create workplaces from already-parsed rows, one independent write per row."""
    created: list[Workplace] = []
    failed: list[ImportFailure] = []
    for index, row in enumerate(body):
        try:
            created.append(await _create(db, row))
        except DuplicateKeyError as exc:
            failed.append(ImportFailure(index=index, number=row.number, error=exc.detail))
        except IntegrityError:
            await db.rollback()
            failed.append(
                ImportFailure(index=index, number=row.number, error="Constraint violation")
            )
    logger.info("Workplace import: %d created, %d failed", len(created), len(failed))
    return WorkplaceImportResponse(
        created=[WorkplaceRead.model_validate(wp) for wp in created],
        failed=failed,
    )


@router.get("/workplaces/{workplace_id}", response_model=WorkplaceRead)
async def get_workplace(
    workplace_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Workplace:
    return await _get_workplace(db, workplace_id)


@router.put("/workplaces/{workplace_id}", response_model=WorkplaceRead)
async def update_workplace(
    workplace_id: int,
    body: WorkplaceUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Workplace:
    workplace = await _get_workplace(db, workplace_id)
    # color may be cleared; the other fields are only ever replaced
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field == "color"
    }
    if "number" in changes:
        await _ensure_number_free(db, changes["number"], exclude_id=workplace_id)

    for field, value in changes.items():
        setattr(workplace, field, value)

    await db.commit()
    await db.refresh(workplace)
    logger.info("Updated workplace %d: %s", workplace_id, sorted(changes))
    return workplace


@router.delete("/workplaces/{workplace_id}", response_model=DeleteResponse)
async def delete_workplace(
    workplace_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> DeleteResponse:
    """Delete a workplace and every assignment to it."""
    workplace = await _get_workplace(db, workplace_id)
    name = workplace.name

    await db.execute(sa_delete(Assignment).where(Assignment.workplace_id == workplace_id))
    await db.delete(workplace)
    await db.commit()
    logger.info("Deleted workplace %d (%s)", workplace_id, name)
    return DeleteResponse(success=True, message=f"Workplace '{name}' deleted")
