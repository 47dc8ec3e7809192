"""
Display layout CRUD + activation.

Submitted cells are re-validated through the grid model, so a stored
layout never contains overlapping or out-of-bounds cells.  Exactly one
layout can be active; ``is_active`` in responses is derived from the
single active-layout record.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.api.v1.deps import get_current_active_user, get_db
from floorboard.models.display_layout import DisplayLayout
from floorboard.models.user import User
from floorboard.schemas.common import DeleteResponse
from floorboard.schemas.layout import (DisplayLayoutCreate, DisplayLayoutRead,
                                       DisplayLayoutUpdate)
from floorboard.services import layouts

router = APIRouter(tags=["display-layouts"])
logger = logging.getLogger(__name__)


def _read(layout: DisplayLayout, active_id: int | None) -> DisplayLayoutRead:
    return DisplayLayoutRead(
        id=layout.id,
        layout_name=layout.layout_name,
        grid_rows=layout.grid_rows,
        grid_cols=layout.grid_cols,
        layout_config=layout.layout_config,
        is_active=layout.id == active_id,
        created_at=layout.created_at,
    )


@router.get("/display-layouts", response_model=list[DisplayLayoutRead])
async def list_display_layouts(
    active: bool = False,
    db: AsyncSession = Depends(get_db),
) -> list[DisplayLayoutRead]:
    """All layouts, newest first; ``?active=true`` returns only the active one.

    Public: the display reads the active layout without a session.
    """
    active_id = await layouts.get_active_layout_id(db)
    return [_read(layout, active_id) for layout in await layouts.list_layouts(db, active)]


@router.get("/display-layouts/{layout_id}", response_model=DisplayLayoutRead)
async def get_display_layout(
    layout_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> DisplayLayoutRead:
    layout = await layouts.get_layout(db, layout_id)
    return _read(layout, await layouts.get_active_layout_id(db))


@router.post("/display-layouts", response_model=DisplayLayoutRead, status_code=201)
async def create_display_layout(
    body: DisplayLayoutCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> DisplayLayoutRead:
    layout = DisplayLayout(
        layout_name=body.layout_name,
        grid_rows=body.grid_rows,
        grid_cols=body.grid_cols,
        layout_config=layouts.validated_config(
            body.grid_rows, body.grid_cols, body.layout_config.model_dump()
        ),
    )
    db.add(layout)
    await db.commit()
    await db.refresh(layout)
    logger.info(
        "Created display layout %d (%s, %dx%d, %d cells)",
        layout.id,
        layout.layout_name,
        layout.grid_rows,
        layout.grid_cols,
        len(layout.layout_config["cells"]),
    )
    return _read(layout, await layouts.get_active_layout_id(db))


@router.put("/display-layouts/{layout_id}", response_model=DisplayLayoutRead)
async def update_display_layout(
    layout_id: int,
    body: DisplayLayoutUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> DisplayLayoutRead:
    """Update a layout; ``is_active: true`` makes it the only active layout."""
    layout = await layouts.get_layout(db, layout_id)

    grid_rows = body.grid_rows or layout.grid_rows
    grid_cols = body.grid_cols or layout.grid_cols
    config = (
        body.layout_config.model_dump()
        if body.layout_config is not None
        else layout.layout_config
    )
    layout.layout_config = layouts.validated_config(grid_rows, grid_cols, config)
    layout.grid_rows = grid_rows
    layout.grid_cols = grid_cols
    if body.layout_name is not None:
        layout.layout_name = body.layout_name
    await db.commit()
    logger.info("Updated display layout %d", layout_id)

    if body.is_active:
        await layouts.activate(db, layout_id)
    elif body.is_active is False:
        await layouts.deactivate(db, layout_id)

    await db.refresh(layout)
    return _read(layout, await layouts.get_active_layout_id(db))


@router.post("/display-layouts/{layout_id}/activate", response_model=DisplayLayoutRead)
async def activate_display_layout(
    layout_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> DisplayLayoutRead:
    layout = await layouts.activate(db, layout_id)
    return _read(layout, layout_id)


@router.delete("/display-layouts/{layout_id}", response_model=DeleteResponse)
async def delete_display_layout(
    layout_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> DeleteResponse:
    """Delete a layout; deleting the active one leaves no layout active."""
    layout = await layouts.get_layout(db, layout_id)
    name = layout.layout_name
    await layouts.deactivate(db, layout_id)
    await db.delete(layout)
    await db.commit()
    logger.info("Deleted display layout %d (%s)", layout_id, name)
    return DeleteResponse(success=True, message=f"Layout '{name}' deleted")
