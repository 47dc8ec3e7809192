"""
Display layout persistence and the single active-layout record.

Exactly one row (id=1) lives in ``active_layout``; activating a layout is a
single update of that row inside one transaction, so no two layouts can
ever be active at the same time.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.core.exceptions import LayoutNotFound
from floorboard.models.display_layout import ActiveLayout, DisplayLayout
from floorboard.services.layout_grid import LayoutGrid

logger = logging.getLogger(__name__)

_SINGLETON_ID = 1


async def _get_or_create_active(db: AsyncSession) -> ActiveLayout:
    """Fetch the singleton active-layout row, creating an empty one if absent."""
    record = await db.get(ActiveLayout, _SINGLETON_ID)
    if record is None:
        record = ActiveLayout(id=_SINGLETON_ID, layout_id=None)
        db.add(record)
        await db.flush()
    return record


async def get_active_layout_id(db: AsyncSession) -> int | None:
    record = await db.get(ActiveLayout, _SINGLETON_ID)
    return record.layout_id if record else None


async def get_active_layout(db: AsyncSession) -> DisplayLayout | None:
    layout_id = await get_active_layout_id(db)
    if layout_id is None:
        return None
    return await db.get(DisplayLayout, layout_id)


async def get_layout(db: AsyncSession, layout_id: int) -> DisplayLayout:
    layout = await db.get(DisplayLayout, layout_id)
    if layout is None:
        raise LayoutNotFound()
    return layout


async def activate(db: AsyncSession, layout_id: int) -> DisplayLayout:
    """Make ``layout_id`` the only active layout; activating it again changes nothing."""
    layout = await get_layout(db, layout_id)
    record = await _get_or_create_active(db)
    if record.layout_id != layout_id:
        record.layout_id = layout_id
        logger.info("Activated display layout %d (%s)", layout_id, layout.layout_name)
    await db.commit()
    return layout


async def deactivate(db: AsyncSession, layout_id: int) -> None:
    """Clear the active record if it points at ``layout_id``."""
    record = await db.get(ActiveLayout, _SINGLETON_ID)
    if record is not None and record.layout_id == layout_id:
        record.layout_id = None
        await db.commit()
        logger.info("Deactivated display layout %d", layout_id)


def validated_config(grid_rows: int, grid_cols: int, config: dict | None) -> dict:
    """Re-run the grid model over a submitted layout; raises on overlap or overflow."""
    return LayoutGrid.from_config(grid_rows, grid_cols, config).to_config()


async def list_layouts(db: AsyncSession, active_only: bool = False) -> list[DisplayLayout]:
    if active_only:
        layout = await get_active_layout(db)
        return [layout] if layout is not None else []
    result = await db.execute(
        select(DisplayLayout).order_by(DisplayLayout.created_at.desc(), DisplayLayout.id.desc())
    )
    return list(result.scalars().all())
