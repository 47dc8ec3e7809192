"""
Public display endpoints - read-only, no session required.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.api.v1.deps import get_db
from floorboard.core.config import DISPLAY_MODES, settings
from floorboard.schemas.attendance import DailyViewRow
from floorboard.schemas.common import check_date, local_today
from floorboard.schemas.public import PublicBoard
from floorboard.services.board import load_public_board
from floorboard.services.daily_view import build_daily_view, public_rows

router = APIRouter(prefix="/public", tags=["public"])

_MODE_PATTERN = "^(" + "|".join(DISPLAY_MODES) + ")$"


def _resolve_date(date: str | None) -> str:
    return check_date(date) if date else local_today(settings.TIMEZONE_OFFSET)


@router.get("", response_model=list[DailyViewRow])
async def public_view(
    date: str | None = None,
    mode: str | None = Query(default=None, pattern=_MODE_PATTERN),
    db: AsyncSession = Depends(get_db),
) -> list[DailyViewRow]:
    """The day's rows for display clients; today (local) when no date is given."""
    rows = await build_daily_view(db, _resolve_date(date))
    return public_rows(rows, mode or settings.DISPLAY_MODE)


@router.get("/board", response_model=PublicBoard)
async def public_board(
    date: str | None = None,
    page: int | None = Query(default=None, ge=0),
    mode: str | None = Query(default=None, pattern=_MODE_PATTERN),
    db: AsyncSession = Depends(get_db),
) -> PublicBoard:
    """The active layout resolved into cells, with the employees of ``page`` (all when omitted)."""
    return await load_public_board(
        db, _resolve_date(date), mode or settings.DISPLAY_MODE, page
    )
