"""
Health and status endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.api.v1.deps import get_current_active_user, get_db
from floorboard.core.config import settings
from floorboard.models.employee import Employee
from floorboard.models.user import User
from floorboard.models.workplace import Assignment, Workplace
from floorboard.schemas.common import (HealthResponse, StatusResponse,
                                       local_today)
from floorboard.services.layouts import get_active_layout_id

router = APIRouter(tags=["system"])
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health(db: AsyncSession = Depends(get_db)) -> HealthResponse:
    """Public health check - database connectivity."""
    result = HealthResponse(db=False)
    try:
        await db.execute(select(1))
        result.db = True
    except Exception as e:
        logger.error("Health check DB failure: %s", e)
    return result


@router.get("/status", response_model=StatusResponse)
async def system_status(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> StatusResponse:
    """Counts behind the dashboard: listed employees, workplaces, today's assignments."""
    today_str = local_today(settings.TIMEZONE_OFFSET)

    emp_count = await db.execute(
        select(func.count(Employee.id)).where(
            Employee.employment_status == "active",
            Employee.display_status == "shown",
        )
    )
    wp_count = await db.execute(select(func.count(Workplace.id)))
    asn_count = await db.execute(
        select(func.count(Assignment.id)).where(Assignment.date == today_str)
    )

    return StatusResponse(
        date=today_str,
        total_employees=emp_count.scalar() or 0,
        total_workplaces=wp_count.scalar() or 0,
        today_assignments=asn_count.scalar() or 0,
        active_layout_id=await get_active_layout_id(db),
        status="operational",
    )
