"""
V1 API router aggregator - wires all endpoint modules together.
"""

from fastapi import APIRouter

from floorboard.api.v1.endpoints import (assignment, attendance, auth,
                                         display_layouts, employees, public,
                                         system, workplaces)

api_router = APIRouter()

# Auth (login, refresh, operator accounts)
api_router.include_router(auth.router)

# Master data
api_router.include_router(employees.router)
api_router.include_router(workplaces.router)

# Daily attendance and assignment
api_router.include_router(attendance.router)
api_router.include_router(assignment.router)

# Layout editor
api_router.include_router(display_layouts.router)

# Display (no session)
api_router.include_router(public.router)

# Health, status
api_router.include_router(system.router)
