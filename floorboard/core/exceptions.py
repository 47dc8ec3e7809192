"""
Domain errors and global exception handlers.

Every error response has the same body shape::

    {"detail": "...", "error": "...", "success": false}

so operators always see a message and stack traces never reach clients.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


# ── Domain errors ───────────────────────────────────────────────────
class FloorboardError(Exception):
    """Base class for errors that map onto a client-facing status code."""

    status_code = 400
    default_detail = "Request could not be processed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(FloorboardError):
    status_code = 404
    default_detail = "Not found"


class EmployeeNotFound(NotFoundError):
    default_detail = "Employee not found"


class WorkplaceNotFound(NotFoundError):
    default_detail = "Workplace not found"


class LayoutNotFound(NotFoundError):
    default_detail = "Display layout not found"


class WorkplaceNotAssignable(FloorboardError):
    default_detail = "Employees cannot be assigned to this workplace"


class DuplicateKeyError(FloorboardError):
    default_detail = "Value already in use"


class InvalidDate(FloorboardError):
    default_detail = "Date must be given as YYYY-MM-DD"


class LayoutError(FloorboardError):
    default_detail = "Invalid layout"


class LayoutConflict(LayoutError):
    default_detail = "Cell overlaps an existing cell"


class CellOutOfBounds(LayoutError):
    default_detail = "Cell does not fit inside the grid"


# ── Handlers ────────────────────────────────────────────────────────
def _error_body(detail: object) -> dict:
    return {"detail": detail, "error": detail, "success": False}


async def _floorboard_error_handler(_request: Request, exc: FloorboardError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail))


async def _http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return JSONResponse(status_code=400, content=_error_body("; ".join(messages)))


async def _rate_limit_handler(_request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content=_error_body(f"Too many requests: {exc.detail}"),
    )


async def _integrity_error_handler(_request: Request, exc: IntegrityError) -> JSONResponse:
    logger.error("Database integrity error: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=400,
        content=_error_body("Value already in use or violates a constraint"),
    )


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return JSONResponse(status_code=500, content=_error_body("Internal database error"))


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(FloorboardError, _floorboard_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, _integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
