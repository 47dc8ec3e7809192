"""
Floorboard - Application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `api/`, `services/`, `models/`, and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import select

from floorboard.api.v1.api import api_router
from floorboard.api.v1.endpoints.auth import limiter
from floorboard.core.config import settings
from floorboard.core.exceptions import register_exception_handlers
from floorboard.core.security import get_password_hash
from floorboard.db.base import Base
from floorboard.db.session import async_session_factory, engine

# Ensure all models are imported so metadata.create_all can see them
from floorboard.models.display_layout import ActiveLayout, DisplayLayout  # noqa: F401
from floorboard.models.employee import Attendance, Employee  # noqa: F401
from floorboard.models.user import User
from floorboard.models.workplace import Assignment, Workplace  # noqa: F401

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    # Seed the first operator account
    async with async_session_factory() as session:
        result = await session.execute(
            select(User).where(User.username == settings.FIRST_ADMIN_USERNAME)
        )
        if result.scalar_one_or_none() is None:
            session.add(
                User(
                    username=settings.FIRST_ADMIN_USERNAME,
                    hashed_password=get_password_hash(settings.FIRST_ADMIN_PASSWORD),
                )
            )
            await session.commit()
            logger.info(
                "Default operator created: %s (password: <redacted>)",
                settings.FIRST_ADMIN_USERNAME,
            )

    logger.info("%s v%s started", settings.PROJECT_NAME, settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Factory floor assignment board",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # slowapi looks the limiter up on app state
    application.state.limiter = limiter

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_V1_PREFIX)

    return application


app = create_app()
