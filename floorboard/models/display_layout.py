"""
Display layout models.

A layout is a named grid template whose cells are stored as a JSON blob
``{"cells": [{row, col, rowspan, colspan, workplace_id}, ...]}``.

``ActiveLayout`` is a singleton table: only one row (id=1) should ever
exist, and its ``layout_id`` names the layout shown on the public board.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String

from floorboard.db.base import Base


class DisplayLayout(Base):
    __tablename__ = "display_layouts"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    layout_name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    grid_rows: int = Column(Integer, nullable=False, default=12)  # type: ignore[assignment]
    grid_cols: int = Column(Integer, nullable=False, default=2)  # type: ignore[assignment]
    layout_config: dict = Column(JSON, nullable=False, default=lambda: {"cells": []})  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )


class ActiveLayout(Base):
    __tablename__ = "active_layout"

    id: int = Column(Integer, primary_key=True, default=1)  # type: ignore[assignment]
    layout_id: int | None = Column(  # type: ignore[assignment]
        Integer, ForeignKey("display_layouts.id", ondelete="SET NULL"), nullable=True
    )
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
