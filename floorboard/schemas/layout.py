"""Pydantic schemas for display layouts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class LayoutCellSchema(BaseModel):
    row: int = Field(ge=0)
    col: int = Field(ge=0)
    rowspan: int = Field(default=1, ge=1)
    colspan: int = Field(default=1, ge=1)
    workplace_id: int | None = None


class LayoutConfig(BaseModel):
    cells: list[LayoutCellSchema] = Field(default_factory=list)


class DisplayLayoutCreate(BaseModel):
    layout_name: str = "New layout"
    grid_rows: int = Field(default=12, ge=1)
    grid_cols: int = Field(default=2, ge=1)
    layout_config: LayoutConfig = Field(default_factory=LayoutConfig)


class DisplayLayoutUpdate(BaseModel):
    layout_name: str | None = None
    grid_rows: int | None = Field(default=None, ge=1)
    grid_cols: int | None = Field(default=None, ge=1)
    layout_config: LayoutConfig | None = None
    is_active: bool | None = None


class DisplayLayoutRead(BaseModel):
    id: int
    layout_name: str
    grid_rows: int
    grid_cols: int
    layout_config: LayoutConfig
    is_active: bool = False
    created_at: datetime | None

    model_config = {"from_attributes": True}
