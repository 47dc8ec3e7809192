"""Pydantic schemas for the read-only public display."""

from __future__ import annotations

from pydantic import BaseModel


class BoardEmployee(BaseModel):
    employee_id: int
    employee_number: str
    name: str
    shift_type: str
    is_absent: bool = False
    workplace_id: int | None = None


class BoardCell(BaseModel):
    row: int
    col: int
    kind: str  # anchor | covered | empty
    rowspan: int = 1
    colspan: int = 1
    workplace_id: int | None = None
    workplace_name: str | None = None
    color: str | None = None
    text_color: str | None = None
    employees: list[BoardEmployee] = []


class PublicBoard(BaseModel):
    date: str
    mode: str
    layout_id: int | None
    layout_name: str
    grid_rows: int
    grid_cols: int
    cells: list[BoardCell]
    employees: list[BoardEmployee]
    page: int | None = None
    page_count: int
    cells_per_page: int
    page_interval_seconds: float
    refresh_interval_seconds: float
