"""
Public board composition.

Combines the active layout's grid, the workplaces and the day's public rows
into a :class:`PublicBoard`.  Employees are paged ``cells_per_page`` at a
time, where ``cells_per_page`` is the number of workplace-bearing cells in
the active layout (or the default grid size when there are none).
"""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.core.config import settings
from floorboard.models.workplace import Workplace
from floorboard.schemas.attendance import DailyViewRow
from floorboard.schemas.public import BoardCell, BoardEmployee, PublicBoard
from floorboard.services.daily_view import build_daily_view, public_rows
from floorboard.services.layout_grid import ANCHOR, LayoutGrid
from floorboard.services.layouts import get_active_layout
from floorboard.services.rotation import page_count, page_slice

DEFAULT_CELL_COLOR = "#DC2626"
DEFAULT_LAYOUT_NAME = "Default"


def text_color_for(background: str | None) -> str:
    """Black text on bright backgrounds, white on dark ones."""
    if not background:
        return "#000000"
    hex_value = background.lstrip("#")
    try:
        r, g, b = (int(hex_value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return "#000000"
    brightness = (r * 299 + g * 587 + b * 114) / 1000
    return "#000000" if brightness > 128 else "#FFFFFF"


def _board_employee(row: DailyViewRow) -> BoardEmployee:
    return BoardEmployee(
        employee_id=row.employee_id,
        employee_number=row.employee_number,
        name=row.name,
        shift_type=row.shift_type,
        is_absent=not row.is_present,
        workplace_id=row.workplace_id,
    )


def compose_board(
    *,
    date_str: str,
    mode: str,
    grid: LayoutGrid,
    layout_id: int | None,
    layout_name: str,
    workplaces: Mapping[int, Workplace],
    rows: list[DailyViewRow],
    fallback_per_page: int,
) -> PublicBoard:
    """Build the full (unpaged) board."""
    employees = [_board_employee(row) for row in public_rows(rows, mode)]
    per_page = len(grid.workplace_cells()) or fallback_per_page

    cells: list[BoardCell] = []
    for pos in grid.positions():
        if pos.kind != ANCHOR:
            cells.append(BoardCell(row=pos.row, col=pos.col, kind=pos.kind))
            continue
        cell = pos.cell
        workplace = workplaces.get(cell.workplace_id) if cell.workplace_id is not None else None
        if workplace is None:
            # Unbound (or dangling) cells render as empty space of the cell's size
            cells.append(
                BoardCell(
                    row=cell.row, col=cell.col, kind=ANCHOR,
                    rowspan=cell.rowspan, colspan=cell.colspan,
                )
            )
            continue
        color = workplace.color or DEFAULT_CELL_COLOR
        cells.append(
            BoardCell(
                row=cell.row,
                col=cell.col,
                kind=ANCHOR,
                rowspan=cell.rowspan,
                colspan=cell.colspan,
                workplace_id=workplace.id,
                workplace_name=workplace.name,
                color=color,
                text_color=text_color_for(color),
                employees=[
                    e for e in employees
                    if e.workplace_id == workplace.id and not e.is_absent
                ],
            )
        )

    return PublicBoard(
        date=date_str,
        mode=mode,
        layout_id=layout_id,
        layout_name=layout_name,
        grid_rows=grid.rows,
        grid_cols=grid.cols,
        cells=cells,
        employees=employees,
        page_count=page_count(len(employees), per_page),
        cells_per_page=per_page,
        page_interval_seconds=settings.PAGE_INTERVAL_SECONDS,
        refresh_interval_seconds=settings.REFRESH_INTERVAL_SECONDS,
    )


def board_page(board: PublicBoard, page: int) -> PublicBoard:
    """Restrict a full board to the employees on ``page`` (taken modulo page_count)."""
    page %= board.page_count
    employees = page_slice(board.employees, page, board.cells_per_page)
    on_page = {e.employee_id for e in employees}
    cells = [
        cell.model_copy(
            update={"employees": [e for e in cell.employees if e.employee_id in on_page]}
        )
        for cell in board.cells
    ]
    return board.model_copy(update={"employees": employees, "cells": cells, "page": page})


async def load_public_board(
    db: AsyncSession, date_str: str, mode: str, page: int | None = None
) -> PublicBoard:
    layout = await get_active_layout(db)
    if layout is not None:
        grid = LayoutGrid.from_config(layout.grid_rows, layout.grid_cols, layout.layout_config)
        layout_id, layout_name = layout.id, layout.layout_name
    else:
        grid = LayoutGrid(settings.DEFAULT_GRID_ROWS, settings.DEFAULT_GRID_COLS)
        layout_id, layout_name = None, DEFAULT_LAYOUT_NAME

    wp_result = await db.execute(select(Workplace))
    workplaces = {wp.id: wp for wp in wp_result.scalars().all()}

    board = compose_board(
        date_str=date_str,
        mode=mode,
        grid=grid,
        layout_id=layout_id,
        layout_name=layout_name,
        workplaces=workplaces,
        rows=await build_daily_view(db, date_str),
        fallback_per_page=settings.DEFAULT_GRID_ROWS * settings.DEFAULT_GRID_COLS,
    )
    return board if page is None else board_page(board, page)
