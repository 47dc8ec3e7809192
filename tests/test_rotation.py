"""Unit tests for paging and the board rotator."""

import asyncio

import pytest

from floorboard.schemas.public import BoardEmployee, PublicBoard
from floorboard.services.rotation import (IDLE, LOADED, PAGED, BoardRotator,
                                          page_count, page_slice)


def _board(employee_count: int, per_page: int) -> PublicBoard:
    return PublicBoard(
        date="2024-06-01",
        mode="workplace_grid",
        layout_id=None,
        layout_name="Default",
        grid_rows=1,
        grid_cols=1,
        cells=[],
        employees=[
            BoardEmployee(employee_id=i, employee_number=str(i), name=f"E{i}", shift_type="early")
            for i in range(employee_count)
        ],
        page_count=page_count(employee_count, per_page),
        cells_per_page=per_page,
        page_interval_seconds=10,
        refresh_interval_seconds=30,
    )


@pytest.mark.parametrize(
    "items, per_page, expected",
    [(0, 5, 1), (5, 5, 1), (6, 5, 2), (11, 5, 3), (3, 0, 1)],
)
def test_page_count(items, per_page, expected):
    assert page_count(items, per_page) == expected


def test_page_slice_wraps():
    items = list(range(7))
    assert page_slice(items, 0, 3) == [0, 1, 2]
    assert page_slice(items, 2, 3) == [6]
    assert page_slice(items, 3, 3) == [0, 1, 2]
    assert page_slice(items, 0, 0) == items


class _Recorder:
    def __init__(self, boards):
        self.boards = list(boards)
        self.shown: list[int] = []

    async def load(self) -> PublicBoard:
        return self.boards.pop(0) if len(self.boards) > 1 else self.boards[0]

    def show(self, _board: PublicBoard, page: int) -> None:
        self.shown.append(page)


@pytest.mark.asyncio
async def test_advance_cycles_pages():
    rec = _Recorder([_board(7, 3)])
    rotator = BoardRotator(rec.load, rec.show, page_interval=60, refresh_interval=60)
    await rotator.refresh()
    assert rotator.state == LOADED
    assert rotator.page_count == 3

    for _ in range(3):
        await rotator.advance()
    assert rotator.state == PAGED
    assert rec.shown == [0, 1, 2, 0]


@pytest.mark.asyncio
async def test_single_page_suspends_paging():
    rec = _Recorder([_board(2, 5)])
    rotator = BoardRotator(rec.load, rec.show, page_interval=60, refresh_interval=60)
    await rotator.refresh()
    assert rotator.suspended
    await rotator.advance()
    assert rotator.page == 0
    assert rec.shown == [0]


@pytest.mark.asyncio
async def test_refresh_clamps_page_when_board_shrinks():
    rec = _Recorder([_board(9, 3), _board(2, 3)])
    rotator = BoardRotator(rec.load, rec.show, page_interval=60, refresh_interval=60)
    await rotator.refresh()
    await rotator.advance()
    await rotator.advance()
    assert rotator.page == 2

    await rotator.refresh()
    assert rotator.page_count == 1
    assert rotator.page == 0


@pytest.mark.asyncio
async def test_timers_run_and_stop_cancels_them():
    rec = _Recorder([_board(4, 1)])
    rotator = BoardRotator(rec.load, rec.show, page_interval=0.01, refresh_interval=0.05)
    async with rotator:
        await asyncio.sleep(0.06)
        assert len(rec.shown) > 2
        tasks = list(rotator._tasks)
    assert rotator.state == IDLE
    assert all(task.done() for task in tasks)

    seen = len(rec.shown)
    await asyncio.sleep(0.03)
    assert len(rec.shown) == seen


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_board():
    board = _board(4, 2)
    calls = 0

    async def load():
        nonlocal calls
        calls += 1
        if calls > 1:
            raise RuntimeError("server down")
        return board

    rotator = BoardRotator(load, lambda *_: None, page_interval=60, refresh_interval=60)
    await rotator.refresh()
    await rotator._safe_refresh()
    assert rotator.board is board
