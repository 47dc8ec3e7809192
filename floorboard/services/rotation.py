"""
Presentation / rotation for the public display.

``Idle -> Loaded -> (Paged)* -> Loaded``: on start the board is loaded and
page 0 shown; one timer advances the page modulo the page count, a second,
slower timer reloads the board to pick up live changes.  Both timers are
cancelled by :meth:`BoardRotator.stop`.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from floorboard.schemas.public import PublicBoard

logger = logging.getLogger(__name__)

T = TypeVar("T")

IDLE = "idle"
LOADED = "loaded"
PAGED = "paged"


def page_count(item_count: int, per_page: int) -> int:
    """ceil(items / per_page), never below 1 and never dividing by zero."""
    if item_count <= 0 or per_page <= 0:
        return 1
    return math.ceil(item_count / per_page)


def page_slice(items: Sequence[T], page: int, per_page: int) -> list[T]:
    if per_page <= 0:
        return list(items)
    page %= page_count(len(items), per_page)
    start = page * per_page
    return list(items[start:start + per_page])


class BoardRotator:
    """Drive a paged board from two concurrent timers."""

    def __init__(
        self,
        load: Callable[[], Awaitable[PublicBoard]],
        show: Callable[[PublicBoard, int], object],
        page_interval: float,
        refresh_interval: float,
    ) -> None:
        self._load = load
        self._show = show
        self.page_interval = page_interval
        self.refresh_interval = refresh_interval
        self.state = IDLE
        self.board: PublicBoard | None = None
        self.page = 0
        self.page_count = 1
        self._tasks: list[asyncio.Task] = []

    @property
    def suspended(self) -> bool:
        return self.page_count <= 1

    async def start(self) -> None:
        if self._tasks:
            return
        await self.refresh()
        self._tasks = [
            asyncio.create_task(self._every(self.page_interval, self.advance)),
            asyncio.create_task(self._every(self.refresh_interval, self._safe_refresh)),
        ]

    async def stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self.state = IDLE

    async def __aenter__(self) -> BoardRotator:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    async def refresh(self) -> None:
        self.board = await self._load()
        self.page_count = page_count(len(self.board.employees), self.board.cells_per_page)
        if self.page >= self.page_count:
            self.page = 0
        self.state = LOADED
        await self._render()

    async def advance(self) -> None:
        if self.board is None or self.suspended:
            return
        self.page = (self.page + 1) % self.page_count
        self.state = PAGED
        await self._render()

    async def _safe_refresh(self) -> None:
        try:
            await self.refresh()
        except Exception:
            logger.exception("Board refresh failed; keeping the previous board")

    async def _render(self) -> None:
        result = self._show(self.board, self.page)
        if inspect.isawaitable(result):
            await result

    @staticmethod
    async def _every(interval: float, action: Callable[[], Awaitable[None]]) -> None:
        while True:
            await asyncio.sleep(interval)
            await action()
