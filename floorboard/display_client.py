"""
Terminal display client - rotates the public board of a running server.

    python -m floorboard.display_client --base-url http://127.0.0.1:8000

Fetches ``/public/board`` once per refresh interval and pages through the
employees locally, printing each page as a text grid.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

import httpx

from floorboard.core.config import DISPLAY_MODES, settings
from floorboard.schemas.public import BoardCell, PublicBoard
from floorboard.services.board import board_page
from floorboard.services.daily_view import EMPLOYEE_TILES
from floorboard.services.layout_grid import ANCHOR, COVERED
from floorboard.services.rotation import BoardRotator

logger = logging.getLogger(__name__)

CELL_WIDTH = 24


def _cell_lines(cell: BoardCell) -> list[str]:
    if cell.kind == COVERED:
        return ["  ^"]
    if cell.kind != ANCHOR:
        return [""]
    lines = [f"[{cell.workplace_name}]"]
    lines += [
        f"  {e.employee_number} {e.name}" + (" (absent)" if e.is_absent else "")
        for e in cell.employees
    ]
    return lines


def render_page(board: PublicBoard, page: int) -> str:
    """A page of the board as plain text, one block per grid row."""
    view = board_page(board, page)
    by_pos = {(c.row, c.col): c for c in view.cells}
    out = [
        f"{view.layout_name} | {view.date} | page {view.page + 1}/{view.page_count}",
        "=" * (CELL_WIDTH * view.grid_cols),
    ]
    for row in range(view.grid_rows):
        columns = [
            _cell_lines(by_pos[(row, col)]) if (row, col) in by_pos else [""]
            for col in range(view.grid_cols)
        ]
        height = max(len(lines) for lines in columns)
        for i in range(height):
            out.append(
                "".join(
                    (lines[i] if i < len(lines) else "")[:CELL_WIDTH - 1].ljust(CELL_WIDTH)
                    for lines in columns
                ).rstrip()
            )
    if view.mode == EMPLOYEE_TILES:
        # absent employees are left out of workplace cells, so they are listed here
        tiles = [e for e in view.employees if e.workplace_id is None or e.is_absent]
        if tiles:
            out.append("-" * (CELL_WIDTH * view.grid_cols))
            out += [
                f"{e.employee_number} {e.name}" + (" (absent)" if e.is_absent else "")
                for e in tiles
            ]
    return "\n".join(out)


async def run(base_url: str, mode: str | None, date: str | None) -> None:
    params = {k: v for k, v in (("mode", mode), ("date", date)) if v}
    url = f"{base_url.rstrip('/')}{settings.API_V1_PREFIX}/public/board"

    async with httpx.AsyncClient(timeout=10.0) as client:

        async def load() -> PublicBoard:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
            return PublicBoard.model_validate(resp.json())

        def show(board: PublicBoard, page: int) -> None:
            print("\033[2J\033[H" + render_page(board, page), flush=True)

        first = await load()
        rotator = BoardRotator(
            load,
            show,
            page_interval=first.page_interval_seconds,
            refresh_interval=first.refresh_interval_seconds,
        )
        async with rotator:
            await asyncio.Event().wait()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Rotate the public floor board in a terminal.")
    parser.add_argument("--base-url", default="http://127.0.0.1:8000")
    parser.add_argument("--mode", choices=DISPLAY_MODES)
    parser.add_argument("--date", help="YYYY-MM-DD (default: today on the server)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    try:
        asyncio.run(run(args.base_url, args.mode, args.date))
    except KeyboardInterrupt:
        print("Display stopped.")
    except httpx.HTTPError as e:
        logger.error("Display client failed: %s", e)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
