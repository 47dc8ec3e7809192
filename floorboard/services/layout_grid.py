"""
Grid layout model - rectangular, non-overlapping cells on a rows x cols grid.

A cell is anchored at its top-left ``(row, col)`` and extends ``rowspan``
rows down and ``colspan`` columns right.  Every grid position resolves to
exactly one of:

* ``anchor``  - the top-left corner of a cell; render the cell spanning its extent
* ``covered`` - inside some cell but not its anchor; render nothing
* ``empty``   - no cell; render a placeholder
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from floorboard.core.exceptions import CellOutOfBounds, LayoutConflict, LayoutError

ANCHOR = "anchor"
COVERED = "covered"
EMPTY = "empty"


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    rowspan: int = 1
    colspan: int = 1
    workplace_id: int | None = None

    @property
    def last_row(self) -> int:
        return self.row + self.rowspan - 1

    @property
    def last_col(self) -> int:
        return self.col + self.colspan - 1

    def covers(self, row: int, col: int) -> bool:
        return self.row <= row <= self.last_row and self.col <= col <= self.last_col

    def overlaps(self, other: Cell) -> bool:
        """Two rectangles intersect when their row AND column ranges overlap."""
        rows_overlap = self.row <= other.last_row and other.row <= self.last_row
        cols_overlap = self.col <= other.last_col and other.col <= self.last_col
        return rows_overlap and cols_overlap

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "col": self.col,
            "rowspan": self.rowspan,
            "colspan": self.colspan,
            "workplace_id": self.workplace_id,
        }


@dataclass(frozen=True)
class Resolution:
    row: int
    col: int
    kind: str  # anchor | covered | empty
    cell: Cell | None = None


@dataclass
class LayoutGrid:
    rows: int
    cols: int
    cells: list[Cell] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not _is_positive_int(self.rows) or not _is_positive_int(self.cols):
            raise LayoutError("Grid rows and cols must be positive integers")
        pending, self.cells = list(self.cells), []
        for cell in pending:
            self.add(cell)

    # ── Construction ────────────────────────────────────────────────
    @classmethod
    def from_config(cls, rows: int, cols: int, config: dict | None) -> LayoutGrid:
        """Rebuild a grid from a persisted ``{"cells": [...]}`` blob, re-validating every cell."""
        raw_cells = (config or {}).get("cells") or []
        return cls(rows, cols, [_cell_from_dict(c) for c in raw_cells])

    def to_config(self) -> dict:
        return {"cells": [cell.to_dict() for cell in self.cells]}

    # ── Editing ─────────────────────────────────────────────────────
    def propose(
        self,
        row: int,
        col: int,
        rowspan: int = 1,
        colspan: int = 1,
        workplace_id: int | None = None,
    ) -> Cell:
        """Validate and append a cell; the cell set is untouched on failure."""
        return self.add(Cell(row, col, rowspan, colspan, workplace_id))

    def propose_selection(
        self,
        start: tuple[int, int],
        end: tuple[int, int],
        workplace_id: int | None = None,
    ) -> Cell:
        """Propose the rectangle spanned by two opposite corners, given in any order."""
        top, bottom = sorted((start[0], end[0]))
        left, right = sorted((start[1], end[1]))
        return self.propose(top, left, bottom - top + 1, right - left + 1, workplace_id)

    def add(self, cell: Cell) -> Cell:
        self._check_bounds(cell)
        clash = next((existing for existing in self.cells if existing.overlaps(cell)), None)
        if clash is not None:
            raise LayoutConflict(
                f"Cell at ({cell.row}, {cell.col}) overlaps the cell "
                f"anchored at ({clash.row}, {clash.col})"
            )
        self.cells.append(cell)
        return cell

    def clear(self, row: int, col: int) -> Cell | None:
        """Remove the cell covering ``(row, col)``, whether or not it is the anchor."""
        cell = self.cell_at(row, col)
        if cell is not None:
            self.cells.remove(cell)
        return cell

    # ── Queries ─────────────────────────────────────────────────────
    def cell_at(self, row: int, col: int) -> Cell | None:
        return next((cell for cell in self.cells if cell.covers(row, col)), None)

    def resolve(self, row: int, col: int) -> Resolution:
        cell = self.cell_at(row, col)
        if cell is None:
            return Resolution(row, col, EMPTY)
        if (cell.row, cell.col) == (row, col):
            return Resolution(row, col, ANCHOR, cell)
        return Resolution(row, col, COVERED, cell)

    def positions(self) -> Iterator[Resolution]:
        """Every grid position in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield self.resolve(row, col)

    def workplace_cells(self) -> list[Cell]:
        """Cells bound to a workplace, in row-major anchor order."""
        return sorted(
            (cell for cell in self.cells if cell.workplace_id is not None),
            key=lambda c: (c.row, c.col),
        )

    def _check_bounds(self, cell: Cell) -> None:
        if not all(_is_positive_int(v) for v in (cell.rowspan, cell.colspan)):
            raise CellOutOfBounds("rowspan and colspan must be at least 1")
        if cell.row < 0 or cell.col < 0 or cell.last_row >= self.rows or cell.last_col >= self.cols:
            raise CellOutOfBounds(
                f"Cell at ({cell.row}, {cell.col}) spanning {cell.rowspan}x{cell.colspan} "
                f"does not fit a {self.rows}x{self.cols} grid"
            )


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _cell_from_dict(raw: dict) -> Cell:
    """Build a cell from its persisted form; values must already be integers."""
    if not isinstance(raw, dict) or "row" not in raw or "col" not in raw:
        raise LayoutError(f"Malformed layout cell: {raw!r}")
    row, col = raw["row"], raw["col"]
    rowspan, colspan = raw.get("rowspan", 1), raw.get("colspan", 1)
    workplace_id = raw.get("workplace_id")
    if not (_is_index(row) and _is_index(col)):
        raise LayoutError(f"Cell row and col must be non-negative integers: {raw!r}")
    if not (_is_positive_int(rowspan) and _is_positive_int(colspan)):
        raise LayoutError(f"Cell rowspan and colspan must be positive integers: {raw!r}")
    if workplace_id is not None and not _is_positive_int(workplace_id):
        raise LayoutError(f"Cell workplace_id must be a positive integer: {raw!r}")
    return Cell(row, col, rowspan, colspan, workplace_id)
