"""Unit tests for board composition helpers."""

import pytest

from floorboard.models.workplace import Workplace
from floorboard.schemas.attendance import DailyViewRow
from floorboard.services.board import board_page, compose_board, text_color_for
from floorboard.services.layout_grid import Cell, LayoutGrid


@pytest.mark.parametrize(
    "background, expected",
    [
        ("#FFFFFF", "#000000"),
        ("#000000", "#FFFFFF"),
        ("#DC2626", "#FFFFFF"),
        ("#FACC15", "#000000"),
        (None, "#000000"),
        ("#zzzzzz", "#000000"),
    ],
)
def test_text_color_for(background, expected):
    assert text_color_for(background) == expected


def _row(employee_id: int, workplace_id=None, status="present") -> DailyViewRow:
    return DailyViewRow(
        employee_id=employee_id,
        employee_number=f"{employee_id:03d}",
        name=f"E{employee_id}",
        shift_type="early",
        attendance_status=status,
        workplace_id=workplace_id,
    )


def _compose(mode: str, rows: list[DailyViewRow]):
    grid = LayoutGrid(2, 2, [Cell(0, 0, workplace_id=1), Cell(1, 0, colspan=2)])
    return compose_board(
        date_str="2024-06-01",
        mode=mode,
        grid=grid,
        layout_id=1,
        layout_name="Floor",
        workplaces={1: Workplace(id=1, number=1, name="Press", color="#000000", can_assign=True)},
        rows=rows,
        fallback_per_page=24,
    )


def test_compose_places_present_employees_in_cells():
    board = _compose("employee_tiles", [_row(1, 1), _row(2, 1, "absent"), _row(3)])
    assert board.cells_per_page == 1
    assert board.page_count == 3
    press = board.cells[0]
    assert press.workplace_name == "Press"
    assert press.text_color == "#FFFFFF"
    assert [e.employee_id for e in press.employees] == [1]
    assert [e.is_absent for e in board.employees] == [False, True, False]


def test_unbound_cell_keeps_its_span():
    board = _compose("workplace_grid", [])
    by_pos = {(c.row, c.col): c for c in board.cells}
    assert by_pos[(1, 0)].colspan == 2
    assert by_pos[(1, 0)].workplace_id is None
    assert by_pos[(1, 1)].kind == "covered"


def test_board_page_filters_cell_employees():
    board = _compose("workplace_grid", [_row(1, 1), _row(2, 1)])
    second = board_page(board, 1)
    assert [e.employee_id for e in second.employees] == [2]
    assert [e.employee_id for e in second.cells[0].employees] == [2]
    assert board.cells[0].employees[0].employee_id == 1
