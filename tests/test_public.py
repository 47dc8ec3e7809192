"""Tests for the public display endpoints."""

import pytest
from httpx import AsyncClient

DAY = "2024-06-01"


async def _layout(client: AsyncClient, rows: int, cols: int, cells: list[dict]) -> dict:
    resp = await client.post("/api/v1/display-layouts", json={
        "layout_name": "Floor", "grid_rows": rows, "grid_cols": cols,
        "layout_config": {"cells": cells},
    })
    layout = resp.json()
    await client.post(f"/api/v1/display-layouts/{layout['id']}/activate")
    return layout


async def _absent(client: AsyncClient, employee_id: int) -> None:
    await client.post("/api/v1/attendance", json={
        "employee_id": employee_id, "date": DAY, "attendance_status": "absent",
    })


@pytest.mark.asyncio
async def test_workplace_grid_omits_absent(async_client: AsyncClient, make_employee):
    here = await make_employee("1")
    gone = await make_employee("2")
    await _absent(async_client, gone["id"])

    resp = await async_client.get(f"/api/v1/public?date={DAY}&mode=workplace_grid")
    assert resp.status_code == 200
    assert [r["employee_id"] for r in resp.json()] == [here["id"]]


@pytest.mark.asyncio
async def test_employee_tiles_keeps_absent(async_client: AsyncClient, make_employee):
    await make_employee("1")
    gone = await make_employee("2")
    await _absent(async_client, gone["id"])

    resp = await async_client.get(f"/api/v1/public/board?date={DAY}&mode=employee_tiles")
    employees = {e["employee_id"]: e for e in resp.json()["employees"]}
    assert len(employees) == 2
    assert employees[gone["id"]]["is_absent"] is True


@pytest.mark.asyncio
async def test_unknown_mode_is_400(async_client: AsyncClient):
    resp = await async_client.get(f"/api/v1/public/board?date={DAY}&mode=carousel")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_public_needs_no_session(async_client: AsyncClient, real_auth):
    assert (await async_client.get(f"/api/v1/public?date={DAY}")).status_code == 200
    assert (await async_client.get(f"/api/v1/public/board?date={DAY}")).status_code == 200
    assert (await async_client.get("/api/v1/display-layouts?active=true")).status_code == 200


@pytest.mark.asyncio
async def test_default_date_is_today(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/public/board")
    assert resp.status_code == 200
    assert len(resp.json()["date"]) == 10


@pytest.mark.asyncio
async def test_board_resolves_spanning_cells(
    async_client: AsyncClient, make_employee, make_workplace
):
    wp = await make_workplace(1, "Press", color="#FFFF00")
    emp = await make_employee("1")
    await async_client.post("/api/v1/assignment", json={
        "employee_id": emp["id"], "workplace_id": wp["id"], "date": DAY,
    })
    layout = await _layout(async_client, 3, 2, [
        {"row": 0, "col": 0, "rowspan": 2, "workplace_id": wp["id"]},
    ])

    board = (await async_client.get(f"/api/v1/public/board?date={DAY}")).json()
    assert board["layout_id"] == layout["id"]
    cells = {(c["row"], c["col"]): c for c in board["cells"]}
    assert len(cells) == 6

    anchor = cells[(0, 0)]
    assert anchor["kind"] == "anchor"
    assert anchor["rowspan"] == 2
    assert anchor["workplace_name"] == "Press"
    assert anchor["color"] == "#FFFF00"
    assert anchor["text_color"] == "#000000"
    assert [e["employee_id"] for e in anchor["employees"]] == [emp["id"]]

    assert cells[(1, 0)]["kind"] == "covered"
    assert cells[(2, 0)]["kind"] == "empty"
    assert cells[(0, 1)]["kind"] == "empty"


@pytest.mark.asyncio
async def test_uncolored_workplace_gets_fallback_color(async_client: AsyncClient, make_workplace):
    wp = await make_workplace(1)
    await _layout(async_client, 1, 1, [{"row": 0, "col": 0, "workplace_id": wp["id"]}])
    board = (await async_client.get(f"/api/v1/public/board?date={DAY}")).json()
    assert board["cells"][0]["color"] == "#DC2626"
    assert board["cells"][0]["text_color"] == "#FFFFFF"


@pytest.mark.asyncio
async def test_cell_of_deleted_workplace_renders_empty(async_client: AsyncClient, make_workplace):
    wp = await make_workplace(1)
    await _layout(async_client, 1, 1, [{"row": 0, "col": 0, "workplace_id": wp["id"]}])
    await async_client.delete(f"/api/v1/workplaces/{wp['id']}")

    cell = (await async_client.get(f"/api/v1/public/board?date={DAY}")).json()["cells"][0]
    assert cell["workplace_id"] is None
    assert cell["employees"] == []


@pytest.mark.asyncio
async def test_no_active_layout_uses_default_grid(async_client: AsyncClient):
    board = (await async_client.get(f"/api/v1/public/board?date={DAY}")).json()
    assert board["layout_id"] is None
    assert (board["grid_rows"], board["grid_cols"]) == (12, 2)
    assert all(c["kind"] == "empty" for c in board["cells"])
    assert board["employees"] == []
    assert board["page_count"] == 1


@pytest.mark.asyncio
async def test_paging_by_workplace_cells(
    async_client: AsyncClient, make_employee, make_workplace
):
    w1 = await make_workplace(1)
    w2 = await make_workplace(2)
    await _layout(async_client, 1, 2, [
        {"row": 0, "col": 0, "workplace_id": w1["id"]},
        {"row": 0, "col": 1, "workplace_id": w2["id"]},
    ])
    for n in range(5):
        await make_employee(f"{n:03d}")

    full = (await async_client.get(f"/api/v1/public/board?date={DAY}")).json()
    assert full["cells_per_page"] == 2
    assert full["page_count"] == 3
    assert full["page"] is None
    assert len(full["employees"]) == 5

    last = (await async_client.get(f"/api/v1/public/board?date={DAY}&page=2")).json()
    assert last["page"] == 2
    assert [e["employee_number"] for e in last["employees"]] == ["004"]

    wrapped = (await async_client.get(f"/api/v1/public/board?date={DAY}&page=3")).json()
    assert wrapped["page"] == 0
    assert [e["employee_number"] for e in wrapped["employees"]] == ["000", "001"]
