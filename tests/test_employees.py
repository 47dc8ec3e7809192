"""Tests for employee CRUD endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from floorboard.models.employee import Attendance
from floorboard.models.workplace import Assignment


@pytest.mark.asyncio
async def test_create_employee(async_client: AsyncClient):
    """POST /employees should create a new employee with default statuses."""
    resp = await async_client.post("/api/v1/employees", json={
        "employee_number": "1001",
        "name": "Alice Ito",
        "position": "Line lead",
    })
    assert resp.status_code == 201
    data = resp.json()
    assert data["employee_number"] == "1001"
    assert data["name"] == "Alice Ito"
    assert data["employment_status"] == "active"
    assert data["display_status"] == "shown"
    assert data["id"] is not None


@pytest.mark.asyncio
async def test_numeric_employee_number_is_accepted_as_text(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/employees", json={"employee_number": 42, "name": "Num"})
    assert resp.status_code == 201
    assert resp.json()["employee_number"] == "42"


@pytest.mark.asyncio
async def test_create_duplicate_number_rejected(async_client: AsyncClient, make_employee):
    """Two employees cannot share an employee number."""
    await make_employee("DUP-1")
    resp = await async_client.post("/api/v1/employees", json={"employee_number": "DUP-1", "name": "Other"})
    assert resp.status_code == 400
    body = resp.json()
    assert "already in use" in body["detail"]
    assert body["success"] is False


@pytest.mark.asyncio
async def test_create_missing_name_is_400(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/employees", json={"employee_number": "X1"})
    assert resp.status_code == 400
    assert resp.json()["error"]


@pytest.mark.asyncio
async def test_blank_name_rejected(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/employees", json={"employee_number": "X2", "name": "   "})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_invalid_status_rejected(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/employees", json={
        "employee_number": "X3", "name": "Bad", "display_status": "sometimes",
    })
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_list_employees_sorted_by_number(async_client: AsyncClient, make_employee):
    await make_employee("0003")
    await make_employee("0001")
    await make_employee("0002")
    resp = await async_client.get("/api/v1/employees")
    assert resp.status_code == 200
    assert [e["employee_number"] for e in resp.json()] == ["0001", "0002", "0003"]


@pytest.mark.asyncio
async def test_get_employee_not_found(async_client: AsyncClient):
    """Requesting a non-existent employee should return 404."""
    resp = await async_client.get("/api/v1/employees/9999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Employee not found"


@pytest.mark.asyncio
async def test_update_employee(async_client: AsyncClient, make_employee):
    """PUT /employees/{id} should update the given fields only."""
    emp = await make_employee("UPD-1", "Old Name", position="Welder")
    resp = await async_client.put(f"/api/v1/employees/{emp['id']}", json={
        "name": "New Name",
        "display_status": "hidden",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "New Name"
    assert data["display_status"] == "hidden"
    assert data["position"] == "Welder"
    assert data["employee_number"] == "UPD-1"


@pytest.mark.asyncio
async def test_update_can_clear_position(async_client: AsyncClient, make_employee):
    emp = await make_employee("UPD-2", position="Welder")
    resp = await async_client.put(f"/api/v1/employees/{emp['id']}", json={"position": None})
    assert resp.status_code == 200
    assert resp.json()["position"] is None


@pytest.mark.asyncio
async def test_update_to_taken_number_rejected(async_client: AsyncClient, make_employee):
    await make_employee("A-1")
    emp = await make_employee("A-2")
    resp = await async_client.put(f"/api/v1/employees/{emp['id']}", json={"employee_number": "A-1"})
    assert resp.status_code == 400
    assert "already in use" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_delete_employee_removes_daily_rows(
    async_client: AsyncClient, db_session: AsyncSession, make_employee, make_workplace
):
    """Deleting an employee also deletes their attendance and assignments."""
    emp = await make_employee("DEL-1")
    wp = await make_workplace(1)
    await async_client.post("/api/v1/attendance", json={
        "employee_id": emp["id"], "date": "2024-06-01",
        "attendance_status": "present", "shift_type": "late",
    })
    await async_client.post("/api/v1/assignment", json={
        "employee_id": emp["id"], "workplace_id": wp["id"], "date": "2024-06-01",
    })

    resp = await async_client.delete(f"/api/v1/employees/{emp['id']}")
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    assert (await async_client.get(f"/api/v1/employees/{emp['id']}")).status_code == 404
    att = await db_session.execute(select(Attendance).where(Attendance.employee_id == emp["id"]))
    asn = await db_session.execute(select(Assignment).where(Assignment.employee_id == emp["id"]))
    assert att.scalars().all() == []
    assert asn.scalars().all() == []


@pytest.mark.asyncio
async def test_import_reports_failures_without_undoing_successes(
    async_client: AsyncClient, make_employee
):
    """Rows are written one by one; duplicates are reported and earlier rows stay."""
    await make_employee("E002", "Existing")
    resp = await async_client.post("/api/v1/employees/import", json=[
        {"employee_number": "E001", "name": "Tanaka", "position": "Press"},
        {"employee_number": "E002", "name": "Clash"},
        {"employee_number": "E003", "name": "Suzuki", "position": None},
        {"employee_number": "E001", "name": "Repeat in file"},
    ])
    assert resp.status_code == 200
    data = resp.json()
    assert [e["employee_number"] for e in data["created"]] == ["E001", "E003"]
    assert data["created"][0]["position"] == "Press"
    assert [(f["index"], f["employee_number"]) for f in data["failed"]] == [(1, "E002"), (3, "E001")]
    assert all("already in use" in f["error"] for f in data["failed"])

    listing = (await async_client.get("/api/v1/employees")).json()
    assert [e["name"] for e in listing] == ["Tanaka", "Existing", "Suzuki"]


@pytest.mark.asyncio
async def test_import_rejects_malformed_rows(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/employees/import", json=[{"employee_number": "E1"}])
    assert resp.status_code == 400
