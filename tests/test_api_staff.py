import pytest
from httpx import AsyncClient

from .factories import build_day_off_create, build_employee_create, build_role_create, build_shift_create


@pytest.mark.anyio("asyncio")
async def test_shift_api_crud(api_client: AsyncClient) -> None:
    payload = build_shift_create().model_dump()

    create_response = await api_client.post("/api/shifts/", json=payload)
    assert create_response.status_code == 201
    assert create_response.json()["id"] == payload["id"]

    duplicate = await api_client.post("/api/shifts/", json=payload)
    assert duplicate.status_code == 409

    update_response = await api_client.put(
        f"/api/shifts/{payload['id']}", json={"name": "Updated shift", "hours": 8.5}
    )
    assert update_response.status_code == 200
    updated = update_response.json()
    assert updated["name"] == "Updated shift"
    assert updated["hours"] == 8.5

    delete_response = await api_client.delete(f"/api/shifts/{payload['id']}")
    assert delete_response.status_code == 204

    list_after_delete = await api_client.get("/api/shifts/")
    assert list_after_delete.status_code == 200
    assert list_after_delete.json() == []


@pytest.mark.anyio("asyncio")
async def test_day_off_shift_cannot_be_deleted(api_client: AsyncClient) -> None:
    await api_client.post("/api/shifts/", json=build_day_off_create().model_dump())

    response = await api_client.delete("/api/shifts/day-off")

    assert response.status_code == 409
    assert len((await api_client.get("/api/shifts/")).json()) == 1


@pytest.mark.anyio("asyncio")
async def test_shift_times_are_validated(api_client: AsyncClient) -> None:
    payload = {**build_shift_create().model_dump(), "start_time": "6am"}

    response = await api_client.post("/api/shifts/", json=payload)

    assert response.status_code == 422


@pytest.mark.anyio("asyncio")
async def test_employee_api_crud_with_role(api_client: AsyncClient) -> None:
    role_response = await api_client.post(
        "/api/roles/", json=build_role_create(name="Manager", permissions={"manage_schedule": True}).model_dump()
    )
    assert role_response.status_code == 201
    role_id = role_response.json()["id"]

    create_response = await api_client.post(
        "/api/employees/", json=build_employee_create(id="emp-7", role_id=role_id).model_dump()
    )
    assert create_response.status_code == 201
    assert create_response.json()["role_id"] == role_id

    duplicate = await api_client.post("/api/employees/", json=build_employee_create(id="emp-7").model_dump())
    assert duplicate.status_code == 409

    update_response = await api_client.put("/api/employees/emp-7", json={"exclude_from_hours": True})
    assert update_response.status_code == 200
    assert update_response.json()["exclude_from_hours"] is True

    listed = await api_client.get("/api/employees/")
    assert [item["id"] for item in listed.json()] == ["emp-7"]

    delete_response = await api_client.delete("/api/employees/emp-7")
    assert delete_response.status_code == 204
    assert (await api_client.get("/api/employees/")).json() == []


@pytest.mark.anyio("asyncio")
async def test_employee_with_unknown_role_is_rejected(api_client: AsyncClient) -> None:
    response = await api_client.post("/api/employees/", json=build_employee_create(role_id=999).model_dump())

    assert response.status_code == 404
    assert response.json()["detail"] == "Role not found"


@pytest.mark.anyio("asyncio")
async def test_health_endpoint(api_client: AsyncClient) -> None:
    response = await api_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
