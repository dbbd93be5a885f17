import pytest
from httpx import AsyncClient

from .factories import build_day_off_create, build_employee_create, build_preference_create, build_shift_create


async def _seed_month(api_client: AsyncClient) -> None:
    await api_client.post("/api/shifts/", json=build_day_off_create().model_dump())
    await api_client.post("/api/shifts/", json=build_shift_create().model_dump())
    for index in range(1, 4):
        response = await api_client.post(
            "/api/employees/",
            json=build_employee_create(id=f"emp-{index}", name=f"Employee {index}").model_dump(),
        )
        assert response.status_code == 201
    response = await api_client.post(
        "/api/validation-rules/",
        json={
            "rule_type": "min_employees_per_shift",
            "config": {"min_employees": 1, "shift_ids": ["early"]},
            "enforcement_type": "error",
            "priority": 1,
        },
    )
    assert response.status_code == 201
    await api_client.post("/api/validation-rules/", json={"rule_type": "approved_day_off_requests", "priority": 0})


@pytest.mark.anyio("asyncio")
async def test_preference_api_flow(api_client: AsyncClient) -> None:
    await _seed_month(api_client)

    create_response = await api_client.post(
        "/api/preferences/", json=build_preference_create(employee_id="emp-1").model_dump(mode="json")
    )
    assert create_response.status_code == 201
    preference = create_response.json()
    assert preference["status"] == "pending"

    approve = await api_client.put(f"/api/preferences/{preference['id']}/status", json={"status": "approved"})
    assert approve.status_code == 200
    assert approve.json()["status"] == "approved"

    approved = await api_client.get("/api/preferences/", params={"status": "approved"})
    assert [item["id"] for item in approved.json()] == [preference["id"]]
    pending = await api_client.get("/api/preferences/", params={"status": "pending"})
    assert pending.json() == []

    unknown = await api_client.post(
        "/api/preferences/", json=build_preference_create(employee_id="nobody").model_dump(mode="json")
    )
    assert unknown.status_code == 404


@pytest.mark.anyio("asyncio")
async def test_generate_persist_and_validate_month(api_client: AsyncClient) -> None:
    await _seed_month(api_client)
    preference = (
        await api_client.post(
            "/api/preferences/", json=build_preference_create(employee_id="emp-1").model_dump(mode="json")
        )
    ).json()
    await api_client.put(f"/api/preferences/{preference['id']}/status", json={"status": "approved"})

    response = await api_client.post("/api/auto-schedule/generate", json={"month": 1, "year": 2025})

    assert response.status_code == 200
    generated = response.json()
    assert generated["month"] == 1
    assert len(generated["entries"]) == 3 * 28
    by_key = {(item["employee_id"], item["day"]): item["shift_id"] for item in generated["entries"]}
    assert by_key[("emp-1", 3)] == "day-off"
    assert not [item for item in generated["violations"] if item["severity"] == "error"]

    stored = await api_client.get("/api/schedule", params={"month": 1, "year": 2025})
    assert stored.status_code == 200
    assert len(stored.json()) == 3 * 28

    regenerated = await api_client.post("/api/auto-schedule/generate", json={"month": 1, "year": 2025})
    assert regenerated.status_code == 200
    assert len((await api_client.get("/api/schedule", params={"month": 1, "year": 2025})).json()) == 3 * 28

    validation = await api_client.get("/api/schedule/validate", params={"month": 1, "year": 2025})
    assert validation.status_code == 200
    report = validation.json()
    assert report["is_valid"] is True
    assert report["metrics"]["errors"] == 0
    assert report["metrics"]["total_shifts"] > 0
    assert [status["status"] for status in report["rule_statuses"]] == ["ok", "ok"]


@pytest.mark.anyio("asyncio")
async def test_validate_empty_month_reports_staffing_errors(api_client: AsyncClient) -> None:
    await _seed_month(api_client)

    response = await api_client.get("/api/schedule/validate", params={"month": 1, "year": 2025})

    report = response.json()
    assert report["is_valid"] is False
    assert report["metrics"]["errors"] == 28
    assert report["rule_statuses"][1]["status"] == "error"


@pytest.mark.anyio("asyncio")
async def test_generate_without_day_off_shift_fails(api_client: AsyncClient) -> None:
    await api_client.post("/api/shifts/", json=build_shift_create().model_dump())
    await api_client.post("/api/employees/", json=build_employee_create().model_dump())

    response = await api_client.post("/api/auto-schedule/generate", json={"month": 1, "year": 2025})

    assert response.status_code == 400
    assert "day-off" in response.json()["detail"]
    assert (await api_client.get("/api/schedule", params={"month": 1, "year": 2025})).json() == []


@pytest.mark.anyio("asyncio")
async def test_month_is_zero_based(api_client: AsyncClient) -> None:
    response = await api_client.post("/api/auto-schedule/generate", json={"month": 12, "year": 2025})
    assert response.status_code == 422

    response = await api_client.get("/api/schedule", params={"month": -1, "year": 2025})
    assert response.status_code == 422
