import pytest
from httpx import AsyncClient


@pytest.mark.anyio("asyncio")
async def test_validation_rule_api_crud(api_client: AsyncClient) -> None:
    payload = {
        "rule_type": "min_employees_per_shift",
        "config": {"min_count": 2},
        "enforcement_type": "error",
        "priority": 1,
        "description": "Two people per day",
    }

    create_response = await api_client.post("/api/validation-rules/", json=payload)
    assert create_response.status_code == 201
    created = create_response.json()
    assert created["config"] == {"min_count": 2}
    assert created["enabled"] is True

    update_response = await api_client.put(
        f"/api/validation-rules/{created['id']}", json={"enabled": False, "priority": 5}
    )
    assert update_response.status_code == 200
    assert update_response.json()["enabled"] is False
    assert update_response.json()["priority"] == 5

    list_response = await api_client.get("/api/validation-rules/")
    assert [item["id"] for item in list_response.json()] == [created["id"]]

    delete_response = await api_client.delete(f"/api/validation-rules/{created['id']}")
    assert delete_response.status_code == 204
    assert (await api_client.get("/api/validation-rules/")).json() == []


@pytest.mark.anyio("asyncio")
async def test_rules_are_listed_by_priority(api_client: AsyncClient) -> None:
    for rule_type, priority in [("max_total_hours", 3), ("max_hours_per_week", 1), ("manager_requirements", 2)]:
        response = await api_client.post(
            "/api/validation-rules/", json={"rule_type": rule_type, "priority": priority}
        )
        assert response.status_code == 201

    listed = (await api_client.get("/api/validation-rules/")).json()

    assert [item["rule_type"] for item in listed] == [
        "max_hours_per_week",
        "manager_requirements",
        "max_total_hours",
    ]


@pytest.mark.anyio("asyncio")
@pytest.mark.parametrize(
    "payload",
    [
        {"rule_type": "unknown_rule"},
        {"rule_type": "employee_hours_limit", "config": {"min_hours": 200, "max_hours": 100}},
        {"rule_type": "coverage_by_time", "config": {"time_ranges": [{"start": "8", "end": "12:00"}]}},
        {"rule_type": "max_total_hours", "enforcement_type": "fatal"},
    ],
)
async def test_invalid_rules_are_rejected(api_client: AsyncClient, payload: dict) -> None:
    response = await api_client.post("/api/validation-rules/", json=payload)

    assert response.status_code == 422


@pytest.mark.anyio("asyncio")
async def test_update_validates_merged_config(api_client: AsyncClient) -> None:
    created = (
        await api_client.post(
            "/api/validation-rules/",
            json={"rule_type": "required_work_days", "config": {"days_of_week": [1, 2]}},
        )
    ).json()

    bad_config = await api_client.put(
        f"/api/validation-rules/{created['id']}", json={"config": {"days_of_week": [9]}}
    )
    assert bad_config.status_code == 422

    bad_type = await api_client.put(
        f"/api/validation-rules/{created['id']}", json={"rule_type": "employee_day_off"}
    )
    assert bad_type.status_code == 422

    missing = await api_client.put("/api/validation-rules/999", json={"priority": 1})
    assert missing.status_code == 404


@pytest.mark.anyio("asyncio")
async def test_rule_types_endpoint(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/validation-rules/types")

    assert response.status_code == 200
    types = response.json()
    assert "max_consecutive_work_days" in types
    assert "approved_day_off_requests" in types
    assert {"min_rest_between_shifts", "required_roles_per_shift", "max_shifts_per_week"} <= set(types)
    assert "max_hours_per_month" in types
    assert len(types) == 23
