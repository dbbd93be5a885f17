import logging
from collections import Counter
from datetime import date

import pytest

from work_scheduler.services.domain import DAY_OFF_SHIFT_ID, ApprovedDayOff
from work_scheduler.services.rules import load_default_rules
from work_scheduler.services.scheduler import MissingDayOffShiftError, generate_schedule
from work_scheduler.services.validator import validate_schedule

from .factories import day_off_shift, make_employee, make_rule, make_shift

SHIFTS = [day_off_shift(), make_shift("S1"), make_shift("S2")]


def test_missing_day_off_shift_is_rejected() -> None:
    with pytest.raises(MissingDayOffShiftError):
        generate_schedule(1, 2025, [make_employee("e1")], [make_shift("S1")], [])

    zero_hours_elsewhere = [make_shift("off", hours=0), make_shift("S1")]
    with pytest.raises(MissingDayOffShiftError):
        generate_schedule(1, 2025, [make_employee("e1")], zero_hours_elsewhere, [])


def test_every_employee_gets_exactly_one_entry_per_day() -> None:
    employees = [make_employee(f"e{i}") for i in range(1, 5)]

    result = generate_schedule(1, 2025, employees, SHIFTS, load_default_rules())

    assert len(result.entries) == 4 * 28
    keys = Counter((item.employee_id, item.day) for item in result.entries)
    assert set(keys.values()) == {1}
    assert {item.day for item in result.entries} == set(range(1, 29))
    assert all(item.month == 1 and item.year == 2025 for item in result.entries)


def test_approved_day_offs_are_honoured() -> None:
    employees = [make_employee("e1"), make_employee("e2"), make_employee("e3")]
    requests = [
        ApprovedDayOff(employee_id="e1", date=date(2025, 2, 3)),
        ApprovedDayOff(employee_id="e1", date=date(2025, 2, 10)),
        ApprovedDayOff(employee_id="e2", date=date(2025, 3, 1)),
        ApprovedDayOff(employee_id="ghost", date=date(2025, 2, 3)),
    ]

    result = generate_schedule(1, 2025, employees, SHIFTS, load_default_rules(), requests)

    by_key = {(item.employee_id, item.day): item.shift_id for item in result.entries}
    assert by_key[("e1", 3)] == DAY_OFF_SHIFT_ID
    assert by_key[("e1", 10)] == DAY_OFF_SHIFT_ID
    assert all(item.employee_id != "ghost" for item in result.entries)
    assert len(result.entries) == 3 * 28
    assert not any(v.type == "approved_day_off_requests" for v in result.violations)


def test_zero_day_limit_keeps_everyone_off() -> None:
    employees = [make_employee("e1"), make_employee("e2")]
    rules = [make_rule("max_consecutive_work_days", {"max_days": 0})]

    result = generate_schedule(1, 2025, employees, SHIFTS, rules)

    assert {item.shift_id for item in result.entries} == {DAY_OFF_SHIFT_ID}
    assert result.violations == []


def test_single_shift_month_meets_minimum_staffing() -> None:
    employees = [make_employee("e1"), make_employee("e2"), make_employee("e3")]
    shifts = [day_off_shift(), make_shift("S1", hours=8)]
    rules = [make_rule("min_employees_per_shift", {"min_employees": 1, "shift_ids": ["S1"]}, priority=1)]

    result = generate_schedule(1, 2026, employees, shifts, rules)

    assert len(result.entries) == 3 * 28
    validation = validate_schedule(result.entries, employees, shifts, 1, 2026, [], rules)
    assert not [v for v in validation.violations if v.type == "min_employees_per_shift"]
    for day in range(1, 29):
        assert any(item.day == day and item.shift_id == "S1" for item in result.entries)


def test_consecutive_limit_is_respected_when_staff_allows() -> None:
    employees = [make_employee(f"e{i}") for i in range(1, 6)]
    rules = [make_rule("max_consecutive_work_days", {"max_days": 3})]

    result = generate_schedule(1, 2025, employees, SHIFTS, rules)

    assert not [v for v in result.violations if v.type == "max_consecutive_work_days"]
    assert any(item.shift_id != DAY_OFF_SHIFT_ID for item in result.entries)


def test_generation_without_employees_is_empty() -> None:
    result = generate_schedule(1, 2025, [], SHIFTS, [])

    assert result.entries == []
    assert result.violations == []


def test_generation_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="work_scheduler.services.scheduler"):
        generate_schedule(1, 2025, [make_employee("e1")], SHIFTS, [])

    assert "Generating schedule for 2025-02" in caplog.text
    assert "Generated 28 entries for 2025-02" in caplog.text
