import logging
from datetime import date

import pytest

from work_scheduler.services.rules import (
    EmployeeDayOffConfig,
    MaxTotalHoursConfig,
    MinEmployeesPerShiftConfig,
    RuleConfigError,
    RuleType,
    consecutive_work_limit,
    load_default_rules,
    order_rules,
    parse_rule_config,
)

from .factories import make_employee, make_rule


def test_default_rules_are_loaded_in_priority_order() -> None:
    rules = load_default_rules()

    assert [rule.rule_type for rule in rules] == [
        "approved_day_off_requests",
        "min_employees_per_shift",
        "max_consecutive_work_days",
        "max_employees_per_shift",
        "max_hours_per_week",
        "recommended_work_days",
    ]
    assert all(rule.config is not None for rule in rules)
    assert rules[0].effective_severity == "error"
    assert rules[-1].effective_severity == "info"
    assert consecutive_work_limit(rules) == 5


def test_config_aliases_are_accepted() -> None:
    assert parse_rule_config("min_employees_per_shift", {"min": 2}) == MinEmployeesPerShiftConfig(min_employees=2)
    assert parse_rule_config("max_total_hours", {"max_hours_per_month": 150}) == MaxTotalHoursConfig(max_hours=150)

    day_off = parse_rule_config("employee_day_off", {"employeeId": "e1", "specificDate": "2025-02-01"})
    assert isinstance(day_off, EmployeeDayOffConfig)
    assert day_off.employee_id == "e1"
    assert day_off.date == date(2025, 2, 1)

    streak = parse_rule_config("recommended_work_days", {"max_days": 4})
    assert streak.max_consecutive_days == 4


def test_missing_config_fields_fall_back_to_defaults() -> None:
    assert parse_rule_config("max_consecutive_work_days", None).max_days == 5
    assert parse_rule_config("max_employees_per_shift", {}).max_employees == 10
    assert parse_rule_config("max_hours_per_week", {}).max_hours == 40
    assert parse_rule_config("max_hours_per_month", {}) == MaxTotalHoursConfig(max_hours=176)
    assert parse_rule_config("max_shifts_per_week", {}).max_shifts == 5
    assert parse_rule_config("min_rest_between_shifts", {}).hours == 12
    assert parse_rule_config("required_roles_per_shift", {"role": "Cook"}).min_count == 1


@pytest.mark.parametrize(
    ("rule_type", "config"),
    [
        ("no_such_rule", {}),
        ("employee_hours_limit", {"min_hours": 100, "max_hours": 80}),
        ("employee_hours_limit", {"enforcement": "exact"}),
        ("required_work_days", {"days_of_week": [7]}),
        ("max_consecutive_work_days", {"max_days": -1}),
        ("employee_day_off", {"employee_id": "e1"}),
        ("required_roles_per_shift", {"min_count": 2}),
    ],
)
def test_invalid_configs_are_rejected(rule_type: str, config: dict) -> None:
    with pytest.raises(RuleConfigError):
        parse_rule_config(rule_type, config)


def test_unparseable_rule_is_loaded_as_inert(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="work_scheduler.services.rules"):
        rule = make_rule("max_hours_per_week", {"max_hours": "many"}, rule_id=7)

    assert rule.config is None
    assert rule.raw_config == {"max_hours": "many"}
    assert "Rule 7 loaded as inert" in caplog.text


def test_unknown_rule_type_has_no_kind() -> None:
    rule = make_rule("lunch_break_policy")

    assert rule.kind is None
    assert rule.config is None


def test_order_rules_skips_disabled_and_sorts_by_priority_then_id() -> None:
    rules = [
        make_rule("max_total_hours", rule_id=3, priority=2),
        make_rule("max_hours_per_week", rule_id=1, priority=2),
        make_rule("min_employees_per_shift", rule_id=2, priority=1),
        make_rule("max_employees_per_shift", rule_id=4, priority=0, enabled=False),
    ]

    assert [rule.id for rule in order_rules(rules)] == [2, 1, 3]


def test_consecutive_work_limit_uses_first_rule_in_priority_order() -> None:
    assert consecutive_work_limit([]) is None
    assert consecutive_work_limit([make_rule("max_consecutive_shifts")]) == 5

    rules = [
        make_rule("max_consecutive_work_days", {"max_days": 4}, rule_id=1, priority=5),
        make_rule("max_consecutive_shifts", {"max_days": 0}, rule_id=2, priority=1),
    ]
    assert consecutive_work_limit(rules) == 0


def test_null_consecutive_limit_falls_back_to_default() -> None:
    rule = make_rule("max_consecutive_work_days", {"max_days": None})

    assert rule.config is not None
    assert consecutive_work_limit([rule]) == 5
    assert parse_rule_config("max_consecutive_shifts", {"max_consecutive_days": None}).max_days == 5


def test_rule_scope_matches_role_name_or_employee_id() -> None:
    rule = make_rule(
        RuleType.MAX_TOTAL_HOURS.value, applies_to_roles=["Manager"], applies_to_employees=["e3"]
    )

    assert rule.is_scoped
    assert rule.applies_to(make_employee("e1", role="Manager", manager=True))
    assert not rule.applies_to(make_employee("e2", role="Staff"))
    assert rule.applies_to(make_employee("e3"))
    assert make_rule("max_total_hours").applies_to(make_employee("e2"))
