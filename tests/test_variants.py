from work_scheduler.services.domain import DAY_OFF_SHIFT_ID
from work_scheduler.services.variants import (
    EQUAL_ROTATION,
    EQUAL_ROTATION_WITH_DAY_OFF,
    MINIMAL_STAFFING,
    RULE_AWARE,
    SINGLE_SHIFT,
    TWO_SHIFT_SPLIT,
    DayVariant,
    generate_day_variants,
)

from .factories import FEBRUARY, YEAR, day_off_shift, entry, make_employee, make_entries, make_rule, make_shift

SHIFTS = [day_off_shift(), make_shift("S1"), make_shift("S2")]


def assignments(variant: DayVariant) -> dict[str, str]:
    return {item.employee_id: item.shift_id for item in variant.entries}


def test_duplicate_candidates_are_removed() -> None:
    employees = [make_employee("e1")]

    variants = generate_day_variants(1, FEBRUARY, YEAR, employees, [day_off_shift(), make_shift("S1")], [], [])

    assert [variant.strategy for variant in variants] == [RULE_AWARE]
    assert assignments(variants[0]) == {"e1": "S1"}


def test_naive_strategies_follow_rule_aware_candidate() -> None:
    employees = [make_employee("e1"), make_employee("e2"), make_employee("e3")]

    variants = generate_day_variants(3, FEBRUARY, YEAR, employees, SHIFTS, [], [])

    assert [variant.strategy for variant in variants] == [
        RULE_AWARE,
        EQUAL_ROTATION_WITH_DAY_OFF,
        TWO_SHIFT_SPLIT,
        SINGLE_SHIFT,
        SINGLE_SHIFT,
        MINIMAL_STAFFING,
    ]
    assert assignments(variants[0]) == {"e1": "S1", "e2": "S2", "e3": "S1"}
    assert assignments(variants[1]) == {"e1": "S1", "e2": "S2", "e3": DAY_OFF_SHIFT_ID}
    assert assignments(variants[2]) == {"e1": "S1", "e2": "S1", "e3": "S2"}
    assert assignments(variants[-1]) == {"e1": "S1", "e2": "S2"}
    assert all(item.day == 3 and item.month == FEBRUARY and item.year == YEAR for item in variants[0].entries)


def test_equal_rotation_survives_when_rule_aware_differs() -> None:
    employees = [make_employee("e1"), make_employee("e2"), make_employee("e3")]
    schedule = make_entries("e1", "WW")
    rules = [make_rule("max_consecutive_work_days", {"max_days": 2})]

    variants = generate_day_variants(3, FEBRUARY, YEAR, employees, SHIFTS, schedule, rules)

    assert variants[0].strategy == RULE_AWARE
    assert EQUAL_ROTATION in [variant.strategy for variant in variants]


def test_signature_ignores_entry_order() -> None:
    first = DayVariant(RULE_AWARE, (entry("e1", 1, "S1"), entry("e2", 1, "S2")))
    second = DayVariant(EQUAL_ROTATION, (entry("e2", 1, "S2"), entry("e1", 1, "S1")))

    assert first.signature == second.signature


def test_only_rule_aware_candidate_without_working_shifts() -> None:
    employees = [make_employee("e1"), make_employee("e2")]

    variants = generate_day_variants(1, FEBRUARY, YEAR, employees, [day_off_shift()], [], [])

    assert len(variants) == 1
    assert set(assignments(variants[0]).values()) == {DAY_OFF_SHIFT_ID}


def test_no_candidates_without_employees() -> None:
    assert generate_day_variants(1, FEBRUARY, YEAR, [], SHIFTS, [], []) == []


def test_rule_aware_rests_employees_at_the_consecutive_limit() -> None:
    employees = [make_employee("e1"), make_employee("e2"), make_employee("e3")]
    schedule = make_entries("e1", "WW") + make_entries("e2", "--") + make_entries("e3", "--")
    rules = [make_rule("max_consecutive_work_days", {"max_days": 2})]

    rule_aware = generate_day_variants(3, FEBRUARY, YEAR, employees, [day_off_shift(), make_shift("S1")], schedule, rules)[0]

    assert assignments(rule_aware) == {"e1": DAY_OFF_SHIFT_ID, "e2": "S1", "e3": "S1"}


def test_rule_aware_prefers_employees_with_fewer_worked_days() -> None:
    employees = [make_employee("e1"), make_employee("e2")]
    schedule = make_entries("e1", "W") + make_entries("e2", "-")
    rules = [make_rule("max_employees_per_shift", {"max_employees": 1})]

    rule_aware = generate_day_variants(2, FEBRUARY, YEAR, employees, [day_off_shift(), make_shift("S1")], schedule, rules)[0]

    assert assignments(rule_aware) == {"e1": DAY_OFF_SHIFT_ID, "e2": "S1"}


def test_rule_aware_moves_staff_to_meet_a_shift_minimum_within_the_cap() -> None:
    employees = [make_employee(f"e{i}") for i in range(1, 5)]
    rules = [
        make_rule("min_employees_per_shift", {"min_employees": 2, "shift_ids": ["S1"]}, rule_id=1, priority=1),
        make_rule("max_employees_per_shift", {"max_employees": 2}, rule_id=2, priority=2),
    ]

    rule_aware = generate_day_variants(3, FEBRUARY, YEAR, employees, SHIFTS, [], rules)[0]

    working = [shift_id for shift_id in assignments(rule_aware).values() if shift_id != DAY_OFF_SHIFT_ID]
    assert sorted(working) == ["S1", "S1"]


def test_rule_aware_caps_a_listed_shift() -> None:
    employees = [make_employee(f"e{i}") for i in range(1, 5)]
    rules = [make_rule("max_employees_per_shift", {"max_employees": 1, "shift_ids": ["S1"]})]

    rule_aware = generate_day_variants(3, FEBRUARY, YEAR, employees, SHIFTS, [], rules)[0]

    values = list(assignments(rule_aware).values())
    assert values.count("S1") == 1
    assert values.count("S2") == 2
