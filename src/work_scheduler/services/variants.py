"""Candidate assignments for a single day."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Sequence, cast

from work_scheduler.services.domain import (
    DAY_OFF_SHIFT_ID,
    SchedulingEmployee,
    SchedulingEntry,
    SchedulingShift,
    consecutive_work_days,
    is_weekend,
    weekday_index,
    working_shifts,
)
from work_scheduler.services.rules import (
    CoverageByDayConfig,
    CoverageByTimeConfig,
    MaxEmployeesPerShiftConfig,
    MinEmployeesPerShiftConfig,
    RequiredCoverageConfig,
    RequiredWorkDaysConfig,
    RuleType,
    SchedulingRule,
    consecutive_work_limit,
    first_rule_of,
    order_rules,
)

RULE_AWARE = "rule_aware"
EQUAL_ROTATION = "equal_rotation"
EQUAL_ROTATION_WITH_DAY_OFF = "equal_rotation_with_day_off"
TWO_SHIFT_SPLIT = "two_shift_split"
MIXED = "mixed"
SINGLE_SHIFT = "single_shift"
MINIMAL_STAFFING = "minimal_staffing"
ALTERNATING = "alternating"

NOT_AT_LIMIT_WEIGHT = 10
REQUIRED_DAY_BONUS = 5
MIN_WORKING_SHARE = 0.3
MIXED_WORKING_SHARE = 0.7
SINGLE_SHIFT_MAX_HEADCOUNT = 4


@dataclass(frozen=True)
class DayVariant:
    strategy: str
    entries: tuple[SchedulingEntry, ...]

    @property
    def signature(self) -> frozenset[tuple[tuple[str, str], int]]:
        """Employee to shift multiset; equal signatures mean the same assignment."""

        return frozenset(Counter((entry.employee_id, entry.shift_id) for entry in self.entries).items())

    @property
    def is_rule_aware(self) -> bool:
        return self.strategy == RULE_AWARE


@dataclass
class _Candidate:
    employee: SchedulingEmployee
    can_work: bool
    score: int
    days_worked: int
    position: int


def generate_day_variants(
    day: int,
    month: int,
    year: int,
    employees: Sequence[SchedulingEmployee],
    shifts: Sequence[SchedulingShift],
    schedule: Sequence[SchedulingEntry],
    rules: Sequence[SchedulingRule],
) -> list[DayVariant]:
    """Build the distinct candidate assignments for ``day``.

    The rule-aware candidate always comes first; the naive heuristics follow
    in a fixed order. Duplicates keep their first occurrence.
    """

    if not employees:
        return []

    working = working_shifts(shifts)

    def entry(employee: SchedulingEmployee, shift_id: str) -> SchedulingEntry:
        return SchedulingEntry(employee_id=employee.id, day=day, month=month, year=year, shift_id=shift_id)

    def variant(strategy: str, assignments: list[tuple[SchedulingEmployee, str]]) -> DayVariant:
        return DayVariant(strategy=strategy, entries=tuple(entry(emp, shift_id) for emp, shift_id in assignments))

    variants = [
        variant(
            RULE_AWARE,
            _rule_aware_assignments(day, month, year, employees, shifts, working, schedule, rules),
        )
    ]

    if working:
        count = len(employees)
        rotation = [shift.id for shift in working]
        with_day_off = rotation + [DAY_OFF_SHIFT_ID]

        variants.append(
            variant(EQUAL_ROTATION, [(emp, rotation[i % len(rotation)]) for i, emp in enumerate(employees)])
        )
        variants.append(
            variant(
                EQUAL_ROTATION_WITH_DAY_OFF,
                [(emp, with_day_off[i % len(with_day_off)]) for i, emp in enumerate(employees)],
            )
        )
        if len(working) >= 2 and count >= 2:
            half = math.ceil(count / 2)
            variants.append(
                variant(
                    TWO_SHIFT_SPLIT,
                    [(emp, rotation[0] if i < half else rotation[1]) for i, emp in enumerate(employees)],
                )
            )
        if count >= 2:
            working_count = math.ceil(count * MIXED_WORKING_SHARE)
            variants.append(
                variant(
                    MIXED,
                    [
                        (emp, rotation[i % len(rotation)] if i < working_count else DAY_OFF_SHIFT_ID)
                        for i, emp in enumerate(employees)
                    ],
                )
            )
        if count <= SINGLE_SHIFT_MAX_HEADCOUNT:
            for shift_id in rotation:
                variants.append(variant(SINGLE_SHIFT, [(emp, shift_id) for emp in employees]))
        if count >= len(working):
            variants.append(variant(MINIMAL_STAFFING, list(zip(employees, rotation))))
        if len(working) >= 2 and count >= 3:
            variants.append(
                variant(ALTERNATING, [(emp, rotation[i % 2]) for i, emp in enumerate(employees)])
            )

    return _deduplicate(variants)


def _deduplicate(variants: list[DayVariant]) -> list[DayVariant]:
    seen: set[frozenset[tuple[tuple[str, str], int]]] = set()
    unique: list[DayVariant] = []
    for candidate in variants:
        signature = candidate.signature
        if signature in seen:
            continue
        seen.add(signature)
        unique.append(candidate)
    return unique


def _rule_aware_assignments(
    day: int,
    month: int,
    year: int,
    employees: Sequence[SchedulingEmployee],
    shifts: Sequence[SchedulingShift],
    working: Sequence[SchedulingShift],
    schedule: Sequence[SchedulingEntry],
    rules: Sequence[SchedulingRule],
) -> list[tuple[SchedulingEmployee, str]]:
    current = date(year, month + 1, day)
    shifts_by_id = {shift.id: shift for shift in shifts}
    limit = consecutive_work_limit(rules)
    required_day = _is_required_work_day(rules, current)
    days_worked = _days_worked(schedule, shifts_by_id, month, year)

    candidates: list[_Candidate] = []
    for position, employee in enumerate(employees):
        streak = consecutive_work_days(schedule, shifts_by_id, employee.id, day, month, year)
        can_work = limit is None or streak < limit
        score = 0
        if can_work:
            score += NOT_AT_LIMIT_WEIGHT
            if required_day:
                score += REQUIRED_DAY_BONUS
        candidates.append(
            _Candidate(
                employee=employee,
                can_work=can_work,
                score=score,
                days_worked=days_worked.get(employee.id, 0),
                position=position,
            )
        )
    candidates.sort(key=lambda item: (-item.score, item.days_worked, item.position))

    if not working:
        return [(item.employee, DAY_OFF_SHIFT_ID) for item in candidates]

    headcount = len(employees)
    working_ids = [shift.id for shift in working]
    min_rule = first_rule_of(rules, [RuleType.MIN_EMPLOYEES_PER_SHIFT])
    max_rule = first_rule_of(rules, [RuleType.MAX_EMPLOYEES_PER_SHIFT])

    lower = max(
        _coverage_minimum(rules, current),
        _rule_min_employees(min_rule, working_ids),
        math.ceil(MIN_WORKING_SHARE * headcount),
    )
    rule_max = _rule_max_employees(max_rule, working_ids)
    upper = min(rule_max if rule_max is not None else headcount, headcount)
    not_at_limit = sum(1 for item in candidates if item.can_work)
    to_work = min(max(not_at_limit, lower), upper)

    eligible = [item for item in candidates if item.can_work]
    assignments: dict[str, str] = {item.employee.id: DAY_OFF_SHIFT_ID for item in candidates}
    order: list[str] = []
    for index, item in enumerate(eligible[:to_work]):
        assignments[item.employee.id] = working_ids[index % len(working_ids)]
        order.append(item.employee.id)

    if min_rule is not None:
        _raise_to_minimum(min_rule.config, assignments, order, eligible, working_ids)
    if max_rule is not None:
        floors = _shift_floors(min_rule, working_ids)
        _cap_to_maximum(max_rule.config, assignments, order, working_ids, floors)

    return [(item.employee, assignments[item.employee.id]) for item in candidates]


def _days_worked(
    schedule: Sequence[SchedulingEntry],
    shifts_by_id: dict[str, SchedulingShift],
    month: int,
    year: int,
) -> dict[str, int]:
    counts: dict[str, int] = Counter()
    for item in schedule:
        if item.month != month or item.year != year:
            continue
        shift = shifts_by_id.get(item.shift_id)
        if shift is not None and shift.is_working:
            counts[item.employee_id] += 1
    return counts


def _is_required_work_day(rules: Sequence[SchedulingRule], current: date) -> bool:
    for rule in order_rules(rules):
        if rule.kind is RuleType.REQUIRED_WORK_DAYS and isinstance(rule.config, RequiredWorkDaysConfig):
            if weekday_index(current) in rule.config.days_of_week:
                return True
    return False


def _coverage_minimum(rules: Sequence[SchedulingRule], current: date) -> int:
    """Largest headcount any coverage rule asks for on ``current``."""

    minimum = 0
    for rule in order_rules(rules):
        config = rule.config
        if isinstance(config, CoverageByDayConfig):
            if config.day_type == "weekends":
                applies = is_weekend(current)
            elif config.day_type == "weekdays":
                applies = not is_weekend(current)
            else:
                applies = current in config.specific_days
            if applies:
                minimum = max(minimum, config.min_employees)
        elif isinstance(config, CoverageByTimeConfig):
            weekend = is_weekend(current)
            if (weekend and config.applies_to_weekends) or (not weekend and config.applies_to_weekdays):
                for time_range in config.time_ranges:
                    wanted = time_range.min_employees
                    minimum = max(minimum, wanted if wanted is not None else config.min_employees)
        elif isinstance(config, RequiredCoverageConfig):
            minimum = max(
                minimum,
                sum(item.min_employees for item in config.rules if item.date == current),
            )
        elif isinstance(config, RequiredWorkDaysConfig):
            if weekday_index(current) in config.days_of_week:
                minimum = max(minimum, 1)
    return minimum


def _listed_working_ids(shift_ids: Sequence[str], working_ids: Sequence[str]) -> list[str]:
    return [shift_id for shift_id in shift_ids if shift_id in working_ids]


def _rule_min_employees(rule: SchedulingRule | None, working_ids: Sequence[str]) -> int:
    if rule is None:
        return 0
    config = cast(MinEmployeesPerShiftConfig, rule.config)
    if not config.shift_ids:
        return config.min_employees
    return config.min_employees * len(_listed_working_ids(config.shift_ids, working_ids))


def _rule_max_employees(rule: SchedulingRule | None, working_ids: Sequence[str]) -> int | None:
    if rule is None:
        return None
    config = cast(MaxEmployeesPerShiftConfig, rule.config)
    if not config.shift_ids:
        return config.max_employees
    listed = _listed_working_ids(config.shift_ids, working_ids)
    if len(listed) < len(working_ids):
        # Unlisted shifts are uncapped.
        return None
    return config.max_employees * len(listed)


def _count_on(assignments: dict[str, str], shift_id: str) -> int:
    return sum(1 for value in assignments.values() if value == shift_id)


def _raise_to_minimum(
    config: MinEmployeesPerShiftConfig,
    assignments: dict[str, str],
    order: list[str],
    eligible: list[_Candidate],
    working_ids: Sequence[str],
) -> None:
    def resting() -> list[str]:
        return [item.employee.id for item in eligible if assignments[item.employee.id] == DAY_OFF_SHIFT_ID]

    if config.shift_ids:
        for shift_id in _listed_working_ids(config.shift_ids, working_ids):
            while _count_on(assignments, shift_id) < config.min_employees:
                spare = resting()
                if not spare:
                    return
                assignments[spare[0]] = shift_id
                order.append(spare[0])
        return

    while sum(1 for value in assignments.values() if value in working_ids) < config.min_employees:
        spare = resting()
        if not spare:
            return
        target = min(working_ids, key=lambda shift_id: _count_on(assignments, shift_id))
        assignments[spare[0]] = target
        order.append(spare[0])


def _shift_floors(rule: SchedulingRule | None, working_ids: Sequence[str]) -> dict[str, int]:
    if rule is None:
        return {}
    config = cast(MinEmployeesPerShiftConfig, rule.config)
    return {shift_id: config.min_employees for shift_id in _listed_working_ids(config.shift_ids, working_ids)}


def _cap_to_maximum(
    config: MaxEmployeesPerShiftConfig,
    assignments: dict[str, str],
    order: list[str],
    working_ids: Sequence[str],
    floors: dict[str, int],
) -> None:
    def release_latest(shift_id: str) -> None:
        for employee_id in reversed(order):
            if assignments[employee_id] == shift_id:
                assignments[employee_id] = DAY_OFF_SHIFT_ID
                order.remove(employee_id)
                return

    if config.shift_ids:
        for shift_id in _listed_working_ids(config.shift_ids, working_ids):
            while _count_on(assignments, shift_id) > config.max_employees:
                release_latest(shift_id)
        return

    while sum(1 for value in assignments.values() if value in working_ids) > config.max_employees:
        above_floor = [
            shift_id for shift_id in working_ids if _count_on(assignments, shift_id) > floors.get(shift_id, 0)
        ]
        busiest = max(above_floor or working_ids, key=lambda shift_id: _count_on(assignments, shift_id))
        release_latest(busiest)
