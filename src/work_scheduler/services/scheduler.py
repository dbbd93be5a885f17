from __future__ import annotations

import logging
from typing import Sequence

from work_scheduler.services.domain import (
    DAY_OFF_SHIFT_ID,
    ApprovedDayOff,
    SchedulingEmployee,
    SchedulingEntry,
    SchedulingResult,
    SchedulingShift,
    consecutive_work_days,
    days_in_month,
    find_day_off_shift,
)
from work_scheduler.services.rules import SchedulingRule, consecutive_work_limit, order_rules
from work_scheduler.services.scoring import select_best_variant
from work_scheduler.services.validator import validate_schedule
from work_scheduler.services.variants import generate_day_variants

logger = logging.getLogger(__name__)


class MissingDayOffShiftError(ValueError):
    """The shift catalog has no zero-hour ``day-off`` shift."""

    def __init__(self) -> None:
        super().__init__(f"Shift catalog must contain a '{DAY_OFF_SHIFT_ID}' shift with 0 hours")


def generate_schedule(
    month: int,
    year: int,
    employees: Sequence[SchedulingEmployee],
    shifts: Sequence[SchedulingShift],
    rules: Sequence[SchedulingRule],
    approved_day_offs: Sequence[ApprovedDayOff] = (),
) -> SchedulingResult:
    """
    Greedy day-by-day planner: every day takes the best scoring candidate given
    the days already fixed, without revisiting earlier days. ``month`` is 0-based.
    """

    if find_day_off_shift(shifts) is None:
        raise MissingDayOffShiftError()

    active_rules = order_rules(rules)
    shifts_by_id = {shift.id: shift for shift in shifts}
    employee_ids = {employee.id for employee in employees}
    limit = consecutive_work_limit(active_rules)
    total_days = days_in_month(year, month)

    logger.info(
        "Generating schedule for %04d-%02d: %d employees, %d shifts, %d rules",
        year,
        month + 1,
        len(employees),
        len(shifts),
        len(active_rules),
    )

    schedule = _seed_day_offs(month, year, approved_day_offs, employee_ids)
    days_off: dict[int, set[str]] = {}
    for entry in schedule:
        days_off.setdefault(entry.day, set()).add(entry.employee_id)

    for day in range(1, total_days + 1):
        available = [employee for employee in employees if employee.id not in days_off.get(day, set())]
        pool = available
        if limit is not None:
            pool = [
                employee
                for employee in available
                if consecutive_work_days(schedule, shifts_by_id, employee.id, day, month, year) < limit
            ]
            if not pool:
                pool = available

        variants = generate_day_variants(day, month, year, pool, shifts, schedule, active_rules)
        best = select_best_variant(
            variants, day, month, year, schedule, employees, shifts, active_rules, approved_day_offs
        )
        if best is not None:
            schedule.extend(best.variant.entries)
            logger.debug(
                "Day %d: picked %s (score %d, %d/%d rules satisfied) out of %d candidates",
                day,
                best.variant.strategy,
                best.score,
                best.satisfied,
                len(best.rule_results),
                len(variants),
            )

        schedule.extend(_fill_unassigned(day, month, year, employees, schedule))

    validation = validate_schedule(schedule, employees, shifts, month, year, approved_day_offs, active_rules)
    logger.info(
        "Generated %d entries for %04d-%02d with %d violations (%d errors)",
        len(schedule),
        year,
        month + 1,
        len(validation.violations),
        validation.metrics.errors,
    )
    return SchedulingResult(entries=schedule, violations=validation.violations)


def _seed_day_offs(
    month: int,
    year: int,
    approved_day_offs: Sequence[ApprovedDayOff],
    employee_ids: set[str],
) -> list[SchedulingEntry]:
    seeded: dict[tuple[str, int], SchedulingEntry] = {}
    for request in approved_day_offs:
        if request.employee_id not in employee_ids:
            continue
        if request.date.year != year or request.date.month != month + 1:
            continue
        seeded[(request.employee_id, request.date.day)] = SchedulingEntry(
            employee_id=request.employee_id,
            day=request.date.day,
            month=month,
            year=year,
            shift_id=DAY_OFF_SHIFT_ID,
        )
    return list(seeded.values())


def _fill_unassigned(
    day: int,
    month: int,
    year: int,
    employees: Sequence[SchedulingEmployee],
    schedule: Sequence[SchedulingEntry],
) -> list[SchedulingEntry]:
    assigned = {entry.employee_id for entry in schedule if entry.day == day}
    return [
        SchedulingEntry(employee_id=employee.id, day=day, month=month, year=year, shift_id=DAY_OFF_SHIFT_ID)
        for employee in employees
        if employee.id not in assigned
    ]
