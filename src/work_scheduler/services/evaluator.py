"""Rule evaluation against an in-memory schedule snapshot.

Every rule kind has one checker. ``evaluate`` dispatches to it and never
raises: a checker that fails is logged and counts as satisfied.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Iterable, Sequence

from work_scheduler.services.domain import (
    DAY_OFF_SHIFT_ID,
    ApprovedDayOff,
    SchedulingEmployee,
    SchedulingEntry,
    SchedulingShift,
    days_in_month,
    is_weekend,
    iter_month_days,
    weekday_index,
)
from work_scheduler.services.rules import (
    ConsecutiveDaysOffConfig,
    ConsecutiveWorkDaysConfig,
    CoverageByDayConfig,
    CoverageByTimeConfig,
    EmployeeDayOffConfig,
    EmployeeHoursLimitConfig,
    ManagerRequirementsConfig,
    MaxEmployeesPerShiftConfig,
    MaxHoursPerWeekConfig,
    MaxShiftsPerWeekConfig,
    MaxTotalHoursConfig,
    MinEmployeesPerShiftConfig,
    MinRestBetweenShiftsConfig,
    RecommendedWorkDaysConfig,
    RequiredCoverageConfig,
    RequiredRolesPerShiftConfig,
    RequiredWorkDaysConfig,
    RuleConfig,
    RuleType,
    SchedulingRule,
    Severity,
    ShiftLimitsConfig,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


@dataclass
class SchedulingViolation:
    type: str
    severity: Severity
    message: str
    employee_id: str | None = None
    date: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    rule_id: int | None = None


@dataclass
class SchedulingContext:
    """Schedule snapshot for one month; ``month`` is 0-based.

    When ``through_day`` is set only days ``1..through_day`` are inspected.
    """

    schedule: Sequence[SchedulingEntry]
    employees: Sequence[SchedulingEmployee]
    shifts: Sequence[SchedulingShift]
    month: int
    year: int
    approved_day_offs: Sequence[ApprovedDayOff] = ()
    through_day: int | None = None

    shifts_by_id: dict[str, SchedulingShift] = field(init=False, repr=False)
    employees_by_id: dict[str, SchedulingEmployee] = field(init=False, repr=False)
    entries: list[SchedulingEntry] = field(init=False, repr=False)
    dates: list[date] = field(init=False, repr=False)
    _by_day: dict[int, list[SchedulingEntry]] = field(init=False, repr=False)
    _by_employee_day: dict[tuple[str, int], SchedulingEntry] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.shifts_by_id = {shift.id: shift for shift in self.shifts}
        self.employees_by_id = {employee.id: employee for employee in self.employees}
        self.dates = list(iter_month_days(self.year, self.month, self.through_day))
        last_day = len(self.dates)
        self.entries = [
            entry
            for entry in self.schedule
            if entry.month == self.month and entry.year == self.year and 1 <= entry.day <= last_day
        ]
        self._by_day = defaultdict(list)
        self._by_employee_day = {}
        for entry in self.entries:
            self._by_day[entry.day].append(entry)
            self._by_employee_day[(entry.employee_id, entry.day)] = entry

    @property
    def covers_full_month(self) -> bool:
        return len(self.dates) == days_in_month(self.year, self.month)

    def includes(self, target: date) -> bool:
        return (
            target.year == self.year
            and target.month == self.month + 1
            and 1 <= target.day <= len(self.dates)
        )

    def shift_of(self, entry: SchedulingEntry) -> SchedulingShift | None:
        return self.shifts_by_id.get(entry.shift_id)

    def is_working(self, entry: SchedulingEntry | None) -> bool:
        if entry is None:
            return False
        shift = self.shift_of(entry)
        return shift is not None and shift.is_working

    def hours_of(self, entry: SchedulingEntry) -> float:
        shift = self.shift_of(entry)
        return float(shift.hours) if shift is not None else 0.0

    def entries_on(self, day: int) -> list[SchedulingEntry]:
        return self._by_day.get(day, [])

    def entry_for(self, employee_id: str, day: int) -> SchedulingEntry | None:
        return self._by_employee_day.get((employee_id, day))


Checker = Callable[[SchedulingRule, Any, SchedulingContext], list[SchedulingViolation]]


def evaluate(rule: SchedulingRule, context: SchedulingContext) -> list[SchedulingViolation]:
    """Return the violations ``rule`` finds in ``context``.

    Unknown rule types and rules without a parsed config yield nothing.
    """

    kind = rule.kind
    if kind is None or rule.config is None:
        return []
    checker = _CHECKERS.get(kind)
    if checker is None:
        return []
    try:
        return checker(rule, rule.config, context)
    except Exception:
        logger.exception(
            "Rule %s (%s) failed during evaluation; treating it as satisfied",
            rule.id,
            rule.rule_type,
        )
        return []


def _violation(
    rule: SchedulingRule,
    message: str,
    *,
    employee_id: str | None = None,
    day: date | None = None,
    **metadata: Any,
) -> SchedulingViolation:
    return SchedulingViolation(
        type=rule.rule_type,
        severity=rule.effective_severity,
        message=rule.custom_message or message,
        employee_id=employee_id,
        date=day.isoformat() if day else None,
        metadata=metadata,
        rule_id=rule.id,
    )


def _employees_in_scope(rule: SchedulingRule, context: SchedulingContext) -> list[SchedulingEmployee]:
    return [employee for employee in context.employees if rule.applies_to(employee)]


def _entry_in_scope(rule: SchedulingRule, context: SchedulingContext, entry: SchedulingEntry) -> bool:
    if not rule.is_scoped:
        return True
    employee = context.employees_by_id.get(entry.employee_id)
    return employee is not None and rule.applies_to(employee)


def _working_entries_on(
    rule: SchedulingRule, context: SchedulingContext, day: int
) -> list[SchedulingEntry]:
    return [
        entry
        for entry in context.entries_on(day)
        if context.is_working(entry) and _entry_in_scope(rule, context, entry)
    ]


def _runs(flags: Sequence[bool]) -> Iterable[tuple[int, int]]:
    """Yield ``(start_index, length)`` for each run of ``True`` values."""

    start: int | None = None
    for index, flag in enumerate(flags):
        if flag and start is None:
            start = index
        elif not flag and start is not None:
            yield start, index - start
            start = None
    if start is not None:
        yield start, len(flags) - start


def _streak_violations(
    rule: SchedulingRule,
    context: SchedulingContext,
    limit: int,
    *,
    working: bool,
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    label = "working days" if working else "days off"
    for employee in _employees_in_scope(rule, context):
        flags = [
            context.is_working(context.entry_for(employee.id, current.day)) is working
            for current in context.dates
        ]
        for start, length in _runs(flags):
            if length <= limit:
                continue
            violations.append(
                _violation(
                    rule,
                    f"{employee.name} has {length} consecutive {label} (limit {limit}).",
                    employee_id=employee.id,
                    day=context.dates[start + limit],
                    limit=limit,
                    consecutive_days=length,
                    start_date=context.dates[start].isoformat(),
                )
            )
    return violations


def _check_consecutive_work_days(
    rule: SchedulingRule, config: ConsecutiveWorkDaysConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    return _streak_violations(rule, context, config.max_days, working=True)


def _check_recommended_work_days(
    rule: SchedulingRule, config: RecommendedWorkDaysConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    return _streak_violations(rule, context, config.max_consecutive_days, working=True)


def _check_consecutive_days_off(
    rule: SchedulingRule, config: ConsecutiveDaysOffConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    return _streak_violations(rule, context, config.max_days, working=False)


def _staffing_counts(
    rule: SchedulingRule, context: SchedulingContext, current: date, shift_ids: Sequence[str]
) -> list[tuple[str | None, int]]:
    working = _working_entries_on(rule, context, current.day)
    if not shift_ids:
        return [(None, len(working))]
    return [
        (shift_id, sum(1 for entry in working if entry.shift_id == shift_id))
        for shift_id in shift_ids
    ]


def _check_min_employees_per_shift(
    rule: SchedulingRule, config: MinEmployeesPerShiftConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for current in context.dates:
        for shift_id, count in _staffing_counts(rule, context, current, config.shift_ids):
            if count >= config.min_employees:
                continue
            target = f"shift {shift_id}" if shift_id else "working shifts"
            violations.append(
                _violation(
                    rule,
                    f"{current.isoformat()}: {count} employee(s) on {target}, "
                    f"minimum is {config.min_employees}.",
                    day=current,
                    shift_id=shift_id,
                    count=count,
                    min_employees=config.min_employees,
                )
            )
    return violations


def _check_max_employees_per_shift(
    rule: SchedulingRule, config: MaxEmployeesPerShiftConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for current in context.dates:
        for shift_id, count in _staffing_counts(rule, context, current, config.shift_ids):
            if count <= config.max_employees:
                continue
            target = f"shift {shift_id}" if shift_id else "working shifts"
            violations.append(
                _violation(
                    rule,
                    f"{current.isoformat()}: {count} employee(s) on {target}, "
                    f"maximum is {config.max_employees}.",
                    day=current,
                    shift_id=shift_id,
                    count=count,
                    max_employees=config.max_employees,
                )
            )
    return violations


def _check_max_employees_per_shift_type(
    rule: SchedulingRule, config: ShiftLimitsConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for current in context.dates:
        counts: dict[str, int] = defaultdict(int)
        for entry in _working_entries_on(rule, context, current.day):
            counts[entry.shift_id] += 1
        for shift_id, limit in config.shift_limits.items():
            if counts.get(shift_id, 0) > limit:
                violations.append(
                    _violation(
                        rule,
                        f"{current.isoformat()}: {counts[shift_id]} employee(s) on shift "
                        f"{shift_id}, limit is {limit}.",
                        day=current,
                        shift_id=shift_id,
                        count=counts[shift_id],
                        limit=limit,
                    )
                )
    return violations


def _check_shift_type_limit_per_day(
    rule: SchedulingRule, config: ShiftLimitsConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for current in context.dates:
        counts: dict[str, int] = defaultdict(int)
        for entry in context.entries_on(current.day):
            shift = context.shift_of(entry)
            if shift is None or not _entry_in_scope(rule, context, entry):
                continue
            counts[shift.abbreviation or shift.id] += 1
        for abbreviation, limit in config.shift_limits.items():
            if counts.get(abbreviation, 0) > limit:
                violations.append(
                    _violation(
                        rule,
                        f"{current.isoformat()}: {counts[abbreviation]} '{abbreviation}' "
                        f"shift(s), limit is {limit}.",
                        day=current,
                        shift_type=abbreviation,
                        count=counts[abbreviation],
                        limit=limit,
                    )
                )
    return violations


def _is_manager_entry(context: SchedulingContext, entry: SchedulingEntry) -> bool:
    employee = context.employees_by_id.get(entry.employee_id)
    return employee is not None and employee.is_manager


def _check_manager_requirements(
    rule: SchedulingRule, config: ManagerRequirementsConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for current in context.dates:
        managers = sum(
            1
            for entry in _working_entries_on(rule, context, current.day)
            if _is_manager_entry(context, entry)
        )
        if managers < config.min_managers_per_day:
            violations.append(
                _violation(
                    rule,
                    f"{current.isoformat()}: {managers} manager(s) working, "
                    f"minimum is {config.min_managers_per_day}.",
                    day=current,
                    count=managers,
                    min_managers=config.min_managers_per_day,
                )
            )
    return violations


def _check_hours_without_managers(
    rule: SchedulingRule, config: RuleConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for current in context.dates:
        working = _working_entries_on(rule, context, current.day)
        if not working or any(_is_manager_entry(context, entry) for entry in working):
            continue
        for entry in working:
            hours = context.hours_of(entry)
            violations.append(
                _violation(
                    rule,
                    f"{current.isoformat()}: {hours:g}h on shift {entry.shift_id} "
                    "without a manager on duty.",
                    employee_id=entry.employee_id,
                    day=current,
                    shift_id=entry.shift_id,
                    hours=hours,
                )
            )
    return violations


def _hours_by_employee(rule: SchedulingRule, context: SchedulingContext) -> list[tuple[SchedulingEmployee, float]]:
    totals: list[tuple[SchedulingEmployee, float]] = []
    for employee in _employees_in_scope(rule, context):
        if employee.exclude_from_hours:
            continue
        total = 0.0
        for current in context.dates:
            entry = context.entry_for(employee.id, current.day)
            if entry is not None:
                total += context.hours_of(entry)
        totals.append((employee, total))
    return totals


def _check_max_total_hours(
    rule: SchedulingRule, config: MaxTotalHoursConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    return [
        _violation(
            rule,
            f"{employee.name} is scheduled for {total:g}h, cap is {config.max_hours:g}h.",
            employee_id=employee.id,
            total_hours=total,
            max_hours=config.max_hours,
        )
        for employee, total in _hours_by_employee(rule, context)
        if total > config.max_hours
    ]


def _check_max_hours_per_week(
    rule: SchedulingRule, config: MaxHoursPerWeekConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for employee in _employees_in_scope(rule, context):
        if employee.exclude_from_hours:
            continue
        weekly: dict[tuple[int, int], float] = defaultdict(float)
        week_start: dict[tuple[int, int], date] = {}
        for current in context.dates:
            iso_year, iso_week, _ = current.isocalendar()
            key = (iso_year, iso_week)
            week_start.setdefault(key, current)
            entry = context.entry_for(employee.id, current.day)
            if entry is not None:
                weekly[key] += context.hours_of(entry)
        for key, total in weekly.items():
            if total > config.max_hours:
                violations.append(
                    _violation(
                        rule,
                        f"{employee.name} is scheduled for {total:g}h in week "
                        f"{key[0]}-W{key[1]:02d}, cap is {config.max_hours:g}h.",
                        employee_id=employee.id,
                        day=week_start[key],
                        iso_week=f"{key[0]}-W{key[1]:02d}",
                        total_hours=total,
                        max_hours=config.max_hours,
                    )
                )
    return violations


def _check_max_shifts_per_week(
    rule: SchedulingRule, config: MaxShiftsPerWeekConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for employee in _employees_in_scope(rule, context):
        weekly: dict[tuple[int, int], int] = defaultdict(int)
        week_start: dict[tuple[int, int], date] = {}
        for current in context.dates:
            iso_year, iso_week, _ = current.isocalendar()
            key = (iso_year, iso_week)
            week_start.setdefault(key, current)
            if context.is_working(context.entry_for(employee.id, current.day)):
                weekly[key] += 1
        for key, count in weekly.items():
            if count > config.max_shifts:
                violations.append(
                    _violation(
                        rule,
                        f"{employee.name} works {count} shifts in week "
                        f"{key[0]}-W{key[1]:02d}, maximum is {config.max_shifts}.",
                        employee_id=employee.id,
                        day=week_start[key],
                        iso_week=f"{key[0]}-W{key[1]:02d}",
                        count=count,
                        max_shifts=config.max_shifts,
                    )
                )
    return violations


def _check_employee_hours_limit(
    rule: SchedulingRule, config: EmployeeHoursLimitConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    complete = context.covers_full_month
    exact = config.exact_target
    for employee, total in _hours_by_employee(rule, context):
        if exact is not None:
            # Partial months can only overshoot an exact target.
            if total > exact or (complete and total != exact):
                violations.append(
                    _violation(
                        rule,
                        f"{employee.name} is scheduled for {total:g}h, "
                        f"exactly {exact:g}h are required.",
                        employee_id=employee.id,
                        total_hours=total,
                        target_hours=exact,
                    )
                )
            continue
        if config.max_hours is not None and total > config.max_hours:
            violations.append(
                _violation(
                    rule,
                    f"{employee.name} is scheduled for {total:g}h, maximum is {config.max_hours:g}h.",
                    employee_id=employee.id,
                    total_hours=total,
                    max_hours=config.max_hours,
                )
            )
        elif complete and config.min_hours is not None and total < config.min_hours:
            violations.append(
                _violation(
                    rule,
                    f"{employee.name} is scheduled for {total:g}h, minimum is {config.min_hours:g}h.",
                    employee_id=employee.id,
                    total_hours=total,
                    min_hours=config.min_hours,
                )
            )
    return violations


def _check_required_work_days(
    rule: SchedulingRule, config: RequiredWorkDaysConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    required = set(config.days_of_week)
    return [
        _violation(
            rule,
            f"{current.isoformat()} is a required work day but nobody is working.",
            day=current,
            weekday=weekday_index(current),
        )
        for current in context.dates
        if weekday_index(current) in required and not _working_entries_on(rule, context, current.day)
    ]


def _to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def _segments(start: int, end: int) -> list[tuple[int, int]]:
    if end > start:
        return [(start, end)]
    # Wraps past midnight.
    return [(start, MINUTES_PER_DAY), (0, end)]


def _overlaps(first: list[tuple[int, int]], second: list[tuple[int, int]]) -> bool:
    return any(a_start < b_end and b_start < a_end for a_start, a_end in first for b_start, b_end in second)


def _check_coverage_by_time(
    rule: SchedulingRule, config: CoverageByTimeConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for current in context.dates:
        weekend = is_weekend(current)
        if (weekend and not config.applies_to_weekends) or (not weekend and not config.applies_to_weekdays):
            continue
        working = _working_entries_on(rule, context, current.day)
        for time_range in config.time_ranges:
            window = _segments(_to_minutes(time_range.start), _to_minutes(time_range.end))
            minimum = time_range.min_employees if time_range.min_employees is not None else config.min_employees
            count = 0
            for entry in working:
                shift = context.shift_of(entry)
                if shift is None or not shift.start_time or not shift.end_time:
                    continue
                if _overlaps(_segments(_to_minutes(shift.start_time), _to_minutes(shift.end_time)), window):
                    count += 1
            if count < minimum:
                violations.append(
                    _violation(
                        rule,
                        f"{current.isoformat()} {time_range.start}-{time_range.end}: "
                        f"{count} employee(s) on duty, minimum is {minimum}.",
                        day=current,
                        time_range=f"{time_range.start}-{time_range.end}",
                        count=count,
                        min_employees=minimum,
                    )
                )
    return violations


def _coverage_by_day_dates(config: CoverageByDayConfig, context: SchedulingContext) -> list[date]:
    if config.day_type == "weekends":
        return [current for current in context.dates if is_weekend(current)]
    if config.day_type == "weekdays":
        return [current for current in context.dates if not is_weekend(current)]
    return sorted(day for day in set(config.specific_days) if context.includes(day))


def _check_coverage_by_day(
    rule: SchedulingRule, config: CoverageByDayConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for current in _coverage_by_day_dates(config, context):
        count = len(_working_entries_on(rule, context, current.day))
        if count < config.min_employees:
            violations.append(
                _violation(
                    rule,
                    f"{current.isoformat()}: {count} employee(s) working, "
                    f"minimum is {config.min_employees}.",
                    day=current,
                    count=count,
                    min_employees=config.min_employees,
                )
            )
    return violations


def _check_required_coverage(
    rule: SchedulingRule, config: RequiredCoverageConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for requirement in config.rules:
        if not context.includes(requirement.date):
            continue
        count = sum(
            1
            for entry in context.entries_on(requirement.date.day)
            if entry.shift_id == requirement.shift_id and _entry_in_scope(rule, context, entry)
        )
        if count < requirement.min_employees:
            violations.append(
                _violation(
                    rule,
                    f"{requirement.date.isoformat()}: {count} employee(s) on shift "
                    f"{requirement.shift_id}, {requirement.min_employees} required.",
                    day=requirement.date,
                    shift_id=requirement.shift_id,
                    count=count,
                    min_employees=requirement.min_employees,
                )
            )
    return violations


def _rest_hours(previous: SchedulingShift, following: SchedulingShift) -> float | None:
    """Hours between the end of ``previous`` and the start of ``following`` on the next day."""

    if not (previous.start_time and previous.end_time and following.start_time):
        return None
    start = _to_minutes(previous.start_time)
    end = _to_minutes(previous.end_time)
    if end <= start:
        end += MINUTES_PER_DAY
    return (MINUTES_PER_DAY + _to_minutes(following.start_time) - end) / 60


def _check_min_rest_between_shifts(
    rule: SchedulingRule, config: MinRestBetweenShiftsConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for employee in _employees_in_scope(rule, context):
        for previous_day, current in zip(context.dates, context.dates[1:]):
            previous_entry = context.entry_for(employee.id, previous_day.day)
            current_entry = context.entry_for(employee.id, current.day)
            if not (context.is_working(previous_entry) and context.is_working(current_entry)):
                continue
            rest = _rest_hours(
                context.shifts_by_id[previous_entry.shift_id],
                context.shifts_by_id[current_entry.shift_id],
            )
            if rest is not None and rest < config.hours:
                violations.append(
                    _violation(
                        rule,
                        f"{employee.name} has {rest:g}h of rest before {current.isoformat()}, "
                        f"minimum is {config.hours:g}h.",
                        employee_id=employee.id,
                        day=current,
                        rest_hours=rest,
                        min_hours=config.hours,
                    )
                )
    return violations


def _check_required_roles_per_shift(
    rule: SchedulingRule, config: RequiredRolesPerShiftConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    shift_ids = set(config.shift_ids)
    shifts = [
        shift
        for shift in context.shifts
        if shift.is_working and (not shift_ids or shift.id in shift_ids)
    ]
    violations: list[SchedulingViolation] = []
    for current in context.dates:
        working = _working_entries_on(rule, context, current.day)
        for shift in shifts:
            count = 0
            for entry in working:
                employee = context.employees_by_id.get(entry.employee_id)
                if entry.shift_id == shift.id and employee is not None and employee.role_name == config.role:
                    count += 1
            if count < config.min_count:
                violations.append(
                    _violation(
                        rule,
                        f"{current.isoformat()}: shift {shift.name} has {count} {config.role}(s), "
                        f"{config.min_count} required.",
                        day=current,
                        shift_id=shift.id,
                        role=config.role,
                        count=count,
                        min_count=config.min_count,
                    )
                )
    return violations


def _check_employee_day_off(
    rule: SchedulingRule, config: EmployeeDayOffConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    if not context.includes(config.date):
        return []
    entry = context.entry_for(config.employee_id, config.date.day)
    if not context.is_working(entry):
        return []
    return [
        _violation(
            rule,
            f"Employee {config.employee_id} must be off on {config.date.isoformat()} "
            f"but is assigned to shift {entry.shift_id}.",
            employee_id=config.employee_id,
            day=config.date,
            shift_id=entry.shift_id,
        )
    ]


def _check_approved_day_offs(
    rule: SchedulingRule, config: RuleConfig, context: SchedulingContext
) -> list[SchedulingViolation]:
    violations: list[SchedulingViolation] = []
    for request in context.approved_day_offs:
        if not context.includes(request.date):
            continue
        employee = context.employees_by_id.get(request.employee_id)
        if rule.is_scoped and (employee is None or not rule.applies_to(employee)):
            continue
        entry = context.entry_for(request.employee_id, request.date.day)
        if entry is None or entry.shift_id == DAY_OFF_SHIFT_ID:
            continue
        name = employee.name if employee else request.employee_id
        violations.append(
            _violation(
                rule,
                f"{name} has an approved day off on {request.date.isoformat()} "
                f"but is assigned to shift {entry.shift_id}.",
                employee_id=request.employee_id,
                day=request.date,
                shift_id=entry.shift_id,
            )
        )
    return violations


_CHECKERS: dict[RuleType, Checker] = {
    RuleType.MAX_CONSECUTIVE_SHIFTS: _check_consecutive_work_days,
    RuleType.MAX_CONSECUTIVE_WORK_DAYS: _check_consecutive_work_days,
    RuleType.RECOMMENDED_WORK_DAYS: _check_recommended_work_days,
    RuleType.MAX_CONSECUTIVE_DAYS_OFF: _check_consecutive_days_off,
    RuleType.MIN_EMPLOYEES_PER_SHIFT: _check_min_employees_per_shift,
    RuleType.MAX_EMPLOYEES_PER_SHIFT: _check_max_employees_per_shift,
    RuleType.MAX_EMPLOYEES_PER_SHIFT_TYPE: _check_max_employees_per_shift_type,
    RuleType.SHIFT_TYPE_LIMIT_PER_DAY: _check_shift_type_limit_per_day,
    RuleType.MANAGER_REQUIREMENTS: _check_manager_requirements,
    RuleType.MAX_TOTAL_HOURS: _check_max_total_hours,
    RuleType.MAX_HOURS_PER_WEEK: _check_max_hours_per_week,
    RuleType.MAX_HOURS_PER_MONTH: _check_max_total_hours,
    RuleType.MAX_SHIFTS_PER_WEEK: _check_max_shifts_per_week,
    RuleType.MIN_REST_BETWEEN_SHIFTS: _check_min_rest_between_shifts,
    RuleType.REQUIRED_ROLES_PER_SHIFT: _check_required_roles_per_shift,
    RuleType.EMPLOYEE_HOURS_LIMIT: _check_employee_hours_limit,
    RuleType.MAX_HOURS_WITHOUT_MANAGERS: _check_hours_without_managers,
    RuleType.REQUIRED_WORK_DAYS: _check_required_work_days,
    RuleType.COVERAGE_BY_TIME: _check_coverage_by_time,
    RuleType.COVERAGE_BY_DAY: _check_coverage_by_day,
    RuleType.REQUIRED_COVERAGE: _check_required_coverage,
    RuleType.EMPLOYEE_DAY_OFF: _check_employee_day_off,
    RuleType.APPROVED_DAY_OFF_REQUESTS: _check_approved_day_offs,
}
