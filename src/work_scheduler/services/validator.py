from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Literal, Sequence

from work_scheduler.services.domain import (
    ApprovedDayOff,
    SchedulingEmployee,
    SchedulingEntry,
    SchedulingShift,
)
from work_scheduler.services.evaluator import SchedulingContext, SchedulingViolation, evaluate
from work_scheduler.services.rules import SchedulingRule, order_rules

_SEVERITY_RANK = {"info": 0, "warning": 1, "error": 2}


@dataclass
class RuleStatus:
    rule_id: int
    rule_type: str
    status: Literal["ok", "info", "warning", "error"]
    violation_count: int = 0
    description: str | None = None


@dataclass
class ScheduleMetrics:
    total_shifts: int = 0
    total_hours: float = 0.0
    hours_by_employee: dict[str, float] = field(default_factory=dict)
    errors: int = 0
    warnings: int = 0
    infos: int = 0


@dataclass
class ValidationResult:
    is_valid: bool
    violations: list[SchedulingViolation] = field(default_factory=list)
    metrics: ScheduleMetrics = field(default_factory=ScheduleMetrics)
    rule_statuses: list[RuleStatus] = field(default_factory=list)


def validate_schedule(
    schedule: Sequence[SchedulingEntry],
    employees: Sequence[SchedulingEmployee],
    shifts: Sequence[SchedulingShift],
    month: int,
    year: int,
    approved_day_offs: Sequence[ApprovedDayOff],
    rules: Sequence[SchedulingRule],
) -> ValidationResult:
    """Run every enabled rule over a complete month and aggregate the findings.

    The schedule is valid as long as no violation has ``error`` severity;
    warnings and infos are reported but do not invalidate it.
    """

    context = SchedulingContext(
        schedule=schedule,
        employees=employees,
        shifts=shifts,
        month=month,
        year=year,
        approved_day_offs=approved_day_offs,
    )

    violations: list[SchedulingViolation] = []
    statuses: list[RuleStatus] = []
    for rule in order_rules(rules):
        found = evaluate(rule, context)
        violations.extend(found)
        statuses.append(_rule_status(rule, found))

    return ValidationResult(
        is_valid=not any(violation.severity == "error" for violation in violations),
        violations=violations,
        metrics=_calculate_metrics(context, violations),
        rule_statuses=statuses,
    )


def _rule_status(rule: SchedulingRule, violations: list[SchedulingViolation]) -> RuleStatus:
    if violations:
        status_value = max(violations, key=lambda v: _SEVERITY_RANK[v.severity]).severity
    else:
        status_value = "ok"
    return RuleStatus(
        rule_id=rule.id,
        rule_type=rule.rule_type,
        status=status_value,
        violation_count=len(violations),
        description=rule.description,
    )


def _calculate_metrics(
    context: SchedulingContext, violations: list[SchedulingViolation]
) -> ScheduleMetrics:
    hours_by_employee: dict[str, float] = defaultdict(float)
    total_shifts = 0
    for entry in context.entries:
        if not context.is_working(entry):
            continue
        total_shifts += 1
        hours_by_employee[entry.employee_id] += context.hours_of(entry)

    severities = [violation.severity for violation in violations]
    return ScheduleMetrics(
        total_shifts=total_shifts,
        total_hours=sum(hours_by_employee.values()),
        hours_by_employee=dict(hours_by_employee),
        errors=severities.count("error"),
        warnings=severities.count("warning"),
        infos=severities.count("info"),
    )
