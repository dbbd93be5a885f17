"""Read the inputs of a generation or validation run and map them to domain objects."""

from dataclasses import dataclass
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from work_scheduler.db.models.rules import ValidationRule
from work_scheduler.db.models.schedule import ScheduleEntry
from work_scheduler.db.models.staff import Employee, Shift
from work_scheduler.repositories import preference as preference_repo
from work_scheduler.repositories import rules as rule_repo
from work_scheduler.repositories import schedule as schedule_repo
from work_scheduler.repositories import shift as shift_repo
from work_scheduler.repositories import staff as staff_repo
from work_scheduler.services.domain import (
    ApprovedDayOff,
    SchedulingEmployee,
    SchedulingEntry,
    SchedulingRole,
    SchedulingShift,
    days_in_month,
)
from work_scheduler.services.rules import SchedulingRule, load_rule


@dataclass
class MonthSnapshot:
    month: int
    year: int
    employees: list[SchedulingEmployee]
    shifts: list[SchedulingShift]
    rules: list[SchedulingRule]
    approved_day_offs: list[ApprovedDayOff]


def map_employee(employee: Employee) -> SchedulingEmployee:
    role = None
    if employee.role is not None:
        granted = frozenset(name for name, value in (employee.role.permissions or {}).items() if value)
        role = SchedulingRole(id=employee.role.id, name=employee.role.name, permissions=granted)
    return SchedulingEmployee(
        id=employee.id,
        name=employee.name,
        role=role,
        exclude_from_hours=bool(employee.exclude_from_hours),
    )


def map_shift(shift: Shift) -> SchedulingShift:
    return SchedulingShift(
        id=shift.id,
        name=shift.name,
        hours=float(shift.hours),
        abbreviation=shift.abbreviation or "",
        color=shift.color,
        start_time=shift.start_time,
        end_time=shift.end_time,
        is_default=bool(shift.is_default),
    )


def map_rule(rule: ValidationRule) -> SchedulingRule:
    return load_rule(
        id=rule.id,
        rule_type=rule.rule_type,
        config=rule.config,
        priority=rule.priority,
        enabled=rule.enabled,
        severity=rule.enforcement_type,
        applies_to_roles=rule.applies_to_roles,
        applies_to_employees=rule.applies_to_employees,
        custom_message=rule.custom_message,
        description=rule.description,
    )


def map_entry(entry: ScheduleEntry) -> SchedulingEntry:
    return SchedulingEntry(
        employee_id=entry.employee_id,
        day=entry.day,
        month=entry.month,
        year=entry.year,
        shift_id=entry.shift_id,
    )


async def load_month_snapshot(session: AsyncSession, month: int, year: int) -> MonthSnapshot:
    employees = await staff_repo.list_employees(session)
    shifts = await shift_repo.list_shifts(session)
    rules = await rule_repo.list_rules(session, enabled_only=True)
    first_day = date(year, month + 1, 1)
    last_day = date(year, month + 1, days_in_month(year, month))
    day_offs = await preference_repo.list_approved_day_offs(session, first_day, last_day)
    return MonthSnapshot(
        month=month,
        year=year,
        employees=[map_employee(employee) for employee in employees],
        shifts=[map_shift(shift) for shift in shifts],
        rules=[map_rule(rule) for rule in rules],
        approved_day_offs=[
            ApprovedDayOff(employee_id=item.employee_id, date=item.target_date) for item in day_offs
        ],
    )


async def load_month_schedule(session: AsyncSession, month: int, year: int) -> list[SchedulingEntry]:
    entries = await schedule_repo.list_entries_for_month(session, month, year)
    return [map_entry(entry) for entry in entries]
