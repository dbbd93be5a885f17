"""Seed a handful of baseline records for local development.

Run this after applying Alembic migrations:

    python -m alembic upgrade head
    python scripts/seed_demo.py
"""

from __future__ import annotations

import asyncio
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from work_scheduler.core.config import get_settings
from work_scheduler.db.models.rules import ValidationRule
from work_scheduler.db.models.schedule import EmployeePreference
from work_scheduler.db.models.staff import Employee, Role, Shift
from work_scheduler.repositories import schedule as schedule_repo
from work_scheduler.repositories import snapshot as snapshot_repo
from work_scheduler.services.domain import DAY_OFF_SHIFT_ID
from work_scheduler.services.rules import load_default_rules
from work_scheduler.services.scheduler import generate_schedule


async def seed() -> None:
    settings = get_settings()
    engine = create_async_engine(settings.database_url, future=True)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with session_factory() as session:
        if not await session.get(Shift, DAY_OFF_SHIFT_ID):
            session.add(
                Shift(id=DAY_OFF_SHIFT_ID, name="Day off", abbreviation="OFF", color="#ef4444", hours=0, is_default=True)
            )
        existing_shifts = await session.scalar(select(func.count(Shift.id)).where(Shift.hours > 0))
        if not existing_shifts:
            session.add_all(
                [
                    Shift(id="early", name="Early shift", abbreviation="E", color="#22c55e", hours=8, start_time="06:00", end_time="14:00"),
                    Shift(id="late", name="Late shift", abbreviation="L", color="#3b82f6", hours=8, start_time="14:00", end_time="22:00"),
                ]
            )

        existing_roles = await session.scalar(select(func.count(Role.id)))
        if not existing_roles:
            manager = Role(name="Manager", permissions={"manage_schedule": True, "approve_preferences": True})
            staff = Role(name="Staff", permissions={})
            session.add_all([manager, staff])
            await session.flush()
            session.add_all(_build_employees(manager, staff))

        existing_rules = await session.scalar(select(func.count(ValidationRule.id)))
        if not existing_rules:
            session.add_all(
                ValidationRule(
                    rule_type=rule.rule_type,
                    config=rule.raw_config,
                    enforcement_type=rule.severity,
                    priority=rule.priority,
                    description=rule.description,
                )
                for rule in load_default_rules()
            )
            session.add(
                ValidationRule(
                    rule_type="manager_requirements",
                    config={"min_managers_per_day": 1},
                    enforcement_type="warning",
                    priority=6,
                    description="At least one manager on duty every day",
                )
            )

        await session.flush()
        await _generate_initial_schedule(session, date.today())
        await session.commit()

    await engine.dispose()
    print("Seed data inserted (skipped existing rows).")


def _build_employees(manager: Role, staff: Role) -> list[Employee]:
    names = ["Alex Morgan", "Sam Rivera", "Jordan Lee", "Taylor Kim", "Casey Brooks", "Robin Patel"]
    employees = []
    for index, name in enumerate(names, start=1):
        employees.append(
            Employee(
                id=f"emp-{index:02d}",
                name=name,
                role_id=manager.id if index <= 2 else staff.id,
            )
        )
    return employees


async def _generate_initial_schedule(session: AsyncSession, today: date) -> None:
    month, year = today.month - 1, today.year
    existing_requests = await session.scalar(select(func.count(EmployeePreference.id)))
    if not existing_requests:
        session.add(
            EmployeePreference(
                employee_id="emp-03",
                preference_type="day_off",
                target_date=today.replace(day=min(15, today.day + 1)),
                status="approved",
                notes="Demo request",
            )
        )
        await session.flush()

    snapshot = await snapshot_repo.load_month_snapshot(session, month, year)
    if not snapshot.employees:
        return
    result = generate_schedule(
        month, year, snapshot.employees, snapshot.shifts, snapshot.rules, snapshot.approved_day_offs
    )
    await schedule_repo.replace_month(session, month, year, result.entries)


if __name__ == "__main__":
    asyncio.run(seed())
