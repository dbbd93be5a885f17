from typing import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from work_scheduler.db.models.schedule import ScheduleEntry
from work_scheduler.services.domain import SchedulingEntry


async def list_entries_for_month(session: AsyncSession, month: int, year: int) -> list[ScheduleEntry]:
    result = await session.execute(
        select(ScheduleEntry)
        .where(ScheduleEntry.month == month)
        .where(ScheduleEntry.year == year)
        .order_by(ScheduleEntry.day.asc(), ScheduleEntry.employee_id.asc())
    )
    return list(result.scalars().all())


async def replace_month(
    session: AsyncSession,
    month: int,
    year: int,
    entries: Iterable[SchedulingEntry],
) -> list[ScheduleEntry]:
    """Delete the stored month and insert ``entries`` in its place.

    Runs inside the caller's transaction; nothing is visible until it commits.
    """

    await session.execute(
        delete(ScheduleEntry).where(ScheduleEntry.month == month).where(ScheduleEntry.year == year)
    )
    rows = [
        ScheduleEntry(
            employee_id=entry.employee_id,
            day=entry.day,
            month=month,
            year=year,
            shift_id=entry.shift_id,
        )
        for entry in entries
        if entry.month == month and entry.year == year
    ]
    session.add_all(rows)
    await session.flush()
    return rows
