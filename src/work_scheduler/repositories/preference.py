from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from work_scheduler.db.models.schedule import EmployeePreference
from work_scheduler.schemas.preference import PreferenceCreate


async def list_preferences(
    session: AsyncSession, *, employee_id: str | None = None, status: str | None = None
) -> list[EmployeePreference]:
    query = select(EmployeePreference).order_by(
        EmployeePreference.target_date.asc(), EmployeePreference.id.asc()
    )
    if employee_id is not None:
        query = query.where(EmployeePreference.employee_id == employee_id)
    if status is not None:
        query = query.where(EmployeePreference.status == status)
    result = await session.execute(query)
    return list(result.scalars().all())


async def create_preference(session: AsyncSession, payload: PreferenceCreate) -> EmployeePreference:
    preference = EmployeePreference(**payload.model_dump())
    session.add(preference)
    await session.flush()
    await session.refresh(preference)
    return preference


async def get_preference(session: AsyncSession, preference_id: int) -> EmployeePreference | None:
    return await session.get(EmployeePreference, preference_id)


async def set_preference_status(
    session: AsyncSession, preference: EmployeePreference, status: str
) -> EmployeePreference:
    preference.status = status
    await session.flush()
    await session.refresh(preference)
    return preference


async def list_approved_day_offs(
    session: AsyncSession, start: date, end: date
) -> list[EmployeePreference]:
    result = await session.execute(
        select(EmployeePreference)
        .where(EmployeePreference.preference_type == "day_off")
        .where(EmployeePreference.status == "approved")
        .where(EmployeePreference.target_date >= start)
        .where(EmployeePreference.target_date <= end)
    )
    return list(result.scalars().all())
