from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from work_scheduler.db.session import get_db_session
from work_scheduler.repositories import schedule as schedule_repo
from work_scheduler.repositories import snapshot as snapshot_repo
from work_scheduler.schemas.schedule import (
    ScheduleEntryRead,
    ScheduleGenerationRequest,
    ScheduleGenerationResponse,
    ScheduleValidationResponse,
    ScheduleViolation,
)
from work_scheduler.services.scheduler import MissingDayOffShiftError, generate_schedule
from work_scheduler.services.validator import validate_schedule

router = APIRouter()

MonthQuery = Annotated[int, Query(ge=0, le=11, description="0-based month")]
YearQuery = Annotated[int, Query(ge=1970, le=9999)]


@router.get("/schedule", response_model=list[ScheduleEntryRead])
async def list_schedule(
    month: MonthQuery,
    year: YearQuery,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[ScheduleEntryRead]:
    entries = await schedule_repo.list_entries_for_month(session, month, year)
    return [ScheduleEntryRead.model_validate(entry) for entry in entries]


@router.get("/schedule/validate", response_model=ScheduleValidationResponse)
async def validate_month(
    month: MonthQuery,
    year: YearQuery,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ScheduleValidationResponse:
    snapshot = await snapshot_repo.load_month_snapshot(session, month, year)
    schedule = await snapshot_repo.load_month_schedule(session, month, year)
    result = validate_schedule(
        schedule,
        snapshot.employees,
        snapshot.shifts,
        month,
        year,
        snapshot.approved_day_offs,
        snapshot.rules,
    )
    return ScheduleValidationResponse.model_validate(result)


@router.post("/auto-schedule/generate", response_model=ScheduleGenerationResponse)
async def generate_month(
    payload: ScheduleGenerationRequest,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ScheduleGenerationResponse:
    snapshot = await snapshot_repo.load_month_snapshot(session, payload.month, payload.year)
    try:
        result = generate_schedule(
            payload.month,
            payload.year,
            snapshot.employees,
            snapshot.shifts,
            snapshot.rules,
            snapshot.approved_day_offs,
        )
    except MissingDayOffShiftError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    await schedule_repo.replace_month(session, payload.month, payload.year, result.entries)
    await session.commit()

    return ScheduleGenerationResponse(
        month=payload.month,
        year=payload.year,
        entries=[ScheduleEntryRead.model_validate(entry) for entry in result.entries],
        violations=[ScheduleViolation.model_validate(violation) for violation in result.violations],
    )
