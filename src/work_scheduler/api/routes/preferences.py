from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from work_scheduler.db.session import get_db_session
from work_scheduler.repositories import preference as preference_repo
from work_scheduler.repositories import staff as staff_repo
from work_scheduler.schemas.preference import (
    PreferenceCreate,
    PreferenceRead,
    PreferenceStatus,
    PreferenceStatusUpdate,
)

router = APIRouter()


@router.get("/", response_model=list[PreferenceRead])
async def list_preferences(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    employee_id: Annotated[str | None, Query()] = None,
    status_filter: Annotated[PreferenceStatus | None, Query(alias="status")] = None,
) -> list[PreferenceRead]:
    preferences = await preference_repo.list_preferences(
        session, employee_id=employee_id, status=status_filter
    )
    return [PreferenceRead.model_validate(item) for item in preferences]


@router.post("/", response_model=PreferenceRead, status_code=status.HTTP_201_CREATED)
async def create_preference(
    payload: PreferenceCreate, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> PreferenceRead:
    if not await staff_repo.get_employee(session, payload.employee_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    preference = await preference_repo.create_preference(session, payload)
    await session.commit()
    return PreferenceRead.model_validate(preference)


@router.put("/{preference_id}/status", response_model=PreferenceRead)
async def update_preference_status(
    preference_id: int,
    payload: PreferenceStatusUpdate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PreferenceRead:
    preference = await preference_repo.get_preference(session, preference_id)
    if not preference:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Preference not found")
    preference = await preference_repo.set_preference_status(session, preference, payload.status)
    await session.commit()
    return PreferenceRead.model_validate(preference)
