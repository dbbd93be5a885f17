from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from work_scheduler.db.session import get_db_session
from work_scheduler.repositories import shift as shift_repo
from work_scheduler.schemas.staff import ShiftCreate, ShiftRead, ShiftUpdate
from work_scheduler.services.domain import DAY_OFF_SHIFT_ID

router = APIRouter()


@router.get("/", response_model=list[ShiftRead])
async def list_shifts(session: Annotated[AsyncSession, Depends(get_db_session)]) -> list[ShiftRead]:
    shifts = await shift_repo.list_shifts(session)
    return [ShiftRead.model_validate(shift) for shift in shifts]


@router.post("/", response_model=ShiftRead, status_code=status.HTTP_201_CREATED)
async def create_shift(
    payload: ShiftCreate, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> ShiftRead:
    if await shift_repo.get_shift(session, payload.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Shift already exists")
    shift = await shift_repo.create_shift(session, payload)
    await session.commit()
    return ShiftRead.model_validate(shift)


@router.put("/{shift_id}", response_model=ShiftRead)
async def update_shift(
    shift_id: str,
    payload: ShiftUpdate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ShiftRead:
    shift = await shift_repo.get_shift(session, shift_id)
    if not shift:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found")
    shift = await shift_repo.update_shift(session, shift, payload)
    await session.commit()
    return ShiftRead.model_validate(shift)


@router.delete("/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shift(
    shift_id: str, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> None:
    if shift_id == DAY_OFF_SHIFT_ID:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="The day-off shift cannot be deleted")
    shift = await shift_repo.get_shift(session, shift_id)
    if not shift:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found")
    await shift_repo.delete_shift(session, shift)
    await session.commit()
