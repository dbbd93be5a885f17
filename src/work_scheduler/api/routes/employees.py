from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from work_scheduler.db.session import get_db_session
from work_scheduler.repositories import staff as staff_repo
from work_scheduler.schemas.staff import (
    EmployeeCreate,
    EmployeeRead,
    EmployeeUpdate,
    RoleCreate,
    RoleRead,
    RoleUpdate,
)

router = APIRouter()
roles_router = APIRouter()


@router.get("/", response_model=list[EmployeeRead])
async def list_employees(
    session: Annotated[AsyncSession, Depends(get_db_session)]
) -> list[EmployeeRead]:
    employees = await staff_repo.list_employees(session)
    return [EmployeeRead.model_validate(employee) for employee in employees]


@router.post("/", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: EmployeeCreate, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> EmployeeRead:
    if await staff_repo.get_employee(session, payload.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Employee already exists")
    if payload.role_id is not None and not await staff_repo.get_role(session, payload.role_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
    employee = await staff_repo.create_employee(session, payload)
    await session.commit()
    return EmployeeRead.model_validate(employee)


@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: str,
    payload: EmployeeUpdate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> EmployeeRead:
    employee = await staff_repo.get_employee(session, employee_id)
    if not employee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    if payload.role_id is not None and not await staff_repo.get_role(session, payload.role_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
    employee = await staff_repo.update_employee(session, employee, payload)
    await session.commit()
    return EmployeeRead.model_validate(employee)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> None:
    employee = await staff_repo.get_employee(session, employee_id)
    if not employee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    await staff_repo.delete_employee(session, employee)
    await session.commit()


@roles_router.get("/", response_model=list[RoleRead])
async def list_roles(session: Annotated[AsyncSession, Depends(get_db_session)]) -> list[RoleRead]:
    roles = await staff_repo.list_roles(session)
    return [RoleRead.model_validate(role) for role in roles]


@roles_router.post("/", response_model=RoleRead, status_code=status.HTTP_201_CREATED)
async def create_role(
    payload: RoleCreate, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> RoleRead:
    role = await staff_repo.create_role(session, payload)
    await session.commit()
    return RoleRead.model_validate(role)


@roles_router.put("/{role_id}", response_model=RoleRead)
async def update_role(
    role_id: int,
    payload: RoleUpdate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> RoleRead:
    role = await staff_repo.get_role(session, role_id)
    if not role:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
    role = await staff_repo.update_role(session, role, payload)
    await session.commit()
    return RoleRead.model_validate(role)
