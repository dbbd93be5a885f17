from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from work_scheduler.db.models.staff import Employee, Role
from work_scheduler.schemas.staff import EmployeeCreate, EmployeeUpdate, RoleCreate, RoleUpdate


async def list_roles(session: AsyncSession) -> list[Role]:
    result = await session.execute(select(Role).order_by(Role.id))
    return list(result.scalars().all())


async def create_role(session: AsyncSession, payload: RoleCreate) -> Role:
    role = Role(**payload.model_dump())
    session.add(role)
    await session.flush()
    await session.refresh(role)
    return role


async def get_role(session: AsyncSession, role_id: int) -> Role | None:
    return await session.get(Role, role_id)


async def update_role(session: AsyncSession, role: Role, payload: RoleUpdate) -> Role:
    data = payload.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(role, field, value)
    await session.flush()
    await session.refresh(role)
    return role


async def list_employees(session: AsyncSession) -> list[Employee]:
    result = await session.execute(
        select(Employee).options(selectinload(Employee.role)).order_by(Employee.id)
    )
    return list(result.scalars().all())


async def create_employee(session: AsyncSession, payload: EmployeeCreate) -> Employee:
    employee = Employee(**payload.model_dump())
    session.add(employee)
    await session.flush()
    await session.refresh(employee)
    return employee


async def get_employee(session: AsyncSession, employee_id: str) -> Employee | None:
    return await session.get(Employee, employee_id, options=[selectinload(Employee.role)])


async def update_employee(
    session: AsyncSession, employee: Employee, payload: EmployeeUpdate
) -> Employee:
    data = payload.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(employee, field, value)
    await session.flush()
    await session.refresh(employee)
    return employee


async def delete_employee(session: AsyncSession, employee: Employee) -> None:
    await session.delete(employee)
