from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from work_scheduler.db.base import Base

if TYPE_CHECKING:
    from work_scheduler.db.models.schedule import EmployeePreference, ScheduleEntry


class Role(Base):
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    permissions: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)

    employees: Mapped[list["Employee"]] = relationship(back_populates="role")


class Employee(Base):
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    role_id: Mapped[Optional[int]] = mapped_column(ForeignKey("role.id", ondelete="SET NULL"))
    exclude_from_hours: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    role: Mapped[Optional[Role]] = relationship(back_populates="employees")
    schedule_entries: Mapped[list["ScheduleEntry"]] = relationship(
        back_populates="employee", cascade="all, delete-orphan"
    )
    preferences: Mapped[list["EmployeePreference"]] = relationship(
        back_populates="employee", cascade="all, delete-orphan"
    )


class Shift(Base):
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    abbreviation: Mapped[str] = mapped_column(String(8), default="", nullable=False)
    color: Mapped[str] = mapped_column(String(16), default="#cccccc", nullable=False)
    hours: Mapped[float] = mapped_column(Numeric(4, 2), nullable=False)
    start_time: Mapped[Optional[str]] = mapped_column(String(5))
    end_time: Mapped[Optional[str]] = mapped_column(String(5))
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
