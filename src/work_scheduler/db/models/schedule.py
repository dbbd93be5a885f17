from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from work_scheduler.db.base import Base

if TYPE_CHECKING:
    from work_scheduler.db.models.staff import Employee, Shift


class ScheduleEntry(Base):
    __table_args__ = (
        UniqueConstraint("employee_id", "day", "month", "year", name="uq_scheduleentry_employee_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    employee_id: Mapped[str] = mapped_column(ForeignKey("employee.id", ondelete="CASCADE"), index=True)
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False, index=True)  # 0-based
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    shift_id: Mapped[str] = mapped_column(ForeignKey("shift.id"), nullable=False)

    employee: Mapped["Employee"] = relationship(back_populates="schedule_entries")
    shift: Mapped["Shift"] = relationship()


class EmployeePreference(Base):
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    employee_id: Mapped[str] = mapped_column(ForeignKey("employee.id", ondelete="CASCADE"), index=True)
    preference_type: Mapped[str] = mapped_column(String(32), nullable=False)
    target_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    target_shift_id: Mapped[Optional[str]] = mapped_column(ForeignKey("shift.id", ondelete="SET NULL"))
    status: Mapped[str] = mapped_column(String(16), default="pending", nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=sa.func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False
    )

    employee: Mapped["Employee"] = relationship(back_populates="preferences")
