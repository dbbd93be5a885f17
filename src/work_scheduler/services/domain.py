"""In-memory snapshot types shared by the generator and the validator."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Iterator, Mapping, Sequence

DAY_OFF_SHIFT_ID = "day-off"

MANAGER_PERMISSIONS = frozenset({"manage_schedule", "approve_preferences"})


@dataclass(frozen=True)
class SchedulingRole:
    id: int
    name: str
    permissions: frozenset[str] = frozenset()


@dataclass(frozen=True)
class SchedulingEmployee:
    id: str
    name: str
    role: SchedulingRole | None = None
    exclude_from_hours: bool = False

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role else None

    @property
    def is_manager(self) -> bool:
        if self.role is None:
            return False
        return bool(self.role.permissions & MANAGER_PERMISSIONS)


@dataclass(frozen=True)
class SchedulingShift:
    id: str
    name: str
    hours: float
    abbreviation: str = ""
    color: str = "#cccccc"
    start_time: str | None = None
    end_time: str | None = None
    is_default: bool = False

    @property
    def is_working(self) -> bool:
        return self.hours > 0


@dataclass(frozen=True)
class SchedulingEntry:
    """One employee's shift on one calendar day; ``month`` is 0-based."""

    employee_id: str
    day: int
    month: int
    year: int
    shift_id: str


@dataclass(frozen=True)
class ApprovedDayOff:
    employee_id: str
    date: date


@dataclass
class SchedulingResult:
    entries: list[SchedulingEntry]
    violations: list = field(default_factory=list)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month + 1)[1]


def iter_month_days(year: int, month: int, through_day: int | None = None) -> Iterator[date]:
    last_day = days_in_month(year, month)
    if through_day is not None:
        last_day = min(last_day, through_day)
    for day in range(1, last_day + 1):
        yield date(year, month + 1, day)


def weekday_index(target: date) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""

    return (target.weekday() + 1) % 7


def is_weekend(target: date) -> bool:
    return target.weekday() >= 5


def working_shifts(shifts: Iterable[SchedulingShift]) -> list[SchedulingShift]:
    return [shift for shift in shifts if shift.is_working]


def find_day_off_shift(shifts: Iterable[SchedulingShift]) -> SchedulingShift | None:
    for shift in shifts:
        if shift.id == DAY_OFF_SHIFT_ID and shift.hours == 0:
            return shift
    return None


def consecutive_work_days(
    schedule: Sequence[SchedulingEntry],
    shifts_by_id: Mapping[str, SchedulingShift],
    employee_id: str,
    target_day: int,
    month: int,
    year: int,
) -> int:
    """Count uninterrupted working days immediately before ``target_day``."""

    by_day: dict[int, str] = {
        entry.day: entry.shift_id
        for entry in schedule
        if entry.employee_id == employee_id and entry.month == month and entry.year == year
    }
    count = 0
    day = target_day - 1
    while day >= 1:
        shift_id = by_day.get(day)
        if shift_id is None:
            break
        shift = shifts_by_id.get(shift_id)
        if shift is None or not shift.is_working:
            break
        count += 1
        day -= 1
    return count
