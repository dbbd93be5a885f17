from .rules import ValidationRule
from .schedule import EmployeePreference, ScheduleEntry
from .staff import Employee, Role, Shift

__all__ = [
    "Role",
    "Employee",
    "Shift",
    "ScheduleEntry",
    "EmployeePreference",
    "ValidationRule",
]
