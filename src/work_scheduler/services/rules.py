"""Domain representations for validation rules and loaders."""

from __future__ import annotations

import datetime as dt
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from importlib import resources
from typing import Any, Iterable, Literal, cast

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from work_scheduler.services.domain import SchedulingEmployee

logger = logging.getLogger(__name__)

Severity = Literal["error", "warning", "info"]


class RuleType(str, Enum):
    MAX_CONSECUTIVE_SHIFTS = "max_consecutive_shifts"
    MAX_CONSECUTIVE_WORK_DAYS = "max_consecutive_work_days"
    RECOMMENDED_WORK_DAYS = "recommended_work_days"
    MAX_CONSECUTIVE_DAYS_OFF = "max_consecutive_days_off"
    MIN_EMPLOYEES_PER_SHIFT = "min_employees_per_shift"
    MAX_EMPLOYEES_PER_SHIFT = "max_employees_per_shift"
    MAX_EMPLOYEES_PER_SHIFT_TYPE = "max_employees_per_shift_type"
    SHIFT_TYPE_LIMIT_PER_DAY = "shift_type_limit_per_day"
    MANAGER_REQUIREMENTS = "manager_requirements"
    MAX_TOTAL_HOURS = "max_total_hours"
    MAX_HOURS_PER_WEEK = "max_hours_per_week"
    MAX_HOURS_PER_MONTH = "max_hours_per_month"
    MAX_SHIFTS_PER_WEEK = "max_shifts_per_week"
    MIN_REST_BETWEEN_SHIFTS = "min_rest_between_shifts"
    REQUIRED_ROLES_PER_SHIFT = "required_roles_per_shift"
    EMPLOYEE_HOURS_LIMIT = "employee_hours_limit"
    MAX_HOURS_WITHOUT_MANAGERS = "max_hours_without_managers"
    REQUIRED_WORK_DAYS = "required_work_days"
    COVERAGE_BY_TIME = "coverage_by_time"
    COVERAGE_BY_DAY = "coverage_by_day"
    REQUIRED_COVERAGE = "required_coverage"
    EMPLOYEE_DAY_OFF = "employee_day_off"
    APPROVED_DAY_OFF_REQUESTS = "approved_day_off_requests"


CONSECUTIVE_WORK_RULE_TYPES = frozenset(
    {RuleType.MAX_CONSECUTIVE_WORK_DAYS, RuleType.MAX_CONSECUTIVE_SHIFTS}
)


class RuleConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


DEFAULT_MAX_CONSECUTIVE_WORK_DAYS = 5


class ConsecutiveWorkDaysConfig(RuleConfig):
    max_days: int | None = Field(
        default=DEFAULT_MAX_CONSECUTIVE_WORK_DAYS,
        ge=0,
        validation_alias=AliasChoices("max_days", "max_consecutive_days"),
    )

    @field_validator("max_days", mode="after")
    @classmethod
    def default_when_null(cls, value: int | None) -> int:
        return DEFAULT_MAX_CONSECUTIVE_WORK_DAYS if value is None else value


class RecommendedWorkDaysConfig(RuleConfig):
    max_consecutive_days: int = Field(
        default=6, ge=0, validation_alias=AliasChoices("max_consecutive_days", "max_days")
    )


class ConsecutiveDaysOffConfig(RuleConfig):
    max_days: int = Field(default=3, ge=0)


class MinEmployeesPerShiftConfig(RuleConfig):
    min_employees: int = Field(
        default=1, ge=0, validation_alias=AliasChoices("min_employees", "min_count", "min")
    )
    shift_ids: list[str] = Field(default_factory=list)


class MaxEmployeesPerShiftConfig(RuleConfig):
    max_employees: int = Field(
        default=10, ge=0, validation_alias=AliasChoices("max_employees", "max_count", "max")
    )
    shift_ids: list[str] = Field(default_factory=list)


class ShiftLimitsConfig(RuleConfig):
    shift_limits: dict[str, int] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_limits(self) -> "ShiftLimitsConfig":
        if any(limit < 0 for limit in self.shift_limits.values()):
            raise ValueError("shift limits cannot be negative")
        return self


class ManagerRequirementsConfig(RuleConfig):
    min_managers_per_day: int = Field(default=1, ge=0)


class MaxTotalHoursConfig(RuleConfig):
    max_hours: float = Field(
        default=176,
        ge=0,
        validation_alias=AliasChoices("max_hours", "max_total_hours", "max_hours_per_month"),
    )


class MaxHoursPerWeekConfig(RuleConfig):
    max_hours: float = Field(default=40, ge=0)


class MaxShiftsPerWeekConfig(RuleConfig):
    max_shifts: int = Field(
        default=5, ge=0, validation_alias=AliasChoices("max_shifts", "max")
    )


class MinRestBetweenShiftsConfig(RuleConfig):
    hours: float = Field(
        default=12, ge=0, validation_alias=AliasChoices("hours", "min_rest_hours", "min_hours")
    )


class RequiredRolesPerShiftConfig(RuleConfig):
    role: str = Field(min_length=1)
    min_count: int = Field(
        default=1, ge=0, validation_alias=AliasChoices("min_count", "min_employees")
    )
    shift_ids: list[str] = Field(default_factory=list)


class EmployeeHoursLimitConfig(RuleConfig):
    min_hours: float | None = Field(default=None, ge=0)
    max_hours: float | None = Field(default=None, ge=0)
    target_hours: float | None = Field(default=None, ge=0)
    enforcement: Literal["exact", "range"] = "range"

    @model_validator(mode="after")
    def validate_bounds(self) -> "EmployeeHoursLimitConfig":
        if self.min_hours is not None and self.max_hours is not None and self.min_hours > self.max_hours:
            raise ValueError("min_hours cannot exceed max_hours")
        if self.enforcement == "exact" and self.target_hours is None and self.max_hours is None:
            raise ValueError("exact enforcement needs target_hours or max_hours")
        return self

    @property
    def exact_target(self) -> float | None:
        if self.enforcement != "exact":
            return None
        return self.target_hours if self.target_hours is not None else self.max_hours


class EmptyConfig(RuleConfig):
    pass


class RequiredWorkDaysConfig(RuleConfig):
    days_of_week: list[int] = Field(
        default_factory=list, validation_alias=AliasChoices("days_of_week", "required_days")
    )

    @model_validator(mode="after")
    def validate_weekdays(self) -> "RequiredWorkDaysConfig":
        if any(day < 0 or day > 6 for day in self.days_of_week):
            raise ValueError("days_of_week must use 0 (Sunday) to 6 (Saturday)")
        return self


class TimeRange(RuleConfig):
    start: str = Field(pattern=r"^\d{2}:\d{2}$")
    end: str = Field(pattern=r"^\d{2}:\d{2}$")
    min_employees: int | None = Field(default=None, ge=0)


class CoverageByTimeConfig(RuleConfig):
    time_ranges: list[TimeRange] = Field(default_factory=list)
    min_employees: int = Field(default=1, ge=0)
    applies_to_weekdays: bool = True
    applies_to_weekends: bool = True


class CoverageByDayConfig(RuleConfig):
    day_type: Literal["specific", "weekdays", "weekends"] = "specific"
    specific_days: list[dt.date] = Field(default_factory=list)
    min_employees: int = Field(default=1, ge=0)


class CoverageRequirement(RuleConfig):
    shift_id: str
    date: dt.date
    min_employees: int = Field(
        default=1, ge=0, validation_alias=AliasChoices("min_employees", "min_count")
    )


class RequiredCoverageConfig(RuleConfig):
    rules: list[CoverageRequirement] = Field(default_factory=list)


class EmployeeDayOffConfig(RuleConfig):
    employee_id: str = Field(validation_alias=AliasChoices("employee_id", "employeeId"))
    date: dt.date = Field(validation_alias=AliasChoices("date", "specificDate", "specific_date"))


RULE_CONFIG_MODELS: dict[RuleType, type[RuleConfig]] = {
    RuleType.MAX_CONSECUTIVE_SHIFTS: ConsecutiveWorkDaysConfig,
    RuleType.MAX_CONSECUTIVE_WORK_DAYS: ConsecutiveWorkDaysConfig,
    RuleType.RECOMMENDED_WORK_DAYS: RecommendedWorkDaysConfig,
    RuleType.MAX_CONSECUTIVE_DAYS_OFF: ConsecutiveDaysOffConfig,
    RuleType.MIN_EMPLOYEES_PER_SHIFT: MinEmployeesPerShiftConfig,
    RuleType.MAX_EMPLOYEES_PER_SHIFT: MaxEmployeesPerShiftConfig,
    RuleType.MAX_EMPLOYEES_PER_SHIFT_TYPE: ShiftLimitsConfig,
    RuleType.SHIFT_TYPE_LIMIT_PER_DAY: ShiftLimitsConfig,
    RuleType.MANAGER_REQUIREMENTS: ManagerRequirementsConfig,
    RuleType.MAX_TOTAL_HOURS: MaxTotalHoursConfig,
    RuleType.MAX_HOURS_PER_WEEK: MaxHoursPerWeekConfig,
    RuleType.MAX_HOURS_PER_MONTH: MaxTotalHoursConfig,
    RuleType.MAX_SHIFTS_PER_WEEK: MaxShiftsPerWeekConfig,
    RuleType.MIN_REST_BETWEEN_SHIFTS: MinRestBetweenShiftsConfig,
    RuleType.REQUIRED_ROLES_PER_SHIFT: RequiredRolesPerShiftConfig,
    RuleType.EMPLOYEE_HOURS_LIMIT: EmployeeHoursLimitConfig,
    RuleType.MAX_HOURS_WITHOUT_MANAGERS: EmptyConfig,
    RuleType.REQUIRED_WORK_DAYS: RequiredWorkDaysConfig,
    RuleType.COVERAGE_BY_TIME: CoverageByTimeConfig,
    RuleType.COVERAGE_BY_DAY: CoverageByDayConfig,
    RuleType.REQUIRED_COVERAGE: RequiredCoverageConfig,
    RuleType.EMPLOYEE_DAY_OFF: EmployeeDayOffConfig,
    RuleType.APPROVED_DAY_OFF_REQUESTS: EmptyConfig,
}


class RuleConfigError(ValueError):
    """Raised when a rule type is unknown or its config does not match its schema."""


@dataclass(frozen=True)
class SchedulingRule:
    """A validation rule with its config already parsed for its kind.

    ``config`` is ``None`` for rules that could not be parsed; such rules are
    inert and never produce violations.
    """

    id: int
    rule_type: str
    config: RuleConfig | None = None
    priority: int = 0
    enabled: bool = True
    severity: Severity | None = None
    applies_to_roles: tuple[str, ...] = ()
    applies_to_employees: tuple[str, ...] = ()
    custom_message: str | None = None
    description: str | None = None
    raw_config: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def kind(self) -> RuleType | None:
        try:
            return RuleType(self.rule_type)
        except ValueError:
            return None

    @property
    def effective_severity(self) -> Severity:
        if self.severity is not None:
            return self.severity
        if self.kind is RuleType.RECOMMENDED_WORK_DAYS:
            return "info"
        return "warning"

    @property
    def is_scoped(self) -> bool:
        return bool(self.applies_to_roles or self.applies_to_employees)

    def applies_to(self, employee: SchedulingEmployee) -> bool:
        if not self.is_scoped:
            return True
        if employee.id in self.applies_to_employees:
            return True
        return employee.role_name is not None and employee.role_name in self.applies_to_roles


def parse_rule_config(rule_type: str, config: dict[str, Any] | None) -> RuleConfig:
    """Validate ``config`` against the schema registered for ``rule_type``."""

    try:
        kind = RuleType(rule_type)
    except ValueError as exc:
        raise RuleConfigError(f"Unknown rule type '{rule_type}'") from exc
    model = RULE_CONFIG_MODELS[kind]
    try:
        return model.model_validate(config or {})
    except ValidationError as exc:
        raise RuleConfigError(f"Invalid config for rule type '{rule_type}': {exc}") from exc


def load_rule(
    *,
    id: int,
    rule_type: str,
    config: dict[str, Any] | None = None,
    priority: int = 0,
    enabled: bool = True,
    severity: Severity | None = None,
    applies_to_roles: Iterable[str] | None = None,
    applies_to_employees: Iterable[str] | None = None,
    custom_message: str | None = None,
    description: str | None = None,
) -> SchedulingRule:
    """Build a rule from stored fields; an unparseable rule is kept but made inert."""

    try:
        parsed: RuleConfig | None = parse_rule_config(rule_type, config)
    except RuleConfigError as exc:
        logger.warning("Rule %s loaded as inert: %s", id, exc)
        parsed = None
    return SchedulingRule(
        id=id,
        rule_type=rule_type,
        config=parsed,
        priority=priority,
        enabled=enabled,
        severity=severity,
        applies_to_roles=tuple(applies_to_roles or ()),
        applies_to_employees=tuple(str(item) for item in applies_to_employees or ()),
        custom_message=custom_message,
        description=description,
        raw_config=dict(config or {}),
    )


def order_rules(rules: Iterable[SchedulingRule]) -> list[SchedulingRule]:
    """Enabled rules in evaluation order: ascending priority, then id."""

    return sorted((rule for rule in rules if rule.enabled), key=lambda rule: (rule.priority, rule.id))


def first_rule_of(rules: Iterable[SchedulingRule], kinds: Iterable[RuleType]) -> SchedulingRule | None:
    wanted = set(kinds)
    for rule in order_rules(rules):
        if rule.kind in wanted and rule.config is not None:
            return rule
    return None


def consecutive_work_limit(rules: Iterable[SchedulingRule]) -> int | None:
    """``max_days`` of the first consecutive-work rule, or ``None`` when there is none."""

    rule = first_rule_of(rules, CONSECUTIVE_WORK_RULE_TYPES)
    if rule is None:
        return None
    return cast(ConsecutiveWorkDaysConfig, rule.config).max_days


def _load_rules_from_json() -> list[dict[str, Any]]:
    with resources.files("work_scheduler.services.data").joinpath("default_rules.json").open(
        "r", encoding="utf-8"
    ) as handle:
        payload = json.load(handle)
    return list(payload["rules"])


@lru_cache(maxsize=1)
def load_default_rules() -> tuple[SchedulingRule, ...]:
    """Return the default rule set bundled with the application."""

    return tuple(
        load_rule(id=index, **item) for index, item in enumerate(_load_rules_from_json(), start=1)
    )
