from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ScheduleEntryRead(BaseModel):
    employee_id: str
    day: int
    month: int
    year: int
    shift_id: str

    model_config = ConfigDict(from_attributes=True)


class ScheduleGenerationRequest(BaseModel):
    month: int = Field(ge=0, le=11, description="0-based month")
    year: int = Field(ge=1970, le=9999)


class ScheduleViolation(BaseModel):
    type: str
    severity: Literal["error", "warning", "info"]
    message: str
    employee_id: str | None = None
    date: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)


class ScheduleMetricsRead(BaseModel):
    total_shifts: int
    total_hours: float
    hours_by_employee: dict[str, float] = Field(default_factory=dict)
    errors: int = 0
    warnings: int = 0
    infos: int = 0

    model_config = ConfigDict(from_attributes=True)


class RuleStatusRead(BaseModel):
    rule_id: int
    rule_type: str
    status: Literal["ok", "info", "warning", "error"]
    violation_count: int = 0
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ScheduleGenerationResponse(BaseModel):
    month: int
    year: int
    entries: list[ScheduleEntryRead] = Field(default_factory=list)
    violations: list[ScheduleViolation] = Field(default_factory=list)


class ScheduleValidationResponse(BaseModel):
    is_valid: bool
    violations: list[ScheduleViolation] = Field(default_factory=list)
    metrics: ScheduleMetricsRead
    rule_statuses: list[RuleStatusRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
