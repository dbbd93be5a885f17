from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from work_scheduler.services.rules import parse_rule_config


class ValidationRuleBase(BaseModel):
    rule_type: str
    enabled: bool = True
    config: dict[str, Any] = Field(default_factory=dict)
    applies_to_roles: list[str] | None = None
    applies_to_employees: list[str] | None = None
    enforcement_type: Literal["error", "warning", "info"] | None = None
    custom_message: str | None = None
    priority: int = 0
    description: str | None = None


class ValidationRuleCreate(ValidationRuleBase):
    @model_validator(mode="after")
    def validate_config(self) -> "ValidationRuleCreate":
        parse_rule_config(self.rule_type, self.config)
        return self


class ValidationRuleRead(ValidationRuleBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ValidationRuleUpdate(BaseModel):
    rule_type: str | None = None
    enabled: bool | None = None
    config: dict[str, Any] | None = None
    applies_to_roles: list[str] | None = None
    applies_to_employees: list[str] | None = None
    enforcement_type: Literal["error", "warning", "info"] | None = None
    custom_message: str | None = None
    priority: int | None = None
    description: str | None = None
