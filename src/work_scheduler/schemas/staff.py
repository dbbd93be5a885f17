from pydantic import BaseModel, ConfigDict, Field

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class RoleBase(BaseModel):
    name: str = Field(min_length=1, max_length=80)
    description: str | None = None
    permissions: dict[str, bool] = Field(default_factory=dict)


class RoleCreate(RoleBase):
    pass


class RoleRead(RoleBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class RoleUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=80)
    description: str | None = None
    permissions: dict[str, bool] | None = None


class EmployeeBase(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=120)
    role_id: int | None = None
    exclude_from_hours: bool = False


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeRead(EmployeeBase):
    model_config = ConfigDict(from_attributes=True)


class EmployeeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    role_id: int | None = None
    exclude_from_hours: bool | None = None


class ShiftBase(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str
    abbreviation: str = Field(default="", max_length=8)
    color: str = "#cccccc"
    hours: float = Field(ge=0)
    start_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    end_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    is_default: bool = False


class ShiftCreate(ShiftBase):
    pass


class ShiftRead(ShiftBase):
    model_config = ConfigDict(from_attributes=True)


class ShiftUpdate(BaseModel):
    name: str | None = None
    abbreviation: str | None = Field(default=None, max_length=8)
    color: str | None = None
    hours: float | None = Field(default=None, ge=0)
    start_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    end_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    is_default: bool | None = None
