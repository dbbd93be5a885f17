from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

PreferenceType = Literal["day_off", "preferred_shift", "avoid_shift"]
PreferenceStatus = Literal["pending", "approved", "rejected"]


class PreferenceBase(BaseModel):
    employee_id: str
    preference_type: PreferenceType = "day_off"
    target_date: date
    target_shift_id: str | None = None
    priority: int = 1
    notes: str | None = None


class PreferenceCreate(PreferenceBase):
    pass


class PreferenceRead(PreferenceBase):
    id: int
    status: PreferenceStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PreferenceStatusUpdate(BaseModel):
    status: PreferenceStatus
