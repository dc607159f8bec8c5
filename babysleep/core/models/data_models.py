# babysleep/core/models/data_models.py

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from babysleep.utils.time_utils import as_utc


class SleepType(str, Enum):
    NAP = "nap"
    NIGHT = "night"


class ChildProfile(BaseModel):
    id: str
    name: str
    birth_date: date
    created_at: Optional[datetime] = None

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return str(v)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Child name must not be empty')
        return v.strip()

    @field_validator('created_at')
    @classmethod
    def normalize_created_at(cls, v):
        return as_utc(v) if v is not None else v


class SleepSession(BaseModel):
    """One sleep interval for a child. A missing end_time means the child is still asleep."""
    model_config = ConfigDict(frozen=True)

    id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    sleep_type: Optional[SleepType] = None
    child_id: Optional[str] = None
    location: Optional[str] = None
    wake_reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator('id', 'child_id', mode='before')
    @classmethod
    def coerce_identifier(cls, v):
        return str(v) if v is not None else v

    @field_validator('start_time', 'end_time', 'created_at')
    @classmethod
    def normalize_timestamps(cls, v):
        # Naive timestamps are stored as UTC so aware and naive inputs compare
        return as_utc(v) if v is not None else v

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @property
    def is_completed(self) -> bool:
        return self.end_time is not None and self.end_time > self.start_time

