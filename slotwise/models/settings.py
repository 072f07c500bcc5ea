"""Per-user auto-schedule settings model for slotwise."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from slotwise.models.constants import (
    DEFAULT_WORK_DAYS,
    DEFAULT_WORK_HOUR_START,
    DEFAULT_WORK_HOUR_END,
    DEFAULT_BUFFER_MINUTES,
    DEFAULT_MIN_BREAK_MINUTES,
    DEFAULT_MAX_CONSECUTIVE_HOURS,
    DEFAULT_HIGH_ENERGY_WINDOW,
    DEFAULT_MEDIUM_ENERGY_WINDOW,
    DEFAULT_LOW_ENERGY_WINDOW,
)


def _dedupe_weekdays(days: List[int]) -> List[int]:
    seen = set()
    out: List[int] = []
    for day in days:
        if day < 1 or day > 7:
            raise ValueError("work_days entries must be ISO weekdays 1-7")
        if day not in seen:
            seen.add(day)
            out.append(day)
    return out


class AutoScheduleSettings(BaseModel):
    """Scheduling preferences the suggestion engine reads for one user."""

    user_id: str = Field(..., description="User ID who owns these settings")
    work_days: List[int] = Field(default_factory=lambda: list(DEFAULT_WORK_DAYS), description="ISO weekdays (Monday=1)")
    work_hour_start: int = Field(DEFAULT_WORK_HOUR_START, ge=0, le=23, description="Work day start hour")
    work_hour_end: int = Field(DEFAULT_WORK_HOUR_END, ge=1, le=24, description="Work day end hour")
    buffer_minutes: int = Field(DEFAULT_BUFFER_MINUTES, ge=0, description="Buffer between tasks in minutes")

    # Energy windows: [start, end) hours, either bound may be unset
    high_energy_start: Optional[int] = Field(DEFAULT_HIGH_ENERGY_WINDOW[0], ge=0, le=24)
    high_energy_end: Optional[int] = Field(DEFAULT_HIGH_ENERGY_WINDOW[1], ge=0, le=24)
    medium_energy_start: Optional[int] = Field(DEFAULT_MEDIUM_ENERGY_WINDOW[0], ge=0, le=24)
    medium_energy_end: Optional[int] = Field(DEFAULT_MEDIUM_ENERGY_WINDOW[1], ge=0, le=24)
    low_energy_start: Optional[int] = Field(DEFAULT_LOW_ENERGY_WINDOW[0], ge=0, le=24)
    low_energy_end: Optional[int] = Field(DEFAULT_LOW_ENERGY_WINDOW[1], ge=0, le=24)

    enforce_breaks: bool = Field(True, description="Whether break violations are reported")
    min_break_duration: int = Field(DEFAULT_MIN_BREAK_MINUTES, ge=0, description="Minimum break in minutes")
    max_consecutive_hours: int = Field(DEFAULT_MAX_CONSECUTIVE_HOURS, ge=1, description="Max continuous work hours")
    enable_suggestions: bool = Field(True, description="Master switch for suggestion generation")
    selected_calendars: List[str] = Field(default_factory=list, description="Calendar feed IDs checked for conflicts")

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("work_days")
    @classmethod
    def _validate_work_days(cls, v):
        return _dedupe_weekdays(v)

    @model_validator(mode="after")
    def _validate_work_hours(self):
        if self.work_hour_start >= self.work_hour_end:
            raise ValueError("work_hour_start must be before work_hour_end")
        return self


class AutoScheduleSettingsUpdate(BaseModel):
    """Partial update payload for AutoScheduleSettings (unset fields are left alone)."""

    work_days: Optional[List[int]] = None
    work_hour_start: Optional[int] = Field(None, ge=0, le=23)
    work_hour_end: Optional[int] = Field(None, ge=1, le=24)
    buffer_minutes: Optional[int] = Field(None, ge=0)
    high_energy_start: Optional[int] = Field(None, ge=0, le=24)
    high_energy_end: Optional[int] = Field(None, ge=0, le=24)
    medium_energy_start: Optional[int] = Field(None, ge=0, le=24)
    medium_energy_end: Optional[int] = Field(None, ge=0, le=24)
    low_energy_start: Optional[int] = Field(None, ge=0, le=24)
    low_energy_end: Optional[int] = Field(None, ge=0, le=24)
    enforce_breaks: Optional[bool] = None
    min_break_duration: Optional[int] = Field(None, ge=0)
    max_consecutive_hours: Optional[int] = Field(None, ge=1)
    enable_suggestions: Optional[bool] = None
    selected_calendars: Optional[List[str]] = None

    @field_validator("work_days")
    @classmethod
    def _validate_work_days(cls, v):
        if v is None:
            return None
        return _dedupe_weekdays(v)


class SettingsLookup:
    """Result of a get-or-create settings lookup.

    `created` is True only when defaults were written for a first-time user.
    """

    def __init__(self, settings: AutoScheduleSettings, created: bool):
        self.settings = settings
        self.created = created
