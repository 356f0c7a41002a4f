"""Tracker models"""
from typing import Iterable, Optional
from datetime import date as dt_date, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from uuid import UUID, uuid4

from habit_tracker.utils.datetime_helpers import start_of_day

DAYS_IN_WEEK = 7


class Schedule(BaseModel):
    """Weekly schedule: one due flag per weekday, index 0=Monday .. 6=Sunday"""
    model_config = ConfigDict(frozen=True)

    days_of_week: tuple[bool, ...]

    @field_validator('days_of_week')
    @classmethod
    def validate_length(cls, v: tuple[bool, ...]) -> tuple[bool, ...]:
        """Ensure exactly one flag per weekday"""
        if len(v) != DAYS_IN_WEEK:
            raise ValueError(
                f"Schedule must have exactly {DAYS_IN_WEEK} days (Monday=0, Sunday=6), got {len(v)}"
            )
        return v

    @classmethod
    def from_weekdays(cls, weekdays: Iterable[int]) -> "Schedule":
        """Build a schedule from weekday indices (0=Monday .. 6=Sunday)"""
        selected = set(weekdays)
        for day in selected:
            if day < 0 or day >= DAYS_IN_WEEK:
                raise ValueError(
                    f"Invalid day: {day}. Days must be 0-6 (Monday=0, Sunday=6)"
                )
        return cls(days_of_week=tuple(i in selected for i in range(DAYS_IN_WEEK)))

    @classmethod
    def every_day(cls) -> "Schedule":
        return cls(days_of_week=(True,) * DAYS_IN_WEEK)

    def weekdays(self) -> list[int]:
        """Indices of the weekdays this schedule is due on"""
        return [i for i, due in enumerate(self.days_of_week) if due]


class Tracker(BaseModel):
    """
    A user-defined habit (with schedule) or irregular event (without)

    `category` holds the title of the owning category; a tracker without
    one cannot be placed in any group and is left out of grouped output.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1)
    emoji: str = ""
    color: str = ""
    schedule: Optional[Schedule] = None
    is_pinned: bool = False
    category: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Trim whitespace and reject blank names"""
        trimmed = v.strip()
        if not trimmed:
            raise ValueError("Tracker name cannot be only whitespace")
        return trimmed

    @property
    def is_irregular(self) -> bool:
        return self.schedule is None


class TrackerCategory(BaseModel):
    """Named group of trackers"""
    title: str
    trackers: list[Tracker] = Field(default_factory=list)


class CompletionRecord(BaseModel):
    """A tracker marked done on a calendar day"""
    model_config = ConfigDict(frozen=True)

    tracker_id: UUID
    date: dt_date

    @field_validator('date', mode='before')
    @classmethod
    def normalize_date(cls, v):
        """Truncate datetimes to their calendar day"""
        if isinstance(v, datetime):
            return start_of_day(v)
        return v
