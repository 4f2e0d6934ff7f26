"""
Daily Planner — Data Models.

Everything the planner persists: tasks, the single routine configuration and
study blocks. Completion records are a plain ``dict[str, bool]`` keyed by
``"<item id>_<YYYY-MM-DD>"`` and have no model of their own.

The models are pydantic so that a JSON blob read back from storage is
validated in one step; a blob that fails validation is treated as corrupt.
"""

from __future__ import annotations

import random
import string
import time
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator

TaskType = Literal["assignment", "quiz", "project", "other"]

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def generate_task_id() -> str:
    """Return a fresh task id: ``task_<epoch ms>_<9 random chars>``."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"task_{int(time.time() * 1000)}_{suffix}"


def generate_study_block_id() -> str:
    return f"study_{uuid.uuid4().hex[:12]}"


def _check_hhmm(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"Expected HH:MM time, got {value!r}")
    parts = value.split(":")
    if len(parts) < 2 or not all(p.isdigit() for p in parts[:2]):
        raise ValueError(f"Expected HH:MM time, got {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Time out of range: {value!r}")
    return f"{hour:02d}:{minute:02d}"


def _check_weekdays(days: list[str]) -> list[str]:
    normalized = [d.strip().lower() for d in days]
    unknown = [d for d in normalized if d not in WEEKDAYS]
    if unknown:
        raise ValueError(f"Unknown weekday(s): {', '.join(unknown)}")
    return normalized


class Task(BaseModel):
    """A due-dated unit of work (assignment, quiz, project or other).

    JSON example:
    {
        "id": "task_1737900000000_k3j9x0a1b",
        "name": "HW 2.1 Organized Listing",
        "dueDate": "2026-01-26",
        "time": null,
        "type": "assignment",
        "course": "MAT 302",
        "priority": null,
        "description": "MAT 302 Discrete Math"
    }
    """

    model_config = {"populate_by_name": True}

    id: str = Field(default_factory=generate_task_id)
    name: str
    due_date: str = Field(alias="dueDate")   # ISO YYYY-MM-DD
    time: str | None = None                  # HH:MM, None = all day
    type: TaskType = "assignment"
    course: str | None = None
    priority: str | None = None              # "high" matters; anything else is ordinary
    description: str | None = None

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, v: str) -> str:
        date.fromisoformat(v)
        return v

    @field_validator("time", mode="before")
    @classmethod
    def check_time(cls, v: str | None) -> str | None:
        return _check_hhmm(v)

    @property
    def due(self) -> date:
        return date.fromisoformat(self.due_date)


class WorkoutRoutine(BaseModel):
    enabled: bool = True
    days: list[str] = Field(default_factory=lambda: ["monday", "wednesday", "friday"])
    time: str = "08:00"

    @field_validator("days")
    @classmethod
    def check_days(cls, v: list[str]) -> list[str]:
        return _check_weekdays(v)

    @field_validator("time", mode="before")
    @classmethod
    def check_time(cls, v: str) -> str | None:
        return _check_hhmm(v)


class TennisRoutine(BaseModel):
    enabled: bool = True
    day: str = "thursday"
    time: str = "18:00"

    @field_validator("day")
    @classmethod
    def check_day(cls, v: str) -> str:
        return _check_weekdays([v])[0]

    @field_validator("time", mode="before")
    @classmethod
    def check_time(cls, v: str) -> str | None:
        return _check_hhmm(v)


class NotificationSettings(BaseModel):
    enabled: bool = False
    reminder_minutes: int = Field(default=1440, alias="reminderMinutes")  # 1 day

    model_config = {"populate_by_name": True}


class Routine(BaseModel):
    """The single, process-wide routine configuration.

    Stored overrides are merged key-by-key over the defaults on load, so a
    blob that only contains ``wakeTime`` still yields a complete routine.
    """

    model_config = {"populate_by_name": True}

    wake_time: str | None = Field(default="07:00", alias="wakeTime")
    workout: WorkoutRoutine = Field(default_factory=WorkoutRoutine)
    tennis: TennisRoutine = Field(default_factory=TennisRoutine)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)

    @field_validator("wake_time", mode="before")
    @classmethod
    def check_wake_time(cls, v: str | None) -> str | None:
        return _check_hhmm(v)


class StudyBlock(BaseModel):
    """A recurring study session on one or more weekdays."""

    model_config = {"populate_by_name": True}

    id: str = Field(default_factory=generate_study_block_id)
    course: str
    days: list[str]
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")

    @field_validator("days")
    @classmethod
    def check_days(cls, v: list[str]) -> list[str]:
        days = _check_weekdays(v)
        if not days:
            raise ValueError("A study block needs at least one day")
        return days

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def check_times(cls, v: str) -> str:
        checked = _check_hhmm(v)
        if checked is None:
            raise ValueError("Start and end times are required")
        return checked


@dataclass
class PlannerState:
    """Everything the planner holds in memory.

    Owned by the composition root and passed into the core functions; the
    core never keeps its own copy.
    """

    tasks: list[Task] = field(default_factory=list)
    routine: Routine = field(default_factory=Routine)
    study_blocks: list[StudyBlock] = field(default_factory=list)
    completed: dict[str, bool] = field(default_factory=dict)
