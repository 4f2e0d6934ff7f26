"""
Day aggregation — pure business logic.

Decides what appears on a given date: routine occurrences, study blocks,
fixed class sessions and tasks due that day. Also owns the completion-key
rule and the display ordering shared by the day view, week view and
dashboard.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from src.core.class_schedule import SemesterCalendar, sessions_for_day
from src.core.formatting import format_time
from src.data.models import WEEKDAYS, Routine, StudyBlock, Task

logger = logging.getLogger(__name__)

WORKOUT_ID = "routine_workout"
TENNIS_ID = "routine_tennis"
CLASS_SESSION = "class-session"

# Items without a time sort as if they were at the end of the day
_NO_TIME_SORT_KEY = "23:59"

# Task types counted towards the week-view workload label
_WORKLOAD_TYPES = ("assignment", "project", "quiz")


@dataclass
class DayItem:
    """A routine, class session, study block or task projected onto one date."""

    name: str
    type: str                       # routine | study-block | class-session | task type
    time: str | None = None         # HH:MM
    description: str | None = None
    course: str | None = None
    priority: str | None = None
    id: str | None = None

    @property
    def completable(self) -> bool:
        return self.type != CLASS_SESSION

    @property
    def deletable(self) -> bool:
        return self.id is not None and self.type not in ("routine", "study-block", CLASS_SESSION)


def items_for_date(
    target: date,
    routine: Routine,
    study_blocks: list[StudyBlock],
    tasks: list[Task],
    calendar: SemesterCalendar | None = None,
) -> list[DayItem]:
    """Return every item that applies to *target*, in emission order.

    Order: workout, tennis, study blocks, class sessions, due tasks.
    """
    calendar = calendar or SemesterCalendar()
    date_str = target.isoformat()
    day_name = WEEKDAYS[target.weekday()]
    items: list[DayItem] = []

    if routine.workout.enabled and day_name in routine.workout.days:
        items.append(DayItem(
            id=WORKOUT_ID,
            name="Workout",
            type="routine",
            time=routine.workout.time,
            description="Daily workout session",
        ))

    if routine.tennis.enabled and day_name == routine.tennis.day:
        items.append(DayItem(
            id=TENNIS_ID,
            name="Tennis",
            type="routine",
            time=routine.tennis.time,
            description="Weekly tennis session",
        ))

    for block in study_blocks:
        if day_name in block.days:
            items.append(DayItem(
                id=block.id,
                name=f"{block.course} Study",
                type="study-block",
                time=block.start_time,
                description=f"{format_time(block.start_time)} - {format_time(block.end_time)}",
            ))

    for rule in sessions_for_day(target, calendar):
        items.append(DayItem(
            name=rule.name,
            type=CLASS_SESSION,
            time=rule.time,
            description=rule.location,
        ))

    for task in tasks:
        if task.due_date == date_str:
            items.append(task_to_item(task))

    return items


def task_to_item(task: Task) -> DayItem:
    return DayItem(
        id=task.id,
        name=task.name,
        type=task.type,
        time=task.time,
        description=task.description,
        course=task.course,
        priority=task.priority,
    )


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


def completion_key(item: DayItem | Task, date_str: str) -> str:
    """Build the ``<id>_<date>`` key; items without an id fall back to their name."""
    item_id = item.id or f"routine_{item.name}"
    return f"{item_id}_{date_str}"


def is_completed(item: DayItem | Task, date_str: str, completed: dict[str, bool]) -> bool:
    return completed.get(completion_key(item, date_str)) is True


def toggle_completion(completed: dict[str, bool], item_id: str, date_str: str) -> bool:
    """Flip the completion flag for one occurrence and return the new value."""
    key = f"{item_id}_{date_str}"
    completed[key] = not completed.get(key, False)
    return completed[key]


def purge_completions(completed: dict[str, bool], item_id: str) -> int:
    """Drop every completion record of *item_id*. Returns how many were removed."""
    prefix = f"{item_id}_"
    stale = [key for key in completed if key.startswith(prefix)]
    for key in stale:
        del completed[key]
    return len(stale)


# ---------------------------------------------------------------------------
# Ordering and week view
# ---------------------------------------------------------------------------


def sort_for_display(
    items: list[DayItem], date_str: str, completed: dict[str, bool],
) -> list[DayItem]:
    """Incomplete items first, then by time of day (untimed last). Stable."""
    def _key(item: DayItem) -> tuple[bool, str]:
        done = item.completable and is_completed(item, date_str, completed)
        return done, item.time or _NO_TIME_SORT_KEY

    return sorted(items, key=_key)


def week_start(target: date) -> date:
    """Return the Sunday on or before *target*."""
    return target - timedelta(days=(target.weekday() + 1) % 7)


def workload_label(items: list[DayItem]) -> tuple[str, str]:
    """Return (css-ish class, text) describing how busy a day is."""
    count = sum(1 for item in items if item.type in _WORKLOAD_TYPES)
    if count >= 5:
        return "heavy", f"{count} tasks - Heavy!"
    if count == 0:
        return "light", "Light day"
    if count == 1:
        return "light", "1 task"
    return "", f"{count} tasks"
