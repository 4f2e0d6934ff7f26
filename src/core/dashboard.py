"""
Dashboard analytics — read-only projections over the planner state.

Completion percentage for today, deadline counts, per-course counts,
the suggested focus pick, the upcoming-deadlines list and the morning
briefing all live here.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from src.core.class_schedule import SemesterCalendar
from src.core.day_items import DayItem, is_completed, items_for_date
from src.data.models import PlannerState, Task

logger = logging.getLogger(__name__)

WEEK_DAYS_AHEAD = 7
UPCOMING_DAYS_AHEAD = 30
BRIEFING_SCHEDULE_LIMIT = 8
BRIEFING_WEEK_LIMIT = 5


@dataclass
class CompletionStats:
    completed: int
    total: int
    percentage: int


@dataclass
class DeadlineCounts:
    due_today: int
    due_this_week: int
    overdue: int


@dataclass
class UpcomingTask:
    task: Task
    overdue: bool


@dataclass
class Briefing:
    date: str
    schedule: list[DayItem] = field(default_factory=list)
    focus: Task | None = None
    this_week: list[Task] = field(default_factory=list)


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def completion_stats(items: list[DayItem], date_str: str, completed: dict[str, bool]) -> CompletionStats:
    """Share of completable items done on *date_str*; 0% when nothing is completable."""
    completable = [item for item in items if item.completable]
    done = sum(1 for item in completable if is_completed(item, date_str, completed))
    total = len(completable)
    percentage = _round_half_up(done / total * 100) if total else 0
    return CompletionStats(completed=done, total=total, percentage=percentage)


def _task_done(task: Task, completed: dict[str, bool]) -> bool:
    return is_completed(task, task.due_date, completed)


def deadline_counts(tasks: list[Task], today: date, completed: dict[str, bool]) -> DeadlineCounts:
    week_end = today + timedelta(days=WEEK_DAYS_AHEAD)
    due_today = due_week = overdue = 0
    for task in tasks:
        due = task.due
        if due == today:
            due_today += 1
        if today <= due <= week_end:
            due_week += 1
        if due < today and not _task_done(task, completed):
            overdue += 1
    return DeadlineCounts(due_today=due_today, due_this_week=due_week, overdue=overdue)


def _course_key(course: str) -> str:
    # "MAT 302 Discrete Math" -> "MAT 302"
    return " ".join(course.split()[:2])


def course_counts(tasks: list[Task], today: date) -> dict[str, int]:
    """Tasks due in the next week per course; known courses with none show 0."""
    week_end = today + timedelta(days=WEEK_DAYS_AHEAD)
    counts: dict[str, int] = {}
    for task in tasks:
        if not task.course:
            continue
        key = _course_key(task.course)
        counts.setdefault(key, 0)
        if today <= task.due <= week_end:
            counts[key] += 1
    return counts


def _focus_score(task: Task) -> int:
    return (0 if task.type == "quiz" else 1) + (0 if task.priority == "high" else 2)


def suggested_focus(tasks: list[Task], today: date, completed: dict[str, bool]) -> Task | None:
    """Pick the incomplete, not-yet-past task to work on next.

    High priority outweighs quiz, quiz outweighs everything else; ties go to
    the earliest due date.
    """
    candidates = [
        t for t in tasks if t.due >= today and not _task_done(t, completed)
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda t: (_focus_score(t), t.due_date))


def upcoming_tasks(
    tasks: list[Task],
    today: date,
    completed: dict[str, bool],
    type_filter: str = "all",
) -> list[UpcomingTask]:
    """Incomplete tasks due within 30 days or already overdue, by due date."""
    horizon = today + timedelta(days=UPCOMING_DAYS_AHEAD)
    selected = [
        t for t in tasks
        if t.due <= horizon
        and (type_filter == "all" or t.type == type_filter)
        and not _task_done(t, completed)
    ]
    selected.sort(key=lambda t: t.due_date)
    return [UpcomingTask(task=t, overdue=t.due < today) for t in selected]


def build_briefing(
    state: PlannerState, today: date, calendar: SemesterCalendar | None = None,
) -> Briefing:
    """Today's first items, the focus pick and what is due later this week."""
    items = items_for_date(today, state.routine, state.study_blocks, state.tasks, calendar)
    week_end = today + timedelta(days=WEEK_DAYS_AHEAD)
    this_week = sorted(
        (t for t in state.tasks if today < t.due <= week_end),
        key=lambda t: t.due_date,
    )
    return Briefing(
        date=today.isoformat(),
        schedule=items[:BRIEFING_SCHEDULE_LIMIT],
        focus=suggested_focus(state.tasks, today, state.completed),
        this_week=this_week[:BRIEFING_WEEK_LIMIT],
    )
