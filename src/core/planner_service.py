"""
Daily Planner — UI-Agnostic Planner Service.

Service layer that orchestrates every user action: validate input ->
mutate the in-memory state -> save -> return structured response objects.

The service owns no collections of its own apart from staged syllabus
candidates; the PlannerState it is handed belongs to the composition root.
Each UI adapter calls this service and renders the response objects in its
own way.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import ValidationError

from src.core import course_schedules
from src.core import dashboard as analytics
from src.core.day_items import (
    DayItem,
    completion_key,
    is_completed,
    items_for_date,
    purge_completions,
    sort_for_display,
    toggle_completion,
    week_start,
    workload_label,
)
from src.core.syllabus_extractor import DEFAULT_FALLBACK_YEAR, extract_assignments
from src.data.models import (
    NotificationSettings,
    Routine,
    StudyBlock,
    Task,
    TennisRoutine,
    WorkoutRoutine,
)
from src.ports.notification_port import NotificationPermissionError

if TYPE_CHECKING:
    from src.core.class_schedule import SemesterCalendar
    from src.data.db import PlannerStore
    from src.data.models import PlannerState
    from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)

WEEK_VIEW_ITEM_LIMIT = 6


# ---------------------------------------------------------------------------
# Response types
# ---------------------------------------------------------------------------


class ResponseKind(Enum):
    SUCCESS = "success"
    ERROR = "error"
    NO_ACTION = "no_action"
    EXTRACTION_PREVIEW = "extraction_preview"
    DAY_VIEW = "day_view"
    WEEK_VIEW = "week_view"
    DASHBOARD = "dashboard"
    BRIEFING = "briefing"
    UPCOMING = "upcoming"


@dataclass
class ServiceResponse:
    kind: ResponseKind
    message: str


@dataclass
class SuccessResponse(ServiceResponse):
    task: Task | None = None
    completed: bool | None = None


@dataclass
class ErrorResponse(ServiceResponse):
    pass


@dataclass
class NoActionResponse(ServiceResponse):
    pass


@dataclass
class ExtractionPreviewResponse(ServiceResponse):
    candidates: list[Task] = field(default_factory=list)


@dataclass
class DayEntry:
    item: DayItem
    completed: bool
    key: str | None          # completion key, None for class sessions
    deletable: bool = False  # tasks only; routines and blocks are edited in settings


@dataclass
class DayViewResponse(ServiceResponse):
    date: str = ""
    wake_time: str | None = None
    entries: list[DayEntry] = field(default_factory=list)


@dataclass
class WeekDay:
    date: str
    is_today: bool
    entries: list[DayEntry] = field(default_factory=list)
    hidden_count: int = 0    # items beyond the per-day display limit
    workload_class: str = ""
    workload_text: str = ""


@dataclass
class WeekViewResponse(ServiceResponse):
    start: str = ""
    days: list[WeekDay] = field(default_factory=list)


@dataclass
class DashboardResponse(ServiceResponse):
    completion: analytics.CompletionStats | None = None
    deadlines: analytics.DeadlineCounts | None = None
    course_counts: dict[str, int] = field(default_factory=dict)
    focus: Task | None = None


@dataclass
class BriefingResponse(ServiceResponse):
    briefing: analytics.Briefing | None = None


@dataclass
class UpcomingResponse(ServiceResponse):
    entries: list[analytics.UpcomingTask] = field(default_factory=list)


def _error(message: str) -> ErrorResponse:
    return ErrorResponse(kind=ResponseKind.ERROR, message=message)


def _success(message: str, **kwargs) -> SuccessResponse:
    return SuccessResponse(kind=ResponseKind.SUCCESS, message=message, **kwargs)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    return errors[0]["msg"] if errors else str(exc)


# ---------------------------------------------------------------------------
# PlannerService
# ---------------------------------------------------------------------------


class PlannerService:
    """Orchestrates planner actions over a shared PlannerState.

    Returns structured response objects — never renders anything directly.
    """

    def __init__(
        self,
        state: PlannerState,
        store: PlannerStore,
        notifier: NotificationPort | None = None,
        calendar: SemesterCalendar | None = None,
        fallback_year: int = DEFAULT_FALLBACK_YEAR,
    ) -> None:
        self._state = state
        self._store = store
        self._notifier = notifier
        self._calendar = calendar
        self._fallback_year = fallback_year
        self._pending: list[Task] = []

    @property
    def state(self) -> PlannerState:
        return self._state

    @property
    def pending_assignments(self) -> list[Task]:
        return list(self._pending)

    def _save(self) -> bool:
        try:
            self._store.save_state(self._state)
            return True
        except sqlite3.Error as exc:
            logger.error("Error saving planner state: %s", exc)
            return False

    def _day_items(self, target: date) -> list[DayItem]:
        s = self._state
        return items_for_date(target, s.routine, s.study_blocks, s.tasks, self._calendar)

    # ------------------------------------------------------------------
    # Tasks and projects
    # ------------------------------------------------------------------

    def add_project(
        self,
        name: str,
        due_date: str,
        time: str | None = None,
        priority: str | None = None,
        notes: str = "",
    ) -> ServiceResponse:
        name = name.strip()
        if not name:
            return _error("Please enter a project name")
        if not due_date:
            return _error("Please select a due date")
        try:
            project = Task(
                name=name,
                due_date=due_date,
                time=time or None,
                type="project",
                priority=priority,
                description=notes.strip() or "Work project",
            )
        except ValidationError as exc:
            return _error(_first_error(exc))

        self._state.tasks.append(project)
        self._save()
        logger.info("Project added: %s '%s' due %s", project.id, project.name, project.due_date)
        return _success("Project added!", task=project)

    def quick_add_task(self, name: str, task_type: str, due_date: date) -> ServiceResponse:
        """Add a task due on the date currently being viewed."""
        name = name.strip()
        if not name:
            return _error("Please enter a task name")
        try:
            task = Task(name=name, due_date=due_date.isoformat(), type=task_type, description="")
        except ValidationError as exc:
            return _error(_first_error(exc))

        self._state.tasks.append(task)
        self._save()
        logger.info("Task added: %s '%s' due %s", task.id, task.name, task.due_date)
        return _success("Task added!", task=task)

    def delete_task(self, task_id: str) -> ServiceResponse:
        before = len(self._state.tasks)
        self._state.tasks = [t for t in self._state.tasks if t.id != task_id]
        if len(self._state.tasks) == before:
            return _error(f"Task {task_id} not found")

        purged = purge_completions(self._state.completed, task_id)
        self._save()
        logger.info("Task deleted: %s (%d completion record(s) purged)", task_id, purged)
        return _success("Task deleted")

    def toggle_completion(self, item_id: str, date_str: str) -> ServiceResponse:
        done = toggle_completion(self._state.completed, item_id, date_str)
        self._save()
        logger.debug("Completion toggled: %s on %s -> %s", item_id, date_str, done)
        return _success("Marked complete" if done else "Marked incomplete", completed=done)

    # ------------------------------------------------------------------
    # Study blocks
    # ------------------------------------------------------------------

    def add_study_block(
        self, course: str, days: list[str], start_time: str, end_time: str,
    ) -> ServiceResponse:
        if not days:
            return _error("Please select at least one day")
        if not start_time or not end_time:
            return _error("Please set start and end times")
        try:
            block = StudyBlock(course=course, days=days, start_time=start_time, end_time=end_time)
        except ValidationError as exc:
            return _error(_first_error(exc))

        self._state.study_blocks.append(block)
        self._save()
        logger.info("Study block added: %s %s %s", block.id, block.course, ",".join(block.days))
        return _success("Study block added!")

    def delete_study_block(self, block_id: str) -> ServiceResponse:
        blocks = self._state.study_blocks
        remaining = [b for b in blocks if b.id != block_id]
        if len(remaining) == len(blocks):
            return _error(f"Study block {block_id} not found")

        self._state.study_blocks = remaining
        purge_completions(self._state.completed, block_id)
        self._save()
        logger.info("Study block removed: %s", block_id)
        return _success("Study block removed")

    # ------------------------------------------------------------------
    # Routines
    # ------------------------------------------------------------------

    def save_wake_time(self, wake_time: str) -> ServiceResponse:
        fields = self._state.routine.model_dump()
        fields["wake_time"] = wake_time or None
        try:
            self._state.routine = Routine.model_validate(fields)
        except ValidationError as exc:
            return _error(_first_error(exc))
        self._save()
        return _success("Wake time updated")

    def save_workout(self, days: list[str], time: str) -> ServiceResponse:
        """Saving with no days turns the workout off."""
        try:
            workout = WorkoutRoutine(enabled=bool(days), days=days, time=time)
        except ValidationError as exc:
            return _error(_first_error(exc))
        self._state.routine.workout = workout
        self._save()
        return _success("Workout schedule updated")

    def save_tennis(self, time: str) -> ServiceResponse:
        try:
            tennis = TennisRoutine(enabled=True, day="thursday", time=time)
        except ValidationError as exc:
            return _error(_first_error(exc))
        self._state.routine.tennis = tennis
        self._save()
        return _success("Tennis schedule updated")

    async def save_notifications(self, enabled: bool, reminder_minutes: int) -> ServiceResponse:
        self._state.routine.notifications = NotificationSettings(
            enabled=enabled, reminder_minutes=reminder_minutes,
        )
        self._save()

        if enabled and self._notifier is not None and self._notifier.permission != "granted":
            permission = await self._notifier.request_permission()
            if permission != "granted":
                logger.warning("Notification permission not granted: %s", permission)
                return _error("Settings saved, but notifications are blocked.")
        return _success("Notification settings saved")

    async def test_notification(self) -> ServiceResponse:
        if self._notifier is None:
            return _error("Notifications not supported")

        try:
            if self._notifier.permission == "granted":
                await self._notifier.notify("Test Notification", "Notifications are working!")
                return _success("Notification sent!")

            if self._notifier.permission != "denied":
                permission = await self._notifier.request_permission()
                if permission == "granted":
                    await self._notifier.notify(
                        "Notifications Enabled", "You will now receive reminders!",
                    )
                    return _success("Notifications enabled!")
        except NotificationPermissionError as exc:
            logger.warning("Notification refused: %s", exc)

        return _error("Notifications blocked. Enable them in your notifier settings.")

    # ------------------------------------------------------------------
    # Syllabus import and course schedules
    # ------------------------------------------------------------------

    def parse_syllabus(self, course_name: str, text: str) -> ServiceResponse:
        """Extract candidates and stage them until confirm_assignments()."""
        course_name = course_name.strip()
        text = text.strip()
        if not course_name:
            return _error("Please enter a course name")
        if not text:
            return _error("Please paste syllabus text")

        candidates = extract_assignments(text, course_name, self._fallback_year)
        if not candidates:
            self._pending = []
            return NoActionResponse(
                kind=ResponseKind.NO_ACTION,
                message="No assignments found. Try different format.",
            )

        self._pending = candidates
        return ExtractionPreviewResponse(
            kind=ResponseKind.EXTRACTION_PREVIEW,
            message=f"Found {len(candidates)} assignments",
            candidates=list(candidates),
        )

    def confirm_assignments(self) -> ServiceResponse:
        if not self._pending:
            return NoActionResponse(kind=ResponseKind.NO_ACTION, message="Nothing to add.")

        added = len(self._pending)
        self._state.tasks.extend(self._pending)
        self._pending = []
        self._save()
        logger.info("Confirmed %d syllabus assignment(s)", added)
        return _success("Assignments added to calendar!")

    def discard_assignments(self) -> ServiceResponse:
        self._pending = []
        return _success("Extraction discarded")

    def load_course_schedule(self, code: str) -> ServiceResponse:
        tasks, loaded = course_schedules.replace_course_tasks(self._state.tasks, code)
        if not loaded:
            return _error(f"Unknown course schedule: {code}")
        self._state.tasks = tasks
        self._save()
        logger.info("Loaded %d item(s) for %s", loaded, code)
        return _success(f"Loaded {loaded} items for {code}")

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def _entries(self, items: list[DayItem], date_str: str) -> list[DayEntry]:
        completed = self._state.completed
        return [
            DayEntry(
                item=item,
                completed=item.completable and is_completed(item, date_str, completed),
                key=completion_key(item, date_str) if item.completable else None,
                deletable=item.deletable,
            )
            for item in items
        ]

    def day_view(self, target: date) -> DayViewResponse:
        date_str = target.isoformat()
        items = sort_for_display(self._day_items(target), date_str, self._state.completed)
        return DayViewResponse(
            kind=ResponseKind.DAY_VIEW,
            message=f"{len(items)} items",
            date=date_str,
            wake_time=self._state.routine.wake_time,
            entries=self._entries(items, date_str),
        )

    def week_view(self, target: date, today: date | None = None) -> WeekViewResponse:
        today = today or date.today()
        start = week_start(target)
        days: list[WeekDay] = []
        for offset in range(7):
            day = start + timedelta(days=offset)
            items = self._day_items(day)
            workload_class, workload_text = workload_label(items)
            days.append(WeekDay(
                date=day.isoformat(),
                is_today=day == today,
                entries=self._entries(items[:WEEK_VIEW_ITEM_LIMIT], day.isoformat()),
                hidden_count=max(0, len(items) - WEEK_VIEW_ITEM_LIMIT),
                workload_class=workload_class,
                workload_text=workload_text,
            ))
        end = start + timedelta(days=6)
        return WeekViewResponse(
            kind=ResponseKind.WEEK_VIEW,
            message=f"{start.isoformat()} - {end.isoformat()}",
            start=start.isoformat(),
            days=days,
        )

    def dashboard(self, today: date | None = None) -> DashboardResponse:
        today = today or date.today()
        s = self._state
        stats = analytics.completion_stats(self._day_items(today), today.isoformat(), s.completed)
        return DashboardResponse(
            kind=ResponseKind.DASHBOARD,
            message=f"{stats.completed}/{stats.total} completed",
            completion=stats,
            deadlines=analytics.deadline_counts(s.tasks, today, s.completed),
            course_counts=analytics.course_counts(s.tasks, today),
            focus=analytics.suggested_focus(s.tasks, today, s.completed),
        )

    def briefing(self, today: date | None = None) -> BriefingResponse:
        today = today or date.today()
        return BriefingResponse(
            kind=ResponseKind.BRIEFING,
            message=f"Briefing for {today.isoformat()}",
            briefing=analytics.build_briefing(self._state, today, self._calendar),
        )

    def upcoming(self, today: date | None = None, type_filter: str = "all") -> UpcomingResponse:
        today = today or date.today()
        entries = analytics.upcoming_tasks(self._state.tasks, today, self._state.completed, type_filter)
        if not entries:
            return UpcomingResponse(kind=ResponseKind.UPCOMING, message="No upcoming deadlines")
        return UpcomingResponse(
            kind=ResponseKind.UPCOMING,
            message=f"{len(entries)} upcoming",
            entries=entries,
        )
