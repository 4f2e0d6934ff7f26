"""
Daily Planner — Deadline Reminders.

A periodic tick that sends one notification per task as its reminder lead
time comes up. A tick fires for tasks whose due moment is ahead of *now*
by no more than the lead time and within the last minute of that window;
a persisted ``notified_<id>_<due>`` marker keeps a task from being
announced twice, even across restarts.

This module is notifier-agnostic: it depends on the NotificationPort
protocol, not on a specific implementation.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING

from src.core.formatting import format_date_short

if TYPE_CHECKING:
    from src.data.db import PlannerStore
    from src.data.models import PlannerState, Task
    from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)

# Tasks without a time are considered due at the end of their day
_END_OF_DAY = time(23, 59)
_TICK_WINDOW = timedelta(minutes=1)


def due_moment(task: Task) -> datetime:
    """Due date combined with the task time (or 23:59)."""
    if task.time:
        hour, minute = map(int, task.time.split(":")[:2])
        at = time(hour, minute)
    else:
        at = _END_OF_DAY
    return datetime.combine(date.fromisoformat(task.due_date), at)


def tasks_to_remind(tasks: list[Task], now: datetime, reminder_minutes: int) -> list[Task]:
    """Tasks whose reminder falls inside the current one-minute tick."""
    lead = timedelta(minutes=reminder_minutes)
    selected = []
    for task in tasks:
        remaining = due_moment(task) - now
        if timedelta(0) < remaining <= lead and remaining > lead - _TICK_WINDOW:
            selected.append(task)
    return selected


async def check_reminders(
    state: PlannerState,
    store: PlannerStore,
    notifier: NotificationPort,
    now: datetime | None = None,
) -> list[str]:
    """Send any reminders due at *now*. Returns the ids of the tasks notified."""
    prefs = state.routine.notifications
    if not prefs.enabled:
        return []

    now = now or datetime.now()
    notified: list[str] = []
    for task in tasks_to_remind(state.tasks, now, prefs.reminder_minutes or 1440):
        if store.is_notified(task.id, task.due_date):
            continue
        if notifier.permission != "granted":
            # The window is spent either way; a later grant does not replay it
            logger.debug("Dropping reminder for '%s': permission %s", task.name, notifier.permission)
            store.mark_notified(task.id, task.due_date)
            continue
        try:
            await notifier.notify(
                "Upcoming Deadline",
                f"{task.name} is due {format_date_short(task.due_date)}",
            )
        except Exception as exc:
            logger.error("Failed to send reminder for '%s': %s", task.name, exc)
            continue
        store.mark_notified(task.id, task.due_date)
        notified.append(task.id)
        logger.info("Reminder sent for task %s ('%s')", task.id, task.name)
    return notified


async def run_reminder_loop(
    state: PlannerState,
    store: PlannerStore,
    notifier: NotificationPort,
    interval_seconds: int = 60,
) -> None:
    """Check reminders immediately, then every *interval_seconds*, forever.

    Runs on the same event loop as every state mutation, so ticks and user
    actions never interleave.
    """
    logger.info("Reminder loop started (every %ds)", interval_seconds)
    while True:
        await check_reminders(state, store, notifier)
        await asyncio.sleep(interval_seconds)
