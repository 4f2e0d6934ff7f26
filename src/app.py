"""
Daily Planner — Composition root.

Loads the persisted state, wires the store, notifier and planner service
together, prints the morning briefing and keeps the reminder loop running.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from src.adapters.console_notifier import ConsoleNotifier
from src.config import settings
from src.core.class_schedule import calendar_from_settings
from src.core.dashboard import Briefing
from src.core.formatting import format_date_long, format_date_short, format_time
from src.core.planner_service import PlannerService
from src.core.reminders import run_reminder_loop
from src.data.db import PlannerStore

logger = logging.getLogger(__name__)


def format_briefing(briefing: Briefing) -> str:
    """Plain-text rendering of the morning briefing."""
    lines = [f"Good morning! {format_date_long(date.fromisoformat(briefing.date))}", ""]

    lines.append("Today's schedule:")
    if briefing.schedule:
        for item in briefing.schedule:
            when = format_time(item.time) if item.time else "All day"
            detail = item.description or item.course or ""
            lines.append(f"  {when} - {item.name}" + (f" ({detail})" if detail else ""))
    else:
        lines.append("  No items scheduled")

    lines.append("")
    lines.append("Priority focus:")
    if briefing.focus:
        focus = briefing.focus
        lines.append(
            f"  {focus.name} - due {format_date_short(focus.due_date)} "
            f"({focus.course or focus.type})"
        )
    else:
        lines.append("  All caught up! Great job!")

    lines.append("")
    lines.append("Coming up this week:")
    if briefing.this_week:
        for task in briefing.this_week:
            lines.append(f"  {format_date_short(task.due_date)} - {task.name} ({task.course or task.type})")
    else:
        lines.append("  Nothing else this week")

    return "\n".join(lines)


def build_service(store: PlannerStore | None = None) -> tuple[PlannerService, ConsoleNotifier]:
    store = store or PlannerStore()
    notifier = ConsoleNotifier()
    service = PlannerService(
        state=store.load_state(),
        store=store,
        notifier=notifier,
        calendar=calendar_from_settings(),
        fallback_year=settings.SYLLABUS_FALLBACK_YEAR,
    )
    return service, notifier


async def _run(service: PlannerService, store: PlannerStore, notifier: ConsoleNotifier) -> None:
    if service.state.routine.notifications.enabled:
        permission = await notifier.request_permission()
        logger.info("Notification permission: %s", permission)

    print(format_briefing(service.briefing().briefing), flush=True)
    await run_reminder_loop(
        service.state, store, notifier, interval_seconds=settings.REMINDER_CHECK_SECONDS,
    )


def main() -> None:
    """Entry point: load state, show the briefing and watch for deadlines."""
    logger.info("Starting Daily Planner...")
    store = PlannerStore()
    service, notifier = build_service(store)
    try:
        asyncio.run(_run(service, store, notifier))
    except KeyboardInterrupt:
        logger.info("Daily Planner stopped")


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    main()
