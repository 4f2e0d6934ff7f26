"""
Fixed class sessions for one academic term.

Class sessions come from a hard-coded rule table rather than from user data:
they carry no id, cannot be completed and cannot be deleted. Sessions appear
only inside the semester range and never during the break.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from src.data.models import WEEKDAYS


@dataclass(frozen=True)
class ClassSessionRule:
    """One weekly class meeting."""

    name: str
    days: tuple[str, ...]
    time: str          # HH:MM
    location: str


@dataclass(frozen=True)
class SemesterCalendar:
    """Inclusive semester range, inclusive break range and weekly rules."""

    semester_start: date = date(2026, 1, 21)
    semester_end: date = date(2026, 5, 6)
    break_start: date = date(2026, 3, 16)
    break_end: date = date(2026, 3, 20)
    rules: tuple[ClassSessionRule, ...] = field(default_factory=lambda: DEFAULT_CLASS_RULES)

    def in_session(self, target: date) -> bool:
        if target < self.semester_start or target > self.semester_end:
            return False
        return not (self.break_start <= target <= self.break_end)


DEFAULT_CLASS_RULES: tuple[ClassSessionRule, ...] = (
    ClassSessionRule("MAT 302 - Discrete Math", ("monday", "wednesday", "friday"), "10:50", "Hagfors 152"),
    ClassSessionRule("MAT 146 - Calculus II", ("monday", "wednesday", "friday"), "13:10", "Hagfors 151"),
    ClassSessionRule("DST 234 - Intro to Data Science", ("tuesday", "thursday"), "14:00", "Hagfors 152"),
    ClassSessionRule("MAT 146 Lab", ("thursday",), "12:20", "Hagfors 151"),
)


def calendar_from_settings() -> SemesterCalendar:
    """Build the semester calendar from the configured date ranges."""
    from src.config import settings

    return SemesterCalendar(
        semester_start=settings.SEMESTER_START,
        semester_end=settings.SEMESTER_END,
        break_start=settings.BREAK_START,
        break_end=settings.BREAK_END,
    )


def sessions_for_day(target: date, calendar: SemesterCalendar) -> list[ClassSessionRule]:
    """Return the rules meeting on *target*, in table order."""
    if not calendar.in_session(target):
        return []
    day_name = WEEKDAYS[target.weekday()]
    return [rule for rule in calendar.rules if day_name in rule.days]
