"""
Syllabus extractor — best-effort heuristic scraper.

Turns pasted syllabus text into candidate tasks by scanning it line by line:
a line must mention an assignment-ish keyword and contain a recognisable
date. This is not a parser; lines it cannot make sense of are dropped
silently and an unhelpful syllabus simply yields an empty list.

The keyword, date-pattern and type tables are plain ordered data so new
shapes can be added without touching the control flow.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable

from src.data.models import Task, TaskType

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_YEAR = 2026
MAX_NAME_LENGTH = 100
MIN_NAME_LENGTH = 4

# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

ASSIGNMENT_KEYWORDS: tuple[re.Pattern, ...] = tuple(
    re.compile(word, re.IGNORECASE)
    for word in (
        "homework", "hw", "assignment", "quiz", "exam", "test", "project",
        "due", "submit", "deadline", "lab", "midterm", "final",
    )
)

MONTHS: dict[str, int] = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

# Checked in order; the first type whose pattern matches the name wins.
TYPE_RULES: tuple[tuple[re.Pattern, TaskType], ...] = (
    (re.compile(r"quiz|exam|test|midterm|final", re.IGNORECASE), "quiz"),
    (re.compile(r"project", re.IGNORECASE), "project"),
)
DEFAULT_TYPE: TaskType = "assignment"

_MONTH_DAY_RE = re.compile(r"\b([A-Za-z]+)\.?\s+(\d{1,2})(?:st|nd|rd|th)?\b(?:,?\s*(\d{4})\b)?")
_SLASH_RE = re.compile(r"\b(\d{1,2})/(\d{1,2})(?:/(\d{2,4}))?\b")
_DASH_RE = re.compile(r"\b(\d{1,2})-(\d{1,2})(?:-(\d{2,4}))?\b")
_NUMERIC_SHAPE_RE = re.compile(r"\d{1,2}[/-]\d{1,2}(?:[/-]\d{2,4})?")
_DUE_RE = re.compile(r"\bdue\b:?", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def _resolve_month_day(match: re.Match, fallback_year: int) -> date | None:
    month = MONTHS.get(match.group(1).lower())
    if month is None:
        return None
    year = int(match.group(3)) if match.group(3) else fallback_year
    return _safe_date(year, month, int(match.group(2)))


def _resolve_numeric(match: re.Match, fallback_year: int) -> date | None:
    year = int(match.group(3)) if match.group(3) else fallback_year
    if year < 100:
        year += 2000
    return _safe_date(year, int(match.group(1)), int(match.group(2)))


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


@dataclass(frozen=True)
class DatePattern:
    name: str
    regex: re.Pattern
    resolve: Callable[[re.Match, int], date | None]


DATE_PATTERNS: tuple[DatePattern, ...] = (
    DatePattern("month_day", _MONTH_DAY_RE, _resolve_month_day),
    DatePattern("slash", _SLASH_RE, _resolve_numeric),
    DatePattern("dash", _DASH_RE, _resolve_numeric),
)


# ---------------------------------------------------------------------------
# Pipeline steps
# ---------------------------------------------------------------------------


def has_assignment_keyword(line: str) -> bool:
    return any(kw.search(line) for kw in ASSIGNMENT_KEYWORDS)


def find_due_date(line: str, fallback_year: int = DEFAULT_FALLBACK_YEAR) -> date | None:
    """Return the first resolvable date in *line*, trying patterns in priority order.

    Within a pattern every occurrence is tried left to right, so
    "HW 2.1 due Jan 26" skips the month-shaped "HW 2" and resolves "Jan 26".
    """
    for pattern in DATE_PATTERNS:
        for match in pattern.regex.finditer(line):
            resolved = pattern.resolve(match, fallback_year)
            if resolved is not None:
                return resolved
    return None


def _strip_month_day(match: re.Match) -> str:
    return "" if match.group(1).lower() in MONTHS else match.group(0)


def derive_name(line: str) -> str:
    """Remove date shapes and the word 'due', then collapse whitespace."""
    name = _NUMERIC_SHAPE_RE.sub("", line)
    name = _MONTH_DAY_RE.sub(_strip_month_day, name)
    name = _DUE_RE.sub("", name)
    return _WHITESPACE_RE.sub(" ", name).strip()


def determine_task_type(name: str) -> TaskType:
    for pattern, task_type in TYPE_RULES:
        if pattern.search(name):
            return task_type
    return DEFAULT_TYPE


def extract_assignments(
    text: str,
    course_name: str,
    fallback_year: int = DEFAULT_FALLBACK_YEAR,
) -> list[Task]:
    """Scan pasted syllabus text and return candidate tasks.

    Candidates are not persisted; the caller stages them until the user
    confirms the whole batch. Never raises on odd input.
    """
    candidates: list[Task] = []

    for line in text.splitlines():
        if not has_assignment_keyword(line):
            continue

        due = find_due_date(line, fallback_year)
        if due is None:
            logger.debug("No date found in syllabus line: %r", line)
            continue

        name = derive_name(line)
        if len(name) < MIN_NAME_LENGTH:
            logger.debug("Syllabus line too short after cleanup: %r", line)
            continue

        task_type = determine_task_type(name)
        candidates.append(Task(
            name=name[:MAX_NAME_LENGTH],
            course=course_name,
            due_date=due.isoformat(),
            type=task_type,
            description=f"{course_name} - {task_type}",
        ))

    logger.info(
        "Syllabus extraction for '%s': %d candidate(s)", course_name, len(candidates),
    )
    return candidates
