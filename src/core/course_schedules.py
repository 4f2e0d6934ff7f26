"""
Pre-loaded course schedules for the Spring 2026 term.

Loading a schedule replaces every task already tagged with that course and
appends fresh copies, so re-loading never duplicates items.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.data.models import Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CourseSchedule:
    code: str           # e.g. "MAT302"
    course: str         # label stored on tasks, e.g. "MAT 302"
    description: str
    items: tuple[tuple[str, str, str], ...]   # (name, due date, type)


MAT302 = CourseSchedule(
    code="MAT302",
    course="MAT 302",
    description="MAT 302 Discrete Math",
    items=(
        ("Quiz 1 (2.1, 2.2)", "2026-01-30", "quiz"),
        ("Quiz 2 (2.3, 2.4)", "2026-02-06", "quiz"),
        ("Quiz 3 (3.1, 3.2)", "2026-02-13", "quiz"),
        ("Quiz 4 (3.3, 3.4)", "2026-02-20", "quiz"),
        ("Quiz 5 (4.1, 4.2, 4.3)", "2026-02-27", "quiz"),
        ("Quiz 6 (4.4, 4.5)", "2026-03-06", "quiz"),
        ("Double Quiz (5.1-5.4)", "2026-03-13", "quiz"),
        ("Quiz 7 (6.1, 6.2)", "2026-03-25", "quiz"),
        ("Quiz 8 (6.3, 6.4, 6.5)", "2026-04-01", "quiz"),
        ("Quiz 9 (7.1, 7.2, 7.3)", "2026-04-10", "quiz"),
        ("Quiz 10 (7.4, 7.5)", "2026-04-17", "quiz"),
        ("Double Quiz (8.1-8.5)", "2026-04-24", "quiz"),
        ("Final Double Quiz (9.1-9.5)", "2026-05-06", "quiz"),
        ("HW 2.1 Organized Listing", "2026-01-26", "assignment"),
        ("HW 2.2 Counting with Steps", "2026-01-28", "assignment"),
        ("HW 2.3 Counting Subsets", "2026-01-30", "assignment"),
        ("HW 2.4 Counting Bit Strings", "2026-02-02", "assignment"),
        ("HW 3.1 Modeling with Graphs", "2026-02-04", "assignment"),
        ("HW 3.2 Standard Graphs", "2026-02-06", "assignment"),
        ("HW 3.3 Coloring Graphs", "2026-02-11", "assignment"),
        ("HW 3.4 Classifying Graphs", "2026-02-13", "assignment"),
        ("HW 4.1 Integer Division", "2026-02-16", "assignment"),
        ("HW 4.2 Division Algorithm", "2026-02-18", "assignment"),
        ("HW 4.3 Modular Arithmetic", "2026-02-20", "assignment"),
        ("HW 4.4 Primes", "2026-02-23", "assignment"),
        ("HW 4.5 GCD", "2026-02-25", "assignment"),
        ("HW 5.1 Logical Connectives", "2026-03-04", "assignment"),
        ("HW 5.2 Quantifiers", "2026-03-06", "assignment"),
    ),
)

DST234 = CourseSchedule(
    code="DST234",
    course="DST 234",
    description="DST 234 Data Science",
    items=(
        ("Quiz 1: Introductory Data Visualization", "2026-02-03", "quiz"),
        ("Quiz 2: ggplots", "2026-02-19", "quiz"),
        ("Quiz 3: Data Wrangling & Joining", "2026-03-10", "quiz"),
        ("Quiz 4: Inference", "2026-03-31", "quiz"),
        ("Quiz 5: Maps and Construction", "2026-04-21", "quiz"),
        ("Quiz 6: Functional Programming", "2026-04-28", "quiz"),
        ("HW Days 1-5 Final Submission", "2026-02-14", "assignment"),
        ("HW Days 6-10 Final Submission", "2026-03-07", "assignment"),
        ("HW Days 11-14 Final Submission", "2026-03-27", "assignment"),
        ("HW Days 15-19 Final Submission", "2026-04-18", "assignment"),
        ("HW Days 20-25 Final Submission", "2026-05-02", "assignment"),
        ("Ethics: Who Owns Your Data?", "2026-02-05", "assignment"),
        ("Ethics: Weapons of Math Destruction", "2026-03-12", "assignment"),
        ("Ethics: Mapping Prejudice", "2026-04-14", "assignment"),
        ("Ethics: Justice in Data Science", "2026-04-30", "assignment"),
        ("Mini-project 1", "2026-02-12", "project"),
        ("Mini-project 2", "2026-03-05", "project"),
        ("Mini-project 3", "2026-04-02", "project"),
        ("Mini-project 4", "2026-04-23", "project"),
        ("Mini-project 5", "2026-05-07", "project"),
    ),
)

MAT146 = CourseSchedule(
    code="MAT146",
    course="MAT 146",
    description="MAT 146 Calculus II",
    items=(
        ("Midterm Exam 1", "2026-02-13", "quiz"),
        ("Midterm Exam 2", "2026-03-13", "quiz"),
        ("Midterm Exam 3", "2026-04-17", "quiz"),
        ("Final Exam", "2026-05-04", "quiz"),
        ("Lab 1", "2026-01-24", "assignment"),
        ("Lab 2", "2026-01-31", "assignment"),
        ("Lab 3", "2026-02-07", "assignment"),
        ("Lab 4", "2026-02-14", "assignment"),
        ("Lab 5", "2026-02-21", "assignment"),
        ("Lab 6", "2026-02-28", "assignment"),
        ("Lab 7", "2026-03-07", "assignment"),
        ("Lab 8", "2026-03-14", "assignment"),
        ("Lab 9", "2026-03-28", "assignment"),
        ("Lab 10", "2026-04-04", "assignment"),
        ("Lab 11", "2026-04-11", "assignment"),
        ("Lab 12", "2026-04-18", "assignment"),
        ("Lab 13", "2026-04-25", "assignment"),
        ("Lab 14", "2026-05-02", "assignment"),
    ),
)

COURSE_SCHEDULES: dict[str, CourseSchedule] = {
    s.code: s for s in (MAT302, DST234, MAT146)
}


def build_course_tasks(code: str) -> list[Task]:
    """Fresh Task objects for a known course code; empty for unknown codes."""
    schedule = COURSE_SCHEDULES.get(code.upper())
    if schedule is None:
        logger.warning("Unknown course schedule requested: '%s'", code)
        return []
    return [
        Task(
            name=name,
            due_date=due,
            type=task_type,
            course=schedule.course,
            description=schedule.description,
        )
        for name, due, task_type in schedule.items
    ]


def replace_course_tasks(tasks: list[Task], code: str) -> tuple[list[Task], int]:
    """Return a new task list with *code*'s tasks swapped for a fresh copy.

    The second element is the number of tasks loaded (0 leaves *tasks* as is).
    """
    fresh = build_course_tasks(code)
    if not fresh:
        return tasks, 0
    label = COURSE_SCHEDULES[code.upper()].course
    kept = [t for t in tasks if not t.course or label not in t.course]
    return kept + fresh, len(fresh)
