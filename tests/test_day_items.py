"""Tests for src.core.day_items and src.core.class_schedule — day aggregation."""

from datetime import date, timedelta

import pytest

from src.core.class_schedule import SemesterCalendar, sessions_for_day
from src.core.day_items import (
    TENNIS_ID,
    WORKOUT_ID,
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
from src.data.models import Routine, StudyBlock, Task

MONDAY = date(2026, 1, 26)
THURSDAY = date(2026, 1, 29)
SATURDAY = date(2026, 1, 31)


def _names(items):
    return [item.name for item in items]


# ---------------------------------------------------------------------------
# Class sessions
# ---------------------------------------------------------------------------


class TestClassSessions:
    @pytest.mark.parametrize("day", [
        date(2026, 1, 20),   # day before the semester
        date(2026, 5, 7),    # day after the semester
        date(2025, 11, 3),
    ])
    def test_none_outside_semester(self, day):
        assert sessions_for_day(day, SemesterCalendar()) == []

    def test_none_during_break(self):
        cal = SemesterCalendar()
        day = date(2026, 3, 16)
        while day <= date(2026, 3, 20):
            assert sessions_for_day(day, cal) == []
            day += timedelta(days=1)

    def test_range_is_inclusive(self):
        cal = SemesterCalendar()
        assert sessions_for_day(date(2026, 1, 21), cal)   # Wednesday, first day
        assert sessions_for_day(date(2026, 5, 6), cal)    # Wednesday, last day
        assert sessions_for_day(date(2026, 3, 23), cal)   # Monday after break

    def test_monday_pattern(self):
        names = [r.name for r in sessions_for_day(MONDAY, SemesterCalendar())]
        assert names == ["MAT 302 - Discrete Math", "MAT 146 - Calculus II"]

    def test_thursday_pattern(self):
        names = [r.name for r in sessions_for_day(THURSDAY, SemesterCalendar())]
        assert names == ["DST 234 - Intro to Data Science", "MAT 146 Lab"]

    def test_weekend_has_no_classes(self):
        assert sessions_for_day(SATURDAY, SemesterCalendar()) == []

    def test_custom_calendar(self):
        cal = SemesterCalendar(
            semester_start=date(2026, 8, 24),
            semester_end=date(2026, 12, 11),
            break_start=date(2026, 11, 23),
            break_end=date(2026, 11, 27),
        )
        assert sessions_for_day(MONDAY, cal) == []
        assert sessions_for_day(date(2026, 8, 24), cal)


# ---------------------------------------------------------------------------
# items_for_date
# ---------------------------------------------------------------------------


class TestItemsForDate:
    def test_monday_default_routines_emission_order(self):
        items = items_for_date(MONDAY, Routine(), [], [])
        assert _names(items) == ["Workout", "MAT 302 - Discrete Math", "MAT 146 - Calculus II"]
        assert items[0].id == WORKOUT_ID
        assert items[0].time == "08:00"
        assert all(i.id is None for i in items[1:])

    def test_thursday_has_exactly_one_tennis(self):
        for week in range(20):
            day = THURSDAY + timedelta(weeks=week)
            tennis = [i for i in items_for_date(day, Routine(), [], []) if i.id == TENNIS_ID]
            assert len(tennis) == 1
            assert tennis[0].time == "18:00"

    def test_tennis_disabled(self):
        routine = Routine.model_validate({"tennis": {"enabled": False}})
        assert TENNIS_ID not in [i.id for i in items_for_date(THURSDAY, routine, [], [])]

    def test_workout_disabled(self):
        routine = Routine.model_validate({"workout": {"enabled": False}})
        assert WORKOUT_ID not in [i.id for i in items_for_date(MONDAY, routine, [], [])]

    def test_routines_independent_of_semester(self):
        summer_thursday = date(2026, 7, 2)
        items = items_for_date(summer_thursday, Routine(), [], [])
        assert _names(items) == ["Tennis"]

    def test_study_blocks_use_stable_ids(self):
        block = StudyBlock(course="MAT 302", days=["monday", "wednesday"], start_time="15:00", end_time="16:30")
        items = items_for_date(MONDAY, Routine(), [block], [])
        study = [i for i in items if i.type == "study-block"]
        assert len(study) == 1
        assert study[0].id == block.id
        assert study[0].name == "MAT 302 Study"
        assert study[0].time == "15:00"
        assert study[0].description == "3:00 PM - 4:30 PM"

    def test_study_block_wrong_day_excluded(self):
        block = StudyBlock(course="MAT 302", days=["tuesday"], start_time="15:00", end_time="16:00")
        assert all(i.type != "study-block" for i in items_for_date(MONDAY, Routine(), [block], []))

    def test_tasks_matched_by_exact_date(self):
        due = Task(name="HW 2.1", due_date="2026-01-26", course="MAT 302")
        other = Task(name="HW 2.2", due_date="2026-01-28")
        items = items_for_date(MONDAY, Routine(), [], [due, other])
        assert items[-1].id == due.id
        assert items[-1].course == "MAT 302"
        assert "HW 2.2" not in _names(items)

    def test_full_emission_order(self):
        block = StudyBlock(course="DST 234", days=["thursday"], start_time="09:00", end_time="10:00")
        task = Task(name="Quiz 1", due_date="2026-01-29", type="quiz")
        types = [i.type for i in items_for_date(THURSDAY, Routine(), [block], [task])]
        assert types == ["routine", "study-block", "class-session", "class-session", "quiz"]


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


class TestCompletion:
    def test_key_uses_id(self):
        item = DayItem(name="Workout", type="routine", id=WORKOUT_ID)
        assert completion_key(item, "2026-01-26") == "routine_workout_2026-01-26"

    def test_key_falls_back_to_name(self):
        item = DayItem(name="MAT 146 Lab", type="class-session")
        assert completion_key(item, "2026-01-29") == "routine_MAT 146 Lab_2026-01-29"

    def test_double_toggle_restores_state(self):
        completed = {}
        assert toggle_completion(completed, "task_1", "2026-01-26") is True
        assert toggle_completion(completed, "task_1", "2026-01-26") is False
        item = DayItem(name="x", type="assignment", id="task_1")
        assert is_completed(item, "2026-01-26", completed) is False

    def test_completion_is_per_date(self):
        completed = {}
        toggle_completion(completed, WORKOUT_ID, "2026-01-26")
        item = DayItem(name="Workout", type="routine", id=WORKOUT_ID)
        assert is_completed(item, "2026-01-26", completed)
        assert not is_completed(item, "2026-01-28", completed)

    def test_purge_only_removes_prefixed_keys(self):
        completed = {
            "task_1_2026-01-26": True,
            "task_1_2026-01-27": False,
            "task_10_2026-01-26": True,
        }
        assert purge_completions(completed, "task_1") == 2
        assert completed == {"task_10_2026-01-26": True}

    @pytest.mark.parametrize("item, expected", [
        (DayItem(name="Essay", type="assignment", id="task_1"), True),
        (DayItem(name="Workout", type="routine", id=WORKOUT_ID), False),
        (DayItem(name="MAT 302 Study", type="study-block", id="study_abc"), False),
        (DayItem(name="MAT 146 Lab", type="class-session"), False),
    ])
    def test_only_tasks_are_deletable(self, item, expected):
        assert item.deletable is expected


# ---------------------------------------------------------------------------
# Ordering, week helpers
# ---------------------------------------------------------------------------


class TestSortForDisplay:
    def test_incomplete_first_then_time(self):
        items = [
            DayItem(name="late", type="assignment", time="20:00", id="a"),
            DayItem(name="untimed", type="assignment", id="b"),
            DayItem(name="early", type="assignment", time="07:00", id="c"),
            DayItem(name="done", type="assignment", time="06:00", id="d"),
        ]
        completed = {"d_2026-01-26": True}
        assert _names(sort_for_display(items, "2026-01-26", completed)) == [
            "early", "late", "untimed", "done",
        ]

    def test_class_sessions_never_complete(self):
        session = DayItem(name="MAT 146 Lab", type="class-session", time="12:20")
        completed = {"routine_MAT 146 Lab_2026-01-29": True}
        other = DayItem(name="HW", type="assignment", time="13:00", id="t")
        assert _names(sort_for_display([other, session], "2026-01-29", completed)) == ["MAT 146 Lab", "HW"]

    def test_stable_for_equal_times(self):
        items = [
            DayItem(name="first", type="routine", time="10:00", id="x"),
            DayItem(name="second", type="assignment", time="10:00", id="y"),
        ]
        assert _names(sort_for_display(items, "2026-01-26", {})) == ["first", "second"]


class TestWeekHelpers:
    def test_week_starts_on_sunday(self):
        assert week_start(MONDAY) == date(2026, 1, 25)
        assert week_start(date(2026, 1, 25)) == date(2026, 1, 25)
        assert week_start(SATURDAY) == date(2026, 1, 25)

    @pytest.mark.parametrize("count,expected", [
        (0, ("light", "Light day")),
        (1, ("light", "1 task")),
        (3, ("", "3 tasks")),
        (5, ("heavy", "5 tasks - Heavy!")),
    ])
    def test_workload_label(self, count, expected):
        items = [DayItem(name=f"t{i}", type="assignment") for i in range(count)]
        items.append(DayItem(name="Workout", type="routine"))
        assert workload_label(items) == expected
