"""Tests for src.core.syllabus_extractor — heuristic assignment extraction."""

from datetime import date

import pytest

from src.core.syllabus_extractor import (
    derive_name,
    determine_task_type,
    extract_assignments,
    find_due_date,
    has_assignment_keyword,
)


# ---------------------------------------------------------------------------
# Pipeline steps
# ---------------------------------------------------------------------------


class TestKeywordGate:
    @pytest.mark.parametrize("line", [
        "Homework 3 posted",
        "HW 2.1 due Jan 26",
        "Submit your essay",
        "MIDTERM on Feb 20",
        "Lab report",
        "Final presentation",
    ])
    def test_matches(self, line):
        assert has_assignment_keyword(line)

    def test_no_keyword(self):
        assert not has_assignment_keyword("Welcome to the course")


class TestFindDueDate:
    def test_month_day(self):
        assert find_due_date("due Jan 26") == date(2026, 1, 26)

    def test_full_month_name_with_year(self):
        assert find_due_date("Project due February 3, 2027") == date(2027, 2, 3)

    def test_skips_month_shaped_non_month(self):
        # "HW 2" looks like "<word> <number>" but HW is not a month
        assert find_due_date("HW 2.1 due Jan 26") == date(2026, 1, 26)

    def test_slash(self):
        assert find_due_date("Quiz 3/5") == date(2026, 3, 5)

    def test_slash_two_digit_year(self):
        assert find_due_date("Exam 4/17/27") == date(2027, 4, 17)

    def test_dash(self):
        assert find_due_date("Lab due 2-14") == date(2026, 2, 14)

    def test_dash_four_digit_year(self):
        assert find_due_date("Lab due 2-14-2026") == date(2026, 2, 14)

    def test_month_name_wins_over_numeric(self):
        assert find_due_date("Quiz 3/5 moved to Apr 2") == date(2026, 4, 2)

    def test_fallback_year(self):
        assert find_due_date("Quiz Mar 3", fallback_year=2031) == date(2031, 3, 3)

    def test_impossible_date_is_skipped(self):
        assert find_due_date("Quiz Feb 30") is None

    def test_no_date(self):
        assert find_due_date("Homework TBA") is None

    @pytest.mark.parametrize("line, expected", [
        ("Quiz due Jan 26th", date(2026, 1, 26)),
        ("Midterm Exam: March 3rd", date(2026, 3, 3)),
        ("Final Project due May 5th, 2026", date(2026, 5, 5)),
        ("HW 4 due Sept 1st", date(2026, 9, 1)),
        ("Lab report due Apr 22nd", date(2026, 4, 22)),
    ])
    def test_ordinal_suffix(self, line, expected):
        assert find_due_date(line) == expected


class TestDeriveName:
    def test_strips_date_and_due(self):
        assert derive_name("HW 2.1 due Jan 26") == "HW 2.1"

    def test_strips_due_colon(self):
        assert derive_name("Project proposal DUE: 3/14") == "Project proposal"

    def test_collapses_whitespace(self):
        assert derive_name("  Quiz   4    Feb 20, 2026 ") == "Quiz 4"

    def test_keeps_words_containing_due(self):
        assert derive_name("Overdue lab penalty 3/2") == "Overdue lab penalty"

    def test_strips_ordinal_suffix(self):
        assert derive_name("Final Project due May 5th, 2026") == "Final Project"


class TestDetermineTaskType:
    @pytest.mark.parametrize("name,expected", [
        ("Quiz 1", "quiz"),
        ("Midterm Exam", "quiz"),
        ("Unit test review", "quiz"),
        ("Final presentation", "quiz"),
        ("Group project", "project"),
        ("HW 2.1", "assignment"),
        ("Reading response", "assignment"),
    ])
    def test_classification(self, name, expected):
        assert determine_task_type(name) == expected

    def test_quiz_beats_project(self):
        assert determine_task_type("Project exam") == "quiz"


# ---------------------------------------------------------------------------
# extract_assignments
# ---------------------------------------------------------------------------


class TestExtractAssignments:
    def test_worked_example(self):
        [task] = extract_assignments("HW 2.1 due Jan 26", "MAT 302")
        assert task.due_date == "2026-01-26"
        assert task.type == "assignment"
        assert "HW 2.1" in task.name
        assert task.course == "MAT 302"
        assert task.description == "MAT 302 - assignment"
        assert task.id.startswith("task_")

    def test_line_without_keyword_yields_nothing(self):
        assert extract_assignments("Welcome to the course", "MAT 302") == []

    def test_keyword_without_date_discarded(self):
        assert extract_assignments("Homework will be posted weekly", "MAT 302") == []

    def test_date_only_line_discarded(self):
        assert extract_assignments("Due Jan 26", "MAT 302") == []

    def test_empty_input(self):
        assert extract_assignments("", "MAT 302") == []

    def test_multi_line_syllabus(self):
        text = "\n".join([
            "Week 1: Introduction",
            "Quiz 1 (2.1, 2.2) Jan 30",
            "Mini-project 1 due 2/12",
            "Office hours: Tuesdays",
            "Midterm Exam 1 - March 13",
        ])
        tasks = extract_assignments(text, "MAT 146")
        assert [(t.due_date, t.type) for t in tasks] == [
            ("2026-01-30", "quiz"),
            ("2026-02-12", "project"),
            ("2026-03-13", "quiz"),
        ]

    def test_ordinal_dates(self):
        text = "\n".join([
            "Quiz due Jan 26th",
            "Midterm Exam: March 3rd",
            "Final Project due May 5th, 2026",
        ])
        tasks = extract_assignments(text, "MAT 302")
        assert [t.due_date for t in tasks] == ["2026-01-26", "2026-03-03", "2026-05-05"]
        assert all(not t.name.endswith(("th", "rd")) for t in tasks)

    def test_name_truncated_to_100_chars(self):
        line = "Assignment " + "x" * 200 + " due Jan 26"
        [task] = extract_assignments(line, "ENG 101")
        assert len(task.name) == 100

    def test_deterministic_apart_from_ids(self):
        text = "HW 1 due Jan 26\nQuiz 2 Feb 6\nProject report 4/1"
        first = extract_assignments(text, "MAT 302")
        second = extract_assignments(text, "MAT 302")
        assert [(t.name, t.due_date, t.type) for t in first] == [
            (t.name, t.due_date, t.type) for t in second
        ]
        assert {t.id for t in first}.isdisjoint({t.id for t in second})

    def test_windows_line_endings(self):
        tasks = extract_assignments("Quiz 1 Jan 30\r\nQuiz 2 Feb 6\r\n", "DST 234")
        assert [t.name for t in tasks] == ["Quiz 1", "Quiz 2"]

    def test_fallback_year_parameter(self):
        [task] = extract_assignments("Quiz 1 Jan 30", "DST 234", fallback_year=2027)
        assert task.due_date == "2027-01-30"
