"""Display helpers shared by the day view, briefing and reminders."""

from __future__ import annotations

from datetime import date


def format_time(time24: str | None) -> str:
    """'13:10' -> '1:10 PM'. Empty input yields an empty string."""
    if not time24:
        return ""
    hours, minutes = map(int, time24.split(":")[:2])
    period = "PM" if hours >= 12 else "AM"
    hours12 = hours % 12 or 12
    return f"{hours12}:{minutes:02d} {period}"


def format_date_short(date_str: str) -> str:
    """'2026-01-26' -> 'Jan 26'."""
    d = date.fromisoformat(date_str)
    return f"{d.strftime('%b')} {d.day}"


def format_date_long(d: date) -> str:
    """date(2026, 1, 26) -> 'Monday, January 26, 2026'."""
    return f"{d.strftime('%A')}, {d.strftime('%B')} {d.day}, {d.year}"
