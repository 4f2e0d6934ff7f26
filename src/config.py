"""
Daily Planner — Centralized configuration.

Loads all settings from .env. Nothing here is required: every key has a
default matching the Spring 2026 term the planner was built for.
"""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator, model_validator

# Load .env from project root (two levels up from src/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # SQLite key/value store
    DATABASE_PATH: str = "data/planner.db"

    # Reminder loop
    REMINDER_CHECK_SECONDS: int = 60

    # Semester calendar for fixed class sessions
    SEMESTER_START: date = date(2026, 1, 21)
    SEMESTER_END: date = date(2026, 5, 6)
    BREAK_START: date = date(2026, 3, 16)
    BREAK_END: date = date(2026, 3, 20)

    # Year assumed for syllabus dates written without one
    SYLLABUS_FALLBACK_YEAR: int = 2026

    LOG_LEVEL: str = "INFO"

    @field_validator("REMINDER_CHECK_SECONDS", "SYLLABUS_FALLBACK_YEAR", mode="before")
    @classmethod
    def parse_int(cls, v: str | int) -> int:
        return int(v)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return str(v).strip().upper() or "INFO"

    @model_validator(mode="after")
    def check_ranges(self) -> Settings:
        if self.SEMESTER_START > self.SEMESTER_END:
            raise ValueError("SEMESTER_START must not be after SEMESTER_END")
        if self.BREAK_START > self.BREAK_END:
            raise ValueError("BREAK_START must not be after BREAK_END")
        if self.REMINDER_CHECK_SECONDS <= 0:
            raise ValueError("REMINDER_CHECK_SECONDS must be positive")
        return self


def _load_settings() -> Settings:
    """Load settings from environment, falling back to the model defaults."""
    env_keys = (
        "DATABASE_PATH",
        "REMINDER_CHECK_SECONDS",
        "SEMESTER_START",
        "SEMESTER_END",
        "BREAK_START",
        "BREAK_END",
        "SYLLABUS_FALLBACK_YEAR",
        "LOG_LEVEL",
    )
    overrides = {key: os.environ[key] for key in env_keys if os.getenv(key)}
    return Settings(**overrides)


# Singleton — imported by all other modules as:
#   from src.config import settings
settings = _load_settings()
