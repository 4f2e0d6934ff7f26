"""
Daily Planner — Key/Value Store.

The Memory pillar: tasks, routines, study blocks and completion records
persist in SQLite as four independent JSON blobs, one per key. Each save
overwrites whole collections; there is no schema version.

A blob that cannot be decoded resets only its own collection to the default
and is logged; it never stops the planner from starting.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.data.models import PlannerState, Routine, StudyBlock, Task

logger = logging.getLogger(__name__)

TASKS_KEY = "planner_tasks"
ROUTINES_KEY = "planner_routines"
STUDY_BLOCKS_KEY = "planner_study_blocks"
COMPLETED_KEY = "planner_completed"
NOTIFIED_PREFIX = "notified_"


class PlannerStore:
    """SQLite-backed key/value storage for the planner collections."""

    def __init__(self, db_path: str | None = None) -> None:
        if db_path is None:
            from src.config import settings
            db_path = settings.DATABASE_PATH

        self._db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Create the kv table if it doesn't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key   TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
        logger.debug("Planner store initialized at %s", self._db_path)

    # ------------------------------------------------------------------
    # Raw slots
    # ------------------------------------------------------------------

    def get_raw(self, key: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return None if row is None else row["value"]

    def set_raw(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def _load_json(self, key: str) -> Any:
        raw = self.get_raw(key)
        return None if raw is None else json.loads(raw)

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def load_tasks(self) -> list[Task]:
        try:
            data = self._load_json(TASKS_KEY)
            if data is None:
                return []
            return [Task.model_validate(item) for item in data]
        except (json.JSONDecodeError, ValidationError, TypeError) as exc:
            logger.error("Stored tasks are corrupt, resetting: %s", exc)
            return []

    def load_routine(self) -> Routine:
        """Return the stored routine overlaid on the defaults."""
        try:
            data = self._load_json(ROUTINES_KEY)
            if data is None:
                return Routine()
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            merged = Routine().model_dump(by_alias=True)
            merged.update(data)
            return Routine.model_validate(merged)
        except (json.JSONDecodeError, ValidationError, TypeError) as exc:
            logger.error("Stored routines are corrupt, resetting to defaults: %s", exc)
            return Routine()

    def load_study_blocks(self) -> list[StudyBlock]:
        try:
            data = self._load_json(STUDY_BLOCKS_KEY)
            if data is None:
                return []
            blocks = [StudyBlock.model_validate(item) for item in data]
        except (json.JSONDecodeError, ValidationError, TypeError) as exc:
            logger.error("Stored study blocks are corrupt, resetting: %s", exc)
            return []

        # Blocks saved before ids existed get one now and keep it from here on
        if any("id" not in item for item in data):
            logger.info("Assigning stable ids to %d legacy study block(s)", len(blocks))
            self.save_study_blocks(blocks)
        return blocks

    def load_completed(self) -> dict[str, bool]:
        try:
            data = self._load_json(COMPLETED_KEY)
            if data is None:
                return {}
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            return {str(k): v is True for k, v in data.items()}
        except (json.JSONDecodeError, TypeError) as exc:
            logger.error("Stored completion records are corrupt, resetting: %s", exc)
            return {}

    def load_state(self) -> PlannerState:
        state = PlannerState(
            tasks=self.load_tasks(),
            routine=self.load_routine(),
            study_blocks=self.load_study_blocks(),
            completed=self.load_completed(),
        )
        logger.info(
            "Loaded planner state: %d task(s), %d study block(s), %d completion record(s)",
            len(state.tasks), len(state.study_blocks), len(state.completed),
        )
        return state

    def save_study_blocks(self, blocks: list[StudyBlock]) -> None:
        self.set_raw(
            STUDY_BLOCKS_KEY,
            json.dumps([b.model_dump(by_alias=True) for b in blocks]),
        )

    def save_state(self, state: PlannerState) -> None:
        """Overwrite all four collections in one transaction."""
        payload = {
            TASKS_KEY: json.dumps([t.model_dump(by_alias=True) for t in state.tasks]),
            ROUTINES_KEY: json.dumps(state.routine.model_dump(by_alias=True)),
            STUDY_BLOCKS_KEY: json.dumps([b.model_dump(by_alias=True) for b in state.study_blocks]),
            COMPLETED_KEY: json.dumps(state.completed),
        }
        with self._connect() as conn:
            conn.executemany(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                list(payload.items()),
            )
        logger.debug("Planner state saved to %s", self._db_path)

    # ------------------------------------------------------------------
    # Reminder markers
    # ------------------------------------------------------------------

    @staticmethod
    def notified_key(task_id: str, due_date: str) -> str:
        return f"{NOTIFIED_PREFIX}{task_id}_{due_date}"

    def is_notified(self, task_id: str, due_date: str) -> bool:
        return self.get_raw(self.notified_key(task_id, due_date)) is not None

    def mark_notified(self, task_id: str, due_date: str) -> None:
        self.set_raw(self.notified_key(task_id, due_date), "true")
