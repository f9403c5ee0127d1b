"""Persistence for the last job description and the last completed analysis."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Protocol

import pydantic

from recruitmaxxing.models.analysis import AnalysisResult

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".recruitmaxxing" / "state.db"

INPUT_KEY = "last_input"
RESULT_KEY = "last_result"


class AnalysisStore(Protocol):
    def load_input(self) -> str | None: ...

    def save_input(self, text: str) -> None: ...

    def load_result(self) -> AnalysisResult | None: ...

    def save_result(self, result: AnalysisResult) -> None: ...

    def clear(self) -> None: ...


def _decode_result(raw: str | None) -> AnalysisResult | None:
    if raw is None:
        return None
    try:
        return AnalysisResult.model_validate_json(raw)
    except pydantic.ValidationError:
        logger.warning("Stored analysis result is unreadable; ignoring it", exc_info=True)
        return None


class InMemoryAnalysisStore:
    """Dict-backed store, for tests and hosts without durable storage."""

    def __init__(self):
        self.data: dict[str, str] = {}

    def load_input(self) -> str | None:
        return self.data.get(INPUT_KEY)

    def save_input(self, text: str) -> None:
        self.data[INPUT_KEY] = text

    def load_result(self) -> AnalysisResult | None:
        return _decode_result(self.data.get(RESULT_KEY))

    def save_result(self, result: AnalysisResult) -> None:
        self.data[RESULT_KEY] = result.model_dump_json(by_alias=True)

    def clear(self) -> None:
        self.data.clear()


class SQLiteAnalysisStore:
    """SQLite-backed key/value store holding the two session keys."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS session_state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def _get(self, key: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM session_state WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    def _set(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO session_state (key, value) VALUES (?, ?)",
                (key, value),
            )

    def load_input(self) -> str | None:
        return self._get(INPUT_KEY)

    def save_input(self, text: str) -> None:
        self._set(INPUT_KEY, text)

    def load_result(self) -> AnalysisResult | None:
        return _decode_result(self._get(RESULT_KEY))

    def save_result(self, result: AnalysisResult) -> None:
        self._set(RESULT_KEY, result.model_dump_json(by_alias=True))

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM session_state")
