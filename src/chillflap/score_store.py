"""
score_store.py: High score persistence.
SqliteScoreStore keeps the record in a small key/value preference table.
"""

import logging
import sqlite3
from typing import Protocol

from .constants import DB_FILE, HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def get_high_score(self) -> int:
        ...

    def set_high_score(self, score: int) -> None:
        ...


def _check_score(score: int) -> int:
    score = int(score)
    if score < 0:
        raise ValueError(f"high score cannot be negative: {score}")
    return score


class MemoryScoreStore:
    """Keeps the high score for the lifetime of the process only."""

    def __init__(self, initial: int = 0):
        self._best = _check_score(initial)

    def get_high_score(self) -> int:
        return self._best

    def set_high_score(self, score: int) -> None:
        self._best = _check_score(score)


class SqliteScoreStore:
    """Handles all interaction with the SQLite preference database."""

    def __init__(self, db_file: str = DB_FILE, key: str = HIGH_SCORE_KEY):
        self.key = key
        self.conn = sqlite3.connect(db_file)
        self.cur = self.conn.cursor()
        self.setup()

    def setup(self):
        """Creates the table if it doesn't exist."""
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS Preferences (
                key TEXT PRIMARY KEY,
                value INTEGER NOT NULL DEFAULT 0
            )
        """)
        self.conn.commit()

    def get_high_score(self) -> int:
        self.cur.execute("SELECT value FROM Preferences WHERE key=?", (self.key,))
        row = self.cur.fetchone()
        return row[0] if row else 0

    def set_high_score(self, score: int) -> None:
        """Stores the score unless a larger one is already recorded."""
        score = _check_score(score)
        self.cur.execute("""
            INSERT INTO Preferences (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = MAX(value, excluded.value)
        """, (self.key, score))
        self.conn.commit()
        logger.debug("Stored %s=%d", self.key, score)

    def close(self):
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
