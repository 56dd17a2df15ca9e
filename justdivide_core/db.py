from __future__ import annotations

import logging
import os
import sqlite3
from datetime import datetime, timezone

from .config import BEST_SCORE_KEY

logger = logging.getLogger(__name__)


def _ensure_db_dir(db_path: str) -> None:
    """Ensures the directory for the SQLite DB exists before connecting."""
    directory = os.path.dirname(db_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def _resolve_db_path(db_path: str) -> str:
    """Resolves a potentially unwritable DB path to a writable one, creating the directory if needed."""
    try:
        _ensure_db_dir(db_path)
        return db_path
    except PermissionError:
        logger.warning("DB directory for %s is not writable, looking for a fallback", db_path)
    candidates = [
        os.getenv('JUSTDIVIDE_DB_DIR'),
        os.path.join(os.getcwd(), 'data'),
        '/tmp',
    ]
    base = os.path.basename(db_path) or 'justdivide.db'
    for d in candidates:
        if not d:
            continue
        try:
            os.makedirs(d, exist_ok=True)
            return os.path.join(d, base)
        except OSError:
            continue
    return base


def _ensure_db(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS scores (
            key TEXT PRIMARY KEY,
            value INTEGER NOT NULL,
            updated_at TEXT NOT NULL
        )
        """
    )
    conn.commit()


def _connect(db_path: str) -> sqlite3.Connection:
    resolved = _resolve_db_path(db_path)
    _ensure_db_dir(resolved)
    conn = sqlite3.connect(resolved)
    _ensure_db(conn)
    return conn


def load_best_score(db_path: str, key: str = BEST_SCORE_KEY) -> int:
    """Returns the stored best score, or 0 when nothing has been saved yet."""
    conn = _connect(db_path)
    try:
        row = conn.execute("SELECT value FROM scores WHERE key = ?", (key,)).fetchone()
        return int(row[0]) if row else 0
    finally:
        conn.close()


def save_best_score(db_path: str, score: int, key: str = BEST_SCORE_KEY) -> int:
    """Stores max(existing, score) and returns the value now on disk."""
    if score < 0:
        raise ValueError(f"Best score cannot be negative: {score}")
    conn = _connect(db_path)
    try:
        row = conn.execute("SELECT value FROM scores WHERE key = ?", (key,)).fetchone()
        current = int(row[0]) if row else 0
        if row is not None and current >= score:
            return current
        conn.execute(
            "INSERT OR REPLACE INTO scores (key, value, updated_at) VALUES (?, ?, ?)",
            (key, int(score), datetime.now(timezone.utc).isoformat(timespec='seconds')),
        )
        conn.commit()
        logger.info("best score %s -> %s", current, score)
        return int(score)
    finally:
        conn.close()


class BestScoreStore:
    """Persistence collaborator handed to GameSession."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def load_best_score(self) -> int:
        return load_best_score(self.db_path)

    def save_best_score(self, score: int) -> None:
        save_best_score(self.db_path, score)


class MemoryBestScoreStore:
    """Keeps the best score in process memory only."""

    def __init__(self, best: int = 0):
        self.best = best
        self.saves = 0

    def load_best_score(self) -> int:
        return self.best

    def save_best_score(self, score: int) -> None:
        self.saves += 1
        self.best = max(self.best, score)
