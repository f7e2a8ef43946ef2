"""Database connection management and schema initialization."""

import sqlite3
from pathlib import Path

from exercises.config import DEFAULT_DB_PATH

SCHEMA_SQL = """
-- Completed exercise attempts, one row per completion
CREATE TABLE IF NOT EXISTS exercise_results (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    lesson_id TEXT NOT NULL,
    exercise_type TEXT NOT NULL CHECK (
        exercise_type IN ('fill-blank', 'multiple-choice', 'matching', 'translation')
    ),
    percentage INTEGER NOT NULL,
    passed INTEGER NOT NULL,
    completed_at TEXT,
    result TEXT NOT NULL  -- JSON-serialized ExerciseResult
);

CREATE INDEX IF NOT EXISTS idx_exercise_results_lesson
    ON exercise_results(lesson_id, exercise_type);
"""


def get_connection(db_path: Path = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Get a database connection with appropriate settings.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A configured sqlite3 Connection object.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_schema(db_path: Path = DEFAULT_DB_PATH) -> None:
    """Initialize the database schema if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()
