"""Storage layer for exercise results.

Provides the repository interface the engine persists through, plus SQLite
and in-memory implementations.
"""

from pathlib import Path

from exercises.config import StorageConfig

from .base import ExerciseResultRepository, type_key
from .connection import DEFAULT_DB_PATH, get_connection, init_schema
from .memory import InMemoryExerciseResultRepository
from .sqlite import SQLiteExerciseResultRepository

__all__ = [
    # Abstract interface
    "ExerciseResultRepository",
    "type_key",
    # Implementations
    "SQLiteExerciseResultRepository",
    "InMemoryExerciseResultRepository",
    # Connection utilities
    "get_connection",
    "init_schema",
    "DEFAULT_DB_PATH",
    # Factory functions
    "get_exercise_result_repo",
]


def get_exercise_result_repo(
    db_path: Path | None = None,
    config: StorageConfig | None = None,
) -> ExerciseResultRepository:
    """Get a SQLite-backed ExerciseResultRepository with its schema in place."""
    config = config or StorageConfig()
    db_path = db_path or config.db_path
    init_schema(db_path)
    return SQLiteExerciseResultRepository(db_path, history_limit=config.history_limit)
