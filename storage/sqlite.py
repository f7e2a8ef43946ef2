"""SQLite implementation of the result repository."""

import sqlite3
from pathlib import Path

from exercises.config import DEFAULT_DB_PATH, StorageConfig
from exercises.errors import StorageFailureError
from models import ExerciseResult, ExerciseType

from .base import ExerciseResultRepository, type_key
from .connection import get_connection


class SQLiteExerciseResultRepository(ExerciseResultRepository):
    """SQLite implementation of ExerciseResultRepository."""

    def __init__(
        self,
        db_path: Path = DEFAULT_DB_PATH,
        history_limit: int = StorageConfig().history_limit,
    ):
        self.db_path = db_path
        self.history_limit = history_limit

    def save_exercise_result(
        self,
        lesson_id: str,
        exercise_type: ExerciseType | str,
        result: ExerciseResult,
    ) -> None:
        """Append a result and drop attempts beyond the history limit."""
        key = type_key(exercise_type)
        try:
            conn = get_connection(self.db_path)
            try:
                conn.execute(
                    """INSERT INTO exercise_results
                    (lesson_id, exercise_type, percentage, passed, completed_at, result)
                    VALUES (?, ?, ?, ?, ?, ?)""",
                    (
                        lesson_id,
                        key,
                        result.percentage,
                        int(result.passed),
                        result.completed_at.isoformat() if result.completed_at else None,
                        result.model_dump_json(),
                    ),
                )
                conn.execute(
                    """DELETE FROM exercise_results
                    WHERE lesson_id = ? AND exercise_type = ? AND id NOT IN (
                        SELECT id FROM exercise_results
                        WHERE lesson_id = ? AND exercise_type = ?
                        ORDER BY id DESC LIMIT ?
                    )""",
                    (lesson_id, key, lesson_id, key, self.history_limit),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageFailureError(
                f"Could not save {key} result: {e}", lesson_id=lesson_id
            ) from e

    def get_exercise_results(self, lesson_id: str) -> dict[str, ExerciseResult]:
        """Get the latest result of each exercise type in a lesson."""
        try:
            conn = get_connection(self.db_path)
            try:
                cursor = conn.execute(
                    """SELECT r.exercise_type, r.result FROM exercise_results r
                    JOIN (
                        SELECT exercise_type, MAX(id) AS id FROM exercise_results
                        WHERE lesson_id = ? GROUP BY exercise_type
                    ) latest ON r.id = latest.id""",
                    (lesson_id,),
                )
                return {
                    row["exercise_type"]: self._row_to_model(row)
                    for row in cursor.fetchall()
                }
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageFailureError(
                f"Could not read results: {e}", lesson_id=lesson_id
            ) from e

    def get_result_history(
        self, lesson_id: str, exercise_type: ExerciseType | str
    ) -> list[ExerciseResult]:
        """Get the stored attempts for one exercise type, oldest first."""
        try:
            conn = get_connection(self.db_path)
            try:
                cursor = conn.execute(
                    """SELECT result FROM exercise_results
                    WHERE lesson_id = ? AND exercise_type = ?
                    ORDER BY id""",
                    (lesson_id, type_key(exercise_type)),
                )
                return [self._row_to_model(row) for row in cursor.fetchall()]
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageFailureError(
                f"Could not read result history: {e}", lesson_id=lesson_id
            ) from e

    def _row_to_model(self, row) -> ExerciseResult:
        """Convert a database row to an ExerciseResult model."""
        return ExerciseResult.model_validate_json(row["result"])
