"""In-memory result repository, used when no database is available."""

from exercises.config import StorageConfig
from models import ExerciseResult, ExerciseType

from .base import ExerciseResultRepository, type_key


class InMemoryExerciseResultRepository(ExerciseResultRepository):
    """Keeps results in a dictionary for the lifetime of the process."""

    def __init__(self, history_limit: int = StorageConfig().history_limit):
        self.history_limit = history_limit
        self._results: dict[tuple[str, str], list[ExerciseResult]] = {}

    def save_exercise_result(
        self,
        lesson_id: str,
        exercise_type: ExerciseType | str,
        result: ExerciseResult,
    ) -> None:
        history = self._results.setdefault((lesson_id, type_key(exercise_type)), [])
        history.append(result.model_copy(deep=True))
        del history[: -self.history_limit]

    def get_exercise_results(self, lesson_id: str) -> dict[str, ExerciseResult]:
        return {
            key: history[-1]
            for (stored_lesson, key), history in self._results.items()
            if stored_lesson == lesson_id and history
        }

    def get_result_history(
        self, lesson_id: str, exercise_type: ExerciseType | str
    ) -> list[ExerciseResult]:
        return list(self._results.get((lesson_id, type_key(exercise_type)), []))
