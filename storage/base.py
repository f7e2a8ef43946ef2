"""Abstract repository interface for completed exercise results."""

from abc import ABC, abstractmethod

from models import ExerciseResult, ExerciseType


def type_key(exercise_type: ExerciseType | str) -> str:
    """Return the storage key for an exercise type."""
    if isinstance(exercise_type, ExerciseType):
        return exercise_type.value
    return exercise_type


class ExerciseResultRepository(ABC):
    """Abstract interface for exercise result storage.

    Results are stored per lesson and exercise type. Each save appends to a
    bounded history; reads of the lesson overview return the latest result.
    """

    @abstractmethod
    def save_exercise_result(
        self,
        lesson_id: str,
        exercise_type: ExerciseType | str,
        result: ExerciseResult,
    ) -> None:
        """Persist a completed result.

        Args:
            lesson_id: The lesson the exercise belongs to.
            exercise_type: The exercise type ('fill-blank', 'matching', ...).
            result: The result, normally carrying its completion timestamp.
        """
        pass

    @abstractmethod
    def get_exercise_results(self, lesson_id: str) -> dict[str, ExerciseResult]:
        """Get the latest result of each exercise type in a lesson.

        Args:
            lesson_id: The lesson ID.

        Returns:
            Dictionary mapping exercise type to its latest result. Types
            never completed are absent.
        """
        pass

    @abstractmethod
    def get_result_history(
        self, lesson_id: str, exercise_type: ExerciseType | str
    ) -> list[ExerciseResult]:
        """Get the stored attempts for one exercise type, oldest first.

        Args:
            lesson_id: The lesson ID.
            exercise_type: The exercise type.

        Returns:
            List of stored results (at most the configured history limit).
        """
        pass

    def get_best_result(
        self, lesson_id: str, exercise_type: ExerciseType | str
    ) -> ExerciseResult | None:
        """Get the highest-scoring stored attempt; the earliest wins ties."""
        best = None
        for result in self.get_result_history(lesson_id, exercise_type):
            if best is None or result.percentage > best.percentage:
                best = result
        return best
