"""Session lifecycle for one learner working through exercises.

States move Idle -> InProgress -> Completed. Submitting and resetting keep
an attempt InProgress; completing it scores the answers, stamps the result
and hands it to the result repository. Starting another exercise always
begins a fresh attempt.
"""

import asyncio
import inspect
import logging
import threading
from datetime import datetime
from typing import Any

from exercises.aggregator import calculate_results
from exercises.config import TranslationConfig
from exercises.errors import NoActiveExerciseError
from exercises.matching import MatchingBoard
from exercises.tracker import AnswerTracker
from models import (
    CompletionStatus,
    Exercise,
    ExerciseResult,
    ExerciseType,
    MatchingExercise,
    SessionStatus,
    Side,
)
from storage.base import ExerciseResultRepository, type_key

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Orchestrates an exercise attempt and persists its result.

    The repository is injected; the reporter never looks storage up on its
    own.
    """

    def __init__(
        self,
        storage: ExerciseResultRepository,
        tracker: AnswerTracker | None = None,
        config: TranslationConfig | None = None,
    ):
        self.storage = storage
        self.tracker = tracker or AnswerTracker(config)
        self.status = SessionStatus.IDLE
        self.board: MatchingBoard | None = None
        self.last_result: ExerciseResult | None = None
        self.last_storage_error: Exception | None = None
        self._pending_saves: set[asyncio.Task] = set()

    @property
    def current_exercise(self) -> Exercise | None:
        return self.tracker.current_exercise

    def start_exercise(self, exercise: Exercise) -> None:
        """Begin a new attempt, discarding any unsaved answers."""
        self.tracker.start_exercise(exercise)
        self.board = (
            MatchingBoard(exercise) if isinstance(exercise, MatchingExercise) else None
        )
        self.last_result = None
        self.status = SessionStatus.IN_PROGRESS
        logger.debug("Session in progress for %r", exercise.title)

    def submit_answer(self, question_id: int, answer: Any) -> bool:
        """Evaluate and record an answer for the attempt in progress.

        Raises:
            NoActiveExerciseError: If no attempt is in progress.
        """
        self._require_in_progress("submit an answer")
        return self.tracker.submit_answer(question_id, answer)

    def select_match_item(self, side: Side, index: int) -> bool | None:
        """Select an item on the matching board.

        Returns:
            Whether the committed pair is correct, or None when the
            selection did not complete a pair.

        Raises:
            NoActiveExerciseError: If no attempt is in progress.
            ValueError: If the current exercise is not a matching exercise.
        """
        self._require_in_progress("select a matching item")
        if self.board is None:
            raise ValueError("The current exercise is not a matching exercise")

        pair = self.board.select(side, index)
        if pair is None:
            return None
        return self.tracker.submit_answer(pair.left, pair.right)

    def reset_answers(self) -> None:
        """Clear the answers of the current exercise and start over."""
        if self.tracker.current_exercise is None:
            return
        self.tracker.reset_answers()
        if self.board is not None:
            self.board.reset()
        self.last_result = None
        self.status = SessionStatus.IN_PROGRESS
        logger.debug("Answers reset for %r", self.tracker.current_exercise.title)

    def complete_exercise(self, lesson_id: str) -> ExerciseResult:
        """Score the attempt, persist it and close the attempt.

        A storage failure is logged and kept on ``last_storage_error``; the
        computed result is returned either way.

        Raises:
            NoActiveExerciseError: If no attempt is in progress.
        """
        self._require_in_progress("complete the exercise")
        exercise = self.tracker.current_exercise

        result = calculate_results(exercise, self.tracker.get_all_answers())
        result = result.model_copy(update={"completed_at": datetime.now()})

        self.status = SessionStatus.COMPLETED
        self.last_result = result
        self._persist(lesson_id, exercise.type, result)
        return result

    def get_exercise_results(self, lesson_id: str) -> dict[str, ExerciseResult]:
        return self.storage.get_exercise_results(lesson_id) or {}

    def is_exercise_completed(
        self, lesson_id: str, exercise_type: ExerciseType | str
    ) -> bool:
        return type_key(exercise_type) in self.get_exercise_results(lesson_id)

    def get_completion_status(
        self, exercises: list[Exercise], lesson_id: str
    ) -> dict[str, CompletionStatus]:
        """Report which exercise types of a lesson have a stored result."""
        results = self.get_exercise_results(lesson_id)
        status: dict[str, CompletionStatus] = {}
        for exercise in exercises:
            result = results.get(exercise.type)
            status[exercise.type] = CompletionStatus(
                completed=result is not None, result=result
            )
        return status

    def _require_in_progress(self, operation: str) -> None:
        if self.tracker.current_exercise is None:
            raise NoActiveExerciseError(operation)
        if self.status == SessionStatus.COMPLETED:
            raise NoActiveExerciseError(operation, "the attempt is already completed")

    def _persist(self, lesson_id: str, exercise_type: str, result: ExerciseResult) -> None:
        self.last_storage_error = None
        try:
            outcome = self.storage.save_exercise_result(lesson_id, exercise_type, result)
        except Exception as e:
            self._record_storage_error(lesson_id, exercise_type, e)
            return

        if inspect.isawaitable(outcome):
            self._schedule(lesson_id, exercise_type, outcome)

    def _schedule(self, lesson_id: str, exercise_type: str, outcome) -> None:
        """Run an asynchronous save without waiting for it."""

        async def save():
            try:
                await outcome
            except Exception as e:
                self._record_storage_error(lesson_id, exercise_type, e)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            threading.Thread(target=asyncio.run, args=(save(),), daemon=True).start()
        else:
            task = loop.create_task(save())
            self._pending_saves.add(task)
            task.add_done_callback(self._pending_saves.discard)

    def _record_storage_error(
        self, lesson_id: str, exercise_type: str, error: Exception
    ) -> None:
        self.last_storage_error = error
        logger.error(
            "Failed to save %s result for lesson %s",
            exercise_type,
            lesson_id,
            exc_info=error,
        )
