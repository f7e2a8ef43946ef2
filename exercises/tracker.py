"""In-memory state of one exercise attempt."""

import logging
from datetime import datetime
from typing import Any

from exercises.aggregator import round_percent
from exercises.config import TranslationConfig
from exercises.errors import NoActiveExerciseError
from exercises.evaluator import ExerciseEvaluator, get_evaluator
from models import AnswerRecord, Exercise, scorable_unit_ids

logger = logging.getLogger(__name__)


class AnswerTracker:
    """Holds the current exercise and the evaluated answers given so far.

    Every submission is evaluated immediately. Submitting again for the same
    question replaces the earlier record.
    """

    def __init__(self, config: TranslationConfig | None = None):
        self.config = config or TranslationConfig()
        self._exercise: Exercise | None = None
        self._evaluator: ExerciseEvaluator | None = None
        self._answers: dict[int, AnswerRecord] = {}

    @property
    def current_exercise(self) -> Exercise | None:
        return self._exercise

    @property
    def evaluator(self) -> ExerciseEvaluator | None:
        return self._evaluator

    def start_exercise(self, exercise: Exercise) -> None:
        """Make an exercise current, discarding any previous answers."""
        self._exercise = exercise
        self._evaluator = get_evaluator(exercise, self.config)
        self._answers.clear()
        logger.debug("Started %s exercise %r", exercise.type, exercise.title)

    def submit_answer(self, question_id: int, answer: Any) -> bool:
        """Evaluate and record an answer.

        Args:
            question_id: The question (or, for matching, left item) answered.
            answer: The learner's answer.

        Returns:
            True only if the answer earned full credit.

        Raises:
            NoActiveExerciseError: If no exercise has been started.
        """
        if self._exercise is None or self._evaluator is None:
            raise NoActiveExerciseError("submit an answer")

        credit = self._evaluator.evaluate(question_id, answer)
        record = AnswerRecord(
            question_id=question_id,
            submitted_answer=answer,
            credit=credit.value,
            is_fully_correct=credit.is_fully_correct,
            timestamp=datetime.now(),
        )
        self._answers[question_id] = record
        return record.is_fully_correct

    def get_answer(self, question_id: int) -> AnswerRecord | None:
        return self._answers.get(question_id)

    def get_all_answers(self) -> dict[int, AnswerRecord]:
        """Return a copy of the recorded answers keyed by question id."""
        return dict(self._answers)

    def reset_answers(self) -> None:
        """Clear all answers, keeping the current exercise."""
        self._answers.clear()

    def total_units(self) -> int:
        """Return how many scorable units the current exercise has."""
        if self._exercise is None:
            return 0
        return len(set(scorable_unit_ids(self._exercise)))

    def answered_units(self) -> int:
        """Return how many distinct scorable units have an answer."""
        if self._exercise is None:
            return 0
        unit_ids = set(scorable_unit_ids(self._exercise))
        return len(unit_ids.intersection(self._answers))

    def are_all_questions_answered(self) -> bool:
        if self._exercise is None:
            return False
        return self.answered_units() == self.total_units()

    def get_progress_percentage(self) -> int:
        """Return the share of scorable units answered so far."""
        if self._exercise is None:
            return 0
        total = self.total_units()
        if total == 0:
            return 100
        return round_percent(self.answered_units(), total)
