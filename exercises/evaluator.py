"""Per-type correctness rules.

Each exercise type has an evaluator that turns a submitted answer into a
credit in [0, 1]. Evaluators never raise on bad content: a question that is
missing the fields its type needs is logged and scores zero, so one broken
question cannot stop the rest of the exercise from being scored.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from exercises.config import TranslationConfig
from exercises.similarity import similarity
from models import (
    BaseExercise,
    Exercise,
    ExerciseType,
    FillBlankExercise,
    FillBlankQuestion,
    MatchingExercise,
    MatchPair,
    MultipleChoiceExercise,
    MultipleChoiceQuestion,
    TranslationExercise,
    TranslationQuestion,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseExercise)
U = TypeVar("U")

ASCII_INTEGER = re.compile(r"-?[0-9]+")


class Credit(BaseModel):
    """How correct one answer was judged."""

    model_config = ConfigDict(frozen=True)

    value: float

    @property
    def is_fully_correct(self) -> bool:
        return self.value >= 1.0

    @classmethod
    def full(cls) -> "Credit":
        return cls(value=1.0)

    @classmethod
    def zero(cls) -> "Credit":
        return cls(value=0.0)


def normalize_text(value: Any) -> str:
    """Lowercase and trim a submitted or expected string."""
    if value is None:
        return ""
    return str(value).strip().lower()


def coerce_index(value: Any) -> int | None:
    """Return an int index from an int or a numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and ASCII_INTEGER.fullmatch(value.strip()):
        return int(value.strip())
    return None


def coerce_option_index(value: Any, options: list[str]) -> int | None:
    """Map a multiple-choice submission onto its option index.

    Accepts the index itself, a numeric string, or the option text.
    """
    index = coerce_index(value)
    if index is not None:
        return index
    if isinstance(value, str):
        wanted = normalize_text(value)
        for i, option in enumerate(options):
            if normalize_text(option) == wanted:
                return i
    return None


class ExerciseEvaluator(ABC, Generic[E, U]):
    """Abstract base class for exercise evaluators.

    Subclasses locate the scorable unit for a question id and apply the
    correctness policy of their exercise type to it.
    """

    missing_unit_reason = "no question with this id"

    def __init__(self, exercise: E, config: TranslationConfig | None = None):
        self.exercise = exercise
        self.config = config or TranslationConfig()

    def evaluate(self, question_id: int, answer: Any) -> Credit:
        """Score an answer for one question of the exercise."""
        unit = self.find_unit(question_id)
        if unit is None:
            self.warn_malformed(question_id, self.missing_unit_reason)
            return Credit.zero()
        return self.score(unit, answer)

    @abstractmethod
    def find_unit(self, question_id: int) -> U | None:
        """Return the question (or pair) a question id refers to."""
        ...

    @abstractmethod
    def score(self, unit: U, answer: Any) -> Credit:
        """Apply this type's correctness rule to one answer."""
        ...

    @abstractmethod
    def correct_answer(self, question_id: int) -> str:
        """Return a display string for the expected answer."""
        ...

    def warn_malformed(self, question_id: int, reason: str) -> None:
        logger.warning(
            "Malformed question %s in %s exercise %r: %s",
            question_id,
            self.exercise.exercise_type.value,
            self.exercise.title,
            reason,
        )


class FillBlankEvaluator(ExerciseEvaluator[FillBlankExercise, FillBlankQuestion]):
    """Case-insensitive, trimmed comparison against the blank's value."""

    def find_unit(self, question_id: int) -> FillBlankQuestion | None:
        for question in self.exercise.questions:
            if question.id == question_id:
                return question
        return None

    def score(self, unit: FillBlankQuestion, answer: Any) -> Credit:
        # Only the first blank of a sentence is scored
        blank = unit.find_blank()
        if blank is None:
            self.warn_malformed(unit.id, "sentence has no blank")
            return Credit.zero()

        submitted = normalize_text(answer)
        if not submitted:
            return Credit.zero()
        if submitted == normalize_text(blank.blank):
            return Credit.full()
        return Credit.zero()

    def correct_answer(self, question_id: int) -> str:
        question = self.find_unit(question_id)
        blank = question.find_blank() if question else None
        return blank.blank if blank else ""


class MultipleChoiceEvaluator(
    ExerciseEvaluator[MultipleChoiceExercise, MultipleChoiceQuestion]
):
    """Strict equality on the option index."""

    def find_unit(self, question_id: int) -> MultipleChoiceQuestion | None:
        for question in self.exercise.questions:
            if question.id == question_id:
                return question
        return None

    def score(self, unit: MultipleChoiceQuestion, answer: Any) -> Credit:
        if unit.correct_option is None:
            self.warn_malformed(unit.id, "no valid correct option")
            return Credit.zero()

        selected = coerce_option_index(answer, unit.options)
        if selected is None:
            return Credit.zero()
        return Credit.full() if selected == unit.correct_index else Credit.zero()

    def correct_answer(self, question_id: int) -> str:
        question = self.find_unit(question_id)
        if question is None:
            return ""
        return question.correct_option or ""


class MatchingEvaluator(ExerciseEvaluator[MatchingExercise, MatchPair]):
    """One unit per declared pair; the answer is the chosen right index."""

    missing_unit_reason = "left item has no correct match"

    def find_unit(self, question_id: int) -> MatchPair | None:
        for match in self.exercise.correct_matches:
            if match.left == question_id:
                return match
        return None

    def score(self, unit: MatchPair, answer: Any) -> Credit:
        right = coerce_index(answer)
        if right is None:
            return Credit.zero()
        return Credit.full() if right == unit.right else Credit.zero()

    def correct_answer(self, question_id: int) -> str:
        right = self.exercise.expected_right(question_id)
        if right is None or not 0 <= right < len(self.exercise.right_items):
            return ""
        return self.exercise.right_items[right]


class TranslationEvaluator(
    ExerciseEvaluator[TranslationExercise, TranslationQuestion]
):
    """Exact match earns full credit; a close miss earns partial credit."""

    def find_unit(self, question_id: int) -> TranslationQuestion | None:
        for question in self.exercise.questions:
            if question.id == question_id:
                return question
        return None

    def score(self, unit: TranslationQuestion, answer: Any) -> Credit:
        if not unit.acceptable_answers:
            self.warn_malformed(unit.id, "no acceptable answers")
            return Credit.zero()

        submitted = normalize_text(answer)
        acceptable = [normalize_text(a) for a in unit.acceptable_answers]

        if submitted in acceptable:
            return Credit.full()

        best = max(similarity(submitted, candidate) for candidate in acceptable)
        if best > self.config.similarity_threshold:
            return Credit(value=self.config.partial_credit)
        return Credit.zero()

    def correct_answer(self, question_id: int) -> str:
        question = self.find_unit(question_id)
        if question is None or not question.acceptable_answers:
            return ""
        return question.acceptable_answers[0]


# Registry of evaluator classes, one per exercise type
EVALUATORS: dict[ExerciseType, type[ExerciseEvaluator]] = {
    ExerciseType.FILL_BLANK: FillBlankEvaluator,
    ExerciseType.MULTIPLE_CHOICE: MultipleChoiceEvaluator,
    ExerciseType.MATCHING: MatchingEvaluator,
    ExerciseType.TRANSLATION: TranslationEvaluator,
}

_unhandled = set(ExerciseType) - set(EVALUATORS)
if _unhandled:
    raise RuntimeError(
        f"No evaluator registered for: {sorted(t.value for t in _unhandled)}"
    )


def get_evaluator(
    exercise: Exercise, config: TranslationConfig | None = None
) -> ExerciseEvaluator:
    """Return an evaluator instance for the exercise's type."""
    evaluator_class = EVALUATORS[exercise.exercise_type]
    return evaluator_class(exercise, config)
