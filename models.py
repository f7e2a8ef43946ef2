import re
from collections import Counter
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

PASS_THRESHOLD = 70


class ExerciseType(str, Enum):
    FILL_BLANK = "fill-blank"
    MULTIPLE_CHOICE = "multiple-choice"
    MATCHING = "matching"
    TRANSLATION = "translation"


class SessionStatus(str, Enum):
    """Lifecycle of one exercise attempt."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"


# ============================================================================
# Exercise Content Models
# ============================================================================


class Blank(BaseModel):
    """A fill-in position inside a sentence, holding its expected value."""

    blank: str
    hint: str = ""


# Literal text or a blank descriptor
SentencePart = Union[str, Blank]


class FillBlankQuestion(BaseModel):
    id: int
    sentence: list[SentencePart] = Field(default_factory=list)
    translation: str = ""  # Optional gloss shown under the sentence

    def find_blank(self) -> Blank | None:
        """Return the first blank descriptor in the sentence."""
        for part in self.sentence:
            if isinstance(part, Blank):
                return part
        return None

    def render(self, marker: str = "_____") -> str:
        """Return the sentence text with blanks replaced by a marker."""
        return "".join(
            marker if isinstance(part, Blank) else part for part in self.sentence
        )


# Keys under which lesson content designates the correct option
CORRECT_OPTION_KEYS = ("correct_index", "correctAnswer", "answer")


class MultipleChoiceQuestion(BaseModel):
    id: int
    question: str
    options: list[str]
    correct_index: int | None = Field(
        default=None,
        validation_alias=AliasChoices(*CORRECT_OPTION_KEYS),
    )  # None when the author forgot it

    @model_validator(mode="before")
    @classmethod
    def resolve_correct_option(cls, data: Any) -> Any:
        """Turn a correct option given by its text into its index.

        Text that names no option leaves the question without a correct
        option, which scores zero when answered.
        """
        if not isinstance(data, dict):
            return data
        options = data.get("options") or []
        for key in CORRECT_OPTION_KEYS:
            value = data.get(key)
            if isinstance(value, str) and not re.fullmatch(r"-?[0-9]+", value.strip()):
                wanted = value.strip().lower()
                matches = [
                    i for i, option in enumerate(options)
                    if isinstance(option, str) and option.strip().lower() == wanted
                ]
                data = {**data, key: matches[0] if matches else None}
        return data

    @property
    def correct_option(self) -> str | None:
        if self.correct_index is None:
            return None
        if 0 <= self.correct_index < len(self.options):
            return self.options[self.correct_index]
        return None


class MatchPair(BaseModel):
    left: int
    right: int


class TranslationQuestion(BaseModel):
    id: int
    prompt: str = Field(validation_alias=AliasChoices("prompt", "text"))
    acceptable_answers: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("acceptable_answers", "acceptableAnswers"),
    )


class BaseExercise(BaseModel):
    """Fields shared by every exercise variant."""

    title: str
    instructions: str = ""
    hint: str = ""

    @property
    def exercise_type(self) -> ExerciseType:
        return ExerciseType(self.type)


def _require_unique(ids: list[int], label: str) -> None:
    duplicates = sorted(i for i, count in Counter(ids).items() if count > 1)
    if duplicates:
        raise ValueError(f"Duplicate {label}: {duplicates}")


class QuestionExercise(BaseExercise):
    """An exercise scored per question; question ids must be unique."""

    @model_validator(mode="after")
    def check_unique_ids(self):
        _require_unique([q.id for q in self.questions], "question ids")
        return self


class FillBlankExercise(QuestionExercise):
    type: Literal["fill-blank"] = "fill-blank"
    questions: list[FillBlankQuestion] = Field(default_factory=list)


class MultipleChoiceExercise(QuestionExercise):
    type: Literal["multiple-choice"] = "multiple-choice"
    questions: list[MultipleChoiceQuestion] = Field(default_factory=list)


class MatchingExercise(BaseExercise):
    type: Literal["matching"] = "matching"
    left_items: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("left_items", "leftItems")
    )
    right_items: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("right_items", "rightItems")
    )
    correct_matches: list[MatchPair] = Field(
        default_factory=list,
        validation_alias=AliasChoices("correct_matches", "correctMatches"),
    )

    @model_validator(mode="after")
    def check_unique_lefts(self):
        _require_unique([m.left for m in self.correct_matches], "left indexes in correct_matches")
        return self

    def expected_right(self, left: int) -> int | None:
        """Return the right index paired with a left index, if declared."""
        for match in self.correct_matches:
            if match.left == left:
                return match.right
        return None


class TranslationExercise(QuestionExercise):
    type: Literal["translation"] = "translation"
    questions: list[TranslationQuestion] = Field(default_factory=list)


Exercise = Annotated[
    Union[
        FillBlankExercise,
        MultipleChoiceExercise,
        MatchingExercise,
        TranslationExercise,
    ],
    Field(discriminator="type"),
]


def scorable_unit_ids(exercise: Exercise) -> list[int]:
    """Return the ids of the units that count towards the score.

    Matching exercises are scored per declared pair (keyed by left index),
    every other type per question.
    """
    if isinstance(exercise, MatchingExercise):
        return [match.left for match in exercise.correct_matches]
    return [question.id for question in exercise.questions]


# ============================================================================
# Answer and Result Models
# ============================================================================


class AnswerRecord(BaseModel):
    """One evaluated answer. Replaced, never mutated, on resubmission."""

    model_config = ConfigDict(frozen=True)

    question_id: int
    submitted_answer: Any = None
    credit: float = Field(ge=0.0, le=1.0)
    is_fully_correct: bool
    timestamp: datetime


class AnswerSummary(BaseModel):
    question_id: int
    submitted_answer: Any = None
    is_correct: bool


class ExerciseResult(BaseModel):
    exercise_type: ExerciseType
    total_questions: int = Field(ge=0)
    correct_answers: float = Field(ge=0.0)  # Summed credit, may be fractional
    incorrect_answers: float = Field(ge=0.0)
    percentage: int = Field(ge=0, le=100)
    passed: bool
    feedback: str = ""
    per_answer: list[AnswerSummary] = Field(default_factory=list)
    completed_at: datetime | None = None


class CompletionStatus(BaseModel):
    completed: bool
    result: ExerciseResult | None = None
