"""Reduce a finished attempt into a single scored result."""

import math
from collections.abc import Mapping

from models import (
    PASS_THRESHOLD,
    AnswerRecord,
    AnswerSummary,
    Exercise,
    ExerciseResult,
    ExerciseType,
    scorable_unit_ids,
)

FEEDBACK_TIERS = [
    (100, "Excellent! All answers are correct!"),
    (80, "Very good! Almost everything is right."),
    (60, "Not bad, but there is room to improve."),
    (40, "Keep studying the material."),
    (0, "Don't give up! Try again."),
]

TRANSLATION_FEEDBACK_TIERS = [
    (1.0, "Outstanding translation!"),
    (0.8, "Very good translation!"),
    (0.6, "Good translation with a few inaccuracies."),
    (0.0, "The translation needs work. Check the grammar and word choice."),
]


def round_percent(part: float, whole: float) -> int:
    """Return part/whole as a whole percentage, rounding halves up."""
    if whole <= 0:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))


def feedback_message(
    exercise_type: ExerciseType, credit: float, total: int, percentage: int
) -> str:
    """Pick the encouragement message shown with a result."""
    if exercise_type == ExerciseType.TRANSLATION:
        ratio = credit / total if total else 0.0
        for floor, message in TRANSLATION_FEEDBACK_TIERS:
            if ratio >= floor:
                return message
    for floor, message in FEEDBACK_TIERS:
        if percentage >= floor:
            return message
    return FEEDBACK_TIERS[-1][1]


def calculate_results(
    exercise: Exercise, answers: Mapping[int, AnswerRecord]
) -> ExerciseResult:
    """Score an exercise from its recorded answers.

    Only answers for scorable units count towards the total; unanswered
    units contribute nothing. Every recorded answer still appears in the
    per-answer breakdown, where translation partial credit shows as
    not correct.

    Args:
        exercise: The exercise that was attempted.
        answers: Recorded answers keyed by question id.

    Returns:
        The aggregated result, without a completion timestamp.
    """
    unit_ids = set(scorable_unit_ids(exercise))
    total = len(unit_ids)

    credit = sum(
        record.credit
        for question_id, record in answers.items()
        if question_id in unit_ids
    )

    percentage = round_percent(credit, total)
    per_answer = [
        AnswerSummary(
            question_id=question_id,
            submitted_answer=record.submitted_answer,
            is_correct=record.is_fully_correct,
        )
        for question_id, record in answers.items()
    ]

    return ExerciseResult(
        exercise_type=exercise.exercise_type,
        total_questions=total,
        correct_answers=credit,
        incorrect_answers=max(total - credit, 0.0),
        percentage=percentage,
        passed=percentage >= PASS_THRESHOLD,
        feedback=feedback_message(exercise.exercise_type, credit, total, percentage),
        per_answer=per_answer,
    )
