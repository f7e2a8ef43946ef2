"""Tests for the per-type correctness rules."""

import logging

import pytest

from exercises.config import TranslationConfig
from exercises.evaluator import (
    EVALUATORS,
    Credit,
    FillBlankEvaluator,
    MatchingEvaluator,
    MultipleChoiceEvaluator,
    TranslationEvaluator,
    coerce_index,
    coerce_option_index,
    get_evaluator,
)
from exercises.tracker import AnswerTracker
from models import (
    ExerciseType,
    FillBlankExercise,
    FillBlankQuestion,
    MultipleChoiceExercise,
    MultipleChoiceQuestion,
    TranslationExercise,
    TranslationQuestion,
)


class TestRegistry:
    """Tests for evaluator lookup."""

    def test_every_type_has_an_evaluator(self):
        assert set(EVALUATORS) == set(ExerciseType)

    def test_get_evaluator_picks_by_type(self, fill_blank_exercise, matching_exercise):
        assert isinstance(get_evaluator(fill_blank_exercise), FillBlankEvaluator)
        assert isinstance(get_evaluator(matching_exercise), MatchingEvaluator)


class TestCoercion:
    """Tests for answer coercion helpers."""

    def test_coerce_index_accepts_numeric_strings(self):
        assert coerce_index("2") == 2
        assert coerce_index(" 0 ") == 0

    def test_coerce_index_rejects_bool_and_text(self):
        assert coerce_index(True) is None
        assert coerce_index("B") is None
        assert coerce_index(None) is None

    def test_coerce_option_index_matches_option_text(self):
        assert coerce_option_index("dzień DOBRY ", ["Cześć", "Dzień dobry"]) == 1

    def test_numeric_input_takes_precedence(self):
        assert coerce_option_index("1", ["1", "0"]) == 1

    @pytest.mark.parametrize("value", ["--1", "²", "-", "1-", "٣"])
    def test_coerce_index_rejects_malformed_numbers(self, value):
        assert coerce_index(value) is None

    def test_coerce_index_accepts_negative_numbers(self):
        assert coerce_index("-1") == -1


class TestFillBlankEvaluator:
    """Tests for fill-in-the-blank scoring."""

    def test_exact_answer(self, fill_blank_exercise):
        evaluator = FillBlankEvaluator(fill_blank_exercise)
        assert evaluator.evaluate(1, "kota") == Credit.full()

    def test_case_and_whitespace_ignored(self, fill_blank_exercise):
        evaluator = FillBlankEvaluator(fill_blank_exercise)
        assert evaluator.evaluate(1, "  KoTa ").is_fully_correct

    def test_wrong_answer(self, fill_blank_exercise):
        evaluator = FillBlankEvaluator(fill_blank_exercise)
        assert evaluator.evaluate(2, "kota").value == 0.0

    def test_empty_answer_is_wrong(self, fill_blank_exercise):
        evaluator = FillBlankEvaluator(fill_blank_exercise)
        assert evaluator.evaluate(1, "   ").value == 0.0
        assert evaluator.evaluate(1, None).value == 0.0

    def test_unknown_question_scores_zero(self, fill_blank_exercise, caplog):
        evaluator = FillBlankEvaluator(fill_blank_exercise)
        with caplog.at_level(logging.WARNING):
            assert evaluator.evaluate(99, "kota").value == 0.0
        assert "99" in caplog.text

    def test_sentence_without_blank_is_malformed(self, caplog):
        exercise = FillBlankExercise(
            title="Broken", questions=[FillBlankQuestion(id=1, sentence=["No blank here"])]
        )
        evaluator = FillBlankEvaluator(exercise)
        with caplog.at_level(logging.WARNING):
            assert evaluator.evaluate(1, "anything").value == 0.0
        assert "no blank" in caplog.text

    def test_only_first_blank_is_scored(self):
        exercise = FillBlankExercise.model_validate(
            {
                "title": "Two blanks",
                "questions": [
                    {"id": 1, "sentence": [{"blank": "mam"}, " ", {"blank": "kota"}]}
                ],
            }
        )
        evaluator = FillBlankEvaluator(exercise)
        assert evaluator.evaluate(1, "mam").is_fully_correct
        assert not evaluator.evaluate(1, "kota").is_fully_correct

    def test_correct_answer(self, fill_blank_exercise):
        assert FillBlankEvaluator(fill_blank_exercise).correct_answer(2) == "psa"


class TestMultipleChoiceEvaluator:
    """Tests for multiple-choice scoring."""

    def test_correct_index(self, multiple_choice_exercise):
        evaluator = MultipleChoiceEvaluator(multiple_choice_exercise)
        assert evaluator.evaluate(1, 1).is_fully_correct

    def test_wrong_index(self, multiple_choice_exercise):
        evaluator = MultipleChoiceEvaluator(multiple_choice_exercise)
        assert evaluator.evaluate(1, 0).value == 0.0

    def test_option_text_accepted(self, multiple_choice_exercise):
        evaluator = MultipleChoiceEvaluator(multiple_choice_exercise)
        assert evaluator.evaluate(3, "Do widzenia").is_fully_correct

    def test_unrecognized_answer_is_wrong(self, multiple_choice_exercise):
        evaluator = MultipleChoiceEvaluator(multiple_choice_exercise)
        assert evaluator.evaluate(1, "maybe").value == 0.0

    def test_missing_correct_option_is_malformed(self, caplog):
        exercise = MultipleChoiceExercise(
            title="Broken",
            questions=[MultipleChoiceQuestion(id=1, question="?", options=["a", "b"])],
        )
        evaluator = MultipleChoiceEvaluator(exercise)
        with caplog.at_level(logging.WARNING):
            assert evaluator.evaluate(1, 0).value == 0.0
        assert "Broken" in caplog.text

    def test_out_of_range_correct_option_is_malformed(self):
        exercise = MultipleChoiceExercise(
            title="Broken",
            questions=[
                MultipleChoiceQuestion(id=1, question="?", options=["a"], correct_index=4)
            ],
        )
        assert MultipleChoiceEvaluator(exercise).evaluate(1, 4).value == 0.0

    @pytest.mark.parametrize("answer", ["--1", "²", "-"])
    def test_malformed_number_scores_zero(self, multiple_choice_exercise, answer):
        tracker = AnswerTracker()
        tracker.start_exercise(multiple_choice_exercise)
        assert tracker.submit_answer(1, answer) is False
        assert tracker.get_answer(1).credit == 0.0

    def test_correct_option_given_as_text(self):
        exercise = MultipleChoiceExercise.model_validate(
            {
                "title": "By value",
                "questions": [
                    {"id": 1, "question": "Cat?", "options": ["pies", "Kot"], "answer": " kot "}
                ],
            }
        )
        evaluator = MultipleChoiceEvaluator(exercise)
        assert evaluator.evaluate(1, 1).is_fully_correct
        assert evaluator.evaluate(1, "Kot").is_fully_correct
        assert evaluator.evaluate(1, 0).value == 0.0

    def test_unknown_correct_option_text_is_malformed(self, caplog):
        exercise = MultipleChoiceExercise.model_validate(
            {
                "title": "Broken",
                "questions": [
                    {"id": 1, "question": "?", "options": ["pies", "kot"], "answer": "koń"}
                ],
            }
        )
        with caplog.at_level(logging.WARNING):
            assert MultipleChoiceEvaluator(exercise).evaluate(1, "koń").value == 0.0
        assert "no valid correct option" in caplog.text

    def test_correct_answer(self, multiple_choice_exercise):
        evaluator = MultipleChoiceEvaluator(multiple_choice_exercise)
        assert evaluator.correct_answer(2) == "Dziękuję"


class TestMatchingEvaluator:
    """Tests for matching scoring."""

    def test_correct_pair(self, matching_exercise):
        evaluator = MatchingEvaluator(matching_exercise)
        assert evaluator.evaluate(0, 1).is_fully_correct

    def test_wrong_pair(self, matching_exercise):
        evaluator = MatchingEvaluator(matching_exercise)
        assert evaluator.evaluate(0, 2).value == 0.0

    def test_left_without_declared_match(self, matching_exercise, caplog):
        evaluator = MatchingEvaluator(matching_exercise)
        with caplog.at_level(logging.WARNING):
            assert evaluator.evaluate(7, 0).value == 0.0
        assert "no correct match" in caplog.text

    @pytest.mark.parametrize("answer", ["--1", "²", "-"])
    def test_malformed_number_scores_zero(self, matching_exercise, answer):
        tracker = AnswerTracker()
        tracker.start_exercise(matching_exercise)
        assert tracker.submit_answer(0, answer) is False

    def test_correct_answer_is_right_item_text(self, matching_exercise):
        assert MatchingEvaluator(matching_exercise).correct_answer(1) == "green"


class TestTranslationEvaluator:
    """Tests for translation scoring with partial credit."""

    def test_exact_match(self, translation_exercise):
        evaluator = TranslationEvaluator(translation_exercise)
        assert evaluator.evaluate(1, "Dzień Dobry").is_fully_correct

    def test_close_answer_earns_partial_credit(self, translation_exercise):
        """'mam kot' is 7/8 similar to 'mam kota'."""
        evaluator = TranslationEvaluator(translation_exercise)
        credit = evaluator.evaluate(2, "mam kot")
        assert credit.value == 0.5
        assert not credit.is_fully_correct

    def test_threshold_is_exclusive(self):
        """Similarity of exactly 0.7 earns nothing."""
        exercise = TranslationExercise(
            title="Edge",
            questions=[
                TranslationQuestion(id=1, prompt="x", acceptable_answers=["abcdefghij"])
            ],
        )
        evaluator = TranslationEvaluator(exercise)
        assert evaluator.evaluate(1, "abcdefgxyz").value == 0.0

    def test_distant_answer_is_wrong(self, translation_exercise):
        evaluator = TranslationEvaluator(translation_exercise)
        assert evaluator.evaluate(1, "dobranoc").value == 0.0

    def test_best_of_acceptable_answers(self):
        exercise = TranslationExercise(
            title="Alternatives",
            questions=[
                TranslationQuestion(
                    id=1, prompt="I have a cat", acceptable_answers=["ja mam kota", "mam kota"]
                )
            ],
        )
        evaluator = TranslationEvaluator(exercise)
        assert evaluator.evaluate(1, "mam kota").is_fully_correct
        assert evaluator.evaluate(1, "ja mam kot").value == 0.5

    def test_empty_submission_against_empty_answer(self):
        exercise = TranslationExercise(
            title="Degenerate",
            questions=[TranslationQuestion(id=1, prompt="x", acceptable_answers=[""])],
        )
        assert TranslationEvaluator(exercise).evaluate(1, "  ").is_fully_correct

    def test_empty_submission_is_wrong(self, translation_exercise):
        evaluator = TranslationEvaluator(translation_exercise)
        assert evaluator.evaluate(1, "").value == 0.0
        assert evaluator.evaluate(1, None).value == 0.0

    def test_no_acceptable_answers_is_malformed(self, caplog):
        exercise = TranslationExercise(
            title="Broken", questions=[TranslationQuestion(id=1, prompt="x")]
        )
        with caplog.at_level(logging.WARNING):
            assert TranslationEvaluator(exercise).evaluate(1, "x").value == 0.0
        assert "no acceptable answers" in caplog.text

    def test_custom_config(self, translation_exercise):
        config = TranslationConfig(similarity_threshold=0.5, partial_credit=0.25)
        evaluator = TranslationEvaluator(translation_exercise, config)
        assert evaluator.evaluate(2, "mam kot").value == pytest.approx(0.25)
