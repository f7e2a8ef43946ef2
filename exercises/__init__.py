"""Exercise evaluation and scoring engine.

Architecture:
- Evaluators apply the correctness rule of each exercise type
- The similarity scorer grades free-text answers by edit distance
- The answer tracker records evaluated answers for the current attempt
- The aggregator turns recorded answers into a scored result
- The progress reporter drives an attempt and persists its result

Exercise types:
- fill-blank: type the word missing from a sentence
- multiple-choice: pick one option per question
- matching: pair items from a left and a right column
- translation: translate a sentence, with partial credit for near misses
"""

from exercises.aggregator import calculate_results, feedback_message, round_percent
from exercises.config import EngineConfig, StorageConfig, TranslationConfig
from exercises.errors import NoActiveExerciseError, StorageFailureError
from exercises.evaluator import (
    EVALUATORS,
    Credit,
    ExerciseEvaluator,
    FillBlankEvaluator,
    MatchingEvaluator,
    MultipleChoiceEvaluator,
    TranslationEvaluator,
    get_evaluator,
)
from exercises.loader import load_exercises, parse_exercises
from exercises.matching import MatchingBoard
from exercises.progress import ProgressReporter
from exercises.similarity import distance, similarity
from exercises.tracker import AnswerTracker

__all__ = [
    # Similarity
    "distance",
    "similarity",
    # Evaluators
    "Credit",
    "ExerciseEvaluator",
    "FillBlankEvaluator",
    "MultipleChoiceEvaluator",
    "MatchingEvaluator",
    "TranslationEvaluator",
    "EVALUATORS",
    "get_evaluator",
    # Session state
    "AnswerTracker",
    "MatchingBoard",
    "ProgressReporter",
    # Aggregation
    "calculate_results",
    "feedback_message",
    "round_percent",
    # Loading
    "load_exercises",
    "parse_exercises",
    # Configuration
    "EngineConfig",
    "StorageConfig",
    "TranslationConfig",
    # Errors
    "NoActiveExerciseError",
    "StorageFailureError",
]
