"""Shared pytest fixtures for the exercise engine test suite."""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import (
    Blank,
    FillBlankExercise,
    FillBlankQuestion,
    MatchingExercise,
    MatchPair,
    MultipleChoiceExercise,
    MultipleChoiceQuestion,
    TranslationExercise,
    TranslationQuestion,
)
from storage import InMemoryExerciseResultRepository, init_schema

DATA_DIR = Path(__file__).parent.parent / "data"


@pytest.fixture
def fill_blank_exercise() -> FillBlankExercise:
    """Two fill-in sentences with one blank each."""
    return FillBlankExercise(
        title="Animals",
        questions=[
            FillBlankQuestion(id=1, sentence=["Mam ", Blank(blank="kota"), "."]),
            FillBlankQuestion(id=2, sentence=["Widzę ", Blank(blank="psa"), "."]),
        ],
    )


@pytest.fixture
def multiple_choice_exercise() -> MultipleChoiceExercise:
    """Three questions whose correct options are B, A and C."""
    return MultipleChoiceExercise(
        title="Greetings",
        questions=[
            MultipleChoiceQuestion(
                id=1, question="Good morning?", options=["Dobranoc", "Dzień dobry", "Cześć"], correct_index=1
            ),
            MultipleChoiceQuestion(
                id=2, question="Thank you?", options=["Dziękuję", "Proszę", "Przepraszam"], correct_index=0
            ),
            MultipleChoiceQuestion(
                id=3, question="Goodbye?", options=["Tak", "Nie", "Do widzenia"], correct_index=2
            ),
        ],
    )


@pytest.fixture
def matching_exercise() -> MatchingExercise:
    """Three items per side; left i pairs with right (i + 1) % 3."""
    return MatchingExercise(
        title="Colours",
        left_items=["czerwony", "zielony", "niebieski"],
        right_items=["blue", "red", "green"],
        correct_matches=[
            MatchPair(left=0, right=1),
            MatchPair(left=1, right=2),
            MatchPair(left=2, right=0),
        ],
    )


@pytest.fixture
def translation_exercise() -> TranslationExercise:
    """Two sentences to translate."""
    return TranslationExercise(
        title="Sentences",
        questions=[
            TranslationQuestion(id=1, prompt="Good morning", acceptable_answers=["dzień dobry"]),
            TranslationQuestion(id=2, prompt="I have a cat", acceptable_answers=["mam kota"]),
        ],
    )


@pytest.fixture
def memory_repo() -> InMemoryExerciseResultRepository:
    """Create an empty in-memory result repository."""
    return InMemoryExerciseResultRepository()


@pytest.fixture
def test_db_path(tmp_path) -> Path:
    """Create a temporary database path for testing."""
    db_path = tmp_path / "test_drills.db"
    init_schema(db_path)
    return db_path


@pytest.fixture
def sample_lesson_path() -> Path:
    """Path to the bundled sample lesson."""
    return DATA_DIR / "sample_lesson.json"
