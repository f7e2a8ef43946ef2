"""Load exercise definitions from lesson JSON content."""

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from models import Exercise

_EXERCISE_LIST = TypeAdapter(list[Exercise])


def _assign_question_ids(raw: dict[str, Any]) -> dict[str, Any]:
    """Give positional ids to questions authored without one."""
    questions = raw.get("questions")
    if not isinstance(questions, list):
        return raw
    numbered = []
    for position, question in enumerate(questions):
        if isinstance(question, dict) and "id" not in question:
            question = {**question, "id": position}
        numbered.append(question)
    return {**raw, "questions": numbered}


def parse_exercises(data: Any) -> list[Exercise]:
    """Validate raw exercise data.

    Accepts a list of exercise objects or a lesson object holding them
    under an ``exercises`` key.

    Raises:
        pydantic.ValidationError: If an exercise does not fit its type.
    """
    if isinstance(data, dict):
        data = data.get("exercises", [])
    items = [
        _assign_question_ids(item) if isinstance(item, dict) else item
        for item in data
    ]
    return _EXERCISE_LIST.validate_python(items)


def load_exercises(path: Path) -> list[Exercise]:
    """Load and validate the exercises in a JSON file."""
    with open(path, encoding="utf-8") as f:
        return parse_exercises(json.load(f))
