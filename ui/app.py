from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from models import CompletionStatus, ExerciseResult
from ui.components import (
    CompletionTable,
    ExercisePanel,
    FeedbackPanel,
    HistoryTable,
    MatchingPanel,
    ResultPanel,
)
from ui.styles import DEFAULT_THEME, ERROR_RED, INFO_BLUE, MUTED_GRAY, SUCCESS_GREEN

QUIT_INPUTS = {"q", "quit"}


def parse_letter_input(user_input: str, max_options: int) -> int | None:
    """Parse letter (A, B, ...) or number (1, 2, ...) input to 0-based index.

    Returns:
        0-based index or None if input is invalid or out of bounds.
    """
    user_input = user_input.strip().upper()

    if len(user_input) == 1 and user_input.isalpha():
        index = ord(user_input) - ord("A")
    elif user_input.isascii() and user_input.isdecimal():
        index = int(user_input) - 1
    else:
        return None

    if index < 0 or index >= max_options:
        return None

    return index


def parse_match_input(
    user_input: str, left_count: int, right_count: int
) -> tuple[int, int] | None:
    """Parse a pairing such as "1B" or "2 a" into (left, right) indexes."""
    text = user_input.replace(" ", "").upper()
    digits = "".join(ch for ch in text if ch.isascii() and ch.isdecimal())
    letters = text[len(digits):]
    if not digits or not text.startswith(digits) or len(letters) != 1:
        return None

    left = int(digits) - 1
    right = parse_letter_input(letters, right_count)
    if right is None or not 0 <= left < left_count:
        return None
    return left, right


class DrillUI:
    """Terminal front end for practising a lesson's exercises."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(theme=DEFAULT_THEME)

    def show_question(
        self,
        title: str,
        prompt_text: str,
        options: Optional[List[str]] = None,
        instructions: str = "",
        question_number: int = 0,
        total_questions: int = 0,
        progress_percent: float = 0.0,
    ) -> None:
        panel = ExercisePanel(
            title=title,
            prompt_text=prompt_text,
            options=options,
            instructions=instructions,
            question_number=question_number,
            total_questions=total_questions,
            progress_percent=progress_percent,
        )
        self.console.print(panel)
        self.console.print()

    def show_matching(
        self,
        title: str,
        left_items: List[str],
        right_items: List[str],
        mapping: dict[int, int],
        instructions: str = "",
    ) -> None:
        self.console.print(
            MatchingPanel(title, left_items, right_items, mapping, instructions)
        )
        self.console.print()

    def ask_text(self) -> Optional[str]:
        """Read a free-text answer. Returns None if the user quits."""
        user_input = self._read("Your answer: ")
        if user_input.lower() in QUIT_INPUTS:
            return None
        return user_input

    def ask_choice(self, num_options: int) -> Optional[int]:
        """Read an option letter or number. Returns None if the user quits."""
        while True:
            user_input = self._read("Your answer: ")
            if user_input.lower() in QUIT_INPUTS:
                return None

            index = parse_letter_input(user_input, num_options)
            if index is not None:
                return index

            last = chr(64 + num_options)
            self.console.print(
                Text(f"Please enter A-{last} or 1-{num_options} (or 'q' to quit)\n", style=ERROR_RED)
            )

    def ask_match(self, left_count: int, right_count: int) -> Optional[tuple[int, int]]:
        """Read a pairing such as 1B. Returns None if the user quits."""
        while True:
            user_input = self._read("Pair: ")
            if user_input.lower() in QUIT_INPUTS:
                return None

            pair = parse_match_input(user_input, left_count, right_count)
            if pair is not None:
                return pair

            self.console.print(
                Text(
                    f"Please enter a number 1-{left_count} followed by a letter "
                    f"A-{chr(64 + right_count)} (or 'q' to quit)\n",
                    style=ERROR_RED,
                )
            )

    def show_feedback(
        self, is_correct: bool, correct_answer: str, user_answer: str = ""
    ) -> None:
        self.console.print(FeedbackPanel(is_correct, correct_answer, user_answer))
        self.console.print()

    def show_result(self, title: str, result: ExerciseResult) -> None:
        self.console.print(ResultPanel(title, result))
        self.console.print()

    def show_completion_status(
        self, lesson_id: str, status: dict[str, CompletionStatus]
    ) -> None:
        self.console.print(CompletionTable(lesson_id, status))

    def show_history(self, exercise_type: str, results: List[ExerciseResult]) -> None:
        if not results:
            self.show_info(f"No stored {exercise_type} attempts.")
            return
        self.console.print(HistoryTable(exercise_type, results))

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(f"Error: {message}", style=ERROR_RED),
                title="Error",
                border_style=ERROR_RED,
            )
        )

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(Text(message, style=INFO_BLUE))

    def show_success(self, message: str) -> None:
        self.console.print(Text(message, style=SUCCESS_GREEN))

    def show_quit_message(self) -> None:
        self.console.print()
        self.console.print(Text("Goodbye! Unfinished exercises were not saved.", style=MUTED_GRAY))

    def _read(self, prompt: str) -> str:
        return self.console.input(Text(prompt, style=f"bold {MUTED_GRAY}")).strip()
