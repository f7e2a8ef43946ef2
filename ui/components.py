from typing import Any, List, Optional

from rich import box
from rich.align import Align
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from models import CompletionStatus, ExerciseResult
from ui.styles import (
    ACCENT_GOLD,
    ACCENT_RED,
    ERROR_RED,
    MUTED_GRAY,
    SUCCESS_GREEN,
    TEXT_WHITE,
    create_result_header,
    get_percentage_style,
)


class ExercisePanel:
    """A styled panel for displaying one question of an exercise."""

    def __init__(
        self,
        title: str,
        prompt_text: str,
        options: Optional[List[str]] = None,
        instructions: str = "",
        question_number: int = 0,
        total_questions: int = 0,
        progress_percent: float = 0.0,
        subtitle: str = "Type your answer (or 'q' to quit)",
    ):
        self.title = title
        self.prompt_text = prompt_text
        self.options = options or []
        self.instructions = instructions
        self.question_number = question_number
        self.total_questions = total_questions
        self.progress_percent = progress_percent
        self.subtitle = subtitle

    def render(self) -> Panel:
        content = Text()

        if self.total_questions > 0:
            content.append(self._create_progress_bar(), Style(color=MUTED_GRAY))
            content.append("\n")
            content.append(
                f"Question {self.question_number}/{self.total_questions}\n",
                Style(color=MUTED_GRAY),
            )

        if self.instructions:
            content.append(f"{self.instructions}\n\n", Style(color=MUTED_GRAY, italic=True))

        content.append(self.prompt_text, Style(color=ACCENT_RED, bold=True))
        content.append("\n")

        if self.options:
            content.append("\n")
        for i, option in enumerate(self.options):
            content.append(f"{chr(65 + i)}. ", Style(color=ACCENT_GOLD, bold=True))
            content.append(option, Style(color=TEXT_WHITE))
            content.append("\n")

        return Panel(
            Align.left(content),
            title=self.title,
            subtitle=self.subtitle,
            border_style=ACCENT_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _create_progress_bar(self) -> str:
        """Create a text-based progress bar."""
        width = 30
        filled = int(width * self.progress_percent / 100)
        remaining = width - filled
        bar = "█" * filled + "░" * remaining
        return f"[{bar}] {self.progress_percent:.0f}%"

    def __rich__(self) -> Panel:
        return self.render()


class MatchingPanel:
    """Two columns of items with the pairs committed so far."""

    def __init__(
        self,
        title: str,
        left_items: List[str],
        right_items: List[str],
        mapping: dict[int, int],
        instructions: str = "",
    ):
        self.title = title
        self.left_items = left_items
        self.right_items = right_items
        self.mapping = mapping
        self.instructions = instructions

    def render(self) -> Panel:
        table = Table(show_header=True, box=box.SIMPLE, expand=True)
        table.add_column("#", style=Style(color=ACCENT_GOLD, bold=True), width=3)
        table.add_column("Left", style=Style(color=TEXT_WHITE))
        table.add_column("#", style=Style(color=ACCENT_GOLD, bold=True), width=3)
        table.add_column("Right", style=Style(color=TEXT_WHITE))

        matched_right = set(self.mapping.values())
        for i in range(max(len(self.left_items), len(self.right_items))):
            left = self._cell(self.left_items, i, i in self.mapping)
            right = self._cell(self.right_items, i, i in matched_right)
            table.add_row(
                str(i + 1) if i < len(self.left_items) else "",
                left,
                chr(65 + i) if i < len(self.right_items) else "",
                right,
            )

        pairs = Text()
        for left, right in self.mapping.items():
            pairs.append(f"{left + 1}{chr(65 + right)}  ", Style(color=MUTED_GRAY))

        content = Table.grid()
        if self.instructions:
            content.add_row(Text(self.instructions, Style(color=MUTED_GRAY, italic=True)))
        content.add_row(table)
        if self.mapping:
            content.add_row(Text("Pairs: ", Style(color=MUTED_GRAY)) + pairs)

        return Panel(
            content,
            title=self.title,
            subtitle="Pair items like 1B (or 'q' to quit)",
            border_style=ACCENT_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _cell(self, items: List[str], index: int, matched: bool) -> Text:
        if index >= len(items):
            return Text("")
        style = Style(color=MUTED_GRAY, strike=True) if matched else Style()
        return Text(items[index], style)

    def __rich__(self) -> Panel:
        return self.render()


class FeedbackPanel:
    """A styled panel for displaying answer feedback."""

    def __init__(
        self,
        is_correct: bool,
        correct_answer: str,
        user_answer: str = "",
    ):
        self.is_correct = is_correct
        self.correct_answer = correct_answer
        self.user_answer = user_answer

    def render(self) -> Panel:
        content = Text()

        if self.is_correct:
            content.append("✓ ", Style(color=SUCCESS_GREEN, bold=True))
            content.append("Correct!\n", Style(color=SUCCESS_GREEN, bold=True))
        else:
            content.append("✗ ", Style(color=ERROR_RED, bold=True))
            content.append("Not quite!\n", Style(color=ERROR_RED, bold=True))
            if self.user_answer:
                content.append(
                    f"You answered: {self.user_answer}\n", Style(color=MUTED_GRAY)
                )

        if self.correct_answer:
            content.append("\n")
            content.append("Correct answer: ", Style(color=MUTED_GRAY))
            content.append(self.correct_answer, Style(color=SUCCESS_GREEN, bold=True))

        return Panel(
            Align.left(content),
            title="Answer",
            border_style=SUCCESS_GREEN if self.is_correct else ERROR_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ResultPanel:
    """Score summary with a per-answer breakdown."""

    def __init__(self, title: str, result: ExerciseResult):
        self.title = title
        self.result = result

    def render(self) -> Panel:
        result = self.result

        header = create_result_header(result.passed)
        score = Text()
        score.append("Score: ", Style(color=MUTED_GRAY))
        score.append(
            f"{format_credit(result.correct_answers)}/{result.total_questions} "
            f"({result.percentage}%)",
            get_percentage_style(result.percentage),
        )

        table = Table(
            show_header=True,
            header_style=Style(color=ACCENT_RED, bold=True),
            border_style=MUTED_GRAY,
            row_styles=[Style(), Style(dim=True)],
            box=box.HEAVY,
        )
        table.add_column("Question", justify="center")
        table.add_column("Your answer", style=Style(color=TEXT_WHITE))
        table.add_column("Correct", justify="center")

        for answer in result.per_answer:
            mark = (
                Text("✓", Style(color=SUCCESS_GREEN, bold=True))
                if answer.is_correct
                else Text("✗", Style(color=ERROR_RED, bold=True))
            )
            table.add_row(str(answer.question_id), format_answer(answer.submitted_answer), mark)

        content = Table.grid(padding=(0, 0, 1, 0))
        content.add_row(header)
        content.add_row(score)
        if result.feedback:
            content.add_row(Text(result.feedback, Style(color=ACCENT_GOLD)))
        if result.per_answer:
            content.add_row(table)

        return Panel(
            content,
            title=self.title,
            border_style=SUCCESS_GREEN if result.passed else ERROR_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class CompletionTable:
    """Completion state of each exercise type in a lesson."""

    def __init__(self, lesson_id: str, status: dict[str, CompletionStatus]):
        self.lesson_id = lesson_id
        self.status = status

    def render(self) -> Table:
        table = Table(
            title=f"Lesson {self.lesson_id}",
            show_header=True,
            header_style=Style(color=ACCENT_RED, bold=True),
            border_style=MUTED_GRAY,
            box=box.HEAVY,
        )
        table.add_column("Exercise", style=Style(color=TEXT_WHITE))
        table.add_column("Completed", justify="center")
        table.add_column("Score", justify="center")
        table.add_column("Passed", justify="center")

        for exercise_type, entry in self.status.items():
            if entry.result is None:
                table.add_row(exercise_type, "-", "-", "-")
                continue
            result = entry.result
            table.add_row(
                exercise_type,
                Text("✓", Style(color=SUCCESS_GREEN, bold=True)),
                Text(f"{result.percentage}%", get_percentage_style(result.percentage)),
                "yes" if result.passed else "no",
            )
        return table

    def __rich__(self) -> Table:
        return self.render()


class HistoryTable:
    """Stored attempts of one exercise type, oldest first."""

    def __init__(self, exercise_type: str, results: List[ExerciseResult]):
        self.exercise_type = exercise_type
        self.results = results

    def render(self) -> Table:
        table = Table(
            title=f"{self.exercise_type} attempts",
            show_header=True,
            header_style=Style(color=ACCENT_RED, bold=True),
            border_style=MUTED_GRAY,
            row_styles=[Style(), Style(dim=True)],
            box=box.HEAVY,
        )
        table.add_column("#", justify="right")
        table.add_column("Completed", style=Style(color=MUTED_GRAY))
        table.add_column("Score", justify="center")
        table.add_column("Passed", justify="center")

        for i, result in enumerate(self.results, start=1):
            completed = (
                result.completed_at.strftime("%Y-%m-%d %H:%M")
                if result.completed_at
                else "N/A"
            )
            table.add_row(
                str(i),
                completed,
                Text(f"{result.percentage}%", get_percentage_style(result.percentage)),
                "yes" if result.passed else "no",
            )
        return table

    def __rich__(self) -> Table:
        return self.render()


def format_credit(credit: float) -> str:
    """Show whole credit without a trailing .0."""
    return str(int(credit)) if float(credit).is_integer() else f"{credit:g}"


def format_answer(answer: Any) -> str:
    if answer is None:
        return ""
    return str(answer)
