import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from exercises import EngineConfig, ProgressReporter, load_exercises
from models import (
    Exercise,
    ExerciseType,
    FillBlankExercise,
    MatchingExercise,
    MultipleChoiceExercise,
    Side,
)
from storage import ExerciseResultRepository, get_exercise_result_repo
from ui import DrillUI
from ui.styles import DEFAULT_THEME

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(description="Language lesson exercises")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    practice_parser = subparsers.add_parser(
        "practice", help="Work through the exercises of a lesson"
    )
    practice_parser.add_argument("file", type=Path, help="Lesson JSON file")
    practice_parser.add_argument("--lesson", "-l", required=True, help="Lesson id")
    practice_parser.add_argument(
        "--exercise",
        "-e",
        type=int,
        default=None,
        help="Only run the Nth exercise of the file (1-based)",
    )
    practice_parser.add_argument("--db", type=Path, default=None, help="Results database")

    status_parser = subparsers.add_parser(
        "status", help="Show which exercises of a lesson are completed"
    )
    status_parser.add_argument("file", type=Path, help="Lesson JSON file")
    status_parser.add_argument("--lesson", "-l", required=True, help="Lesson id")
    status_parser.add_argument("--db", type=Path, default=None, help="Results database")

    history_parser = subparsers.add_parser(
        "history", help="Show stored attempts of one exercise type"
    )
    history_parser.add_argument("--lesson", "-l", required=True, help="Lesson id")
    history_parser.add_argument(
        "--type",
        "-t",
        required=True,
        choices=[t.value for t in ExerciseType],
        dest="exercise_type",
    )
    history_parser.add_argument("--db", type=Path, default=None, help="Results database")

    return parser


def configure_logging(level: str, console: Console) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def open_repository(db_path: Path | None, config: EngineConfig) -> ExerciseResultRepository:
    return get_exercise_result_repo(db_path, config.storage)


def load_lesson(ui: DrillUI, path: Path) -> list[Exercise] | None:
    """Load a lesson file, reporting problems instead of raising."""
    try:
        return load_exercises(path)
    except FileNotFoundError:
        ui.show_error(f"Lesson file not found: {path}")
    except ValidationError as e:
        ui.show_error(f"Invalid lesson file {path}:\n{e}")
    return None


def ask_questions(ui: DrillUI, reporter: ProgressReporter, exercise: Exercise) -> bool:
    """Run every question of a non-matching exercise.

    Returns:
        False if the user quit part way through.
    """
    evaluator = reporter.tracker.evaluator
    total = len(exercise.questions)

    for number, question in enumerate(exercise.questions, start=1):
        progress = reporter.tracker.get_progress_percentage()
        options: list[str] = []

        if isinstance(exercise, FillBlankExercise):
            prompt = question.render()
            if question.translation:
                prompt += f"\n({question.translation})"
        elif isinstance(exercise, MultipleChoiceExercise):
            prompt = question.question
            options = question.options
            if not options:
                logger.warning("Skipping question %s without options", question.id)
                continue
        else:
            prompt = question.prompt

        ui.show_question(
            title=exercise.title,
            prompt_text=prompt,
            options=options,
            instructions=exercise.instructions,
            question_number=number,
            total_questions=total,
            progress_percent=progress,
        )

        if options:
            index = ui.ask_choice(len(options))
            if index is None:
                return False
            answer = index
            shown = f"{chr(65 + index)}. {options[index]}"
        else:
            text = ui.ask_text()
            if text is None:
                return False
            answer = shown = text

        is_correct = reporter.submit_answer(question.id, answer)
        ui.show_feedback(is_correct, evaluator.correct_answer(question.id), shown)

    return True


def ask_matches(ui: DrillUI, reporter: ProgressReporter, exercise: MatchingExercise) -> bool:
    """Pair items until one side runs out.

    Returns:
        False if the user quit part way through.
    """
    evaluator = reporter.tracker.evaluator
    board = reporter.board
    left_items, right_items = exercise.left_items, exercise.right_items

    while not board.is_complete:
        ui.show_matching(
            exercise.title, left_items, right_items, board.mapping(), exercise.instructions
        )
        pair = ui.ask_match(len(left_items), len(right_items))
        if pair is None:
            return False

        left, right = pair
        if not board.is_free(Side.LEFT, left) or not board.is_free(Side.RIGHT, right):
            ui.show_error("That item is already matched.")
            continue

        reporter.select_match_item(Side.LEFT, left)
        is_correct = reporter.select_match_item(Side.RIGHT, right)
        ui.show_feedback(
            bool(is_correct),
            evaluator.correct_answer(left),
            f"{left_items[left]} - {right_items[right]}",
        )

    return True


def run_practice(args, ui: DrillUI, config: EngineConfig) -> int:
    """Run the practice subcommand."""
    exercises = load_lesson(ui, args.file)
    if exercises is None:
        return 1
    if not exercises:
        ui.show_info("The lesson has no exercises.")
        return 0

    if args.exercise is not None:
        if not 1 <= args.exercise <= len(exercises):
            ui.show_error(f"Exercise number must be between 1 and {len(exercises)}")
            return 1
        exercises = [exercises[args.exercise - 1]]

    reporter = ProgressReporter(open_repository(args.db, config), config=config.translation)

    for exercise in exercises:
        reporter.start_exercise(exercise)
        if isinstance(exercise, MatchingExercise):
            finished = ask_matches(ui, reporter, exercise)
        else:
            finished = ask_questions(ui, reporter, exercise)

        if not finished:
            ui.show_quit_message()
            return 0

        result = reporter.complete_exercise(args.lesson)
        ui.show_result(exercise.title, result)
        if reporter.last_storage_error is not None:
            ui.show_error(f"The result could not be saved: {reporter.last_storage_error}")

    ui.show_success("Lesson finished!")
    return 0


def run_status(args, ui: DrillUI, config: EngineConfig) -> int:
    """Run the status subcommand."""
    exercises = load_lesson(ui, args.file)
    if exercises is None:
        return 1

    reporter = ProgressReporter(open_repository(args.db, config), config=config.translation)
    ui.show_completion_status(args.lesson, reporter.get_completion_status(exercises, args.lesson))
    return 0


def run_history(args, ui: DrillUI, config: EngineConfig) -> int:
    """Run the history subcommand."""
    repo = open_repository(args.db, config)
    results = repo.get_result_history(args.lesson, args.exercise_type)
    ui.show_history(args.exercise_type, results)

    best = repo.get_best_result(args.lesson, args.exercise_type)
    if best is not None:
        ui.show_info(f"Best score: {best.percentage}%")
    return 0


COMMANDS = {
    "practice": run_practice,
    "status": run_status,
    "history": run_history,
}


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args(argv)

    console = console or Console(theme=DEFAULT_THEME)
    configure_logging(args.log_level, console)
    ui = DrillUI(console)

    try:
        return COMMANDS[args.command](args, ui, EngineConfig())
    except KeyboardInterrupt:
        ui.show_quit_message()
        return 130


if __name__ == "__main__":
    sys.exit(main())
