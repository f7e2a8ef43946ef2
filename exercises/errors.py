"""Exceptions raised by the exercise engine."""


class NoActiveExerciseError(RuntimeError):
    """Raised when a session operation runs without a started exercise.

    Also raised once an attempt has been completed, since the completed
    attempt no longer accepts answers.
    """

    def __init__(self, operation: str, detail: str = "no exercise has been started"):
        super().__init__(f"Cannot {operation}: {detail}")
        self.operation = operation


class StorageFailureError(Exception):
    """Raised by a result repository when persisting or reading fails."""

    def __init__(self, message: str, lesson_id: str | None = None):
        super().__init__(message)
        self.lesson_id = lesson_id
