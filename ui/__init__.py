"""Rich terminal interface for practising exercises."""

from ui.app import DrillUI, parse_letter_input, parse_match_input
from ui.components import (
    CompletionTable,
    ExercisePanel,
    FeedbackPanel,
    HistoryTable,
    MatchingPanel,
    ResultPanel,
)
from ui.styles import (
    ACCENT_GOLD,
    ACCENT_RED,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
    SUCCESS_GREEN,
)

__all__ = [
    "DrillUI",
    "parse_letter_input",
    "parse_match_input",
    "ExercisePanel",
    "MatchingPanel",
    "FeedbackPanel",
    "ResultPanel",
    "CompletionTable",
    "HistoryTable",
    "ACCENT_RED",
    "ACCENT_GOLD",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
