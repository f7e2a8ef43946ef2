from rich.style import Style
from rich.text import Text
from rich.theme import Theme

ACCENT_RED = "#DC143C"
ACCENT_GOLD = "#F1C40F"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#C0392B"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

DEFAULT_THEME = Theme(
    {
        "primary": Style(color=ACCENT_RED, bold=True),
        "secondary": Style(color=ACCENT_GOLD, bold=True),
        "success": Style(color=SUCCESS_GREEN),
        "error": Style(color=ERROR_RED, bold=True),
        "info": Style(color=INFO_BLUE),
        "muted": Style(color=MUTED_GRAY),
        "option_label": Style(color=ACCENT_GOLD, bold=True),
        "option_text": Style(color=TEXT_WHITE),
        "title": Style(color=ACCENT_RED, bold=True),
        "subtitle": Style(color=MUTED_GRAY),
    }
)


def get_percentage_style(percentage: int) -> Style:
    """Get color style for a score, matching the feedback tiers."""
    if percentage >= 80:
        return Style(color=SUCCESS_GREEN, bold=True)
    elif percentage >= 60:
        return Style(color=ACCENT_GOLD)
    else:
        return Style(color=ERROR_RED)


def create_result_header(passed: bool) -> Text:
    """Create the header shown above a finished exercise."""
    header = Text()
    if passed:
        header.append("✓ ", Style(color=SUCCESS_GREEN, bold=True))
        header.append("Exercise passed!", Style(color=SUCCESS_GREEN, bold=True))
    else:
        header.append("✗ ", Style(color=ERROR_RED, bold=True))
        header.append("Exercise not passed yet", Style(color=ERROR_RED, bold=True))
    return header
