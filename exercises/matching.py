"""In-memory pairing state for matching exercises.

The board tracks which left and right items are still free, the pairs the
learner has committed, and the item currently selected. A presentation layer
reads this state to draw the exercise; it never owns it.
"""

from models import MatchingExercise, MatchPair, Side


class MatchingBoard:
    """Builds a left-to-right mapping one selection at a time."""

    def __init__(self, exercise: MatchingExercise):
        self.exercise = exercise
        self.unmatched_left: set[int] = set(range(len(exercise.left_items)))
        self.unmatched_right: set[int] = set(range(len(exercise.right_items)))
        self.pairs: list[MatchPair] = []
        self.selected: tuple[Side, int] | None = None

    def select(self, side: Side, index: int) -> MatchPair | None:
        """Select an item, committing a pair when both sides are chosen.

        - Selecting an already matched item does nothing.
        - Selecting the selected item again clears the selection.
        - Selecting another item on the same side moves the selection.
        - Selecting an item on the other side commits and returns the pair.

        Raises:
            IndexError: If the index is outside the items of that side.
        """
        side = Side(side)
        self._check_index(side, index)

        if not self.is_free(side, index):
            return None

        if self.selected is None:
            self.selected = (side, index)
            return None

        selected_side, selected_index = self.selected
        if selected_side == side:
            self.selected = None if selected_index == index else (side, index)
            return None

        if side == Side.LEFT:
            pair = MatchPair(left=index, right=selected_index)
        else:
            pair = MatchPair(left=selected_index, right=index)

        self.pairs.append(pair)
        self.unmatched_left.discard(pair.left)
        self.unmatched_right.discard(pair.right)
        self.selected = None
        return pair

    def is_free(self, side: Side, index: int) -> bool:
        """Return True if the item is not part of a committed pair."""
        if side == Side.LEFT:
            return index in self.unmatched_left
        return index in self.unmatched_right

    def mapping(self) -> dict[int, int]:
        """Return the committed pairs as left index -> right index."""
        return {pair.left: pair.right for pair in self.pairs}

    @property
    def is_complete(self) -> bool:
        return not self.unmatched_left or not self.unmatched_right

    def reset(self) -> None:
        """Release every pair and clear the selection."""
        self.unmatched_left = set(range(len(self.exercise.left_items)))
        self.unmatched_right = set(range(len(self.exercise.right_items)))
        self.pairs = []
        self.selected = None

    def _check_index(self, side: Side, index: int) -> None:
        items = (
            self.exercise.left_items if side == Side.LEFT else self.exercise.right_items
        )
        if not 0 <= index < len(items):
            raise IndexError(f"No {side.value} item at index {index}")
