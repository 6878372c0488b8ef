"""Shared constants and enumerations for the vocabulary games."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Level(str, Enum):
    """CEFR vocabulary levels used to bucket the word dataset."""

    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"


class CellType(str, Enum):
    """All supported cell types in a puzzle grid."""

    BLOCKED = "BLOCKED"
    EMPTY = "EMPTY"
    FILLED = "FILLED"


class Direction(str, Enum):
    """Crossword entry directions."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def perpendicular(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class SearchDirection(str, Enum):
    """The eight compass directions a word-search entry can run in."""

    EAST = "E"
    SOUTH = "S"
    SOUTH_EAST = "SE"
    NORTH_EAST = "NE"
    WEST = "W"
    NORTH = "N"
    NORTH_WEST = "NW"
    SOUTH_WEST = "SW"

    @property
    def step(self) -> Tuple[int, int]:
        return _SEARCH_STEPS[self]


_SEARCH_STEPS = {
    SearchDirection.EAST: (0, 1),
    SearchDirection.SOUTH: (1, 0),
    SearchDirection.SOUTH_EAST: (1, 1),
    SearchDirection.NORTH_EAST: (-1, 1),
    SearchDirection.WEST: (0, -1),
    SearchDirection.NORTH: (-1, 0),
    SearchDirection.NORTH_WEST: (-1, -1),
    SearchDirection.SOUTH_WEST: (1, -1),
}


class RoundStatus(str, Enum):
    """Lifecycle of a single puzzle round."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    WON = "won"
    LOST = "lost"
    COMPLETE = "complete"

    @property
    def is_terminal(self) -> bool:
        return self in {RoundStatus.WON, RoundStatus.LOST, RoundStatus.COMPLETE}


class RejectReason(str, Enum):
    """Why a player input was refused by a round."""

    ROUND_OVER = "round_over"
    TOO_SHORT = "too_short"
    WRONG_LENGTH = "wrong_length"
    MISSING_CENTER = "missing_center"
    ALREADY_FOUND = "already_found"
    NOT_IN_LIST = "not_in_list"
    NOT_COLLINEAR = "not_collinear"
    NO_MATCH = "no_match"
    INVALID_LETTER = "invalid_letter"
    NO_SELECTION = "no_selection"
    UNKNOWN_TILE = "unknown_tile"
    HINT_UNAVAILABLE = "hint_unavailable"


class LetterStatus(str, Enum):
    """Per-letter feedback for a word-guess attempt."""

    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


class FeedbackEvent(str, Enum):
    """Fire-and-forget signals for haptic or sound collaborators."""

    TAP = "tap"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    HINT = "hint"
    WIN = "win"
    LOSS = "loss"


# Grid geometry
WORD_SEARCH_GRID_SIZE = 12
CROSSWORD_GRID_SIZE = 9
WORDS_PER_PUZZLE = 6

# Bounded retry budgets
WORD_SEARCH_MAX_ATTEMPTS = 200
CROSSWORD_MAX_ATTEMPTS = 150
SCRAMBLE_MAX_RETRIES = 10

# Supply thresholds
MIN_WORD_SEARCH_WORDS = 3
MIN_CROSSWORD_WORDS = 3
MIN_SPELLING_BEE_ELIGIBLE = 5
MIN_ANAGRAM_LENGTH = 3

# Word-search filler pool; vowels and common consonants are duplicated.
FILLER_LETTERS = "AABCDEEFGHIIJKLMNOOPQRSTUUVWXYZ"

# Spelling bee
HONEYCOMB_SIZE = 7
MIN_BEE_WORD_LENGTH = 4
PANGRAM_BONUS = 7
BEE_PADDING_LETTERS = "RSTLNEDCM"

# Word guess
MAX_ATTEMPTS = 6


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
