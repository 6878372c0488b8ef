"""Crossword construction by letter intersections with earlier entries.

Layout strategy:
  1. Seed: the longest word runs across the middle row, centered.
  2. Grow: every further word picks a random placed entry and a shared
     letter, crosses it perpendicularly, and is kept only when it does not
     touch unrelated letters. Words that never fit are dropped.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from ..core.constants import (
    CROSSWORD_GRID_SIZE,
    CROSSWORD_MAX_ATTEMPTS,
    MIN_CROSSWORD_WORDS,
    WORDS_PER_PUZZLE,
    Direction,
)
from ..core.exceptions import (
    InsufficientWordsError,
    PlacementExhaustedError,
    ValidationError,
)
from ..core.models import GenerationResult, Placement, Position, Word, trace_cells
from ..data.normalization import is_alphabetic
from ..data.word_bank import unique_by_id
from ..utils.logger import get_logger
from .grid import Grid
from .validator import PuzzleValidator


LOGGER = get_logger(__name__)


@dataclass
class CrosswordConfig:
    grid_size: int = CROSSWORD_GRID_SIZE
    word_count: int = WORDS_PER_PUZZLE
    max_attempts: int = CROSSWORD_MAX_ATTEMPTS
    min_words: int = MIN_CROSSWORD_WORDS
    seed: Optional[int] = None


@dataclass
class CrosswordPuzzle:
    grid: Grid
    placements: List[Placement]
    dropped_words: List[str] = field(default_factory=list)

    def across(self) -> List[Placement]:
        return [p for p in self.placements if p.direction == Direction.ACROSS]

    def down(self) -> List[Placement]:
        return [p for p in self.placements if p.direction == Direction.DOWN]

    def placement_at(self, row: int, col: int, direction: Direction) -> Optional[Placement]:
        for placement in self.placements:
            if placement.direction == direction and (row, col) in placement.cells:
                return placement
        return None

    def solution_letter(self, row: int, col: int) -> Optional[str]:
        return self.grid.letter_at(row, col)

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "grid": self.grid.to_jsonable(),
            "clues": {
                direction.value.lower(): [
                    {
                        "number": p.clue_number,
                        "length": len(p.text),
                        "clue": p.word.definition,
                        "hint": p.word.hint,
                        "start": [p.start.row, p.start.col],
                    }
                    for p in self.placements
                    if p.direction == direction
                ]
                for direction in Direction
            },
            "placements": [placement.to_jsonable() for placement in self.placements],
            "dropped_words": list(self.dropped_words),
        }


class CrosswordBuilder:
    """Best-effort intersecting layout with a bounded attempt budget per word."""

    def __init__(self, config: Optional[CrosswordConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or CrosswordConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.validator = PuzzleValidator()
        self._next_number = 1
        self._occupancy: Dict[Position, Set[Direction]] = {}

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, words: Sequence[Word]) -> GenerationResult:
        self._reset_state()
        dropped: List[str] = []
        try:
            candidates = self._eligible_words(words, dropped)
            ordered = sorted(candidates, key=lambda w: len(w.text), reverse=True)
            grid = Grid.square(self.config.grid_size)
            placements = [self._place_seed(grid, ordered[0])]
            for word in ordered[1:]:
                try:
                    placements.append(self._place_crossing(grid, word, placements))
                except PlacementExhaustedError as exc:
                    LOGGER.warning("Dropping word from crossword: %s", exc)
                    dropped.append(word.text)
            grid.block_empty()
            puzzle = CrosswordPuzzle(grid=grid, placements=placements, dropped_words=dropped)
            validation = self.validator.validate_crossword(puzzle)
            if not validation.ok:
                raise ValidationError(f"Crossword validation failed: {validation.messages}")
        except (InsufficientWordsError, ValidationError) as exc:
            LOGGER.warning("Crossword generation failed: %s", exc)
            return GenerationResult.failure(str(exc), dropped)

        LOGGER.info(
            "Crossword ready: %d across, %d down, %d dropped",
            len(puzzle.across()),
            len(puzzle.down()),
            len(dropped),
        )
        return GenerationResult.success(puzzle, dropped)

    def _reset_state(self) -> None:
        self._next_number = 1
        self._occupancy = {}

    def _eligible_words(self, words: Sequence[Word], dropped: List[str]) -> List[Word]:
        candidates: List[Word] = []
        for word in unique_by_id(words):
            if not is_alphabetic(word.text) or len(word.text) < 2:
                continue
            if len(word.text) > self.config.grid_size:
                LOGGER.warning("Dropping %s: longer than the grid", word.text)
                dropped.append(word.text)
                continue
            candidates.append(word)
        if len(candidates) < self.config.min_words:
            raise InsufficientWordsError(
                f"Need at least {self.config.min_words} words, got {len(candidates)}"
            )
        return candidates

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def _place_seed(self, grid: Grid, word: Word) -> Placement:
        size = self.config.grid_size
        start = Position(size // 2, (size - len(word.text)) // 2)
        return self._commit(grid, word, start, Direction.ACROSS)

    def _place_crossing(self, grid: Grid, word: Word, placements: List[Placement]) -> Placement:
        text = word.text
        for _ in range(self.config.max_attempts):
            anchor = self.rng.choice(placements)
            shared = self._shared_letters(text, anchor.text)
            if not shared:
                continue
            i, j = self.rng.choice(shared)
            direction = anchor.direction.perpendicular
            start = self._crossing_start(anchor, i, j)
            cells = trace_cells(start, direction, len(text))
            if self._can_place(grid, text, cells, direction):
                return self._commit(grid, word, start, direction)
        raise PlacementExhaustedError(
            f"{text} not placed after {self.config.max_attempts} attempts"
        )

    @staticmethod
    def _shared_letters(text: str, existing: str) -> List[Tuple[int, int]]:
        return [(i, j) for i, a in enumerate(text) for j, b in enumerate(existing) if a == b]

    @staticmethod
    def _crossing_start(anchor: Placement, i: int, j: int) -> Position:
        """Start of a perpendicular word whose letter ``i`` sits on the anchor's letter ``j``."""

        if anchor.direction == Direction.ACROSS:
            return Position(anchor.start.row - i, anchor.start.col + j)
        return Position(anchor.start.row + j, anchor.start.col - i)

    def _can_place(self, grid: Grid, text: str, cells: Sequence[Position], direction: Direction) -> bool:
        if not grid.fits(text, cells):
            return False

        dr, dc = direction.step
        before = Position(cells[0].row - dr, cells[0].col - dc)
        after = Position(cells[-1].row + dr, cells[-1].col + dc)
        if grid.is_filled(*before) or grid.is_filled(*after):
            LOGGER.debug("Rejected %s: would run into a neighbouring entry", text)
            return False

        pr, pc = direction.perpendicular.step
        new_cells = 0
        for position in cells:
            if grid.is_filled(*position):
                if direction in self._occupancy.get(position, set()):
                    return False
                continue
            new_cells += 1
            if grid.is_filled(position.row - pr, position.col - pc) or grid.is_filled(
                position.row + pr, position.col + pc
            ):
                LOGGER.debug("Rejected %s: new cell %s touches another entry", text, tuple(position))
                return False
        return new_cells > 0

    def _commit(self, grid: Grid, word: Word, start: Position, direction: Direction) -> Placement:
        cells = trace_cells(start, direction, len(word.text))
        grid.write(word.text, cells)
        for position in cells:
            self._occupancy.setdefault(position, set()).add(direction)

        first = grid.cell(start.row, start.col)
        if first.clue_number is None:
            first.clue_number = self._next_number
            self._next_number += 1
        return Placement(
            word=word,
            start=start,
            direction=direction,
            cells=cells,
            clue_number=first.clue_number,
        )
