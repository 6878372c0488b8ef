"""Word-search puzzle generation: 8-direction placement plus weighted filler."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..core.constants import (
    FILLER_LETTERS,
    MIN_WORD_SEARCH_WORDS,
    WORD_SEARCH_GRID_SIZE,
    WORD_SEARCH_MAX_ATTEMPTS,
    WORDS_PER_PUZZLE,
    SearchDirection,
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
class WordSearchConfig:
    grid_size: int = WORD_SEARCH_GRID_SIZE
    word_count: int = WORDS_PER_PUZZLE
    max_attempts: int = WORD_SEARCH_MAX_ATTEMPTS
    min_words: int = MIN_WORD_SEARCH_WORDS
    filler_letters: str = FILLER_LETTERS
    seed: Optional[int] = None


@dataclass
class WordSearchPuzzle:
    grid: Grid
    placements: List[Placement]
    dropped_words: List[str] = field(default_factory=list)

    def match(self, selected: str, exclude_keys: Iterable[str] = ()) -> Optional[Placement]:
        """Return the first placement whose word reads ``selected`` either way."""

        excluded = set(exclude_keys)
        forward = selected.upper()
        backward = forward[::-1]
        for placement in self.placements:
            if placement.key in excluded:
                continue
            if placement.text in (forward, backward):
                return placement
        return None

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "grid": self.grid.letter_rows(),
            "placements": [placement.to_jsonable() for placement in self.placements],
            "dropped_words": list(self.dropped_words),
        }


class WordSearchGenerator:
    """Places words longest-first with bounded random trials."""

    def __init__(self, config: Optional[WordSearchConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or WordSearchConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.validator = PuzzleValidator()

    def generate(self, words: Sequence[Word]) -> GenerationResult:
        dropped: List[str] = []
        try:
            candidates = self._eligible_words(words)
            grid = Grid.square(self.config.grid_size)
            placements: List[Placement] = []
            for word in sorted(candidates, key=lambda w: len(w.text), reverse=True):
                try:
                    placements.append(self._place_word(grid, word))
                except PlacementExhaustedError as exc:
                    LOGGER.warning("Dropping word from word search: %s", exc)
                    dropped.append(word.text)
            if not placements:
                raise PlacementExhaustedError("No word could be placed on the grid")
            filled = grid.fill_empty(self.config.filler_letters, self.rng)
            puzzle = WordSearchPuzzle(grid=grid, placements=placements, dropped_words=dropped)
            validation = self.validator.validate_word_search(puzzle)
            if not validation.ok:
                raise ValidationError(f"Word search validation failed: {validation.messages}")
        except (InsufficientWordsError, PlacementExhaustedError, ValidationError) as exc:
            LOGGER.warning("Word search generation failed: %s", exc)
            return GenerationResult.failure(str(exc), dropped)

        LOGGER.info(
            "Word search ready: %d/%d words placed, %d filler cells",
            len(placements),
            len(candidates),
            filled,
        )
        return GenerationResult.success(puzzle, dropped)

    def _eligible_words(self, words: Sequence[Word]) -> List[Word]:
        candidates = [w for w in unique_by_id(words) if is_alphabetic(w.text) and len(w.text) >= 2]
        if len(candidates) < self.config.min_words:
            raise InsufficientWordsError(
                f"Need at least {self.config.min_words} words, got {len(candidates)}"
            )
        return candidates

    def _place_word(self, grid: Grid, word: Word) -> Placement:
        text = word.text
        size = self.config.grid_size
        if len(text) > size:
            raise PlacementExhaustedError(f"{text} is longer than the {size}x{size} grid")

        directions = list(SearchDirection)
        for _ in range(self.config.max_attempts):
            direction = self.rng.choice(directions)
            start = Position(self.rng.randrange(size), self.rng.randrange(size))
            cells = trace_cells(start, direction, len(text))
            if not grid.fits(text, cells):
                continue
            grid.write(text, cells)
            return Placement(word=word, start=start, direction=direction, cells=cells)
        raise PlacementExhaustedError(
            f"{text} not placed after {self.config.max_attempts} attempts"
        )
