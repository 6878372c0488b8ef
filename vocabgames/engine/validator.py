"""Deterministic rule validation for generated puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence, Set

from ..core.constants import CellType, Direction
from ..core.exceptions import ValidationError
from ..core.models import Placement
from ..utils.logger import get_logger
from .grid import Grid

if TYPE_CHECKING:
    from .crossword import CrosswordPuzzle
    from .word_search import WordSearchPuzzle


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs structural checks over a finished grid and its placements."""

    def validate_word_search(self, puzzle: "WordSearchPuzzle") -> ValidationResult:
        try:
            self._check_placements(puzzle.grid, puzzle.placements)
            self._check_no_empty_cells(puzzle.grid)
        except ValidationError as exc:
            return self._failed(exc)
        return ValidationResult(ok=True, messages=[])

    def validate_crossword(self, puzzle: "CrosswordPuzzle") -> ValidationResult:
        try:
            self._check_placements(puzzle.grid, puzzle.placements)
            self._check_orientation(puzzle.placements)
            self._check_intersections(puzzle.placements)
            self._check_clue_numbers(puzzle.grid, puzzle.placements)
            self._check_no_stray_letters(puzzle.grid, puzzle.placements)
        except ValidationError as exc:
            return self._failed(exc)
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _failed(exc: ValidationError) -> ValidationResult:
        LOGGER.error("Validation failed: %s", exc)
        return ValidationResult(ok=False, messages=[str(exc)])

    def _check_placements(self, grid: Grid, placements: Sequence[Placement]) -> None:
        for placement in placements:
            if len(placement.cells) != len(placement.text):
                raise ValidationError(f"{placement.text} covers {len(placement.cells)} cells")
            for position in placement.cells:
                if not grid.contains(position):
                    raise ValidationError(f"{placement.text} leaves the grid at {tuple(position)}")
            if grid.read(placement.cells) != placement.text:
                raise ValidationError(
                    f"Grid reads {grid.read(placement.cells)!r} where {placement.text!r} was placed"
                )

    def _check_no_empty_cells(self, grid: Grid) -> None:
        for r in range(grid.bounds.rows):
            for c in range(grid.bounds.cols):
                if not grid.cell(r, c).is_filled():
                    raise ValidationError(f"Unfilled cell at ({r},{c})")

    def _check_orientation(self, placements: Sequence[Placement]) -> None:
        for placement in placements:
            if not isinstance(placement.direction, Direction):
                raise ValidationError(f"{placement.text} runs {placement.direction}, not across/down")

    def _check_intersections(self, placements: Sequence[Placement]) -> None:
        occupied: Set = set()
        for index, placement in enumerate(placements):
            cells = set(placement.cells)
            if index > 0 and not cells & occupied:
                raise ValidationError(f"{placement.text} does not cross any earlier entry")
            occupied |= cells

    def _check_clue_numbers(self, grid: Grid, placements: Sequence[Placement]) -> None:
        keys: Set[str] = set()
        for placement in placements:
            if placement.clue_number is None:
                raise ValidationError(f"{placement.text} has no clue number")
            if placement.key in keys:
                raise ValidationError(f"Duplicate clue {placement.key}")
            keys.add(placement.key)
            first = placement.cells[0]
            if grid.cell(first.row, first.col).clue_number != placement.clue_number:
                raise ValidationError(f"Clue {placement.key} is not marked at its first cell")

    def _check_no_stray_letters(self, grid: Grid, placements: Sequence[Placement]) -> None:
        covered = {position for placement in placements for position in placement.cells}
        for r in range(grid.bounds.rows):
            for c in range(grid.bounds.cols):
                cell = grid.cell(r, c)
                if cell.type == CellType.FILLED and (r, c) not in covered:
                    raise ValidationError(f"Letter at ({r},{c}) belongs to no entry")
