"""Grid representation and helper utilities."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from ..core.constants import Bounds, CellType
from ..core.exceptions import PlacementExhaustedError
from ..core.models import Cell, Position
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class GridConfig:
    """Configuration values driving the grid layout."""

    height: int
    width: int

    def bounds(self) -> Bounds:
        return Bounds(rows=self.height, cols=self.width)


class Grid:
    """A rectangular grid of tagged cells with placement helpers."""

    def __init__(self, config: GridConfig) -> None:
        if config.height <= 0 or config.width <= 0:
            raise ValueError(f"Grid must have positive size, got {config.height}x{config.width}")
        self.config = config
        self.bounds = config.bounds()
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(self.bounds.cols)] for _ in range(self.bounds.rows)
        ]

    @classmethod
    def square(cls, size: int) -> "Grid":
        return cls(GridConfig(height=size, width=size))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def contains(self, position: Position) -> bool:
        return self.bounds.contains(position.row, position.col)

    def is_filled(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col) and self.cells[row][col].is_filled()

    def letter_at(self, row: int, col: int) -> Optional[str]:
        return self.cells[row][col].letter

    def read(self, positions: Iterable[Position]) -> str:
        return "".join(self.cells[p.row][p.col].letter or "" for p in positions)

    def count(self, cell_type: CellType) -> int:
        return sum(1 for row in self.cells for cell in row if cell.type == cell_type)

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def fits(self, text: str, positions: Sequence[Position]) -> bool:
        """True if every target cell is in bounds and empty or already ``text[i]``."""

        if len(text) != len(positions):
            return False
        for letter, position in zip(text, positions):
            if not self.contains(position):
                return False
            cell = self.cells[position.row][position.col]
            if cell.is_blocked():
                return False
            if cell.is_filled() and cell.letter != letter:
                return False
        return True

    def write(self, text: str, positions: Sequence[Position]) -> None:
        if not self.fits(text, positions):
            raise PlacementExhaustedError(f"Cannot write {text!r} at {positions[0] if positions else None}")
        for letter, position in zip(text, positions):
            cell = self.cells[position.row][position.col]
            cell.type = CellType.FILLED
            cell.letter = letter

    def fill_empty(self, pool: str, rng: random.Random) -> int:
        """Fill every empty cell with a letter drawn from ``pool``."""

        filled = 0
        for row in self.cells:
            for cell in row:
                if cell.is_empty():
                    cell.type = CellType.FILLED
                    cell.letter = rng.choice(pool)
                    filled += 1
        return filled

    def block_empty(self) -> int:
        """Turn every remaining empty cell into a blocked cell."""

        blocked = 0
        for row in self.cells:
            for cell in row:
                if cell.is_empty():
                    cell.type = CellType.BLOCKED
                    blocked += 1
        return blocked

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def letter_rows(self) -> List[List[Optional[str]]]:
        return [[cell.letter for cell in row] for row in self.cells]

    def to_jsonable(self) -> List[List[dict]]:
        serialized: List[List[dict]] = []
        for row in self.cells:
            serialized.append(
                [
                    {
                        "type": cell.type.value,
                        "letter": cell.letter,
                        "clue_number": cell.clue_number,
                    }
                    for cell in row
                ]
            )
        return serialized
