"""Straight-line drag selection for the word-search grid."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..core.models import Position
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def is_straight_line(start: Position, end: Position) -> bool:
    """True when ``end`` lies on one of the eight compass lines through ``start``."""

    dr = end.row - start.row
    dc = end.col - start.col
    return dr == 0 or dc == 0 or abs(dr) == abs(dc)


def build_path(start: Position, end: Position) -> Optional[List[Position]]:
    """Return the ordered cells from ``start`` to ``end`` or None if not collinear."""

    start, end = Position(*start), Position(*end)
    if not is_straight_line(start, end):
        return None
    dr = end.row - start.row
    dc = end.col - start.col
    steps = max(abs(dr), abs(dc))
    if steps == 0:
        return [start]
    return [
        Position(start.row + round(dr * i / steps), start.col + round(dc * i / steps))
        for i in range(steps + 1)
    ]


class SelectionPathTracker:
    """Tracks one drag gesture; the path is rebuilt from the anchor on every move.

    An off-line move is ignored and the last valid path is kept, so
    ``path`` is always empty or collinear from its first cell.
    """

    def __init__(self, bounds: Optional[Tuple[int, int]] = None) -> None:
        self.bounds = bounds
        self._path: List[Position] = []
        self.active = False

    @property
    def path(self) -> List[Position]:
        return list(self._path)

    def begin(self, cell: Position) -> None:
        cell = Position(*cell)
        if not self._in_bounds(cell):
            return
        self.active = True
        self._path = [cell]

    def move(self, cell: Position) -> bool:
        """Extend the selection toward ``cell``; False when the update is rejected."""

        if not self.active or not self._path:
            return False
        cell = Position(*cell)
        if not self._in_bounds(cell):
            return False
        path = build_path(self._path[0], cell)
        if path is None:
            LOGGER.debug("Ignoring off-line drag to %s", tuple(cell))
            return False
        self._path = path
        return True

    def end(self) -> List[Position]:
        """Finish the gesture and hand back the selected cells."""

        path = self._path
        self.active = False
        self._path = []
        return path

    def cancel(self) -> None:
        self.active = False
        self._path = []

    def _in_bounds(self, cell: Position) -> bool:
        if self.bounds is None:
            return True
        rows, cols = self.bounds
        return 0 <= cell.row < rows and 0 <= cell.col < cols
