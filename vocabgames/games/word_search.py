"""Word search round: drag straight lines over the grid to find hidden words."""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence, Set

from ..core.constants import FeedbackEvent, RejectReason, RoundStatus
from ..core.models import MoveResult, Placement, Position
from ..engine.selection import SelectionPathTracker
from ..engine.word_search import WordSearchPuzzle
from ..io.progress_store import ProgressStore
from ..utils.logger import get_logger
from .base import FeedbackCallback, GameRound


LOGGER = get_logger(__name__)

TIME_BONUS_WINDOW = 300
WORD_POINTS = 10
HINT_PENALTY = 20


def word_search_points(length: int, timer: int, hints_used: int) -> int:
    return length * WORD_POINTS + max(0, TIME_BONUS_WINDOW - timer) - hints_used * HINT_PENALTY


class WordSearchRound(GameRound):
    game_name = "word_search"

    def __init__(
        self,
        puzzle: WordSearchPuzzle,
        store: Optional[ProgressStore] = None,
        feedback: Optional[FeedbackCallback] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(store=store, feedback=feedback)
        self.puzzle = puzzle
        self.rng = rng or random.Random()
        bounds = puzzle.grid.bounds
        self.tracker = SelectionPathTracker(bounds=(bounds.rows, bounds.cols))
        self.found_cells: Set[Position] = set()
        self.hinted: Optional[Placement] = None

    @property
    def remaining(self) -> List[Placement]:
        return [p for p in self.puzzle.placements if p.key not in self.state.found_words]

    @property
    def hint_cells(self) -> List[Position]:
        return list(self.hinted.cells) if self.hinted else []

    # ------------------------------------------------------------------
    # Drag gesture
    # ------------------------------------------------------------------
    def begin_selection(self, cell: Position) -> bool:
        if self.is_over:
            return False
        self._start()
        self.tracker.begin(cell)
        return self.tracker.active

    def extend_selection(self, cell: Position) -> bool:
        if self.is_over:
            return False
        return self.tracker.move(cell)

    def end_selection(self) -> MoveResult:
        blocked = self._guard()
        if blocked:
            self.tracker.cancel()
            return blocked
        path = self.tracker.end()
        if not path:
            return MoveResult.rejected(RejectReason.NO_SELECTION, "Nothing selected")
        return self._check_path(path)

    def select(self, start: Position, end: Position) -> MoveResult:
        """Drag from ``start`` straight to ``end`` in one call."""

        if not self.begin_selection(start):
            return self._guard() or MoveResult.rejected(RejectReason.NO_SELECTION, "Start is off the grid")
        if not self.extend_selection(end):
            self.tracker.cancel()
            return self._reject(RejectReason.NOT_COLLINEAR, "Selection must be a straight line")
        return self.end_selection()

    def _check_path(self, path: Sequence[Position]) -> MoveResult:
        text = self.puzzle.grid.read(path)
        placement = self.puzzle.match(text, exclude_keys=self.state.found_words)
        if placement is None:
            if self.puzzle.match(text) is not None:
                return self._reject(RejectReason.ALREADY_FOUND, "Already found!")
            return self._reject(RejectReason.NO_MATCH, "Not a hidden word")
        return self._accept(placement, path)

    def _accept(self, placement: Placement, path: Sequence[Position]) -> MoveResult:
        self.state.found_words.add(placement.key)
        self.found_cells.update(path)
        if self.hinted is not None and self.hinted.key == placement.key:
            self.hinted = None
        points = self.state.add_score(
            word_search_points(len(placement.text), self.state.timer, self.state.hints_used)
        )
        self._discover(placement.word)
        self._emit(FeedbackEvent.CORRECT)
        LOGGER.debug("Found %s (+%d)", placement.text, points)

        if not self.remaining:
            self._finish(RoundStatus.COMPLETE, self._stats)
        return MoveResult(accepted=True, points=points, word=placement.word, message=f"Found {placement.text}!")

    # ------------------------------------------------------------------
    # Hints
    # ------------------------------------------------------------------
    def use_hint(self) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        remaining = self.remaining
        if not remaining:
            return MoveResult.rejected(RejectReason.HINT_UNAVAILABLE, "No words left")
        self._start()
        self.hinted = self.rng.choice(remaining)
        self.state.hints_used += 1
        self._emit(FeedbackEvent.HINT)
        return MoveResult(accepted=True, word=self.hinted.word, message=f"Look for {self.hinted.text}")

    def clear_hint(self) -> None:
        self.hinted = None

    def _stats(self, stats: Dict) -> Dict:
        return {
            "games_won": stats.get("games_won", 0) + 1,
            "total_time": stats.get("total_time", 0) + self.state.timer,
            "games_played": stats.get("games_played", 0) + 1,
            "best_score": max(stats.get("best_score", 0), self.state.score),
        }
