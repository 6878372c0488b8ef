"""Crossword round: fill the grid from the across/down clues."""

from __future__ import annotations

from typing import Dict, List, Optional, Set

from ..core.constants import Direction, FeedbackEvent, RejectReason, RoundStatus
from ..core.models import MoveResult, Placement, Position
from ..engine.crossword import CrosswordPuzzle
from ..io.progress_store import ProgressStore
from ..utils.logger import get_logger
from .base import FeedbackCallback, GameRound


LOGGER = get_logger(__name__)

TIME_BONUS_WINDOW = 300
WORD_POINTS = 15
HINT_PENALTY = 15


def crossword_points(length: int, timer: int, hints_used: int) -> int:
    return length * WORD_POINTS + max(0, TIME_BONUS_WINDOW - timer) // 2 - hints_used * HINT_PENALTY


class CrosswordRound(GameRound):
    """Tracks the player's letters separately from the solution grid."""

    game_name = "crossword"

    def __init__(
        self,
        puzzle: CrosswordPuzzle,
        store: Optional[ProgressStore] = None,
        feedback: Optional[FeedbackCallback] = None,
    ) -> None:
        super().__init__(store=store, feedback=feedback)
        self.puzzle = puzzle
        self.user_grid: Dict[Position, str] = {}
        self.errors: Set[Position] = set()
        self.selected: Optional[Position] = None
        self.direction = Direction.ACROSS
        self.selected_word: Optional[Placement] = None

    def user_letter(self, row: int, col: int) -> Optional[str]:
        return self.user_grid.get(Position(row, col))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_cell(self, row: int, col: int) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        position = Position(row, col)
        if not self.puzzle.grid.is_filled(row, col):
            return MoveResult.rejected(RejectReason.NO_SELECTION, "Not a playable cell")
        self._start()

        if position == self.selected:
            toggled = self.direction.perpendicular
            word = self.puzzle.placement_at(row, col, toggled)
            if word is not None:
                self.direction = toggled
                self.selected_word = word
            return MoveResult(accepted=True, word=self.selected_word.word if self.selected_word else None)

        self.selected = position
        word = self.puzzle.placement_at(row, col, self.direction)
        if word is None:
            other = self.direction.perpendicular
            word = self.puzzle.placement_at(row, col, other)
            if word is not None:
                self.direction = other
        self.selected_word = word
        self._emit(FeedbackEvent.TAP)
        return MoveResult(accepted=True, word=word.word if word else None)

    # ------------------------------------------------------------------
    # Typing
    # ------------------------------------------------------------------
    def type_letter(self, letter: str) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        if self.selected is None:
            return MoveResult.rejected(RejectReason.NO_SELECTION, "Select a cell first")
        char = (letter or "").upper()
        if len(char) != 1 or not ("A" <= char <= "Z"):
            return MoveResult.rejected(RejectReason.INVALID_LETTER, f"Not a letter: {letter!r}")

        position = self.selected
        self.user_grid[position] = char
        if char != self.puzzle.solution_letter(*position):
            self.errors.add(position)
            self._emit(FeedbackEvent.INCORRECT)
        else:
            self.errors.discard(position)
            self._emit(FeedbackEvent.TAP)

        points = self._check_completions()
        self._advance(1)
        return MoveResult(accepted=True, points=points)

    def backspace(self) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        if self.selected is None:
            return MoveResult.rejected(RejectReason.NO_SELECTION, "Select a cell first")
        if self.selected in self.user_grid:
            del self.user_grid[self.selected]
            self.errors.discard(self.selected)
        else:
            self._advance(-1)
        return MoveResult(accepted=True)

    def _advance(self, step: int) -> None:
        if self.selected is None or self.selected_word is None:
            return
        cells = self.selected_word.cells
        if self.selected not in cells:
            return
        index = cells.index(self.selected) + step
        if 0 <= index < len(cells):
            self.selected = cells[index]

    # ------------------------------------------------------------------
    # Hints and checking
    # ------------------------------------------------------------------
    def reveal_letter(self) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        if self.selected is None:
            return MoveResult.rejected(RejectReason.NO_SELECTION, "Select a cell first")
        solution = self.puzzle.solution_letter(*self.selected)
        if self.user_grid.get(self.selected) == solution:
            return MoveResult.rejected(RejectReason.HINT_UNAVAILABLE, "Letter already correct")
        self.user_grid[self.selected] = solution
        self.errors.discard(self.selected)
        self.state.hints_used += 1
        self._emit(FeedbackEvent.HINT)
        return MoveResult(accepted=True, points=self._check_completions())

    def reveal_word(self) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        if self.selected_word is None:
            return MoveResult.rejected(RejectReason.NO_SELECTION, "Select a word first")
        for position in self.selected_word.cells:
            self.user_grid[position] = self.puzzle.solution_letter(*position)
            self.errors.discard(position)
        self.state.hints_used += len(self.selected_word.text)
        self._emit(FeedbackEvent.HINT)
        return MoveResult(
            accepted=True, points=self._check_completions(), word=self.selected_word.word
        )

    def check_answers(self) -> List[Position]:
        """Recompute the wrong cells among those the player has filled."""

        self.errors = {
            position
            for position, letter in self.user_grid.items()
            if letter != self.puzzle.solution_letter(*position)
        }
        return sorted(self.errors)

    def _check_completions(self) -> int:
        gained = 0
        for placement in self.puzzle.placements:
            if placement.key in self.state.found_words:
                continue
            if all(self.user_grid.get(cell) == letter for cell, letter in zip(placement.cells, placement.text)):
                self.state.found_words.add(placement.key)
                gained += self.state.add_score(
                    crossword_points(len(placement.text), self.state.timer, self.state.hints_used)
                )
                self._discover(placement.word)
                self._emit(FeedbackEvent.CORRECT)
                LOGGER.debug("Completed %s %s", placement.key, placement.text)

        if len(self.state.found_words) == len(self.puzzle.placements):
            self._finish(RoundStatus.COMPLETE, self._stats)
        return gained

    def _stats(self, stats: Dict) -> Dict:
        best = stats.get("best_time")
        return {
            "solved": stats.get("solved", 0) + 1,
            "total_score": stats.get("total_score", 0) + self.state.score,
            "best_time": self.state.timer if best is None else min(best, self.state.timer),
            "games_played": stats.get("games_played", 0) + 1,
        }
