"""Round lifecycle shared by every game mode."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Set

from ..core.constants import FeedbackEvent, RejectReason, RoundStatus
from ..core.exceptions import PersistenceError
from ..core.models import MoveResult, Word
from ..io.progress_store import ProgressStore
from ..utils.logger import round_logger

FeedbackCallback = Callable[[FeedbackEvent], None]
StatsBuilder = Callable[[Dict[str, Any]], Dict[str, Any]]


@dataclass
class RoundState:
    """Mutable tallies for one round; never persisted as a whole."""

    found_words: Set[str] = field(default_factory=set)
    score: int = 0
    timer: int = 0
    hints_used: int = 0

    def add_score(self, points: int) -> int:
        """Apply ``points`` with the total floored at 0; return the applied delta."""

        before = self.score
        self.score = max(0, self.score + points)
        return self.score - before


class GameRound:
    """Status transitions, timer, persistence and feedback plumbing.

    Subclasses implement the mode-specific moves and call ``_start`` on the
    first input and ``_finish`` when their completion predicate holds.
    """

    game_name = "game"

    def __init__(
        self,
        store: Optional[ProgressStore] = None,
        feedback: Optional[FeedbackCallback] = None,
    ) -> None:
        self.store = store
        self.feedback = feedback
        self.status = RoundStatus.NOT_STARTED
        self.state = RoundState()
        self._closed = False
        self.log = round_logger(self.game_name)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def score(self) -> int:
        return self.state.score

    @property
    def is_over(self) -> bool:
        return self._closed or self.status.is_terminal

    def tick(self, seconds: int = 1) -> None:
        """Advance the round clock; ignored before the first input and after the end."""

        if self.is_over or self.status != RoundStatus.IN_PROGRESS:
            return
        self.state.timer += seconds

    def close(self) -> None:
        """Tear the round down; later ticks and moves are no-ops."""

        self._closed = True

    def _start(self) -> None:
        if self.status == RoundStatus.NOT_STARTED:
            self.status = RoundStatus.IN_PROGRESS

    def _guard(self) -> Optional[MoveResult]:
        if self.is_over:
            return MoveResult.rejected(RejectReason.ROUND_OVER, "Round is over")
        return None

    def _finish(self, status: RoundStatus, stats: Optional[StatsBuilder] = None) -> None:
        self.status = status
        self.log.info(
            "round %s: score %d, %ds, %d hints",
            status.value,
            self.state.score,
            self.state.timer,
            self.state.hints_used,
        )
        if stats is not None:
            self._flush_stats(stats)
        self._emit(FeedbackEvent.LOSS if status == RoundStatus.LOST else FeedbackEvent.WIN)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------
    def _discover(self, word: Word) -> bool:
        if self.store is None:
            return False
        try:
            return self.store.mark_discovered(word.id, word.level)
        except PersistenceError as exc:
            self.log.warning("Could not record discovery of %s: %s", word.text, exc)
            return False

    def _flush_stats(self, build: StatsBuilder) -> None:
        if self.store is None:
            return
        try:
            current = self.store.get_game_stats(self.game_name)
            self.store.update_game_stats(self.game_name, build(current))
        except PersistenceError as exc:
            self.log.warning("Could not save stats: %s", exc)

    def _emit(self, event: FeedbackEvent) -> None:
        if self.feedback is None:
            return
        try:
            self.feedback(event)
        except Exception as exc:  # noqa: BLE001
            self.log.warning("Feedback handler failed on %s: %s", event.value, exc)

    def _reject(self, reason: RejectReason, message: str = "") -> MoveResult:
        self._emit(FeedbackEvent.INCORRECT)
        return MoveResult.rejected(reason, message)
