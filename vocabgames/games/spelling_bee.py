"""Spelling bee round: build words from the honeycomb, always using the center."""

from __future__ import annotations

import random
from typing import Dict, List, Optional

from ..core.constants import FeedbackEvent, RejectReason, RoundStatus
from ..core.exceptions import InvalidSelectionError
from ..core.models import MoveResult
from ..engine.spelling_bee import Honeycomb, rank_for
from ..io.progress_store import ProgressStore
from ..utils.logger import get_logger
from .base import FeedbackCallback, GameRound


LOGGER = get_logger(__name__)

HINT_PREFIX_LENGTH = 2


class SpellingBeeRound(GameRound):
    game_name = "spelling_bee"

    def __init__(
        self,
        honeycomb: Honeycomb,
        store: Optional[ProgressStore] = None,
        feedback: Optional[FeedbackCallback] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(store=store, feedback=feedback)
        self.honeycomb = honeycomb
        self.rng = rng or random.Random()
        self.outer: List[str] = list(honeycomb.outer)
        self.current = ""
        self.found_order: List[str] = []

    @property
    def rank(self) -> str:
        return rank_for(self.state.score, self.honeycomb.max_score)

    @property
    def remaining(self) -> List[str]:
        return [w.text for w in self.honeycomb.valid_words if w.text not in self.state.found_words]

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def tap_letter(self, letter: str) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        char = letter.upper()
        if char not in self.honeycomb.letters:
            return MoveResult.rejected(RejectReason.INVALID_LETTER, f"{char} is not in the honeycomb")
        self._start()
        self.current += char
        self._emit(FeedbackEvent.TAP)
        return MoveResult(accepted=True)

    def delete_letter(self) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        if not self.current:
            return MoveResult.rejected(RejectReason.NO_SELECTION, "Nothing to delete")
        self.current = self.current[:-1]
        return MoveResult(accepted=True)

    def shuffle_outer(self) -> List[str]:
        self.rng.shuffle(self.outer)
        return list(self.outer)

    def submit(self, text: Optional[str] = None) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        self._start()
        candidate = self.current if text is None else text
        self.current = ""
        try:
            word = self.honeycomb.check_submission(candidate, self.state.found_words)
        except InvalidSelectionError as exc:
            return self._reject(exc.reason, str(exc))

        self.state.found_words.add(word.text)
        self.found_order.append(word.text)
        points = self.state.add_score(self.honeycomb.score(word.text))
        self._discover(word)
        pangram = self.honeycomb.is_pangram(word.text)
        self._emit(FeedbackEvent.CORRECT)
        LOGGER.debug("Spelling bee accepted %s (+%d%s)", word.text, points, ", pangram" if pangram else "")

        if not self.remaining:
            self._finish(RoundStatus.COMPLETE, self._stats)
        return MoveResult(
            accepted=True,
            points=points,
            word=word,
            message="Pangram!" if pangram else f"+{points}",
        )

    def use_hint(self) -> MoveResult:
        """Reveal the first letters of a random unfound word in ``message``."""

        blocked = self._guard()
        if blocked:
            return blocked
        remaining = self.remaining
        if not remaining:
            return MoveResult.rejected(RejectReason.HINT_UNAVAILABLE, "No words left")
        self._start()
        target = self.rng.choice(remaining)
        self.state.hints_used += 1
        self._emit(FeedbackEvent.HINT)
        return MoveResult(
            accepted=True, word=self.honeycomb.lookup(target), message=target[:HINT_PREFIX_LENGTH]
        )

    def _stats(self, stats: Dict) -> Dict:
        return {
            "correct_words": stats.get("correct_words", 0) + len(self.state.found_words),
            "total_words": stats.get("total_words", 0) + len(self.honeycomb.valid_words),
            "games_played": stats.get("games_played", 0) + 1,
            "best_score": max(stats.get("best_score", 0), self.state.score),
        }
