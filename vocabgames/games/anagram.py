"""Anagram session: rebuild scrambled words tile by tile, one word after another."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.constants import (
    MIN_ANAGRAM_LENGTH,
    SCRAMBLE_MAX_RETRIES,
    FeedbackEvent,
    RejectReason,
    RoundStatus,
)
from ..core.models import GenerationResult, LetterTile, MoveResult, Word
from ..data.normalization import is_alphabetic
from ..data.word_bank import WordSource
from ..engine.anagram import scramble, shuffle_tiles, tiles_text
from ..io.progress_store import ProgressStore
from ..utils.logger import get_logger
from .base import FeedbackCallback, GameRound


LOGGER = get_logger(__name__)

TIME_BONUS_WINDOW = 60
WORD_POINTS = 10
STREAK_POINTS = 5
HINT_PENALTY = 10
CANDIDATE_BATCH = 20


@dataclass
class AnagramConfig:
    min_word_length: int = MIN_ANAGRAM_LENGTH
    max_retries: int = SCRAMBLE_MAX_RETRIES
    seed: Optional[int] = None


def anagram_points(length: int, timer: int, streak: int, hints_used: int) -> int:
    return (
        length * WORD_POINTS
        + max(0, TIME_BONUS_WINDOW - timer)
        + streak * STREAK_POINTS
        - hints_used * HINT_PENALTY
    )


class AnagramRound(GameRound):
    """Score and streak carry across words; timer, hints and tiles reset per word."""

    game_name = "anagram"

    def __init__(
        self,
        source: WordSource,
        level: str,
        store: Optional[ProgressStore] = None,
        feedback: Optional[FeedbackCallback] = None,
        config: Optional[AnagramConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(store=store, feedback=feedback)
        self.source = source
        self.level = level
        self.config = config or AnagramConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.word: Optional[Word] = None
        self.pool: List[LetterTile] = []
        self.answer: List[LetterTile] = []
        self.streak = 0
        self.hint_visible = False
        self._last_points = 0

    # ------------------------------------------------------------------
    # Word lifecycle
    # ------------------------------------------------------------------
    def next_word(self) -> GenerationResult:
        """Load and scramble a fresh word, different from the current one when possible."""

        exclude = [self.word.id] if self.word is not None else []
        candidates = [
            w
            for w in self.source.get_random_words(self.level, CANDIDATE_BATCH, exclude_ids=exclude)
            if len(w.text) >= self.config.min_word_length and is_alphabetic(w.text)
        ]
        if not candidates:
            LOGGER.warning("No anagram words of %d+ letters in level %s", self.config.min_word_length, self.level)
            return GenerationResult.failure(f"No words for level {self.level}")

        self.word = candidates[0]
        self.pool = scramble(self.word.text, self.rng, self.config.max_retries)
        self.answer = []
        self.hint_visible = False
        self.status = RoundStatus.NOT_STARTED
        self.state.timer = 0
        self.state.hints_used = 0
        return GenerationResult.success(self.word)

    def skip(self) -> GenerationResult:
        if self._closed:
            return GenerationResult.failure("Round is closed")
        self.streak = 0
        return self.next_word()

    # ------------------------------------------------------------------
    # Tiles
    # ------------------------------------------------------------------
    def press_tile(self, tile_id: str) -> MoveResult:
        blocked = self._guard() or self._require_word()
        if blocked:
            return blocked
        tile = next((t for t in self.pool if t.id == tile_id), None)
        if tile is None:
            return MoveResult.rejected(RejectReason.UNKNOWN_TILE, f"No tile {tile_id} in the pool")
        self._start()
        self.pool.remove(tile)
        self.answer.append(tile)
        self._emit(FeedbackEvent.TAP)
        if len(self.answer) == len(self.word.text):
            return self._check_answer()
        return MoveResult(accepted=True)

    def return_tile(self, tile_id: str) -> MoveResult:
        blocked = self._guard() or self._require_word()
        if blocked:
            return blocked
        tile = next((t for t in self.answer if t.id == tile_id), None)
        if tile is None:
            return MoveResult.rejected(RejectReason.UNKNOWN_TILE, f"No tile {tile_id} in the answer")
        self.answer.remove(tile)
        self.pool.append(tile)
        return MoveResult(accepted=True)

    def clear_answer(self) -> None:
        if self.is_over:
            return
        self.pool.extend(self.answer)
        self.answer = []

    def shuffle_pool(self) -> None:
        if self.is_over:
            return
        self.pool = shuffle_tiles(self.pool, self.rng)

    def use_hint(self) -> MoveResult:
        blocked = self._guard() or self._require_word()
        if blocked:
            return blocked
        if self.hint_visible:
            return MoveResult.rejected(RejectReason.HINT_UNAVAILABLE, "Hint already shown")
        self._start()
        self.hint_visible = True
        self.state.hints_used += 1
        self._emit(FeedbackEvent.HINT)
        return MoveResult(accepted=True, word=self.word, message=self.word.hint or self.word.definition)

    # ------------------------------------------------------------------
    # Checking
    # ------------------------------------------------------------------
    def _check_answer(self) -> MoveResult:
        if tiles_text(self.answer) != self.word.text:
            self.streak = 0
            return self._reject(RejectReason.NO_MATCH, "Not quite, try again")

        points = self.state.add_score(
            anagram_points(len(self.word.text), self.state.timer, self.streak, self.state.hints_used)
        )
        self.streak += 1
        self.state.found_words.add(self.word.text)
        self._discover(self.word)
        self._emit(FeedbackEvent.CORRECT)
        self._last_points = points
        self._finish(RoundStatus.COMPLETE, self._stats)
        return MoveResult(accepted=True, points=points, word=self.word, message="Correct!")

    def _require_word(self) -> Optional[MoveResult]:
        if self.word is None:
            return MoveResult.rejected(RejectReason.NO_SELECTION, "No word loaded")
        return None

    def _stats(self, stats: Dict) -> Dict:
        return {
            "solved": stats.get("solved", 0) + 1,
            "total_score": stats.get("total_score", 0) + self._last_points,
            "best_streak": max(stats.get("best_streak", 0), self.streak),
            "games_played": stats.get("games_played", 0) + 1,
        }
