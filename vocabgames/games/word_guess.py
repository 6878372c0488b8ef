"""Word guess: find the hidden word in a fixed number of attempts."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..core.constants import MAX_ATTEMPTS, FeedbackEvent, LetterStatus, RejectReason, RoundStatus
from ..core.models import MoveResult, Word
from ..io.progress_store import ProgressStore
from .base import FeedbackCallback, GameRound

ENTER = "ENTER"
DELETE = "DEL"

_STATUS_RANK = {LetterStatus.ABSENT: 0, LetterStatus.PRESENT: 1, LetterStatus.CORRECT: 2}


def score_guess(guess: str, target: str) -> List[LetterStatus]:
    """Position match is ``correct``, letter elsewhere in the target is ``present``."""

    guess, target = guess.upper(), target.upper()
    statuses = []
    for index, letter in enumerate(guess):
        if index < len(target) and target[index] == letter:
            statuses.append(LetterStatus.CORRECT)
        elif letter in target:
            statuses.append(LetterStatus.PRESENT)
        else:
            statuses.append(LetterStatus.ABSENT)
    return statuses


class WordGuessRound(GameRound):
    game_name = "word_guess"

    def __init__(
        self,
        word: Word,
        store: Optional[ProgressStore] = None,
        feedback: Optional[FeedbackCallback] = None,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        super().__init__(store=store, feedback=feedback)
        self.word = word
        self.max_attempts = max_attempts
        self.guesses: List[str] = []
        self.current = ""
        self.hint_visible = False

    @property
    def target(self) -> str:
        return self.word.text

    @property
    def attempts_left(self) -> int:
        return self.max_attempts - len(self.guesses)

    def feedback_rows(self) -> List[List[Tuple[str, LetterStatus]]]:
        return [list(zip(guess, score_guess(guess, self.target))) for guess in self.guesses]

    def keyboard_status(self) -> Dict[str, LetterStatus]:
        """Best status seen so far for every guessed letter."""

        summary: Dict[str, LetterStatus] = {}
        for guess in self.guesses:
            for letter, status in zip(guess, score_guess(guess, self.target)):
                known = summary.get(letter)
                if known is None or _STATUS_RANK[status] > _STATUS_RANK[known]:
                    summary[letter] = status
        return summary

    def toggle_hint(self) -> MoveResult:
        """Show or hide the word's hint; only the first reveal counts as a hint used."""

        blocked = self._guard()
        if blocked:
            return blocked
        if not self.word.hint:
            return MoveResult.rejected(RejectReason.HINT_UNAVAILABLE, "No hint for this word")
        self.hint_visible = not self.hint_visible
        if self.hint_visible and self.state.hints_used == 0:
            self.state.hints_used = 1
            self._emit(FeedbackEvent.HINT)
        return MoveResult(accepted=True, message=self.word.hint if self.hint_visible else "")

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def press_key(self, key: str) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        key = key.upper()
        if key == ENTER:
            return self.submit()
        self._start()
        if key == DELETE:
            self.current = self.current[:-1]
            return MoveResult(accepted=True)
        if len(key) != 1 or not ("A" <= key <= "Z"):
            return MoveResult.rejected(RejectReason.INVALID_LETTER, f"Unsupported key {key!r}")
        if len(self.current) >= len(self.target):
            return MoveResult.rejected(RejectReason.WRONG_LENGTH, "Row is full")
        self.current += key
        self._emit(FeedbackEvent.TAP)
        return MoveResult(accepted=True)

    def submit(self, guess: Optional[str] = None) -> MoveResult:
        blocked = self._guard()
        if blocked:
            return blocked
        self._start()
        candidate = (self.current if guess is None else guess).strip().upper()
        if len(candidate) != len(self.target):
            return self._reject(
                RejectReason.WRONG_LENGTH, f"Guess must have {len(self.target)} letters"
            )

        self.guesses.append(candidate)
        self.current = ""
        if candidate == self.target:
            self.state.found_words.add(self.target)
            points = self.state.add_score(1)
            self._discover(self.word)
            self._finish(RoundStatus.WON, self._won_stats)
            return MoveResult(accepted=True, points=points, word=self.word, message="Correct!")

        self._emit(FeedbackEvent.INCORRECT)
        if len(self.guesses) >= self.max_attempts:
            self._finish(RoundStatus.LOST, self._lost_stats)
            return MoveResult(accepted=True, word=self.word, message=f"The word was {self.target}")
        return MoveResult(accepted=True, message=f"{self.attempts_left} attempts left")

    def _won_stats(self, stats: Dict) -> Dict:
        return {
            "correct_answers": stats.get("correct_answers", 0) + 1,
            "total_guesses": stats.get("total_guesses", 0) + len(self.guesses),
            "games_played": stats.get("games_played", 0) + 1,
        }

    def _lost_stats(self, stats: Dict) -> Dict:
        return {
            "total_guesses": stats.get("total_guesses", 0) + len(self.guesses),
            "games_played": stats.get("games_played", 0) + 1,
        }
