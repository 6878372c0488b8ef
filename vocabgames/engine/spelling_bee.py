"""Spelling-bee honeycomb selection, word-list derivation and scoring."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.constants import (
    BEE_PADDING_LETTERS,
    HONEYCOMB_SIZE,
    MIN_BEE_WORD_LENGTH,
    MIN_SPELLING_BEE_ELIGIBLE,
    PANGRAM_BONUS,
    RejectReason,
)
from ..core.exceptions import InsufficientWordsError, InvalidSelectionError
from ..core.models import GenerationResult, Word
from ..data.normalization import clean_word, is_alphabetic
from ..data.word_bank import unique_by_id
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

RANKS: Tuple[Tuple[int, str], ...] = (
    (100, "Queen Bee"),
    (70, "Genius"),
    (50, "Amazing"),
    (40, "Great"),
    (25, "Nice"),
    (15, "Solid"),
    (5, "Good Start"),
)


def distinct_letters(text: str) -> List[str]:
    """Distinct uppercase letters in order of first appearance."""

    return list(dict.fromkeys(text.upper()))


def is_pangram(word: str, letters: Iterable[str]) -> bool:
    return set(letters) <= set(word.upper())


def calculate_word_score(word: str, letters: Sequence[str], pangram_bonus: int = PANGRAM_BONUS) -> int:
    """Four-letter words score 1, longer words their length, pangrams add a bonus."""

    if len(word) == 4:
        return 1
    points = len(word)
    if letters and is_pangram(word, (letter.upper() for letter in letters)):
        points += pangram_bonus
    return points


def uses_honeycomb(word: str, center: str, letters: Iterable[str]) -> bool:
    """Membership test: contains ``center`` and draws only from ``letters``."""

    text = word.upper()
    allowed = {letter.upper() for letter in letters}
    return center.upper() in text and set(text) <= allowed


def rank_for(score: int, max_score: int) -> str:
    if max_score <= 0:
        return "Beginner"
    pct = score / max_score * 100
    for threshold, name in RANKS:
        if pct >= threshold:
            return name
    return "Beginner"


@dataclass
class SpellingBeeConfig:
    min_word_length: int = MIN_BEE_WORD_LENGTH
    honeycomb_size: int = HONEYCOMB_SIZE
    min_eligible_words: int = MIN_SPELLING_BEE_ELIGIBLE
    padding_letters: str = BEE_PADDING_LETTERS
    pangram_bonus: int = PANGRAM_BONUS
    max_attempts: int = 10
    seed: Optional[int] = None


@dataclass
class Honeycomb:
    center: str
    outer: List[str]
    valid_words: List[Word]
    max_score: int
    seed_word: Word
    min_word_length: int = MIN_BEE_WORD_LENGTH
    pangram_bonus: int = PANGRAM_BONUS
    _by_text: Dict[str, Word] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_text = {word.text: word for word in self.valid_words}

    @property
    def letters(self) -> List[str]:
        return [self.center, *self.outer]

    def score(self, word: str) -> int:
        return calculate_word_score(word.upper(), self.letters, self.pangram_bonus)

    def is_pangram(self, word: str) -> bool:
        return is_pangram(word, self.letters)

    def lookup(self, word: str) -> Optional[Word]:
        return self._by_text.get(word.upper())

    def check_submission(self, text: str, found: Iterable[str] = ()) -> Word:
        """Return the matching word or raise :class:`InvalidSelectionError`."""

        candidate = clean_word(text)
        if len(candidate) < self.min_word_length:
            raise InvalidSelectionError(
                RejectReason.TOO_SHORT, f"Too short (min {self.min_word_length} letters)"
            )
        if self.center not in candidate:
            raise InvalidSelectionError(
                RejectReason.MISSING_CENTER, f'Must include center letter "{self.center}"'
            )
        if candidate in {entry.upper() for entry in found}:
            raise InvalidSelectionError(RejectReason.ALREADY_FOUND, "Already found!")
        word = self.lookup(candidate)
        if word is None:
            raise InvalidSelectionError(RejectReason.NOT_IN_LIST, "Not in word list")
        return word

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "center": self.center,
            "outer": list(self.outer),
            "valid_words": [word.text for word in self.valid_words],
            "max_score": self.max_score,
        }


class SpellingBeeGenerator:
    """Builds a 7-letter honeycomb around a pangram-candidate word."""

    def __init__(self, config: Optional[SpellingBeeConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or SpellingBeeConfig()
        self.rng = rng or random.Random(self.config.seed)

    def generate(self, words: Sequence[Word]) -> GenerationResult:
        try:
            eligible = self._eligible_words(words)
            honeycomb = self._build(eligible)
        except InsufficientWordsError as exc:
            LOGGER.warning("Spelling bee generation failed: %s", exc)
            return GenerationResult.failure(str(exc))
        LOGGER.info(
            "Spelling bee ready: center %s, %d words, max score %d",
            honeycomb.center,
            len(honeycomb.valid_words),
            honeycomb.max_score,
        )
        return GenerationResult.success(honeycomb)

    def _eligible_words(self, words: Sequence[Word]) -> List[Word]:
        eligible = [
            w
            for w in unique_by_id(words)
            if len(w.text) >= self.config.min_word_length and is_alphabetic(w.text)
        ]
        if len(eligible) < self.config.min_eligible_words:
            raise InsufficientWordsError(
                f"Not enough words for this level ({len(eligible)} < {self.config.min_eligible_words})"
            )
        return eligible

    def _build(self, eligible: List[Word]) -> Honeycomb:
        for _ in range(self.config.max_attempts):
            seed_word = self._pick_seed(eligible)
            letters = self._select_letters(seed_word)
            center, outer = letters[0], letters[1:]
            valid = self._valid_words(eligible, center, letters)
            if valid:
                max_score = sum(
                    calculate_word_score(w.text, letters, self.config.pangram_bonus) for w in valid
                )
                return Honeycomb(
                    center=center,
                    outer=outer,
                    valid_words=valid,
                    max_score=max_score,
                    seed_word=seed_word,
                    min_word_length=self.config.min_word_length,
                    pangram_bonus=self.config.pangram_bonus,
                )
            LOGGER.debug("Honeycomb %s yields no words, drawing again", "".join(letters))
        raise InsufficientWordsError(
            f"No playable honeycomb after {self.config.max_attempts} attempts"
        )

    def _pick_seed(self, eligible: List[Word]) -> Word:
        size = self.config.honeycomb_size
        qualifying = [w for w in eligible if len(set(w.text)) >= size]
        if qualifying:
            return self.rng.choice(qualifying)
        return max(eligible, key=lambda w: len(set(w.text)))

    def _select_letters(self, seed_word: Word) -> List[str]:
        size = self.config.honeycomb_size
        unique = distinct_letters(seed_word.text)
        if len(unique) >= size:
            return self.rng.sample(unique, size)
        selected = list(unique)
        for letter in self.config.padding_letters.upper():
            if len(selected) >= size:
                break
            if letter not in selected:
                selected.append(letter)
        return selected

    @staticmethod
    def _valid_words(eligible: List[Word], center: str, letters: List[str]) -> List[Word]:
        valid: List[Word] = []
        seen = set()
        for word in eligible:
            if word.text in seen or not uses_honeycomb(word.text, center, letters):
                continue
            seen.add(word.text)
            valid.append(word)
        return valid
