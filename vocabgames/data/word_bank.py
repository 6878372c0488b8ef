"""Read-only access to the leveled vocabulary dataset."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

from ..core.constants import Level
from ..core.exceptions import DictionaryLoadError
from ..core.models import Word, WordId
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_VOCABULARY_PATH = Path(__file__).with_name("vocabulary.json")


class WordSource(Protocol):
    """What the generators need from a vocabulary provider."""

    def get_words_by_level(self, level: str) -> List[Word]:
        ...

    def get_random_word(self, level: str, exclude_ids: Optional[Iterable[WordId]] = None) -> Optional[Word]:
        ...

    def get_random_words(
        self, level: str, count: int, exclude_ids: Optional[Iterable[WordId]] = None
    ) -> List[Word]:
        ...


@dataclass
class WordBankConfig:
    """Configuration for vocabulary loading."""

    path: Path | str = DEFAULT_VOCABULARY_PATH
    seed: Optional[int] = None
    rng: Optional[random.Random] = None


class WordBank:
    """Loads ``{level: [word, ...]}`` JSON and hands out random subsets."""

    def __init__(self, config: Optional[WordBankConfig] = None) -> None:
        self.config = config or WordBankConfig()
        self._rng = self.config.rng or random.Random(self.config.seed)
        self._words_by_level: Dict[str, List[Word]] = {}
        self._load()

    @classmethod
    def from_mapping(cls, data: Dict[str, Sequence[dict]], seed: Optional[int] = None) -> "WordBank":
        """Build a bank from an in-memory mapping (no file access)."""

        bank = cls.__new__(cls)
        bank.config = WordBankConfig(seed=seed)
        bank._rng = random.Random(seed)
        bank._words_by_level = {}
        bank._hydrate(data)
        return bank

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _load(self) -> None:
        source = Path(self.config.path)
        if not source.exists():
            raise DictionaryLoadError(f"Missing vocabulary file: {source}")
        try:
            data = json.loads(source.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise DictionaryLoadError(f"Unreadable vocabulary file {source}: {exc}") from exc
        if not isinstance(data, dict):
            raise DictionaryLoadError("Vocabulary file must map level names to word lists")
        self._hydrate(data)
        LOGGER.debug("Loaded %d words across %d levels", self.total_words(), len(self._words_by_level))

    def _hydrate(self, data: Dict[str, Sequence[dict]]) -> None:
        for level, entries in data.items():
            words: List[Word] = []
            for entry in entries:
                try:
                    words.append(Word.from_dict(entry, level=level))
                except (KeyError, TypeError) as exc:
                    raise DictionaryLoadError(f"Malformed word entry in {level}: {entry!r}") from exc
            self._words_by_level[level] = words

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def levels(self) -> List[str]:
        return list(self._words_by_level)

    def get_words_by_level(self, level: str | Level) -> List[Word]:
        return list(self._words_by_level.get(_level_key(level), []))

    def get_random_word(
        self, level: str | Level, exclude_ids: Optional[Iterable[WordId]] = None
    ) -> Optional[Word]:
        available = self._available(level, exclude_ids)
        if not available:
            return None
        return self._rng.choice(available)

    def get_random_words(
        self, level: str | Level, count: int, exclude_ids: Optional[Iterable[WordId]] = None
    ) -> List[Word]:
        """Return up to ``count`` distinct entries; fewer when supply runs short."""

        available = self._available(level, exclude_ids)
        self._rng.shuffle(available)
        return available[: max(0, min(count, len(available)))]

    def get_word_by_id(self, word_id: WordId) -> Optional[Word]:
        for words in self._words_by_level.values():
            for word in words:
                if word.id == word_id:
                    return word
        return None

    def total_words(self) -> int:
        return sum(len(words) for words in self._words_by_level.values())

    def _available(self, level: str | Level, exclude_ids: Optional[Iterable[WordId]]) -> List[Word]:
        excluded = set(exclude_ids or ())
        return [w for w in self._words_by_level.get(_level_key(level), []) if w.id not in excluded]


def _level_key(level: str | Level) -> str:
    return level.value if isinstance(level, Level) else str(level)


def unique_by_id(words: Iterable[Word]) -> List[Word]:
    """Drop repeated ids, keeping the first occurrence as canonical."""

    seen = set()
    result: List[Word] = []
    for word in words:
        if word.id in seen:
            continue
        seen.add(word.id)
        result.append(word)
    return result
