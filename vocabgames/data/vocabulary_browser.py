"""Browse the words a learner has already discovered at a level."""

from __future__ import annotations

from typing import List

from ..core.constants import Level
from ..core.exceptions import PersistenceError
from ..core.models import Word
from ..io.progress_store import ProgressStore
from ..utils.logger import get_logger
from .word_bank import WordSource


LOGGER = get_logger(__name__)

ALL_CATEGORIES = "all"


class VocabularyBrowser:
    """Joins the vocabulary dataset with the learner's discovered ids."""

    def __init__(self, source: WordSource, store: ProgressStore) -> None:
        self.source = source
        self.store = store

    def discovered_words(
        self, level: str | Level, search: str = "", category: str = ALL_CATEGORIES
    ) -> List[Word]:
        """Discovered words in dataset order, filtered by term and category.

        ``search`` matches case-insensitively against the word or its
        definition; ``category="all"`` disables the category filter.
        """

        term = search.strip().lower()
        matches = []
        for word in self._discovered(level):
            if term and term not in word.word.lower() and term not in word.definition.lower():
                continue
            if category != ALL_CATEGORIES and word.category != category:
                continue
            matches.append(word)
        return matches

    def categories(self, level: str | Level) -> List[str]:
        """``"all"`` followed by each category of the discovered words, first-seen order."""

        names = [ALL_CATEGORIES]
        for word in self._discovered(level):
            if word.category and word.category not in names:
                names.append(word.category)
        return names

    def progress(self, level: str | Level) -> int:
        """Rounded percentage of the level's words discovered so far."""

        total = len(self.source.get_words_by_level(_level_key(level)))
        if total == 0:
            return 0
        return round(len(self._discovered(level)) / total * 100)

    def _discovered(self, level: str | Level) -> List[Word]:
        key = _level_key(level)
        try:
            ids = set(self.store.get_discovered(key))
        except PersistenceError as exc:
            LOGGER.warning("Could not read discovered words for %s: %s", key, exc)
            return []
        return [word for word in self.source.get_words_by_level(key) if word.id in ids]


def _level_key(level: str | Level) -> str:
    return level.value if isinstance(level, Level) else str(level).upper()
