"""Vocabulary mini-games: puzzle generators and round state machines.

This package exposes the public API surface via:

- ``vocabgames.data.word_bank.WordBank``: leveled vocabulary and random subsets.
- ``vocabgames.data.vocabulary_browser.VocabularyBrowser``: discovered words
  filtered by search term and category.
- ``vocabgames.engine`` generators: word search, crossword, anagram
  scrambling and the spelling-bee honeycomb.
- ``vocabgames.games`` rounds: per-mode state machines that score input and
  report progress to a ``vocabgames.io.progress_store`` store.
"""

from .data.vocabulary_browser import VocabularyBrowser
from .data.word_bank import WordBank, WordBankConfig
from .engine.crossword import CrosswordBuilder, CrosswordConfig
from .engine.spelling_bee import SpellingBeeConfig, SpellingBeeGenerator
from .engine.word_search import WordSearchConfig, WordSearchGenerator
from .io.progress_store import JsonProgressStore, MemoryProgressStore

__all__ = [
    "WordBank",
    "WordBankConfig",
    "VocabularyBrowser",
    "CrosswordBuilder",
    "CrosswordConfig",
    "SpellingBeeConfig",
    "SpellingBeeGenerator",
    "WordSearchConfig",
    "WordSearchGenerator",
    "JsonProgressStore",
    "MemoryProgressStore",
]

__version__ = "0.1.0"
