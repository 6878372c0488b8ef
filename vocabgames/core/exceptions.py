"""Custom exception hierarchy for puzzle generation and play."""

from __future__ import annotations

from typing import Optional

from .constants import RejectReason


class VocabGameError(Exception):
    """Base exception for generator and round failures."""


class DictionaryLoadError(VocabGameError):
    """Raised when the vocabulary JSON cannot be read or parsed."""


class InsufficientWordsError(VocabGameError):
    """Raised when a level cannot supply enough eligible words for a mode."""


class PlacementExhaustedError(VocabGameError):
    """Raised when a word cannot be placed within its attempt budget."""


class InvalidSelectionError(VocabGameError):
    """Raised when player input is rejected by a round."""

    def __init__(self, reason: RejectReason, message: Optional[str] = None) -> None:
        super().__init__(message or reason.value)
        self.reason = reason


class PersistenceError(VocabGameError):
    """Raised when the progress store cannot be read or written."""


class ValidationError(VocabGameError):
    """Raised when a generated puzzle fails its integrity checks."""
