"""Data models shared by the generators and the round state machines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

from .constants import CellType, Direction, RejectReason, SearchDirection

WordId = Union[int, str]


class Position(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True)
class Word:
    """A vocabulary entry as stored in the leveled dataset."""

    id: WordId
    word: str
    definition: str = ""
    hint: str = ""
    example: str = ""
    category: str = ""
    level: str = ""

    @property
    def text(self) -> str:
        """Uppercase form used on grids and for matching."""
        return self.word.strip().upper()

    @classmethod
    def from_dict(cls, payload: Dict[str, Any], level: Optional[str] = None) -> "Word":
        return cls(
            id=payload["id"],
            word=payload["word"],
            definition=payload.get("definition", ""),
            hint=payload.get("hint", ""),
            example=payload.get("example", ""),
            category=payload.get("category", ""),
            level=payload.get("level") or level or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "word": self.word,
            "definition": self.definition,
            "hint": self.hint,
            "example": self.example,
            "category": self.category,
            "level": self.level,
        }


@dataclass
class Cell:
    """A grid cell: blocked, empty (no letter yet) or filled with a letter."""

    type: CellType = CellType.EMPTY
    letter: Optional[str] = None
    clue_number: Optional[int] = None

    def is_empty(self) -> bool:
        return self.type == CellType.EMPTY

    def is_filled(self) -> bool:
        return self.type == CellType.FILLED

    def is_blocked(self) -> bool:
        return self.type == CellType.BLOCKED


@dataclass(frozen=True)
class Placement:
    """A word's fixed location, direction and occupied cells within a grid."""

    word: Word
    start: Position
    direction: Union[Direction, SearchDirection]
    cells: Tuple[Position, ...]
    clue_number: Optional[int] = None

    def __post_init__(self) -> None:
        if len(self.cells) != len(self.word.text):
            raise ValueError(
                f"Placement of {self.word.text!r} covers {len(self.cells)} cells"
            )

    @classmethod
    def build(
        cls,
        word: Word,
        start: Position,
        direction: Union[Direction, SearchDirection],
        clue_number: Optional[int] = None,
    ) -> "Placement":
        return cls(
            word=word,
            start=start,
            direction=direction,
            cells=trace_cells(start, direction, len(word.text)),
            clue_number=clue_number,
        )

    @property
    def text(self) -> str:
        return self.word.text

    @property
    def key(self) -> str:
        if self.clue_number is not None:
            return f"{self.clue_number}-{self.direction.value}"
        return str(self.word.id)

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "word": self.word.to_dict(),
            "start": [self.start.row, self.start.col],
            "direction": self.direction.value,
            "cells": [[cell.row, cell.col] for cell in self.cells],
            "clue_number": self.clue_number,
        }


def trace_cells(
    start: Position, direction: Union[Direction, SearchDirection], length: int
) -> Tuple[Position, ...]:
    dr, dc = direction.step
    return tuple(Position(start.row + dr * i, start.col + dc * i) for i in range(length))


@dataclass(frozen=True)
class LetterTile:
    """A selectable anagram tile; ``id`` stays unique when letters repeat."""

    id: str
    letter: str
    original_index: int


@dataclass
class GenerationResult:
    """Outcome of a puzzle generation request.

    Generation failures are expected (a small level, an unlucky layout), so
    they are reported through ``ok``/``error`` rather than raised.
    """

    ok: bool
    puzzle: Optional[Any] = None
    error: Optional[str] = None
    dropped_words: List[str] = field(default_factory=list)

    @classmethod
    def success(cls, puzzle: Any, dropped_words: Optional[List[str]] = None) -> "GenerationResult":
        return cls(ok=True, puzzle=puzzle, dropped_words=list(dropped_words or []))

    @classmethod
    def failure(cls, error: str, dropped_words: Optional[List[str]] = None) -> "GenerationResult":
        return cls(ok=False, error=error, dropped_words=list(dropped_words or []))


@dataclass
class MoveResult:
    """What a round reports back for a single player action."""

    accepted: bool
    reason: Optional[RejectReason] = None
    points: int = 0
    word: Optional[Word] = None
    message: str = ""

    @classmethod
    def rejected(cls, reason: RejectReason, message: str = "") -> "MoveResult":
        return cls(accepted=False, reason=reason, message=message or reason.value)
