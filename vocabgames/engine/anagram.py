"""Letter scrambling for the anagram game."""

from __future__ import annotations

import random
import uuid
from typing import List, Optional, Sequence

from ..core.constants import SCRAMBLE_MAX_RETRIES
from ..core.models import LetterTile
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def make_tiles(word: str) -> List[LetterTile]:
    """One tile per letter, in reading order, each with its own identity."""

    token = uuid.uuid4().hex[:8]
    return [
        LetterTile(id=f"{letter}-{index}-{token}", letter=letter, original_index=index)
        for index, letter in enumerate(word.upper())
    ]


def shuffle_tiles(tiles: Sequence[LetterTile], rng: Optional[random.Random] = None) -> List[LetterTile]:
    """Uniform Fisher-Yates shuffle returning a new list."""

    rng = rng or random.Random()
    shuffled = list(tiles)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def tiles_text(tiles: Sequence[LetterTile]) -> str:
    return "".join(tile.letter for tile in tiles)


def scramble(
    word: str,
    rng: Optional[random.Random] = None,
    max_retries: int = SCRAMBLE_MAX_RETRIES,
) -> List[LetterTile]:
    """Shuffle ``word`` into tiles, re-shuffling while the order spells ``word``.

    Words whose letters are all the same (or a single letter) cannot be
    disordered; they come back as-is once ``max_retries`` is spent.
    """

    rng = rng or random.Random()
    target = word.upper()
    tiles = shuffle_tiles(make_tiles(target), rng)
    retries = 0
    while tiles_text(tiles) == target and retries < max_retries:
        tiles = shuffle_tiles(tiles, rng)
        retries += 1
    if tiles_text(tiles) == target and len(set(target)) > 1:
        LOGGER.debug("Scramble of %s kept original order after %d retries", target, retries)
    return tiles
