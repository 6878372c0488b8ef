"""Logging utilities shared by the generators and the game rounds."""

from __future__ import annotations

import logging
from typing import Any, MutableMapping, Optional, TextIO, Tuple, Union

PACKAGE_LOGGER = "vocabgames"
ROUNDS_LOGGER = f"{PACKAGE_LOGGER}.rounds"

LevelLike = Union[int, str]


def resolve_level(level: LevelLike, default: int = logging.INFO) -> int:
    """Map ``"debug"``/``"WARNING"``/``10`` style values to a logging level."""

    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else default


def configure_logging(level: LevelLike = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Configure root logging with a sensible formatter.

    Generators perform many discarded placement trials, so per-trial
    messages stay at DEBUG while dropped words and persistence problems
    surface as warnings. Callers may reconfigure before generating.
    """

    handler = logging.StreamHandler(stream)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or PACKAGE_LOGGER)


class RoundLogAdapter(logging.LoggerAdapter):
    """Prefixes round messages with the game they belong to."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['game']}] {msg}", kwargs


def round_logger(game_name: str) -> RoundLogAdapter:
    """Logger for one game mode's rounds, under ``vocabgames.rounds.<game>``."""

    return RoundLogAdapter(get_logger(f"{ROUNDS_LOGGER}.{game_name}"), {"game": game_name})
