"""Persistent learner progress: discovered words and per-game statistics.

The whole progress document is a single JSON object::

    {
      "discovered_words": {"A1": ["a1_001", ...], ...},
      "game_stats": {"word_search": {"games_played": 3, ...}, ...},
      "achievements": [],
      "last_played": "2024-01-01T12:00:00+00:00"
    }

Every mutating call loads the document, applies the change and writes it
back, so two stores pointed at the same file never hold stale state for
long. Missing keys are filled from defaults on load.
"""

from __future__ import annotations

import copy
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from ..core.constants import Level
from ..core.exceptions import PersistenceError
from ..core.models import WordId
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_PROGRESS_PATH = Path("local_db/progress.json")


def default_document() -> Dict[str, Any]:
    return {
        "discovered_words": {level.value: [] for level in Level},
        "game_stats": {},
        "achievements": [],
        "last_played": None,
    }


class ProgressStore(Protocol):
    """What a round needs from the persisted progress collaborator."""

    def mark_discovered(self, word_id: WordId, level: str) -> bool: ...

    def get_discovered(self, level: str) -> List[WordId]: ...

    def get_game_stats(self, game_name: str) -> Dict[str, Any]: ...

    def update_game_stats(self, game_name: str, partial_stats: Dict[str, Any]) -> None: ...


class BaseProgressStore:
    """Document-level operations shared by the concrete stores.

    Subclasses provide ``_read`` (returning a raw document or None) and
    ``_write``. Both raise :class:`PersistenceError` on I/O failure.
    """

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------
    def mark_discovered(self, word_id: WordId, level: str) -> bool:
        """Record ``word_id`` under ``level``; True only on first discovery."""

        doc = self.load()
        bucket = doc["discovered_words"].setdefault(_level_key(level), [])
        if word_id in bucket:
            return False
        bucket.append(word_id)
        self.save(doc)
        LOGGER.debug("Discovered %s (%s)", word_id, _level_key(level))
        return True

    def get_discovered(self, level: str) -> List[WordId]:
        return list(self.load()["discovered_words"].get(_level_key(level), []))

    def get_total_discovered(self) -> int:
        return sum(len(ids) for ids in self.load()["discovered_words"].values())

    def get_level_progress(self, level: str, total_words: int) -> int:
        """Rounded percentage of a level's words discovered so far."""

        if total_words <= 0:
            return 0
        return round(len(self.get_discovered(level)) / total_words * 100)

    # ------------------------------------------------------------------
    # Game statistics
    # ------------------------------------------------------------------
    def get_game_stats(self, game_name: str) -> Dict[str, Any]:
        return dict(self.load()["game_stats"].get(game_name, {}))

    def update_game_stats(self, game_name: str, partial_stats: Dict[str, Any]) -> None:
        """Shallow-merge ``partial_stats`` into the stored stats for ``game_name``."""

        doc = self.load()
        stats = doc["game_stats"].setdefault(game_name, {})
        stats.update(partial_stats)
        self.save(doc)

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------
    def load(self) -> Dict[str, Any]:
        raw = self._read()
        doc = default_document()
        if raw is None:
            return doc
        if not isinstance(raw, dict):
            LOGGER.warning("Ignoring malformed progress document (%s)", type(raw).__name__)
            return doc
        for key, value in raw.items():
            default = doc.get(key)
            if default is not None and not isinstance(value, type(default)):
                LOGGER.warning(
                    "Ignoring progress key %r: expected %s, got %s",
                    key,
                    type(default).__name__,
                    type(value).__name__,
                )
                continue
            doc[key] = value
        buckets = doc["discovered_words"]
        for level_key, ids in list(buckets.items()):
            if not isinstance(ids, list):
                LOGGER.warning("Resetting malformed discovered bucket %r", level_key)
                buckets[level_key] = []
        for level in Level:
            buckets.setdefault(level.value, [])
        stats = doc["game_stats"]
        for game_name, values in list(stats.items()):
            if not isinstance(values, dict):
                LOGGER.warning("Resetting malformed stats for %r", game_name)
                stats[game_name] = {}
        return doc

    def save(self, doc: Dict[str, Any]) -> None:
        doc["last_played"] = datetime.now(timezone.utc).isoformat()
        self._write(doc)

    def reset(self) -> None:
        self._write(default_document())
        LOGGER.info("Progress reset")

    def _read(self) -> Optional[Any]:
        raise NotImplementedError

    def _write(self, doc: Dict[str, Any]) -> None:
        raise NotImplementedError


class JsonProgressStore(BaseProgressStore):
    """Keeps the progress document in one JSON file."""

    def __init__(self, path: Path | str = DEFAULT_PROGRESS_PATH) -> None:
        self.path = Path(path)

    def _read(self) -> Optional[Any]:
        if not self.path.exists():
            return None
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot read progress from {self.path}: {exc}") from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Progress file %s is corrupt (%s); starting fresh", self.path.name, exc)
            return None

    def _write(self, doc: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot write progress to {self.path}: {exc}") from exc


class MemoryProgressStore(BaseProgressStore):
    """In-process store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._doc: Optional[Dict[str, Any]] = copy.deepcopy(initial) if initial else None

    def _read(self) -> Optional[Any]:
        return copy.deepcopy(self._doc)

    def _write(self, doc: Dict[str, Any]) -> None:
        self._doc = copy.deepcopy(doc)


def _level_key(level: Any) -> str:
    return level.value if isinstance(level, Level) else str(level).upper()
