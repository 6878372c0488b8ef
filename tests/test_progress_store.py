import json
import random
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from vocabgames.core.constants import Level, RoundStatus, SearchDirection
from vocabgames.core.exceptions import PersistenceError
from vocabgames.core.models import Placement, Position, Word
from vocabgames.engine.grid import Grid
from vocabgames.engine.word_search import WordSearchPuzzle
from vocabgames.games.word_search import WordSearchRound
from vocabgames.io.progress_store import JsonProgressStore, MemoryProgressStore


class MemoryProgressStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryProgressStore()

    def test_mark_discovered_is_idempotent(self) -> None:
        self.assertTrue(self.store.mark_discovered("a1_001", "A1"))
        self.assertFalse(self.store.mark_discovered("a1_001", "A1"))
        self.assertEqual(self.store.get_discovered("A1"), ["a1_001"])

    def test_level_enum_and_lowercase_levels_share_a_bucket(self) -> None:
        self.store.mark_discovered(1, Level.B2)
        self.assertFalse(self.store.mark_discovered(1, "b2"))
        self.assertEqual(self.store.get_total_discovered(), 1)

    def test_update_game_stats_merges_shallowly(self) -> None:
        self.store.update_game_stats("anagram", {"solved": 1, "best_streak": 2})
        self.store.update_game_stats("anagram", {"solved": 2})
        self.assertEqual(self.store.get_game_stats("anagram"), {"solved": 2, "best_streak": 2})

    def test_unknown_game_has_empty_stats(self) -> None:
        self.assertEqual(self.store.get_game_stats("crossword"), {})

    def test_level_progress_percentage(self) -> None:
        for word_id in ("a", "b", "c"):
            self.store.mark_discovered(word_id, "A1")
        self.assertEqual(self.store.get_level_progress("A1", 8), 38)
        self.assertEqual(self.store.get_level_progress("A1", 0), 0)

    def test_last_played_is_refreshed_on_save(self) -> None:
        self.assertIsNone(self.store.load()["last_played"])
        self.store.mark_discovered("x", "C1")
        self.assertIsNotNone(self.store.load()["last_played"])

    def test_reset_clears_everything(self) -> None:
        self.store.mark_discovered("x", "C1")
        self.store.update_game_stats("word_guess", {"games_played": 1})
        self.store.reset()
        self.assertEqual(self.store.get_total_discovered(), 0)
        self.assertEqual(self.store.get_game_stats("word_guess"), {})

    def test_returned_stats_are_copies(self) -> None:
        self.store.update_game_stats("word_search", {"games_won": 1})
        stats = self.store.get_game_stats("word_search")
        stats["games_won"] = 99
        self.assertEqual(self.store.get_game_stats("word_search")["games_won"], 1)


class JsonProgressStoreTests(unittest.TestCase):
    def test_round_trips_through_disk(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "progress.json"
            store = JsonProgressStore(path)
            store.mark_discovered("a1_002", "A1")
            store.update_game_stats("spelling_bee", {"best_score": 12})

            reopened = JsonProgressStore(path)
            self.assertEqual(reopened.get_discovered("A1"), ["a1_002"])
            self.assertEqual(reopened.get_game_stats("spelling_bee"), {"best_score": 12})

            doc = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(
                set(doc), {"discovered_words", "game_stats", "achievements", "last_played"}
            )

    def test_missing_keys_are_filled_from_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "progress.json"
            path.write_text(json.dumps({"discovered_words": {"A1": [1]}}), encoding="utf-8")

            store = JsonProgressStore(path)
            doc = store.load()
            self.assertEqual(doc["game_stats"], {})
            self.assertEqual(doc["achievements"], [])
            self.assertEqual(doc["discovered_words"]["C2"], [])
            self.assertEqual(store.get_discovered("A1"), [1])

    def test_corrupt_file_starts_fresh(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "progress.json"
            path.write_text("{broken", encoding="utf-8")

            store = JsonProgressStore(path)
            with self.assertLogs("vocabgames.io.progress_store", level="WARNING"):
                self.assertEqual(store.get_total_discovered(), 0)
            self.assertTrue(store.mark_discovered("z", "A2"))

    def test_wrongly_shaped_document_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "progress.json"
            path.write_text(
                json.dumps(
                    {
                        "discovered_words": [],
                        "game_stats": {"anagram": 3, "crossword": {"solved": 1}},
                        "achievements": None,
                    }
                ),
                encoding="utf-8",
            )

            store = JsonProgressStore(path)
            with self.assertLogs("vocabgames.io.progress_store", level="WARNING"):
                doc = store.load()
            self.assertEqual(doc["discovered_words"]["A1"], [])
            self.assertEqual(doc["achievements"], [])
            self.assertEqual(doc["game_stats"], {"anagram": {}, "crossword": {"solved": 1}})

    def test_malformed_level_bucket_is_reset(self) -> None:
        store = MemoryProgressStore({"discovered_words": {"A1": "a1_001", "B1": ["b1_001"]}})
        self.assertTrue(store.mark_discovered("a1_002", "A1"))
        self.assertEqual(store.get_discovered("A1"), ["a1_002"])
        self.assertEqual(store.get_discovered("B1"), ["b1_001"])

    def test_round_keeps_playing_over_a_wrongly_shaped_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "progress.json"
            path.write_text(json.dumps({"discovered_words": [], "game_stats": None}), encoding="utf-8")
            grid = Grid.square(3)
            cat = Placement.build(Word(id=1, word="cat", level="A1"), Position(0, 0), SearchDirection.EAST)
            grid.write(cat.text, cat.cells)
            grid.fill_empty("X", random.Random(0))
            game = WordSearchRound(WordSearchPuzzle(grid=grid, placements=[cat]), store=JsonProgressStore(path))

            with self.assertLogs("vocabgames.io.progress_store", level="WARNING"):
                result = game.select(Position(0, 0), Position(0, 2))

            self.assertTrue(result.accepted)
            self.assertEqual(game.status, RoundStatus.COMPLETE)
            reopened = JsonProgressStore(path)
            self.assertEqual(reopened.get_discovered("A1"), [1])
            self.assertEqual(reopened.get_game_stats("word_search")["games_won"], 1)

    def test_write_failure_raises_persistence_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonProgressStore(Path(tmpdir) / "progress.json")
            with patch.object(Path, "write_text", side_effect=OSError("disk full")):
                with self.assertRaises(PersistenceError):
                    store.mark_discovered("a", "A1")


if __name__ == "__main__":
    unittest.main()
