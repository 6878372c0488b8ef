import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import main


class CliTests(unittest.TestCase):
    def run_cli(self, *argv: str):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main.main(list(argv))
        return code, json.loads(buffer.getvalue())

    def test_word_search_payload(self) -> None:
        code, payload = self.run_cli("--mode", "word-search", "--level", "A1", "--seed", "3", "--log-level", "ERROR")
        self.assertEqual(code, 0)
        self.assertTrue(payload["ok"])
        self.assertEqual(len(payload["puzzle"]["grid"]), 12)

    def test_crossword_grid_size_override(self) -> None:
        code, payload = self.run_cli(
            "--mode", "crossword", "--level", "B1", "--seed", "5", "--grid-size", "11", "--log-level", "ERROR"
        )
        self.assertEqual(code, 0)
        self.assertEqual(len(payload["puzzle"]["grid"]), 11)

    def test_anagram_payload_lists_tiles(self) -> None:
        code, payload = self.run_cli("--mode", "anagram", "--seed", "1", "--log-level", "ERROR")
        self.assertEqual(code, 0)
        self.assertEqual(len(payload["tiles"]), len(payload["word"]["word"]))

    def test_output_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            out = Path(tmpdir) / "puzzle.json"
            code = main.main(
                ["--mode", "word-guess", "--seed", "2", "--output", str(out), "--log-level", "ERROR"]
            )
            self.assertEqual(code, 0)
            payload = json.loads(out.read_text(encoding="utf-8"))
            self.assertEqual(payload["mode"], "word-guess")

    def test_missing_vocabulary_exits_with_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            code = main.main(
                ["--mode", "crossword", "--vocabulary", str(Path(tmpdir) / "none.json"), "--log-level", "CRITICAL"]
            )
            self.assertEqual(code, 2)


if __name__ == "__main__":
    unittest.main()
