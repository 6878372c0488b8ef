import random
import unittest

from vocabgames.core.constants import CellType, SearchDirection
from vocabgames.core.models import Position, Word
from vocabgames.engine.grid import Grid
from vocabgames.engine.word_search import WordSearchConfig, WordSearchGenerator


def make_words(*texts: str):
    return [Word(id=index, word=text, definition=f"{text} meaning", level="A1") for index, text in enumerate(texts)]


WORDS = make_words("apple", "house", "garden", "window", "pencil", "orange")


class WordSearchGeneratorTests(unittest.TestCase):
    def test_placements_read_their_word_inside_bounds(self) -> None:
        result = WordSearchGenerator(WordSearchConfig(seed=7)).generate(WORDS)

        self.assertTrue(result.ok, result.error)
        puzzle = result.puzzle
        self.assertEqual(len(puzzle.placements) + len(result.dropped_words), len(WORDS))
        for placement in puzzle.placements:
            self.assertEqual(len(placement.cells), len(placement.text))
            for cell in placement.cells:
                self.assertTrue(puzzle.grid.contains(cell))
            self.assertEqual(puzzle.grid.read(placement.cells), placement.text)
            self.assertIsInstance(placement.direction, SearchDirection)

    def test_every_cell_is_filled_after_generation(self) -> None:
        result = WordSearchGenerator(WordSearchConfig(seed=11)).generate(WORDS)

        grid = result.puzzle.grid
        for r in range(grid.bounds.rows):
            for c in range(grid.bounds.cols):
                self.assertTrue(grid.cell(r, c).is_filled())
                self.assertRegex(grid.letter_at(r, c), r"^[A-Z]$")

    def test_same_seed_gives_same_grid(self) -> None:
        first = WordSearchGenerator(WordSearchConfig(seed=5)).generate(WORDS)
        second = WordSearchGenerator(WordSearchConfig(seed=5)).generate(WORDS)
        self.assertEqual(first.puzzle.grid.letter_rows(), second.puzzle.grid.letter_rows())

    def test_too_few_words_fail_cleanly(self) -> None:
        result = WordSearchGenerator(WordSearchConfig(seed=1)).generate(make_words("cat", "dog"))

        self.assertFalse(result.ok)
        self.assertIsNone(result.puzzle)
        self.assertIn("at least 3", result.error)

    def test_non_alphabetic_words_are_not_eligible(self) -> None:
        result = WordSearchGenerator(WordSearchConfig(seed=1)).generate(
            make_words("ice cream", "well-known", "cat", "dog")
        )
        self.assertFalse(result.ok)

    def test_exhausted_budget_drops_every_word(self) -> None:
        config = WordSearchConfig(max_attempts=0, seed=1)
        result = WordSearchGenerator(config).generate(make_words("cat", "dog", "bird"))

        self.assertFalse(result.ok)
        self.assertEqual(sorted(result.dropped_words), ["BIRD", "CAT", "DOG"])

    def test_word_longer_than_grid_is_dropped(self) -> None:
        config = WordSearchConfig(grid_size=4, seed=2)
        result = WordSearchGenerator(config).generate(make_words("cat", "dog", "bird", "elephant"))

        self.assertTrue(result.ok, result.error)
        self.assertIn("ELEPHANT", result.dropped_words)
        self.assertNotIn("ELEPHANT", [p.text for p in result.puzzle.placements])

    def test_injected_rng_is_used(self) -> None:
        rng = random.Random(99)
        generator = WordSearchGenerator(rng=rng)
        self.assertIs(generator.rng, rng)


class WordSearchMatchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.puzzle = WordSearchGenerator(WordSearchConfig(seed=3)).generate(WORDS).puzzle

    def test_match_accepts_forward_and_reverse(self) -> None:
        placement = self.puzzle.placements[0]
        self.assertIs(self.puzzle.match(placement.text), placement)
        self.assertIs(self.puzzle.match(placement.text[::-1].lower()), placement)

    def test_match_skips_excluded_keys(self) -> None:
        placement = self.puzzle.placements[0]
        self.assertIsNone(self.puzzle.match(placement.text, exclude_keys=[placement.key]))

    def test_unknown_text_does_not_match(self) -> None:
        self.assertIsNone(self.puzzle.match("ZZZZ"))

    def test_json_form_lists_grid_rows(self) -> None:
        payload = self.puzzle.to_jsonable()
        self.assertEqual(len(payload["grid"]), 12)
        self.assertEqual(len(payload["placements"]), len(self.puzzle.placements))


class GridTests(unittest.TestCase):
    def test_fits_allows_matching_overlap_only(self) -> None:
        grid = Grid.square(5)
        positions = [Position(0, c) for c in range(3)]
        grid.write("CAT", positions)

        self.assertTrue(grid.fits("CAT", positions))
        self.assertFalse(grid.fits("DOG", positions))
        self.assertTrue(grid.fits("TO", [Position(0, 2), Position(1, 2)]))

    def test_fits_rejects_out_of_bounds(self) -> None:
        grid = Grid.square(3)
        self.assertFalse(grid.fits("ABCD", [Position(0, c) for c in range(4)]))

    def test_block_empty_leaves_letters_alone(self) -> None:
        grid = Grid.square(3)
        grid.write("AB", [Position(1, 0), Position(1, 1)])
        self.assertEqual(grid.block_empty(), 7)
        self.assertEqual(grid.count(CellType.FILLED), 2)
        self.assertEqual(grid.count(CellType.BLOCKED), 7)


if __name__ == "__main__":
    unittest.main()
