import unittest

from vocabgames.core.constants import Direction, SearchDirection
from vocabgames.core.models import Placement, Position, Word
from vocabgames.engine.crossword import CrosswordPuzzle
from vocabgames.engine.grid import Grid
from vocabgames.engine.validator import PuzzleValidator
from vocabgames.engine.word_search import WordSearchPuzzle


class ValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = PuzzleValidator()

    def test_word_search_with_empty_cells_fails(self) -> None:
        grid = Grid.square(4)
        placement = Placement.build(Word(id=1, word="cat"), Position(0, 0), SearchDirection.EAST)
        grid.write(placement.text, placement.cells)

        result = self.validator.validate_word_search(WordSearchPuzzle(grid=grid, placements=[placement]))
        self.assertFalse(result.ok)
        self.assertIn("Unfilled", result.messages[0])

    def test_word_search_letters_must_match_placement(self) -> None:
        grid = Grid.square(3)
        grid.write("DOG", [Position(0, 0), Position(0, 1), Position(0, 2)])
        placement = Placement.build(Word(id=1, word="cat"), Position(0, 0), SearchDirection.EAST)

        result = self.validator.validate_word_search(WordSearchPuzzle(grid=grid, placements=[placement]))
        self.assertFalse(result.ok)

    def test_disconnected_crossword_entry_fails(self) -> None:
        grid = Grid.square(5)
        first = Placement.build(Word(id=1, word="cat"), Position(0, 0), Direction.ACROSS, clue_number=1)
        second = Placement.build(Word(id=2, word="dog"), Position(2, 0), Direction.ACROSS, clue_number=2)
        for placement in (first, second):
            grid.write(placement.text, placement.cells)
            grid.cell(*placement.start).clue_number = placement.clue_number
        grid.block_empty()

        result = self.validator.validate_crossword(CrosswordPuzzle(grid=grid, placements=[first, second]))
        self.assertFalse(result.ok)
        self.assertIn("does not cross", result.messages[0])

    def test_unnumbered_crossword_entry_fails(self) -> None:
        grid = Grid.square(3)
        placement = Placement.build(Word(id=1, word="cat"), Position(0, 0), Direction.ACROSS)
        grid.write(placement.text, placement.cells)
        grid.block_empty()

        result = self.validator.validate_crossword(CrosswordPuzzle(grid=grid, placements=[placement]))
        self.assertFalse(result.ok)

    def test_placement_length_must_match_word(self) -> None:
        with self.assertRaises(ValueError):
            Placement(
                word=Word(id=1, word="cat"),
                start=Position(0, 0),
                direction=Direction.ACROSS,
                cells=(Position(0, 0), Position(0, 1)),
            )


if __name__ == "__main__":
    unittest.main()
