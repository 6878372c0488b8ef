import unittest

from vocabgames.core.models import Position
from vocabgames.engine.selection import SelectionPathTracker, build_path, is_straight_line


class BuildPathTests(unittest.TestCase):
    def test_horizontal_path(self) -> None:
        self.assertEqual(
            build_path(Position(0, 0), Position(0, 3)),
            [Position(0, 0), Position(0, 1), Position(0, 2), Position(0, 3)],
        )

    def test_diagonal_path(self) -> None:
        self.assertEqual(
            build_path(Position(0, 0), Position(3, 3)),
            [Position(0, 0), Position(1, 1), Position(2, 2), Position(3, 3)],
        )

    def test_reverse_vertical_path(self) -> None:
        self.assertEqual(
            build_path((4, 2), (1, 2)),
            [Position(4, 2), Position(3, 2), Position(2, 2), Position(1, 2)],
        )

    def test_anti_diagonal_path(self) -> None:
        self.assertEqual(build_path((2, 0), (0, 2)), [Position(2, 0), Position(1, 1), Position(0, 2)])

    def test_single_cell(self) -> None:
        self.assertEqual(build_path((5, 5), (5, 5)), [Position(5, 5)])

    def test_off_line_is_rejected(self) -> None:
        self.assertFalse(is_straight_line(Position(0, 0), Position(2, 5)))
        self.assertIsNone(build_path(Position(0, 0), Position(2, 5)))


class SelectionPathTrackerTests(unittest.TestCase):
    def test_off_line_move_keeps_previous_path(self) -> None:
        tracker = SelectionPathTracker(bounds=(12, 12))
        tracker.begin(Position(0, 0))
        self.assertTrue(tracker.move(Position(0, 3)))
        before = tracker.path

        self.assertFalse(tracker.move(Position(2, 5)))
        self.assertEqual(tracker.path, before)

    def test_path_is_rebuilt_from_anchor(self) -> None:
        tracker = SelectionPathTracker()
        tracker.begin((1, 1))
        tracker.move((1, 4))
        tracker.move((4, 4))
        self.assertEqual(tracker.path, [Position(1, 1), Position(2, 2), Position(3, 3), Position(4, 4)])

    def test_out_of_bounds_cells_are_ignored(self) -> None:
        tracker = SelectionPathTracker(bounds=(3, 3))
        tracker.begin((0, 0))
        self.assertFalse(tracker.move((0, 5)))
        self.assertEqual(tracker.path, [Position(0, 0)])

        outside = SelectionPathTracker(bounds=(3, 3))
        outside.begin((7, 7))
        self.assertFalse(outside.active)
        self.assertEqual(outside.path, [])

    def test_end_returns_path_and_resets(self) -> None:
        tracker = SelectionPathTracker()
        tracker.begin((0, 0))
        tracker.move((0, 2))
        self.assertEqual(len(tracker.end()), 3)
        self.assertFalse(tracker.active)
        self.assertEqual(tracker.path, [])

    def test_move_without_begin_is_rejected(self) -> None:
        tracker = SelectionPathTracker()
        self.assertFalse(tracker.move((1, 1)))
        self.assertEqual(tracker.path, [])


if __name__ == "__main__":
    unittest.main()
