"""Unit tests for the mutable board and its immutable snapshots."""

from pathlib import Path
import pickle
import sys
import unittest

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nqueens_enum.board import Board, InvalidInput, Solution, render_solution


class BoardTests(unittest.TestCase):
    """Place/remove bookkeeping and precondition checks."""

    def test_new_board_is_empty(self):
        board = Board(5)
        self.assertEqual(board.size, 5)
        self.assertEqual(board.queen_count(), 0)
        self.assertFalse(any(board.is_occupied(r, c) for r in range(5) for c in range(5)))

    def test_place_and_remove(self):
        board = Board(4)
        board.place(1, 2)
        self.assertTrue(board.is_occupied(1, 2))
        self.assertEqual(board.queen_column(1), 2)
        self.assertEqual(board.queen_count(), 1)
        board.remove(1, 2)
        self.assertFalse(board.is_occupied(1, 2))
        self.assertEqual(board.queen_column(1), -1)

    def test_place_rejects_second_queen_in_row(self):
        board = Board(4)
        board.place(0, 0)
        with self.assertRaises(ValueError):
            board.place(0, 3)
        with self.assertRaises(ValueError):
            board.place(0, 0)

    def test_remove_requires_queen(self):
        with self.assertRaises(ValueError):
            Board(3).remove(2, 2)

    def test_placed_rolls_back_on_exception(self):
        board = Board(4)
        with self.assertRaises(RuntimeError):
            with board.placed(2, 1):
                self.assertTrue(board.is_occupied(2, 1))
                raise RuntimeError("boom")
        self.assertFalse(board.is_occupied(2, 1))
        self.assertEqual(board.queen_count(), 0)

    def test_invalid_sizes(self):
        for bad in (0, -3, 2.5, "4", True, None):
            with self.subTest(size=bad):
                with self.assertRaises(InvalidInput):
                    Board(bad)

    def test_numpy_integer_size(self):
        board = Board(np.int64(3))
        self.assertEqual(board.size, 3)
        self.assertIs(type(board.size), int)
        with self.assertRaises(InvalidInput):
            Board(np.int32(0))

    def test_invalid_input_is_value_error(self):
        self.assertTrue(issubclass(InvalidInput, ValueError))


class SnapshotTests(unittest.TestCase):
    """Snapshots never alias the live board."""

    def test_snapshot_is_independent(self):
        board = Board(4)
        for row, col in enumerate([1, 3, 0, 2]):
            board.place(row, col)
        snap = board.snapshot()
        board.remove(0, 1)
        board.place(0, 0)
        self.assertEqual(snap.columns, (1, 3, 0, 2))
        self.assertTrue(snap.cells[0][1])
        self.assertFalse(snap.cells[0][0])

    def test_solution_is_frozen_and_hashable(self):
        snap = Board(1).snapshot()
        with self.assertRaises(Exception):
            snap.cells = ()  # type: ignore[misc]
        self.assertIsInstance(snap.cells, tuple)
        self.assertEqual(len({snap, Board(1).snapshot()}), 1)

    def test_solution_pickles(self):
        board = Board(2)
        board.place(0, 1)
        snap = board.snapshot()
        self.assertEqual(pickle.loads(pickle.dumps(snap)), snap)

    def test_partial_snapshot_reports_empty_rows(self):
        board = Board(3)
        board.place(0, 1)
        snap = board.snapshot()
        self.assertEqual(snap.columns, (1, -1, -1))
        self.assertEqual(snap.queens, ((0, 1),))

    def test_queens_view(self):
        solution = Solution(((False, True, False, False),
                             (False, False, False, True),
                             (True, False, False, False),
                             (False, False, True, False)))
        self.assertEqual(solution.size, 4)
        self.assertEqual(solution.queens, ((0, 1), (1, 3), (2, 0), (3, 2)))


class RenderTests(unittest.TestCase):

    def setUp(self):
        board = Board(4)
        for row, col in enumerate([2, 0, 3, 1]):
            board.place(row, col)
        self.solution = board.snapshot()

    def test_default_symbols(self):
        self.assertEqual(
            render_solution(self.solution),
            ". . Q .\nQ . . .\n. . . Q\n. Q . .",
        )
        self.assertEqual(str(self.solution), render_solution(self.solution))

    def test_custom_symbols(self):
        text = self.solution.render(queen="X", empty="_")
        self.assertEqual(text.splitlines()[0], "_ _ X _")
        self.assertEqual(text.count("X"), 4)

    def test_rejects_ambiguous_symbols(self):
        with self.assertRaises(ValueError):
            render_solution(self.solution, queen="Q", empty="Q")
        with self.assertRaises(ValueError):
            render_solution(self.solution, queen="", empty=".")


if __name__ == "__main__":
    unittest.main()
