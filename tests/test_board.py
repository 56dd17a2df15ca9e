import unittest

from game import (
    Board,
    IsolatedPlacement,
    OccupiedCell,
    OutOfBounds,
)


class TestBoard(unittest.TestCase):
    def _mk_board(self, rows):
        return Board.from_rows(rows)

    def test_given_new_board_when_queried_then_empty_and_not_full(self):
        board = Board()
        self.assertEqual(board.size, 4)
        self.assertEqual(len(board.cells), 16)
        self.assertTrue(board.is_empty())
        self.assertFalse(board.is_full())

    def test_given_rows_when_building_then_row_major_indexing(self):
        board = self._mk_board([
            [2, None, None, None],
            [None, 8, None, None],
            [None, None, None, None],
            [None, None, None, 35],
        ])
        self.assertEqual(board.index(1, 1), 5)
        self.assertEqual(board.at(1, 1), 8)
        self.assertEqual(board.at(3, 3), 35)
        self.assertEqual(board.occupied(), [(0, 0), (1, 1), (3, 3)])
        self.assertEqual(board.rows()[1], [None, 8, None, None])

    def test_given_ragged_rows_when_building_then_value_error(self):
        with self.assertRaises(ValueError):
            Board.from_rows([[1, 2], [3]])
        with self.assertRaises(ValueError):
            Board(size=4, cells=[None] * 15)

    def test_given_corner_and_center_when_listing_neighbors_then_in_bounds_up_down_left_right(self):
        board = Board()
        self.assertEqual(board.neighbors_of(0, 0), [(1, 0), (0, 1)])
        self.assertEqual(board.neighbors_of(1, 1), [(0, 1), (2, 1), (1, 0), (1, 2)])
        self.assertEqual(board.neighbors_of(3, 3), [(2, 3), (3, 2)])

    def test_given_single_tile_when_checking_neighbors_then_only_adjacent_cells_report_occupied(self):
        board = Board()
        board.set(1, 1, 6)
        self.assertTrue(board.has_occupied_neighbor(0, 1))
        self.assertTrue(board.has_occupied_neighbor(1, 2))
        self.assertFalse(board.has_occupied_neighbor(0, 0))  # diagonal only
        self.assertFalse(board.has_occupied_neighbor(3, 3))

    def test_given_empty_board_when_placing_anywhere_then_allowed(self):
        board = Board()
        board.place(2, 3, 9)
        self.assertEqual(board.at(2, 3), 9)
        self.assertEqual(len(board.occupied()), 1)

    def test_given_occupied_cell_when_placing_then_occupied_error_and_no_change(self):
        board = Board()
        board.place(0, 0, 6)
        before = list(board.cells)
        with self.assertRaises(OccupiedCell):
            board.place(0, 0, 3)
        self.assertEqual(board.cells, before)

    def test_given_isolated_target_when_placing_then_isolated_error_and_no_change(self):
        board = Board()
        board.place(0, 0, 6)
        before = list(board.cells)
        with self.assertRaises(IsolatedPlacement):
            board.place(2, 2, 3)
        self.assertEqual(board.cells, before)

    def test_given_out_of_range_coords_when_placing_then_out_of_bounds(self):
        board = Board()
        with self.assertRaises(OutOfBounds):
            board.place(4, 0, 3)
        with self.assertRaises(OutOfBounds):
            board.check_placement(0, -1)

    def test_given_non_positive_value_when_placing_then_value_error(self):
        with self.assertRaises(ValueError):
            Board().place(0, 0, 0)

    def test_given_full_board_when_queried_then_full(self):
        board = Board(size=2, cells=[2, 3, 5, 7])
        self.assertTrue(board.is_full())
        self.assertFalse(board.is_empty())

    def test_given_board_when_copied_then_independent(self):
        board = Board()
        board.set(0, 0, 4)
        clone = board.copy()
        clone.set(0, 1, 2)
        self.assertIsNone(board.at(0, 1))
        self.assertEqual(clone.at(0, 0), 4)
        self.assertEqual(board, Board(size=4, cells=[4] + [None] * 15))

    def test_given_board_and_marks_when_pretty_then_tiles_dots_and_stars(self):
        board = Board(size=2, cells=[12, None, None, 3])
        txt = board.pretty({(0, 1)})
        lines = txt.splitlines()
        self.assertEqual(len(lines), 2)
        self.assertIn("12", lines[0])
        self.assertIn("*", lines[0])
        self.assertIn(".", lines[1])
        self.assertIn("3", lines[1])


if __name__ == '__main__':
    unittest.main(verbosity=2)
