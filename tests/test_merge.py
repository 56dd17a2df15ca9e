import unittest

from game import Board, DIVIDE, EQUAL, resolve


def make_board(placed):
    board = Board()
    for (r, c), v in placed.items():
        board.set(r, c, v)
    return board


class TestMergeEngine(unittest.TestCase):
    def test_given_empty_grid_when_placing_lone_tile_then_no_merge(self):
        board = Board()
        board.place(0, 0, 6)
        res = resolve(board, 0, 0)
        self.assertFalse(res.merged)
        self.assertEqual(res.points, 0)
        self.assertEqual(board.occupied(), [(0, 0)])
        self.assertEqual(board.at(0, 0), 6)

    def test_given_eight_when_placing_four_beside_then_quotient_two_and_four_points(self):
        board = make_board({(1, 1): 8})
        board.place(1, 0, 4)
        res = resolve(board, 1, 0)
        self.assertEqual(res.points, 4)
        self.assertIsNone(board.at(1, 0))
        self.assertEqual(board.at(1, 1), 2)
        self.assertEqual(res.focus, (1, 1))
        self.assertEqual(len(res.steps), 1)
        self.assertEqual(res.steps[0].kind, DIVIDE)
        self.assertEqual(res.steps[0].message, "8 ÷ 4 = 2 (+4)")

    def test_given_equal_pair_when_resolving_then_both_cleared_and_double_value_awarded(self):
        for a in (2, 7, 35):
            board = make_board({(0, 1): a})
            board.place(0, 0, a)
            res = resolve(board, 0, 0)
            self.assertEqual(res.points, 2 * a)
            self.assertTrue(board.is_empty())
            self.assertEqual(res.steps[0].kind, EQUAL)
            self.assertEqual(res.focus, (0, 0))

    def test_given_double_value_pair_when_resolving_then_one_cell_holds_two(self):
        for b in (3, 5, 12):
            board = make_board({(2, 2): b})
            board.place(2, 1, 2 * b)
            res = resolve(board, 2, 1)
            self.assertEqual(res.points, 2 * 2)
            self.assertEqual(board.occupied(), [(2, 1)])
            self.assertEqual(board.at(2, 1), 2)

    def test_given_coprime_neighbor_when_resolving_then_nothing_happens(self):
        board = make_board({(0, 1): 6})
        board.place(0, 0, 4)
        res = resolve(board, 0, 0)
        self.assertEqual(res.points, 0)
        self.assertEqual(board.at(0, 0), 4)
        self.assertEqual(board.at(0, 1), 6)

    def test_given_quotient_meeting_divisible_neighbor_when_resolving_then_cascade_continues(self):
        # 24 / 4 = 6 lands on (1,1); 6 / 3 = 2 stays there.
        board = make_board({(1, 1): 24, (1, 2): 3})
        board.place(1, 0, 4)
        res = resolve(board, 1, 0)
        self.assertEqual([s.kind for s in res.steps], [DIVIDE, DIVIDE])
        self.assertEqual(res.points, 12 + 4)
        self.assertEqual(board.occupied(), [(1, 1)])
        self.assertEqual(board.at(1, 1), 2)
        self.assertEqual(res.focus, (1, 1))

    def test_given_quotient_equal_to_neighbor_when_resolving_then_cascade_ends_in_annihilation(self):
        board = make_board({(1, 1): 12, (1, 2): 3})
        board.place(1, 0, 4)
        res = resolve(board, 1, 0)
        self.assertEqual([s.kind for s in res.steps], [DIVIDE, EQUAL])
        self.assertEqual(res.points, 6 + 6)
        self.assertTrue(board.is_empty())

    def test_given_smaller_placed_tile_when_dividing_then_focus_moves_to_neighbor(self):
        board = make_board({(0, 1): 20, (0, 2): 2})
        board.place(0, 0, 5)
        res = resolve(board, 0, 0)
        # 20 / 5 = 4 at (0,1), then 4 / 2 = 2 at (0,1)
        self.assertEqual(res.points, 8 + 4)
        self.assertEqual(board.occupied(), [(0, 1)])
        self.assertEqual(board.at(0, 1), 2)
        self.assertEqual(res.focus, (0, 1))

    def test_given_several_qualifying_neighbors_when_resolving_then_up_fires_before_right(self):
        board = make_board({(0, 1): 3, (1, 2): 6})
        board.place(1, 1, 6)
        res = resolve(board, 1, 1)
        first = res.steps[0]
        self.assertEqual(first.kind, DIVIDE)
        self.assertEqual(first.neighbor, (0, 1))
        # 6/3 = 2 at (1,1); then 6/2 = 3 moves focus right to (1,2)
        self.assertEqual(res.points, 4 + 6)
        self.assertEqual(board.occupied(), [(1, 2)])
        self.assertEqual(board.at(1, 2), 3)
        self.assertEqual(res.focus, (1, 2))

    def test_given_cascade_when_resolving_then_points_equal_sum_of_steps(self):
        board = make_board({(1, 1): 24, (1, 2): 3, (0, 1): 5})
        board.place(1, 0, 4)
        res = resolve(board, 1, 0)
        self.assertEqual(res.points, sum(s.points for s in res.steps))
        for s in res.steps:
            if s.kind == EQUAL:
                self.assertEqual(s.points, s.focus_value + s.neighbor_value)
            else:
                self.assertEqual(s.points, s.result * 2)


if __name__ == '__main__':
    unittest.main(verbosity=2)
