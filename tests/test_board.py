# -*-  coding: utf-8 -*-
"""
Set of test for the grid engine.
"""
from collections import Counter
from unittest import TestCase, main

import numpy as np

from game2048.core.gameboard import (
    add_random_tile,
    merge_line,
    move,
    move_down,
    move_left,
    move_right,
    move_up,
    new_game,
    next_state,
    slide_and_merge,
)
from game2048.core.gamemove import Direction
from game2048.core.grid import SIZE, as_grid, empty_grid

generator = np.random.default_rng(42)


def generate_random_board(size: int = SIZE) -> np.ndarray:
    """Generate a random 2048 game board."""
    board = np.zeros((size, size), dtype=np.int64)
    num_tiles = generator.integers(1, size * size + 1)
    tile_values = generator.choice([2, 4, 8, 16, 32, 64], size=num_tiles)
    indices = generator.choice(size * size, size=num_tiles, replace=False)
    board.flat[indices] = tile_values
    return as_grid(board)


class FixedRandom:
    """Deterministic stand-in for a numpy Generator."""

    def __init__(self, index: int, draw: float):
        self.index = index
        self.draw = draw

    def integers(self, high: int) -> int:
        return self.index % high

    def random(self) -> float:
        return self.draw


class TestGrid(TestCase):
    """Test the board constructors."""

    def test_empty_grid(self):
        """Empty board is SIZE x SIZE zeros and read-only."""
        grid = empty_grid()
        self.assertEqual(grid.shape, (SIZE, SIZE))
        self.assertEqual(np.count_nonzero(grid), 0)
        self.assertFalse(grid.flags.writeable)

    def test_as_grid_copies_input(self):
        """Built board does not alias its source."""
        source = np.zeros((4, 4), dtype=np.int64)
        grid = as_grid(source)
        source[0, 0] = 2
        self.assertEqual(grid[0, 0], 0)

    def test_as_grid_rejects_invalid_values(self):
        """Wrong shapes, negative and non power-of-two values are rejected."""
        with self.assertRaises(ValueError):
            as_grid([[2, 4], [4, 2]])
        with self.assertRaises(ValueError):
            as_grid([[-2, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4])
        with self.assertRaises(ValueError):
            as_grid([[6, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4])
        with self.assertRaises(ValueError):
            as_grid([[1, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4])

    def test_grid_is_read_only(self):
        """Callers cannot modify a board in place."""
        grid = as_grid([[2, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4])
        with self.assertRaises(ValueError):
            grid[0, 0] = 4


class TestMergeLine(TestCase):
    """Test the line reducer."""

    def test_merge_pairs(self):
        """Pairs are merged and the score is the sum of the new tiles."""
        score, result, moved = merge_line(np.array([2, 2, 4, 4]))
        self.assertEqual(score, 12)
        np.testing.assert_array_equal(result, np.array([4, 8, 0, 0]))
        self.assertTrue(moved)

    def test_merge_empty_line(self):
        """All-zero line stays empty and does not move."""
        score, result, moved = merge_line(np.array([0, 0, 0, 0]))
        self.assertEqual(score, 0)
        np.testing.assert_array_equal(result, np.zeros(4))
        self.assertFalse(moved)

    def test_merge_once_per_move(self):
        """A merged tile does not merge again in the same move."""
        score, result, _ = merge_line(np.array([2, 2, 4, 0]))
        self.assertEqual(score, 4)
        np.testing.assert_array_equal(result, np.array([4, 4, 0, 0]))

        score, result, _ = merge_line(np.array([2, 2, 2, 2]))
        self.assertEqual(score, 8)
        np.testing.assert_array_equal(result, np.array([4, 4, 0, 0]))

    def test_merge_leftmost_pair_first(self):
        """Three equal tiles merge the first two."""
        score, result, _ = merge_line(np.array([0, 4, 4, 4]))
        self.assertEqual(score, 8)
        np.testing.assert_array_equal(result, np.array([8, 4, 0, 0]))

    def test_slide_without_merge_counts_as_moved(self):
        """Removing a gap moves the line even without merging."""
        score, result, moved = merge_line(np.array([0, 2, 0, 4]))
        self.assertEqual(score, 0)
        np.testing.assert_array_equal(result, np.array([2, 4, 0, 0]))
        self.assertTrue(moved)

    def test_compacted_line_does_not_move(self):
        """Already compacted distinct tiles do not move."""
        score, result, moved = merge_line(np.array([2, 4, 8, 0]))
        self.assertEqual(score, 0)
        np.testing.assert_array_equal(result, np.array([2, 4, 8, 0]))
        self.assertFalse(moved)

    def test_merge_does_not_mutate_input(self):
        """Input line is left untouched."""
        line = np.array([2, 2, 0, 4])
        merge_line(line)
        np.testing.assert_array_equal(line, np.array([2, 2, 0, 4]))


class TestMoves(TestCase):
    """Test the four directional moves."""

    def setUp(self):
        self.board = as_grid([[2, 2, 4, 4], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])

    def test_move_left_merges_row(self):
        """Left move merges pairs of the first row."""
        result = move_left(self.board)
        np.testing.assert_array_equal(result.grid[0], np.array([4, 8, 0, 0]))
        self.assertTrue(result.moved)
        self.assertEqual(result.gained, 12)

    def test_move_right(self):
        """Right move merges from the right edge."""
        result = move_right(as_grid([[2, 2, 2, 0], [0] * 4, [0] * 4, [0] * 4]))
        np.testing.assert_array_equal(result.grid[0], np.array([0, 0, 2, 4]))
        self.assertEqual(result.gained, 4)

    def test_move_up(self):
        """Up move slides and merges columns toward the top."""
        board = as_grid([[0, 0, 0, 0], [2, 0, 0, 0], [2, 0, 0, 0], [4, 0, 0, 8]])
        result = move_up(board)
        expected = np.array([[4, 0, 0, 8], [4, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        np.testing.assert_array_equal(result.grid, expected)
        self.assertTrue(result.moved)
        self.assertEqual(result.gained, 4)

    def test_move_down(self):
        """Down move merges from the bottom edge."""
        board = as_grid([[2, 0, 0, 0], [2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0]])
        result = move_down(board)
        expected = np.array([[0, 0, 0, 0], [0, 0, 0, 0], [2, 0, 0, 0], [4, 0, 0, 0]])
        np.testing.assert_array_equal(result.grid, expected)
        self.assertEqual(result.gained, 4)

    def test_blocked_move(self):
        """A move that changes nothing reports no move and no gain."""
        board = as_grid([[2, 4, 0, 0], [0] * 4, [0] * 4, [0] * 4])
        result = move_left(board)
        self.assertFalse(result.moved)
        self.assertEqual(result.gained, 0)
        np.testing.assert_array_equal(result.grid, board)

    def test_move_does_not_mutate_input(self):
        """Every direction leaves the input board untouched."""
        original = self.board.copy()
        for direction in Direction:
            result = move(self.board, direction)
            np.testing.assert_array_equal(self.board, original)
            self.assertIsNot(result.grid, self.board)
            self.assertFalse(result.grid.flags.writeable)

    def test_slide_and_merge(self):
        """The entire board is slid and merged to the left."""
        board = as_grid([[2, 2, 4, 4], [0, 2, 2, 4], [2, 0, 0, 2], [2, 2, 2, 2]])
        score, result, moved = slide_and_merge(board)
        expected = np.array([[4, 8, 0, 0], [4, 4, 0, 0], [4, 0, 0, 0], [4, 4, 0, 0]])
        self.assertEqual(score, 28)
        self.assertTrue(moved)
        np.testing.assert_array_equal(result, expected)

    def test_repeated_move_only_merges(self):
        """Repeating a move without spawning never slides again, it can only merge new tiles."""
        for _ in range(50):
            board = generate_random_board()
            for direction in Direction:
                first = move(board, direction)
                second = move(first.grid, direction)
                self.assertEqual(second.moved, second.gained > 0)
                if first.gained == 0:
                    self.assertFalse(second.moved)
                    np.testing.assert_array_equal(second.grid, first.grid)

    def test_repeated_move_settles(self):
        """Repeating a move reaches a board it cannot change within SIZE - 1 more passes."""
        for _ in range(50):
            board = generate_random_board()
            for direction in Direction:
                result = move(board, direction)
                for _ in range(SIZE - 1):
                    result = move(result.grid, direction)
                    if not result.moved:
                        break
                self.assertFalse(result.moved)
                self.assertEqual(result.gained, 0)

    def test_merged_tiles_merge_on_next_move(self):
        """Tiles created by a merge wait for the next move to merge again."""
        board = as_grid([[2, 2, 4, 0], [0] * 4, [0] * 4, [0] * 4])
        first = move_left(board)
        np.testing.assert_array_equal(first.grid[0], np.array([4, 4, 0, 0]))
        self.assertEqual(first.gained, 4)

        second = move_left(first.grid)
        np.testing.assert_array_equal(second.grid[0], np.array([8, 0, 0, 0]))
        self.assertTrue(second.moved)
        self.assertEqual(second.gained, 8)

        third = move_left(second.grid)
        self.assertFalse(third.moved)

    def test_moved_iff_board_changed(self):
        """The moved flag matches a cell-by-cell comparison in every direction."""
        for _ in range(50):
            board = generate_random_board()
            for direction in Direction:
                result = move(board, direction)
                self.assertEqual(result.moved, not np.array_equal(result.grid, board))

    def test_merge_conservation(self):
        """Each merge replaces {v, v} with {2v} and the gain sums the new tiles."""
        for _ in range(50):
            board = generate_random_board()
            for direction in Direction:
                result = move(board, direction)
                before = Counter(int(v) for v in board.flat if v)
                after = Counter(int(v) for v in result.grid.flat if v)
                self.assertEqual(int(board.sum()), int(result.grid.sum()))

                # ##>: Walk values upward: tiles of value v that disappeared were merged into 2v.
                gained = 0
                carried = 0
                for value in sorted(set(before) | set(after)):
                    available = before[value] + carried
                    merged_pairs = (available - after[value]) // 2
                    self.assertGreaterEqual(merged_pairs, 0)
                    self.assertEqual(available - after[value], merged_pairs * 2)
                    gained += merged_pairs * value * 2
                    carried = merged_pairs
                self.assertEqual(carried, 0)
                self.assertEqual(result.gained, gained)


class TestSpawn(TestCase):
    """Test tile spawning and the start of a game."""

    def test_spawn_adds_single_tile(self):
        """Spawn adds exactly one 2 or 4 on an empty cell."""
        rng = np.random.default_rng(7)
        for _ in range(50):
            board = generate_random_board()
            spawned = add_random_tile(board, rng)
            changed = np.argwhere(spawned != board)
            if board.all():
                self.assertEqual(len(changed), 0)
                continue
            self.assertEqual(len(changed), 1)
            row, col = changed[0]
            self.assertEqual(board[row, col], 0)
            self.assertIn(spawned[row, col], (2, 4))

    def test_spawn_uses_random_source(self):
        """Cell and value come from the injected source."""
        board = empty_grid()
        spawned = add_random_tile(board, FixedRandom(index=5, draw=0.95))
        self.assertEqual(spawned[1, 1], 4)
        self.assertEqual(np.count_nonzero(spawned), 1)

        spawned = add_random_tile(board, FixedRandom(index=0, draw=0.1))
        self.assertEqual(spawned[0, 0], 2)

    def test_spawn_full_board(self):
        """Full board is returned unchanged."""
        board = as_grid([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]])
        spawned = add_random_tile(board, FixedRandom(index=0, draw=0.0))
        np.testing.assert_array_equal(spawned, board)

    def test_spawn_does_not_mutate_input(self):
        """The input board keeps its empty cells."""
        board = empty_grid()
        add_random_tile(board, np.random.default_rng(0))
        self.assertEqual(np.count_nonzero(board), 0)

    def test_new_game(self):
        """New game has exactly two tiles valued 2 or 4."""
        for seed in range(100):
            grid = new_game(np.random.default_rng(seed))
            self.assertEqual(np.count_nonzero(grid), 2)
            self.assertTrue(np.all(np.isin(grid[grid != 0], [2, 4])))

    def test_new_game_never_reuses_a_cell(self):
        """Both starting tiles land on different cells even when the source repeats itself."""
        grid = new_game(FixedRandom(index=0, draw=0.0))
        self.assertEqual(np.count_nonzero(grid), 2)

    def test_next_state_valid_move_spawns(self):
        """A valid move merges then spawns one tile."""
        board = as_grid([[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4])
        grid, reward, moved = next_state(board, Direction.LEFT, np.random.default_rng(42))
        self.assertTrue(moved)
        self.assertEqual(reward, 4)
        self.assertEqual(grid[0, 0], 4)
        self.assertEqual(np.count_nonzero(grid), 2)

    def test_next_state_invalid_move(self):
        """An invalid move neither scores nor spawns."""
        board = as_grid([[2, 0, 0, 0], [4, 0, 0, 0], [8, 0, 0, 0], [16, 0, 0, 0]])
        grid, reward, moved = next_state(board, Direction.LEFT, np.random.default_rng(42))
        self.assertFalse(moved)
        self.assertEqual(reward, 0)
        np.testing.assert_array_equal(grid, board)


if __name__ == "__main__":
    main()
