"""
Core functionality of the 2048 game: sliding and merging lines, applying moves, spawning tiles and detecting the
end of a game.

Every function here treats boards as values. Inputs are never modified and every returned board is a new
read-only array.
"""

from typing import NamedTuple, Protocol

from numpy import argwhere, array, array_equal, ndarray, rot90, zeros_like
from numpy.random import default_rng

from game2048.core.gamemove import Direction, can_move
from game2048.core.grid import empty_grid, freeze

# ##>: Tile spawn probabilities for 2048 game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}


class RandomSource(Protocol):
    """
    Subset of ``numpy.random.Generator`` used to spawn tiles.
    """

    def integers(self, high: int) -> int: ...

    def random(self) -> float: ...


class MoveResult(NamedTuple):
    """
    Outcome of a single move.

    Attributes
    ----------
    grid : ndarray
        The board after the move, before any new tile is spawned.
    moved : bool
        Whether at least one cell changed.
    gained : int
        Sum of the tiles created by merges during the move.
    """

    grid: ndarray
    moved: bool
    gained: int


def merge_line(line: ndarray) -> tuple[int, ndarray, bool]:
    """
    Slide a line toward its first cell, merge adjacent equal values and compute the score.

    Parameters
    ----------
    line : ndarray
        A 1D array holding one row or column, ordered so that the move travels toward index 0.

    Returns
    -------
    score : int
        The total value of the tiles created by merging.
    merged_line : ndarray
        A new array of the same length, zero padded on the right.
    moved : bool
        Whether the merged line differs from the input at any position.

    Notes
    -----
    - Zeros (empty cells) are removed before merging.
    - Merging occurs from the start of the line towards the end.
    - Each value can only be merged once per call, so ``[2, 2, 4]`` gives ``[4, 4, 0]``.
    """
    non_zero = line[line != 0]
    result = []
    score = 0

    # ##: Iterate over the compacted line and merge pairs.
    i = 0
    while i < len(non_zero):
        if i + 1 < len(non_zero) and non_zero[i] == non_zero[i + 1]:
            merged = int(non_zero[i]) * 2
            result.append(merged)
            score += merged
            i += 2
        else:
            result.append(int(non_zero[i]))
            i += 1

    merged_line = zeros_like(line)
    merged_line[: len(result)] = result
    return score, merged_line, not array_equal(line, merged_line)


def slide_and_merge(board: ndarray) -> tuple[int, ndarray, bool]:
    """
    Slide the game board to the left, merge adjacent cells, and compute the score.

    Parameters
    ----------
    board : ndarray
        The game board represented as a 2D NumPy array.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_board : ndarray
        A new board after sliding and merging.
    moved : bool
        Whether any row changed.

    Notes
    -----
    For other directions, rotate the board before calling this function.
    """
    result = zeros_like(board)
    score = 0
    moved = False

    for i, row in enumerate(board):
        score_row, merged_row, moved_row = merge_line(row)
        score += score_row
        moved = moved or moved_row
        result[i] = merged_row

    return score, result, moved


def move(grid: ndarray, direction: Direction | int) -> MoveResult:
    """
    Apply a move to the board without adding a new tile.

    Parameters
    ----------
    grid : ndarray
        The current state of the game board.
    direction : Direction or int
        The move to apply (0: left, 1: up, 2: right, 3: down).

    Returns
    -------
    MoveResult
        The new board, whether it changed and the points gained.

    Notes
    -----
    Rotating by ``direction`` quarter turns lays every column or row out so that the move becomes a left
    slide, which lets a single line reducer serve the four directions.
    """
    direction = Direction(direction)
    gained, updated, moved = slide_and_merge(rot90(grid, k=direction))
    return MoveResult(freeze(rot90(updated, k=-direction).copy()), moved, gained)


def move_left(grid: ndarray) -> MoveResult:
    return move(grid, Direction.LEFT)


def move_up(grid: ndarray) -> MoveResult:
    return move(grid, Direction.UP)


def move_right(grid: ndarray) -> MoveResult:
    return move(grid, Direction.RIGHT)


def move_down(grid: ndarray) -> MoveResult:
    return move(grid, Direction.DOWN)


def add_random_tile(grid: ndarray, rng: RandomSource | None = None) -> ndarray:
    """
    Place one new tile (2 or 4) in a random empty cell.

    Parameters
    ----------
    grid : ndarray
        The current state of the game board. It is not modified.
    rng : RandomSource, optional
        Source of randomness, typically a ``numpy.random.Generator``. A fresh generator is created when omitted.

    Returns
    -------
    ndarray
        A new board with one more tile, or an unchanged copy if the board has no empty cell.

    Notes
    -----
    - The cell is chosen uniformly among the empty ones.
    - The new tile has a 90% chance of being 2 and a 10% chance of being 4.
    """
    available_cells = argwhere(grid == 0)
    new_grid = array(grid, copy=True)

    # ##: Only if there are still available places.
    if len(available_cells):
        rng = default_rng() if rng is None else rng
        row, col = available_cells[int(rng.integers(len(available_cells)))]
        new_grid[row, col] = 2 if rng.random() < TILE_SPAWN_PROBS[2] else 4

    return freeze(new_grid)


def new_game(rng: RandomSource | None = None) -> ndarray:
    """
    Create the starting board of a game.

    Parameters
    ----------
    rng : RandomSource, optional
        Source of randomness shared by both spawns.

    Returns
    -------
    ndarray
        An empty board with two tiles. The second spawn sees the first tile, so both land on different cells.
    """
    rng = default_rng() if rng is None else rng
    return add_random_tile(add_random_tile(empty_grid(), rng), rng)


def next_state(grid: ndarray, direction: Direction | int, rng: RandomSource | None = None) -> tuple[ndarray, int, bool]:
    """
    Compute the next board and reward after applying a move.

    Parameters
    ----------
    grid : ndarray
        The current state of the game board.
    direction : Direction or int
        The move to apply (0: left, 1: up, 2: right, 3: down).
    rng : RandomSource, optional
        Source of randomness for the spawned tile.

    Returns
    -------
    new_grid : ndarray
        The board after the move and, if it changed, one new tile.
    reward : int
        The points gained by the move.
    moved : bool
        Whether the move changed the board.

    Notes
    -----
    If the move results in no change, the reward is 0 and no new tile is added.
    """
    result = move(grid, direction)
    if not result.moved:
        return result.grid, 0, False
    return add_random_tile(result.grid, rng), result.gained, True


def is_done(grid: ndarray) -> bool:
    """
    Check if the game has ended.

    Parameters
    ----------
    grid : ndarray
        The current state of the game board.

    Returns
    -------
    bool
        True if no move can change the board, False otherwise.
    """
    return not can_move(grid)
