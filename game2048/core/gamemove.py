"""
Game move utilities for the 2048 game, providing the move directions and the checks that tell whether a move can
change the board.
"""

from enum import IntEnum

from numpy import ndarray


class Direction(IntEnum):
    """
    Move directions.

    The value of each direction is the number of counter-clockwise quarter turns that brings it to a left move.
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


def legal_actions_mask(state: ndarray) -> tuple[bool, bool, bool, bool]:
    """
    Get a boolean mask for all four directions in a single pass.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    tuple[bool, bool, bool, bool]
        Mask for (left, up, right, down) where True means the move changes the board.

    Notes
    -----
    A direction is legal when some tile has an empty cell on its travel side, or when two adjacent
    non-empty tiles on that axis are equal.
    """
    # ##>: Horizontal pairs serve left and right, vertical pairs serve up and down.
    left_cols, right_cols = state[:, :-1], state[:, 1:]
    h_can_merge = (left_cols != 0) & (left_cols == right_cols)

    top_rows, bottom_rows = state[:-1, :], state[1:, :]
    v_can_merge = (top_rows != 0) & (top_rows == bottom_rows)

    left = (left_cols == 0) & (right_cols != 0)
    right = (right_cols == 0) & (left_cols != 0)
    up = (top_rows == 0) & (bottom_rows != 0)
    down = (bottom_rows == 0) & (top_rows != 0)

    return (
        bool(left.any() or h_can_merge.any()),
        bool(up.any() or v_can_merge.any()),
        bool(right.any() or h_can_merge.any()),
        bool(down.any() or v_can_merge.any()),
    )


def illegal_actions(state: ndarray) -> list[Direction]:
    """
    Determine the directions that leave the board unchanged.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    list[Direction]
        Directions whose move would not alter the board.
    """
    mask = legal_actions_mask(state)
    return [direction for direction in Direction if not mask[direction]]


def legal_actions(state: ndarray) -> list[Direction]:
    """
    Determine the directions that change the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    list[Direction]
        Directions whose move would alter the board.
    """
    mask = legal_actions_mask(state)
    return [direction for direction in Direction if mask[direction]]


def can_move(board: ndarray) -> bool:
    """
    Check if any move could still change the board.

    Parameters
    ----------
    board : ndarray
        The game board to check.

    Returns
    -------
    bool
        True if an empty cell exists or two horizontally or vertically adjacent cells hold the same value.

    Notes
    -----
    - Any empty cell is enough: equal adjacent pairs only matter once the board is full, so the pair check
      never needs to exclude zeros.
    - An empty board counts as movable even though ``legal_actions`` is empty for it; the two agree on every
      board holding at least one tile.
    """
    if not board.all():
        return True

    # ##: Full board, look for a mergeable pair on either axis.
    return bool((board[:, :-1] == board[:, 1:]).any() or (board[:-1, :] == board[1:, :]).any())
