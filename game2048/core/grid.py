"""
Grid representation for the 2048 game: a fixed-size square board of tile values stored as a read-only numpy array.
"""

from collections.abc import Sequence

from numpy import all as np_all
from numpy import array, int64, ndarray, zeros

# ##>: Board side length, fixed for the whole game.
SIZE = 4


def freeze(board: ndarray) -> ndarray:
    """
    Mark a board as read-only and return it.

    Parameters
    ----------
    board : ndarray
        The board to freeze. Its ``writeable`` flag is cleared in place.

    Returns
    -------
    ndarray
        The same array, now read-only.
    """
    board.flags.writeable = False
    return board


def empty_grid() -> ndarray:
    """
    Create an empty game board.

    Returns
    -------
    ndarray
        A read-only ``SIZE x SIZE`` board filled with zeros.
    """
    return freeze(zeros((SIZE, SIZE), dtype=int64))


def as_grid(values: Sequence[Sequence[int]] | ndarray) -> ndarray:
    """
    Build a game board from nested sequences, rejecting values outside the game rules.

    Parameters
    ----------
    values : Sequence[Sequence[int]] or ndarray
        Row-major tile values. Each value must be 0 (empty) or a power of two greater than 1.

    Returns
    -------
    ndarray
        A new read-only ``SIZE x SIZE`` board. The input is copied, never aliased.

    Raises
    ------
    ValueError
        If the shape is not ``SIZE x SIZE`` or a value is negative or not a power of two.
    """
    board = array(values, dtype=int64, copy=True)
    if board.shape != (SIZE, SIZE):
        raise ValueError(f'grid must be {SIZE}x{SIZE}, got shape {board.shape}')

    if not np_all(board >= 0):
        raise ValueError('grid values must be non-negative')

    # ##: A tile is a power of two iff it shares no bit with its predecessor; 1 is not a valid tile.
    tiles = board[board != 0]
    if not np_all((tiles > 1) & ((tiles & (tiles - 1)) == 0)):
        raise ValueError('grid values must be 0 or a power of two greater than 1')

    return freeze(board)
