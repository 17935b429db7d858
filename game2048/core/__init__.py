# -*- coding: utf-8 -*-
"""
This module provides the grid engine of the 2048 game.

It includes the board representation, the line reducer, the four directional moves, tile spawning, the start of a
new game and the checks that tell whether a move is still possible.
"""

from .gameboard import (
    TILE_SPAWN_PROBS,
    MoveResult,
    add_random_tile,
    is_done,
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
from .gamemove import Direction, can_move, illegal_actions, legal_actions, legal_actions_mask
from .grid import SIZE, as_grid, empty_grid, freeze

__all__ = [
    "SIZE",
    "TILE_SPAWN_PROBS",
    "Direction",
    "MoveResult",
    "as_grid",
    "empty_grid",
    "freeze",
    "merge_line",
    "slide_and_merge",
    "move",
    "move_left",
    "move_up",
    "move_right",
    "move_down",
    "add_random_tile",
    "new_game",
    "next_state",
    "is_done",
    "can_move",
    "legal_actions",
    "legal_actions_mask",
    "illegal_actions",
]
