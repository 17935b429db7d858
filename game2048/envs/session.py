"""A game of 2048 played by a person, with its score submitted to the leaderboard."""

from __future__ import annotations

import logging
from enum import Enum

from numpy import ndarray
from numpy.random import Generator, default_rng

from game2048.core.gameboard import add_random_tile, move, new_game
from game2048.core.gamemove import Direction, can_move
from game2048.leaderboard.client import LeaderboardClient
from game2048.leaderboard.exceptions import LeaderboardError
from game2048.leaderboard.models import Score

logger = logging.getLogger(__name__)


class SubmissionState(Enum):
    """Progress of the score submission for the current game."""

    IDLE = 'idle'
    SUBMITTING = 'submitting'
    SUBMITTED = 'submitted'
    FAILED = 'failed'


class GameSession:
    """
    2048 game session.

    This class drives one game at a time: it applies the player's moves, spawns tiles, keeps the score, detects
    the end of the game and submits the final score to the leaderboard at most once.
    """

    # ##: All Actions.
    ACTIONS = {'left': Direction.LEFT, 'up': Direction.UP, 'right': Direction.RIGHT, 'down': Direction.DOWN}

    def __init__(self, leaderboard: LeaderboardClient | None = None, limit: int = 10, seed: int | None = None):
        """
        Initialize the session and start a first game.

        Parameters
        ----------
        leaderboard : LeaderboardClient, optional
            Client used to read and submit scores. Without one the session plays offline.
        limit : int, optional
            Number of scores to keep in the leaderboard snapshot (default is 10).
        seed : int, optional
            Seed of the session random generator.
        """
        self._leaderboard = leaderboard
        self._limit = limit
        self._rng: Generator = default_rng(seed)

        self.scores: list[Score] = []
        self.error: str | None = None
        self.submission = SubmissionState.IDLE

        self.reset()

    @property
    def grid(self) -> ndarray:
        """The current board, read-only."""
        return self._grid

    @property
    def score(self) -> int:
        """Points accumulated since the start of the game."""
        return self._score

    @property
    def is_finished(self) -> bool:
        """True once no move can change the board."""
        return self._finished

    def reset(self, seed: int | None = None) -> ndarray:
        """
        Start a new game.

        Parameters
        ----------
        seed : int, optional
            Reseed the session generator before placing the two starting tiles.

        Returns
        -------
        ndarray
            The new board.
        """
        if seed is not None:
            self._rng = default_rng(seed)

        self._grid = new_game(self._rng)
        self._score = 0
        self._finished = not can_move(self._grid)
        self.submission = SubmissionState.IDLE
        self.error = None
        return self._grid

    def step(self, direction: Direction | int) -> tuple[ndarray, int, bool]:
        """
        Apply the player's move.

        Parameters
        ----------
        direction : Direction or int
            The move to apply (0: left, 1: up, 2: right, 3: down).

        Returns
        -------
        tuple[ndarray, int, bool]
            The board, the points gained by this move and whether the game is over.

        Notes
        -----
        - Moves are ignored once the game is over.
        - A new tile is spawned only after a move that changed the board.
        - A move that changes nothing still ends the game when no other move is possible.
        """
        if self._finished:
            return self._grid, 0, True

        result = move(self._grid, direction)
        if result.moved:
            self._grid = add_random_tile(result.grid, self._rng)
            self._score += result.gained
        self._finished = not can_move(self._grid)

        if self._finished:
            logger.info('Game over with score %d', self._score)
        return self._grid, result.gained, self._finished

    def refresh_leaderboard(self) -> list[Score]:
        """
        Reload the leaderboard snapshot.

        Returns
        -------
        list[Score]
            The snapshot. When the server cannot be read the previous snapshot is kept.
        """
        if self._leaderboard is None:
            return self.scores

        try:
            self.scores = self._leaderboard.get_top_scores(self._limit)
        except LeaderboardError as error:
            logger.warning('Could not load leaderboard: %s', error)
        return self.scores

    def submit_score(self, name: str) -> Score | None:
        """
        Submit the final score of a finished game.

        Parameters
        ----------
        name : str
            Player name. Surrounding whitespace is removed.

        Returns
        -------
        Score or None
            The stored record, or None if the score was already submitted, is being submitted, or the
            submission failed. A failure leaves the session in ``SubmissionState.FAILED`` with the message in
            ``error``; the caller may try again.

        Raises
        ------
        ValueError
            If the game is still running, no leaderboard is configured, or the name is blank.
        """
        if not self._finished:
            raise ValueError('the game is not over')
        if self._leaderboard is None:
            raise ValueError('no leaderboard configured')
        if self.submission in (SubmissionState.SUBMITTING, SubmissionState.SUBMITTED):
            return None

        name = name.strip()
        if not name:
            raise ValueError('name is required')

        self.submission = SubmissionState.SUBMITTING
        self.error = None
        try:
            record = self._leaderboard.post_score(name, self._score)
        except (LeaderboardError, ValueError) as error:
            self.submission = SubmissionState.FAILED
            self.error = getattr(error, 'message', None) or str(error) or 'Failed to submit score'
            logger.warning('Score submission failed: %s', self.error)
            return None

        self.submission = SubmissionState.SUBMITTED
        logger.info('Submitted score %d for %s', record.score, record.name)
        self.refresh_leaderboard()
        return record

    def render(self) -> None:
        """
        Render the game board. This method prints the score and the current board to the console.
        """
        print(f'Score: {self._score}' + (' (game over)' if self._finished else ''))
        for row in self._grid.tolist():
            print(' \t'.join(map(str, row)))
