# -*- coding: utf-8 -*-
"""
Configuration for this project.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

# ##: Bounds accepted by the server for the number of scores returned.
MIN_LIMIT = 1
MAX_LIMIT = 100


@dataclass(frozen=True)
class LeaderboardConfig:
    """
    Leaderboard connection settings.

    Attributes
    ----------
    base_url : str
        Root URL of the leaderboard server.
    timeout : float
        Request timeout in seconds.
    limit : int
        Number of scores shown in the leaderboard, between 1 and 100.
    """

    base_url: str = 'http://localhost:8080'
    timeout: float = 10.0
    limit: int = 10

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError(f'timeout must be positive, got {self.timeout}')
        if not MIN_LIMIT <= self.limit <= MAX_LIMIT:
            raise ValueError(f'limit must be between {MIN_LIMIT} and {MAX_LIMIT}, got {self.limit}')

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LeaderboardConfig:
        """
        Read the configuration from environment variables.

        Parameters
        ----------
        environ : Mapping[str, str], optional
            Variables to read from (default is ``os.environ``).

        Returns
        -------
        LeaderboardConfig
            Settings from ``GAME2048_API_URL``, ``GAME2048_TIMEOUT`` and ``GAME2048_LEADERBOARD_LIMIT``, with
            defaults for the missing ones.

        Raises
        ------
        ValueError
            If a variable holds an invalid value.
        """
        environ = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            base_url=environ.get('GAME2048_API_URL') or defaults.base_url,
            timeout=float(environ.get('GAME2048_TIMEOUT') or defaults.timeout),
            limit=int(environ.get('GAME2048_LEADERBOARD_LIMIT') or defaults.limit),
        )
