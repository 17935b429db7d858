# -*- coding: utf-8 -*-
"""
Client side of the high-score leaderboard.

It includes the `LeaderboardClient` HTTP client, the `Score` record, the errors raised on failure and helpers to
display the ranking.
"""

from .client import LeaderboardClient
from .exceptions import LeaderboardError, LeaderboardNetworkError, LeaderboardRequestError, LeaderboardTimeoutError
from .models import Score
from .table import format_leaderboard, leaderboard_rows

__all__ = [
    "LeaderboardClient",
    "LeaderboardError",
    "LeaderboardNetworkError",
    "LeaderboardRequestError",
    "LeaderboardTimeoutError",
    "Score",
    "format_leaderboard",
    "leaderboard_rows",
]
