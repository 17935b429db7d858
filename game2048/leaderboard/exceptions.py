"""
Errors raised by the leaderboard client.
"""

from __future__ import annotations


class LeaderboardError(Exception):
    """
    Base class for every leaderboard failure.

    Parameters
    ----------
    message : str
        Human readable description, suitable for display to the player.
    status_code : int, optional
        HTTP status returned by the server, when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class LeaderboardRequestError(LeaderboardError):
    """
    The server answered with a non-success status.
    """


class LeaderboardNetworkError(LeaderboardError):
    """
    The request never got a response (connection refused, DNS failure, ...).
    """


class LeaderboardTimeoutError(LeaderboardNetworkError):
    """
    The request timed out.
    """
