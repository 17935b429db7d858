"""
HTTP client for the high-score leaderboard server.

The server exposes ``GET /api/scores?limit=<n>`` returning ``{"scores": [...]}`` ordered by score,
``POST /api/scores`` taking ``{"name", "score"}`` and returning the stored record, and ``GET /api/healthz``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from game2048.config import LeaderboardConfig
from game2048.leaderboard.exceptions import (
    LeaderboardNetworkError,
    LeaderboardRequestError,
    LeaderboardTimeoutError,
)
from game2048.leaderboard.models import Score

logger = logging.getLogger(__name__)

# ##>: Same limit the server enforces on player names.
MAX_NAME_LENGTH = 50


def _error_message(response: httpx.Response, default: str) -> str:
    """Extract the ``error`` field of a failed response, falling back to ``default``."""
    try:
        payload = response.json()
    except ValueError:
        return default
    if isinstance(payload, dict) and payload.get('error'):
        return str(payload['error'])
    return default


class LeaderboardClient:
    """
    Synchronous leaderboard client built on ``httpx.Client``.

    Parameters
    ----------
    base_url : str
        Root URL of the leaderboard server.
    timeout : float, optional
        Request timeout in seconds (default is 10).
    client : httpx.Client, optional
        Pre-configured client, e.g. with a mock transport. It is not closed by ``close()``.

    Examples
    --------
    >>> with LeaderboardClient('http://localhost:8080') as leaderboard:
    ...     top = leaderboard.get_top_scores(limit=5)
    """

    def __init__(self, base_url: str, timeout: float = 10.0, client: httpx.Client | None = None):
        self.base_url = base_url.rstrip('/')
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, config: LeaderboardConfig, client: httpx.Client | None = None) -> LeaderboardClient:
        """Create a client from a ``LeaderboardConfig``."""
        return cls(config.base_url, timeout=config.timeout, client=client)

    def __enter__(self) -> LeaderboardClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f'{self.base_url}{path}'
        logger.debug('%s %s', method, url)
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as error:
            raise LeaderboardTimeoutError(f'Request timed out: {error!s}') from error
        except httpx.RequestError as error:
            raise LeaderboardNetworkError(f'Network error: {error!s}') from error
        logger.debug('%s %s -> %d', method, url, response.status_code)
        return response

    def get_top_scores(self, limit: int = 10) -> list[Score]:
        """
        Fetch the best scores.

        Parameters
        ----------
        limit : int, optional
            Maximum number of scores to return (default is 10).

        Returns
        -------
        list[Score]
            Scores in the order served, best first.

        Raises
        ------
        LeaderboardRequestError
            If the server answers with a non-success status or an unreadable body.
        LeaderboardNetworkError
            If the server cannot be reached.
        """
        response = self._request('GET', '/api/scores', params={'limit': limit})
        if not response.is_success:
            raise LeaderboardRequestError(
                f'Failed to fetch scores: {response.status_code}', status_code=response.status_code
            )

        try:
            return [Score.from_json(item) for item in response.json().get('scores') or []]
        except (ValueError, AttributeError) as error:
            raise LeaderboardRequestError(
                f'Invalid scores payload: {error!s}', status_code=response.status_code
            ) from error

    def post_score(self, name: str, score: int) -> Score:
        """
        Submit a finished game.

        Parameters
        ----------
        name : str
            Player name. Surrounding whitespace is removed.
        score : int
            Final score, non-negative.

        Returns
        -------
        Score
            The record persisted by the server, including its identifier.

        Raises
        ------
        ValueError
            If the name is blank or longer than 50 characters, or the score is negative.
        LeaderboardRequestError
            If the server rejects the submission. The message is the server's ``error`` field when present.
        LeaderboardNetworkError
            If the server cannot be reached.
        """
        name = name.strip()
        if not name:
            raise ValueError('name is required')
        if len(name) > MAX_NAME_LENGTH:
            raise ValueError(f'name too long (max {MAX_NAME_LENGTH})')
        if score < 0:
            raise ValueError('score must be non-negative')

        response = self._request('POST', '/api/scores', json=Score(name=name, score=score).to_json())
        if not response.is_success:
            message = _error_message(response, f'Failed to submit: {response.status_code}')
            raise LeaderboardRequestError(message, status_code=response.status_code)

        try:
            return Score.from_json(response.json())
        except (ValueError, AttributeError) as error:
            raise LeaderboardRequestError(
                f'Invalid score payload: {error!s}', status_code=response.status_code
            ) from error

    def health(self) -> bool:
        """Return True if the server reports itself healthy."""
        try:
            response = self._request('GET', '/api/healthz')
            return response.is_success and response.json().get('status') == 'ok'
        except (LeaderboardNetworkError, ValueError, AttributeError) as error:
            logger.debug('Health check failed: %s', error)
            return False
