"""
Records exchanged with the leaderboard server.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Score:
    """
    A leaderboard entry.

    Attributes
    ----------
    name : str
        Player name.
    score : int
        Final score of the game.
    id : int, optional
        Server-assigned identifier, absent before the score is persisted.
    created_at : str, optional
        Server timestamp, kept as served.
    """

    name: str
    score: int
    id: int | None = None
    created_at: str | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Score:
        """
        Build a score from a decoded JSON object.

        Parameters
        ----------
        data : Mapping[str, Any]
            Object with at least ``name`` and ``score`` keys.

        Returns
        -------
        Score
            The parsed record.

        Raises
        ------
        ValueError
            If a required key is missing, the name is not a string or the score is not an integer.
        """
        if not isinstance(data.get('name'), str):
            raise ValueError(f'invalid score record: {data!r}')
        try:
            return cls(
                name=data['name'],
                score=int(data['score']),
                id=None if data.get('id') is None else int(data['id']),
                created_at=data.get('created_at'),
            )
        except (KeyError, TypeError, ValueError) as error:
            raise ValueError(f'invalid score record: {data!r}') from error

    def to_json(self) -> dict[str, Any]:
        """Payload sent when submitting this score."""
        return {'name': self.name, 'score': self.score}
