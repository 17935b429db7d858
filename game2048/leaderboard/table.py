"""Tabular view of leaderboard scores."""

from collections.abc import Sequence

from game2048.leaderboard.models import Score

EMPTY_LEADERBOARD = 'No scores yet. Be the first!'


def leaderboard_rows(scores: Sequence[Score]) -> list[tuple[int, str, int]]:
    """
    Rank scores in the order they were served.

    Parameters
    ----------
    scores : Sequence[Score]
        Scores, best first.

    Returns
    -------
    list[tuple[int, str, int]]
        One ``(rank, name, score)`` row per entry, ranks starting at 1.
    """
    return [(rank, entry.name, entry.score) for rank, entry in enumerate(scores, start=1)]


def format_leaderboard(scores: Sequence[Score]) -> str:
    """Render scores as a tab-separated table with a header row."""
    if not scores:
        return EMPTY_LEADERBOARD

    lines = [' \t'.join(('#', 'Name', 'Score'))]
    lines.extend(' \t'.join(map(str, row)) for row in leaderboard_rows(scores))
    return '\n'.join(lines)
