# -*- coding: utf-8 -*-
"""
The 2048 sliding-tile puzzle with a remote high-score leaderboard.
"""

from .config import LeaderboardConfig
from .envs import GameSession

__all__ = ["GameSession", "LeaderboardConfig"]
