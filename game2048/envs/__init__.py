# -*- coding: utf-8 -*-
"""
Python implementation of a 2048 game session.

This module provides the `GameSession` class, which plays one game at a time and submits its score to the
leaderboard.
"""

from .session import GameSession, SubmissionState

__all__ = ["GameSession", "SubmissionState"]
