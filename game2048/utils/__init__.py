# -*- coding: utf-8 -*-
"""
This module provides the `WindowBoard` class, a Matplotlib window that displays the game board.
"""

from .windows import WindowBoard

__all__ = ["WindowBoard"]
