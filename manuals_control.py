# -*- coding: utf-8 -*-
"""
Play 2048 Game
"""
import argparse
import logging
from typing import Any, Optional

from matplotlib import pyplot as plt

from game2048.config import LeaderboardConfig
from game2048.envs import GameSession, SubmissionState
from game2048.leaderboard import LeaderboardClient, format_leaderboard
from game2048.utils import WindowBoard


def redraw(window: WindowBoard, session: GameSession):
    """
    Redraw the game board.

    Parameters
    ----------
    window: WindowBoard
        Class to draw the game board

    session: GameSession
        The game being played
    """
    window.show_image(session.grid, score=session.score, finished=session.is_finished)


def reset(session: GameSession, window: WindowBoard):
    """
    Start a new game and redraw the game board.

    Parameters
    ----------
    session: GameSession
        The game being played

    window: WindowBoard
        Class to draw the game board
    """
    session.reset()
    redraw(window, session)


def game_over(session: GameSession, name: Optional[str]):
    """
    Submit the final score once and print the leaderboard.

    Parameters
    ----------
    session: GameSession
        The finished game

    name: str, optional
        Player name, the score is not submitted without one
    """
    print(f"Game over! Your score: {session.score}")
    if name and session.submission is SubmissionState.IDLE:
        record = session.submit_score(name)
        if record is not None:
            # ##: Submission already reloaded the leaderboard.
            print("Score submitted! Thank you.")
            print(format_leaderboard(session.scores))
            return
        if session.error:
            print(f"Could not submit score: {session.error}")

    print(format_leaderboard(session.refresh_leaderboard()))


def step(session: GameSession, window: WindowBoard, action: int, name: Optional[str] = None):
    """
    Applied action into the game.

    Parameters
    ----------
    session: GameSession
        The game being played

    window: WindowBoard
        Class to draw the game board

    action: int
        Action to apply

    name: str, optional
        Player name used to submit the score
    """
    if session.is_finished:
        return

    _, gained, finished = session.step(action)
    if gained:
        print(f"+{gained} (score={session.score})")

    redraw(window, session)
    if finished:
        game_over(session, name)


def key_handler(session: GameSession, window: WindowBoard, event: Any, name: Optional[str] = None):
    """
    Handle the keyboard.

    Parameters
    ----------
    session: GameSession
        The game being played

    window: WindowBoard
        Class to draw the game board

    event: Any
        event to handle

    name: str, optional
        Player name used to submit the score
    """
    if event.key == "escape":
        window.close()
        return None

    if event.key == "backspace":
        reset(session, window)
        return None

    if event.key in session.ACTIONS:
        step(session, window, session.ACTIONS[event.key], name)
    return None


def main(argv: Optional[list] = None):
    """Parse the command line and open the game window."""
    parser = argparse.ArgumentParser(description="Play 2048 with the arrow keys.")
    parser.add_argument("--name", help="player name used to submit the final score")
    parser.add_argument("--base-url", help="leaderboard server URL (default: $GAME2048_API_URL)")
    parser.add_argument("--seed", type=int, help="random seed for tile placement")
    parser.add_argument("--verbose", action="store_true", help="log leaderboard requests")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = LeaderboardConfig.from_env()
    if args.base_url:
        config = LeaderboardConfig(base_url=args.base_url, timeout=config.timeout, limit=config.limit)

    # ##: Arrow keys navigate the figure history by default.
    plt.rcParams["keymap.back"] = []
    plt.rcParams["keymap.forward"] = []

    with LeaderboardClient.from_config(config) as leaderboard:
        session = GameSession(leaderboard=leaderboard, limit=config.limit, seed=args.seed)
        print(format_leaderboard(session.refresh_leaderboard()))

        window_board = WindowBoard(title="2048 Game", size=session.grid.shape[0])
        window_board.register_key_handler(lambda event: key_handler(session, window_board, event, args.name))
        redraw(window_board, session)

        # Blocking event loop
        window_board.show(block=True)


if __name__ == "__main__":
    main()
