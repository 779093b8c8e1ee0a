#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--rows R] [--cols C] [--mines M] [--seed S]
    python main.py demo [--games N] [--seed S] [--delay SECONDS]
"""
import argparse
import logging
import random
import time

import numpy as np

from src.minesweeper import (
    BoardConfig,
    ConfigurationError,
    GameController,
    InvalidPositionError,
    MinesweeperEnv,
)
from src.minesweeper.display import render_session

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  r <row> <col>   reveal a cell
  f <row> <col>   toggle a flag
  n               new game
  q               quit"""


def parse_move(parts: list) -> tuple:
    """Parse '<row> <col>' arguments of a command."""
    if len(parts) != 2:
        raise ValueError("expected <row> <col>")
    return int(parts[0]), int(parts[1])


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    config = BoardConfig(rows=args.rows, cols=args.cols, num_mines=args.mines)
    rng = random.Random(args.seed) if args.seed is not None else None
    controller = GameController(config, rng=rng)

    print(HELP_TEXT)
    print()
    print(render_session(controller.session))

    try:
        while True:
            try:
                line = input("> ").strip()
            except EOFError:
                break
            if not line:
                continue

            command, *rest = line.split()
            command = command.lower()

            try:
                if command == "q":
                    break
                elif command == "n":
                    controller.reset()
                elif command == "r":
                    controller.reveal(*parse_move(rest))
                elif command == "f":
                    controller.toggle_flag(*parse_move(rest))
                else:
                    print(HELP_TEXT)
                    continue
            except (InvalidPositionError, ValueError) as error:
                print(f"Invalid move: {error}")
                continue

            print(render_session(controller.session))
    finally:
        controller.close()


def demo(args: argparse.Namespace) -> None:
    """Watch random reveals play through the Gymnasium environment."""
    config = BoardConfig(rows=args.rows, cols=args.cols, num_mines=args.mines)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)
    cell_count = config.rows * config.cols

    wins = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        done = False
        steps = 0

        while not done:
            # Reveal actions only; random flags would just burn the budget
            reveal_mask = env.get_action_mask()[:cell_count]
            action = int(rng.choice(np.where(reveal_mask)[0]))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            steps += 1

            if args.delay > 0:
                print(env.render())
                print()
                time.sleep(args.delay)

        if info["game_state"] == "WON":
            wins += 1
        print(
            f"Game {game + 1}/{args.games}: {info['game_state']} "
            f"after {steps} moves ({info['revealed']}/{info['total_safe']} cleared)"
        )

    print(f"\nWins: {wins}/{args.games} ({wins / args.games:.1%})")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_board_arguments(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument("--rows", type=int, default=9, help="Board rows")
        subparser.add_argument("--cols", type=int, default=9, help="Board columns")
        subparser.add_argument("--mines", type=int, default=10, help="Number of mines")
        subparser.add_argument(
            "--seed", type=int, default=None, help="Random seed for mine placement"
        )

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    demo_parser = subparsers.add_parser("demo", help="Watch random play")
    add_board_arguments(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=5, help="Number of games to play"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.0,
        help="Seconds between moves; shows the board when positive",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "demo":
            demo(args)
        else:
            parser.print_help()
    except ConfigurationError as error:
        logger.error("Invalid board configuration: %s", error)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
