#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--width W] [--height H] [--mines N] [--seed S]
    python main.py simulate [--games N] [--width W] [--height H] [--mines N]
"""
import argparse
import logging
import time

import numpy as np

from src.minesweeper.board import BoardConfig
from src.minesweeper.controller import GameController
from src.minesweeper.environment import MinesweeperEnv, render_board
from src.minesweeper.errors import MinesweeperError

PLAY_HELP = "Commands: o ROW COL (open), m ROW COL (mark), c ROW COL (chord), r (reset), q (quit)"


def play(args: argparse.Namespace) -> None:
    """Play interactively in the terminal."""
    config = BoardConfig(args.width, args.height, args.mines)
    controller = GameController(config, seed=args.seed)
    actions = {"o": controller.open, "m": controller.mark, "c": controller.chord}

    print(PLAY_HELP)
    try:
        while True:
            print()
            print(render_board(controller.board, coordinates=True))
            print(
                f"Mines left: {controller.remains} | "
                f"Time: {controller.seconds}s | "
                f"State: {controller.state.name}"
            )
            if controller.over:
                print("*** WIN! ***" if controller.won else "*** LOST (hit mine) ***")

            try:
                parts = input("> ").split()
            except EOFError:
                break
            if not parts:
                continue

            command = parts[0].lower()
            if command == "q":
                break
            if command == "r":
                controller.reset()
                continue
            if command not in actions or len(parts) != 3:
                print(PLAY_HELP)
                continue

            try:
                row, col = int(parts[1]), int(parts[2])
                index = controller.board.index_of(row, col)
                actions[command](index)
            except ValueError:
                print("ROW and COL must be integers")
            except MinesweeperError as error:
                print(f"Invalid move: {error}")
    finally:
        controller.shutdown()


def simulate(args: argparse.Namespace) -> None:
    """Play random games through the environment and report results."""
    if args.games < 1:
        print("No games played")
        return

    config = BoardConfig(args.width, args.height, args.mines)
    env = MinesweeperEnv(config=config)
    env.action_space.seed(args.seed)

    print(f"Simulating {args.games} random games on {args.width}x{args.height} "
          f"with {args.mines} mines...")

    wins = 0
    revealed = []
    start_time = time.time()

    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        done = False
        info = {}

        while not done:
            action = env.action_space.sample(mask=env.get_action_mask())
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info.get("game_state") == "WON":
            wins += 1
        revealed.append(info.get("revealed", 0))

        if (game + 1) % 100 == 0:
            print(f"Game {game + 1}/{args.games} | Win Rate: {wins / (game + 1):.1%}")

    env.close()
    elapsed = time.time() - start_time

    print(f"\nResults over {args.games} games:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg revealed: {np.mean(revealed):.1f} cells")
    print(f"  Speed: {args.games / max(elapsed, 1e-9):.1f} games/s")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, default=19, help="Board width")
    parser.add_argument("--height", type=int, default=19, help="Board height")
    parser.add_argument("--mines", type=int, default=99, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Layout seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal or simulate games"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log engine debug output"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report the win rate"
    )
    add_board_arguments(simulate_parser)
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    args = parser.parse_args()
    if args.command == "simulate" and args.games < 1:
        parser.error("--games must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "simulate":
            simulate(args)
        else:
            parser.print_help()
    except MinesweeperError as error:
        parser.error(str(error))


if __name__ == "__main__":
    main()
