#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py [--difficulty {default,beginner,intermediate,expert}]
                   [--rows N] [--cols N] [--mines N] [--seed N]
                   [--log-level LEVEL]
"""
import argparse
import logging
import random

from src.minesweeper import BoardConfig, ConsoleGame, DIFFICULTIES, InvalidConfig


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Start from a difficulty preset and apply size overrides."""
    preset = DIFFICULTIES[args.difficulty]
    return BoardConfig(
        rows=args.rows if args.rows is not None else preset.rows,
        cols=args.cols if args.cols is not None else preset.cols,
        num_mines=args.mines if args.mines is not None else preset.num_mines,
    )


def main() -> None:
    """Parse arguments and play a game in the terminal."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal"
    )
    parser.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTIES),
        default="default",
        help="Board preset (default: 8x8 with 12 mines)",
    )
    parser.add_argument("--rows", type=int, default=None, help="Number of rows")
    parser.add_argument("--cols", type=int, default=None, help="Number of columns")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines")
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine placement"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = build_config(args)
    except InvalidConfig as exc:
        parser.error(str(exc))

    ConsoleGame(config=config, rng=random.Random(args.seed)).run()


if __name__ == "__main__":
    main()
