"""Command-line entry point: search one position and print the best move.

Usage:
    hallchess ["<fen>"] [--depth 3] [--side white|black] [--log-level INFO]
"""

from __future__ import annotations

import argparse
import logging
import sys

from hallchess.core.errors import FenError
from hallchess.core.notation import STARTING_FEN, fen_decode
from hallchess.core.types import square_name
from hallchess.engine.python_search import MinimaxEngine
from hallchess.engine.search import SearchLimits

_LOGGER = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hallchess",
        description="Search a chess position and print the engine's move.",
    )
    parser.add_argument("fen", nargs="?", default=STARTING_FEN, help="position to search")
    parser.add_argument("--depth", type=int, default=SearchLimits().max_depth, help="plies")
    parser.add_argument(
        "--side",
        choices=("white", "black"),
        default=None,
        help="side to move, required when the FEN holds piece placement only",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run one search; returns the process exit status."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    whites_move = None if args.side is None else args.side == "white"
    try:
        board = fen_decode(args.fen, whites_move)
    except FenError as exc:
        _LOGGER.error("Invalid position: %s", exc)
        return 2

    if args.depth < 1:
        _LOGGER.error("Depth must be >= 1, got %d", args.depth)
        return 2

    print(board)
    result = MinimaxEngine().search(board, SearchLimits(max_depth=args.depth))
    if result.best_move is None:
        print("No legal move")
        return 1

    move = result.best_move
    print(
        f"{square_name(move.initial_piece_coordinates.bit)}"
        f"{square_name(move.final_piece_bit)} value={result.value} depth={result.depth}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
