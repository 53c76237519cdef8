"""Notation package: FEN parsing and serialization."""

from hallchess.core.notation.fen import STARTING_FEN, fen_decode, fen_encode

__all__ = [
    "STARTING_FEN",
    "fen_decode",
    "fen_encode",
]
