"""Piece catalog: movement kind and material value per board index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, TypeAlias

from hallchess.core.enums import BoardIndex, MovementKind, PieceType


@dataclass(frozen=True, slots=True)
class PieceInfo:
    """Immutable metadata for one piece-type/color slot."""

    movement: MovementKind
    value: int


PieceCatalog: TypeAlias = tuple[PieceInfo, ...]

_MOVEMENT: dict[PieceType, MovementKind] = {
    PieceType.PAWN: MovementKind.PAWN,
    PieceType.ROOK: MovementKind.SLIDING_ORTHOGONAL,
    PieceType.KNIGHT: MovementKind.KNIGHT,
    PieceType.BISHOP: MovementKind.SLIDING_DIAGONAL,
    PieceType.QUEEN: MovementKind.SLIDING_BOTH,
    PieceType.KING: MovementKind.KING,
}

# Kings are never captured, so their value never enters a points total.
_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.ROOK: 5,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}

# FEN character ↔ board index
_CHAR_MAP: dict[str, BoardIndex] = {
    "P": BoardIndex.WHITE_PAWN,
    "R": BoardIndex.WHITE_ROOK,
    "N": BoardIndex.WHITE_KNIGHT,
    "B": BoardIndex.WHITE_BISHOP,
    "Q": BoardIndex.WHITE_QUEEN,
    "K": BoardIndex.WHITE_KING,
    "p": BoardIndex.BLACK_PAWN,
    "r": BoardIndex.BLACK_ROOK,
    "n": BoardIndex.BLACK_KNIGHT,
    "b": BoardIndex.BLACK_BISHOP,
    "q": BoardIndex.BLACK_QUEEN,
    "k": BoardIndex.BLACK_KING,
}

_FEN_CHARS: dict[BoardIndex, str] = {v: k for k, v in _CHAR_MAP.items()}


def build_piece_catalog() -> PieceCatalog:
    """Build the 12 :class:`PieceInfo` records, indexed by board index."""
    return tuple(
        PieceInfo(_MOVEMENT[index.piece_type], _VALUES[index.piece_type])
        for index in BoardIndex
    )


PIECES_INFO: Final[PieceCatalog] = build_piece_catalog()


def index_from_char(char: str) -> BoardIndex:
    """Board index for a FEN character, e.g. 'N' → white knight."""
    try:
        return _CHAR_MAP[char]
    except KeyError:
        raise ValueError(f"Invalid piece character: {char!r}") from None


def char_from_index(board_index: int) -> str:
    """FEN character (uppercase = white, lowercase = black)."""
    return _FEN_CHARS[BoardIndex(board_index)]
