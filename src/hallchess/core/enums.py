"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Piece types in bitboard slot order (not by value)."""

    PAWN = 0
    ROOK = 1
    KNIGHT = 2
    BISHOP = 3
    QUEEN = 4
    KING = 5


class BoardIndex(IntEnum):
    """Index of each of the 12 piece bitboards: white slots, then black."""

    WHITE_PAWN = 0
    WHITE_ROOK = 1
    WHITE_KNIGHT = 2
    WHITE_BISHOP = 3
    WHITE_QUEEN = 4
    WHITE_KING = 5
    BLACK_PAWN = 6
    BLACK_ROOK = 7
    BLACK_KNIGHT = 8
    BLACK_BISHOP = 9
    BLACK_QUEEN = 10
    BLACK_KING = 11

    @classmethod
    def of(cls, color: Color, piece_type: PieceType) -> BoardIndex:
        return cls(int(color) * 6 + int(piece_type))

    @property
    def color(self) -> Color:
        return Color(self.value // 6)

    @property
    def piece_type(self) -> PieceType:
        return PieceType(self.value % 6)


class MovementKind(Enum):
    """How a piece type produces its destination squares."""

    SLIDING_DIAGONAL = auto()
    SLIDING_ORTHOGONAL = auto()
    SLIDING_BOTH = auto()
    KNIGHT = auto()
    KING = auto()
    PAWN = auto()


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class DrawReason(IntEnum):
    """Why a position was declared drawn."""

    STALEMATE = auto()
    FIFTY_MOVE_RULE = auto()
    INSUFFICIENT_MATERIAL = auto()


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
