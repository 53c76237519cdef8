"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from hallchess.core import PIECES_INFO, fen_decode, gen_piece, TeamBitboards

    board = fen_decode("k7/8/8/8/4r3/3P4/8/7K w - - 0 1")
    king = board.king_coordinates(board.side_to_move)
    team = TeamBitboards.from_board(king.board_index, board)
"""

from hallchess.core.board import (
    Board,
    BoardCoordinates,
    Points,
    TeamBitboards,
    board_from_occupancy,
)
from hallchess.core.enums import (
    BoardIndex,
    CastlingRights,
    Color,
    DrawReason,
    GameResult,
    MovementKind,
    PieceType,
)
from hallchess.core.errors import (
    BoardError,
    Draw,
    FenError,
    GameOver,
    IllegalTurn,
    InvalidMove,
    InvalidMoveCheck,
    NoLegalMoveError,
    TurnError,
    Win,
)
from hallchess.core.move_generator import (
    EnemyAttacks,
    gen_enemy_attacks,
    gen_piece,
    has_legal_move,
    is_in_check,
    is_square_attacked,
    new_turn,
)
from hallchess.core.notation import STARTING_FEN, fen_decode, fen_encode
from hallchess.core.pieces import PIECES_INFO, PieceCatalog, PieceInfo, build_piece_catalog
from hallchess.core.rules import Rules
from hallchess.core.types import (
    Bitboard,
    Square,
    bit_on,
    file_of,
    find_bit_on,
    iter_bits,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "BoardIndex",
    "CastlingRights",
    "Color",
    "DrawReason",
    "GameResult",
    "MovementKind",
    "PieceType",
    # Types / helpers
    "Bitboard",
    "Square",
    "bit_on",
    "file_of",
    "find_bit_on",
    "iter_bits",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "BoardCoordinates",
    "EnemyAttacks",
    "PIECES_INFO",
    "PieceCatalog",
    "PieceInfo",
    "Points",
    "Rules",
    "TeamBitboards",
    "board_from_occupancy",
    "build_piece_catalog",
    # Move generation
    "gen_enemy_attacks",
    "gen_piece",
    "has_legal_move",
    "is_in_check",
    "is_square_attacked",
    "new_turn",
    # Errors
    "BoardError",
    "Draw",
    "FenError",
    "GameOver",
    "IllegalTurn",
    "InvalidMove",
    "InvalidMoveCheck",
    "NoLegalMoveError",
    "TurnError",
    "Win",
    # Notation
    "STARTING_FEN",
    "fen_decode",
    "fen_encode",
]
