"""Board-only draw rules: inactivity clock and insufficient material."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hallchess.core.enums import BoardIndex, DrawReason
from hallchess.core.types import file_of, rank_of

if TYPE_CHECKING:
    from hallchess.core.board import Board

_FIFTY_MOVE_HALF_MOVES = 100
_MINOR_PIECES = (
    BoardIndex.WHITE_KNIGHT,
    BoardIndex.WHITE_BISHOP,
    BoardIndex.BLACK_KNIGHT,
    BoardIndex.BLACK_BISHOP,
)


class Rules:
    """Static rule-checker for draws that need no move generation.

    Checkmate and stalemate depend on legal-move existence and live in
    :mod:`hallchess.core.move_generator`. Repetition is not tracked: a
    board value carries no game history.
    """

    @staticmethod
    def is_fifty_move_rule(board: Board) -> bool:
        return board.half_move_clock >= _FIFTY_MOVE_HALF_MOVES

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
        bitboards = board.board
        total = board.occupancy.bit_count()

        # K vs K
        if total == 2:
            return True

        # K+minor vs K
        if total == 3:
            return any(bitboards[i] for i in _MINOR_PIECES)

        # K+B vs K+B with same-colour bishops
        if total == 4:
            wb = bitboards[BoardIndex.WHITE_BISHOP]
            bb = bitboards[BoardIndex.BLACK_BISHOP]
            if wb.bit_count() == 1 and bb.bit_count() == 1:
                w_sq = wb.bit_length() - 1
                b_sq = bb.bit_length() - 1
                w_color = (file_of(w_sq) + rank_of(w_sq)) % 2
                b_color = (file_of(b_sq) + rank_of(b_sq)) % 2
                return w_color == b_color

        return False

    @staticmethod
    def draw_reason(board: Board) -> DrawReason | None:
        """Automatic draw condition met by *board*, if any."""
        if Rules.is_fifty_move_rule(board):
            return DrawReason.FIFTY_MOVE_RULE
        if Rules.is_insufficient_material(board):
            return DrawReason.INSUFFICIENT_MATERIAL
        return None
