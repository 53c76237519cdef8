"""Board - 12 piece bitboards plus game-state metadata, as an immutable value."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from hallchess.core.enums import BoardIndex, CastlingRights, Color
from hallchess.core.errors import BoardError
from hallchess.core.pieces import char_from_index
from hallchess.core.types import (
    FULL_BITBOARD,
    Bitboard,
    Square,
    bit_on,
    find_bit_on,
    make_square,
    rank_of,
    square_name,
)

BOARD_COUNT = 12
WHITE_KING_INDEX = int(BoardIndex.WHITE_KING)
BLACK_KING_INDEX = int(BoardIndex.BLACK_KING)


def team_indexes(color: Color) -> range:
    """Board indexes holding *color*'s pieces."""
    return range(0, 6) if color == Color.WHITE else range(6, 12)


@dataclass(frozen=True, slots=True)
class BoardCoordinates:
    """One occupied square of one piece bitboard."""

    board_index: int
    bit: Square


@dataclass(frozen=True, slots=True)
class Points:
    """Material captured so far by each side."""

    white_points: int = 0
    black_points: int = 0

    def add(self, color: Color, amount: int) -> Points:
        if not amount:
            return self
        if color == Color.WHITE:
            return Points(self.white_points + amount, self.black_points)
        return Points(self.white_points, self.black_points + amount)


@dataclass(frozen=True, slots=True)
class Board:
    """Full position. Never mutated; moves derive a new ``Board``."""

    board: tuple[Bitboard, ...] = (0,) * BOARD_COUNT
    whites_move: bool = True
    points: Points = field(default_factory=Points)
    points_delta: int = 0
    half_moves: int = 0
    half_move_clock: int = 0
    en_passant_target: Square | None = None
    castling: CastlingRights = CastlingRights.NONE

    # -- Query helpers ------------------------------------------------------

    @property
    def side_to_move(self) -> Color:
        return Color.WHITE if self.whites_move else Color.BLACK

    @property
    def occupancy(self) -> Bitboard:
        """Union of all 12 bitboards."""
        occ = 0
        for bitboard in self.board:
            occ |= bitboard
        return occ

    def team_occupancy(self, color: Color) -> Bitboard:
        occ = 0
        for i in team_indexes(color):
            occ |= self.board[i]
        return occ

    def occupied(self, board_index: int, bit: Square) -> bool:
        return bit_on(self.board[board_index], bit)

    def piece_index_at(self, bit: Square) -> int | None:
        """Board index of the piece on *bit*, or ``None`` for an empty square."""
        for i, bitboard in enumerate(self.board):
            if bit_on(bitboard, bit):
                return i
        return None

    def king_coordinates(self, color: Color) -> BoardCoordinates:
        """Coordinates of *color*'s king."""
        index = WHITE_KING_INDEX if color == Color.WHITE else BLACK_KING_INDEX
        bit = find_bit_on(self.board[index], 0)
        if bit is None:
            raise ValueError(f"No {color.name} king on board")
        return BoardCoordinates(index, bit)

    # -- Validation ---------------------------------------------------------

    def validate(self) -> Board:
        """Check the board invariants, returning ``self`` for chaining."""
        if len(self.board) != BOARD_COUNT:
            raise BoardError(f"Expected {BOARD_COUNT} bitboards, got {len(self.board)}")

        seen = 0
        for i, bitboard in enumerate(self.board):
            if not 0 <= bitboard <= FULL_BITBOARD:
                raise BoardError(f"Bitboard {i} is not a 64-bit mask")
            if seen & bitboard:
                raise BoardError(f"Bitboard {i} overlaps another piece bitboard")
            seen |= bitboard

        for index, color in (
            (WHITE_KING_INDEX, Color.WHITE),
            (BLACK_KING_INDEX, Color.BLACK),
        ):
            kings = self.board[index].bit_count()
            if kings != 1:
                raise BoardError(f"{color.name} must have exactly one king, found {kings}")

        if self.en_passant_target is not None:
            self._validate_en_passant(self.en_passant_target, seen)
        return self

    def _validate_en_passant(self, target: Square, occupancy: Bitboard) -> None:
        # The pawn that just double-pushed stands one rank past the target.
        if self.whites_move:
            expected_rank, pawn_sq = 5, target + 8
            pawn_index = BoardIndex.BLACK_PAWN
        else:
            expected_rank, pawn_sq = 2, target - 8
            pawn_index = BoardIndex.WHITE_PAWN
        if not 0 <= target < 64 or rank_of(target) != expected_rank:
            raise BoardError(f"En-passant target {target} is on the wrong rank")
        if bit_on(occupancy, target):
            raise BoardError(f"En-passant target {square_name(target)} is occupied")
        if not bit_on(self.board[pawn_index], pawn_sq):
            raise BoardError(
                f"No pawn behind en-passant target {square_name(target)}"
            )

    # -- Dunder helpers -----------------------------------------------------

    def __str__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                index = self.piece_index_at(make_square(file, rank))
                row.append(char_from_index(index) if index is not None else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


@dataclass(frozen=True, slots=True)
class TeamBitboards:
    """Friendly/enemy occupancy relative to a reference king."""

    friendly_team: Bitboard
    enemy_team: Bitboard
    reference_color: Color = Color.WHITE

    @classmethod
    def from_board(cls, king_index: int, board: Board) -> TeamBitboards:
        color = BoardIndex(king_index).color
        return cls(
            friendly_team=board.team_occupancy(color),
            enemy_team=board.team_occupancy(color.opposite),
            reference_color=color,
        )

    def split(self, color: Color) -> tuple[Bitboard, Bitboard]:
        """``(own, enemy)`` masks from *color*'s point of view."""
        if color == self.reference_color:
            return self.friendly_team, self.enemy_team
        return self.enemy_team, self.friendly_team


def board_from_occupancy(
    bitboards: Sequence[Bitboard],
    whites_move: bool = True,
    *,
    castling: CastlingRights = CastlingRights.NONE,
    en_passant_target: Square | None = None,
) -> Board:
    """Build a validated :class:`Board` from a sensor snapshot of 12 bitboards."""
    board = Board(
        board=tuple(int(b) for b in bitboards),
        whites_move=whites_move,
        castling=castling,
        en_passant_target=en_passant_target,
    )
    return board.validate()
