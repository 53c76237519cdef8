"""Tests for Board, the piece catalog and board construction."""

import dataclasses

import pytest

from hallchess.core.board import (
    Board,
    BoardCoordinates,
    Points,
    TeamBitboards,
    board_from_occupancy,
)
from hallchess.core.enums import BoardIndex, Color, MovementKind, PieceType
from hallchess.core.errors import BoardError
from hallchess.core.notation import STARTING_FEN, fen_decode
from hallchess.core.pieces import PIECES_INFO, build_piece_catalog, char_from_index, index_from_char
from hallchess.core.types import A1, A8, D1, E1, E3, E8, H1


def _start_bitboards() -> list[int]:
    return list(fen_decode(STARTING_FEN).board)


class TestPieceCatalog:
    def test_twelve_entries(self) -> None:
        assert len(PIECES_INFO) == 12

    def test_slot_order(self) -> None:
        assert BoardIndex.WHITE_PAWN == 0
        assert BoardIndex.WHITE_ROOK == 1
        assert BoardIndex.WHITE_KING == 5
        assert BoardIndex.BLACK_PAWN == 6
        assert BoardIndex.BLACK_KING == 11

    def test_values(self) -> None:
        for offset in (0, 6):
            assert PIECES_INFO[offset + PieceType.PAWN].value == 1
            assert PIECES_INFO[offset + PieceType.ROOK].value == 5
            assert PIECES_INFO[offset + PieceType.KNIGHT].value == 3
            assert PIECES_INFO[offset + PieceType.BISHOP].value == 3
            assert PIECES_INFO[offset + PieceType.QUEEN].value == 9
            assert PIECES_INFO[offset + PieceType.KING].value == 0

    def test_movement_kinds(self) -> None:
        assert PIECES_INFO[BoardIndex.WHITE_ROOK].movement is MovementKind.SLIDING_ORTHOGONAL
        assert PIECES_INFO[BoardIndex.BLACK_BISHOP].movement is MovementKind.SLIDING_DIAGONAL
        assert PIECES_INFO[BoardIndex.WHITE_QUEEN].movement is MovementKind.SLIDING_BOTH
        assert PIECES_INFO[BoardIndex.BLACK_KNIGHT].movement is MovementKind.KNIGHT
        assert PIECES_INFO[BoardIndex.WHITE_KING].movement is MovementKind.KING
        assert PIECES_INFO[BoardIndex.BLACK_PAWN].movement is MovementKind.PAWN

    def test_catalog_is_rebuilt_identically(self) -> None:
        assert build_piece_catalog() == PIECES_INFO

    def test_fen_chars(self) -> None:
        assert index_from_char("R") == BoardIndex.WHITE_ROOK
        assert index_from_char("n") == BoardIndex.BLACK_KNIGHT
        assert char_from_index(BoardIndex.BLACK_QUEEN) == "q"
        with pytest.raises(ValueError):
            index_from_char("x")

    def test_board_index_helpers(self) -> None:
        assert BoardIndex.of(Color.BLACK, PieceType.ROOK) == BoardIndex.BLACK_ROOK
        assert BoardIndex.BLACK_ROOK.color == Color.BLACK
        assert BoardIndex.WHITE_QUEEN.piece_type == PieceType.QUEEN


class TestBoardQueries:
    def test_side_to_move(self) -> None:
        board = fen_decode(STARTING_FEN)
        assert board.side_to_move == Color.WHITE
        assert dataclasses.replace(board, whites_move=False).side_to_move == Color.BLACK

    def test_occupancy_counts(self) -> None:
        board = fen_decode(STARTING_FEN)
        assert board.occupancy.bit_count() == 32
        assert board.team_occupancy(Color.WHITE).bit_count() == 16
        assert board.team_occupancy(Color.BLACK).bit_count() == 16

    def test_piece_index_at(self) -> None:
        board = fen_decode(STARTING_FEN)
        assert board.piece_index_at(A1) == BoardIndex.WHITE_ROOK
        assert board.piece_index_at(D1) == BoardIndex.WHITE_QUEEN
        assert board.piece_index_at(A8) == BoardIndex.BLACK_ROOK
        assert board.piece_index_at(36) is None

    def test_king_coordinates(self) -> None:
        board = fen_decode(STARTING_FEN)
        assert board.king_coordinates(Color.WHITE) == BoardCoordinates(5, E1)
        assert board.king_coordinates(Color.BLACK) == BoardCoordinates(11, E8)

    def test_board_is_immutable(self) -> None:
        board = fen_decode(STARTING_FEN)
        with pytest.raises(dataclasses.FrozenInstanceError):
            board.whites_move = False  # type: ignore[misc]

    def test_str_renders_grid(self) -> None:
        text = str(fen_decode(STARTING_FEN))
        lines = text.splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[7] == "1 R N B Q K B N R"
        assert lines[8] == "  a b c d e f g h"


class TestPoints:
    def test_add_is_per_side(self) -> None:
        points = Points().add(Color.WHITE, 3).add(Color.BLACK, 1).add(Color.WHITE, 5)
        assert points == Points(white_points=8, black_points=1)

    def test_add_zero_returns_same(self) -> None:
        points = Points(2, 4)
        assert points.add(Color.BLACK, 0) is points


class TestTeamBitboards:
    def test_from_white_king(self) -> None:
        board = fen_decode(STARTING_FEN)
        team = TeamBitboards.from_board(BoardIndex.WHITE_KING, board)
        assert team.friendly_team == board.team_occupancy(Color.WHITE)
        assert team.enemy_team == board.team_occupancy(Color.BLACK)

    def test_split_from_either_side(self) -> None:
        team = TeamBitboards(friendly_team=0b01, enemy_team=0b10, reference_color=Color.BLACK)
        assert team.split(Color.BLACK) == (0b01, 0b10)
        assert team.split(Color.WHITE) == (0b10, 0b01)


class TestBoardFromOccupancy:
    def test_valid_snapshot(self) -> None:
        board = board_from_occupancy(_start_bitboards(), whites_move=False)
        assert board.side_to_move == Color.BLACK
        assert board.occupancy.bit_count() == 32

    def test_rejects_overlapping_pieces(self) -> None:
        bitboards = _start_bitboards()
        bitboards[BoardIndex.WHITE_QUEEN] |= 1 << H1  # h1 already holds a rook
        with pytest.raises(BoardError, match="overlaps"):
            board_from_occupancy(bitboards)

    def test_rejects_missing_king(self) -> None:
        bitboards = _start_bitboards()
        bitboards[BoardIndex.BLACK_KING] = 0
        with pytest.raises(BoardError, match="king"):
            board_from_occupancy(bitboards)

    def test_rejects_two_kings(self) -> None:
        bitboards = _start_bitboards()
        bitboards[BoardIndex.WHITE_KING] |= 1 << 36
        with pytest.raises(BoardError, match="exactly one king"):
            board_from_occupancy(bitboards)

    def test_rejects_wrong_count(self) -> None:
        with pytest.raises(BoardError):
            board_from_occupancy(_start_bitboards()[:11])

    def test_rejects_out_of_range_mask(self) -> None:
        bitboards = _start_bitboards()
        bitboards[BoardIndex.WHITE_PAWN] |= 1 << 64
        with pytest.raises(BoardError, match="64-bit"):
            board_from_occupancy(bitboards)

    def test_accepts_en_passant_behind_pawn(self) -> None:
        bitboards = list(fen_decode("4k3/8/8/8/4P3/8/8/4K3 b - - 0 1").board)
        board = board_from_occupancy(bitboards, whites_move=False, en_passant_target=E3)
        assert board.en_passant_target == E3

    def test_rejects_en_passant_without_pawn(self) -> None:
        with pytest.raises(BoardError, match="No pawn"):
            board_from_occupancy(_start_bitboards(), whites_move=False, en_passant_target=E3)

    def test_rejects_en_passant_on_wrong_rank(self) -> None:
        with pytest.raises(BoardError, match="wrong rank"):
            board_from_occupancy(_start_bitboards(), en_passant_target=E3)

    def test_king_lookup_missing_raises(self) -> None:
        with pytest.raises(ValueError):
            Board().king_coordinates(Color.WHITE)
