"""Tests for Rules: inactivity clock and insufficient material."""

import dataclasses

import pytest

from hallchess.core.enums import DrawReason
from hallchess.core.notation import STARTING_FEN, fen_decode
from hallchess.core.rules import Rules


class TestFiftyMoveRule:
    def test_not_yet(self) -> None:
        board = fen_decode("4k3/8/8/8/8/8/8/R3K3 w - - 99 60")
        assert not Rules.is_fifty_move_rule(board)

    def test_reached(self) -> None:
        board = fen_decode("4k3/8/8/8/8/8/8/R3K3 w - - 100 60")
        assert Rules.is_fifty_move_rule(board)
        assert Rules.draw_reason(board) == DrawReason.FIFTY_MOVE_RULE


class TestInsufficientMaterial:
    @pytest.mark.parametrize(
        "fen",
        [
            "4k3/8/8/8/8/8/8/4K3 w - - 0 1",  # K vs K
            "4k3/8/8/8/8/8/8/2B1K3 w - - 0 1",  # K+B vs K
            "4k3/8/8/8/8/8/8/1N2K3 w - - 0 1",  # K+N vs K
            "2b1k3/8/8/8/8/8/8/4KB2 w - - 0 1",  # same-colour bishops
        ],
    )
    def test_drawn(self, fen: str) -> None:
        board = fen_decode(fen)
        assert Rules.is_insufficient_material(board)
        assert Rules.draw_reason(board) == DrawReason.INSUFFICIENT_MATERIAL

    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1",  # K+P vs K
            "4k3/8/8/8/8/8/8/R3K3 w - - 0 1",  # K+R vs K
            "3bk3/8/8/8/8/8/8/4KB2 w - - 0 1",  # opposite-colour bishops
            "4k3/8/8/8/8/8/8/1NB1K3 w - - 0 1",  # two minors
        ],
    )
    def test_not_drawn(self, fen: str) -> None:
        board = fen_decode(fen)
        assert not Rules.is_insufficient_material(board)

    def test_no_reason_for_ongoing_game(self) -> None:
        assert Rules.draw_reason(fen_decode(STARTING_FEN)) is None

    def test_clock_takes_precedence(self) -> None:
        board = dataclasses.replace(fen_decode("4k3/8/8/8/8/8/8/4K3 w - - 0 1"), half_move_clock=120)
        assert Rules.draw_reason(board) == DrawReason.FIFTY_MOVE_RULE
