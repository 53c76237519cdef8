"""Exception taxonomy for board construction and turn application."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hallchess.core.enums import Color, DrawReason

if TYPE_CHECKING:
    from hallchess.core.board import Board


class BoardError(ValueError):
    """A board snapshot violates the one-piece-per-square / one-king rules."""


class FenError(ValueError):
    """Position notation is structurally invalid."""


class TurnError(Exception):
    """Base class for every non-board outcome of :func:`new_turn`."""


class IllegalTurn(TurnError):
    """The candidate move cannot be played; discard it."""


class InvalidMove(IllegalTurn):
    """Destination is not reachable by the piece (or castling is illegal)."""


class InvalidMoveCheck(IllegalTurn):
    """The move would leave the mover's own king in check."""


class GameOver(TurnError):
    """The move ended the game.

    ``board`` is the final position when the raiser knows it.
    """

    def __init__(self, message: str, board: Board | None = None) -> None:
        super().__init__(message)
        self.board = board


class Win(GameOver):
    """The move checkmates the opponent."""

    def __init__(self, winner: Color, board: Board | None = None) -> None:
        super().__init__(f"{winner} wins by checkmate", board)
        self.winner = winner


class Draw(GameOver):
    """The move ends the game in a draw."""

    def __init__(self, reason: DrawReason, board: Board | None = None) -> None:
        super().__init__(f"draw by {reason.name.lower().replace('_', ' ')}", board)
        self.reason = reason


class NoLegalMoveError(RuntimeError):
    """Search was started on a position with no playable move."""
