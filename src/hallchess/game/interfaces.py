"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on the concrete sensor grid, LED matrix or character
display of a particular board.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import IntEnum, auto

from hallchess.core.types import Bitboard

# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    SELECTING_SIDE = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # engine is computing
    GAME_OVER = auto()


# ── Hardware interfaces ──────────────────────────────────────────────────────


class ISensorBoard(ABC):
    """Per-square piece sensors under the playing surface."""

    @abstractmethod
    def read_occupancy(self) -> Sequence[Bitboard]:
        """Return a snapshot of the 12 piece bitboards currently on the board."""


class ILedGrid(ABC):
    """One LED per square."""

    @abstractmethod
    def show(self, bitboard: Bitboard) -> None:
        """Light exactly the squares set in *bitboard*."""

    @abstractmethod
    def clear(self) -> None:
        """Turn every LED off."""


class ICharacterDisplay(ABC):
    """Two-line character display."""

    @abstractmethod
    def show(self, line0: str, line1: str = "") -> None:
        """Replace the displayed text."""
