"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from hallchess.engine.heatmap import OPENING_HEATMAP, Heatmap

if TYPE_CHECKING:
    from hallchess.core.board import Board
    from hallchess.engine.minimax import Move


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search configuration for a single move computation."""

    max_depth: int = 3
    heatmap: Heatmap = OPENING_HEATMAP


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    value: int
    depth: int


class IEngine(Protocol):
    """Protocol for engines used by the game layer and the Qt worker."""

    def search(self, board: Board, limits: SearchLimits) -> SearchResult: ...
