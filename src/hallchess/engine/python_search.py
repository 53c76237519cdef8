"""Pure-Python engine facade over the minimax search."""

from __future__ import annotations

import logging
from time import perf_counter

from hallchess.core.board import Board
from hallchess.core.move_generator import has_legal_move
from hallchess.core.pieces import PIECES_INFO, PieceCatalog
from hallchess.engine.minimax import gen_best_move
from hallchess.engine.search import IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)


class MinimaxEngine(IEngine):
    """Fixed-depth material minimax with heatmap move ordering."""

    __slots__ = ("_pieces_info",)

    def __init__(self, pieces_info: PieceCatalog = PIECES_INFO) -> None:
        self._pieces_info = pieces_info

    def search(self, board: Board, limits: SearchLimits) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        if not has_legal_move(board, self._pieces_info):
            _LOGGER.info("No legal move for %s, nothing to search", board.side_to_move.name)
            return SearchResult(None, 0, 0)

        _LOGGER.debug(
            "Searching %s to depth %d", board.side_to_move.name, limits.max_depth
        )
        started = perf_counter()
        best = gen_best_move(
            True,
            limits.max_depth,
            board=board,
            heatmap_table=limits.heatmap,
            piece_catalog=self._pieces_info,
        )
        elapsed = perf_counter() - started
        _LOGGER.info(
            "Search finished: depth=%d value=%d elapsed=%.3fs",
            limits.max_depth,
            best.value,
            elapsed,
        )
        return SearchResult(best, best.value, limits.max_depth)
