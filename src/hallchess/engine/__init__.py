"""Engine package: minimax search, engine facade and Qt worker bridge."""

from hallchess.engine.heatmap import OPENING_HEATMAP, ZERO_HEATMAP, Heatmap
from hallchess.engine.minimax import (
    DRAW_SCORE,
    WIN_SCORE,
    MinMax,
    Move,
    gen_best_move,
    order_moves,
    update_min_max,
    update_prune_value,
)
from hallchess.engine.python_search import MinimaxEngine
from hallchess.engine.qt_bridge import EngineWorker
from hallchess.engine.search import IEngine, SearchLimits, SearchResult

__all__ = [
    "DRAW_SCORE",
    "EngineWorker",
    "Heatmap",
    "IEngine",
    "MinMax",
    "MinimaxEngine",
    "Move",
    "OPENING_HEATMAP",
    "SearchLimits",
    "SearchResult",
    "WIN_SCORE",
    "ZERO_HEATMAP",
    "gen_best_move",
    "order_moves",
    "update_min_max",
    "update_prune_value",
]
