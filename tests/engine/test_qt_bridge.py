"""Tests for Qt engine bridge worker."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from hallchess.core.board import Board, BoardCoordinates
from hallchess.core.notation import STARTING_FEN, fen_decode
from hallchess.engine.minimax import Move
from hallchess.engine.qt_bridge import EngineWorker
from hallchess.engine.search import SearchLimits, SearchResult


class _CancellingEngine:
    def __init__(self, worker: EngineWorker) -> None:
        self._worker = worker

    def search(self, _board: Board, _limits: SearchLimits) -> SearchResult:
        self._worker.cancel()
        return SearchResult(
            best_move=Move(BoardCoordinates(0, 52), 36),
            value=0,
            depth=1,
        )


class _NoMoveEngine:
    def search(self, _board: Board, _limits: SearchLimits) -> SearchResult:
        return SearchResult(best_move=None, value=0, depth=0)


class _FailingEngine:
    def search(self, _board: Board, _limits: SearchLimits) -> SearchResult:
        raise RuntimeError("boom")


class TestEngineWorker:
    def test_emits_best_move(self, qapp: object) -> None:
        board = fen_decode("k7/8/8/8/4r3/3P4/8/7K w - - 0 1")
        worker = EngineWorker(max_depth=1)

        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(board, 3)

        assert len(errors) == 0
        assert len(best_moves) == 1
        request_id, move, value, depth = best_moves[0]
        assert request_id == 3
        assert move.initial_piece_coordinates == BoardCoordinates(0, 43)
        assert move.final_piece_bit == 36
        assert value == 5
        assert depth == 1

    def test_emits_cancelled_when_search_is_cancelled(self, qapp: object) -> None:
        board = fen_decode(STARTING_FEN)
        worker = EngineWorker()
        worker._engine = _CancellingEngine(worker)

        cancelled = QSignalSpy(worker.search_cancelled)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(board, 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(best_moves) == 0

    def test_emits_no_move_when_search_returns_none(self, qapp: object) -> None:
        board = fen_decode(STARTING_FEN)
        worker = EngineWorker()
        worker._engine = _NoMoveEngine()

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(board, 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_emits_error_on_engine_failure(self, qapp: object) -> None:
        worker = EngineWorker()
        worker._engine = _FailingEngine()

        errors = QSignalSpy(worker.search_error)
        worker.request_move(fen_decode(STARTING_FEN), 5)

        assert len(errors) == 1
        assert errors[0][0] == 5
        assert errors[0][1] == "boom"

    def test_rejects_non_board(self, qapp: object) -> None:
        worker = EngineWorker()
        errors = QSignalSpy(worker.search_error)

        worker.request_move("not a board", 9)

        assert len(errors) == 1
        assert errors[0][0] == 9

    def test_set_limits_keeps_heatmap(self, qapp: object) -> None:
        worker = EngineWorker(max_depth=3)
        before = worker.limits.heatmap
        worker.set_limits(5)
        assert worker.limits.max_depth == 5
        assert worker.limits.heatmap is before
