"""GameController: the orchestrator of a game against the engine.

Coordinates: Board, engine, sensor grid, LED grid and character display.
Emits events via simple callbacks so front-ends / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from hallchess.core.board import (
    Board,
    BoardCoordinates,
    TeamBitboards,
    team_indexes,
)
from hallchess.core.enums import Color, DrawReason, GameResult
from hallchess.core.errors import Draw, GameOver, IllegalTurn, NoLegalMoveError, Win
from hallchess.core.move_generator import (
    EnemyAttacks,
    gen_enemy_attacks,
    has_legal_move,
    is_in_check,
    new_turn,
)
from hallchess.core.notation import STARTING_FEN, fen_decode
from hallchess.core.pieces import PIECES_INFO
from hallchess.core.rules import Rules
from hallchess.core.types import Bitboard, Square, square_name
from hallchess.engine.python_search import MinimaxEngine
from hallchess.engine.search import IEngine, SearchLimits
from hallchess.game.interfaces import GamePhase, ICharacterDisplay, ILedGrid, ISensorBoard

_LOGGER = logging.getLogger(__name__)

_PRESS_BUTTON = "(Press button)"

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[BoardCoordinates, Square, Board], None]  # initial, final, board
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


def position_outcome(board: Board) -> GameOver | None:
    """The game-ending condition *board* is already in, if any."""
    if not has_legal_move(board, PIECES_INFO):
        if is_in_check(board):
            return Win(board.side_to_move.opposite, board)
        return Draw(DrawReason.STALEMATE, board)
    reason = Rules.draw_reason(board)
    if reason is not None:
        return Draw(reason, board)
    return None


def _move_text(initial: BoardCoordinates, final_bit: Square) -> str:
    return f"{square_name(initial.bit)}{square_name(final_bit)}"


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Plays one human side against the engine on a sensor board.

    The human submits moves (from the sensors or any front-end); every
    accepted human move is answered synchronously by the engine. Hardware
    collaborators are optional so the controller also runs headless.
    """

    __slots__ = (
        "_board",
        "_display",
        "_draw_reason",
        "_engine",
        "_last_move",
        "_leds",
        "_limits",
        "_phase",
        "_player_color",
        "_result",
        "_sensors",
        "events",
    )

    def __init__(
        self,
        engine: IEngine | None = None,
        limits: SearchLimits | None = None,
        *,
        sensors: ISensorBoard | None = None,
        leds: ILedGrid | None = None,
        display: ICharacterDisplay | None = None,
    ) -> None:
        self._engine: IEngine = engine if engine is not None else MinimaxEngine()
        self._limits = limits if limits is not None else SearchLimits()
        self._sensors = sensors
        self._leds = leds
        self._display = display
        self._board = fen_decode(STARTING_FEN)
        self._phase = GamePhase.NOT_STARTED
        self._player_color = Color.WHITE
        self._result = GameResult.IN_PROGRESS
        self._draw_reason: DrawReason | None = None
        self._last_move: tuple[BoardCoordinates, Square] | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def player_color(self) -> Color:
        return self._player_color

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def draw_reason(self) -> DrawReason | None:
        return self._draw_reason

    @property
    def is_game_over(self) -> bool:
        return self._result != GameResult.IN_PROGRESS

    @property
    def last_move(self) -> tuple[BoardCoordinates, Square] | None:
        return self._last_move

    # ── Game flow ────────────────────────────────────────────────────────

    def select_side(self, player_white: bool = True) -> tuple[str, str]:
        """Offer *player_white*'s side on the display; returns the two lines."""
        line0 = "Start as white?" if player_white else "Start as black?"
        self._show_text(line0, _PRESS_BUTTON)
        self._set_phase(GamePhase.SELECTING_SIDE)
        return line0, _PRESS_BUTTON

    def new_game(self, player_white: bool = True, fen: str | None = None) -> None:
        """Start a game from *fen* (the standard start by default).

        If the engine is to move first it replies before this returns.
        """
        self._board = fen_decode(fen or STARTING_FEN)
        self._player_color = Color.WHITE if player_white else Color.BLACK
        self._result = GameResult.IN_PROGRESS
        self._draw_reason = None
        self._last_move = None
        _LOGGER.info("New game: player is %s", self._player_color)
        if self._leds is not None:
            self._leds.clear()

        outcome = position_outcome(self._board)
        if outcome is not None:
            self._finish(outcome)
            return
        self._prompt_side_to_move()

    def submit_move(self, initial: BoardCoordinates, final_bit: Square) -> bool:
        """Play the human's move. Returns True if legal and applied."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return False
        return self._play(initial, final_bit)

    def legal_destinations(self, bit: Square) -> Bitboard:
        """Squares the side to move's piece on *bit* can go to, lit on the LEDs."""
        index = self._board.piece_index_at(bit)
        destinations = 0
        if index is not None and index in team_indexes(self._board.side_to_move):
            initial = BoardCoordinates(index, bit)
            friendly_king, enemy_king, team_bitboards, enemy_attacks = self._turn_context()
            for final_bit in range(64):
                try:
                    new_turn(
                        initial,
                        final_bit,
                        friendly_king,
                        enemy_king,
                        enemy_attacks,
                        team_bitboards,
                        self._board,
                        PIECES_INFO,
                    )
                except IllegalTurn:
                    continue
                except GameOver:
                    pass
                destinations |= 1 << final_bit

        if self._leds is not None:
            self._leds.show(destinations)
        return destinations

    def sync_from_sensors(self) -> Board:
        """Replace the piece bitboards with the sensor snapshot.

        Side to move, castling, en passant, clocks and points carry over.

        Raises :class:`BoardError` for an impossible snapshot, leaving the
        current board untouched.
        """
        if self._sensors is None:
            raise RuntimeError("No sensor board attached")
        snapshot = self._sensors.read_occupancy()
        self._board = replace(self._board, board=tuple(int(b) for b in snapshot)).validate()
        _LOGGER.debug("Board replaced from sensors:\n%s", self._board)
        return self._board

    # ── Internal helpers ─────────────────────────────────────────────────

    def _turn_context(
        self,
    ) -> tuple[BoardCoordinates, BoardCoordinates, TeamBitboards, EnemyAttacks]:
        board = self._board
        friendly_king = board.king_coordinates(board.side_to_move)
        enemy_king = board.king_coordinates(board.side_to_move.opposite)
        team_bitboards = TeamBitboards.from_board(friendly_king.board_index, board)
        enemy_attacks = gen_enemy_attacks(friendly_king, team_bitboards, board, PIECES_INFO)
        return friendly_king, enemy_king, team_bitboards, enemy_attacks

    def _play(self, initial: BoardCoordinates, final_bit: Square) -> bool:
        friendly_king, enemy_king, team_bitboards, enemy_attacks = self._turn_context()
        try:
            board = new_turn(
                initial,
                final_bit,
                friendly_king,
                enemy_king,
                enemy_attacks,
                team_bitboards,
                self._board,
                PIECES_INFO,
            )
        except IllegalTurn as exc:
            _LOGGER.debug("Rejected %s: %s", _move_text(initial, final_bit), exc)
            return False
        except GameOver as exc:
            if exc.board is not None:
                self._board = exc.board
            self._record_move(initial, final_bit)
            self._finish(exc)
            return True

        self._board = board
        self._record_move(initial, final_bit)
        self._prompt_side_to_move()
        return True

    def _record_move(self, initial: BoardCoordinates, final_bit: Square) -> None:
        mover = self._board.side_to_move.opposite
        _LOGGER.info("%s played %s", mover, _move_text(initial, final_bit))
        self._last_move = (initial, final_bit)
        if self._leds is not None:
            self._leds.show((1 << initial.bit) | (1 << final_bit))
        for cb in self.events.on_move:
            cb(initial, final_bit, self._board)

    def _prompt_side_to_move(self) -> None:
        if self._board.side_to_move == self._player_color:
            self._set_phase(GamePhase.AWAITING_MOVE)
            last = f"Last: {_move_text(*self._last_move)}" if self._last_move else ""
            self._show_text("Your move", last)
            return

        self._set_phase(GamePhase.THINKING)
        self._show_text("Thinking...")
        self._engine_reply()

    def _engine_reply(self) -> None:
        result = self._engine.search(self._board, self._limits)
        if result.best_move is None:
            outcome = position_outcome(self._board)
            if outcome is None:
                raise NoLegalMoveError("Engine found no move in an ongoing game")
            self._finish(outcome)
            return

        move = result.best_move
        if not self._play(move.initial_piece_coordinates, move.final_piece_bit):
            raise NoLegalMoveError(
                f"Engine chose unplayable move "
                f"{_move_text(move.initial_piece_coordinates, move.final_piece_bit)}"
            )

    def _finish(self, outcome: GameOver) -> None:
        if isinstance(outcome, Win):
            self._result = (
                GameResult.WHITE_WINS if outcome.winner == Color.WHITE else GameResult.BLACK_WINS
            )
            self._show_text("Checkmate", f"{outcome.winner} wins".capitalize())
        elif isinstance(outcome, Draw):
            self._result = GameResult.DRAW
            self._draw_reason = outcome.reason
            self._show_text("Draw", outcome.reason.name.replace("_", " ").lower())
        _LOGGER.info("Game over: %s", outcome)
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(self._result)

    def _show_text(self, line0: str, line1: str = "") -> None:
        if self._display is not None:
            self._display.show(line0, line1)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
