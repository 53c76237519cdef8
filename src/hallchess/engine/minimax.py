"""Move ordering and depth-limited minimax with single-bound pruning.

Scores are material captured along a line, always expressed in favour of
the *master* side (the side the root call picks a move for). Each ply only
receives the running best of its immediate parent as a bound, so a subtree
is abandoned once it is already no better for the parent than an
alternative the parent has seen.
"""

from __future__ import annotations

from dataclasses import dataclass

from hallchess.core.board import Board, BoardCoordinates, TeamBitboards, team_indexes
from hallchess.core.errors import Draw, IllegalTurn, NoLegalMoveError, Win
from hallchess.core.move_generator import EnemyAttacks, gen_enemy_attacks, gen_piece, new_turn
from hallchess.core.pieces import PIECES_INFO, PieceCatalog
from hallchess.core.types import bit_on, iter_bits
from hallchess.engine.heatmap import ZERO_HEATMAP, Heatmap

WIN_SCORE = 127
DRAW_SCORE = 0


@dataclass(frozen=True, slots=True)
class Move:
    """A candidate or chosen move.

    ``value`` is the move's score (ordering heuristic while ordering, line
    score once searched); ``heatmap_value`` only breaks ordering ties.
    """

    initial_piece_coordinates: BoardCoordinates
    final_piece_bit: int
    value: int = 0
    heatmap_value: int = 0


_EMPTY_MOVE = Move(BoardCoordinates(0, 0), 0)


@dataclass(frozen=True, slots=True)
class MinMax:
    """Running best of a search node."""

    max_move: Move | None = None
    min_value: int | None = None


def update_min_max(piece_move: Move, min_max: MinMax) -> MinMax:
    """Fold *piece_move* into *min_max*, initialising it on first use."""
    if min_max.max_move is None or min_max.min_value is None:
        return MinMax(max_move=piece_move, min_value=piece_move.value)

    if piece_move.value > min_max.max_move.value:
        return MinMax(max_move=piece_move, min_value=min_max.min_value)
    if piece_move.value < min_max.min_value:
        return MinMax(max_move=min_max.max_move, min_value=piece_move.value)
    return min_max


def update_prune_value(master_team: bool, min_max: MinMax) -> int | None:
    """Bound handed to child plies: the node's running max (master) or min."""
    if master_team:
        return min_max.max_move.value if min_max.max_move is not None else None
    return min_max.min_value


def order_moves(
    sort: bool,
    board: Board,
    enemy_attacks: EnemyAttacks,
    friendly_king: BoardCoordinates,
    heatmap: Heatmap,
    team_bitboards: TeamBitboards,
    pieces_info: PieceCatalog,
) -> list[Move]:
    """Candidate moves for the side to move, best-looking first when *sort*.

    Every destination in a piece's move bitboard is a candidate. The
    friendly king additionally gets every other square, because castling is
    not part of its bitboard; ``new_turn`` rejects the impossible ones.
    """
    color = board.side_to_move
    enemy_indexes = team_indexes(color.opposite)
    attacked = enemy_attacks.enemy_attack_bitboard
    moves: list[Move] = []

    for index in team_indexes(color):
        piece_value = pieces_info[index].value
        piece_heatmap = heatmap[index]

        for initial_bit in iter_bits(board.board[index]):
            initial = BoardCoordinates(index, initial_bit)
            piece_moves = gen_piece(initial, team_bitboards, False, board, pieces_info)
            is_king = initial == friendly_king

            for final_bit in range(64):
                if bit_on(piece_moves, final_bit):
                    move_value = 0
                    if bit_on(team_bitboards.enemy_team, final_bit):
                        for j in enemy_indexes:
                            if bit_on(board.board[j], final_bit):
                                capture_value = pieces_info[j].value
                                # A defended target most likely costs the mover its piece.
                                if bit_on(attacked, final_bit):
                                    move_value = piece_value - capture_value
                                else:
                                    move_value = capture_value
                                break
                    moves.append(Move(initial, final_bit, move_value, piece_heatmap[final_bit]))
                elif is_king:
                    moves.append(Move(initial, final_bit, 0, piece_heatmap[final_bit]))

    if sort:
        # Stable: equal (value, heatmap) pairs keep generation order.
        moves.sort(key=lambda m: (m.value, m.heatmap_value), reverse=True)
    return moves


def gen_best_move(
    is_master_side: bool,
    search_depth: int,
    current_depth: int = 0,
    accumulated_value: int = 0,
    parent_bound: int | None = None,
    *,
    board: Board,
    heatmap_table: Heatmap = ZERO_HEATMAP,
    piece_catalog: PieceCatalog = PIECES_INFO,
) -> Move:
    """Best move for the side to move in *board*, searched to *search_depth* plies.

    Called externally with ``current_depth=0`` and ``parent_bound=None``.
    Master-side nodes return the move achieving the running maximum;
    other nodes return a placeholder move carrying only the running minimum.

    Raises :class:`NoLegalMoveError` when no candidate could be played.
    """
    if current_depth == search_depth:
        return Move(_EMPTY_MOVE.initial_piece_coordinates, 0, accumulated_value)

    friendly_king = board.king_coordinates(board.side_to_move)
    enemy_king = board.king_coordinates(board.side_to_move.opposite)
    team_bitboards = TeamBitboards.from_board(friendly_king.board_index, board)
    enemy_attacks = gen_enemy_attacks(friendly_king, team_bitboards, board, piece_catalog)
    moves = order_moves(
        True,
        board,
        enemy_attacks,
        friendly_king,
        heatmap_table,
        team_bitboards,
        piece_catalog,
    )

    min_max = MinMax()
    prune_value: int | None = None

    for candidate in moves:
        initial = candidate.initial_piece_coordinates
        final_bit = candidate.final_piece_bit

        try:
            new_board = new_turn(
                initial,
                final_bit,
                friendly_king,
                enemy_king,
                enemy_attacks,
                team_bitboards,
                board,
                piece_catalog,
            )
        except IllegalTurn:
            continue
        except (Win, Draw) as outcome:
            branch_value = WIN_SCORE if isinstance(outcome, Win) else DRAW_SCORE
            if not is_master_side:
                branch_value = -branch_value
            min_max = update_min_max(Move(initial, final_bit, branch_value), min_max)
            prune_value = update_prune_value(is_master_side, min_max)
            continue

        move_value = new_board.points_delta
        if not is_master_side:
            move_value = -move_value

        reply = gen_best_move(
            not is_master_side,
            search_depth,
            current_depth + 1,
            accumulated_value + move_value,
            prune_value,
            board=new_board,
            heatmap_table=heatmap_table,
            piece_catalog=piece_catalog,
        )
        min_max = update_min_max(Move(initial, final_bit, reply.value), min_max)
        prune_value = update_prune_value(is_master_side, min_max)

        if parent_bound is not None:
            if is_master_side:
                if min_max.max_move is not None and min_max.max_move.value >= parent_bound:
                    break
            elif min_max.min_value is not None and min_max.min_value <= parent_bound:
                break

    if min_max.max_move is None or min_max.min_value is None:
        raise NoLegalMoveError("No playable move in searched position")
    if is_master_side:
        return min_max.max_move
    return Move(_EMPTY_MOVE.initial_piece_coordinates, 0, min_max.min_value)
