"""Per-piece move bitboards, attack maps and the turn state transition."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from hallchess.core.board import Board, BoardCoordinates, TeamBitboards, team_indexes
from hallchess.core.enums import (
    BoardIndex,
    CastlingRights,
    Color,
    DrawReason,
    MovementKind,
    PieceType,
)
from hallchess.core.errors import Draw, InvalidMove, InvalidMoveCheck, Win
from hallchess.core.pieces import PieceCatalog
from hallchess.core.rules import Rules
from hallchess.core.types import (
    A1,
    A8,
    B1,
    B8,
    C1,
    C8,
    D1,
    D8,
    E1,
    E8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    Bitboard,
    Square,
    bit_on,
    file_of,
    iter_bits,
    make_square,
    rank_of,
    square_name,
)

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Indexed by Color. White moves toward rank 8, i.e. toward lower bit indexes.
_PAWN_PUSH: tuple[int, int] = (-8, 8)
_PAWN_START_RANK: tuple[int, int] = (1, 6)
_PAWN_PROMOTION_RANK: tuple[int, int] = (7, 0)
_EN_PASSANT_RANK: tuple[int, int] = (5, 2)
_KING_HOME: tuple[Square, Square] = (E1, E8)


# -- Precomputed lookup tables ---------------------------------------------


def _build_masks(offsets: tuple[tuple[int, int], ...]) -> tuple[Bitboard, ...]:
    masks: list[Bitboard] = []
    for sq in range(64):
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        mask = 0
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                mask |= 1 << make_square(af, ar)
        masks.append(mask)
    return tuple(masks)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_MASKS = _build_masks(KNIGHT_OFFSETS)
_KING_MASKS = _build_masks(KING_OFFSETS)
# [color][sq] -> squares attacked by a pawn of *color* standing on sq
_PAWN_ATTACKS = (
    _build_masks(((-1, 1), (1, 1))),
    _build_masks(((-1, -1), (1, -1))),
)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDING_RAYS = {
    MovementKind.SLIDING_DIAGONAL: _BISHOP_RAYS,
    MovementKind.SLIDING_ORTHOGONAL: _ROOK_RAYS,
    MovementKind.SLIDING_BOTH: _QUEEN_RAYS,
}


@dataclass(frozen=True, slots=True)
class _Castle:
    right: CastlingRights
    rook_from: Square
    rook_to: Square
    empty: Bitboard
    safe: Bitboard


def _mask(*squares: Square) -> Bitboard:
    mask = 0
    for sq in squares:
        mask |= 1 << sq
    return mask


# (king_from, king_to) -> castling geometry
_CASTLES: dict[tuple[Square, Square], _Castle] = {
    (E1, G1): _Castle(CastlingRights.WHITE_KINGSIDE, H1, F1, _mask(F1, G1), _mask(F1, G1)),
    (E1, C1): _Castle(
        CastlingRights.WHITE_QUEENSIDE, A1, D1, _mask(B1, C1, D1), _mask(C1, D1)
    ),
    (E8, G8): _Castle(CastlingRights.BLACK_KINGSIDE, H8, F8, _mask(F8, G8), _mask(F8, G8)),
    (E8, C8): _Castle(
        CastlingRights.BLACK_QUEENSIDE, A8, D8, _mask(B8, C8, D8), _mask(C8, D8)
    ),
}

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class EnemyAttacks:
    """Every square the non-reference side attacks."""

    enemy_attack_bitboard: Bitboard


# -- Per-piece generation --------------------------------------------------


def _slide(
    rays: tuple[tuple[Square, ...], ...],
    own: Bitboard,
    enemy: Bitboard,
    attack_only: bool,
) -> Bitboard:
    occupied = own | enemy
    moves = 0
    for ray in rays:
        for to_sq in ray:
            bit = 1 << to_sq
            if occupied & bit:
                if attack_only or enemy & bit:
                    moves |= bit
                break
            moves |= bit
    return moves


def _pawn_moves(
    sq: Square,
    color: Color,
    own: Bitboard,
    enemy: Bitboard,
    attack_only: bool,
    en_passant_target: Square | None,
) -> Bitboard:
    attacks = _PAWN_ATTACKS[color][sq]
    if attack_only:
        return attacks

    targets = enemy
    if en_passant_target is not None and rank_of(en_passant_target) == _EN_PASSANT_RANK[color]:
        targets |= 1 << en_passant_target
    moves = attacks & targets

    occupied = own | enemy
    one = sq + _PAWN_PUSH[color]
    if 0 <= one < 64 and not bit_on(occupied, one):
        moves |= 1 << one
        if rank_of(sq) == _PAWN_START_RANK[color]:
            two = one + _PAWN_PUSH[color]
            if not bit_on(occupied, two):
                moves |= 1 << two
    return moves


def gen_piece(
    coords: BoardCoordinates,
    team_bitboards: TeamBitboards,
    attack_only: bool,
    board: Board,
    pieces_info: PieceCatalog,
) -> Bitboard:
    """Destination bitboard for the piece at *coords*.

    With *attack_only* the result is every square the piece attacks,
    own-occupied squares included (they count as defended). Otherwise it is
    every square the piece may move to by its movement rules, without
    regard to its own king's safety and without castling.
    """
    sq = coords.bit
    color = Color.WHITE if coords.board_index < 6 else Color.BLACK
    own, enemy = team_bitboards.split(color)
    movement = pieces_info[coords.board_index].movement

    if movement is MovementKind.PAWN:
        return _pawn_moves(sq, color, own, enemy, attack_only, board.en_passant_target)
    if movement is MovementKind.KNIGHT:
        mask = _KNIGHT_MASKS[sq]
    elif movement is MovementKind.KING:
        mask = _KING_MASKS[sq]
    else:
        return _slide(_SLIDING_RAYS[movement][sq], own, enemy, attack_only)
    return mask if attack_only else mask & ~own


def gen_enemy_attacks(
    king: BoardCoordinates,
    team_bitboards: TeamBitboards,
    board: Board,
    pieces_info: PieceCatalog,
) -> EnemyAttacks:
    """Union of the attack bitboards of every piece opposing *king*."""
    enemy_color = BoardIndex(king.board_index).color.opposite
    attacks = 0
    for index in team_indexes(enemy_color):
        for bit in iter_bits(board.board[index]):
            attacks |= gen_piece(
                BoardCoordinates(index, bit), team_bitboards, True, board, pieces_info
            )
    return EnemyAttacks(attacks)


# -- Attack detection ------------------------------------------------------


def is_square_attacked(sq: Square, by_color: Color, bitboards: Sequence[Bitboard]) -> bool:
    """Is *sq* attacked by any piece of *by_color* in *bitboards*?"""
    base = 0 if by_color == Color.WHITE else 6

    # A pawn of by_color attacks sq from where an opposite pawn on sq would attack.
    if bitboards[base + PieceType.PAWN] & _PAWN_ATTACKS[by_color.opposite][sq]:
        return True
    if bitboards[base + PieceType.KNIGHT] & _KNIGHT_MASKS[sq]:
        return True
    if bitboards[base + PieceType.KING] & _KING_MASKS[sq]:
        return True

    occupied = 0
    for bitboard in bitboards:
        occupied |= bitboard
    queens = bitboards[base + PieceType.QUEEN]
    diagonal = bitboards[base + PieceType.BISHOP] | queens
    orthogonal = bitboards[base + PieceType.ROOK] | queens

    for rays, sliders in ((_BISHOP_RAYS[sq], diagonal), (_ROOK_RAYS[sq], orthogonal)):
        if not sliders:
            continue
        for ray in rays:
            for to_sq in ray:
                bit = 1 << to_sq
                if occupied & bit:
                    if sliders & bit:
                        return True
                    break
    return False


def is_in_check(board: Board) -> bool:
    """Is the side to move in check?"""
    color = board.side_to_move
    king = board.king_coordinates(color)
    return is_square_attacked(king.bit, color.opposite, board.board)


# -- Turn application ------------------------------------------------------


def _move_pieces(
    board: Board,
    index: int,
    from_sq: Square,
    to_sq: Square,
) -> tuple[list[Bitboard], int | None]:
    """Bitboards after moving the piece; also returns the captured board index."""
    color = Color.WHITE if index < 6 else Color.BLACK
    piece_type = index % 6
    bitboards = list(board.board)
    to_bit = 1 << to_sq

    captured_index: int | None = None
    capture_sq = to_sq
    for i in team_indexes(color.opposite):
        if bitboards[i] & to_bit:
            captured_index = i
            break

    if piece_type == PieceType.PAWN:
        # Diagonal step onto an empty square can only be en passant.
        if captured_index is None and file_of(from_sq) != file_of(to_sq):
            pawn_index = BoardIndex.of(color.opposite, PieceType.PAWN)
            pawn_sq = to_sq - _PAWN_PUSH[color]
            if bitboards[pawn_index] & (1 << pawn_sq):
                capture_sq = pawn_sq
                captured_index = pawn_index

    if captured_index is not None:
        bitboards[captured_index] &= ~(1 << capture_sq)

    bitboards[index] &= ~(1 << from_sq)
    placed = index
    if piece_type == PieceType.PAWN and rank_of(to_sq) == _PAWN_PROMOTION_RANK[color]:
        placed = BoardIndex.of(color, PieceType.QUEEN)
    bitboards[placed] |= to_bit

    castle = _CASTLES.get((from_sq, to_sq)) if piece_type == PieceType.KING else None
    if castle is not None:
        rook_index = BoardIndex.of(color, PieceType.ROOK)
        bitboards[rook_index] = (
            bitboards[rook_index] & ~(1 << castle.rook_from)
        ) | (1 << castle.rook_to)

    return bitboards, captured_index


def _check_castle(
    castle: _Castle,
    king: BoardCoordinates,
    enemy_attacks: EnemyAttacks,
    board: Board,
) -> None:
    color = BoardIndex(king.board_index).color
    attacked = enemy_attacks.enemy_attack_bitboard
    rook_index = BoardIndex.of(color, PieceType.ROOK)
    if not board.castling & castle.right:
        raise InvalidMove(f"No {castle.right.name} castling right")
    if not board.occupied(rook_index, castle.rook_from):
        raise InvalidMove(f"No rook on {square_name(castle.rook_from)} to castle with")
    if board.occupancy & castle.empty:
        raise InvalidMove("Castling path is blocked")
    if bit_on(attacked, king.bit) or attacked & castle.safe:
        raise InvalidMove("Cannot castle out of, through or into check")


def _update_castling(
    castling: CastlingRights,
    index: int,
    from_sq: Square,
    to_sq: Square,
) -> CastlingRights:
    if index == BoardIndex.WHITE_KING:
        castling &= ~CastlingRights.WHITE_BOTH
    elif index == BoardIndex.BLACK_KING:
        castling &= ~CastlingRights.BLACK_BOTH
    for sq in (from_sq, to_sq):
        if sq in _ROOK_CORNERS:
            castling &= ~_ROOK_CORNERS[sq]
    return castling


def has_legal_move(board: Board, pieces_info: PieceCatalog) -> bool:
    """Whether the side to move has at least one legal move.

    Castling is never the only legal move (the king could step to the
    square it crosses), so it is not considered here.
    """
    color = board.side_to_move
    king = board.king_coordinates(color)
    team_bitboards = TeamBitboards.from_board(king.board_index, board)
    for index in team_indexes(color):
        for bit in iter_bits(board.board[index]):
            coords = BoardCoordinates(index, bit)
            moves = gen_piece(coords, team_bitboards, False, board, pieces_info)
            for to_sq in iter_bits(moves):
                bitboards, _ = _move_pieces(board, index, bit, to_sq)
                king_sq = to_sq if index == king.board_index else king.bit
                if not is_square_attacked(king_sq, color.opposite, bitboards):
                    return True
    return False


def _check_game_over(board: Board, king: BoardCoordinates, pieces_info: PieceCatalog) -> None:
    """Raise ``Win``/``Draw`` if *board* ends the game; *king* is the side to move's."""
    if not has_legal_move(board, pieces_info):
        mover = board.side_to_move.opposite
        if is_square_attacked(king.bit, mover, board.board):
            raise Win(mover, board)
        raise Draw(DrawReason.STALEMATE, board)

    reason = Rules.draw_reason(board)
    if reason is not None:
        raise Draw(reason, board)


def new_turn(
    initial: BoardCoordinates,
    final_bit: Square,
    friendly_king: BoardCoordinates,
    enemy_king: BoardCoordinates,
    enemy_attacks: EnemyAttacks,
    team_bitboards: TeamBitboards,
    board: Board,
    pieces_info: PieceCatalog,
) -> Board:
    """Validate and play one half-move, returning the resulting board.

    Raises :class:`InvalidMove` or :class:`InvalidMoveCheck` when the move
    cannot be played, and :class:`Win` or :class:`Draw` when it ends the game.
    """
    index = initial.board_index
    color = board.side_to_move

    if index not in team_indexes(color) or not board.occupied(index, initial.bit):
        raise InvalidMove(f"No {color} piece at {initial}")
    if not 0 <= final_bit < 64:
        raise InvalidMove(f"Destination {final_bit} is off the board")

    castle = None
    if initial == friendly_king and initial.bit == _KING_HOME[color]:
        castle = _CASTLES.get((initial.bit, final_bit))
    if castle is not None:
        _check_castle(castle, friendly_king, enemy_attacks, board)
    else:
        moves = gen_piece(initial, team_bitboards, False, board, pieces_info)
        if not bit_on(moves, final_bit):
            raise InvalidMove(
                f"{square_name(initial.bit)}{square_name(final_bit)} is not a legal destination"
            )

    bitboards, captured_index = _move_pieces(board, index, initial.bit, final_bit)

    king_sq = final_bit if index == friendly_king.board_index else friendly_king.bit
    if is_square_attacked(king_sq, color.opposite, bitboards):
        raise InvalidMoveCheck(
            f"{square_name(initial.bit)}{square_name(final_bit)} leaves the king in check"
        )

    points_delta = pieces_info[captured_index].value if captured_index is not None else 0
    is_pawn = pieces_info[index].movement is MovementKind.PAWN
    en_passant_target: Square | None = None
    if is_pawn and abs(final_bit - initial.bit) == 16:
        en_passant_target = (initial.bit + final_bit) // 2

    if is_pawn or captured_index is not None:
        half_move_clock = 0
    else:
        half_move_clock = board.half_move_clock + 1

    new_board = Board(
        board=tuple(bitboards),
        whites_move=not board.whites_move,
        points=board.points.add(color, points_delta),
        points_delta=points_delta,
        half_moves=board.half_moves + 1,
        half_move_clock=half_move_clock,
        en_passant_target=en_passant_target,
        castling=_update_castling(board.castling, index, initial.bit, final_bit),
    )
    _check_game_over(new_board, enemy_king, pieces_info)
    return new_board
