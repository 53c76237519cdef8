"""FEN decoding and encoding."""

from __future__ import annotations

from hallchess.core.board import BOARD_COUNT, Board
from hallchess.core.enums import CastlingRights
from hallchess.core.errors import BoardError, FenError
from hallchess.core.pieces import char_from_index, index_from_char
from hallchess.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def _int_field(text: str, name: str, minimum: int, fen: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise FenError(f"Invalid FEN {name}: {text!r} in {fen!r}") from None
    if value < minimum:
        raise FenError(f"Invalid FEN {name}: {text!r} in {fen!r}")
    return value


def fen_decode(fen: str, whites_move: bool | None = None) -> Board:
    """Parse FEN text into a :class:`Board`.

    *whites_move* gives the side to move when *fen* holds only the piece
    placement field; when *fen* carries its own active-color field the two
    must agree.
    """
    parts = fen.split()
    if not (1 <= len(parts) <= 6):
        raise FenError(f"Invalid FEN (need 1-6 fields): {fen!r}")

    # 1. Piece placement
    ranks = parts[0].split("/")
    if len(ranks) != 8:
        raise FenError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    bitboards = [0] * BOARD_COUNT
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise FenError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise FenError(f"Invalid FEN rank width: {fen!r}")
                try:
                    index = index_from_char(ch)
                except ValueError as exc:
                    raise FenError(f"{exc} in {fen!r}") from None
                bitboards[index] |= 1 << make_square(file, rank)
                file += 1
            if file > 8:
                raise FenError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise FenError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if len(parts) > 1:
        side_part = parts[1]
        if side_part not in ("w", "b"):
            raise FenError(f"Invalid FEN side-to-move field: {side_part!r}")
        white = side_part == "w"
        if whites_move is not None and whites_move != white:
            raise FenError(f"Active color flag disagrees with FEN: {fen!r}")
    elif whites_move is None:
        raise FenError(f"FEN has no side-to-move field: {fen!r}")
    else:
        white = whites_move

    # 3. Castling
    castling = CastlingRights.NONE
    castling_part = parts[2] if len(parts) > 2 else "-"
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise FenError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    ep_part = parts[3] if len(parts) > 3 else "-"
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise FenError(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_ep_rank = 5 if white else 2
        if rank_of(ep) != expected_ep_rank:
            raise FenError(f"Invalid FEN en-passant square for side-to-move: {ep_part!r}")

    # 5–6. Clocks (optional)
    half_move_clock = _int_field(parts[4], "halfmove clock", 0, fen) if len(parts) > 4 else 0
    fullmove = _int_field(parts[5], "fullmove number", 1, fen) if len(parts) > 5 else 1

    board = Board(
        board=tuple(bitboards),
        whites_move=white,
        half_moves=(fullmove - 1) * 2 + (0 if white else 1),
        half_move_clock=half_move_clock,
        en_passant_target=ep,
        castling=castling,
    )
    try:
        return board.validate()
    except BoardError as exc:
        raise FenError(f"{exc}: {fen!r}") from exc


def fen_encode(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            index = board.piece_index_at(make_square(file, rank))
            if index is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += char_from_index(index)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.whites_move else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if board.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep = board.en_passant_target
    ep_str = square_name(ep) if ep is not None else "-"

    fullmove = board.half_moves // 2 + 1
    return f"{board_str} {side_str} {castling_str} {ep_str} {board.half_move_clock} {fullmove}"
