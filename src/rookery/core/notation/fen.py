"""FEN parsing and serialization for setting up and inspecting positions."""

from __future__ import annotations

from dataclasses import replace

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.piece import Piece
from rookery.core.rules import Rules
from rookery.core.state import GameState
from rookery.core.types import Square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def _parse_placement(placement: str, fen: str) -> Board:
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for row, row_text in enumerate(rows):
        col = 0
        for ch in row_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                piece = Piece.from_char(ch)
                if piece.piece_type == PieceType.KING and board.has_king(piece.color):
                    raise ValueError(
                        f"Invalid FEN (more than one {piece.color} king): {fen!r}"
                    )
                board[Square(row, col)] = piece
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    return board


def state_from_fen(fen: str) -> GameState:
    """Parse a FEN string into a :class:`GameState` with an empty history.

    Check and terminal flags are computed for the side to move when its king
    is on the board; otherwise they are left unset.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = _parse_placement(placement, fen)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        # White to move captures onto rank 6, black onto rank 3.
        expected_rank = 6 if side == Color.WHITE else 3
        if ep.rank != expected_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    try:
        halfmove = int(parts[4]) if len(parts) > 4 else 0
        fullmove = int(parts[5]) if len(parts) > 5 else 1
    except ValueError:
        raise ValueError(f"Invalid FEN clock fields: {fen!r}") from None
    if halfmove < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    if fullmove < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    state = GameState(
        board=board,
        turn=side,
        castling=castling,
        en_passant=ep,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    )
    if not board.has_king(side):
        return state

    in_check = Rules.is_in_check(state)
    mate, stalemate = Rules.terminal_flags(state, in_check)
    return replace(state, is_check=in_check, is_checkmate=mate, is_stalemate=stalemate)


def state_to_fen(state: GameState) -> str:
    """Serialise a :class:`GameState` to FEN."""
    rows: list[str] = []
    for grid_row in state.board.rows():
        empty = 0
        row = ""
        for piece in grid_row:
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)

    side_str = "w" if state.turn == Color.WHITE else "b"
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if state.castling & right
    )
    ep_str = state.en_passant.name if state.en_passant is not None else "-"

    return (
        f"{'/'.join(rows)} {side_str} {castling_str or '-'} {ep_str} "
        f"{state.halfmove_clock} {state.fullmove_number}"
    )
