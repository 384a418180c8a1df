"""Move executor — turns ``(state, move)`` into the next :class:`GameState`."""

from __future__ import annotations

import logging
from dataclasses import replace

from rookery.core.enums import PROMOTION_TYPES, CastlingRights, Color, PieceType
from rookery.core.errors import IllegalMoveError, InvalidPromotionError
from rookery.core.move import Move
from rookery.core.move_generator import apply_to_board, legal_moves
from rookery.core.notation.san import move_to_notation
from rookery.core.piece import Piece
from rookery.core.rules import Rules
from rookery.core.state import CapturedPieces, GameState
from rookery.core.types import A1, A8, H1, H8, Square

_LOGGER = logging.getLogger(__name__)

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}


def _check_promotion(piece_type: PieceType | None) -> None:
    if piece_type is not None and piece_type not in PROMOTION_TYPES:
        raise InvalidPromotionError(f"Cannot promote to {piece_type!r}")


def _resolve_move(
    state: GameState, move: Move, promotion_override: PieceType | None
) -> Move:
    """Find the generated legal move that *move* asks for."""
    _check_promotion(promotion_override)
    _check_promotion(move.promotion)

    candidates = [
        m
        for m in legal_moves(state, move.from_sq)
        if m.to_sq == move.to_sq and m.piece == move.piece
    ]
    if not candidates:
        raise IllegalMoveError(f"Illegal move: {move.uci}")

    if candidates[0].promotion is None:
        if promotion_override is not None:
            raise InvalidPromotionError(f"{move.uci} is not a promotion")
        if move.promotion is not None:
            raise IllegalMoveError(f"Illegal move: {move.uci}")
        return candidates[0]

    wanted = promotion_override or move.promotion or PieceType.QUEEN
    for candidate in candidates:
        if candidate.promotion == wanted:
            return candidate
    raise IllegalMoveError(f"Illegal move: {move.uci}")


def _next_castling(
    castling: CastlingRights, move: Move, captured: Piece | None
) -> CastlingRights:
    # Rights are only ever cleared here.
    piece = move.piece
    if piece.piece_type == PieceType.KING:
        castling &= ~CastlingRights.both(piece.color)
    if piece.piece_type == PieceType.ROOK and move.from_sq in _ROOK_CORNERS:
        castling &= ~_ROOK_CORNERS[move.from_sq]
    if (
        captured is not None
        and captured.piece_type == PieceType.ROOK
        and move.to_sq in _ROOK_CORNERS
    ):
        castling &= ~_ROOK_CORNERS[move.to_sq]
    return castling


def _next_captured(tally: CapturedPieces, captured: Piece | None) -> CapturedPieces:
    if captured is None:
        return tally
    white, black = tally
    if captured.color == Color.WHITE:
        return white + (captured.piece_type,), black
    return white, black + (captured.piece_type,)


def execute_move(
    state: GameState,
    move: Move,
    promotion_override: PieceType | None = None,
) -> GameState:
    """Apply a legal *move* and return the resulting state.

    *state* is left untouched.  Raises :class:`IllegalMoveError` when *move* is
    not among the legal moves of its origin square and
    :class:`InvalidPromotionError` for a bad promotion piece.  A promoting
    move without an explicit piece promotes to a queen.
    """
    played = _resolve_move(state, move, promotion_override)
    mover = played.piece.color

    board = state.board.copy()
    captured = apply_to_board(board, played)

    en_passant: Square | None = None
    is_pawn = played.piece.piece_type == PieceType.PAWN
    if is_pawn and abs(played.to_sq.row - played.from_sq.row) == 2:
        en_passant = Square(
            (played.from_sq.row + played.to_sq.row) // 2, played.from_sq.col
        )

    resets_clock = is_pawn or captured is not None

    next_state = GameState(
        board=board,
        turn=mover.opposite,
        castling=_next_castling(state.castling, played, captured),
        en_passant=en_passant,
        halfmove_clock=0 if resets_clock else state.halfmove_clock + 1,
        fullmove_number=state.fullmove_number + (1 if mover == Color.BLACK else 0),
        history=state.history,
        captured=_next_captured(state.captured, captured),
    )

    in_check = Rules.is_in_check(next_state)
    mate, stalemate = Rules.terminal_flags(next_state, in_check)
    recorded = replace(
        played, notation=move_to_notation(played, state.board, in_check, mate)
    )
    _LOGGER.debug("%s played %s (%s)", mover, recorded.notation, recorded.uci)

    return replace(
        next_state,
        history=state.history + (recorded,),
        is_check=in_check,
        is_checkmate=mate,
        is_stalemate=stalemate,
    )
