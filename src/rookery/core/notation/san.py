"""Simplified algebraic notation for the move history."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import PieceType

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.move import Move

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def move_to_notation(
    move: Move,
    board_before: Board,
    is_check: bool = False,
    is_mate: bool = False,
) -> str:
    """Render *move* as simplified SAN given the board before it was played.

    No origin file or rank is added when two like pieces can reach the same
    square; pawn captures carry their origin file.
    """
    if move.is_castling:
        san = "O-O" if move.to_sq.col > move.from_sq.col else "O-O-O"
    else:
        piece = board_before[move.from_sq] or move.piece
        san = ""
        if piece.piece_type != PieceType.PAWN:
            san += _SAN_PIECE[piece.piece_type]

        if move.is_capture:
            if piece.piece_type == PieceType.PAWN:
                san += move.from_sq.file
            san += "x"

        san += move.to_sq.name

        if move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]

    if is_mate:
        san += "#"
    elif is_check:
        san += "+"
    return san
