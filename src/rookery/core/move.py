"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import PieceType
from rookery.core.piece import Piece
from rookery.core.types import Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single ply.

    ``captured`` is the piece actually removed from the board.  For en passant
    it stands on the mover's row in the destination column, not on ``to_sq``.
    ``notation`` is filled in only on moves recorded in a game's history.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    promotion: PieceType | None = None
    is_castling: bool = False
    is_en_passant: bool = False
    notation: str | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None or self.is_en_passant

    @property
    def capture_square(self) -> Square | None:
        """Square the captured piece is removed from."""
        if self.is_en_passant:
            return Square(self.from_sq.row, self.to_sq.col)
        if self.captured is not None:
            return self.to_sq
        return None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_sq.name}{self.to_sq.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
