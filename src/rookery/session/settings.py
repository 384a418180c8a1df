"""Per-game session configuration."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import PROMOTION_TYPES, PieceType
from rookery.core.errors import InvalidPromotionError
from rookery.core.notation.fen import state_from_fen
from rookery.core.state import GameState, create_initial_state


@dataclass(frozen=True, slots=True)
class SessionSettings:
    """Options shared by every game a :class:`SessionManager` creates.

    Args:
        start_fen: Custom starting position; ``None`` for the standard one.
        require_opponent: Reject moves until both seats are filled.
        default_promotion: Piece used when a promoting request names none.
    """

    start_fen: str | None = None
    require_opponent: bool = True
    default_promotion: PieceType = PieceType.QUEEN

    def __post_init__(self) -> None:
        if self.default_promotion not in PROMOTION_TYPES:
            raise InvalidPromotionError(
                f"Cannot promote to {self.default_promotion!r}"
            )

    def initial_state(self) -> GameState:
        if self.start_fen is None:
            return create_initial_state()
        return state_from_fen(self.start_fen)
