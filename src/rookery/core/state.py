"""GameState — immutable snapshot of a game between two plies."""

from __future__ import annotations

from dataclasses import dataclass, field

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, GameResult, PieceType
from rookery.core.move import Move
from rookery.core.types import Square

CapturedPieces = tuple[tuple[PieceType, ...], tuple[PieceType, ...]]


@dataclass(frozen=True, slots=True)
class GameState:
    """Board plus side to move, castling, en passant, clocks and history.

    States are never updated in place: :func:`~rookery.core.executor.execute_move`
    builds a new one with its own board.  Callers must treat ``board`` as
    read-only.

    ``captured`` is indexed by the color of the captured pieces, so
    ``captured[Color.BLACK]`` lists what white has taken.
    """

    board: Board = field(default_factory=Board.initial)
    turn: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    history: tuple[Move, ...] = ()
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False
    captured: CapturedPieces = ((), ())

    def captured_pieces(self, color: Color) -> tuple[PieceType, ...]:
        """Types of *color*'s pieces removed from the board so far."""
        return self.captured[color]

    @property
    def is_game_over(self) -> bool:
        return self.is_checkmate or self.is_stalemate

    @property
    def result(self) -> GameResult:
        if self.is_checkmate:
            # The side to move is the one that got mated.
            return (
                GameResult.BLACK_WINS
                if self.turn == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if self.is_stalemate:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    @property
    def last_move(self) -> Move | None:
        return self.history[-1] if self.history else None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)


def create_initial_state() -> GameState:
    """Standard starting position, white to move, all castling rights."""
    return GameState()
