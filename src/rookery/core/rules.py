"""Terminal-state rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import Color, GameResult
from rookery.core.move_generator import is_in_check, legal_moves

if TYPE_CHECKING:
    from rookery.core.state import GameState


class Rules:
    """Static rule-checker that operates on a :class:`GameState`.

    Only checkmate and stalemate end a game; repetition and move-count draws
    are not evaluated.
    """

    @staticmethod
    def is_in_check(state: GameState) -> bool:
        return is_in_check(state.board, state.turn)

    @staticmethod
    def has_legal_move(state: GameState) -> bool:
        """Whether the side to move has at least one legal move."""
        board = state.board
        board.king_square(state.turn)
        return any(legal_moves(state, sq) for sq in board.occupied(state.turn))

    @staticmethod
    def terminal_flags(state: GameState, in_check: bool) -> tuple[bool, bool]:
        """``(is_checkmate, is_stalemate)`` for the side to move."""
        if Rules.has_legal_move(state):
            return False, False
        return in_check, not in_check

    @staticmethod
    def is_checkmate(state: GameState) -> bool:
        return Rules.is_in_check(state) and not Rules.has_legal_move(state)

    @staticmethod
    def is_stalemate(state: GameState) -> bool:
        return not Rules.is_in_check(state) and not Rules.has_legal_move(state)

    @staticmethod
    def game_result(state: GameState) -> GameResult:
        """Determine the result from the board, ignoring cached flags."""
        in_check = Rules.is_in_check(state)
        mate, stalemate = Rules.terminal_flags(state, in_check)
        if mate:
            return (
                GameResult.BLACK_WINS
                if state.turn == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if stalemate:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
