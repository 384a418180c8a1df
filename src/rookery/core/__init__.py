"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from rookery.core import create_initial_state, execute_move, legal_moves
    from rookery.core.types import E2, E4

    state = create_initial_state()
    move = next(m for m in legal_moves(state, E2) if m.to_sq == E4)
    state = execute_move(state, move)
    print(state.history[-1].notation)  # e4
"""

from rookery.core.board import Board
from rookery.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    GameResult,
    PieceType,
)
from rookery.core.errors import (
    ChessError,
    IllegalMoveError,
    InvalidPromotionError,
    MissingKingError,
)
from rookery.core.executor import execute_move
from rookery.core.move import Move
from rookery.core.move_generator import (
    MoveGenerator,
    all_legal_moves,
    find_legal_move,
    is_in_check,
    is_square_attacked,
    legal_moves,
)
from rookery.core.notation import (
    STARTING_FEN,
    move_to_notation,
    state_from_fen,
    state_to_fen,
)
from rookery.core.piece import Piece
from rookery.core.rules import Rules
from rookery.core.state import GameState, create_initial_state
from rookery.core.types import Square, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "PieceType",
    "PROMOTION_TYPES",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "InvalidPromotionError",
    "MissingKingError",
    # Types / helpers
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Operations
    "all_legal_moves",
    "create_initial_state",
    "execute_move",
    "find_legal_move",
    "is_in_check",
    "is_square_attacked",
    "legal_moves",
    # Notation
    "STARTING_FEN",
    "move_to_notation",
    "state_from_fen",
    "state_to_fen",
]
