"""Exceptions raised when a caller breaks the engine's contract."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by rookery."""


class IllegalMoveError(ChessError, ValueError):
    """The submitted move is not in the legal-move set of its origin square."""


class MissingKingError(ChessError, ValueError):
    """The board has no king for the side being queried."""


class InvalidPromotionError(ChessError, ValueError):
    """Promotion piece is not one of queen, rook, bishop or knight, or the move
    does not promote at all."""
