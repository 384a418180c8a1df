"""Errors raised by the session layer when a player breaks the table rules."""

from __future__ import annotations

from rookery.core.errors import ChessError


class SessionError(ChessError):
    """Base class for session-level rejections."""


class SessionFullError(SessionError):
    """Both seats of the game are already taken."""


class NotYourTurnError(SessionError):
    """The requester is not seated as the side to move."""


class WaitingForOpponentError(SessionError):
    """A move was submitted before the second seat was filled."""


class GameFinishedError(SessionError):
    """The game already ended in checkmate or stalemate."""


class UnknownGameError(SessionError):
    """No session is registered under the requested game id."""
