"""Session layer — seats, turn ownership and a registry of live games.

Quick start::

    from rookery.session import SessionManager

    manager = SessionManager()
    session, _ = manager.join("room-1", "alice")
    manager.join("room-1", "bob")
    session.submit_move("alice", "e2", "e4")

The PyQt6 bridge lives in :mod:`rookery.session.qt_bridge` and is imported
separately.
"""

from rookery.session.errors import (
    GameFinishedError,
    NotYourTurnError,
    SessionError,
    SessionFullError,
    UnknownGameError,
    WaitingForOpponentError,
)
from rookery.session.manager import SessionManager
from rookery.session.session import GameSession, SessionEvents, parse_promotion
from rookery.session.settings import SessionSettings

__all__ = [
    # Errors
    "GameFinishedError",
    "NotYourTurnError",
    "SessionError",
    "SessionFullError",
    "UnknownGameError",
    "WaitingForOpponentError",
    # Concrete
    "GameSession",
    "SessionEvents",
    "SessionManager",
    "SessionSettings",
    "parse_promotion",
]
