"""SessionManager — registry of live games keyed by game id."""

from __future__ import annotations

import logging
import threading

from rookery.core.enums import Color
from rookery.session.errors import UnknownGameError
from rookery.session.session import GameSession
from rookery.session.settings import SessionSettings

_LOGGER = logging.getLogger(__name__)


class SessionManager:
    """Owns one :class:`GameSession` per game id.

    Sessions are created on first join and dropped once their last player
    leaves.
    """

    __slots__ = ("_settings", "_sessions", "_lock")

    def __init__(self, settings: SessionSettings | None = None) -> None:
        self._settings = settings if settings is not None else SessionSettings()
        self._sessions: dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def __contains__(self, game_id: object) -> bool:
        with self._lock:
            return game_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def game_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._sessions)

    def get(self, game_id: str) -> GameSession:
        with self._lock:
            session = self._sessions.get(game_id)
        if session is None:
            raise UnknownGameError(f"No game {game_id!r}")
        return session

    def join(self, game_id: str, player_id: str) -> tuple[GameSession, Color]:
        """Seat *player_id* in *game_id*, creating the game if needed.

        Seat callbacks run without the registry lock held, so observers may
        query the manager.
        """
        with self._lock:
            session = self._sessions.get(game_id)
            if session is None:
                session = GameSession(game_id, self._settings)
                self._sessions[game_id] = session
                _LOGGER.info("Game %s created", game_id)
        color = session.join(player_id)
        with self._lock:
            # A concurrent last leave may have dropped the game meanwhile.
            self._sessions.setdefault(game_id, session)
        return session, color

    def leave(self, game_id: str, player_id: str) -> Color | None:
        """Free *player_id*'s seat; the game is dropped when nobody is left."""
        with self._lock:
            session = self._sessions.get(game_id)
        if session is None:
            return None

        color = session.leave(player_id)
        with self._lock:
            # Only drop the entry if it is still this session and nobody rejoined.
            if self._sessions.get(game_id) is session and session.is_empty:
                del self._sessions[game_id]
                _LOGGER.info("Game %s deleted", game_id)
        return color

    def discard(self, game_id: str) -> None:
        """Forget *game_id* regardless of who is seated."""
        with self._lock:
            if self._sessions.pop(game_id, None) is not None:
                _LOGGER.info("Game %s deleted", game_id)
