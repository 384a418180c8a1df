"""Qt bridge exposing a game session to a rendering layer via signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from rookery.core.enums import Color, GameResult
from rookery.core.errors import ChessError
from rookery.core.move import Move
from rookery.core.state import GameState
from rookery.session.session import GameSession


class SessionBridge(QObject):
    """Re-emits :class:`GameSession` events as Qt signals.

    Rejected requests never raise into the event loop; they surface as
    ``move_rejected(game_id, player_id, message)``.
    """

    move_made = pyqtSignal(str, object, object)  # game id, Move, GameState
    game_over = pyqtSignal(str, object)  # game id, GameResult
    move_rejected = pyqtSignal(str, str, str)
    player_joined = pyqtSignal(str, str, object)  # game id, player id, Color
    player_left = pyqtSignal(str, str, object)

    def __init__(self, session: GameSession, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._session = session
        events = session.events
        events.on_move.append(self._on_move)
        events.on_game_over.append(self._on_game_over)
        events.on_player_joined.append(self._on_player_joined)
        events.on_player_left.append(self._on_player_left)

    @property
    def session(self) -> GameSession:
        return self._session

    @pyqtSlot(str, str, str, str)
    def submit_move(
        self, player_id: str, from_square: str, to_square: str, promotion: str = ""
    ) -> None:
        """Forward a move request; failures are reported via ``move_rejected``."""
        try:
            self._session.submit_move(player_id, from_square, to_square, promotion)
        except ChessError as exc:
            self.move_rejected.emit(self._session.game_id, player_id, str(exc))

    def detach(self) -> None:
        """Stop relaying the session's events."""
        events = self._session.events
        events.on_move.remove(self._on_move)
        events.on_game_over.remove(self._on_game_over)
        events.on_player_joined.remove(self._on_player_joined)
        events.on_player_left.remove(self._on_player_left)

    # ── Session callbacks ────────────────────────────────────────────────

    def _on_move(self, move: Move, state: GameState) -> None:
        self.move_made.emit(self._session.game_id, move, state)

    def _on_game_over(self, result: GameResult) -> None:
        self.game_over.emit(self._session.game_id, result)

    def _on_player_joined(self, player_id: str, color: Color) -> None:
        self.player_joined.emit(self._session.game_id, player_id, color)

    def _on_player_left(self, player_id: str, color: Color) -> None:
        self.player_left.emit(self._session.game_id, player_id, color)
