"""GameSession — one game's state, seats and observers.

Takes untyped ``(from, to, promotion?)`` requests from seated players,
checks seat ownership and turn, selects the matching legal move and runs it
through the executor.  Emits events via simple callbacks so a transport or
UI layer can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from rookery.core.enums import Color, GameResult, PieceType
from rookery.core.errors import ChessError, IllegalMoveError, InvalidPromotionError
from rookery.core.executor import execute_move
from rookery.core.move import Move
from rookery.core.move_generator import find_legal_move, legal_moves
from rookery.core.state import GameState
from rookery.core.types import parse_square
from rookery.session.errors import (
    GameFinishedError,
    NotYourTurnError,
    SessionFullError,
    WaitingForOpponentError,
)
from rookery.session.settings import SessionSettings

_LOGGER = logging.getLogger(__name__)

_PROMOTION_CHARS: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameState], None]  # recorded move, new state
GameOverCallback = Callable[[GameResult], None]
SeatCallback = Callable[[str, Color], None]  # player id, seat color


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_player_joined: list[SeatCallback] = field(default_factory=list)
    on_player_left: list[SeatCallback] = field(default_factory=list)


def parse_promotion(text: str | None) -> PieceType | None:
    """Map a promotion letter (``q``, ``r``, ``b``, ``n``) to a piece type."""
    if not text:
        return None
    try:
        return _PROMOTION_CHARS[text.lower()]
    except KeyError:
        raise InvalidPromotionError(f"Invalid promotion piece: {text!r}") from None


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Two seats (white first, then black) around one evolving :class:`GameState`.

    Thread-safety: seat changes and moves are serialized by a per-session
    lock, so at most one transition is in flight.  Callbacks run on the
    calling thread after the lock is released.
    """

    __slots__ = ("game_id", "settings", "events", "_state", "_seats", "_lock")

    def __init__(self, game_id: str, settings: SessionSettings | None = None) -> None:
        self.game_id = game_id
        self.settings = settings if settings is not None else SessionSettings()
        self.events = SessionEvents()
        self._state = self.settings.initial_state()
        self._seats: dict[Color, str] = {}
        self._lock = threading.Lock()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def players(self) -> dict[Color, str]:
        with self._lock:
            return dict(self._seats)

    @property
    def is_ready(self) -> bool:
        """Whether both seats are filled."""
        with self._lock:
            return len(self._seats) == 2

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._seats

    def color_of(self, player_id: str) -> Color | None:
        with self._lock:
            return self._seat_of(player_id)

    # ── Seats ────────────────────────────────────────────────────────────

    def join(self, player_id: str) -> Color:
        """Seat *player_id* and return its color; rejoining keeps the seat."""
        with self._lock:
            color = self._seat_of(player_id)
            if color is not None:
                return color
            for candidate in (Color.WHITE, Color.BLACK):
                if candidate not in self._seats:
                    color = candidate
                    break
            else:
                raise SessionFullError(f"Game {self.game_id!r} is full")
            self._seats[color] = player_id

        _LOGGER.info("%s joined game %s as %s", player_id, self.game_id, color)
        for cb in self.events.on_player_joined:
            cb(player_id, color)
        return color

    def leave(self, player_id: str) -> Color | None:
        """Free *player_id*'s seat; returns the color it held, if any."""
        with self._lock:
            color = self._seat_of(player_id)
            if color is None:
                return None
            del self._seats[color]

        _LOGGER.info("%s left game %s", player_id, self.game_id)
        for cb in self.events.on_player_left:
            cb(player_id, color)
        return color

    # ── Moves ────────────────────────────────────────────────────────────

    def legal_moves(self, square: str) -> list[Move]:
        """Legal moves from the named square in the current state."""
        return legal_moves(self._state, parse_square(square))

    def submit_move(
        self,
        player_id: str,
        from_square: str,
        to_square: str,
        promotion: str | None = None,
    ) -> GameState:
        """Validate and play a move request; returns the new state.

        Raises a :class:`~rookery.core.errors.ChessError` subclass when the
        request is rejected; the state is then unchanged.
        """
        try:
            with self._lock:
                new_state = self._apply(player_id, from_square, to_square, promotion)
        except ChessError as exc:
            _LOGGER.warning(
                "Rejected move %s-%s by %s in game %s: %s",
                from_square,
                to_square,
                player_id,
                self.game_id,
                exc,
            )
            raise

        recorded = new_state.history[-1]
        _LOGGER.info("Move in game %s: %s", self.game_id, recorded.notation)
        for cb in self.events.on_move:
            cb(recorded, new_state)

        if new_state.is_game_over:
            _LOGGER.info("Game %s over: %s", self.game_id, new_state.result.name)
            for game_over_cb in self.events.on_game_over:
                game_over_cb(new_state.result)
        return new_state

    def reset(self) -> None:
        """Start a fresh game with the same seats."""
        with self._lock:
            self._state = self.settings.initial_state()
        _LOGGER.info("Game %s reset", self.game_id)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _seat_of(self, player_id: str) -> Color | None:
        for color, seated in self._seats.items():
            if seated == player_id:
                return color
        return None

    def _apply(
        self,
        player_id: str,
        from_square: str,
        to_square: str,
        promotion: str | None,
    ) -> GameState:
        state = self._state
        if state.is_game_over:
            raise GameFinishedError(f"Game {self.game_id!r} is over")

        if self._seat_of(player_id) != state.turn:
            raise NotYourTurnError("Not your turn")
        if self.settings.require_opponent and len(self._seats) < 2:
            raise WaitingForOpponentError("Waiting for opponent")

        try:
            from_sq = parse_square(from_square)
            to_sq = parse_square(to_square)
        except ValueError as exc:
            raise IllegalMoveError(str(exc)) from exc

        piece_type = parse_promotion(promotion) or self.settings.default_promotion
        move = find_legal_move(state, from_sq, to_sq, piece_type)
        self._state = execute_move(state, move)
        return self._state
