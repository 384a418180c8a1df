"""Notation package: FEN position setup and simplified SAN."""

from rookery.core.notation.fen import STARTING_FEN, state_from_fen, state_to_fen
from rookery.core.notation.san import move_to_notation

__all__ = [
    "STARTING_FEN",
    "state_from_fen",
    "state_to_fen",
    "move_to_notation",
]
