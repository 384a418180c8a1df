"""Whole-engine node counts: legal moves plus executed state transitions.

Each inner ply goes through ``execute_move`` on an immutable state; the last
ply is counted straight from ``all_legal_moves``.  Expected totals are the
published counts from https://www.chessprogramming.org/Perft_Results.
"""

import pytest

from rookery.core.executor import execute_move
from rookery.core.move_generator import all_legal_moves
from rookery.core.notation import STARTING_FEN, state_from_fen
from rookery.core.state import GameState, create_initial_state


def perft(state: GameState, depth: int) -> int:
    """Count leaf nodes at *depth*, counting the last ply in bulk."""
    moves = all_legal_moves(state)
    if depth == 1:
        return len(moves)
    return sum(perft(execute_move(state, move), depth - 1) for move in moves)


KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
ENDGAME_EP = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"
PROMOTIONS = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"
MIDGAME = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"

# (fen, depth, nodes)
QUICK_COUNTS = [
    (STARTING_FEN, 1, 20),
    (STARTING_FEN, 2, 400),
    (STARTING_FEN, 3, 8_902),
    (KIWIPETE, 1, 48),
    (KIWIPETE, 2, 2_039),
    (ENDGAME_EP, 1, 14),
    (ENDGAME_EP, 2, 191),
    (ENDGAME_EP, 3, 2_812),
    (PROMOTIONS, 1, 6),
    (PROMOTIONS, 2, 264),
    (MIDGAME, 1, 44),
    (MIDGAME, 2, 1_486),
]

DEEP_COUNTS = [
    (KIWIPETE, 3, 97_862),
    (PROMOTIONS, 3, 9_467),
    (MIDGAME, 3, 62_379),
]


class TestNodeCounts:
    def test_initial_state_matches_fen(self) -> None:
        assert perft(create_initial_state(), 2) == perft(
            state_from_fen(STARTING_FEN), 2
        )

    @pytest.mark.parametrize(("fen", "depth", "nodes"), QUICK_COUNTS)
    def test_quick(self, fen: str, depth: int, nodes: int) -> None:
        assert perft(state_from_fen(fen), depth) == nodes

    @pytest.mark.slow
    @pytest.mark.parametrize(("fen", "depth", "nodes"), DEEP_COUNTS)
    def test_deep(self, fen: str, depth: int, nodes: int) -> None:
        assert perft(state_from_fen(fen), depth) == nodes
