"""Tests for algebraic notation and FEN."""

from __future__ import annotations

import pytest

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.executor import execute_move
from rookery.core.move import Move
from rookery.core.move_generator import find_legal_move
from rookery.core.notation import (
    STARTING_FEN,
    move_to_notation,
    state_from_fen,
    state_to_fen,
)
from rookery.core.piece import Piece
from rookery.core.state import GameState, create_initial_state
from rookery.core.types import (
    A6,
    B1,
    C3,
    D5,
    E1,
    E2,
    E4,
    E7,
    E8,
    F1,
    F3,
    G1,
    H1,
    parse_square,
)


def play(state: GameState, *moves: str) -> GameState:
    for text in moves:
        move = find_legal_move(state, parse_square(text[:2]), parse_square(text[2:4]))
        state = execute_move(state, move)
    return state


# ── Algebraic notation ───────────────────────────────────────────────────────


class TestMoveToNotation:
    def test_pawn_push(self) -> None:
        board = Board.initial()
        move = Move(E2, E4, Piece(Color.WHITE, PieceType.PAWN))
        assert move_to_notation(move, board) == "e4"

    def test_knight_move(self) -> None:
        board = Board.initial()
        assert move_to_notation(Move(G1, F3, board[G1]), board) == "Nf3"
        assert move_to_notation(Move(B1, C3, board[B1]), board) == "Nc3"

    def test_castling(self) -> None:
        board = Board()
        board[E1] = Piece(Color.WHITE, PieceType.KING)
        board[H1] = Piece(Color.WHITE, PieceType.ROOK)
        move = Move(E1, G1, board[E1], is_castling=True)
        assert move_to_notation(move, board) == "O-O"
        assert move_to_notation(move, board, is_check=True) == "O-O+"

    def test_pawn_capture(self) -> None:
        state = play(create_initial_state(), "e2e4", "d7d5")
        move = find_legal_move(state, E4, D5)
        assert move_to_notation(move, state.board) == "exd5"

    def test_piece_capture(self) -> None:
        board = Board()
        board[F1] = Piece(Color.WHITE, PieceType.BISHOP)
        board[A6] = Piece(Color.BLACK, PieceType.KNIGHT)
        move = Move(F1, A6, board[F1], captured=board[A6])
        assert move_to_notation(move, board) == "Bxa6"

    def test_promotion_with_check(self) -> None:
        board = Board()
        board[E7] = Piece(Color.WHITE, PieceType.PAWN)
        move = Move(E7, E8, board[E7], promotion=PieceType.QUEEN)
        assert move_to_notation(move, board, is_check=True) == "e8=Q+"

    def test_mate_suffix_wins_over_check(self) -> None:
        board = Board.initial()
        move = Move(G1, F3, board[G1])
        assert move_to_notation(move, board, is_check=True, is_mate=True) == "Nf3#"

    def test_history_records_notation(self) -> None:
        state = play(
            create_initial_state(),
            "e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6", "e1g1",
        )
        assert [m.notation for m in state.history] == [
            "e4", "e5", "Nf3", "Nc6", "Bc4", "Nf6", "O-O",
        ]


# ── FEN ──────────────────────────────────────────────────────────────────────


class TestFen:
    def test_starting_position(self) -> None:
        assert state_from_fen(STARTING_FEN) == create_initial_state()
        assert state_to_fen(create_initial_state()) == STARTING_FEN

    def test_after_double_push(self) -> None:
        state = play(create_initial_state(), "e2e4")
        assert state_to_fen(state) == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )

    @pytest.mark.parametrize(
        "fen",
        [
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8",
            "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w Kq d6 0 3",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert state_to_fen(state_from_fen(fen)) == fen

    def test_partial_fields(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/4K3 b Kq -")
        assert state.turn == Color.BLACK
        assert state.castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )
        assert state.halfmove_clock == 0
        assert state.fullmove_number == 1

    def test_flags_computed(self) -> None:
        state = state_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert state.is_check
        assert state.is_checkmate

    def test_flags_skipped_without_king(self) -> None:
        state = state_from_fen("8/8/8/8/8/8/4P3/8 w - - 0 1")
        assert not state.is_check
        assert not state.is_game_over

    @pytest.mark.parametrize(
        "fen",
        [
            "4k3/8/8/8/8/8/8/K3K3 w - - 0 1",
            "k3k3/8/8/8/8/8/8/4K3 b - - 0 1",
        ],
    )
    def test_duplicate_king_rejected(self, fen: str) -> None:
        with pytest.raises(ValueError, match="more than one"):
            state_from_fen(fen)

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
            "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/ppppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/7/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppx/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KX - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KK - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq z9 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - a 1",
        ],
    )
    def test_invalid(self, fen: str) -> None:
        with pytest.raises(ValueError):
            state_from_fen(fen)
