"""Pseudo-legal move generation, attack detection and the legal-move filter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import PROMOTION_TYPES, CastlingRights, Color, PieceType
from rookery.core.errors import IllegalMoveError, InvalidPromotionError
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.types import Square

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.state import GameState


# (d_row, d_col) deltas
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


# -- Board application -------------------------------------------------------


def castling_rook_squares(move: Move) -> tuple[Square, Square]:
    """(from, to) of the rook that accompanies a castling king move."""
    row = move.from_sq.row
    if move.to_sq.col > move.from_sq.col:
        return Square(row, 7), Square(row, 5)
    return Square(row, 0), Square(row, 3)


def apply_to_board(
    board: Board, move: Move, promotion: PieceType | None = None
) -> Piece | None:
    """Play *move* on *board* in place and return the piece it removed.

    *promotion* overrides ``move.promotion``; only meaningful for moves that
    already promote.
    """
    capture_sq = move.capture_square
    captured = board[capture_sq] if capture_sq is not None else None
    if capture_sq is not None:
        board[capture_sq] = None

    placed = move.piece
    promote_to = promotion or move.promotion
    if promote_to is not None:
        placed = placed.promoted_to(promote_to)
    board[move.from_sq] = None
    board[move.to_sq] = placed

    if move.is_castling:
        rook_from, rook_to = castling_rook_squares(move)
        board[rook_to] = board[rook_from]
        board[rook_from] = None
    return captured


# -- Pseudo-legal generation -------------------------------------------------


class MoveGenerator:
    """Enumerates geometrically valid moves for one piece on a :class:`Board`.

    King safety is ignored here.  Castling and en-passant candidates are only
    produced from the *castling* rights and *en_passant* target given to the
    constructor; the attack detector passes neither.
    """

    __slots__ = ("_board", "_castling", "_en_passant")

    def __init__(
        self,
        board: Board,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
    ) -> None:
        self._board = board
        self._castling = castling
        self._en_passant = en_passant

    @classmethod
    def for_state(cls, state: GameState) -> MoveGenerator:
        return cls(state.board, state.castling, state.en_passant)

    def pseudo_legal_moves(self, sq: Square) -> list[Move]:
        """All pseudo-legal moves of the piece on *sq* (empty if vacant)."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Move] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, piece, KNIGHT_OFFSETS, moves)
        elif ptype == PieceType.KING:
            self._gen_steps(sq, piece, KING_OFFSETS, moves)
            self._gen_castling(sq, piece, moves)
        else:
            self._gen_sliding(sq, piece, _SLIDER_DIRS[ptype], moves)
        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        color = piece.color
        step = color.forward
        start_row = 6 if color == Color.WHITE else 1

        one_step = sq.offset(step, 0)
        if one_step is not None and board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, piece, None, moves)
            if sq.row == start_row:
                two_step = sq.offset(2 * step, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(Move(sq, two_step, piece))

        for d_col in (-1, 1):
            cap_sq = sq.offset(step, d_col)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, piece, target, moves)
            elif cap_sq == self._en_passant:
                victim = board[Square(sq.row, cap_sq.col)]
                if victim == Piece(color.opposite, PieceType.PAWN):
                    moves.append(
                        Move(sq, cap_sq, piece, captured=victim, is_en_passant=True)
                    )

    @staticmethod
    def _add_pawn_move(
        sq: Square,
        to_sq: Square,
        piece: Piece,
        captured: Piece | None,
        moves: list[Move],
    ) -> None:
        if to_sq.row == piece.color.opposite.home_row:
            for pt in PROMOTION_TYPES:
                moves.append(Move(sq, to_sq, piece, captured=captured, promotion=pt))
        else:
            moves.append(Move(sq, to_sq, piece, captured=captured))

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for d_row, d_col in offsets:
            to_sq = sq.offset(d_row, d_col)
            if to_sq is None:
                continue
            target = board[to_sq]
            if target is None or target.color != piece.color:
                moves.append(Move(sq, to_sq, piece, captured=target))

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        directions: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for d_row, d_col in directions:
            to_sq = sq.offset(d_row, d_col)
            while to_sq is not None:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq, piece))
                    to_sq = to_sq.offset(d_row, d_col)
                    continue
                if target.color != piece.color:
                    moves.append(Move(sq, to_sq, piece, captured=target))
                break

    def _gen_castling(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        color = piece.color
        row = color.home_row
        if sq != Square(row, 4):
            return

        board = self._board
        rook = Piece(color, PieceType.ROOK)

        if (
            self._castling & CastlingRights.kingside(color)
            and board.is_empty(Square(row, 5))
            and board.is_empty(Square(row, 6))
            and board[Square(row, 7)] == rook
        ):
            moves.append(Move(sq, Square(row, 6), piece, is_castling=True))

        if (
            self._castling & CastlingRights.queenside(color)
            and board.is_empty(Square(row, 3))
            and board.is_empty(Square(row, 2))
            and board.is_empty(Square(row, 1))
            and board[Square(row, 0)] == rook
        ):
            moves.append(Move(sq, Square(row, 2), piece, is_castling=True))


# -- Attack detection --------------------------------------------------------


def pawn_attack_squares(sq: Square, color: Color) -> list[Square]:
    """Squares a *color* pawn on *sq* attacks diagonally."""
    step = color.forward
    return [
        target
        for d_col in (-1, 1)
        if (target := sq.offset(step, d_col)) is not None
    ]


def is_square_attacked(board: Board, target: Square, by_color: Color) -> bool:
    """Is *target* attacked by any piece of *by_color*?

    Pawns attack their capture diagonals only; every other piece attacks the
    destinations the generator yields with castling and en passant disabled.
    """
    gen = MoveGenerator(board)
    for sq, piece in board.items():
        if piece.color != by_color:
            continue
        if piece.piece_type == PieceType.PAWN:
            if target in pawn_attack_squares(sq, by_color):
                return True
            continue
        for move in gen.pseudo_legal_moves(sq):
            if move.to_sq == target:
                return True
    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?"""
    return is_square_attacked(board, board.king_square(color), color.opposite)


# -- Legal move filter -------------------------------------------------------


def _leaves_king_safe(board: Board, move: Move) -> bool:
    color = move.piece.color
    if move.is_castling:
        if is_in_check(board, color):
            return False
        transit = Square(move.from_sq.row, (move.from_sq.col + move.to_sq.col) // 2)
        if is_square_attacked(board, transit, color.opposite):
            return False

    scratch = board.copy()
    apply_to_board(scratch, move)
    return not is_in_check(scratch, color)


def legal_moves(state: GameState, sq: Square) -> list[Move]:
    """Legal moves of the piece on *sq*; empty unless it belongs to the side to move."""
    board = state.board
    piece = board[sq]
    if piece is None or piece.color != state.turn:
        return []
    board.king_square(state.turn)

    candidates = MoveGenerator.for_state(state).pseudo_legal_moves(sq)
    return [move for move in candidates if _leaves_king_safe(board, move)]


def all_legal_moves(state: GameState) -> list[Move]:
    """Every legal move for the side to move."""
    board = state.board
    board.king_square(state.turn)
    moves: list[Move] = []
    for sq in board.occupied(state.turn):
        moves.extend(legal_moves(state, sq))
    return moves


def find_legal_move(
    state: GameState,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
) -> Move:
    """Select the legal move matching a ``(from, to, promotion?)`` request.

    *promotion* only matters when the move promotes; it defaults to a queen.
    """
    if promotion is not None and promotion not in PROMOTION_TYPES:
        raise InvalidPromotionError(f"Cannot promote to {promotion!r}")

    wanted = promotion or PieceType.QUEEN
    for move in legal_moves(state, from_sq):
        if move.to_sq != to_sq:
            continue
        if move.promotion is None or move.promotion == wanted:
            return move
    raise IllegalMoveError(f"Illegal move: {from_sq.name}{to_sq.name}")
