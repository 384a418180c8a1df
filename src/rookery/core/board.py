"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from rookery.core.enums import Color, PieceType
from rookery.core.errors import MissingKingError
from rookery.core.piece import Piece
from rookery.core.types import ALL_SQUARES, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """8x8 grid of optional pieces with a king-square cache.

    Boards belonging to a :class:`~rookery.core.state.GameState` are never
    written to; the engine mutates only boards it has just copied.
    """

    __slots__ = ("_grid", "_king_squares")

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq.row][sq.col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._grid[sq.row][sq.col]
        if old_piece is not None and old_piece.piece_type == PieceType.KING:
            if self._king_squares[old_piece.color] == sq:
                self._king_squares[old_piece.color] = None

        self._grid[sq.row][sq.col] = piece

        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[piece.color] = sq

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq.row][sq.col] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color) -> list[Square]:
        """Squares holding *color*'s pieces, in row-major order."""
        grid = self._grid
        return [
            sq
            for sq in ALL_SQUARES
            if (piece := grid[sq.row][sq.col]) is not None and piece.color == color
        ]

    def items(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares and their pieces, in row-major order."""
        for sq in ALL_SQUARES:
            piece = self._grid[sq.row][sq.col]
            if piece is not None:
                yield sq, piece

    def rows(self) -> tuple[tuple[Piece | None, ...], ...]:
        """Read-only snapshot of the grid, row 0 (rank 8) first."""
        return tuple(tuple(row) for row in self._grid)

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[color]
        if sq is None:
            raise MissingKingError(f"No {color.name} king on board")
        return sq

    def has_king(self, color: Color) -> bool:
        return self._king_squares[color] is not None

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        b._king_squares = self._king_squares.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[Square(0, col)] = Piece(Color.BLACK, pt)
            b[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(7, col)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __hash__(self) -> int:
        # Boards held by a GameState are never written to.
        return hash(self.rows())

    def __repr__(self) -> str:
        lines: list[str] = []
        for row_idx, row in enumerate(self._grid):
            cells = " ".join(str(p) if p else "." for p in row)
            lines.append(f"{8 - row_idx} {cells}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
