"""
Board and piece model: the passive data every other module operates on.

The board is a plain 8x8 grid of optional pieces. Row 0 is Black's back rank
(rank 8) and row 7 is White's back rank (rank 1); column 0 is the a-file.
This orientation matches the JSON payload sent by the browser client, and the
piece-square tables in magnus.constants are laid out the same way.

Boards have copy semantics: every simulated move in the engine works on a
fresh copy produced by Board.copy(), so a caller's board is never mutated by
move generation or evaluation. Pieces are immutable tuples, which lets a copy
share them and only duplicate the row lists.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple

Square = tuple[int, int]

FILES = "abcdefgh"
RANKS = "87654321"  # indexed by row: row 0 is rank 8

_NOTATION_RE = re.compile(r"^([a-h][1-8])([a-h][1-8])([nbrq]?)$")


class NotationError(ValueError):
    """Raised when a square or move in coordinate notation cannot be parsed."""


class Color(str, Enum):
    WHITE = "w"
    BLACK = "b"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Row delta of a pawn step: White moves toward row 0."""
        return -1 if self is Color.WHITE else 1

    @property
    def home_row(self) -> int:
        return 7 if self is Color.WHITE else 0

    @property
    def pawn_row(self) -> int:
        return 6 if self is Color.WHITE else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self is Color.WHITE else 7


class PieceKind(str, Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


class Piece(NamedTuple):
    kind: PieceKind
    color: Color


class GamePhase(str, Enum):
    OPENING = "opening"
    MIDDLEGAME = "middlegame"
    ENDGAME = "endgame"


@dataclass(frozen=True)
class SideCastling:
    kingside: bool = True
    queenside: bool = True


@dataclass(frozen=True)
class CastlingRights:
    """
    Castling availability per color.

    These are inputs supplied by the caller. The engine never infers them
    from king or rook movement, so a caller that forgets to clear a right
    after the king moves will get castling moves generated for it.
    """

    white: SideCastling = SideCastling()
    black: SideCastling = SideCastling()

    def for_color(self, color: Color) -> SideCastling:
        return self.white if color is Color.WHITE else self.black

    @classmethod
    def none(cls) -> "CastlingRights":
        return cls(SideCastling(False, False), SideCastling(False, False))


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def square_name(square: Square) -> str:
    """Return the coordinate name of a square, e.g. (6, 4) -> "e2"."""
    row, col = square
    return f"{FILES[col]}{RANKS[row]}"


def parse_square(name: str) -> Square:
    """Parse a coordinate name such as "e2" into (row, col)."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise NotationError(f"Invalid square: {name!r}")
    return RANKS.index(name[1]), FILES.index(name[0])


@dataclass(frozen=True)
class Move:
    """
    A move from one square to another.

    promotion is only meaningful for pawns reaching the last rank. When it
    is None for such a pawn, the piece is promoted to a queen.
    """

    from_square: Square
    to_square: Square
    promotion: PieceKind | None = None

    def uci(self) -> str:
        """Coordinate notation: "e2e4", or "e7e8q" with a promotion."""
        text = square_name(self.from_square) + square_name(self.to_square)
        if self.promotion is not None:
            text += self.promotion.value
        return text

    @classmethod
    def from_uci(cls, text: str) -> "Move":
        """
        Parse coordinate notation into a Move.

        Accepts the four-character form used by the opening book ("g1f3")
        and an optional fifth character naming a promotion piece ("a7a8n").

        Raises:
            NotationError: If the text is not well-formed.
        """
        match = _NOTATION_RE.match(text)
        if match is None:
            raise NotationError(f"Invalid move notation: {text!r}")
        promotion = PieceKind(match.group(3)) if match.group(3) else None
        return cls(parse_square(match.group(1)), parse_square(match.group(2)), promotion)

    def same_squares(self, other: "Move") -> bool:
        return self.from_square == other.from_square and self.to_square == other.to_square

    def __str__(self) -> str:
        return self.uci()


_BACK_RANK = (
    PieceKind.ROOK, PieceKind.KNIGHT, PieceKind.BISHOP, PieceKind.QUEEN,
    PieceKind.KING, PieceKind.BISHOP, PieceKind.KNIGHT, PieceKind.ROOK,
)


class Board:
    """8x8 grid of optional pieces with value-style copy semantics."""

    __slots__ = ("grid",)

    def __init__(self, grid: list[list[Piece | None]] | None = None) -> None:
        if grid is None:
            grid = [[None] * 8 for _ in range(8)]
        self.grid = grid

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def starting(cls) -> "Board":
        board = cls()
        for color in Color:
            for col, kind in enumerate(_BACK_RANK):
                board.grid[color.home_row][col] = Piece(kind, color)
                board.grid[color.pawn_row][col] = Piece(PieceKind.PAWN, color)
        return board

    def copy(self) -> "Board":
        return Board([row[:] for row in self.grid])

    def __getitem__(self, square: Square) -> Piece | None:
        row, col = square
        return self.grid[row][col]

    def __setitem__(self, square: Square, piece: Piece | None) -> None:
        row, col = square
        self.grid[row][col] = piece

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Yield (square, piece) in row-major order, optionally for one color."""
        for row in range(8):
            for col in range(8):
                piece = self.grid[row][col]
                if piece is not None and (color is None or piece.color is color):
                    yield (row, col), piece

    def __repr__(self) -> str:
        rows = []
        for row in self.grid:
            cells = []
            for piece in row:
                if piece is None:
                    cells.append(".")
                elif piece.color is Color.WHITE:
                    cells.append(piece.kind.value.upper())
                else:
                    cells.append(piece.kind.value)
            rows.append("".join(cells))
        return "Board(" + "/".join(rows) + ")"


@dataclass
class Position:
    """Everything the engine needs to know about a position besides history."""

    board: Board
    turn: Color = Color.WHITE
    castling: CastlingRights = CastlingRights()
    en_passant: Square | None = None
