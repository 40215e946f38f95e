"""
Attack detection: can a given piece strike a given square?

This is pure geometry. It never calls into move generation, which is what
lets the move generator use it to keep kings off attacked squares without
recursing into itself.
"""

from magnus.board import Board, Color, PieceKind, Square

KNIGHT_OFFSETS: tuple[Square, ...] = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
)
KING_OFFSETS: tuple[Square, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)
DIAGONAL_DIRECTIONS: tuple[Square, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
STRAIGHT_DIRECTIONS: tuple[Square, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

SLIDING_DIRECTIONS: dict[PieceKind, tuple[Square, ...]] = {
    PieceKind.BISHOP: DIAGONAL_DIRECTIONS,
    PieceKind.ROOK: STRAIGHT_DIRECTIONS,
    PieceKind.QUEEN: DIAGONAL_DIRECTIONS + STRAIGHT_DIRECTIONS,
}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _path_is_clear(board: Board, start: Square, end: Square) -> bool:
    """True if every square strictly between start and end is empty."""
    d_row = _sign(end[0] - start[0])
    d_col = _sign(end[1] - start[1])
    row, col = start[0] + d_row, start[1] + d_col
    while (row, col) != end:
        if board.grid[row][col] is not None:
            return False
        row += d_row
        col += d_col
    return True


def attacks(board: Board, attacker: Square, target: Square) -> bool:
    """
    Return whether the piece on `attacker` could capture on `target`.

    Occupancy of the target itself is ignored, so this also answers "does
    this piece cover that square". Pawns only attack diagonally forward.
    An empty attacker square attacks nothing.
    """
    piece = board[attacker]
    if piece is None or attacker == target:
        return False

    d_row = target[0] - attacker[0]
    d_col = target[1] - attacker[1]
    kind = piece.kind

    if kind is PieceKind.PAWN:
        return d_row == piece.color.forward and abs(d_col) == 1
    if kind is PieceKind.KNIGHT:
        return (abs(d_row), abs(d_col)) in ((1, 2), (2, 1))
    if kind is PieceKind.KING:
        return max(abs(d_row), abs(d_col)) == 1

    diagonal = abs(d_row) == abs(d_col)
    straight = d_row == 0 or d_col == 0
    if kind is PieceKind.BISHOP and not diagonal:
        return False
    if kind is PieceKind.ROOK and not straight:
        return False
    if kind is PieceKind.QUEEN and not (diagonal or straight):
        return False
    return _path_is_clear(board, attacker, target)


def is_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """Return whether any piece of `by_color` attacks `square`."""
    for origin, _ in board.pieces(by_color):
        if attacks(board, origin, square):
            return True
    return False


def find_attackers(board: Board, square: Square, by_color: Color) -> list[Square]:
    """Return the squares of every `by_color` piece attacking `square`."""
    return [origin for origin, _ in board.pieces(by_color) if attacks(board, origin, square)]


def king_square(board: Board, color: Color) -> Square | None:
    for square, piece in board.pieces(color):
        if piece.kind is PieceKind.KING:
            return square
    return None


def is_in_check(board: Board, color: Color) -> bool:
    """
    Return whether `color`'s king is attacked.

    A board without that king is reported as not in check rather than
    raising, so malformed positions degrade to stalemate-like behaviour.
    """
    square = king_square(board, color)
    if square is None:
        return False
    return is_attacked(board, square, color.opponent)
