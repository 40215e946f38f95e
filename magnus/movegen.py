"""
Move generation: pseudo-legal destinations per piece, then a legality filter.

Pseudo-legal generation follows piece movement rules and already keeps the
king from stepping onto attacked squares, but it knows nothing about pins or
discovered checks. legal_moves() closes that gap by brute force: each
candidate is played on a copy of the board and rejected if the mover's king
is attacked afterwards. With a single ply of lookahead this copy-per-move
cost is the dominant expense of the whole engine, and it is the only thing
that protects non-king moves and castling from leaving the king in check.
"""

from enum import Enum

from magnus.attacks import (
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    SLIDING_DIRECTIONS,
    is_attacked,
    is_in_check,
)
from magnus.board import (
    Board,
    CastlingRights,
    Color,
    Move,
    Piece,
    PieceKind,
    Square,
    in_bounds,
)

KING_START_COL = 4


class GameStatus(str, Enum):
    PLAYING = "playing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


# ---------------------------------------------------------------------------
# Pseudo-legal generation
# ---------------------------------------------------------------------------


def _pawn_moves(board: Board, square: Square, color: Color, en_passant: Square | None) -> list[Square]:
    row, col = square
    step = color.forward
    moves: list[Square] = []

    ahead = row + step
    if in_bounds(ahead, col) and board.grid[ahead][col] is None:
        moves.append((ahead, col))
        two_ahead = row + 2 * step
        if row == color.pawn_row and board.grid[two_ahead][col] is None:
            moves.append((two_ahead, col))

    for d_col in (-1, 1):
        target_col = col + d_col
        if not in_bounds(ahead, target_col):
            continue
        target = board.grid[ahead][target_col]
        if target is not None:
            if target.color is not color:
                moves.append((ahead, target_col))
        elif en_passant == (ahead, target_col):
            # The pawn that just double-stepped sits beside us, not on the target.
            flanking = board.grid[row][target_col]
            if flanking is not None and flanking.kind is PieceKind.PAWN and flanking.color is not color:
                moves.append((ahead, target_col))
    return moves


def _knight_moves(board: Board, square: Square, color: Color) -> list[Square]:
    moves = []
    for d_row, d_col in KNIGHT_OFFSETS:
        row, col = square[0] + d_row, square[1] + d_col
        if not in_bounds(row, col):
            continue
        target = board.grid[row][col]
        if target is None or target.color is not color:
            moves.append((row, col))
    return moves


def _sliding_moves(board: Board, square: Square, piece: Piece) -> list[Square]:
    moves = []
    for d_row, d_col in SLIDING_DIRECTIONS[piece.kind]:
        row, col = square[0] + d_row, square[1] + d_col
        while in_bounds(row, col):
            target = board.grid[row][col]
            if target is not None:
                if target.color is not piece.color:
                    moves.append((row, col))
                break
            moves.append((row, col))
            row += d_row
            col += d_col
    return moves


def _castling_moves(board: Board, square: Square, color: Color, castling: CastlingRights) -> list[Square]:
    row = color.home_row
    if square != (row, KING_START_COL):
        return []
    rights = castling.for_color(color)
    if not (rights.kingside or rights.queenside):
        return []
    enemy = color.opponent
    if is_attacked(board, square, enemy):
        return []

    rook = Piece(PieceKind.ROOK, color)
    moves = []
    if (
        rights.kingside
        and board.grid[row][7] == rook
        and board.grid[row][5] is None
        and board.grid[row][6] is None
        and not is_attacked(board, (row, 5), enemy)
        and not is_attacked(board, (row, 6), enemy)
    ):
        moves.append((row, 6))
    if (
        rights.queenside
        and board.grid[row][0] == rook
        and board.grid[row][1] is None
        and board.grid[row][2] is None
        and board.grid[row][3] is None
        and not is_attacked(board, (row, 3), enemy)
        and not is_attacked(board, (row, 2), enemy)
    ):
        moves.append((row, 2))
    return moves


def _king_moves(board: Board, square: Square, color: Color, castling: CastlingRights) -> list[Square]:
    moves = []
    enemy = color.opponent
    for d_row, d_col in KING_OFFSETS:
        row, col = square[0] + d_row, square[1] + d_col
        if not in_bounds(row, col):
            continue
        target = board.grid[row][col]
        if target is not None and target.color is color:
            continue
        if is_attacked(board, (row, col), enemy):
            continue
        moves.append((row, col))
    return moves + _castling_moves(board, square, color, castling)


def moves_for(
    board: Board,
    square: Square,
    castling: CastlingRights,
    en_passant: Square | None = None,
) -> list[Square]:
    """
    Return the pseudo-legal destination squares for the piece on `square`.

    Args:
        board:      Current position. Not modified.
        square:     Origin square. An empty square yields no moves.
        castling:   Castling rights; only consulted for kings.
        en_passant: Square a pawn may capture onto this ply, if any.

    Returns:
        Destination squares. Castling appears as the king's two-column step.
    """
    piece = board[square]
    if piece is None:
        return []
    kind = piece.kind
    if kind is PieceKind.PAWN:
        return _pawn_moves(board, square, piece.color, en_passant)
    if kind is PieceKind.KNIGHT:
        return _knight_moves(board, square, piece.color)
    if kind is PieceKind.KING:
        return _king_moves(board, square, piece.color, castling)
    return _sliding_moves(board, square, piece)


# ---------------------------------------------------------------------------
# Move application and legality
# ---------------------------------------------------------------------------


def make_move(board: Board, move: Move) -> Board:
    """
    Return a copy of `board` with `move` played on it.

    Handles the side effects a bare from/to move does not express: pawn
    promotion (queen unless the move names another piece), en-passant
    removal of the captured pawn from beside the destination, and the rook
    hop that accompanies a two-column king move. The input board is left
    untouched.
    """
    result = board.copy()
    piece = result[move.from_square]
    if piece is None:
        return result

    (from_row, from_col), (to_row, to_col) = move.from_square, move.to_square
    grid = result.grid

    if piece.kind is PieceKind.PAWN:
        if from_col != to_col and grid[to_row][to_col] is None:
            grid[from_row][to_col] = None
        if to_row == piece.color.promotion_row:
            piece = Piece(move.promotion or PieceKind.QUEEN, piece.color)
    elif piece.kind is PieceKind.KING and abs(to_col - from_col) == 2:
        rook_from, rook_to = (7, 5) if to_col > from_col else (0, 3)
        grid[from_row][rook_to] = grid[from_row][rook_from]
        grid[from_row][rook_from] = None

    grid[to_row][to_col] = piece
    grid[from_row][from_col] = None
    return result


def en_passant_target(board: Board, move: Move) -> Square | None:
    """Return the square a pawn double step skips over, or None for any other move."""
    piece = board[move.from_square]
    (from_row, from_col), (to_row, _) = move.from_square, move.to_square
    if piece is None or piece.kind is not PieceKind.PAWN or abs(to_row - from_row) != 2:
        return None
    return (from_row + to_row) // 2, from_col


def pseudo_legal_moves(
    board: Board,
    color: Color,
    castling: CastlingRights,
    en_passant: Square | None = None,
) -> list[Move]:
    """Expand every `color` piece's destinations into Move objects."""
    moves = []
    for square, piece in board.pieces(color):
        promotes = piece.kind is PieceKind.PAWN
        for target in moves_for(board, square, castling, en_passant):
            if promotes and target[0] == color.promotion_row:
                moves.append(Move(square, target, PieceKind.QUEEN))
            else:
                moves.append(Move(square, target))
    return moves


def legal_moves(
    board: Board,
    color: Color,
    castling: CastlingRights,
    en_passant: Square | None = None,
) -> list[Move]:
    """
    Return every move for `color` that does not leave its own king attacked.

    Each pseudo-legal move is simulated on a board copy and discarded if the
    king is in check afterwards. Promotions are generated as queen moves.
    """
    return [
        move
        for move in pseudo_legal_moves(board, color, castling, en_passant)
        if not is_in_check(make_move(board, move), color)
    ]


def game_status(
    board: Board,
    color: Color,
    castling: CastlingRights,
    en_passant: Square | None = None,
) -> GameStatus:
    """Classify the position for the side to move."""
    in_check = is_in_check(board, color)
    if legal_moves(board, color, castling, en_passant):
        return GameStatus.CHECK if in_check else GameStatus.PLAYING
    return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
