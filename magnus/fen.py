"""
FEN import via python-chess.

python-chess parses and validates the FEN string; this module then copies
its piece placement, side to move, castling rights and en-passant square
into the engine's own row/column model. python-chess numbers squares from a1
upward (a1 = 0, h8 = 63), so rank r maps to row 7 - r here.
"""

import chess

from magnus.board import (
    Board,
    CastlingRights,
    Color,
    Piece,
    PieceKind,
    Position,
    SideCastling,
    Square,
)

_KINDS: dict[int, PieceKind] = {
    chess.PAWN: PieceKind.PAWN,
    chess.KNIGHT: PieceKind.KNIGHT,
    chess.BISHOP: PieceKind.BISHOP,
    chess.ROOK: PieceKind.ROOK,
    chess.QUEEN: PieceKind.QUEEN,
    chess.KING: PieceKind.KING,
}


def square_from_chess(square: chess.Square) -> Square:
    return 7 - chess.square_rank(square), chess.square_file(square)


def position_from_fen(fen: str) -> Position:
    """
    Build a Position from a FEN string.

    Raises:
        ValueError: If python-chess rejects the FEN.
    """
    source = chess.Board(fen)

    board = Board.empty()
    for square, piece in source.piece_map().items():
        color = Color.WHITE if piece.color == chess.WHITE else Color.BLACK
        board[square_from_chess(square)] = Piece(_KINDS[piece.piece_type], color)

    castling = CastlingRights(
        white=SideCastling(
            kingside=source.has_kingside_castling_rights(chess.WHITE),
            queenside=source.has_queenside_castling_rights(chess.WHITE),
        ),
        black=SideCastling(
            kingside=source.has_kingside_castling_rights(chess.BLACK),
            queenside=source.has_queenside_castling_rights(chess.BLACK),
        ),
    )
    en_passant = square_from_chess(source.ep_square) if source.ep_square is not None else None
    turn = Color.WHITE if source.turn == chess.WHITE else Color.BLACK
    return Position(board=board, turn=turn, castling=castling, en_passant=en_passant)
