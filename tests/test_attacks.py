from magnus.attacks import attacks, find_attackers, is_attacked, is_in_check, king_square
from magnus.board import Board, Color, Piece, PieceKind
from magnus.fen import position_from_fen


def _place(board, square, kind, color):
    board[square] = Piece(kind, color)
    return square


def test_white_pawn_attacks_diagonally_forward_only():
    board = Board.empty()
    pawn = _place(board, (4, 4), PieceKind.PAWN, Color.WHITE)

    assert attacks(board, pawn, (3, 3))
    assert attacks(board, pawn, (3, 5))
    assert not attacks(board, pawn, (3, 4))
    assert not attacks(board, pawn, (5, 3))
    assert not attacks(board, pawn, (5, 5))


def test_black_pawn_attacks_toward_white():
    board = Board.empty()
    pawn = _place(board, (1, 4), PieceKind.PAWN, Color.BLACK)

    assert attacks(board, pawn, (2, 3))
    assert attacks(board, pawn, (2, 5))
    assert not attacks(board, pawn, (0, 3))
    assert not attacks(board, pawn, (2, 4))


def test_rook_is_blocked_by_intervening_piece():
    board = Board.empty()
    rook = _place(board, (7, 0), PieceKind.ROOK, Color.WHITE)
    assert attacks(board, rook, (0, 0))
    assert attacks(board, rook, (7, 7))
    assert not attacks(board, rook, (6, 1))

    _place(board, (4, 0), PieceKind.PAWN, Color.BLACK)
    assert attacks(board, rook, (4, 0))
    assert not attacks(board, rook, (3, 0))
    assert not attacks(board, rook, (0, 0))


def test_bishop_and_queen_geometry():
    board = Board.empty()
    bishop = _place(board, (7, 2), PieceKind.BISHOP, Color.WHITE)
    queen = _place(board, (4, 3), PieceKind.QUEEN, Color.BLACK)

    assert attacks(board, bishop, (4, 5))
    assert not attacks(board, bishop, (6, 2))
    assert attacks(board, queen, (4, 7))
    assert attacks(board, queen, (0, 7))
    assert attacks(board, queen, (7, 0))
    assert not attacks(board, queen, (2, 4))

    _place(board, (6, 3), PieceKind.KNIGHT, Color.WHITE)
    assert attacks(board, bishop, (6, 3))
    assert not attacks(board, bishop, (5, 4))


def test_knight_jumps_and_king_adjacency():
    board = Board.starting()
    assert attacks(board, (7, 6), (5, 5))
    assert attacks(board, (7, 6), (5, 7))
    assert not attacks(board, (7, 6), (5, 6))
    assert attacks(board, (7, 4), (6, 4))
    assert not attacks(board, (7, 4), (5, 4))


def test_empty_square_and_self_attack_nothing():
    board = Board.starting()
    assert not attacks(board, (4, 4), (3, 4))
    assert not attacks(board, (7, 3), (7, 3))


def test_is_attacked_in_starting_position():
    board = Board.starting()
    assert is_attacked(board, (5, 4), Color.WHITE)
    assert is_attacked(board, (5, 5), Color.WHITE)
    assert not is_attacked(board, (4, 4), Color.WHITE)
    assert is_attacked(board, (2, 0), Color.BLACK)
    assert not is_attacked(board, (3, 0), Color.BLACK)


def test_find_attackers_lists_every_attacker():
    board = position_from_fen("4k3/8/8/3q4/8/2N5/8/3RK3 w - - 0 1").board

    assert find_attackers(board, (3, 3), Color.WHITE) == [(5, 2), (7, 3)]
    assert find_attackers(board, (3, 3), Color.BLACK) == []


def test_missing_king_is_not_in_check():
    board = Board.empty()
    _place(board, (0, 0), PieceKind.QUEEN, Color.BLACK)

    assert king_square(board, Color.WHITE) is None
    assert not is_in_check(board, Color.WHITE)


def test_check_detection():
    board = position_from_fen("4k3/8/8/8/8/8/8/4R1K1 b - - 0 1").board
    assert is_in_check(board, Color.BLACK)
    assert not is_in_check(board, Color.WHITE)
    assert not is_in_check(Board.starting(), Color.WHITE)
