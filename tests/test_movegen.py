import chess
import pytest

from magnus.attacks import is_in_check
from magnus.board import Board, CastlingRights, Color, Move, Piece, PieceKind
from magnus.fen import position_from_fen, square_from_chess
from magnus.movegen import GameStatus, en_passant_target, game_status, legal_moves, make_move, moves_for

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"

REFERENCE_POSITIONS = [
    chess.STARTING_FEN,
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
    "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1",
    "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8",
    "r4rk1/1pp1qppp/p1np1n2/2b1p1B1/2B1P1b1/P1NP1N2/1PP1QPPP/R4RK1 w - - 0 10",
    "4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2",
    "8/8/8/K2pP2r/8/8/8/7k w - d6 0 2",
    "4k3/8/8/8/3pP3/8/8/4K3 b - e3 0 1",
]


def _legal(fen):
    position = position_from_fen(fen)
    return position, legal_moves(position.board, position.turn, position.castling, position.en_passant)


def _destinations(fen, square):
    position = position_from_fen(fen)
    return set(moves_for(position.board, square, position.castling, position.en_passant))


def test_starting_position_has_twenty_moves():
    moves = legal_moves(Board.starting(), Color.WHITE, CastlingRights())
    assert len(moves) == 20
    assert Move((6, 4), (4, 4)) in moves
    assert Move((7, 6), (5, 5)) in moves


@pytest.mark.parametrize("fen", REFERENCE_POSITIONS)
def test_legal_moves_match_python_chess(fen):
    position, moves = _legal(fen)
    reference = chess.Board(fen)
    expected = {
        (square_from_chess(move.from_square), square_from_chess(move.to_square))
        for move in reference.legal_moves
    }

    assert {(move.from_square, move.to_square) for move in moves} == expected


@pytest.mark.parametrize("fen", REFERENCE_POSITIONS)
def test_legal_moves_never_leave_king_attacked(fen):
    position, moves = _legal(fen)
    for move in moves:
        assert not is_in_check(make_move(position.board, move), position.turn), move


def test_pawn_double_step_only_from_starting_rank():
    board = Board.empty()
    board[(5, 4)] = Piece(PieceKind.PAWN, Color.WHITE)
    board[(2, 3)] = Piece(PieceKind.PAWN, Color.BLACK)

    assert moves_for(board, (5, 4), CastlingRights()) == [(4, 4)]
    assert moves_for(board, (2, 3), CastlingRights()) == [(3, 3)]

    board[(6, 0)] = Piece(PieceKind.PAWN, Color.WHITE)
    board[(1, 7)] = Piece(PieceKind.PAWN, Color.BLACK)
    assert moves_for(board, (6, 0), CastlingRights()) == [(5, 0), (4, 0)]
    assert moves_for(board, (1, 7), CastlingRights()) == [(2, 7), (3, 7)]


def test_pawn_double_step_needs_both_squares_empty():
    board = Board.empty()
    board[(6, 4)] = Piece(PieceKind.PAWN, Color.WHITE)
    board[(4, 4)] = Piece(PieceKind.KNIGHT, Color.BLACK)
    assert moves_for(board, (6, 4), CastlingRights()) == [(5, 4)]

    board[(5, 4)] = Piece(PieceKind.KNIGHT, Color.BLACK)
    assert moves_for(board, (6, 4), CastlingRights()) == []


def test_pawn_captures_only_enemy_pieces():
    board = Board.empty()
    board[(6, 4)] = Piece(PieceKind.PAWN, Color.WHITE)
    board[(5, 3)] = Piece(PieceKind.PAWN, Color.BLACK)
    board[(5, 5)] = Piece(PieceKind.PAWN, Color.WHITE)

    assert set(moves_for(board, (6, 4), CastlingRights())) == {(5, 4), (4, 4), (5, 3)}


def test_sliding_piece_stops_at_blockers():
    board = Board.empty()
    board[(7, 0)] = Piece(PieceKind.ROOK, Color.WHITE)
    board[(7, 3)] = Piece(PieceKind.PAWN, Color.WHITE)
    board[(4, 0)] = Piece(PieceKind.PAWN, Color.BLACK)

    assert set(moves_for(board, (7, 0), CastlingRights())) == {(7, 1), (7, 2), (6, 0), (5, 0), (4, 0)}


def test_empty_square_has_no_moves():
    assert moves_for(Board.starting(), (4, 4), CastlingRights()) == []


def test_king_does_not_step_onto_attacked_squares():
    board = Board.empty()
    board[(7, 4)] = Piece(PieceKind.KING, Color.WHITE)
    board[(0, 3)] = Piece(PieceKind.ROOK, Color.BLACK)

    destinations = set(moves_for(board, (7, 4), CastlingRights.none()))
    assert (7, 3) not in destinations
    assert (6, 3) not in destinations
    assert destinations == {(6, 4), (6, 5), (7, 5)}


def test_castling_both_sides_when_clear():
    fen = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
    assert {(7, 6), (7, 2)} <= _destinations(fen, (7, 4))
    assert {(0, 6), (0, 2)} <= _destinations(fen, (0, 4))


def test_castling_requires_rights():
    position = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w - - 0 1")
    destinations = set(moves_for(position.board, (7, 4), CastlingRights.none()))
    assert (7, 6) not in destinations
    assert (7, 2) not in destinations


def test_castling_requires_empty_squares_and_rook():
    destinations = _destinations("4k3/8/8/8/8/8/8/RN2K2R w KQ - 0 1", (7, 4))
    assert (7, 2) not in destinations
    assert (7, 6) in destinations

    board = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1").board
    destinations = set(moves_for(board, (7, 4), CastlingRights()))
    assert (7, 6) not in destinations
    assert (7, 2) in destinations


def test_no_castling_out_of_check():
    destinations = _destinations("4k3/4r3/8/8/8/8/8/R3K2R w KQ - 0 1", (7, 4))
    assert (7, 6) not in destinations
    assert (7, 2) not in destinations


def test_no_castling_through_or_into_attack():
    # Bishop on c5 covers g1.
    destinations = _destinations("4k3/8/8/2b5/8/8/8/R3K2R w KQ - 0 1", (7, 4))
    assert (7, 6) not in destinations
    assert (7, 2) in destinations

    # Rook on d8 covers d1, the queenside transit square.
    destinations = _destinations("3rk3/8/8/8/8/8/8/R3K2R w KQ - 0 1", (7, 4))
    assert (7, 2) not in destinations
    assert (7, 6) in destinations


def test_queenside_castling_ignores_attack_on_b1():
    destinations = _destinations("1r2k3/8/8/8/8/8/8/R3K2R w KQ - 0 1", (7, 4))
    assert (7, 2) in destinations


def test_castling_relocates_rook():
    board = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1").board

    kingside = make_move(board, Move((7, 4), (7, 6)))
    assert kingside[(7, 6)] == Piece(PieceKind.KING, Color.WHITE)
    assert kingside[(7, 5)] == Piece(PieceKind.ROOK, Color.WHITE)
    assert kingside[(7, 7)] is None
    assert kingside[(7, 4)] is None

    queenside = make_move(board, Move((0, 4), (0, 2)))
    assert queenside[(0, 2)] == Piece(PieceKind.KING, Color.BLACK)
    assert queenside[(0, 3)] == Piece(PieceKind.ROOK, Color.BLACK)
    assert queenside[(0, 0)] is None


def test_en_passant_capture_removes_the_passed_pawn():
    fen = "4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2"
    position, moves = _legal(fen)
    capture = Move((3, 4), (2, 3))
    assert capture in moves

    after = make_move(position.board, capture)
    assert after[(2, 3)] == Piece(PieceKind.PAWN, Color.WHITE)
    assert after[(3, 3)] is None
    assert after[(3, 4)] is None


def test_black_en_passant_removes_the_white_pawn():
    position, moves = _legal("4k3/8/8/8/3pP3/8/8/4K3 b - e3 0 1")
    capture = Move((4, 3), (5, 4))
    assert capture in moves

    after = make_move(position.board, capture)
    assert after[(5, 4)] == Piece(PieceKind.PAWN, Color.BLACK)
    assert after[(4, 4)] is None
    assert after[(4, 3)] is None


def test_en_passant_target_after_double_step():
    board = Board.starting()
    assert en_passant_target(board, Move((6, 4), (4, 4))) == (5, 4)
    assert en_passant_target(board, Move((1, 3), (3, 3))) == (2, 3)
    assert en_passant_target(board, Move((6, 4), (5, 4))) is None
    assert en_passant_target(board, Move((7, 6), (5, 5))) is None


def test_en_passant_only_with_a_target_square():
    position = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 2")
    destinations = set(moves_for(position.board, (3, 4), position.castling, None))
    assert (2, 3) not in destinations


def test_en_passant_needs_enemy_pawn_beside():
    board = Board.empty()
    board[(3, 4)] = Piece(PieceKind.PAWN, Color.WHITE)
    assert (2, 3) not in moves_for(board, (3, 4), CastlingRights(), (2, 3))

    board[(3, 3)] = Piece(PieceKind.PAWN, Color.WHITE)
    assert (2, 3) not in moves_for(board, (3, 4), CastlingRights(), (2, 3))

    board[(3, 3)] = Piece(PieceKind.PAWN, Color.BLACK)
    assert (2, 3) in moves_for(board, (3, 4), CastlingRights(), (2, 3))


def test_en_passant_rejected_when_it_exposes_the_king():
    _, moves = _legal("8/8/8/K2pP2r/8/8/8/7k w - d6 0 2")
    assert Move((3, 4), (2, 3)) not in moves


def test_pinned_piece_cannot_move():
    _, moves = _legal("4k3/4r3/8/8/8/8/4N3/4K3 w - - 0 1")
    assert not [move for move in moves if move.from_square == (6, 4)]
    assert moves


def test_promotion_defaults_to_queen():
    board = Board.empty()
    board[(1, 0)] = Piece(PieceKind.PAWN, Color.WHITE)

    after = make_move(board, Move((1, 0), (0, 0)))
    assert after[(0, 0)] == Piece(PieceKind.QUEEN, Color.WHITE)

    underpromoted = make_move(board, Move((1, 0), (0, 0), PieceKind.KNIGHT))
    assert underpromoted[(0, 0)] == Piece(PieceKind.KNIGHT, Color.WHITE)


def test_generated_promotions_name_the_queen():
    _, moves = _legal("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
    assert Move((1, 0), (0, 0), PieceKind.QUEEN) in moves


def test_make_move_leaves_input_untouched():
    board = Board.starting()
    make_move(board, Move((6, 4), (4, 4)))
    assert board == Board.starting()


def test_game_status():
    def status(fen):
        position = position_from_fen(fen)
        return game_status(position.board, position.turn, position.castling, position.en_passant)

    assert status(chess.STARTING_FEN) is GameStatus.PLAYING
    assert status("4k3/8/8/8/8/8/8/4R1K1 b - - 0 1") is GameStatus.CHECK
    assert status(FOOLS_MATE) is GameStatus.CHECKMATE
    assert status(STALEMATE) is GameStatus.STALEMATE
