"""
Static evaluation: a multi-factor score for a position, from White's side.

The engine only looks one ply ahead, so everything it knows about a move is
what this function says about the position that move produces. The score is
the sum of a handful of classical terms, each computed for both colors and
differenced:

- material plus piece-square tables (the king switches to its endgame
  table in the endgame)
- bishop pair, and rooks on open or semi-open files
- mobility: pseudo-legal destination squares
- king safety: pawn shield, castled king, enemy pieces nearby
- pawn structure: doubled, isolated and supported pawns
- passed pawns, worth more the further they have advanced
- centre control: occupying and covering the central squares
- development of minor pieces (opening)
- king centralization (endgame)

The game phase does not change which terms exist, only how much each one
counts (see PHASE_WEIGHTS). Personality factors then bend individual terms:
a defensive personality cares more about king safety, a positional one about
pawns and the centre, and so on.

The result is rounded to two decimals and contains no randomness: identical
inputs always give identical scores.
"""

from magnus.attacks import attacks, king_square
from magnus.board import Board, CastlingRights, Color, GamePhase, PieceKind, Square
from magnus.constants import (
    BISHOP_PAIR_BONUS,
    CASTLED_KING_BONUS,
    CASTLED_KING_COLUMNS,
    CENTER_ATTACK_BONUS,
    CENTER_OCCUPY_BONUS,
    CENTER_SQUARES,
    DEVELOPMENT_BONUS,
    DOUBLED_PAWN_PENALTY,
    EVAL_DECIMALS,
    EXTENDED_CENTER_ATTACK_BONUS,
    EXTENDED_CENTER_OCCUPY_BONUS,
    EXTENDED_CENTER_SQUARES,
    ISOLATED_PAWN_PENALTY,
    KING_ATTACKER_PENALTY,
    KING_CENTRALIZATION_WEIGHT,
    KING_ENDGAME_TABLE,
    KING_ZONE_RADIUS,
    MOBILITY_IMBALANCE_UNIT,
    MOBILITY_UNIT,
    PASSED_PAWN_BASE,
    PASSED_PAWN_PER_RANK,
    PAWN_SHIELD_BONUS,
    PHASE_WEIGHTS,
    PIECE_SQUARE_TABLES,
    PIECE_VALUES,
    POSITIONAL_PAWN_PHASES,
    PST_SCALE,
    ROOK_OPEN_FILE_BONUS,
    ROOK_SEMI_OPEN_FILE_BONUS,
    SUPPORTED_PAWN_BONUS,
)
from magnus.movegen import moves_for
from magnus.personality import Personality

_NO_CASTLING = CastlingRights.none()


def _table_value(table: tuple[tuple[int, ...], ...], square: Square, color: Color) -> float:
    row, col = square
    if color is Color.BLACK:
        row = 7 - row
    return table[row][col] * PST_SCALE


def _pawn_squares(board: Board) -> dict[Color, list[Square]]:
    pawns: dict[Color, list[Square]] = {Color.WHITE: [], Color.BLACK: []}
    for square, piece in board.pieces():
        if piece.kind is PieceKind.PAWN:
            pawns[piece.color].append(square)
    return pawns


def material_score(board: Board, phase: GamePhase) -> float:
    """Material plus piece-square bonuses, White minus Black."""
    score = 0.0
    for square, piece in board.pieces():
        table = PIECE_SQUARE_TABLES[piece.kind]
        if piece.kind is PieceKind.KING and phase is GamePhase.ENDGAME:
            table = KING_ENDGAME_TABLE
        value = PIECE_VALUES[piece.kind] + _table_value(table, square, piece.color)
        score += value if piece.color is Color.WHITE else -value
    return score


def _bishop_pair(board: Board, color: Color) -> float:
    bishops = sum(1 for _, piece in board.pieces(color) if piece.kind is PieceKind.BISHOP)
    return BISHOP_PAIR_BONUS if bishops >= 2 else 0.0


def _rook_files(board: Board, color: Color, pawns: dict[Color, list[Square]]) -> float:
    own_files = {col for _, col in pawns[color]}
    enemy_files = {col for _, col in pawns[color.opponent]}
    score = 0.0
    for (_, col), piece in board.pieces(color):
        if piece.kind is not PieceKind.ROOK or col in own_files:
            continue
        score += ROOK_SEMI_OPEN_FILE_BONUS if col in enemy_files else ROOK_OPEN_FILE_BONUS
    return score


def mobility_count(board: Board, color: Color) -> int:
    """
    Count pseudo-legal destinations across all of `color`'s pieces.

    Castling rights are treated as absent and there is no en-passant target,
    so castling never contributes to the count.
    """
    return sum(len(moves_for(board, square, _NO_CASTLING)) for square, _ in board.pieces(color))


def _king_safety(board: Board, color: Color) -> float:
    king = king_square(board, color)
    if king is None:
        return 0.0
    row, col = king
    score = 0.0

    shield_row = row + color.forward
    for shield_col in (col - 1, col, col + 1):
        if 0 <= shield_row < 8 and 0 <= shield_col < 8:
            piece = board.grid[shield_row][shield_col]
            if piece is not None and piece.color is color and piece.kind is PieceKind.PAWN:
                score += PAWN_SHIELD_BONUS

    if row == color.home_row and col in CASTLED_KING_COLUMNS:
        score += CASTLED_KING_BONUS

    for (enemy_row, enemy_col), _ in board.pieces(color.opponent):
        distance = max(abs(enemy_row - row), abs(enemy_col - col))
        if 0 < distance <= KING_ZONE_RADIUS:
            score -= KING_ATTACKER_PENALTY / distance
    return score


def _pawn_structure(color: Color, pawns: dict[Color, list[Square]]) -> float:
    own = pawns[color]
    own_set = set(own)
    file_counts = [0] * 8
    for _, col in own:
        file_counts[col] += 1

    score = 0.0
    for row, col in own:
        if file_counts[col] > 1:
            score -= DOUBLED_PAWN_PENALTY
        left = file_counts[col - 1] if col > 0 else 0
        right = file_counts[col + 1] if col < 7 else 0
        if left == 0 and right == 0:
            score -= ISOLATED_PAWN_PENALTY
        behind = row - color.forward
        if (behind, col - 1) in own_set or (behind, col + 1) in own_set:
            score += SUPPORTED_PAWN_BONUS
    return score


def _passed_pawns(color: Color, pawns: dict[Color, list[Square]]) -> float:
    enemy = pawns[color.opponent]
    score = 0.0
    for row, col in pawns[color]:
        blocked = any(
            abs(enemy_col - col) <= 1 and (enemy_row - row) * color.forward > 0
            for enemy_row, enemy_col in enemy
        )
        if not blocked:
            advanced = (row - color.pawn_row) * color.forward
            score += PASSED_PAWN_BASE + PASSED_PAWN_PER_RANK * advanced
    return score


def _center_control(board: Board, color: Color) -> float:
    score = 0.0
    for square, _ in board.pieces(color):
        if square in CENTER_SQUARES:
            score += CENTER_OCCUPY_BONUS
        elif square in EXTENDED_CENTER_SQUARES:
            score += EXTENDED_CENTER_OCCUPY_BONUS
        for target in CENTER_SQUARES:
            if attacks(board, square, target):
                score += CENTER_ATTACK_BONUS
        for target in EXTENDED_CENTER_SQUARES:
            if attacks(board, square, target):
                score += EXTENDED_CENTER_ATTACK_BONUS
    return score


def _development(board: Board, color: Color) -> float:
    developed = sum(
        1
        for (row, _), piece in board.pieces(color)
        if piece.kind in (PieceKind.KNIGHT, PieceKind.BISHOP) and row != color.home_row
    )
    return developed * DEVELOPMENT_BONUS


def _king_centralization(board: Board, color: Color) -> float:
    king = king_square(board, color)
    if king is None:
        return 0.0
    return _table_value(KING_ENDGAME_TABLE, king, color)


def _difference(term) -> float:
    return term(Color.WHITE) - term(Color.BLACK)


def evaluate(
    board: Board,
    phase: GamePhase | str = GamePhase.MIDDLEGAME,
    personality: Personality | None = None,
) -> float:
    """
    Score a position in pawns, positive when White is better.

    Args:
        board:       The position to score. Not modified.
        phase:       Caller-supplied game phase; selects the term weights
                     and the king's piece-square table.
        personality: Style factors. Defaults to the baseline personality.

    Returns:
        The score rounded to two decimals.

    Example:
        >>> evaluate(Board.starting(), GamePhase.OPENING)
        0.0
    """
    phase = GamePhase(phase)
    personality = personality or Personality()
    weights = PHASE_WEIGHTS[phase]
    pawns = _pawn_squares(board)

    score = material_score(board, phase)
    score += _difference(lambda color: _bishop_pair(board, color))
    score += _difference(lambda color: _rook_files(board, color, pawns))

    mobility = mobility_count(board, Color.WHITE) - mobility_count(board, Color.BLACK)
    score += MOBILITY_UNIT * mobility * personality.mobility * weights["mobility"]
    score += MOBILITY_IMBALANCE_UNIT * mobility * personality.aggressiveness * weights["mobility_imbalance"]

    king_safety = _difference(lambda color: _king_safety(board, color))
    score += king_safety * personality.defensiveness * weights["king_safety"]

    structure = _difference(lambda color: _pawn_structure(color, pawns))
    if phase in POSITIONAL_PAWN_PHASES:
        structure *= personality.positionality
    score += structure * weights["pawn_structure"]

    score += _difference(lambda color: _passed_pawns(color, pawns)) * weights["passed_pawns"]

    center = _difference(lambda color: _center_control(board, color))
    score += center * personality.positionality * weights["center"]

    score += _difference(lambda color: _development(board, color)) * weights["development"]

    centralization = _difference(lambda color: _king_centralization(board, color))
    score += centralization * KING_CENTRALIZATION_WEIGHT * weights["king_centralization"]

    return round(score, EVAL_DECIMALS)
