"""
Engine constants: piece values, piece-square tables, evaluation weights and
selection parameters.

Every tunable number used by the evaluator and the move selector lives here,
so experiments with the engine's character never require touching the logic
modules. All tables are read-only module data initialised once at import.

Values are expressed in pawns (1.0 = one pawn). Piece-square tables are
written in centipawns for readability and scaled by PST_SCALE when read.
"""

from magnus.board import GamePhase, PieceKind

# ---------------------------------------------------------------------------
# Material
# ---------------------------------------------------------------------------
# The king's value only matters for keeping the evaluation anchored; both
# sides always have exactly one king in a legal game, so it cancels out.

PIECE_VALUES: dict[PieceKind, float] = {
    PieceKind.PAWN:   1.0,
    PieceKind.KNIGHT: 3.0,
    PieceKind.BISHOP: 3.25,
    PieceKind.ROOK:   5.0,
    PieceKind.QUEEN:  9.0,
    PieceKind.KING:   100.0,
}

# ---------------------------------------------------------------------------
# Piece-square tables (centipawns)
# ---------------------------------------------------------------------------
# Tables are drawn from White's point of view in board orientation: table row
# 0 is the rank furthest from White (rank 8), table row 7 is White's back
# rank. A White piece on (row, col) reads table[row][col]; a Black piece reads
# table[7 - row][col], i.e. every piece is indexed by its distance from its own
# back rank.

PST_SCALE: float = 0.01

PAWN_TABLE = (
    (  0,   0,   0,   0,   0,   0,   0,   0),
    ( 50,  50,  50,  50,  50,  50,  50,  50),
    ( 10,  10,  20,  30,  30,  20,  10,  10),
    (  5,   5,  10,  25,  25,  10,   5,   5),
    (  0,   0,   0,  20,  20,   0,   0,   0),
    (  5,  -5, -10,   0,   0, -10,  -5,   5),
    (  5,  10,  10, -20, -20,  10,  10,   5),
    (  0,   0,   0,   0,   0,   0,   0,   0),
)

KNIGHT_TABLE = (
    (-50, -40, -30, -30, -30, -30, -40, -50),
    (-40, -20,   0,   0,   0,   0, -20, -40),
    (-30,   0,  10,  15,  15,  10,   0, -30),
    (-30,   5,  15,  20,  20,  15,   5, -30),
    (-30,   0,  15,  20,  20,  15,   0, -30),
    (-30,   5,  10,  15,  15,  10,   5, -30),
    (-40, -20,   0,   5,   5,   0, -20, -40),
    (-50, -40, -30, -30, -30, -30, -40, -50),
)

BISHOP_TABLE = (
    (-20, -10, -10, -10, -10, -10, -10, -20),
    (-10,   0,   0,   0,   0,   0,   0, -10),
    (-10,   0,   5,  10,  10,   5,   0, -10),
    (-10,   5,   5,  10,  10,   5,   5, -10),
    (-10,   0,  10,  10,  10,  10,   0, -10),
    (-10,  10,  10,  10,  10,  10,  10, -10),
    (-10,   5,   0,   0,   0,   0,   5, -10),
    (-20, -10, -10, -10, -10, -10, -10, -20),
)

ROOK_TABLE = (
    (  0,   0,   0,   0,   0,   0,   0,   0),
    (  5,  10,  10,  10,  10,  10,  10,   5),
    ( -5,   0,   0,   0,   0,   0,   0,  -5),
    ( -5,   0,   0,   0,   0,   0,   0,  -5),
    ( -5,   0,   0,   0,   0,   0,   0,  -5),
    ( -5,   0,   0,   0,   0,   0,   0,  -5),
    ( -5,   0,   0,   0,   0,   0,   0,  -5),
    (  0,   0,   0,   5,   5,   0,   0,   0),
)

QUEEN_TABLE = (
    (-20, -10, -10,  -5,  -5, -10, -10, -20),
    (-10,   0,   0,   0,   0,   0,   0, -10),
    (-10,   0,   5,   5,   5,   5,   0, -10),
    ( -5,   0,   5,   5,   5,   5,   0,  -5),
    (  0,   0,   5,   5,   5,   5,   0,  -5),
    (-10,   5,   5,   5,   5,   5,   0, -10),
    (-10,   0,   5,   0,   0,   0,   0, -10),
    (-20, -10, -10,  -5,  -5, -10, -10, -20),
)

KING_TABLE = (
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-20, -30, -30, -40, -40, -30, -30, -20),
    (-10, -20, -20, -20, -20, -20, -20, -10),
    ( 20,  20,   0,   0,   0,   0,  20,  20),
    ( 20,  30,  10,   0,   0,  10,  30,  20),
)

# Endgame king: walk to the centre instead of hiding behind pawns.
KING_ENDGAME_TABLE = (
    (-50, -40, -30, -20, -20, -30, -40, -50),
    (-30, -20, -10,   0,   0, -10, -20, -30),
    (-30, -10,  20,  30,  30,  20, -10, -30),
    (-30, -10,  30,  40,  40,  30, -10, -30),
    (-30, -10,  30,  40,  40,  30, -10, -30),
    (-30, -10,  20,  30,  30,  20, -10, -30),
    (-30, -30,   0,   0,   0,   0, -30, -30),
    (-50, -30, -30, -30, -30, -30, -30, -50),
)

PIECE_SQUARE_TABLES: dict[PieceKind, tuple[tuple[int, ...], ...]] = {
    PieceKind.PAWN:   PAWN_TABLE,
    PieceKind.KNIGHT: KNIGHT_TABLE,
    PieceKind.BISHOP: BISHOP_TABLE,
    PieceKind.ROOK:   ROOK_TABLE,
    PieceKind.QUEEN:  QUEEN_TABLE,
    PieceKind.KING:   KING_TABLE,
}

# ---------------------------------------------------------------------------
# Positional bonuses (pawns)
# ---------------------------------------------------------------------------

BISHOP_PAIR_BONUS: float = 0.3
ROOK_OPEN_FILE_BONUS: float = 0.45
ROOK_SEMI_OPEN_FILE_BONUS: float = 0.3

# Per pseudo-legal destination square.
MOBILITY_UNIT: float = 0.01
# Extra middlegame reward for out-moving the opponent, times aggressiveness.
MOBILITY_IMBALANCE_UNIT: float = 0.005

PAWN_SHIELD_BONUS: float = 0.1
CASTLED_KING_BONUS: float = 0.3
# Divided by the Chebyshev distance of each enemy piece in the king's 5x5 box.
KING_ATTACKER_PENALTY: float = 0.1
KING_ZONE_RADIUS: int = 2
# Columns a king stands on after castling (or shuffling next to the corner).
CASTLED_KING_COLUMNS: frozenset[int] = frozenset({1, 2, 6, 7})

DOUBLED_PAWN_PENALTY: float = 0.2
ISOLATED_PAWN_PENALTY: float = 0.15
SUPPORTED_PAWN_BONUS: float = 0.1

PASSED_PAWN_BASE: float = 0.2
PASSED_PAWN_PER_RANK: float = 0.1
ENDGAME_PASSED_PAWN_MULTIPLIER: float = 1.5

DEVELOPMENT_BONUS: float = 0.1

CENTER_SQUARES: frozenset[tuple[int, int]] = frozenset({(3, 3), (3, 4), (4, 3), (4, 4)})
EXTENDED_CENTER_SQUARES: frozenset[tuple[int, int]] = frozenset(
    (row, col)
    for row in range(2, 6)
    for col in range(2, 6)
    if (row, col) not in CENTER_SQUARES
)
CENTER_OCCUPY_BONUS: float = 0.2
CENTER_ATTACK_BONUS: float = 0.1
EXTENDED_CENTER_OCCUPY_BONUS: float = 0.1
EXTENDED_CENTER_ATTACK_BONUS: float = 0.05

KING_CENTRALIZATION_WEIGHT: float = 0.5

# ---------------------------------------------------------------------------
# Phase weighting
# ---------------------------------------------------------------------------
# Multipliers applied to each evaluation term per game phase. The opening
# favours development and the centre, the middlegame king safety and
# activity, the endgame the king and passed pawns.

PHASE_WEIGHTS: dict[GamePhase, dict[str, float]] = {
    GamePhase.OPENING: {
        "development": 1.0,
        "center": 1.5,
        "mobility": 0.8,
        "king_safety": 0.5,
        "pawn_structure": 0.5,
        "passed_pawns": 0.5,
        "mobility_imbalance": 0.0,
        "king_centralization": 0.0,
    },
    GamePhase.MIDDLEGAME: {
        "development": 0.3,
        "center": 1.0,
        "mobility": 1.2,
        "king_safety": 1.2,
        "pawn_structure": 1.0,
        "passed_pawns": 1.0,
        "mobility_imbalance": 1.0,
        "king_centralization": 0.0,
    },
    GamePhase.ENDGAME: {
        "development": 0.0,
        "center": 0.5,
        "mobility": 1.0,
        "king_safety": 0.3,
        "pawn_structure": 1.0,
        "passed_pawns": ENDGAME_PASSED_PAWN_MULTIPLIER,
        "mobility_imbalance": 0.0,
        "king_centralization": 1.0,
    },
}

# Phases in which the pawn-structure term is scaled by positionality.
POSITIONAL_PAWN_PHASES: frozenset[GamePhase] = frozenset({GamePhase.MIDDLEGAME, GamePhase.ENDGAME})

EVAL_DECIMALS: int = 2

# ---------------------------------------------------------------------------
# Personality defaults
# ---------------------------------------------------------------------------

DEFAULT_AGGRESSIVENESS: float = 0.7
DEFAULT_DEFENSIVENESS: float = 0.6
DEFAULT_MOBILITY: float = 0.8
DEFAULT_POSITIONALITY: float = 0.9
DEFAULT_RISK_TAKING: float = 0.5
DEFAULT_LEVEL: int = 8

MIN_LEVEL: int = 1
MAX_LEVEL: int = 10

# ---------------------------------------------------------------------------
# Move selection
# ---------------------------------------------------------------------------
# Level 10 plays the top move except for a rare slip to the runner-up when
# the two are nearly equal. Lower levels draw from a geometric distribution
# over a candidate pool that widens as the level drops.

GRANDMASTER_LEVEL: int = 10
GRANDMASTER_SLIP_PROBABILITY: float = 0.05
GRANDMASTER_SLIP_MAX_GAP: float = 0.2

CANDIDATE_BASE: int = 3
CANDIDATE_SPREAD: int = 5
CANDIDATE_DECAY: float = 0.7
