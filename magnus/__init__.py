"""
Magnus: a single-ply chess decision engine with tunable personalities.

Given a position, the side to move, a game phase and a personality, the
engine returns one legal move (or reports checkmate/stalemate). It evaluates
only the position reached by each candidate move; there is no lookahead.

Modules:
    board       - Colors, pieces, squares, moves, the 8x8 board and positions
    constants   - Piece values, piece-square tables, weights, selector tuning
    personality - Personality factors and playing level
    attacks     - Attack detection and check tests
    movegen     - Pseudo-legal generation, make-move, legality filter
    evaluate    - Static evaluation from White's perspective
    book        - Opening book keyed by move history
    selector    - Book lookup, ranking and level-scaled move choice
    fen         - FEN import through python-chess
"""

__version__ = "1.0.0"
