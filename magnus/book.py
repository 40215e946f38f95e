"""
Opening book: canned replies to well-known move sequences.

Keys are the game's moves so far in coordinate notation joined by single
spaces ("" for the initial position); values are the one reply to play.
Lookup is by exact string, so transpositions into a known position by a
different move order fall through to normal evaluation.
"""

import logging
from typing import Iterable

from magnus.board import Move, NotationError

_log = logging.getLogger(__name__)

OPENING_BOOK: dict[str, str] = {
    "": "e2e4",
    # 1.e4
    "e2e4": "c7c5",
    "e2e4 c7c5": "g1f3",
    "e2e4 c7c5 g1f3": "d7d6",
    "e2e4 c7c5 g1f3 d7d6": "d2d4",
    "e2e4 c7c5 g1f3 d7d6 d2d4": "c5d4",
    "e2e4 c7c5 g1f3 d7d6 d2d4 c5d4": "f3d4",
    "e2e4 c7c5 g1f3 b8c6": "d2d4",
    "e2e4 c7c5 g1f3 e7e6": "d2d4",
    "e2e4 e7e5": "g1f3",
    "e2e4 e7e5 g1f3": "b8c6",
    "e2e4 e7e5 g1f3 b8c6": "f1b5",
    "e2e4 e7e5 g1f3 b8c6 f1b5": "a7a6",
    "e2e4 e7e5 g1f3 b8c6 f1b5 a7a6": "b5a4",
    "e2e4 e7e5 g1f3 b8c6 f1c4": "f8c5",
    "e2e4 e7e5 g1f3 g8f6": "f3e5",
    "e2e4 e7e6": "d2d4",
    "e2e4 e7e6 d2d4": "d7d5",
    "e2e4 c7c6": "d2d4",
    "e2e4 c7c6 d2d4": "d7d5",
    "e2e4 d7d5": "e4d5",
    "e2e4 d7d5 e4d5": "d8d5",
    # 1.d4
    "d2d4": "d7d5",
    "d2d4 d7d5": "c2c4",
    "d2d4 d7d5 c2c4": "e7e6",
    "d2d4 d7d5 c2c4 e7e6": "b1c3",
    "d2d4 d7d5 c2c4 c7c6": "g1f3",
    "d2d4 g8f6": "c2c4",
    "d2d4 g8f6 c2c4": "e7e6",
    "d2d4 g8f6 c2c4 g7g6": "b1c3",
    # Flank openings
    "c2c4": "e7e5",
    "c2c4 e7e5": "b1c3",
    "g1f3": "d7d5",
    "g1f3 d7d5": "g2g3",
}


def history_key(moves: Iterable[str]) -> str:
    """Join a move history into the book's lookup key."""
    return " ".join(moves)


def book_move(key: str, legal: list[Move]) -> Move | None:
    """
    Return the book reply for `key` if it is one of the `legal` moves.

    The returned object is the matching legal move, so any promotion piece
    chosen by the move generator is kept. Unknown keys, entries that do not
    parse and entries that are illegal in the current position all return
    None; the caller then falls back to evaluation.
    """
    notation = OPENING_BOOK.get(key)
    if notation is None:
        return None

    try:
        suggestion = Move.from_uci(notation)
    except NotationError:
        _log.warning("Unparseable book entry %r for history %r", notation, key)
        return None

    for move in legal:
        if move.same_squares(suggestion):
            _log.info("Book move %s for history %r", notation, key)
            return move

    _log.info("Book move %s is not legal here, ignoring book", notation)
    return None
