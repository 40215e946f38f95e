"""
Move selection: opening book first, then one-ply evaluation and a
difficulty-scaled weighted choice.

There is no tree search. Every legal move is played once on a board copy,
the resulting position is scored by magnus.evaluate, and the moves are
ranked best-first for the side to move. What happens next depends on the
personality's level:

- Level 10 plays the top move. Only when the runner-up scores within
  GRANDMASTER_SLIP_MAX_GAP does it, with GRANDMASTER_SLIP_PROBABILITY,
  play the runner-up instead. A clearly best move is always played.
- Lower levels draw from the top few moves with geometrically decaying
  weights (CANDIDATE_DECAY ** rank). The pool widens as the level drops,
  from 3 candidates at level 9 to 7 at level 1.

The only randomness in the engine lives here and comes from the `rng`
argument, so tests pass a seeded random.Random to make choices repeatable.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable

from magnus.attacks import find_attackers, is_in_check, king_square
from magnus.board import Board, CastlingRights, Color, GamePhase, Move, Square
from magnus.book import book_move, history_key
from magnus.constants import (
    CANDIDATE_BASE,
    CANDIDATE_DECAY,
    CANDIDATE_SPREAD,
    EVAL_DECIMALS,
    GRANDMASTER_LEVEL,
    GRANDMASTER_SLIP_MAX_GAP,
    GRANDMASTER_SLIP_PROBABILITY,
)
from magnus.evaluate import evaluate
from magnus.movegen import GameStatus, en_passant_target, game_status, legal_moves, make_move
from magnus.personality import Personality

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredMove:
    move: Move
    score: float


@dataclass
class MoveDecision:
    """
    Outcome of one engine call.

    Attributes:
        move:       The chosen move, or None when the side to move has no
                    legal moves.
        status:     "success" when a move was chosen, otherwise "checkmate"
                    or "stalemate" depending on whether the king is attacked.
        source:     "book" or "evaluation"; None for terminal positions.
        score:      Evaluation of the position after the chosen move (White's
                    perspective). None for book moves and terminal positions.
        candidates: Moves ranked by evaluation, best for the mover first.
        reply:      Status of the opponent once the chosen move is played:
                    playing, check, checkmate or stalemate. None for
                    terminal positions.
        checkers:   Squares of the mover's pieces giving check after the
                    move, in row-major order. Two entries mean double check.
    """

    move: Move | None
    status: str
    source: str | None = None
    score: float | None = None
    candidates: list[ScoredMove] = field(default_factory=list)
    reply: GameStatus | None = None
    checkers: list[Square] = field(default_factory=list)


def candidate_count(level: int, legal_count: int) -> int:
    """Size of the candidate pool at a non-grandmaster level."""
    widened = CANDIDATE_BASE + CANDIDATE_SPREAD * (GRANDMASTER_LEVEL - level) // GRANDMASTER_LEVEL
    return min(legal_count, max(1, widened))


def rank_moves(
    board: Board,
    turn: Color,
    moves: list[Move],
    phase: GamePhase | str = GamePhase.MIDDLEGAME,
    personality: Personality | None = None,
) -> list[ScoredMove]:
    """
    Score the position after each move and sort best-for-`turn` first.

    White prefers higher scores and Black lower ones. The sort is stable, so
    equally scored moves keep generation order.
    """
    scored = [ScoredMove(move, evaluate(make_move(board, move), phase, personality)) for move in moves]
    scored.sort(key=lambda item: item.score, reverse=turn is Color.WHITE)
    return scored


def pick_candidate(ranked: list[ScoredMove], level: int, rng: random.Random) -> ScoredMove:
    """
    Choose one of the ranked moves according to the playing level.

    Args:
        ranked: Non-empty list, best move for the mover first.
        level:  Playing level, 1 (loosest) to 10 (grandmaster).
        rng:    Source of randomness.
    """
    if level >= GRANDMASTER_LEVEL:
        if (
            len(ranked) > 1
            and round(abs(ranked[0].score - ranked[1].score), EVAL_DECIMALS) < GRANDMASTER_SLIP_MAX_GAP
            and rng.random() < GRANDMASTER_SLIP_PROBABILITY
        ):
            return ranked[1]
        return ranked[0]

    pool = ranked[:candidate_count(level, len(ranked))]
    weights = [CANDIDATE_DECAY ** index for index in range(len(pool))]
    remaining = rng.random() * sum(weights)
    index = 0
    for index, weight in enumerate(weights):
        remaining -= weight
        if remaining <= 0:
            break
    return pool[min(index, len(pool) - 1)]


def _aftermath(
    board: Board, turn: Color, move: Move, castling: CastlingRights
) -> tuple[GameStatus, list[Square]]:
    """Classify the opponent's position after `move` and list the checking pieces."""
    after = make_move(board, move)
    opponent = turn.opponent
    reply = game_status(after, opponent, castling, en_passant_target(board, move))
    king = king_square(after, opponent)
    checkers = find_attackers(after, king, turn) if king is not None else []
    return reply, checkers


def choose_move(
    board: Board,
    turn: Color,
    phase: GamePhase | str = GamePhase.MIDDLEGAME,
    personality: Personality | None = None,
    castling: CastlingRights = CastlingRights(),
    history: str | Iterable[str] = "",
    en_passant: Square | None = None,
    rng: random.Random | None = None,
) -> MoveDecision:
    """
    Decide the engine's move for `turn`.

    The opening book is consulted first and its suggestion is only played if
    it is among the legal moves. Otherwise every legal move is evaluated and
    one is picked by pick_candidate(). With no legal moves the decision
    carries no move and a checkmate or stalemate status.

    Args:
        board:       Current position. Not modified.
        turn:        Side to move.
        phase:       Game phase used to weight the evaluation.
        personality: Style and level; baseline defaults when omitted.
        castling:    Castling rights for both sides.
        history:     Book key, either already joined or as a move list.
        en_passant:  Square capturable en passant this ply, if any.
        rng:         Random source; a fresh unseeded one when omitted.

    Returns:
        A MoveDecision.
    """
    personality = personality or Personality()
    rng = rng or random.Random()
    key = history if isinstance(history, str) else history_key(history)

    legal = legal_moves(board, turn, castling, en_passant)
    if not legal:
        status = GameStatus.CHECKMATE if is_in_check(board, turn) else GameStatus.STALEMATE
        _log.info("No legal moves for %s: %s", turn.name.lower(), status.value)
        return MoveDecision(move=None, status=status.value)

    from_book = book_move(key, legal)
    if from_book is not None:
        reply, checkers = _aftermath(board, turn, from_book, castling)
        return MoveDecision(move=from_book, status="success", source="book", reply=reply, checkers=checkers)

    ranked = rank_moves(board, turn, legal, phase, personality)
    chosen = pick_candidate(ranked, personality.level, rng)
    _log.info(
        "Level %d %s chose %s (score=%.2f, best=%s %.2f, legal=%d)",
        personality.level,
        turn.name.lower(),
        chosen.move.uci(),
        chosen.score,
        ranked[0].move.uci(),
        ranked[0].score,
        len(legal),
    )
    reply, checkers = _aftermath(board, turn, chosen.move, castling)
    return MoveDecision(
        move=chosen.move,
        status="success",
        source="evaluation",
        score=chosen.score,
        candidates=ranked,
        reply=reply,
        checkers=checkers,
    )


def select_move(
    board: Board,
    turn: Color,
    phase: GamePhase | str = GamePhase.MIDDLEGAME,
    personality: Personality | None = None,
    castling: CastlingRights = CastlingRights(),
    history: str | Iterable[str] = "",
    en_passant: Square | None = None,
    rng: random.Random | None = None,
) -> Move | None:
    """Return just the chosen move, or None when there is no legal move."""
    return choose_move(board, turn, phase, personality, castling, history, en_passant, rng).move
