"""
FastAPI web application for the Magnus chess engine.

Exposes the engine to the browser client:

- POST /api/chess-ai/move: accepts the client's board payload (or a FEN),
  personality and level, and returns the chosen move, or a null move with a
  checkmate/stalemate status.
- GET /api/chess-ai/diagnostic: reports whether the engine is up, its
  version and the size of the opening book.

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which suits CPU-bound engine calls.
- Stateless per request: the client sends the whole position each time,
  including castling rights and the en-passant square; no server-side game
  state is kept between requests.
- Field names are camelCase on the wire because that is what the JavaScript
  client sends; pydantic aliases map them to snake_case attributes.
"""

import logging
from datetime import datetime, timezone
from typing import Literal

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator

from magnus import __version__
from magnus.board import (
    Board,
    CastlingRights,
    Color,
    GamePhase,
    Move,
    Piece,
    PieceKind,
    Position,
    SideCastling,
)
from magnus.book import OPENING_BOOK, history_key
from magnus.constants import DEFAULT_LEVEL, MAX_LEVEL, MIN_LEVEL
from magnus.fen import position_from_fen
from magnus.movegen import GameStatus
from magnus.personality import Personality
from magnus.selector import MoveDecision, choose_move

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Magnus Chess AI", version=__version__)


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PieceModel(_CamelModel):
    type: PieceKind
    color: Color


class SquareModel(_CamelModel):
    row: int = Field(ge=0, le=7)
    col: int = Field(ge=0, le=7)


class SideCastlingModel(_CamelModel):
    kingside: bool = True
    queenside: bool = True


class CastlingModel(_CamelModel):
    w: SideCastlingModel = SideCastlingModel()
    b: SideCastlingModel = SideCastlingModel()


class PersonalityModel(_CamelModel):
    """Every factor is optional; omitted ones fall back to the baseline."""

    aggressiveness: float | None = None
    defensiveness: float | None = None
    mobility: float | None = None
    positionality: float | None = None
    risk_taking: float | None = Field(default=None, alias="riskTaking")
    level: int | None = None


class HistoryItem(_CamelModel):
    notation: str


class MoveRequest(_CamelModel):
    """
    Client request to the engine.

    Either `board` (8 rows of 8 nullable pieces) together with `turn`,
    `castlingRights` and `enPassantTargetSquare`, or a `fen` string which
    supplies all four. When both are present the FEN wins.

    The opening book is keyed only by `moveHistory`, never by the position.
    A request that omits the history is looked up as the initial position,
    so a FEN in which e2e4 happens to be legal gets the book's first move.
    Clients sending a FEN from later in a game should send the history too.
    """

    board: list[list[PieceModel | None]] | None = None
    fen: str | None = None
    turn: Color = Color.WHITE
    game_phase: GamePhase = Field(default=GamePhase.MIDDLEGAME, alias="gamePhase")
    ai_personality: PersonalityModel | None = Field(default=None, alias="aiPersonality")
    castling_rights: CastlingModel = Field(default_factory=CastlingModel, alias="castlingRights")
    ai_level: int = Field(default=DEFAULT_LEVEL, alias="aiLevel")
    move_history: list[HistoryItem] = Field(default_factory=list, alias="moveHistory")
    en_passant_target_square: SquareModel | None = Field(default=None, alias="enPassantTargetSquare")

    @field_validator("board")
    @classmethod
    def check_board_shape(cls, v: list[list[PieceModel | None]] | None) -> list[list[PieceModel | None]] | None:
        """Reject anything that is not an 8x8 grid."""
        if v is not None and (len(v) != 8 or any(len(row) != 8 for row in v)):
            raise ValueError("board must be 8 rows of 8 squares")
        return v

    @field_validator("ai_level")
    @classmethod
    def clamp_ai_level(cls, v: int) -> int:
        """Clamp aiLevel to the supported 1-10 range."""
        return max(MIN_LEVEL, min(v, MAX_LEVEL))


class MoveModel(_CamelModel):
    from_: SquareModel = Field(alias="from")
    to: SquareModel
    promotion: PieceKind | None = None
    notation: str


class MoveResponse(_CamelModel):
    """
    Engine response.

    Fields:
        move:       Chosen move, or null when the game is over.
        status:     "success", "checkmate" or "stalemate".
        source:     "book" or "evaluation"; null when the game is over.
        score:      Evaluation after the move, White's perspective.
        candidates: Number of legal moves that were ranked.
        reply:      Opponent's status after the move: "playing", "check",
                    "checkmate" or "stalemate"; null when the game is over.
        attackers:  Squares of the pieces giving check after the move.
    """

    move: MoveModel | None
    status: Literal["success", "checkmate", "stalemate"]
    source: Literal["book", "evaluation"] | None = None
    score: float | None = None
    candidates: int = 0
    reply: GameStatus | None = None
    attackers: list[SquareModel] = Field(default_factory=list)


class DiagnosticResponse(_CamelModel):
    api_status: str = Field(alias="apiStatus")
    version: str
    opening_book_entries: int = Field(alias="openingBookEntries")
    timestamp: str


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------


def _position_from_request(request: MoveRequest) -> Position:
    if request.fen is not None:
        return position_from_fen(request.fen)
    if request.board is None:
        raise HTTPException(status_code=400, detail="Either board or fen is required")

    board = Board(
        [
            [None if cell is None else Piece(cell.type, cell.color) for cell in row]
            for row in request.board
        ]
    )
    rights = request.castling_rights
    castling = CastlingRights(
        white=SideCastling(rights.w.kingside, rights.w.queenside),
        black=SideCastling(rights.b.kingside, rights.b.queenside),
    )
    target = request.en_passant_target_square
    en_passant = (target.row, target.col) if target is not None else None
    return Position(board=board, turn=request.turn, castling=castling, en_passant=en_passant)


def _personality_from_request(request: MoveRequest) -> Personality:
    supplied = request.ai_personality
    overrides = supplied.model_dump(exclude_none=True) if supplied is not None else {}
    level = overrides.pop("level", request.ai_level)
    overrides["level"] = max(MIN_LEVEL, min(level, MAX_LEVEL))
    return Personality(**overrides)


def _move_model(move: Move) -> MoveModel:
    return MoveModel(
        from_=SquareModel(row=move.from_square[0], col=move.from_square[1]),
        to=SquareModel(row=move.to_square[0], col=move.to_square[1]),
        promotion=move.promotion,
        notation=move.uci(),
    )


def _response(decision: MoveDecision) -> MoveResponse:
    return MoveResponse(
        move=_move_model(decision.move) if decision.move is not None else None,
        status=decision.status,
        source=decision.source,
        score=decision.score,
        candidates=len(decision.candidates),
        reply=decision.reply,
        attackers=[SquareModel(row=row, col=col) for row, col in decision.checkers],
    )


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/chess-ai/move", response_model=MoveResponse, response_model_by_alias=True)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the engine's move for the given position.

    Raises:
        HTTPException 400: Malformed FEN, or neither board nor FEN given.
        HTTPException 500: The engine raised unexpectedly.
    """
    try:
        position = _position_from_request(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    personality = _personality_from_request(request)
    key = history_key(item.notation for item in request.move_history)

    try:
        decision = choose_move(
            position.board,
            position.turn,
            phase=request.game_phase,
            personality=personality,
            castling=position.castling,
            history=key,
            en_passant=position.en_passant,
        )
    except Exception as exc:
        _log.exception("Engine failed for turn=%s history=%r", position.turn.value, key)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    _log.info(
        "Move=%s status=%s source=%s level=%d phase=%s",
        decision.move.uci() if decision.move is not None else None,
        decision.status,
        decision.source,
        personality.level,
        request.game_phase.value,
    )
    return _response(decision)


@app.get("/api/chess-ai/diagnostic", response_model=DiagnosticResponse, response_model_by_alias=True)
def api_diagnostic() -> DiagnosticResponse:
    """Report engine availability, version and opening-book size."""
    return DiagnosticResponse(
        api_status="online",
        version=__version__,
        opening_book_entries=len(OPENING_BOOK),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
