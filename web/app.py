"""
FastAPI web application for the search core.

Exposes POST /api/move, which accepts a FEN position, a search depth and a
strategy name, runs the search, and returns the chosen move together with its
score, completed depth and node count. GET /api/health is a liveness probe.

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which is the right place for CPU-bound blocking calls like a search.
- Stateless per request: the client sends the full FEN each time.
- Depth is clamped server-side so a single request cannot pin a worker on an
  exhaustive Minimax search.
"""

import logging
import threading
from typing import Literal

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from gamesearch.search import get_best_move

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

MAX_REQUEST_DEPTH = 6

app = FastAPI(title="GameSearch", version="1.0.0")


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        fen:       Full FEN string of the position to search.
        depth:     Nominal search depth in plies, clamped to [0, 6].
        algorithm: "alphabeta" (default) or "minimax".
    """

    fen: str
    depth: int = 3
    algorithm: Literal["alphabeta", "minimax"] = "alphabeta"

    @field_validator("depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        return max(0, min(v, MAX_REQUEST_DEPTH))


class MoveResponse(BaseModel):
    """
    Engine response.

    Fields:
        move:  Chosen move in UCI notation, or null for a depth-0 request.
        fen:   Board FEN after the move is applied (unchanged if no move).
        score: Score in centipawns from the side to move's perspective.
        depth: Deepest completed iteration.
        nodes: Nodes visited by the search.
    """

    move: str | None
    fen: str
    score: int
    depth: int
    nodes: int


@app.get("/api/health")
def api_health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the best move for the given position.

    Raises:
        HTTPException 400: Malformed FEN or game already over.
        HTTPException 500: The search raised.
    """
    try:
        board = chess.Board(request.fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    if board.is_game_over():
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {board.result()}",
        )

    # Requests are never cancelled; the event only satisfies the interface.
    stop_event = threading.Event()

    try:
        move, score, depth, nodes = get_best_move(
            board, request.depth, stop_event, algorithm=request.algorithm
        )
    except Exception as exc:
        _log.exception("Search failed for FEN=%s", request.fen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    _log.info(
        "algorithm=%s move=%s score=%d depth=%d nodes=%d fen=%s",
        request.algorithm,
        move.uci() if move is not None else None,
        score,
        depth,
        nodes,
        request.fen[:40],
    )

    if move is not None:
        board.push(move)
    return MoveResponse(
        move=move.uci() if move is not None else None,
        fen=board.fen(),
        score=score,
        depth=depth,
        nodes=nodes,
    )
