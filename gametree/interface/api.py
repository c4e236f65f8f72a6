"""FastAPI REST interface for the engine."""

import logging
import threading
from typing import Optional

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from gametree.config import CONFIG
from gametree.core.errors import SearchTimeout
from gametree.main import Engine

logger = logging.getLogger(__name__)

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared engine instance (keeps the killer line across requests).
engine = Engine()
_board_lock = threading.Lock()


class FenRequest(BaseModel):
    fen: str


class MoveRequest(BaseModel):
    move: str  # UCI format e.g. "e2e4"


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1)
    time_limit_ms: Optional[int] = Field(default=None, ge=1)


@app.get("/board")
def get_board():
    with _board_lock:
        board = engine.state.board
        return {
            "fen": board.fen(),
            "turn": "white" if board.turn == chess.WHITE else "black",
            "legal_moves": engine.state.get_legal_moves(),
            "is_game_over": board.is_game_over(),
            "result": board.result() if board.is_game_over() else None,
        }


@app.post("/position")
def set_position(req: FenRequest):
    with _board_lock:
        try:
            engine.new_game(req.fen)
        except ValueError as e:
            logger.warning("rejected FEN %r: %s", req.fen, e)
            raise HTTPException(status_code=400, detail=f"Invalid FEN: {e}")
        return {"fen": engine.state.get_fen()}


@app.post("/move")
def make_move(req: MoveRequest):
    with _board_lock:
        if not engine.make_move(req.move):
            logger.warning("rejected move %r", req.move)
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        return {"fen": engine.state.get_fen(), "move": req.move}


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    # the engine is not reentrant, so searches hold the lock for their duration
    with _board_lock:
        if engine.state.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        depth, time_limit_ms = engine.depth, engine.time_limit_ms
        engine.depth = req.depth or CONFIG.search.depth
        if req.time_limit_ms is not None:
            engine.time_limit_ms = req.time_limit_ms
        try:
            best, value, pv = engine.get_best_move()
        except SearchTimeout as e:
            logger.warning("search timed out: %s", e)
            raise HTTPException(status_code=408, detail=str(e))
        finally:
            engine.depth, engine.time_limit_ms = depth, time_limit_ms

        return {
            "best_move": best,
            "value": value,
            "pv": pv,
            "nodes": engine.search.nodes,
            "fen": engine.state.get_fen(),
        }


@app.post("/reset")
def reset_board():
    with _board_lock:
        engine.new_game()
        return {"fen": engine.state.get_fen()}
