"""FastAPI JSON API for playing ClassicXO against a friend or the minimax bot."""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from . import config
from .achievements import AchievementManager
from .ai import Difficulty, MinimaxAI
from .board import PLAYER_O, PLAYER_X, Player
from .game import AIGameController, GameMode

logger = logging.getLogger(__name__)

MARKS: Dict[Player, str] = {PLAYER_X: "X", PLAYER_O: "O"}


@dataclass
class GameSession:
    """Container for an active game, its controller, and the move history."""

    controller: AIGameController
    difficulty: Optional[Difficulty]
    achievements: AchievementManager = field(default_factory=AchievementManager)
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    ai_pending: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="ClassicXO", description="Tic-tac-toe against a minimax bot")


AI_THINK_DELAY: Tuple[float, float] = config.AI_THINK_DELAY


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    mode: GameMode = Field(
        default=GameMode.PLAYER_VS_BOT,
        description="'bot' to face the AI, 'pvp' for two players on one device",
    )
    difficulty: Difficulty = Field(
        default=Difficulty.HARD,
        description="How often the bot plays a random move instead of searching",
    )


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: int = Field(alias="cellIndex", ge=0, le=8)


def _create_session(mode: GameMode, difficulty: Difficulty) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    ai = MinimaxAI(difficulty=difficulty) if mode == GameMode.PLAYER_VS_BOT else None
    controller = AIGameController(
        mode=mode, ai=ai, human_player=PLAYER_X, ai_player=PLAYER_O
    )
    session = GameSession(
        controller=controller,
        difficulty=difficulty if ai is not None else None,
    )
    session.achievements.watch(controller)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info(
        "Created game %s (mode=%s, difficulty=%s)",
        session_id,
        mode.value,
        difficulty.value if ai is not None else "-",
    )
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, random.uniform(*AI_THINK_DELAY)))

    with session.lock:
        try:
            controller = session.controller
            if not controller.is_active or not controller.is_ai_turn():
                return
            if controller.execute_ai_move():
                session.move_log.append(
                    {
                        "player": MARKS[controller.ai_player],
                        "cellIndex": controller.last_move,
                    }
                )
            else:
                logger.warning("Bot could not move in game %s", game_id)
        finally:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        controller = session.controller
        cells = [MARKS.get(value, "") for value in controller.board.snapshot()]
        return {
            "id": game_id,
            "mode": controller.mode.value,
            "difficulty": session.difficulty.value if session.difficulty else None,
            "cells": cells,
            "currentPlayer": MARKS[controller.current_player],
            "status": controller.state.status.value,
            "winner": MARKS[controller.winner] if controller.winner else None,
            "winLine": controller.win_line,
            "scores": {
                mark: controller.get_score(player) for player, mark in MARKS.items()
            },
            "achievements": [
                {
                    "id": a.type.value,
                    "title": a.title,
                    "description": a.description,
                    "unlocked": a.unlocked,
                }
                for a in session.achievements.achievements.values()
            ],
            "winStreak": session.achievements.win_streak,
            "moveLog": list(session.move_log),
            "aiPending": session.ai_pending,
        }


def _apply_player_move(
    game_id: str,
    session: GameSession,
    cell_index: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    should_schedule_ai = False
    with session.lock:
        controller = session.controller
        if not controller.is_active:
            raise HTTPException(status_code=400, detail="Game already finished")

        if session.ai_pending or controller.is_ai_turn():
            raise HTTPException(status_code=400, detail="AI is completing its move")

        player = controller.current_player
        if not controller.try_play_cell(cell_index):
            raise HTTPException(status_code=400, detail="Cell already occupied")

        session.move_log.append({"player": MARKS[player], "cellIndex": cell_index})

        should_schedule_ai = controller.is_active and controller.is_ai_turn()
        if should_schedule_ai:
            session.ai_pending = True

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request.mode, request.difficulty)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.cell_index, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        session.controller.reset_board()
        session.move_log.clear()
    return _serialize_session(game_id, session)
