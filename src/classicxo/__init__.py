"""ClassicXO package exposing the board, the minimax AI, and the web application."""

from .achievements import Achievement, AchievementManager, AchievementType
from .ai import NO_MOVE, Difficulty, MinimaxAI, select_move
from .board import EMPTY, PLAYER_O, PLAYER_X, GameBoard, WinChecker
from .game import (
    AIGameController,
    GameController,
    GameMode,
    GameState,
    GameStatus,
    ScoreManager,
)
from .ui import app

__all__ = [
    "AIGameController",
    "Achievement",
    "AchievementManager",
    "AchievementType",
    "Difficulty",
    "EMPTY",
    "GameBoard",
    "GameController",
    "GameMode",
    "GameState",
    "GameStatus",
    "MinimaxAI",
    "NO_MOVE",
    "PLAYER_O",
    "PLAYER_X",
    "ScoreManager",
    "WinChecker",
    "app",
    "select_move",
]
