"""In-memory achievements and win statistics fed by controller events."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Deque, Dict, List, Optional, Set
import logging

from . import game as game_events
from .ai import Difficulty
from .board import WINNING_LINES, GameBoard, Player
from .game import AIGameController, GameMode

logger = logging.getLogger(__name__)

WIN_STREAK_TARGET = 3
FRIEND_GAMES_TARGET = 10


class AchievementType(str, Enum):
    FIRST_VICTORY = "first_victory"
    AI_CONQUEROR = "ai_conqueror"
    WIN_STREAK_3 = "win_streak_3"
    FRIENDLY_RIVALRY = "friendly_rivalry"
    PERFECT_VICTORY = "perfect_victory"


@dataclass
class Achievement:
    type: AchievementType
    title: str
    description: str
    unlocked: bool = False


CATALOG = (
    (AchievementType.FIRST_VICTORY, "First Victory", "Win your first game"),
    (AchievementType.AI_CONQUEROR, "AI Conqueror", "Defeat the Hard AI"),
    (AchievementType.WIN_STREAK_3, "Hat Trick", "Win 3 games in a row"),
    (
        AchievementType.FRIENDLY_RIVALRY,
        "Friendly Rivalry",
        "Play 10 games against a friend",
    ),
    (
        AchievementType.PERFECT_VICTORY,
        "Perfect Victory",
        "Win without opponent getting 2 in a row",
    ),
)


def _default_achievements() -> Dict[AchievementType, Achievement]:
    return {kind: Achievement(kind, title, text) for kind, title, text in CATALOG}


def has_two_in_row(board: GameBoard, player: Player, cell: int) -> bool:
    """True if ``player`` holds two or more cells of a line through ``cell``."""
    for line in WINNING_LINES:
        if cell in line and sum(board.get_cell(i) == player for i in line) >= 2:
            return True
    return False


@dataclass
class AchievementManager:
    """Tracks win streaks, friend games and unlocks achievements for one player.

    In bot games only the human's wins count; in games against a friend every
    win counts. Call :meth:`watch` to hook the manager to a controller.
    """

    achievements: Dict[AchievementType, Achievement] = field(
        default_factory=_default_achievements
    )
    win_streak: int = 0
    friend_games_played: int = 0
    _two_in_row: Set[Player] = field(default_factory=set, repr=False)
    _pending: Deque[Achievement] = field(default_factory=deque, repr=False)
    _listeners: List[Callable[[Achievement], None]] = field(
        default_factory=list, repr=False
    )

    # ---- wiring ----

    def watch(self, controller: AIGameController) -> None:
        """Subscribe to ``controller`` and count its current round as started."""

        def difficulty() -> Optional[Difficulty]:
            return controller.ai.difficulty if controller.ai is not None else None

        controller.subscribe(
            game_events.BOARD_RESET, lambda: self.on_game_started(controller.mode)
        )
        controller.subscribe(
            game_events.CELL_PLAYED,
            lambda cell, player: self.on_cell_played(controller.board, cell, player),
        )
        controller.subscribe(
            game_events.WIN,
            lambda player, _line: self.on_win(
                player, controller.mode, difficulty(), controller.human_player
            ),
        )
        controller.subscribe(game_events.DRAW, self.on_draw)
        self.on_game_started(controller.mode)

    def subscribe(self, callback: Callable[[Achievement], None]) -> None:
        self._listeners.append(callback)

    # ---- game hooks ----

    def on_game_started(self, mode: GameMode) -> None:
        self._two_in_row.clear()
        if mode == GameMode.PLAYER_VS_PLAYER:
            self.friend_games_played += 1
            if self.friend_games_played >= FRIEND_GAMES_TARGET:
                self._unlock(AchievementType.FRIENDLY_RIVALRY)

    def on_cell_played(self, board: GameBoard, cell: int, player: Player) -> None:
        if player not in self._two_in_row and has_two_in_row(board, player, cell):
            self._two_in_row.add(player)

    def on_win(
        self,
        player: Player,
        mode: GameMode,
        difficulty: Optional[Difficulty],
        human_player: Player,
    ) -> None:
        if mode == GameMode.PLAYER_VS_BOT and player != human_player:
            self.on_loss()
            return

        self.win_streak += 1
        self._unlock(AchievementType.FIRST_VICTORY)
        if self.win_streak >= WIN_STREAK_TARGET:
            self._unlock(AchievementType.WIN_STREAK_3)
        if mode == GameMode.PLAYER_VS_BOT and difficulty == Difficulty.HARD:
            self._unlock(AchievementType.AI_CONQUEROR)
        if not self._two_in_row - {player}:
            self._unlock(AchievementType.PERFECT_VICTORY)

    def on_loss(self) -> None:
        self.win_streak = 0

    def on_draw(self) -> None:
        self.win_streak = 0

    # ---- queries ----

    def is_unlocked(self, kind: AchievementType) -> bool:
        return self.achievements[kind].unlocked

    def unlocked(self) -> List[Achievement]:
        return [a for a in self.achievements.values() if a.unlocked]

    def pop_pending(self) -> List[Achievement]:
        """Drain achievements unlocked since the last call, oldest first."""
        drained = list(self._pending)
        self._pending.clear()
        return drained

    def reset_all(self) -> None:
        for achievement in self.achievements.values():
            achievement.unlocked = False
        self.win_streak = 0
        self.friend_games_played = 0
        self._two_in_row.clear()
        self._pending.clear()

    # ---- helpers ----

    def _unlock(self, kind: AchievementType) -> None:
        achievement = self.achievements[kind]
        if achievement.unlocked:
            return
        achievement.unlocked = True
        self._pending.append(achievement)
        logger.info("Achievement unlocked: %s", achievement.title)
        for callback in list(self._listeners):
            callback(achievement)
