"""Turn tracking, scoring, and the controllers that drive a Tic-Tac-Toe round."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence
import logging

from .ai import NO_MOVE, MinimaxAI
from .board import PLAYER_O, PLAYER_X, GameBoard, Player, WinChecker

logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    PLAYING = "playing"
    WIN = "win"
    DRAW = "draw"


class GameMode(str, Enum):
    PLAYER_VS_PLAYER = "pvp"
    PLAYER_VS_BOT = "bot"


# Events a controller publishes to its listeners
CELL_PLAYED = "cell_played"  # (cell_index, player)
WIN = "win"  # (player, line_index)
DRAW = "draw"  # ()
PLAYER_CHANGED = "player_changed"  # (player)
BOARD_RESET = "board_reset"  # ()
AI_THINKING = "ai_thinking"  # ()
AI_MOVE_COMPLETED = "ai_move_completed"  # (cell_index)


class GameState:
    """Whose turn it is and whether the round is still running."""

    def __init__(self, players: Sequence[Player] = (PLAYER_X, PLAYER_O)):
        if not players:
            raise ValueError("At least one player is required")
        self.players = tuple(players)
        self.reset()

    @property
    def is_active(self) -> bool:
        return self.status == GameStatus.PLAYING

    def reset(self) -> None:
        self._index = 0
        self.current_player: Player = self.players[0]
        self.status = GameStatus.PLAYING

    def switch_player(self) -> None:
        if self.status != GameStatus.PLAYING:
            return
        self._index = (self._index + 1) % len(self.players)
        self.current_player = self.players[self._index]

    def set_win(self) -> None:
        self.status = GameStatus.WIN

    def set_draw(self) -> None:
        self.status = GameStatus.DRAW


class ScoreManager:
    """In-memory win tally; unknown players are ignored."""

    def __init__(self, players: Sequence[Player] = (PLAYER_X, PLAYER_O)):
        self._scores: Dict[Player, int] = {p: 0 for p in players}

    def get_score(self, player: Player) -> int:
        return self._scores.get(player, 0)

    def add_score(self, player: Player) -> None:
        if player in self._scores:
            self._scores[player] += 1

    def reset_scores(self) -> None:
        for player in self._scores:
            self._scores[player] = 0


@dataclass
class GameController:
    board: GameBoard = field(default_factory=GameBoard)
    win_checker: WinChecker = field(default_factory=WinChecker)
    score_manager: ScoreManager = field(default_factory=ScoreManager)
    state: GameState = field(default_factory=GameState)
    winner: Optional[Player] = field(default=None, init=False)
    win_line: Optional[int] = field(default=None, init=False)
    last_move: Optional[int] = field(default=None, init=False)
    _listeners: Dict[str, List[Callable[..., None]]] = field(
        default_factory=dict, init=False, repr=False
    )

    # ---- listeners ----

    def subscribe(self, event: str, callback: Callable[..., None]) -> None:
        self._listeners.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[..., None]) -> None:
        callbacks = self._listeners.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def _emit(self, event: str, *args: object) -> None:
        for callback in list(self._listeners.get(event, ())):
            callback(*args)

    # ---- play ----

    def try_play_cell(self, cell: int) -> bool:
        """Place the current player's mark; False if the move is not allowed."""
        if not self.state.is_active:
            return False
        if not self.board.is_cell_empty(cell):
            return False

        player = self.state.current_player
        self.board.set_cell(cell, player)
        self.last_move = cell
        self._emit(CELL_PLAYED, cell, player)

        line = self.win_checker.check_win(self.board, player)
        if line is not None:
            self._handle_win(player, line)
            return True

        if self.win_checker.check_draw(self.board):
            self._handle_draw()
            return True

        self.state.switch_player()
        self._emit(PLAYER_CHANGED, self.state.current_player)
        return True

    def reset_board(self) -> None:
        """Start a new round; scores carry over."""
        self.board.clear()
        self.state.reset()
        self.winner = None
        self.win_line = None
        self.last_move = None
        self._emit(BOARD_RESET)
        self._emit(PLAYER_CHANGED, self.state.current_player)

    @property
    def current_player(self) -> Player:
        return self.state.current_player

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    def get_score(self, player: Player) -> int:
        return self.score_manager.get_score(player)

    # ---- helpers ----

    def _handle_win(self, player: Player, line: int) -> None:
        self.state.set_win()
        self.winner = player
        self.win_line = line
        self.score_manager.add_score(player)
        logger.info("Player %s wins on line %s", player, line)
        self._emit(WIN, player, line)

    def _handle_draw(self) -> None:
        self.state.set_draw()
        logger.info("Round ended in a draw")
        self._emit(DRAW)


@dataclass
class AIGameController(GameController):
    mode: GameMode = GameMode.PLAYER_VS_BOT
    ai: Optional[MinimaxAI] = None
    human_player: Player = PLAYER_X
    ai_player: Player = PLAYER_O

    def __post_init__(self) -> None:
        if self.mode == GameMode.PLAYER_VS_BOT and self.ai is None:
            raise ValueError("An AI player is required for bot games")

    def try_play_cell(self, cell: int) -> bool:
        played = super().try_play_cell(cell)
        if played and self.is_ai_turn() and self.is_active:
            self._emit(AI_THINKING)
        return played

    def execute_ai_move(self) -> bool:
        if self.mode != GameMode.PLAYER_VS_BOT or self.ai is None:
            return False
        if not self.is_active or self.current_player != self.ai_player:
            return False

        move = self.ai.choose(self.board, self.ai_player, self.human_player)
        if move == NO_MOVE or not 0 <= move <= 8:
            logger.warning("AI produced no playable move")
            return False

        played = super().try_play_cell(move)
        if played:
            self._emit(AI_MOVE_COMPLETED, move)
        return played

    def is_ai_turn(self) -> bool:
        return (
            self.mode == GameMode.PLAYER_VS_BOT
            and self.current_player == self.ai_player
        )
