"""Alpha-beta Minimax AI with an opening book and difficulty-scaled mistakes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import logging
import math
import random

from .board import EMPTY, GameBoard, Player, WinChecker

logger = logging.getLogger(__name__)

NO_MOVE = -1

WIN_SCORE = 10
LOSE_SCORE = -10
DRAW_SCORE = 0

CENTER = 4
CORNERS = (0, 2, 6, 8)

# Strategic value per cell, only consulted to break ties between equal scores
POSITION_WEIGHTS = (
    3, 2, 3,
    2, 4, 2,
    3, 2, 3,
)


# Keyed by Difficulty value
RANDOM_MOVE_CHANCE = {
    "easy": 0.6,
    "medium": 0.3,
    "hard": 0.1,
}


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def random_move_chance(self) -> float:
        return RANDOM_MOVE_CHANCE[self.value]


@dataclass
class MinimaxAI:
    """Tic-Tac-Toe bot that searches the full game tree with alpha-beta pruning.

    Lower difficulties play a uniformly random empty cell some of the time;
    ``random_move_chance`` overrides the difficulty's rate (0.0 plays perfectly).

      - MinimaxAI(difficulty=Difficulty.HARD)
      - choose(board, ai_player, opponent) -> cell index or NO_MOVE
    """

    difficulty: Difficulty = Difficulty.HARD
    random_move_chance: Optional[float] = None
    rng: random.Random = field(default_factory=random.Random, repr=False)
    win_checker: WinChecker = field(default_factory=WinChecker, repr=False)

    # ---- public API ----

    def choose(
        self, board: Optional[GameBoard], ai_player: Player, opponent: Player
    ) -> int:
        if board is None:
            return NO_MOVE

        if self._should_play_random():
            move = self._random_move(board)
            logger.debug("Random move %s (difficulty=%s)", move, self.difficulty.value)
            return move

        opening = self._opening_move(board)
        if opening is not None:
            logger.debug("Opening book move %s", opening)
            return opening

        best_score = -math.inf
        best_moves: List[int] = []
        for idx in range(9):
            if not board.is_cell_empty(idx):
                continue
            board.set_cell(idx, ai_player)
            try:
                score = self._minimax(
                    board, 0, False, ai_player, opponent, -math.inf, math.inf
                )
            finally:
                board.set_cell(idx, EMPTY)

            if score > best_score:
                best_score = score
                best_moves = [idx]
            elif score == best_score:
                best_moves.append(idx)

        if not best_moves:
            return NO_MOVE

        move = self._strategic_choice(best_moves)
        logger.debug(
            "Search picked %s with score %s among %s", move, best_score, best_moves
        )
        return move

    @property
    def move_chance(self) -> float:
        if self.random_move_chance is not None:
            return self.random_move_chance
        return self.difficulty.random_move_chance

    # ---- core search ----

    def _minimax(
        self,
        board: GameBoard,
        depth: int,
        maximizing: bool,
        ai_player: Player,
        opponent: Player,
        alpha: float,
        beta: float,
    ) -> float:
        if self.win_checker.check_win(board, ai_player) is not None:
            return WIN_SCORE - depth  # faster wins first
        if self.win_checker.check_win(board, opponent) is not None:
            return LOSE_SCORE + depth  # later losses first
        if self.win_checker.check_draw(board):
            return DRAW_SCORE

        mover = ai_player if maximizing else opponent
        value = -math.inf if maximizing else math.inf
        for idx in range(9):
            if not board.is_cell_empty(idx):
                continue
            board.set_cell(idx, mover)
            try:
                score = self._minimax(
                    board, depth + 1, not maximizing, ai_player, opponent, alpha, beta
                )
            finally:
                board.set_cell(idx, EMPTY)

            if maximizing:
                value = max(value, score)
                alpha = max(alpha, score)
            else:
                value = min(value, score)
                beta = min(beta, score)
            if beta <= alpha:
                break
        return value

    # ---- heuristics ----

    def _should_play_random(self) -> bool:
        return self.rng.random() < self.move_chance

    def _random_move(self, board: GameBoard) -> int:
        moves = board.empty_cells()
        if not moves:
            return NO_MOVE
        return self.rng.choice(moves)

    def _opening_move(self, board: GameBoard) -> Optional[int]:
        if any(not board.is_cell_empty(i) for i in range(9)):
            return None
        if board.is_cell_empty(CENTER):
            return CENTER
        for corner in CORNERS:
            if board.is_cell_empty(corner):
                return corner
        return None

    @staticmethod
    def _strategic_choice(moves: List[int]) -> int:
        """Prefer center, then corners, then edges; first in index order wins ties."""
        best = moves[0]
        for move in moves[1:]:
            if POSITION_WEIGHTS[move] > POSITION_WEIGHTS[best]:
                best = move
        return best


def select_move(
    board: Optional[GameBoard],
    difficulty: Difficulty,
    ai_player: Player,
    opponent: Player,
    rng: Optional[random.Random] = None,
) -> int:
    """One-shot form of :meth:`MinimaxAI.choose`."""
    ai = MinimaxAI(difficulty=difficulty, rng=rng or random.Random())
    return ai.choose(board, ai_player, opponent)
