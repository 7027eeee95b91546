"""Board representation and win/draw detection for classic 3x3 Tic-Tac-Toe."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Player = int  # 0 for empty, otherwise a player id

EMPTY: Player = 0
PLAYER_X: Player = 1
PLAYER_O: Player = 2

BOARD_SIZE = 9

# Order matters: the line index tells clients which strike line to draw.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


@dataclass
class GameBoard:
    # Row-major, index = row * 3 + col
    cells: List[Player] = field(default_factory=lambda: [EMPTY] * BOARD_SIZE)

    def get_cell(self, idx: int) -> Player:
        return self.cells[idx] if self._valid(idx) else EMPTY

    def set_cell(self, idx: int, value: Player) -> None:
        if self._valid(idx):
            self.cells[idx] = value

    def is_cell_empty(self, idx: int) -> bool:
        return self._valid(idx) and self.cells[idx] == EMPTY

    def empty_cells(self) -> List[int]:
        return [i for i, c in enumerate(self.cells) if c == EMPTY]

    def is_full(self) -> bool:
        return all(c != EMPTY for c in self.cells)

    def clear(self) -> None:
        for i in range(BOARD_SIZE):
            self.cells[i] = EMPTY

    def snapshot(self) -> List[Player]:
        return self.cells.copy()

    @staticmethod
    def _valid(idx: int) -> bool:
        return 0 <= idx < BOARD_SIZE


class WinChecker:
    """Answers the two questions the game loop and the AI ask of a board."""

    def check_win(self, board: GameBoard, player: Player) -> Optional[int]:
        """Return the index of the first completed line for ``player``, if any."""
        for line_index, (a, b, c) in enumerate(WINNING_LINES):
            if board.get_cell(a) == board.get_cell(b) == board.get_cell(c) == player:
                return line_index
        return None

    def check_draw(self, board: GameBoard) -> bool:
        # Callers check for a winner first
        return board.is_full()
