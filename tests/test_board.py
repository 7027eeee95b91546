"""Unit tests for the ClassicXO board and win checker."""

import pytest

from classicxo.board import (
    EMPTY,
    PLAYER_O,
    PLAYER_X,
    WINNING_LINES,
    GameBoard,
    WinChecker,
)


def test_new_board_is_empty():
    board = GameBoard()
    assert board.cells == [EMPTY] * 9
    assert board.empty_cells() == list(range(9))
    assert not board.is_full()


@pytest.mark.parametrize("idx", [-1, 9, 42])
def test_out_of_range_indexes_are_ignored(idx):
    board = GameBoard()
    board.set_cell(idx, PLAYER_X)

    assert board.cells == [EMPTY] * 9
    assert board.get_cell(idx) == EMPTY
    assert not board.is_cell_empty(idx)


def test_snapshot_is_a_copy():
    board = GameBoard()
    board.set_cell(4, PLAYER_O)
    snap = board.snapshot()
    snap[4] = PLAYER_X

    assert board.get_cell(4) == PLAYER_O


def test_clear_resets_every_cell():
    board = GameBoard(cells=[PLAYER_X, PLAYER_O] * 4 + [PLAYER_X])
    assert board.is_full()

    board.clear()

    assert board.empty_cells() == list(range(9))


@pytest.mark.parametrize("line_index", range(len(WINNING_LINES)))
def test_win_reports_line_index(line_index):
    board = GameBoard()
    for idx in WINNING_LINES[line_index]:
        board.set_cell(idx, PLAYER_O)

    checker = WinChecker()
    assert checker.check_win(board, PLAYER_O) == line_index
    assert checker.check_win(board, PLAYER_X) is None


def test_first_line_in_canonical_order_is_reported():
    board = GameBoard()
    for idx in (0, 1, 2, 3, 6):
        board.set_cell(idx, PLAYER_X)
    # Row 0 and column 0 are both complete
    assert WinChecker().check_win(board, PLAYER_X) == 0


def test_draw_only_when_full():
    checker = WinChecker()
    board = GameBoard(
        cells=[
            PLAYER_X, PLAYER_O, PLAYER_X,
            PLAYER_X, PLAYER_O, PLAYER_O,
            PLAYER_O, PLAYER_X, PLAYER_X,
        ]
    )
    assert checker.check_draw(board)
    assert checker.check_win(board, PLAYER_X) is None
    assert checker.check_win(board, PLAYER_O) is None

    board.set_cell(8, EMPTY)
    assert not checker.check_draw(board)
