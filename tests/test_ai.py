"""Tests for the SumTacToe computer opponent."""

import random

from sumtactoe.ai import (
    CORNERS,
    EDGES,
    ComputerPlayer,
    NumberMove,
    SymbolSearch,
    choose_number_move,
    choose_symbol_move,
)
from sumtactoe.game import SumTacToeGame


def grid(text):
    """Nine characters, '.' for an empty cell."""
    return [" " if c == "." else c for c in text]


def test_number_move_prefers_center_with_largest_number():
    move = choose_number_move([None] * 9, [])
    assert move == NumberMove(number=9, index=4)


def test_number_move_falls_back_to_corners():
    numbers = [None] * 9
    numbers[4] = 9
    numbers[0] = 1
    for seed in range(10):
        move = choose_number_move(numbers, [1, 9], random.Random(seed))
        assert move.number == 8
        assert move.index in (2, 6, 8)


def test_number_move_falls_back_to_edges():
    numbers = [None] * 9
    for index, number in zip((4,) + CORNERS, (1, 2, 3, 4, 5)):
        numbers[index] = number
    move = choose_number_move(numbers, [1, 2, 3, 4, 5], random.Random(3))
    assert move.number == 9
    assert move.index in EDGES


def test_number_move_when_nothing_left():
    assert choose_number_move(list(range(1, 10)), list(range(1, 10))) is None


def test_first_symbol_goes_on_number_one():
    numbers = [5, 3, 7, 1, 9, 2, 8, 4, 6]
    assert choose_symbol_move(grid("........."), numbers, "X") == 3
    assert choose_symbol_move(grid("........."), numbers, "O") == 3


def test_takes_immediate_win():
    numbers = [5, 3, 7, 1, 9, 2, 8, 4, 6]
    assert choose_symbol_move(grid("XX.OO...."), numbers, "X") == 2


def test_avoids_handing_over_a_fork():
    # X in opposite corners, O in the centre: a corner reply loses to a fork
    numbers = [5, 3, 7, 1, 9, 2, 8, 4, 6]
    move = choose_symbol_move(grid("X...O...X"), numbers, "O")
    assert move in EDGES


def test_number_sums_break_ties():
    board = grid("..XXOOOXX")
    numbers = [1, 9, 2, 3, 4, 5, 6, 7, 8]
    # Either cell ends in a full board without a line; cell 1 holds the 9
    assert choose_symbol_move(board, numbers, "X") == 1

    numbers = [9, 1, 2, 3, 4, 5, 6, 7, 8]
    assert choose_symbol_move(board, numbers, "X") == 0


def test_equal_scores_keep_lowest_index():
    board = grid("..XXOOOXX")
    assert choose_symbol_move(board, [None] * 9, "X") == 0


def test_minimax_terminal_scores():
    numbers = [5, 3, 7, 1, 9, 2, 8, 4, 6]
    search = SymbolSearch(numbers, "X")
    assert search.minimax(grid("XXXOO...."), 3, True) == 7
    assert search.minimax(grid("OOOXX.X.."), 2, False) == -8
    # X O X / X O O / O X X: X holds 5+7+1+4+6, O holds 3+9+2+8
    assert search.minimax(grid("XOXXOOOXX"), 8, True) == 2
    assert SymbolSearch(numbers, "O").minimax(grid("XOXXOOOXX"), 8, True) == -2


def test_equal_wins_pick_lowest_index():
    numbers = [5, 3, 7, 1, 9, 2, 8, 4, 6]
    # Both 2 and 6 win at once; 2 comes first
    assert choose_symbol_move(grid("XX.XOO.O."), numbers, "X") == 2


def test_computer_player_waits_for_its_turn():
    game = SumTacToeGame()
    assert ComputerPlayer(player=2).choose(game) is None
    move = ComputerPlayer(player=1).choose(game)
    assert move == NumberMove(number=9, index=4)


def test_computer_player_symbol_phase():
    game = SumTacToeGame()
    for index, number in enumerate([5, 3, 7, 1, 9, 2, 8, 4, 6]):
        game.select_number(number)
        game.place_number(index)
    computer = ComputerPlayer(player=game.current_player)
    assert computer.choose(game) == 3
    assert game.symbol_grid == [" "] * 9
