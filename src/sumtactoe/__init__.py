"""SumTacToe package exposing the game rules, the computer opponent, and a controller."""

from .ai import ComputerPlayer, NumberMove, choose_number_move, choose_symbol_move
from .controller import GameController
from .game import Outcome, Phase, Rejected, Rejection, Scores, SumTacToeGame
from .models import GameConfig, GameSnapshot

__all__ = [
    "ComputerPlayer",
    "GameConfig",
    "GameController",
    "GameSnapshot",
    "NumberMove",
    "Outcome",
    "Phase",
    "Rejected",
    "Rejection",
    "Scores",
    "SumTacToeGame",
    "choose_number_move",
    "choose_symbol_move",
]
