"""Computer opponent for SumTacToe: a placement heuristic and a full-depth minimax."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from .game import (
    CELLS,
    EMPTY,
    NUMBERS,
    Phase,
    Player,
    Symbol,
    SumTacToeGame,
    sum_under,
    symbol_for,
    winning_line,
)

logger = logging.getLogger(__name__)

CENTER = 4
CORNERS: Tuple[int, ...] = (0, 2, 6, 8)
EDGES: Tuple[int, ...] = (1, 3, 5, 7)

WIN_SCORE = 10
TIE_BREAK_SCORE = 2


class NumberMove(NamedTuple):
    number: int
    index: int


Move = Union[NumberMove, int]


def choose_number_move(
    number_grid: Sequence[Optional[int]],
    used_numbers: Sequence[int],
    rng: Optional[random.Random] = None,
) -> Optional[NumberMove]:
    """Largest unused number on the centre, else a random corner, else a random edge.

    Deliberately simple: it does not look ahead into the symbols phase.
    """
    rng = rng or random.Random()
    available = [n for n in NUMBERS if n not in used_numbers]
    empty = [i for i in CELLS if number_grid[i] is None]
    if not available or not empty:
        return None

    number = available[-1]
    if CENTER in empty:
        return NumberMove(number, CENTER)
    corners = [i for i in CORNERS if i in empty]
    if corners:
        return NumberMove(number, rng.choice(corners))
    edges = [i for i in EDGES if i in empty]
    return NumberMove(number, rng.choice(edges))


def choose_symbol_move(
    symbol_grid: Sequence[Symbol],
    number_grid: Sequence[Optional[int]],
    symbol: Symbol,
) -> Optional[int]:
    """Best cell for ``symbol`` by exhaustive minimax.

    The opening symbol of a game has to go on the cell holding 1, so that
    cell is returned without searching.
    """
    board = list(symbol_grid)
    if all(c == EMPTY for c in board):
        try:
            return list(number_grid).index(1)
        except ValueError:
            return None
    return SymbolSearch(list(number_grid), symbol).best_move(board)


@dataclass
class SymbolSearch:
    """Minimax over the remaining symbol cells.

    Scores are from the point of view of ``symbol``:
      - ``10 - depth`` for a line of ours (faster wins first),
      - ``depth - 10`` for a line of theirs (slower losses first),
      - ``+2`` / ``-2`` / ``0`` on a full board by comparing number sums.

    Results are memoized per board. Depth is fixed by the number of symbols
    placed since the root, so a board always maps to the same score.
    """

    numbers: List[Optional[int]]
    symbol: Symbol
    nodes: int = 0
    _tt: Dict[Tuple[str, ...], int] = field(default_factory=dict, repr=False)

    @property
    def opponent(self) -> Symbol:
        return "X" if self.symbol == "O" else "O"

    def best_move(self, board: List[Symbol]) -> Optional[int]:
        best_score = -math.inf
        best_move: Optional[int] = None
        for i in CELLS:
            if board[i] != EMPTY:
                continue
            board[i] = self.symbol
            score = self.minimax(board, 0, False)
            board[i] = EMPTY
            # Strict comparison: the lowest index wins among equal scores
            if score > best_score:
                best_score, best_move = score, i
        logger.debug(
            "Symbol search for %s chose %s (score %s, %d nodes)",
            self.symbol,
            best_move,
            best_score,
            self.nodes,
        )
        return best_move

    def minimax(self, board: List[Symbol], depth: int, maximizing: bool) -> int:
        self.nodes += 1
        if winning_line(board, self.symbol) is not None:
            return WIN_SCORE - depth
        if winning_line(board, self.opponent) is not None:
            return depth - WIN_SCORE
        if EMPTY not in board:
            return self._tie_break(board)

        key = tuple(board)
        cached = self._tt.get(key)
        if cached is not None:
            return cached

        mark = self.symbol if maximizing else self.opponent
        scores: List[int] = []
        for i in CELLS:
            if board[i] != EMPTY:
                continue
            board[i] = mark
            scores.append(self.minimax(board, depth + 1, not maximizing))
            board[i] = EMPTY

        value = max(scores) if maximizing else min(scores)
        self._tt[key] = value
        return value

    def _tie_break(self, board: List[Symbol]) -> int:
        ours = sum_under(board, self.numbers, self.symbol)
        theirs = sum_under(board, self.numbers, self.opponent)
        if ours > theirs:
            return TIE_BREAK_SCORE
        if ours < theirs:
            return -TIE_BREAK_SCORE
        return 0


@dataclass
class ComputerPlayer:
    """Picks moves for ``player``; applying them is left to the caller.

      - ComputerPlayer(player=2)
      - choose(game) -> NumberMove | int | None
    """

    player: Player
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @property
    def symbol(self) -> Symbol:
        return symbol_for(self.player)

    def choose(self, game: SumTacToeGame) -> Optional[Move]:
        if not game.active or game.current_player != self.player:
            return None
        if game.phase is Phase.NUMBERS:
            return self.choose_number_move(game)
        if game.phase is Phase.SYMBOLS:
            return self.choose_symbol_move(game)
        return None

    def choose_number_move(self, game: SumTacToeGame) -> Optional[NumberMove]:
        return choose_number_move(game.number_grid, sorted(game.used_numbers), self.rng)

    def choose_symbol_move(self, game: SumTacToeGame) -> Optional[int]:
        return choose_symbol_move(game.symbol_grid, game.number_grid, self.symbol)
