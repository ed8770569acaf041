"""Core rules for SumTacToe: a numbers phase followed by a symbols phase."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple, Union

logger = logging.getLogger(__name__)

Player = int  # 1 or 2
Symbol = str  # "O", "X", or " " (space) for empty
Line = Tuple[int, int, int]

PLAYER_ONE: Player = 1
PLAYER_TWO: Player = 2
EMPTY: Symbol = " "

# Player 1 plays "O", player 2 plays "X"
SYMBOLS: Dict[Player, Symbol] = {PLAYER_ONE: "O", PLAYER_TWO: "X"}

NUMBERS: Tuple[int, ...] = tuple(range(1, 10))
CELLS: Tuple[int, ...] = tuple(range(9))

WINNING_LINES: Tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Phase(str, Enum):
    NUMBERS = "numbers"
    SYMBOLS = "symbols"
    FINISHED = "finished"


class Mode(str, Enum):
    """Display mode. Hard mode hides the numbers while symbols are placed."""

    NORMAL = "normal"
    HARD = "hard"


class Rejection(str, Enum):
    INVALID_NUMBER_SELECTION = "invalid_number_selection"
    CELL_OCCUPIED = "cell_occupied"
    FIRST_MOVE_VIOLATION = "first_move_violation"
    NO_SELECTION = "no_selection"
    INVALID_CELL = "invalid_cell"
    WRONG_PHASE = "wrong_phase"
    GAME_OVER = "game_over"


def other_player(player: Player) -> Player:
    return PLAYER_TWO if player == PLAYER_ONE else PLAYER_ONE


def symbol_for(player: Player) -> Symbol:
    return SYMBOLS[player]


def player_for(symbol: Symbol) -> Optional[Player]:
    for player, mark in SYMBOLS.items():
        if mark == symbol:
            return player
    return None


def winning_line(cells: List[Symbol], symbol: Optional[Symbol] = None) -> Optional[Line]:
    """First complete line in ``WINNING_LINES`` order, optionally for one symbol."""
    for a, b, c in WINNING_LINES:
        v = cells[a]
        if v == EMPTY or (symbol is not None and v != symbol):
            continue
        if v == cells[b] == cells[c]:
            return (a, b, c)
    return None


def sum_under(cells: List[Symbol], numbers: List[Optional[int]], symbol: Symbol) -> int:
    return sum(n or 0 for s, n in zip(cells, numbers) if s == symbol)


# ---------- Results ----------


@dataclass(frozen=True)
class Rejected:
    """Falsy result returned by any command that did not change the game."""

    reason: Rejection

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Scores:
    player1: int
    player2: int

    def for_player(self, player: Player) -> int:
        return self.player1 if player == PLAYER_ONE else self.player2

    @property
    def leader(self) -> Optional[Player]:
        """Player with the larger sum, ``None`` on a true tie."""
        if self.player1 > self.player2:
            return PLAYER_ONE
        if self.player2 > self.player1:
            return PLAYER_TWO
        return None


@dataclass(frozen=True)
class Outcome:
    terminal: bool = False
    winner: Optional[Player] = None
    line: Optional[Line] = None
    tie: bool = False
    scores: Optional[Scores] = None

    @property
    def score_winner(self) -> Optional[Player]:
        """On a tie, the player ahead on number sums."""
        if not self.tie or self.scores is None:
            return None
        return self.scores.leader


ONGOING = Outcome()


@dataclass(frozen=True)
class NumberPlacement:
    index: int
    number: int
    player: Player
    phase_changed: bool


@dataclass(frozen=True)
class SymbolPlacement:
    index: int
    symbol: Symbol
    player: Player
    outcome: Outcome


PlaceNumberResult = Union[NumberPlacement, Rejected]
PlaceSymbolResult = Union[SymbolPlacement, Rejected]


# ---------- Game ----------


@dataclass
class SumTacToeGame:
    number_grid: List[Optional[int]] = field(default_factory=lambda: [None] * 9)
    symbol_grid: List[Symbol] = field(default_factory=lambda: [EMPTY] * 9)
    current_player: Player = PLAYER_ONE
    phase: Phase = Phase.NUMBERS
    used_numbers: Set[int] = field(default_factory=set)
    selected_number: Optional[int] = None
    last_number_placer: Optional[Player] = None
    active: bool = True
    last_scores: Optional[Scores] = None
    winning_line: Optional[Line] = None

    # Configuration, kept across resets
    mode: Mode = Mode.NORMAL
    vs_computer: bool = False
    human_player: Player = PLAYER_ONE

    # ---- commands ----

    def configure(self, vs_computer: bool, human_player: Player) -> None:
        self.vs_computer = vs_computer
        self.human_player = human_player

    def select_number(self, number: int) -> bool:
        if (
            self.phase is not Phase.NUMBERS
            or number not in NUMBERS
            or number in self.used_numbers
        ):
            logger.debug("Rejected number selection %r", number)
            return False
        self.selected_number = number
        return True

    def place_number(self, index: int) -> PlaceNumberResult:
        reason = self._number_rejection(index)
        if reason is not None:
            logger.debug("Rejected number placement at %r: %s", index, reason.value)
            return Rejected(reason)

        number = self.selected_number
        assert number is not None
        player = self.current_player
        self.number_grid[index] = number
        self.used_numbers.add(number)
        self.last_number_placer = player
        self.selected_number = None

        if len(self.used_numbers) == len(NUMBERS):
            self._start_symbol_phase()
            return NumberPlacement(index, number, player, phase_changed=True)

        self.current_player = other_player(player)
        return NumberPlacement(index, number, player, phase_changed=False)

    def place_symbol(self, index: int) -> PlaceSymbolResult:
        reason = self._symbol_rejection(index)
        if reason is not None:
            logger.debug("Rejected symbol placement at %r: %s", index, reason.value)
            return Rejected(reason)

        player = self.current_player
        symbol = symbol_for(player)
        self.symbol_grid[index] = symbol

        outcome = self.check_result()
        if not outcome.terminal:
            self.current_player = other_player(player)
        return SymbolPlacement(index, symbol, player, outcome)

    def check_result(self) -> Outcome:
        line = winning_line(self.symbol_grid)
        if line is not None:
            winner = player_for(self.symbol_grid[line[0]])
            self._finish()
            self.winning_line = line
            logger.info("Player %s wins on line %s", winner, line)
            return Outcome(terminal=True, winner=winner, line=line)

        if self.is_full():
            scores = self.calculate_scores()
            self._finish()
            self.last_scores = scores
            logger.info(
                "Board full, tie scored %d-%d", scores.player1, scores.player2
            )
            return Outcome(terminal=True, tie=True, scores=scores)

        return ONGOING

    def calculate_scores(self) -> Scores:
        return Scores(
            player1=sum_under(self.symbol_grid, self.number_grid, SYMBOLS[PLAYER_ONE]),
            player2=sum_under(self.symbol_grid, self.number_grid, SYMBOLS[PLAYER_TWO]),
        )

    def reset(self) -> None:
        self.number_grid = [None] * 9
        self.symbol_grid = [EMPTY] * 9
        self.current_player = PLAYER_ONE
        self.phase = Phase.NUMBERS
        self.used_numbers = set()
        self.selected_number = None
        self.last_number_placer = None
        self.active = True
        self.last_scores = None
        self.winning_line = None

    # ---- queries ----

    def is_full(self) -> bool:
        return all(c != EMPTY for c in self.symbol_grid)

    def is_first_symbol_move(self) -> bool:
        return all(c == EMPTY for c in self.symbol_grid)

    def number_one_index(self) -> Optional[int]:
        try:
            return self.number_grid.index(1)
        except ValueError:
            return None

    def available_numbers(self) -> List[int]:
        return [n for n in NUMBERS if n not in self.used_numbers]

    def empty_number_cells(self) -> List[int]:
        return [i for i in CELLS if self.number_grid[i] is None]

    def empty_symbol_cells(self) -> List[int]:
        return [i for i in CELLS if self.symbol_grid[i] == EMPTY]

    def is_computer_turn(self) -> bool:
        return (
            self.vs_computer
            and self.active
            and self.current_player != self.human_player
        )

    # ---- helpers ----

    def _number_rejection(self, index: int) -> Optional[Rejection]:
        if not self.active:
            return Rejection.GAME_OVER
        if self.phase is not Phase.NUMBERS:
            return Rejection.WRONG_PHASE
        if index not in CELLS:
            return Rejection.INVALID_CELL
        if self.number_grid[index] is not None:
            return Rejection.CELL_OCCUPIED
        if self.selected_number is None:
            return Rejection.NO_SELECTION
        return None

    def _symbol_rejection(self, index: int) -> Optional[Rejection]:
        if not self.active:
            return Rejection.GAME_OVER
        if self.phase is not Phase.SYMBOLS:
            return Rejection.WRONG_PHASE
        if index not in CELLS:
            return Rejection.INVALID_CELL
        if self.symbol_grid[index] != EMPTY:
            return Rejection.CELL_OCCUPIED
        if self.is_first_symbol_move() and index != self.number_one_index():
            return Rejection.FIRST_MOVE_VIOLATION
        return None

    def _start_symbol_phase(self) -> None:
        # The player who did not place the last number opens the symbols phase
        assert self.last_number_placer is not None
        self.phase = Phase.SYMBOLS
        self.current_player = other_player(self.last_number_placer)
        logger.debug("Numbers complete, player %s starts symbols", self.current_player)

    def _finish(self) -> None:
        self.active = False
        self.phase = Phase.FINISHED
