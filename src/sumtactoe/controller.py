"""Single-owner controller tying a game, its settings and the computer opponent."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from .ai import ComputerPlayer, NumberMove
from .game import (
    NumberPlacement,
    Phase,
    PlaceNumberResult,
    PlaceSymbolResult,
    Player,
    Scores,
    SumTacToeGame,
    SymbolPlacement,
    other_player,
)
from .models import GameConfig, GameSnapshot, MoveRecord

logger = logging.getLogger(__name__)

Placement = Union[NumberPlacement, SymbolPlacement]


@dataclass
class GameController:
    """Owns one game at a time. Callers must not drive it from two threads."""

    config: GameConfig = field(default_factory=GameConfig)
    game: SumTacToeGame = field(default_factory=SumTacToeGame)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)
    move_log: List[MoveRecord] = field(default_factory=list)
    computer: Optional[ComputerPlayer] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self._apply_config()

    # ---- commands ----

    def configure(
        self,
        vs_computer: bool,
        human_player: Player,
        mode: Optional[str] = None,
    ) -> None:
        """Switch play mode and start over, as changing settings mid-game would."""
        update = {"vs_computer": vs_computer, "human_player": human_player}
        if mode is not None:
            update["mode"] = mode
        self.config = GameConfig.model_validate(
            {**self.config.model_dump(), **update}
        )
        self._apply_config()
        self.reset()

    def select_number(self, number: int) -> bool:
        return self.game.select_number(number)

    def place_number(self, index: int) -> PlaceNumberResult:
        result = self.game.place_number(index)
        if result:
            self._record(result)
        return result

    def place_symbol(self, index: int) -> PlaceSymbolResult:
        result = self.game.place_symbol(index)
        if result:
            self._record(result)
        return result

    def reset(self) -> None:
        self.game.reset()
        self.move_log = []

    def choose_number_move(self) -> Optional[NumberMove]:
        if self.computer is None:
            return None
        return self.computer.choose_number_move(self.game)

    def choose_symbol_move(self) -> Optional[int]:
        if self.computer is None:
            return None
        return self.computer.choose_symbol_move(self.game)

    def computer_turn(self) -> Optional[Placement]:
        """Play one computer move if it is the computer's turn, else do nothing.

        The pacing delay only changes when the move lands, never which move.
        """
        if self.computer is None or not self.game.is_computer_turn():
            return None

        self.sleep(max(0.0, self.config.computer_delay))
        if not self.game.is_computer_turn():
            return None

        move = self.computer.choose(self.game)
        if move is None:
            return None
        if isinstance(move, NumberMove):
            if not self.game.select_number(move.number):
                return None
            result: Union[PlaceNumberResult, PlaceSymbolResult] = self.place_number(
                move.index
            )
        else:
            result = self.place_symbol(move)
        if not result:
            logger.warning("Computer move %s was rejected: %s", move, result)
            return None
        logger.info("Computer (player %s) played %s", self.computer.player, move)
        return result

    def play_computer_turns(self) -> List[Placement]:
        """Let the computer move until the turn passes back to the human."""
        played: List[Placement] = []
        while True:
            placement = self.computer_turn()
            if placement is None:
                return played
            played.append(placement)

    # ---- queries ----

    @property
    def phase(self) -> Phase:
        return self.game.phase

    @property
    def current_player(self) -> Player:
        return self.game.current_player

    @property
    def active(self) -> bool:
        return self.game.active

    @property
    def last_scores(self) -> Optional[Scores]:
        return self.game.last_scores

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot.of(self.game, self.move_log)

    # ---- helpers ----

    def _apply_config(self) -> None:
        self.game.mode = self.config.mode
        self.game.configure(self.config.vs_computer, self.config.human_player)
        self.computer = (
            ComputerPlayer(player=other_player(self.config.human_player), rng=self.rng)
            if self.config.vs_computer
            else None
        )

    def _record(self, placement: Placement) -> None:
        by_computer = (
            self.computer is not None and placement.player == self.computer.player
        )
        if isinstance(placement, NumberPlacement):
            record = MoveRecord(
                player=placement.player,
                kind=Phase.NUMBERS,
                index=placement.index,
                number=placement.number,
                by_computer=by_computer,
            )
        else:
            record = MoveRecord(
                player=placement.player,
                kind=Phase.SYMBOLS,
                index=placement.index,
                symbol=placement.symbol,
                by_computer=by_computer,
            )
        self.move_log.append(record)
