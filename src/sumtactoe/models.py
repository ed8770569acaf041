"""Pydantic models for configuring a game and exposing its state to a front end."""

from __future__ import annotations

import os
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .game import PLAYER_ONE, PLAYER_TWO, Mode, Phase, SumTacToeGame

COMPUTER_MOVE_DELAY = 0.4
ENV_PREFIX = "SUMTACTOE_"


class GameConfig(BaseModel):
    """Settings chosen outside the game itself; they survive ``reset()``."""

    vs_computer: bool = False
    human_player: int = Field(
        default=PLAYER_ONE,
        description="Seat taken by the human when playing the computer",
    )
    mode: Mode = Mode.NORMAL
    computer_delay: float = Field(
        default=COMPUTER_MOVE_DELAY,
        ge=0.0,
        description="Seconds to wait before the computer plays",
    )

    @field_validator("human_player")
    @classmethod
    def ensure_known_player(cls, value: int) -> int:
        if value not in (PLAYER_ONE, PLAYER_TWO):
            raise ValueError(
                f"Unknown player {value}. Choose {PLAYER_ONE} or {PLAYER_TWO}."
            )
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameConfig":
        environ = os.environ if environ is None else environ
        values: Dict[str, str] = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw
        return cls.model_validate(values)


class Scoreboard(BaseModel):
    player1: int
    player2: int


class MoveRecord(BaseModel):
    """One applied placement, as kept in the controller's move log."""

    model_config = ConfigDict(populate_by_name=True)

    player: int
    kind: Phase
    index: int
    number: Optional[int] = None
    symbol: Optional[str] = None
    by_computer: bool = Field(default=False, alias="byComputer")


class GameSnapshot(BaseModel):
    """Read-only view of a game handed to a presentation layer."""

    model_config = ConfigDict(populate_by_name=True)

    phase: Phase
    current_player: int = Field(alias="currentPlayer")
    number_grid: List[Optional[int]] = Field(alias="numberGrid")
    symbol_grid: List[str] = Field(alias="symbolGrid")
    used_numbers: List[int] = Field(alias="usedNumbers")
    selected_number: Optional[int] = Field(default=None, alias="selectedNumber")
    active: bool
    mode: Mode
    vs_computer: bool = Field(alias="vsComputer")
    human_player: int = Field(alias="humanPlayer")
    last_scores: Optional[Scoreboard] = Field(default=None, alias="lastScores")
    winning_line: Optional[List[int]] = Field(default=None, alias="winningLine")
    move_log: List[MoveRecord] = Field(default_factory=list, alias="moveLog")

    @classmethod
    def of(
        cls, game: SumTacToeGame, move_log: Optional[List[MoveRecord]] = None
    ) -> "GameSnapshot":
        scores = game.last_scores
        return cls(
            phase=game.phase,
            current_player=game.current_player,
            number_grid=list(game.number_grid),
            # Presentation uses "" for an empty cell
            symbol_grid=[c.strip() for c in game.symbol_grid],
            used_numbers=sorted(game.used_numbers),
            selected_number=game.selected_number,
            active=game.active,
            mode=game.mode,
            vs_computer=game.vs_computer,
            human_player=game.human_player,
            last_scores=(
                Scoreboard(player1=scores.player1, player2=scores.player2)
                if scores
                else None
            ),
            winning_line=list(game.winning_line) if game.winning_line else None,
            move_log=list(move_log or []),
        )
