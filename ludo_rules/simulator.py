from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from .config import config
from .game import Game
from .types import Phase, Player


@dataclass(slots=True)
class SimulationSummary:
    winner: Optional[Player] = None
    commands: int = 0
    rolls: int = 0
    moves: int = 0
    passes: int = 0
    captures: int = 0
    bonus_rolls: int = 0

    @property
    def finished(self) -> bool:
        return self.winner is not None


@dataclass(slots=True)
class Simulator:
    """Plays every seat by picking a random playable token.

    Meant for smoke runs and tests of the engine, not as an opponent.
    """

    game: Game
    seed: int | None = None
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    @classmethod
    def for_game(cls, game: Game, seed: int | None = None) -> "Simulator":
        return cls(game=game, seed=seed)

    def step(self, summary: SimulationSummary) -> None:
        """Issue one command: a roll, or a selection if one is awaited."""
        state = self.game.state
        summary.commands += 1
        if state.phase is Phase.AWAITING_ROLL:
            roller = state.current_player
            after = self.game.roll_dice()
            summary.rolls += 1
            if after.phase is Phase.AWAITING_ROLL:
                summary.passes += 1
                if after.current_player == roller:
                    summary.bonus_rolls += 1
            return

        token_id = self.rng.choice(sorted(state.playable_token_ids))
        self.game.select_token(token_id)
        summary.moves += 1
        result = self.game.last_move
        if result is not None:
            summary.captures += len(result.events.captured_token_ids)
            if result.events.bonus_roll:
                summary.bonus_rolls += 1

    def run(self, max_commands: int | None = None) -> SimulationSummary:
        limit = config.MAX_COMMANDS if max_commands is None else max_commands
        summary = SimulationSummary()
        while not self.game.is_over and summary.commands < limit:
            self.step(summary)
        summary.winner = self.game.winner
        if not summary.finished:
            logger.warning(f"No winner after {summary.commands} commands")
        return summary
