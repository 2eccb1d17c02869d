from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import FrozenSet, Optional, Tuple

from .config import config

Coordinate = Tuple[int, int]


class Player(IntEnum):
    RED = 0
    GREEN = 1
    YELLOW = 2
    BLUE = 3

    def next(self) -> "Player":
        """Next player in the fixed cyclic turn order."""
        return Player((self.value + 1) % len(Player))


class TokenState(Enum):
    BASE = "base"  # waiting in the yard for a six
    ACTIVE = "active"  # on the loop or the home stretch
    HOME = "home"  # reached the centre, never moves again


class Phase(Enum):
    AWAITING_ROLL = "awaiting_roll"
    AWAITING_SELECTION = "awaiting_selection"
    GAME_OVER = "game_over"


@dataclass(frozen=True, slots=True)
class Token:
    """Immutable token value.

    Position and lifecycle state are coupled: a Base token sits at
    ``BASE_STEP``, an Active token anywhere in ``ENTRY_STEP..HOME_STEP - 1``
    and a Home token exactly at ``HOME_STEP``. Any other pairing fails the
    construction-time assertion, so a token can only change through the
    helpers below.
    """

    id: int
    owner: Player
    step: int = config.BASE_STEP
    state: TokenState = TokenState.BASE

    def __post_init__(self) -> None:
        if self.state is TokenState.BASE:
            assert self.step == config.BASE_STEP, f"Base token at step {self.step}"
        elif self.state is TokenState.ACTIVE:
            assert (
                config.ENTRY_STEP <= self.step < config.HOME_STEP
            ), f"Active token at step {self.step}"
        else:
            assert self.step == config.HOME_STEP, f"Home token at step {self.step}"

    @property
    def completed(self) -> bool:
        return self.state is TokenState.HOME

    @property
    def slot(self) -> int:
        """Index of the token within its owner's four (0..3)."""
        return self.id % config.TOKENS_PER_PLAYER

    def is_in_base(self) -> bool:
        return self.state is TokenState.BASE

    def is_active(self) -> bool:
        return self.state is TokenState.ACTIVE

    def entered(self) -> "Token":
        return Token(self.id, self.owner, config.ENTRY_STEP, TokenState.ACTIVE)

    def advanced(self, steps: int) -> "Token":
        target = self.step + steps
        state = TokenState.HOME if target == config.HOME_STEP else TokenState.ACTIVE
        return Token(self.id, self.owner, target, state)

    def sent_to_base(self) -> "Token":
        return Token(self.id, self.owner)

    def __str__(self) -> str:
        return f"Token({self.owner.name}_{self.slot}: {self.state.value} at {self.step})"


@dataclass(frozen=True, slots=True)
class GameState:
    """Snapshot of a game. Never mutated; every transition builds a new one."""

    tokens: Tuple[Token, ...]
    current_player: Player = Player.RED
    phase: Phase = Phase.AWAITING_ROLL
    pending_dice_value: Optional[int] = None
    last_rolled_value: int = 0  # display only, survives turn changes
    winner: Optional[Player] = None
    playable_token_ids: FrozenSet[int] = field(default_factory=frozenset)
    status_message: str = "Roll the dice!"

    @property
    def roll_allowed(self) -> bool:
        return self.phase is Phase.AWAITING_ROLL

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def token(self, token_id: int) -> Token:
        return self.tokens[token_id]

    def tokens_of(self, player: Player) -> Tuple[Token, ...]:
        start = int(player) * config.TOKENS_PER_PLAYER
        return self.tokens[start : start + config.TOKENS_PER_PLAYER]

    def tokens_at(self, x: int, y: int) -> Tuple[Token, ...]:
        """Tokens on the board (Active or Home) occupying grid cell (x, y)."""
        from .board import coordinate_of

        return tuple(
            t
            for t in self.tokens
            if not t.is_in_base() and coordinate_of(t.owner, t.step) == (x, y)
        )


@dataclass(frozen=True, slots=True)
class MoveEvents:
    entered_board: bool = False
    finished: bool = False
    captured_token_ids: Tuple[int, ...] = ()
    bonus_roll: bool = False
    won: bool = False


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of one resolved selection.

    ``path`` lists the grid cell reached after each single step, in order, so
    a presentation layer can animate the move at its own pace. ``state`` is
    the already-final snapshot.
    """

    token_id: int
    old_step: int
    new_step: int
    path: Tuple[Coordinate, ...]
    events: MoveEvents
    state: GameState
