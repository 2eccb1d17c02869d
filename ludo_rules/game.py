from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, FrozenSet, List, Optional

from loguru import logger

from .board import coordinate_of, is_safe, steps_between
from .config import config
from .dice import DiceSource, RandomDice, draw
from .types import GameState, MoveEvents, MoveResult, Phase, Player, Token

Listener = Callable[[GameState], None]


# --- Construction ---
def initial_state() -> GameState:
    tokens = tuple(
        Token(id=int(player) * config.TOKENS_PER_PLAYER + slot, owner=player)
        for player in Player
        for slot in range(config.TOKENS_PER_PLAYER)
    )
    state = GameState(tokens=tokens, current_player=Player.RED)
    check_invariants(state)
    return state


def check_invariants(state: GameState) -> None:
    """Assert the snapshot-level invariants (token-level ones hold by construction)."""
    assert len(state.tokens) == len(Player) * config.TOKENS_PER_PLAYER
    for idx, tok in enumerate(state.tokens):
        assert tok.id == idx, f"token {tok.id} stored at index {idx}"
        assert int(tok.owner) == idx // config.TOKENS_PER_PLAYER

    own_ids = {t.id for t in state.tokens_of(state.current_player)}
    assert state.playable_token_ids <= own_ids, "playable tokens of another player"
    if state.roll_allowed:
        assert not state.playable_token_ids, "stale eligibility while rolling"
    if state.phase is Phase.AWAITING_SELECTION:
        assert state.playable_token_ids and state.pending_dice_value is not None
    if state.phase is Phase.GAME_OVER:
        assert state.winner is not None and not state.playable_token_ids
        assert all(t.completed for t in state.tokens_of(state.winner))
    else:
        assert state.winner is None


# --- Rules: eligibility ---
def can_move(token: Token, dice: int) -> bool:
    if token.completed:
        return False
    if token.is_in_base():
        return dice == config.EXIT_ROLL
    return token.step + dice <= config.HOME_STEP


def eligible_token_ids(state: GameState, player: Player, dice: int) -> FrozenSet[int]:
    return frozenset(t.id for t in state.tokens_of(player) if can_move(t, dice))


# --- Transitions ---
def advance_turn(state: GameState, dice_was_six: bool, prefix: str = "") -> GameState:
    """Hand the roll to the next player, or back to the same one on a six."""
    if dice_was_six:
        player = state.current_player
        message = f"Bonus roll for {player.name}!"
    else:
        player = state.current_player.next()
        message = f"{player.name}'s turn"
    return replace(
        state,
        current_player=player,
        phase=Phase.AWAITING_ROLL,
        pending_dice_value=None,
        playable_token_ids=frozenset(),
        status_message=prefix + message,
    )


def roll_dice(state: GameState, dice: DiceSource) -> GameState:
    """Roll for the current player.

    Ignored unless a roll is allowed. When nothing can move the turn passes
    at once; a six still keeps the turn with the same player.
    """
    if not state.roll_allowed:
        logger.debug(f"Roll rejected in phase {state.phase.value}")
        return state

    value = draw(dice)
    player = state.current_player
    playable = eligible_token_ids(state, player, value)
    rolled = replace(state, pending_dice_value=value, last_rolled_value=value)

    if not playable:
        logger.debug(f"{player.name} rolled {value}: no moves, passing")
        new_state = advance_turn(
            rolled,
            value == config.BONUS_ROLL,
            prefix=f"{player.name} rolled a {value}, no moves possible. ",
        )
    else:
        logger.debug(f"{player.name} rolled {value}: playable {sorted(playable)}")
        new_state = replace(
            rolled,
            phase=Phase.AWAITING_SELECTION,
            playable_token_ids=playable,
            status_message=f"{player.name} rolled a {value}",
        )
    check_invariants(new_state)
    return new_state


def _captures(tokens: List[Token], mover: Token) -> List[int]:
    x, y = coordinate_of(mover.owner, mover.step)
    if is_safe(x, y):
        return []
    return [
        t.id
        for t in tokens
        if t.owner != mover.owner
        and t.is_active()
        and coordinate_of(t.owner, t.step) == (x, y)
    ]


def resolve_move(state: GameState, token_id: int) -> Optional[MoveResult]:
    """Resolve moving ``token_id`` by the pending roll as one atomic step.

    Returns ``None`` (and changes nothing) unless a selection is awaited and
    the token is playable.
    """
    if state.phase is not Phase.AWAITING_SELECTION:
        logger.debug(f"Selection of {token_id} rejected in phase {state.phase.value}")
        return None
    if token_id not in state.playable_token_ids:
        logger.debug(f"Selection of {token_id} rejected: not playable")
        return None

    dice = state.pending_dice_value
    player = state.current_player
    tokens = list(state.tokens)
    token = tokens[token_id]
    old_step = token.step

    # Leaving Base uses up the whole roll.
    moved = token.entered() if token.is_in_base() else token.advanced(dice)
    tokens[token_id] = moved
    path = steps_between(player, old_step, moved.step)

    captured: List[int] = []
    if not moved.completed:
        captured = _captures(tokens, moved)
        for victim in captured:
            tokens[victim] = tokens[victim].sent_to_base()

    moved_state = replace(state, tokens=tuple(tokens))
    won = all(t.completed for t in moved_state.tokens_of(player))
    bonus = not won and dice == config.BONUS_ROLL

    if won:
        new_state = replace(
            moved_state,
            phase=Phase.GAME_OVER,
            winner=player,
            pending_dice_value=None,
            playable_token_ids=frozenset(),
            status_message=f"{player.name} wins!",
        )
        logger.info(f"{player.name} wins")
    else:
        new_state = advance_turn(moved_state, dice == config.BONUS_ROLL)

    if captured:
        logger.debug(
            f"{player.name} token {token_id} captured {captured} at "
            f"{coordinate_of(player, moved.step)}"
        )
    check_invariants(new_state)

    return MoveResult(
        token_id=token_id,
        old_step=old_step,
        new_step=moved.step,
        path=path,
        events=MoveEvents(
            entered_board=token.is_in_base(),
            finished=moved.completed,
            captured_token_ids=tuple(captured),
            bonus_roll=bonus,
            won=won,
        ),
        state=new_state,
    )


def select_token(state: GameState, token_id: int) -> GameState:
    result = resolve_move(state, token_id)
    return state if result is None else result.state


# --- Stateful facade ---
@dataclass(slots=True)
class Game:
    """Sequential command processor around the pure transitions.

    Holds the current snapshot and hands out only immutable states. A command
    arriving while another is still being processed (for instance from a
    listener) is rejected, not queued.
    """

    dice: DiceSource = field(default_factory=lambda: RandomDice(config.SEED))
    _state: GameState = field(default_factory=initial_state, init=False)
    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False)
    _busy: bool = field(default=False, init=False, repr=False)
    last_move: Optional[MoveResult] = field(default=None, init=False)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_over(self) -> bool:
        return self._state.is_over

    @property
    def winner(self) -> Optional[Player]:
        return self._state.winner

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def roll_dice(self) -> GameState:
        if self._busy:
            logger.debug("Roll rejected: busy")
            return self._state
        self._busy = True
        try:
            self._commit(roll_dice(self._state, self.dice))
        finally:
            self._busy = False
        return self._state

    def select_token(self, token_id: int) -> GameState:
        if self._busy:
            logger.debug(f"Selection of {token_id} rejected: busy")
            return self._state
        self._busy = True
        try:
            result = resolve_move(self._state, token_id)
            if result is not None:
                self.last_move = result
                self._commit(result.state)
        finally:
            self._busy = False
        return self._state

    def reset(self) -> GameState:
        if self._busy:
            logger.debug("Reset rejected: busy")
            return self._state
        self._busy = True
        try:
            self.last_move = None
            self._commit(initial_state())
        finally:
            self._busy = False
        return self._state

    def _commit(self, new_state: GameState) -> None:
        if new_state is self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
