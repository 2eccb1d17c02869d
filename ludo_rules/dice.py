from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Protocol

from .config import config


class DiceSource(Protocol):
    def roll(self) -> int:
        """Return an integer uniformly distributed in [1, 6]."""
        ...


class DiceExhausted(IndexError):
    """A scripted dice sequence ran out of values."""


@dataclass(slots=True)
class RandomDice:
    seed: int | None = None
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    def roll(self) -> int:
        return self.rng.randint(config.DICE_MIN, config.DICE_MAX)


@dataclass(slots=True)
class FixedDice:
    """Replays a fixed sequence of values, for deterministic games and tests."""

    values: List[int]
    _cursor: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.values = list(self.values)

    @property
    def remaining(self) -> int:
        return len(self.values) - self._cursor

    def roll(self) -> int:
        if self._cursor >= len(self.values):
            raise DiceExhausted(f"all {len(self.values)} scripted rolls consumed")
        value = self.values[self._cursor]
        self._cursor += 1
        return value


def draw(source: DiceSource) -> int:
    """Draw one value from ``source`` and check it is a legal face."""
    value = source.roll()
    if not isinstance(value, int) or not config.DICE_MIN <= value <= config.DICE_MAX:
        raise ValueError(
            f"dice source returned {value!r}, expected {config.DICE_MIN}..{config.DICE_MAX}"
        )
    return value
