from __future__ import annotations

from typing import FrozenSet, Tuple

import numpy as np

from .config import config
from .types import Coordinate, Player

# RED's route as (x, y) cells: entry at (1, 6), clockwise around the cross,
# up the left arm's middle row and into the centre.
_CANONICAL_PATH: Tuple[Coordinate, ...] = (
    (1, 6), (2, 6), (3, 6), (4, 6), (5, 6),  # 0-4
    (6, 5), (6, 4), (6, 3), (6, 2), (6, 1), (6, 0),  # 5-10
    (7, 0), (8, 0),  # 11-12
    (8, 1), (8, 2), (8, 3), (8, 4), (8, 5),  # 13-17
    (9, 6), (10, 6), (11, 6), (12, 6), (13, 6), (14, 6),  # 18-23
    (14, 7), (14, 8),  # 24-25
    (13, 8), (12, 8), (11, 8), (10, 8), (9, 8),  # 26-30
    (8, 9), (8, 10), (8, 11), (8, 12), (8, 13), (8, 14),  # 31-36
    (7, 14), (6, 14),  # 37-38
    (6, 13), (6, 12), (6, 11), (6, 10), (6, 9),  # 39-43
    (5, 8), (4, 8), (3, 8), (2, 8), (1, 8), (0, 8),  # 44-49
    (0, 7),  # 50
    (1, 7), (2, 7), (3, 7), (4, 7), (5, 7),  # 51-55 home stretch
    config.CENTER,  # 56
)

# Top-left corner of each player's 6x6 yard, in (col, row).
_HOUSE_ORIGINS = {
    Player.RED: (0, 0),
    Player.GREEN: (9, 0),
    Player.YELLOW: (9, 9),
    Player.BLUE: (0, 9),
}


def rotate(coords) -> np.ndarray:
    """Rotate cells 90 degrees clockwise about the board centre.

    Accepts anything array-like with a trailing axis of size 2 and maps
    ``(x, y)`` to ``(GRID_SIZE - 1 - y, x)``. Four applications are the
    identity.
    """
    arr = np.asarray(coords, dtype=np.int64)
    return np.stack((config.GRID_SIZE - 1 - arr[..., 1], arr[..., 0]), axis=-1)


def _compute_paths() -> np.ndarray:
    paths = [np.asarray(_CANONICAL_PATH, dtype=np.int64)]
    for _ in range(len(Player) - 1):
        paths.append(rotate(paths[-1]))
    out = np.stack(paths)  # (players, PATH_LENGTH, 2)
    out.setflags(write=False)
    return out


_PATHS = _compute_paths()

assert _PATHS.shape == (len(Player), config.PATH_LENGTH, 2)

SAFE_COORDINATES: FrozenSet[Coordinate] = frozenset(
    (int(x), int(y))
    for player_path in _PATHS
    for x, y in player_path[[config.ENTRY_STEP, config.GLOBE_STEP]]
)


def path_for(player: Player) -> np.ndarray:
    """Read-only (PATH_LENGTH, 2) array of a player's cells, step order."""
    return _PATHS[int(player)]


def coordinate_of(player: Player, step: int) -> Coordinate:
    """Grid cell of ``player``'s path at ``step``.

    Steps outside the path (including Base) are clamped to the centre.
    """
    if not config.ENTRY_STEP <= step <= config.HOME_STEP:
        return config.CENTER
    x, y = _PATHS[int(player), step]
    return int(x), int(y)


def is_safe(x: int, y: int) -> bool:
    return (x, y) in SAFE_COORDINATES


def base_slot_coordinate(player: Player, slot: int) -> Tuple[float, float]:
    """Fractional grid position of a yard circle inside a player's house.

    Slots 0..3 fill the 2x2 arrangement row by row.
    """
    if not 0 <= slot < config.TOKENS_PER_PLAYER:
        raise ValueError(f"slot must be in 0..{config.TOKENS_PER_PLAYER - 1}")
    col, row = _HOUSE_ORIGINS[player]
    dx = 4.0 if slot % 2 == 1 else 1.5
    dy = 4.0 if slot > 1 else 1.5
    return col + dx - 0.5, row + dy - 0.5


def steps_between(player: Player, start: int, end: int) -> Tuple[Coordinate, ...]:
    """Cells visited one step at a time moving from ``start`` to ``end``.

    ``start`` itself is excluded; from Base the single entry cell is returned.
    """
    if start == config.BASE_STEP:
        return (coordinate_of(player, config.ENTRY_STEP),)
    return tuple(coordinate_of(player, s) for s in range(start + 1, end + 1))
