"""
Four-player Ludo rules engine.
Board topology on a 15x15 grid plus an immutable-snapshot turn state machine.
"""

from .board import (
    SAFE_COORDINATES,
    base_slot_coordinate,
    coordinate_of,
    is_safe,
    path_for,
    rotate,
)
from .config import config
from .dice import DiceExhausted, DiceSource, FixedDice, RandomDice
from .game import Game, initial_state, resolve_move, roll_dice, select_token
from .simulator import SimulationSummary, Simulator
from .types import GameState, MoveEvents, MoveResult, Phase, Player, Token, TokenState

__all__ = [
    "config",
    "Player",
    "Token",
    "TokenState",
    "Phase",
    "GameState",
    "MoveEvents",
    "MoveResult",
    "SAFE_COORDINATES",
    "rotate",
    "path_for",
    "coordinate_of",
    "is_safe",
    "base_slot_coordinate",
    "DiceSource",
    "RandomDice",
    "FixedDice",
    "DiceExhausted",
    "Game",
    "initial_state",
    "roll_dice",
    "select_token",
    "resolve_move",
    "Simulator",
    "SimulationSummary",
]
