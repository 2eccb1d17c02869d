import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(slots=True)
class Config:
    # --- Board ---
    GRID_SIZE: int = 15  # 15x15 cells, (x, y) in 0..14
    NUM_PLAYERS: int = 4
    TOKENS_PER_PLAYER: int = 4

    # --- Step indices along a player's path ---
    BASE_STEP: int = -1  # not yet on the board
    ENTRY_STEP: int = 0
    LOOP_END: int = 50  # last shared-loop cell before the home stretch
    HOME_STRETCH_START: int = 51  # 51..55 private to the player
    HOME_STEP: int = 56  # terminal centre cell
    GLOBE_STEP: int = 8  # star square on each arm

    # --- Dice ---
    DICE_MIN: int = 1
    DICE_MAX: int = 6
    EXIT_ROLL: int = 6  # needed to leave Base
    BONUS_ROLL: int = 6  # grants the same player another roll

    # --- Ambient ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    MAX_COMMANDS: int = int(os.getenv("MAX_COMMANDS", 5000))
    SEED: int | None = field(
        default_factory=lambda: int(os.environ["SEED"]) if os.getenv("SEED") else None
    )

    # Derived (populated in __post_init__ due to slots)
    PATH_LENGTH: int = 0
    CENTER: tuple[int, int] = (0, 0)

    def __post_init__(self):
        self.PATH_LENGTH = self.HOME_STEP + 1
        half = self.GRID_SIZE // 2
        self.CENTER = (half, half)

        if self.GRID_SIZE % 2 != 1:
            raise ValueError("GRID_SIZE must be odd so the board has a centre cell")
        if self.NUM_PLAYERS != 4:
            raise ValueError("the rules engine is defined for exactly 4 players")
        if self.MAX_COMMANDS < 1:
            raise ValueError("MAX_COMMANDS must be positive")


config = Config()
