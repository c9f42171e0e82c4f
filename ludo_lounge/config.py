import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


@dataclass(slots=True)
class Config:
    # --- Board constants ---
    TRACK_LENGTH: int = 52  # shared ring cells 0..51
    FINAL_LANE_LENGTH: int = 6
    TOKENS_PER_PLAYER: int = 4
    EXIT_ROLL: int = 6
    DICE_MIN: int = 1
    DICE_MAX: int = 6

    # Clockwise seating; also the turn rotation
    TURN_ORDER: list[str] = field(
        default_factory=lambda: ["red", "blue", "yellow", "green"]
    )
    START_OFFSETS: dict[str, int] = field(
        default_factory=lambda: {"red": 0, "blue": 13, "yellow": 26, "green": 39}
    )
    # Every start cell plus one star cell eight steps past it
    SAFE_CELLS: frozenset[int] = field(
        default_factory=lambda: frozenset({0, 8, 13, 21, 26, 34, 39, 47})
    )

    # --- Runtime settings ---
    SAVE_PATH: str = os.getenv("LUDO_SAVE_PATH", "ludo-state-v1.json")
    LOG_LEVEL: str = os.getenv("LUDO_LOG_LEVEL", "INFO")
    SEED: int | None = _optional_int("LUDO_SEED")
    NUM_PLAYERS: int = int(os.getenv("LUDO_NUM_PLAYERS", 4))

    # Derived (populated in __post_init__ due to slots)
    FINAL_LANE_START: int = 0
    FINISHED: int = 0

    def __post_init__(self):
        # Progress 52..56 walks the private lane, 57 is home-and-dry
        self.FINAL_LANE_START = self.TRACK_LENGTH
        self.FINISHED = self.TRACK_LENGTH + self.FINAL_LANE_LENGTH - 1

        if self.NUM_PLAYERS < 2 or self.NUM_PLAYERS > len(self.TURN_ORDER):
            raise ValueError("NUM_PLAYERS must be between 2 and 4")


config = Config()
