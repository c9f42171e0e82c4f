from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class Color(Enum):
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class PhaseKind(Enum):
    HOME = "home"
    TRACK = "track"
    FINAL = "final"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class HomePhase:
    kind: PhaseKind = field(default=PhaseKind.HOME, init=False)


@dataclass(frozen=True, slots=True)
class TrackPhase:
    cell: int  # absolute ring cell 0..51
    kind: PhaseKind = field(default=PhaseKind.TRACK, init=False)


@dataclass(frozen=True, slots=True)
class FinalPhase:
    lane_index: int  # 0-based cell in the owner's private lane
    kind: PhaseKind = field(default=PhaseKind.FINAL, init=False)


@dataclass(frozen=True, slots=True)
class DonePhase:
    kind: PhaseKind = field(default=PhaseKind.DONE, init=False)


TokenPhase = Union[HomePhase, TrackPhase, FinalPhase, DonePhase]


@dataclass(frozen=True, slots=True)
class Move:
    token_id: str
    next_progress: int
    captures: Tuple[str, ...] = ()

    @property
    def is_capture(self) -> bool:
        return bool(self.captures)


@dataclass(frozen=True, slots=True)
class LegalMoves:
    """Outcome of a legal-move query.

    When ``moves`` is empty, ``block_reason`` explains why and ``pass_to``
    names the color that would hold the turn after the roll is given up.
    """

    moves: Tuple[Move, ...] = ()
    block_reason: Optional[str] = None
    pass_to: Optional[Color] = None

    def __bool__(self) -> bool:
        return bool(self.moves)

    def for_token(self, token_id: str) -> Optional[Move]:
        for mv in self.moves:
            if mv.token_id == token_id:
                return mv
        return None

    @property
    def token_ids(self) -> Tuple[str, ...]:
        return tuple(mv.token_id for mv in self.moves)


@dataclass(frozen=True, slots=True)
class PlayerSummary:
    color: Color
    label: str
    at_home: int
    finished: int
