from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Token:
    """Immutable token record. Holds position only.

    Rule logic (phase, legality, captures) lives in the rules module; a
    token never interprets its own progress.
    """

    token_id: str  # "<color>-<n>", n in 1..4
    progress: int | None = None  # None = home; 0..51 track; 52..56 lane; 57 finished

    def move_to(self, new_progress: int) -> "Token":
        return replace(self, progress=new_progress)

    def send_home(self) -> "Token":
        return replace(self, progress=None)
