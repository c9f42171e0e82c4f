from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from .config import config
from .piece import Token
from .types import Color


@dataclass(frozen=True, slots=True)
class Player:
    color: Color
    label: str
    start_offset: int
    tokens: tuple[Token, ...]

    def token(self, token_id: str) -> Token | None:
        for tk in self.tokens:
            if tk.token_id == token_id:
                return tk
        return None

    def with_tokens(self, tokens: Iterable[Token]) -> "Player":
        return replace(self, tokens=tuple(tokens))

    def tokens_at_home(self) -> int:
        return sum(1 for tk in self.tokens if tk.progress is None)

    def tokens_finished(self) -> int:
        return sum(
            1
            for tk in self.tokens
            if tk.progress is not None and tk.progress >= config.FINISHED
        )

    def has_won(self) -> bool:
        return all(tk.progress == config.FINISHED for tk in self.tokens)


def make_player(color: Color) -> Player:
    return Player(
        color=color,
        label=color.label,
        start_offset=config.START_OFFSETS[color.value],
        tokens=tuple(
            Token(token_id=f"{color.value}-{i + 1}")
            for i in range(config.TOKENS_PER_PLAYER)
        ),
    )


def create_players(colors: Sequence[Color | str] | None = None) -> tuple[Player, ...]:
    """Seat players in the fixed rotation order.

    ``colors`` selects who plays; seating order is always the board's
    clockwise rotation regardless of the order given.
    """
    if colors is None:
        wanted = set(config.TURN_ORDER[: config.NUM_PLAYERS])
    else:
        wanted = {Color(c).value for c in colors}
    if not 2 <= len(wanted) <= len(config.TURN_ORDER):
        raise ValueError("A game needs between 2 and 4 players")
    return tuple(make_player(Color(c)) for c in config.TURN_ORDER if c in wanted)


def player_by_color(players: Sequence[Player], color: Color) -> Player:
    for pl in players:
        if pl.color == color:
            return pl
    raise KeyError(f"No player seated for {color.value}")
