"""
Game state snapshot and its flat document form.

``GameState`` is the whole serializable picture of a game: seating, token
positions, whose turn it is, the active die, the status line and the winner.
Snapshots are immutable; every transition builds a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Optional, Sequence

from .config import config
from .piece import Token
from .player import Player, create_players, player_by_color
from .types import Color

INITIAL_MESSAGE = "Roll to start"


class StateFormatError(ValueError):
    """Raised when a serialized document does not describe a valid game."""


@dataclass(frozen=True, slots=True)
class GameState:
    players: tuple[Player, ...]
    current_player: Color
    dice: Optional[int] = None
    message: str = INITIAL_MESSAGE
    winner: Optional[Color] = None

    @property
    def is_finished(self) -> bool:
        return self.winner is not None

    def player(self, color: Color) -> Player:
        return player_by_color(self.players, color)

    def current(self) -> Player:
        return player_by_color(self.players, self.current_player)

    def owner_of(self, token_id: str) -> Player | None:
        for pl in self.players:
            if pl.token(token_id) is not None:
                return pl
        return None

    def with_players(self, players: Iterable[Player]) -> "GameState":
        return replace(self, players=tuple(players))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "players": [
                {
                    "color": pl.color.value,
                    "label": pl.label,
                    "startIndex": pl.start_offset,
                    "tokens": [
                        {"id": tk.token_id, "steps": tk.progress} for tk in pl.tokens
                    ],
                }
                for pl in self.players
            ],
            "currentPlayer": self.current_player.value,
            "dice": self.dice,
            "message": self.message,
            "winner": self.winner.value if self.winner else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        try:
            players = tuple(_player_from_dict(p) for p in data["players"])
            current = Color(data["currentPlayer"])
            dice = data.get("dice")
            message = data.get("message", INITIAL_MESSAGE)
            winner = Color(data["winner"]) if data.get("winner") else None
        except (KeyError, TypeError, ValueError) as e:
            raise StateFormatError(f"Malformed game document: {e}") from e

        _validate(players, current, dice, message, winner)
        return cls(
            players=players,
            current_player=current,
            dice=dice,
            message=message,
            winner=winner,
        )


def _player_from_dict(data: Dict[str, Any]) -> Player:
    color = Color(data["color"])
    tokens = tuple(
        Token(token_id=str(t["id"]), progress=t["steps"]) for t in data["tokens"]
    )
    return Player(
        color=color,
        label=str(data.get("label", color.label)),
        start_offset=int(data["startIndex"]),
        tokens=tokens,
    )


def _validate(
    players: Sequence[Player],
    current: Color,
    dice: Any,
    message: Any,
    winner: Optional[Color],
) -> None:
    colors = [pl.color for pl in players]
    if len(set(colors)) != len(colors):
        raise StateFormatError("Duplicate player colors")
    if not 2 <= len(players) <= len(config.TURN_ORDER):
        raise StateFormatError(f"Unsupported player count: {len(players)}")
    if [c.value for c in colors] != [c for c in config.TURN_ORDER if Color(c) in colors]:
        raise StateFormatError("Players are not in rotation order")
    if current not in colors:
        raise StateFormatError(f"Current player {current.value} is not seated")
    if winner is not None and winner not in colors:
        raise StateFormatError(f"Winner {winner.value} is not seated")
    if dice is not None and (
        not isinstance(dice, int)
        or isinstance(dice, bool)
        or not config.DICE_MIN <= dice <= config.DICE_MAX
    ):
        raise StateFormatError(f"Invalid die value: {dice!r}")
    if not isinstance(message, str):
        raise StateFormatError("Status message must be text")

    seen: set[str] = set()
    for pl in players:
        if pl.start_offset != config.START_OFFSETS[pl.color.value]:
            raise StateFormatError(f"Wrong start offset for {pl.color.value}")
        if len(pl.tokens) != config.TOKENS_PER_PLAYER:
            raise StateFormatError(f"{pl.color.value} must have 4 tokens")
        for tk in pl.tokens:
            if tk.token_id in seen:
                raise StateFormatError(f"Duplicate token id {tk.token_id}")
            seen.add(tk.token_id)
            p = tk.progress
            if p is None:
                continue
            if not isinstance(p, int) or isinstance(p, bool) or not 0 <= p <= config.FINISHED:
                raise StateFormatError(f"Invalid position for {tk.token_id}: {p!r}")

    finished = [pl.color for pl in players if pl.has_won()]
    if len(finished) > 1:
        raise StateFormatError("More than one player has finished every token")
    expected = finished[0] if finished else None
    if winner != expected:
        got = winner.value if winner else None
        want = expected.value if expected else None
        raise StateFormatError(f"Winner {got} does not match board (expected {want})")


def initial_state(colors: Sequence[Color | str] | None = None) -> GameState:
    players = create_players(colors)
    return GameState(players=players, current_player=players[0].color)
