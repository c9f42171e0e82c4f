from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional, Sequence

from loguru import logger

from . import rules
from .config import config
from .persistence import JsonStateStore
from .state import GameState, initial_state
from .types import Color, LegalMoves, Move


@dataclass(slots=True)
class Game:
    """Single-writer session around the rules engine.

    Holds the live snapshot, the dice and the legal moves of the pending
    roll. Every transition goes through here so calls into the engine are
    never interleaved, and each resulting snapshot is handed to the store.
    """

    colors: Optional[Sequence[Color | str]] = None
    store: Optional[JsonStateStore] = None
    seed: Optional[int] = field(default_factory=lambda: config.SEED)
    state: GameState = field(init=False)
    legal: LegalMoves = field(default_factory=LegalMoves, init=False)
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)
        saved = self.store.load() if self.store is not None else None
        if saved is not None:
            logger.info(f"Resumed saved game, {saved.current_player.value} to play")
            self.state = saved
            # A restored pending die still needs its move list
            if saved.dice is not None and not saved.is_finished:
                self.legal = rules.compute_legal_moves(saved, saved.dice)
        else:
            self.state = initial_state(self.colors)

    # --- Dice ---
    def roll_dice(self) -> int:
        return self.rng.randint(config.DICE_MIN, config.DICE_MAX)

    # --- Transitions ---
    def roll(self, dice: Optional[int] = None) -> LegalMoves:
        value = self.roll_dice() if dice is None else dice
        self.state, self.legal = rules.record_roll(self.state, value)
        self._save()
        return self.legal

    def move(self, token_id: str) -> bool:
        """Move ``token_id`` using the pending roll. False when not offered."""
        mv: Move | None = self.legal.for_token(token_id)
        if mv is None:
            logger.warning(f"{token_id} has no legal move for the pending roll")
            return False
        before = self.state
        self.state = rules.apply_move(self.state, mv)
        if self.state is before:
            return False
        self.legal = LegalMoves()
        self._save()
        return True

    def pass_turn(self) -> bool:
        before = self.state
        self.state = rules.pass_turn(self.state)
        if self.state is before:
            return False
        self.legal = LegalMoves()
        self._save()
        return True

    def reset(self) -> None:
        self.state = initial_state(self.colors or [pl.color for pl in self.state.players])
        self.legal = LegalMoves()
        self._save()

    # --- Queries ---
    @property
    def is_over(self) -> bool:
        return self.state.is_finished

    @property
    def awaiting_roll(self) -> bool:
        return self.state.dice is None and not self.state.is_finished

    def summaries(self):
        return rules.player_summaries(self.state)

    def movable_mask(self):
        return rules.legal_move_mask(self.state, self.legal)

    def _save(self) -> None:
        if self.store is None:
            return
        try:
            self.store.save(self.state)
        except OSError as e:
            logger.warning(f"Could not save game to {self.store.path}: {e}")
