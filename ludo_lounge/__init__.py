"""
Ludo Lounge
Rules engine for hot-seat, four-colour Ludo on a single device.
"""

from ludo_lounge.config import config
from ludo_lounge.game import Game
from ludo_lounge.persistence import JsonStateStore
from ludo_lounge.piece import Token
from ludo_lounge.player import Player, create_players
from ludo_lounge.rules import (
    apply_move,
    compute_legal_moves,
    legal_move_mask,
    next_color,
    pass_turn,
    player_summaries,
    record_roll,
    token_phase,
    track_occupancy,
)
from ludo_lounge.state import GameState, StateFormatError, initial_state
from ludo_lounge.types import (
    Color,
    DonePhase,
    FinalPhase,
    HomePhase,
    LegalMoves,
    Move,
    PhaseKind,
    PlayerSummary,
    TrackPhase,
)

__all__ = [
    "config",
    "Game",
    "JsonStateStore",
    "Token",
    "Player",
    "create_players",
    "GameState",
    "StateFormatError",
    "initial_state",
    "token_phase",
    "track_occupancy",
    "compute_legal_moves",
    "record_roll",
    "apply_move",
    "pass_turn",
    "next_color",
    "player_summaries",
    "legal_move_mask",
    "Color",
    "PhaseKind",
    "HomePhase",
    "TrackPhase",
    "FinalPhase",
    "DonePhase",
    "Move",
    "LegalMoves",
    "PlayerSummary",
]
