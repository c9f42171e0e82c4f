"""
Rules engine.

Pure functions over immutable ``GameState`` snapshots: phase derivation,
legal-move generation, move application (captures, turn retention, win
detection) and the no-move pass. Nothing here performs I/O or keeps state
between calls; callers serialize access to a given snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Sequence

import numpy as np
from loguru import logger

from .config import config
from .player import Player
from .state import GameState
from .types import (
    Color,
    DonePhase,
    FinalPhase,
    HomePhase,
    LegalMoves,
    Move,
    PlayerSummary,
    TokenPhase,
    TrackPhase,
)

GAME_FINISHED = "Game finished"
NO_MOVES_AFTER_SIX = "No piece can enter or move; roll again."
NO_MOVES = "No valid moves this turn."


@dataclass(frozen=True, slots=True)
class Occupant:
    token_id: str
    color: Color


def token_phase(progress: int | None, start_offset: int) -> TokenPhase:
    """Interpret a stored progress value.

    This is the only place the 52/57 boundaries are read; everything else
    asks for a phase.
    """
    if progress is None:
        return HomePhase()
    if progress >= config.FINISHED:
        return DonePhase()
    if progress >= config.FINAL_LANE_START:
        return FinalPhase(lane_index=progress - config.FINAL_LANE_START)
    return TrackPhase(cell=(start_offset + progress) % config.TRACK_LENGTH)


def track_occupancy(players: Sequence[Player]) -> Dict[int, List[Occupant]]:
    """Map absolute ring cell -> tokens standing on it, across all players."""
    occupancy: Dict[int, List[Occupant]] = {}
    for pl in players:
        for tk in pl.tokens:
            phase = token_phase(tk.progress, pl.start_offset)
            if isinstance(phase, TrackPhase):
                occupancy.setdefault(phase.cell, []).append(
                    Occupant(token_id=tk.token_id, color=pl.color)
                )
    return occupancy


def next_color(players: Sequence[Player], current: Color) -> Color:
    order = [pl.color for pl in players]
    return order[(order.index(current) + 1) % len(order)]


def find_winner(players: Sequence[Player]) -> Player | None:
    for pl in players:
        if pl.has_won():
            return pl
    return None


def _check_die(dice: int) -> None:
    if (
        not isinstance(dice, int)
        or isinstance(dice, bool)
        or not config.DICE_MIN <= dice <= config.DICE_MAX
    ):
        raise ValueError(f"Die value must be in 1..6, got {dice!r}")


def _holder_after(state: GameState, dice: int) -> Color:
    if dice == config.EXIT_ROLL:
        return state.current_player
    return next_color(state.players, state.current_player)


def compute_legal_moves(state: GameState, dice: int) -> LegalMoves:
    _check_die(dice)
    if state.is_finished:
        return LegalMoves(block_reason=GAME_FINISHED)

    player = state.current()
    occupancy = track_occupancy(state.players)
    moves: List[Move] = []
    for tk in player.tokens:
        phase = token_phase(tk.progress, player.start_offset)
        if isinstance(phase, DonePhase):
            continue
        if isinstance(phase, HomePhase):
            if dice != config.EXIT_ROLL:
                continue
            candidate = 0
        else:
            candidate = tk.progress + dice
            if candidate > config.FINISHED:
                continue

        captures: tuple[str, ...] = ()
        landing = token_phase(candidate, player.start_offset)
        if isinstance(landing, TrackPhase) and landing.cell not in config.SAFE_CELLS:
            captures = tuple(
                occ.token_id
                for occ in occupancy.get(landing.cell, [])
                if occ.color != player.color
            )
        moves.append(
            Move(token_id=tk.token_id, next_progress=candidate, captures=captures)
        )

    if moves:
        return LegalMoves(moves=tuple(moves))
    reason = NO_MOVES_AFTER_SIX if dice == config.EXIT_ROLL else NO_MOVES
    return LegalMoves(block_reason=reason, pass_to=_holder_after(state, dice))


def record_roll(state: GameState, dice: int) -> tuple[GameState, LegalMoves]:
    """Store a fresh die on the state and report what it allows."""
    _check_die(dice)
    if state.is_finished:
        logger.warning(f"Roll ignored: {state.winner.value} already won")
        return state, LegalMoves(block_reason=GAME_FINISHED)
    if state.dice is not None:
        logger.warning(
            f"Roll ignored: {state.current_player.value} still holds a {state.dice}"
        )
        return state, compute_legal_moves(state, state.dice)

    legal = compute_legal_moves(state, dice)
    label = state.current().label
    message = legal.block_reason or f"{label} rolled a {dice}"
    logger.debug(f"{label} rolled {dice}: {len(legal.moves)} legal moves")
    return replace(state, dice=dice, message=message), legal


def apply_move(state: GameState, move: Move) -> GameState:
    """Apply a move drawn from the current roll's legal set.

    Anything else (no active die, finished game, a move computed against an
    older snapshot) leaves the state untouched.
    """
    if state.is_finished:
        logger.warning(f"Move ignored: {state.winner.value} already won")
        return state
    if state.dice is None:
        logger.warning(f"Move ignored: no active roll for {move.token_id}")
        return state
    if move not in compute_legal_moves(state, state.dice).moves:
        logger.warning(f"Move ignored: {move} is not legal for a {state.dice}")
        return state

    captured = set(move.captures)
    players = []
    for pl in state.players:
        tokens = []
        for tk in pl.tokens:
            if tk.token_id == move.token_id:
                tk = tk.move_to(move.next_progress)
            elif tk.token_id in captured:
                tk = tk.send_home()
            tokens.append(tk)
        players.append(pl.with_tokens(tokens))

    if captured:
        logger.debug(f"{move.token_id} captured {sorted(captured)}")

    mover = state.current()
    winner = find_winner(players)
    if winner is not None:
        logger.debug(f"{winner.label} wins")
        return replace(
            state,
            players=tuple(players),
            dice=None,
            message=f"{winner.label} wins!",
            winner=winner.color,
        )

    if state.dice == config.EXIT_ROLL:
        holder = state.current_player
        message = f"{mover.label} rolled a 6 - go again"
    else:
        holder = next_color(players, state.current_player)
        message = f"{state.player(holder).label} to roll"
    return replace(
        state,
        players=tuple(players),
        current_player=holder,
        dice=None,
        message=message,
    )


def pass_turn(state: GameState) -> GameState:
    """Give up a roll that allows no move."""
    if state.is_finished:
        logger.warning(f"Pass ignored: {state.winner.value} already won")
        return state
    if state.dice is None:
        logger.warning("Pass ignored: nothing has been rolled")
        return state
    legal = compute_legal_moves(state, state.dice)
    if legal.moves:
        logger.warning(
            f"Pass ignored: {state.current_player.value} has {len(legal.moves)} moves"
        )
        return state

    holder = legal.pass_to
    if holder == state.current_player:
        message = f"{state.player(holder).label} rolls again"
    else:
        message = f"{state.player(holder).label} to roll"
    logger.debug(f"{state.current_player.value} passes to {holder.value}")
    return replace(state, current_player=holder, dice=None, message=message)


def player_summaries(state: GameState) -> tuple[PlayerSummary, ...]:
    return tuple(
        PlayerSummary(
            color=pl.color,
            label=pl.label,
            at_home=pl.tokens_at_home(),
            finished=pl.tokens_finished(),
        )
        for pl in state.players
    )


def legal_move_mask(state: GameState, legal: LegalMoves) -> np.ndarray:
    """Boolean mask over the current player's tokens, in seat order."""
    movable = set(legal.token_ids)
    return np.asarray(
        [tk.token_id in movable for tk in state.current().tokens], dtype=np.bool_
    )
