from ludo_lounge.piece import Token


def with_positions(state, positions):
    """Return ``state`` with the given token ids moved to new progress values."""
    players = []
    for pl in state.players:
        players.append(
            pl.with_tokens(
                Token(
                    tk.token_id,
                    positions[tk.token_id] if tk.token_id in positions else tk.progress,
                )
                for tk in pl.tokens
            )
        )
    return state.with_players(players)
