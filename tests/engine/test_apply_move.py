import unittest
from dataclasses import replace

from ludo_lounge.rules import apply_move, compute_legal_moves, record_roll
from ludo_lounge.state import initial_state
from ludo_lounge.types import Color, Move

from helpers import with_positions


def progress_of(state, token_id):
    return state.owner_of(token_id).token(token_id).progress


class TestApplyMove(unittest.TestCase):
    def test_enter_on_six_keeps_turn(self):
        state, legal = record_roll(initial_state(), 6)
        self.assertIn(Move("red-1", 0), legal.moves)
        after = apply_move(state, legal.for_token("red-1"))
        self.assertEqual(progress_of(after, "red-1"), 0)
        self.assertIsNone(after.dice)
        self.assertEqual(after.current_player, Color.RED)
        self.assertEqual(after.message, "Red rolled a 6 - go again")
        # the input snapshot is untouched
        self.assertIsNone(progress_of(state, "red-1"))

    def test_capture_sends_victims_home(self):
        state = with_positions(
            initial_state(), {"red-1": 2, "blue-1": 44, "yellow-2": 31}
        )
        state, legal = record_roll(state, 3)
        after = apply_move(state, legal.for_token("red-1"))
        self.assertEqual(progress_of(after, "red-1"), 5)
        self.assertIsNone(progress_of(after, "blue-1"))
        self.assertIsNone(progress_of(after, "yellow-2"))
        self.assertEqual(after.current_player, Color.BLUE)
        self.assertEqual(after.message, "Blue to roll")

    def test_non_six_advances_turn(self):
        state = with_positions(initial_state(), {"red-1": 10})
        state, legal = record_roll(state, 3)
        after = apply_move(state, legal.moves[0])
        self.assertEqual(after.current_player, Color.BLUE)

    def test_rotation_wraps_after_last_player(self):
        state = replace(
            with_positions(initial_state(), {"green-1": 4}), current_player=Color.GREEN
        )
        state, legal = record_roll(state, 2)
        after = apply_move(state, legal.for_token("green-1"))
        self.assertEqual(after.current_player, Color.RED)

    def test_rotation_skips_empty_seats(self):
        state = with_positions(initial_state(["red", "yellow"]), {"red-1": 4})
        state, legal = record_roll(state, 1)
        after = apply_move(state, legal.for_token("red-1"))
        self.assertEqual(after.current_player, Color.YELLOW)

    def test_messages_use_seated_player_label(self):
        state = with_positions(initial_state(), {"red-1": 10})
        players = list(state.players)
        players[1] = replace(players[1], label="Bea")
        state, legal = record_roll(state.with_players(players), 3)
        after = apply_move(state, legal.for_token("red-1"))
        self.assertEqual(after.message, "Bea to roll")


class TestRejectedMoves(unittest.TestCase):
    def test_move_without_roll_is_noop(self):
        state = initial_state()
        self.assertIs(apply_move(state, Move("red-1", 0)), state)

    def test_move_outside_legal_set_is_noop(self):
        state, _ = record_roll(initial_state(), 6)
        self.assertIs(apply_move(state, Move("red-1", 4)), state)
        self.assertIs(apply_move(state, Move("blue-1", 0)), state)

    def test_fabricated_capture_is_rejected(self):
        state = with_positions(initial_state(), {"red-1": 2})
        state, _ = record_roll(state, 3)
        self.assertIs(apply_move(state, Move("red-1", 5, ("blue-1",))), state)

    def test_stale_move_is_rejected(self):
        state = with_positions(initial_state(), {"red-1": 2, "blue-1": 44})
        state, legal = record_roll(state, 3)
        stale = legal.for_token("red-1")
        # blue token leaves the landing cell before the move is applied
        changed = with_positions(state, {"blue-1": 46})
        self.assertIs(apply_move(changed, stale), changed)

    def test_finished_game_is_frozen(self):
        state = replace(initial_state(), dice=6, winner=Color.RED)
        self.assertIs(apply_move(state, Move("red-1", 0)), state)


if __name__ == "__main__":
    unittest.main()
