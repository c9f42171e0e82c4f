import unittest

import numpy as np

from ludo_lounge.rules import legal_move_mask, player_summaries, record_roll
from ludo_lounge.state import initial_state
from ludo_lounge.types import Color, LegalMoves

from helpers import with_positions


class TestPlayerSummaries(unittest.TestCase):
    def test_fresh_game(self):
        summaries = player_summaries(initial_state())
        self.assertEqual([s.color for s in summaries], list(Color))
        for s in summaries:
            self.assertEqual((s.at_home, s.finished), (4, 0))

    def test_counts_follow_tokens(self):
        state = with_positions(
            initial_state(), {"blue-1": 57, "blue-2": 54, "blue-3": 7}
        )
        blue = player_summaries(state)[1]
        self.assertEqual(blue.label, "Blue")
        self.assertEqual(blue.at_home, 1)
        self.assertEqual(blue.finished, 1)


class TestLegalMoveMask(unittest.TestCase):
    def test_mask_marks_movable_tokens(self):
        state = with_positions(initial_state(), {"red-2": 10, "red-3": 57})
        state, legal = record_roll(state, 4)
        mask = legal_move_mask(state, legal)
        self.assertEqual(mask.dtype, np.bool_)
        np.testing.assert_array_equal(mask, [False, True, False, False])

    def test_empty_legal_set(self):
        mask = legal_move_mask(initial_state(), LegalMoves())
        self.assertFalse(mask.any())
        self.assertEqual(mask.shape, (4,))


if __name__ == "__main__":
    unittest.main()
