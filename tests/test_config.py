import unittest

from ludo_lounge.config import Config, config


class TestBoardConstants(unittest.TestCase):
    def test_derived_positions(self):
        self.assertEqual(config.FINAL_LANE_START, 52)
        self.assertEqual(config.FINISHED, 57)

    def test_start_offsets_are_evenly_spaced(self):
        offsets = [config.START_OFFSETS[c] for c in config.TURN_ORDER]
        self.assertEqual(offsets, [0, 13, 26, 39])

    def test_safe_cells(self):
        self.assertEqual(len(config.SAFE_CELLS), 8)
        for start in config.START_OFFSETS.values():
            self.assertIn(start, config.SAFE_CELLS)


class TestRuntimeSettings(unittest.TestCase):
    def test_player_count_bounds(self):
        with self.assertRaises(ValueError):
            Config(NUM_PLAYERS=1)
        with self.assertRaises(ValueError):
            Config(NUM_PLAYERS=5)
        self.assertEqual(Config(NUM_PLAYERS=2).NUM_PLAYERS, 2)

    def test_custom_save_path(self):
        cfg = Config(SAVE_PATH="/tmp/x.json")
        self.assertEqual(cfg.SAVE_PATH, "/tmp/x.json")


if __name__ == "__main__":
    unittest.main()
