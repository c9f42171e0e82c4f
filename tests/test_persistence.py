import json
import os
import tempfile
import unittest
from dataclasses import replace

from ludo_lounge.persistence import JsonStateStore
from ludo_lounge.state import initial_state
from ludo_lounge.types import Color


class TestJsonStateStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "ludo-state.json")
        self.store = JsonStateStore(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_loads_nothing(self):
        self.assertIsNone(self.store.load())

    def test_save_then_load(self):
        state = replace(initial_state(), current_player=Color.BLUE, dice=2, message="Blue rolled a 2")
        self.store.save(state)
        self.assertEqual(self.store.load(), state)
        self.assertFalse(os.path.exists(self.path + ".tmp"))

    def test_save_creates_directory(self):
        store = JsonStateStore(os.path.join(self._tmp.name, "nested", "save.json"))
        store.save(initial_state())
        self.assertEqual(store.load(), initial_state())

    def test_corrupt_json_loads_nothing(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        self.assertIsNone(self.store.load())

    def test_undecodable_bytes_load_nothing(self):
        with open(self.path, "wb") as f:
            f.write(b"\xff\xfe\x00garbage")
        self.assertIsNone(self.store.load())

    def test_deeply_nested_json_loads_nothing(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("[" * 200000)
        self.assertIsNone(self.store.load())

    def test_inconsistent_winner_loads_nothing(self):
        doc = initial_state().to_dict()
        doc["winner"] = "red"
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(doc, f)
        self.assertIsNone(self.store.load())

    def test_failed_save_leaves_no_temp_file(self):
        # the target path is a directory, so the final rename fails
        target = os.path.join(self._tmp.name, "as-dir.json")
        os.makedirs(os.path.join(target, "child"))
        store = JsonStateStore(target)
        with self.assertRaises(OSError):
            store.save(initial_state())
        self.assertFalse(os.path.exists(target + ".tmp"))

    def test_wrong_shape_loads_nothing(self):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"players": "nope", "currentPlayer": "red"}, f)
        self.assertIsNone(self.store.load())

    def test_clear(self):
        self.store.save(initial_state())
        self.store.clear()
        self.assertFalse(os.path.exists(self.path))
        self.store.clear()


if __name__ == "__main__":
    unittest.main()
