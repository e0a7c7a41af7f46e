import json
import os
import tempfile
import unittest

from merge2048.config import BEST_SCORE_KEY, COLOR_SCHEME_KEY
from merge2048.storage.score_store import InMemoryScoreStore, JsonScoreStore


class TestInMemoryScoreStore(unittest.TestCase):

    def test_defaults(self):
        store = InMemoryScoreStore()
        self.assertEqual(store.load_best_score(), 0)
        self.assertIsNone(store.load_color_scheme())

    def test_save_and_load(self):
        store = InMemoryScoreStore()
        store.save_best_score(128)
        store.save_color_scheme("Forest")
        self.assertEqual(store.load_best_score(), 128)
        self.assertEqual(store.load_color_scheme(), "Forest")


class TestJsonScoreStore(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "settings.json")
        self.store = JsonScoreStore(self.path)

    def tearDown(self):
        self.tmp.cleanup()

    def write_raw(self, text):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def test_missing_file_gives_defaults(self):
        self.assertEqual(self.store.load_best_score(), 0)
        self.assertIsNone(self.store.load_color_scheme())

    def test_best_score_round_trip(self):
        self.store.save_best_score(2048)
        self.assertEqual(JsonScoreStore(self.path).load_best_score(), 2048)

    def test_values_share_one_file(self):
        self.store.save_best_score(64)
        self.store.save_color_scheme("Candy")

        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data, {BEST_SCORE_KEY: 64, COLOR_SCHEME_KEY: "Candy"})

    def test_creates_missing_directory(self):
        store = JsonScoreStore(os.path.join(self.tmp.name, "nested", "dir", "settings.json"))
        store.save_best_score(8)
        self.assertEqual(store.load_best_score(), 8)

    def test_corrupt_file_is_logged_and_ignored(self):
        self.write_raw("{not json")
        with self.assertLogs("merge2048.storage.score_store", level="WARNING"):
            self.assertEqual(self.store.load_best_score(), 0)

    def test_non_object_json_is_ignored(self):
        self.write_raw("[1, 2, 3]")
        with self.assertLogs("merge2048.storage.score_store", level="WARNING"):
            self.assertEqual(self.store.load_best_score(), 0)

    def test_invalid_best_score_is_ignored(self):
        for value in ("100", True, -5, 1.5):
            self.write_raw(json.dumps({BEST_SCORE_KEY: value}))
            with self.assertLogs("merge2048.storage.score_store", level="WARNING"):
                self.assertEqual(self.store.load_best_score(), 0)

    def test_non_string_color_scheme_is_ignored(self):
        self.write_raw(json.dumps({COLOR_SCHEME_KEY: 3}))
        self.assertIsNone(self.store.load_color_scheme())

    def test_save_over_corrupt_file_recovers(self):
        self.write_raw("garbage")
        with self.assertLogs("merge2048.storage.score_store", level="WARNING"):
            self.store.save_best_score(16)
        self.assertEqual(self.store.load_best_score(), 16)


if __name__ == "__main__":
    unittest.main()
