"""Favorites store: dedupe by hash, persistence and fallbacks."""
import json
import random
import tempfile
import unittest
from pathlib import Path

from geogrid.favorites import FavoritesStore


class TestFavoritesStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.path = self.root / "favorites.json"
        self.defaults = self.root / "default_favorites.json"

    def tearDown(self):
        self._tmp.cleanup()

    def test_empty_when_nothing_stored(self):
        store = FavoritesStore(self.path, self.defaults)
        self.assertEqual(store.load(), [])
        self.assertIsNone(store.random_favorite())

    def test_add_dedupes_and_names(self):
        store = FavoritesStore(self.path)
        self.assertTrue(store.add("1-0-2-0-0-a"))
        self.assertFalse(store.add("1-0-2-0-0-a", "again"))
        self.assertTrue(store.add("2-0-2-0-0-a", "mine"))
        names = [f.name for f in store.all()]
        self.assertEqual(names, ["Untitled 1", "mine"])
        self.assertRegex(store.all()[0].date, r"^\d{4}-\d{2}-\d{2}$")

    def test_persisted_between_instances(self):
        FavoritesStore(self.path).add("1-0-2-0-0-a", "kept")
        reloaded = FavoritesStore(self.path)
        self.assertTrue(reloaded.is_favorite("1-0-2-0-0-a"))
        data = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(set(data[0].keys()), {"hash", "name", "date"})

    def test_remove_and_rename(self):
        store = FavoritesStore(self.path)
        store.add("1-0-2-0-0-a")
        self.assertTrue(store.rename("1-0-2-0-0-a", "renamed"))
        self.assertEqual(store.find("1-0-2-0-0-a").name, "renamed")
        self.assertFalse(store.rename("nope", "x"))
        self.assertTrue(store.remove("1-0-2-0-0-a"))
        self.assertFalse(store.remove("1-0-2-0-0-a"))
        self.assertEqual(FavoritesStore(self.path).all(), [])

    def test_toggle(self):
        store = FavoritesStore(self.path)
        self.assertTrue(store.toggle("5-1-3"))
        self.assertFalse(store.toggle("5-1-3"))
        self.assertFalse(store.is_favorite("5-1-3"))

    def test_defaults_used_and_copied(self):
        self.defaults.write_text(json.dumps([{"hash": "a-0-2", "name": "seed", "date": "2026-01-01"}]), encoding="utf-8")
        store = FavoritesStore(self.path, self.defaults)
        self.assertEqual([f.hash for f in store.load()], ["a-0-2"])
        self.assertTrue(self.path.exists())

    def test_corrupt_file_falls_back(self):
        self.path.write_text("{not json", encoding="utf-8")
        self.defaults.write_text(json.dumps([{"hash": "a-0-2", "name": "seed", "date": "2026-01-01"}]), encoding="utf-8")
        with self.assertLogs("geogrid.favorites", level="ERROR"):
            items = FavoritesStore(self.path, self.defaults).load()
        self.assertEqual([f.hash for f in items], ["a-0-2"])

    def test_random_favorite(self):
        store = FavoritesStore(self.path)
        for h in ("1-0-2", "2-0-2", "3-0-2"):
            store.add(h)
        fav = store.random_favorite(random.Random(0))
        self.assertIn(fav.hash, ("1-0-2", "2-0-2", "3-0-2"))


if __name__ == "__main__":
    unittest.main()
