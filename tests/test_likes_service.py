import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from storefront.core.errors import StoreError
from storefront.services.likes_service import (
    LIKES_STORAGE_KEY,
    InMemoryLikesBackend,
    JsonFileLikesBackend,
    LikesStore,
    coerce_product_id,
)


class LikesStoreTest(unittest.TestCase):
    def test_toggle_twice_restores_state(self):
        store = LikesStore(InMemoryLikesBackend([3]))
        self.assertTrue(store.toggle(7))
        self.assertTrue(store.contains(7))
        self.assertEqual(store.get(), [3, 7])
        self.assertFalse(store.toggle(7))
        self.assertFalse(store.contains(7))
        self.assertEqual(store.get(), [3])

    def test_toggle_persists_to_backend(self):
        backend = InMemoryLikesBackend()
        store = LikesStore(backend)
        store.toggle(5)
        store.toggle("9")
        self.assertEqual(backend.payload, [5, 9])

    def test_invalid_ids_are_ignored(self):
        backend = InMemoryLikesBackend()
        store = LikesStore(backend)
        for value in (None, 0, -1, "abc", 2.5, True):
            with self.subTest(value=value):
                self.assertFalse(store.toggle(value))
                self.assertFalse(store.contains(value))
        self.assertEqual(store.get(), [])
        self.assertIsNone(backend.payload)

    def test_loaded_ids_are_cleaned_and_deduplicated(self):
        with self.assertLogs("storefront.services.likes_service", level="WARNING"):
            store = LikesStore(InMemoryLikesBackend([4, "4", "x", 2, -3, 2]))
        self.assertEqual(store.get(), [2, 4])

    def test_non_list_state_resets(self):
        backend = InMemoryLikesBackend({"ids": [1]})
        with self.assertLogs("storefront.services.likes_service", level="WARNING"):
            store = LikesStore(backend)
        self.assertEqual(store.get(), [])
        self.assertEqual(backend.payload, [])

    def test_failed_save_keeps_previous_state(self):
        backend = InMemoryLikesBackend([3])
        store = LikesStore(backend)
        with patch.object(backend, "save", side_effect=OSError("disk full")):
            with self.assertLogs("storefront.services.likes_service", level="ERROR"):
                with self.assertRaises(StoreError):
                    store.toggle(7)
                with self.assertRaises(StoreError):
                    store.toggle(3)
        self.assertEqual(store.get(), [3])
        self.assertFalse(store.contains(7))
        self.assertEqual(backend.payload, [3])

    def test_coerce_product_id(self):
        self.assertEqual(coerce_product_id(" 12 "), 12)
        self.assertEqual(coerce_product_id(12.0), 12)
        self.assertIsNone(coerce_product_id("12abc"))
        self.assertIsNone(coerce_product_id(False))


class JsonFileLikesBackendTest(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "likes.json"

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_starts_empty(self):
        store = LikesStore(JsonFileLikesBackend(self.path))
        self.assertEqual(store.get(), [])
        self.assertFalse(self.path.exists())

    def test_likes_survive_a_new_store(self):
        LikesStore(JsonFileLikesBackend(self.path)).toggle(11)
        document = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(document, {LIKES_STORAGE_KEY: [11]})

        reopened = LikesStore(JsonFileLikesBackend(self.path))
        self.assertTrue(reopened.contains(11))

    def test_corrupt_file_resets_to_empty(self):
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("storefront.services.likes_service", level="WARNING"):
            store = LikesStore(JsonFileLikesBackend(self.path))
        self.assertEqual(store.get(), [])
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), {LIKES_STORAGE_KEY: []})

    def test_non_object_document_resets(self):
        self.path.write_text("[1, 2]", encoding="utf-8")
        with self.assertLogs("storefront.services.likes_service", level="WARNING"):
            store = LikesStore(JsonFileLikesBackend(self.path))
        self.assertEqual(store.get(), [])


if __name__ == "__main__":
    unittest.main()
