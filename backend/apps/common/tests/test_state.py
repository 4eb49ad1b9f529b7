import unittest

from django.db import DatabaseError

from apps.common.logger import AppLogger
from apps.common.state import StateStore


class InMemoryStateRepository:
    def __init__(self):
        self.rows = {}
        self.fail_writes = False
        self.fail_reads = False

    def get_payload(self, owner, key):
        if self.fail_reads:
            raise DatabaseError("read failed")
        return self.rows.get((owner, key))

    def upsert(self, owner, key, payload):
        if self.fail_writes:
            raise DatabaseError("write failed")
        self.rows[(owner, key)] = payload

    def delete_key(self, owner, key):
        self.rows.pop((owner, key), None)


class StateStoreTests(unittest.TestCase):
    def setUp(self):
        self.repo = InMemoryStateRepository()
        self.store = StateStore(7, self.repo)

    def test_owner_is_normalized_to_string(self):
        self.store.save("apm_cart", [])
        self.assertIn(("7", "apm_cart"), self.repo.rows)

    def test_missing_key_returns_copy_of_default(self):
        default = {"items": []}
        loaded = self.store.load("ango_wishlist", default)
        loaded["items"].append("x")
        self.assertEqual(default, {"items": []})

    def test_keys_are_isolated_per_owner(self):
        other = StateStore(8, self.repo)
        self.store.save("ango_wishlist", ["1"])
        self.assertEqual(other.load("ango_wishlist", []), [])

    def test_delete_removes_blob(self):
        self.store.save("apm_search_history", ["a"])
        self.store.delete("apm_search_history")
        self.assertIsNone(self.store.load("apm_search_history"))

    def test_save_best_effort_reports_failure_without_raising(self):
        self.repo.fail_writes = True
        with self.assertLogs("apps.common.state", level="WARNING") as logs:
            self.assertFalse(self.store.save_best_effort("apm_cart", [1]))
        self.assertIn("Failed to persist state", logs.output[0])

    def test_load_best_effort_falls_back_to_default(self):
        self.repo.fail_reads = True
        self.assertEqual(self.store.load_best_effort("apm_cart", []), [])


class AppLoggerTests(unittest.TestCase):
    def test_bind_merges_context_into_message(self):
        log = AppLogger("apps.tests").bind(component="cart").bind(owner="1")
        with self.assertLogs("apps.tests", level="INFO") as logs:
            log.info("Cart saved", lines=2)
        self.assertIn("Cart saved | component=cart owner=1 lines=2", logs.output[0])
