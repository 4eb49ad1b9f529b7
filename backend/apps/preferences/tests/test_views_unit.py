import unittest

from rest_framework import status

from apps.common.state import StateStore
from apps.common.tests.test_state import InMemoryStateRepository
from apps.preferences.stores import ScreenMemory, SearchHistory, Wishlist
from apps.preferences.views import (
    ScreenView,
    SearchHistoryView,
    WishlistItemView,
    WishlistView,
)


class DummyRequest:
    def __init__(self, user, data=None, method="GET"):
        self.user = user
        self.data = data or {}
        self.method = method
        self.query_params = {}


class PreferenceViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.repo = InMemoryStateRepository()
        self.user = type("User", (), {"id": 4, "is_authenticated": True})()

    def dispatch(self, view_cls, factory, method="get", data=None, **kwargs):
        view = view_cls()
        view.build = lambda user_id: factory(StateStore(user_id, self.repo))
        return getattr(view, method)(DummyRequest(self.user, data, method.upper()), **kwargs)

    def test_wishlist_toggle_round_trip(self):
        response = self.dispatch(WishlistView, Wishlist, "post", {"productId": "8"})
        self.assertEqual(response.data["wishlisted"], True)
        check = self.dispatch(WishlistItemView, Wishlist, product_id="8")
        self.assertTrue(check.data["wishlisted"])
        listing = self.dispatch(WishlistView, Wishlist)
        self.assertEqual(listing.data, {"items": ["8"]})

    def test_search_history_post_and_delete(self):
        response = self.dispatch(
            SearchHistoryView, SearchHistory, "post", {"query": "Painel solar"}
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["items"][0], "Painel solar")
        deleted = self.dispatch(SearchHistoryView, SearchHistory, "delete")
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.dispatch(SearchHistoryView, SearchHistory).data, {"items": []})

    def test_screen_put_and_get(self):
        self.dispatch(ScreenView, ScreenMemory, "put", {"screen": "profile"})
        self.assertEqual(self.dispatch(ScreenView, ScreenMemory).data, {"screen": "profile"})
