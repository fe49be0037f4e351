"""Tests for the wishlist and save-for-later."""

import json

import pytest

from storefront.database.local_storage import InMemoryStorage
from storefront.services.wishlist_store import WishlistStore, save_for_later


@pytest.fixture
def wishlist(storage):
    store = WishlistStore(storage)
    store.load()
    return store


class TestWishlistStore:
    def test_toggle(self, wishlist):
        assert wishlist.toggle("A") is True
        assert wishlist.contains("A")
        assert wishlist.toggle("A") is False
        assert not wishlist.contains("A")

    def test_add_is_deduplicated(self, wishlist):
        wishlist.add("A")
        wishlist.add("A")
        assert wishlist.items == ("A",)

    def test_integer_ids_match_strings(self, wishlist):
        wishlist.add(7)
        assert wishlist.contains("7")

    def test_persisted(self, storage, wishlist):
        wishlist.add("A")
        wishlist.add("B")
        wishlist.remove("A")
        restored = WishlistStore(storage)
        assert restored.load() == ["B"]

    @pytest.mark.parametrize("raw", ["nope", "{\"a\": 1}"])
    def test_malformed_storage(self, raw):
        store = WishlistStore(InMemoryStorage({"wishlistItems": raw}))
        assert store.load() == []

    def test_numeric_ids_from_storage(self):
        store = WishlistStore(InMemoryStorage({"wishlistItems": "[1, 2, 1]"}))
        assert store.load() == ["1", "2"]

    def test_stored_as_json_list_of_strings(self, storage, wishlist):
        wishlist.add(7)
        wishlist.add("B")
        assert json.loads(storage.get("wishlistItems")) == ["7", "B"]

    def test_nested_values_are_malformed(self):
        store = WishlistStore(InMemoryStorage({"wishlistItems": "[\"A\", [\"B\"]]"}))
        assert store.load() == []


class TestSaveForLater:
    def test_moves_slot_to_wishlist(self, bag, wishlist, gown, blazer):
        bag.add(gown)
        bag.add(blazer)

        assert save_for_later(bag, wishlist, "A", "M") is True
        assert wishlist.contains("A")
        assert [i.product_id for i in bag.items] == ["B"]

    def test_missing_slot(self, bag, wishlist, gown):
        bag.add(gown)
        assert save_for_later(bag, wishlist, "A", "XS") is False
        assert wishlist.items == ()
        assert bag.count() == 1
