"""Tests for the MongoDB record store, with the driver mocked out."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import ConnectionFailure, PyMongoError

from storefront.database.mongodb import MongoRecordStore
from storefront.models.order import OrderItemRecord, OrderRecord


@pytest.fixture
def collections():
    return {"order": MagicMock(), "order_item": MagicMock()}


@pytest.fixture
def store(collections):
    db = MagicMock()
    db.__getitem__.side_effect = lambda name: collections[name]
    record_store = MongoRecordStore()
    record_store.db = db
    return record_store


@pytest.fixture
def order_record():
    return OrderRecord(
        first_name="Ada",
        last_name="Lovelace",
        street_address="12 Analytical Way",
        city="Portland",
        state="OR",
        zip_code="97201",
        country="United States",
        phone="5035550142",
        email="ada@example.com",
        subtotal=100.0,
        shipping_fee=9.99,
        tax=7.25,
        total=117.24,
    )


class TestCreateOrder:
    def test_returns_inserted_id(self, store, collections, order_record):
        object_id = ObjectId()
        collections["order"].insert_one = AsyncMock(return_value=SimpleNamespace(inserted_id=object_id))

        result = asyncio.run(store.create_order(order_record))

        assert result.success
        assert result.id == str(object_id)
        document = collections["order"].insert_one.call_args.args[0]
        assert document["first_name"] == "Ada"
        assert document["promo_code"] == ""
        assert document["total"] == 117.24

    def test_driver_error_is_unsuccessful_result(self, store, collections, order_record):
        collections["order"].insert_one = AsyncMock(side_effect=PyMongoError("write failed"))

        result = asyncio.run(store.create_order(order_record))

        assert not result.success
        assert result.error == "write failed"

    def test_not_connected_raises(self, order_record):
        with pytest.raises(ConnectionError):
            asyncio.run(MongoRecordStore().create_order(order_record))


class TestCreateOrderItems:
    def test_one_record_per_line_item(self, store, collections, gown, blazer):
        collections["order_item"].insert_many = AsyncMock(
            return_value=SimpleNamespace(inserted_ids=[ObjectId(), ObjectId()])
        )

        result = asyncio.run(store.create_order_items([gown, blazer], "abc"))

        assert result.success
        documents = collections["order_item"].insert_many.call_args.args[0]
        assert [d["item_id"] for d in documents] == ["A", "B"]
        assert documents[0]["name"] == "Order Item - Silk Wrap Gown"
        assert documents[0]["order_id"] == "abc"
        assert documents[1]["quantity"] == 2
        assert documents[1]["rental_days"] == 8
        assert documents[1]["price"] == 60.0

    def test_partial_insert_is_unsuccessful(self, store, collections, gown, blazer):
        collections["order_item"].insert_many = AsyncMock(
            return_value=SimpleNamespace(inserted_ids=[ObjectId()])
        )

        result = asyncio.run(store.create_order_items([gown, blazer], "abc"))

        assert not result.success
        assert result.error == "Created 1 of 2 order items"

    def test_driver_error_is_unsuccessful_result(self, store, collections, gown):
        collections["order_item"].insert_many = AsyncMock(side_effect=PyMongoError("boom"))

        result = asyncio.run(store.create_order_items([gown], "abc"))

        assert not result.success
        assert result.id == "abc"

    def test_no_items_skips_insert(self, store, collections):
        collections["order_item"].insert_many = AsyncMock()

        result = asyncio.run(store.create_order_items([], "abc"))

        assert result.success
        collections["order_item"].insert_many.assert_not_called()


class TestReads:
    def test_get_order(self, store, collections, order_record):
        collections["order"].find_one = AsyncMock(return_value=order_record.model_dump())
        object_id = ObjectId()

        order = asyncio.run(store.get_order(str(object_id)))

        assert order == order_record
        query = collections["order"].find_one.call_args.args[0]
        assert query == {"_id": object_id}

    def test_get_order_missing(self, store, collections):
        collections["order"].find_one = AsyncMock(return_value=None)
        assert asyncio.run(store.get_order(str(ObjectId()))) is None

    def test_get_order_malformed_id(self, store, collections):
        collections["order"].find_one = AsyncMock()
        assert asyncio.run(store.get_order("not-an-id")) is None
        collections["order"].find_one.assert_not_called()

    def test_get_order_items(self, store, collections, gown):
        stored = OrderItemRecord.from_line_item(gown, "abc").model_dump()
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[stored])
        collections["order_item"].find = MagicMock(return_value=cursor)

        items = asyncio.run(store.get_order_items("abc"))

        assert [i.item_id for i in items] == ["A"]
        assert collections["order_item"].find.call_args.args[0] == {"order_id": "abc"}


class TestConnection:
    def test_connect_pings_and_creates_indexes(self):
        client = MagicMock()
        client.admin.command = AsyncMock(return_value={"ok": 1})
        db = MagicMock()
        db.__getitem__.return_value.create_index = AsyncMock()
        client.__getitem__.return_value = db

        store = MongoRecordStore()
        with patch("storefront.database.mongodb.AsyncIOMotorClient", return_value=client):
            asyncio.run(store.connect())

        client.admin.command.assert_awaited_once_with("ping")
        assert store.db is db
        assert db.__getitem__.return_value.create_index.await_count == 2

        asyncio.run(store.disconnect())
        client.close.assert_called_once()
        assert store.db is None

    def test_connect_failure_propagates(self):
        client = MagicMock()
        client.admin.command = AsyncMock(side_effect=ConnectionFailure("no server"))

        with patch("storefront.database.mongodb.AsyncIOMotorClient", return_value=client):
            with pytest.raises(ConnectionFailure):
                asyncio.run(MongoRecordStore().connect())
