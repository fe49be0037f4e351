"""Database package."""

from storefront.database.local_storage import InMemoryStorage, JsonFileStorage, KeyValueStorage
from storefront.database.mongodb import MongoRecordStore, record_store

__all__ = [
    "KeyValueStorage",
    "InMemoryStorage",
    "JsonFileStorage",
    "MongoRecordStore",
    "record_store",
]
