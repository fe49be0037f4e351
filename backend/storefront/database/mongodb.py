"""MongoDB-backed record store for orders and order items."""

import logging
from typing import Optional, Sequence

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, PyMongoError

from storefront.config import get_settings
from storefront.models.line_item import LineItem
from storefront.models.order import OrderItemRecord, OrderRecord, PersistenceResult

logger = logging.getLogger(__name__)
settings = get_settings()


class MongoRecordStore:
    """MongoDB connection manager and order persistence collaborator.

    Write failures reported by the driver come back as an unsuccessful
    ``PersistenceResult``; calling a write before ``connect`` raises
    ``ConnectionError``.
    """

    def __init__(self) -> None:
        """Initialize MongoDB connection."""
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Connect to MongoDB."""
        try:
            self.client = AsyncIOMotorClient(
                settings.mongodb_url,
                maxPoolSize=settings.mongodb_max_pool_size,
                minPoolSize=settings.mongodb_min_pool_size,
                serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
            )
            self.db = self.client[settings.mongodb_database]

            # Test connection
            await self.client.admin.command("ping")
            logger.info("Connected to MongoDB: %s", settings.mongodb_database)

            await self._create_indexes()

        except ConnectionFailure as e:
            logger.error("Failed to connect to MongoDB: %s", e)
            raise

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("Disconnected from MongoDB")

    async def _create_indexes(self) -> None:
        """Create database indexes."""
        if self.db is not None:
            await self.db[settings.mongodb_order_item_collection].create_index(
                "order_id", name="order_id_index"
            )
            await self.db[settings.mongodb_order_collection].create_index(
                "email", name="email_index"
            )
            logger.info("MongoDB indexes created")

    async def create_order(self, order: OrderRecord) -> PersistenceResult:
        """Insert an order header and return its id."""
        if self.db is None:
            raise ConnectionError("Database not connected")

        try:
            result = await self.db[settings.mongodb_order_collection].insert_one(order.model_dump())
        except PyMongoError as e:
            logger.error("Error creating order: %s", e)
            return PersistenceResult(success=False, error=str(e))

        if not result.inserted_id:
            return PersistenceResult(success=False, error="Order was not created")

        order_id = str(result.inserted_id)
        logger.info("Created order %s", order_id)
        return PersistenceResult(success=True, id=order_id)

    async def create_order_items(self, items: Sequence[LineItem], order_id: str) -> PersistenceResult:
        """Insert one order item per bag line item, linked to ``order_id``."""
        if self.db is None:
            raise ConnectionError("Database not connected")

        records = [OrderItemRecord.from_line_item(item, order_id).model_dump() for item in items]
        if not records:
            return PersistenceResult(success=True, id=str(order_id))

        try:
            result = await self.db[settings.mongodb_order_item_collection].insert_many(records)
        except PyMongoError as e:
            logger.error("Error creating order items for order %s: %s", order_id, e)
            return PersistenceResult(success=False, id=str(order_id), error=str(e))

        if len(result.inserted_ids) != len(records):
            return PersistenceResult(
                success=False,
                id=str(order_id),
                error=f"Created {len(result.inserted_ids)} of {len(records)} order items",
            )

        logger.info("Created %d order items for order %s", len(records), order_id)
        return PersistenceResult(success=True, id=str(order_id))

    async def get_order(self, order_id: str) -> Optional[OrderRecord]:
        """Get an order header by id."""
        if self.db is None:
            raise ConnectionError("Database not connected")

        if not ObjectId.is_valid(order_id):
            return None

        order_data = await self.db[settings.mongodb_order_collection].find_one(
            {"_id": ObjectId(order_id)}, {"_id": 0}
        )

        if order_data:
            return OrderRecord(**order_data)
        return None

    async def get_order_items(self, order_id: str) -> list[OrderItemRecord]:
        """Get the items belonging to an order."""
        if self.db is None:
            raise ConnectionError("Database not connected")

        cursor = self.db[settings.mongodb_order_item_collection].find(
            {"order_id": str(order_id)}, {"_id": 0}
        )
        items = await cursor.to_list(length=None)
        return [OrderItemRecord(**item) for item in items]


# Global record store instance
record_store = MongoRecordStore()
