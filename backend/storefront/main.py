"""Composition root wiring storage, bag, promotions and checkout together."""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Optional

from storefront.config import get_settings
from storefront.database.local_storage import JsonFileStorage, KeyValueStorage
from storefront.database.mongodb import MongoRecordStore, record_store as default_record_store
from storefront.services.bag_store import BagStore
from storefront.services.checkout_service import CheckoutService, OrderRecordStore
from storefront.services.promotion_service import PromotionState
from storefront.services.wishlist_store import WishlistStore
from storefront.utils.logger import setup_logging

logger = logging.getLogger(__name__)
settings = get_settings()


@dataclass
class Storefront:
    """Handles for one browsing session."""

    storage: KeyValueStorage
    bag: BagStore
    promotions: PromotionState
    wishlist: WishlistStore
    record_store: OrderRecordStore
    navigate: Optional[Callable[[str], Any]] = None

    def new_checkout(self) -> CheckoutService:
        """Start a checkout over this session's bag and promotion."""
        return CheckoutService(
            bag=self.bag,
            record_store=self.record_store,
            promotions=self.promotions,
            navigate=self.navigate,
        )


def create_storefront(
    storage: Optional[KeyValueStorage] = None,
    record_store: Optional[OrderRecordStore] = None,
    navigate: Optional[Callable[[str], Any]] = None,
) -> Storefront:
    """Build a session with state rehydrated from storage."""
    storage = storage if storage is not None else JsonFileStorage(settings.local_storage_path)

    bag = BagStore.open(storage)
    promotions = PromotionState(storage)
    promotions.load()
    wishlist = WishlistStore(storage)
    wishlist.load()

    logger.info("Storefront session started with %d bag items", bag.count())
    return Storefront(
        storage=storage,
        bag=bag,
        promotions=promotions,
        wishlist=wishlist,
        record_store=record_store if record_store is not None else default_record_store,
        navigate=navigate,
    )


@asynccontextmanager
async def storefront_session(
    storage: Optional[KeyValueStorage] = None,
    navigate: Optional[Callable[[str], Any]] = None,
    store: Optional[MongoRecordStore] = None,
) -> AsyncIterator[Storefront]:
    """Session with the MongoDB record store connected for its duration."""
    setup_logging()
    store = store if store is not None else default_record_store
    logger.info("Starting storefront session...")
    await store.connect()
    try:
        yield create_storefront(storage=storage, record_store=store, navigate=navigate)
    finally:
        logger.info("Shutting down storefront session...")
        await store.disconnect()
