"""Wishlist of saved product ids."""

import logging
from typing import Optional, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from storefront.config import get_settings
from storefront.database.local_storage import KeyValueStorage
from storefront.services.bag_store import BagStore

logger = logging.getLogger(__name__)
settings = get_settings()

# Catalog ids may have been stored as numbers.
_stored_ids_adapter = TypeAdapter(list[Union[str, int]])
_wishlist_adapter = TypeAdapter(list[str])


class WishlistStore:
    """Ordered, de-duplicated product ids persisted to storage."""

    def __init__(self, storage: KeyValueStorage, key: Optional[str] = None) -> None:
        self.storage = storage
        self.key = key or settings.wishlist_storage_key
        self._product_ids: list[str] = []

    def load(self) -> list[str]:
        """Restore from storage. Malformed data yields an empty wishlist."""
        raw = self.storage.get(self.key)
        self._product_ids = []
        if not raw:
            return []
        try:
            stored = _stored_ids_adapter.validate_json(raw)
        except PydanticValidationError as e:
            logger.debug("Discarding malformed wishlist data: %s", e)
            return []

        for value in stored:
            product_id = str(value)
            if product_id not in self._product_ids:
                self._product_ids.append(product_id)
        return list(self._product_ids)

    def _persist(self) -> None:
        self.storage.set(self.key, _wishlist_adapter.dump_json(self._product_ids).decode())

    @property
    def items(self) -> tuple[str, ...]:
        return tuple(self._product_ids)

    def contains(self, product_id: str) -> bool:
        return str(product_id) in self._product_ids

    def add(self, product_id: str) -> None:
        if not self.contains(product_id):
            self._product_ids.append(str(product_id))
            self._persist()

    def remove(self, product_id: str) -> None:
        if self.contains(product_id):
            self._product_ids.remove(str(product_id))
            self._persist()

    def toggle(self, product_id: str) -> bool:
        """Flip membership; returns True when the product is now saved."""
        if self.contains(product_id):
            self.remove(product_id)
            return False
        self.add(product_id)
        return True


def save_for_later(bag: BagStore, wishlist: WishlistStore, product_id: str, size: str) -> bool:
    """Move a bag slot to the wishlist. Returns False if the slot is absent."""
    if bag.get(product_id, size) is None:
        return False
    wishlist.add(product_id)
    bag.remove(product_id, size)
    logger.info("Saved %s for later", product_id)
    return True
