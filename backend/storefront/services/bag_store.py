"""Shopping bag store synchronized to local storage."""

import logging
from typing import Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from storefront.config import get_settings
from storefront.database.local_storage import KeyValueStorage
from storefront.models.line_item import LineItem, same_slot

logger = logging.getLogger(__name__)
settings = get_settings()

_bag_adapter = TypeAdapter(list[LineItem])


def parse_bag(raw: Optional[str]) -> list[LineItem]:
    """Decode a serialized bag, collapsing any parse failure to an empty bag."""
    if not raw:
        return []
    try:
        items = _bag_adapter.validate_json(raw)
    except PydanticValidationError as e:
        logger.debug("Discarding malformed bag data: %s", e)
        return []

    # A hand-edited payload could repeat a slot; keep the last entry in place.
    bag: list[LineItem] = []
    for item in items:
        _upsert(bag, item)
    return bag


def _upsert(bag: list[LineItem], item: LineItem) -> None:
    for index, existing in enumerate(bag):
        if same_slot(existing, item):
            bag[index] = item
            return
    bag.append(item)


class BagStore:
    """The shopping bag and its durable mirror.

    This is the only writer of bag state. Every mutation is persisted before
    the call returns.
    """

    def __init__(self, storage: KeyValueStorage, key: Optional[str] = None) -> None:
        self.storage = storage
        self.key = key or settings.bag_storage_key
        self._items: list[LineItem] = []

    @classmethod
    def open(cls, storage: KeyValueStorage, key: Optional[str] = None) -> "BagStore":
        """Create a store rehydrated from storage."""
        store = cls(storage, key)
        store.load()
        return store

    def load(self) -> list[LineItem]:
        """Replace in-memory state with what storage holds. Never raises."""
        self._items = parse_bag(self.storage.get(self.key))
        logger.debug("Loaded bag with %d items", len(self._items))
        return list(self._items)

    def _persist(self) -> None:
        self.storage.set(self.key, _bag_adapter.dump_json(self._items, by_alias=True).decode())

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    def add(self, item: LineItem) -> None:
        """Add ``item``, replacing an existing entry for the same slot in place."""
        _upsert(self._items, item)
        self._persist()
        logger.info("Added %s (size %s) to bag", item.product_id, item.size)

    def _index_of(self, product_id: str, size: str) -> Optional[int]:
        slot = (str(product_id), size)
        for index, existing in enumerate(self._items):
            if existing.slot == slot:
                return index
        return None

    def remove(self, product_id: str, size: str) -> None:
        """Remove the slot if present."""
        index = self._index_of(product_id, size)
        if index is not None:
            del self._items[index]
            logger.info("Removed %s (size %s) from bag", product_id, size)
        self._persist()

    def set_quantity(self, product_id: str, size: str, quantity: int) -> bool:
        """Update the quantity of an existing slot.

        Returns False without changing anything when ``quantity`` is below 1
        or the slot does not exist.
        """
        index = self._index_of(product_id, size)
        if quantity < 1 or index is None:
            return False
        self._items[index] = self._items[index].model_copy(update={"quantity": quantity})
        self._persist()
        return True

    def get(self, product_id: str, size: str) -> Optional[LineItem]:
        index = self._index_of(product_id, size)
        return self._items[index] if index is not None else None

    def clear(self) -> None:
        """Empty the bag."""
        self._items = []
        self._persist()
        logger.info("Bag cleared")

    def count(self) -> int:
        """Number of distinct slots, not total units."""
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return self.count()

    def __iter__(self):
        return iter(tuple(self._items))
