"""Shared fixtures for the storefront tests."""

from datetime import UTC, datetime
from typing import Sequence

import pytest

from storefront.database.local_storage import InMemoryStorage
from storefront.models.line_item import LineItem, make_line_item
from storefront.models.order import OrderRecord, PersistenceResult
from storefront.services.bag_store import BagStore
from storefront.services.promotion_service import PromotionState
from storefront.services.validation import PaymentInfo, ShippingAddress

FIXED_NOW = datetime(2026, 10, 17, 12, 0, tzinfo=UTC)


class FakeRecordStore:
    """Records calls and returns scripted results.

    A result that is an exception instance is raised instead of returned.
    """

    def __init__(
        self,
        order_result: object = None,
        items_result: object = None,
    ) -> None:
        ok = PersistenceResult(success=True, id="order-1")
        self.order_result = order_result if order_result is not None else ok
        self.items_result = items_result if items_result is not None else ok
        self.orders: list[OrderRecord] = []
        self.item_calls: list[tuple[list[LineItem], str]] = []

    async def create_order(self, order: OrderRecord) -> PersistenceResult:
        self.orders.append(order)
        if isinstance(self.order_result, Exception):
            raise self.order_result
        return self.order_result

    async def create_order_items(
        self, items: Sequence[LineItem], order_id: str
    ) -> PersistenceResult:
        self.item_calls.append((list(items), order_id))
        if isinstance(self.items_result, Exception):
            raise self.items_result
        return self.items_result


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def bag(storage) -> BagStore:
    return BagStore.open(storage)


@pytest.fixture
def promotions(storage) -> PromotionState:
    return PromotionState(storage)


@pytest.fixture
def gown() -> LineItem:
    return make_line_item(
        product_id="A",
        size="M",
        title="Silk Wrap Gown",
        designer="Reformation",
        image="https://example.com/gown.jpg",
        color="Emerald",
        unit_price=100.0,
        rental_days=4,
    )


@pytest.fixture
def blazer() -> LineItem:
    return make_line_item(
        product_id="B",
        size="S",
        title="Tailored Blazer",
        designer="Theory",
        color="Black",
        unit_price=60.0,
        rental_days=8,
        quantity=2,
    )


@pytest.fixture
def shipping_address() -> ShippingAddress:
    return ShippingAddress(
        first_name="Ada",
        last_name="Lovelace",
        street_address="12 Analytical Way",
        city="Portland",
        state="OR",
        zip_code="97201",
        phone="(503) 555-0142",
        email="ada@example.com",
    )


@pytest.fixture
def payment_info() -> PaymentInfo:
    return PaymentInfo(
        card_number="4242 4242 4242 4242",
        name_on_card="Ada Lovelace",
        expiry_date="04/28",
        cvv="123",
        billing_zip_code="97201",
    )


@pytest.fixture
def record_store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def make_record_store():
    return FakeRecordStore
