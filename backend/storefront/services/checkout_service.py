"""Checkout flow: shipping, payment, then two-phase order placement."""

import logging
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from storefront.config import get_settings
from storefront.exceptions import (
    CheckoutInProgressError,
    CheckoutStateError,
    EmptyBagError,
    PersistenceError,
    ValidationError,
)
from storefront.models.line_item import LineItem
from storefront.models.order import CheckoutResult, OrderRecord, OrderTotals, PersistenceResult
from storefront.services.bag_store import BagStore
from storefront.services.pricing import compute_totals
from storefront.services.promotion_service import PromotionState
from storefront.services.validation import (
    PaymentInfo,
    ShippingAddress,
    validate_payment,
    validate_shipping,
)

logger = logging.getLogger(__name__)
settings = get_settings()


class OrderRecordStore(Protocol):
    """External persistence for order headers and their items."""

    async def create_order(self, order: OrderRecord) -> PersistenceResult: ...

    async def create_order_items(
        self, items: Sequence[LineItem], order_id: str
    ) -> PersistenceResult: ...


class CheckoutStep(str, Enum):
    """Checkout stages, in order."""

    SHIPPING = "shipping"
    PAYMENT = "payment"
    COMPLETE = "complete"


class CheckoutService:
    """Drives checkout for one bag.

    The bag is cleared only after both the order header and its items have
    been written. If the header is written but the items are not, the header
    is left in place and the bag is kept; a retry creates a new header.
    """

    def __init__(
        self,
        bag: BagStore,
        record_store: OrderRecordStore,
        promotions: Optional[PromotionState] = None,
        navigate: Optional[Callable[[str], Any]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.bag = bag
        self.record_store = record_store
        self.promotions = promotions
        self.navigate = navigate
        self.clock = clock or (lambda: datetime.now(UTC))

        self.step = CheckoutStep.SHIPPING
        self.shipping = ShippingAddress()
        self.is_processing = False
        self.last_order_id: Optional[str] = None

    @property
    def promotion_code(self) -> str:
        return self.promotions.code if self.promotions else ""

    def current_totals(self) -> OrderTotals:
        """Totals for the bag as it is now."""
        active = self.promotions.active if self.promotions else None
        return compute_totals(self.bag.items, active)

    def submit_shipping(self, address: Union[ShippingAddress, dict[str, Any]]) -> None:
        """Validate the shipping form and advance to payment.

        Raises:
            ValidationError: with per-field messages; the step stays at shipping.
        """
        if self.step == CheckoutStep.COMPLETE:
            raise CheckoutStateError("Checkout is already complete")
        if isinstance(address, dict):
            try:
                address = ShippingAddress.model_validate(address)
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic("Please fill in all required shipping information", e) from e

        self.shipping = address
        errors = validate_shipping(address)
        if errors:
            self.step = CheckoutStep.SHIPPING
            raise ValidationError("Please fill in all required shipping information", errors)

        self.step = CheckoutStep.PAYMENT

    def back_to_shipping(self) -> None:
        if self.step == CheckoutStep.PAYMENT:
            self.step = CheckoutStep.SHIPPING

    def build_order_record(self, totals: OrderTotals) -> OrderRecord:
        address = self.shipping
        return OrderRecord(
            first_name=address.first_name,
            last_name=address.last_name,
            street_address=address.street_address,
            apt_suite=address.apt_suite,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
            phone=address.phone,
            email=address.email,
            subtotal=totals.subtotal,
            shipping_fee=totals.shipping_fee,
            tax=totals.tax,
            discount=totals.discount,
            total=totals.total,
            promo_code=self.promotion_code,
        )

    async def place_order(self, payment: Union[PaymentInfo, dict[str, Any]]) -> CheckoutResult:
        """Validate payment, then write the order header and its items.

        Raises:
            CheckoutStateError: shipping has not been accepted yet.
            CheckoutInProgressError: another placement is still running.
            ValidationError: payment form errors.
            EmptyBagError: nothing to order; no remote calls are made.
            PersistenceError: either write failed; the bag is left untouched.
        """
        if self.step != CheckoutStep.PAYMENT:
            raise CheckoutStateError("Shipping information must be completed first")
        if self.is_processing:
            raise CheckoutInProgressError("Order placement already in progress")

        if isinstance(payment, dict):
            try:
                payment = PaymentInfo.model_validate(payment)
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic("Please fill in all required payment information", e) from e
        errors = validate_payment(payment, now=self.clock())
        if errors:
            raise ValidationError("Please fill in all required payment information", errors)

        items = self.bag.items
        if not items:
            raise EmptyBagError()

        self.is_processing = True
        try:
            totals = self.current_totals()
            order_id = await self._create_order(self.build_order_record(totals))
            await self._create_order_items(items, order_id)

            self.bag.clear()
            if self.promotions is not None:
                promo_code = self.promotions.code
                self.promotions.clear()
            else:
                promo_code = ""

            self.step = CheckoutStep.COMPLETE
            self.last_order_id = order_id
            redirect_to = f"{settings.order_confirmation_path}?id={order_id}"
            logger.info("Order %s placed with %d items", order_id, len(items))

            if self.navigate is not None:
                self.navigate(redirect_to)

            return CheckoutResult(
                order_id=order_id,
                totals=totals,
                promo_code=promo_code,
                redirect_to=redirect_to,
                item_count=len(items),
            )
        finally:
            self.is_processing = False

    async def _create_order(self, order: OrderRecord) -> str:
        try:
            result = await self.record_store.create_order(order)
        except Exception as e:
            logger.error("Error creating order: %s", e)
            raise PersistenceError("Failed to create order", phase="order") from e

        if not result.success or not result.id:
            logger.error("Order creation was rejected: %s", result.error)
            raise PersistenceError("Failed to create order", phase="order")
        return str(result.id)

    async def _create_order_items(self, items: Sequence[LineItem], order_id: str) -> None:
        try:
            result = await self.record_store.create_order_items(items, order_id)
        except Exception as e:
            logger.error("Error creating order items for order %s: %s", order_id, e)
            raise PersistenceError(
                "Failed to create order items", phase="order_items", order_id=order_id
            ) from e

        if not result.success:
            logger.error("Order item creation for order %s was rejected: %s", order_id, result.error)
            raise PersistenceError(
                "Failed to create order items", phase="order_items", order_id=order_id
            )
