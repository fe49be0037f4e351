"""Services package."""

from storefront.services.bag_store import BagStore, parse_bag
from storefront.services.checkout_service import CheckoutService, CheckoutStep, OrderRecordStore
from storefront.services.pricing import compute_totals, estimate_delivery_date, format_money
from storefront.services.promotion_service import (
    PROMOTION_CATALOG,
    PromotionState,
    resolve_promotion,
)
from storefront.services.validation import (
    PaymentInfo,
    ShippingAddress,
    format_card_number,
    format_expiry,
    validate_payment,
    validate_shipping,
)
from storefront.services.wishlist_store import WishlistStore, save_for_later

__all__ = [
    "BagStore",
    "parse_bag",
    "compute_totals",
    "format_money",
    "estimate_delivery_date",
    "PROMOTION_CATALOG",
    "PromotionState",
    "resolve_promotion",
    "ShippingAddress",
    "PaymentInfo",
    "validate_shipping",
    "validate_payment",
    "format_card_number",
    "format_expiry",
    "CheckoutService",
    "CheckoutStep",
    "OrderRecordStore",
    "WishlistStore",
    "save_for_later",
]
