"""Data models package."""

from storefront.models.line_item import LineItem, make_line_item, same_slot
from storefront.models.order import (
    CheckoutResult,
    OrderItemRecord,
    OrderRecord,
    OrderTotals,
    PersistenceResult,
)
from storefront.models.promotion import Promotion, PromotionKind

__all__ = [
    # Bag models
    "LineItem",
    "make_line_item",
    "same_slot",
    # Promotion models
    "Promotion",
    "PromotionKind",
    # Order models
    "OrderTotals",
    "OrderRecord",
    "OrderItemRecord",
    "PersistenceResult",
    "CheckoutResult",
]
