"""Order totals derived from a bag snapshot."""

from datetime import UTC, date, datetime, timedelta
from typing import Iterable, Optional

from storefront.config import get_settings
from storefront.models.line_item import LineItem
from storefront.models.order import OrderTotals
from storefront.models.promotion import Promotion, PromotionKind

settings = get_settings()


def compute_totals(
    line_items: Iterable[LineItem],
    promotion: Optional[Promotion] = None,
    *,
    tax_rate: Optional[float] = None,
    shipping_fee: Optional[float] = None,
) -> OrderTotals:
    """Compute subtotal, shipping, tax, discount and total.

    Intermediate values are not rounded. An empty bag still carries the base
    shipping fee.
    """
    rate = settings.tax_rate if tax_rate is None else tax_rate
    base_fee = settings.base_shipping_fee if shipping_fee is None else shipping_fee

    subtotal = sum((item.unit_price * item.quantity for item in line_items), 0.0)

    fee = base_fee
    discount = 0.0
    if promotion is not None:
        if promotion.kind == PromotionKind.FREE_SHIPPING:
            fee = 0.0
        elif promotion.kind == PromotionKind.PERCENTAGE_OFF:
            discount = subtotal * promotion.value

    tax = subtotal * rate
    total = subtotal + fee + tax - discount

    return OrderTotals(
        subtotal=subtotal,
        shipping_fee=fee,
        tax=tax,
        discount=discount,
        total=total,
    )


def format_money(value: float) -> str:
    """Round to cents for display."""
    return f"{value:.2f}"


def estimate_delivery_date(now: Optional[datetime] = None, days: Optional[int] = None) -> date:
    """Estimated delivery date shown with the bag summary."""
    now = now or datetime.now(UTC)
    offset = settings.delivery_estimate_days if days is None else days
    return (now + timedelta(days=offset)).date()
