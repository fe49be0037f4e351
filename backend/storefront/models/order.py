"""Order totals and order record models."""

from typing import Optional

from pydantic import BaseModel, Field

from storefront.models.line_item import LineItem
from storefront.utils.helpers import get_timestamp, truncate_text


class OrderTotals(BaseModel):
    """Totals derived from a bag snapshot. Values keep full float precision."""

    subtotal: float = 0.0
    shipping_fee: float = 0.0
    tax: float = 0.0
    discount: float = 0.0
    total: float = 0.0

    def formatted(self) -> dict[str, str]:
        """Two-decimal strings for display."""
        return {name: f"{value:.2f}" for name, value in self.model_dump().items()}


class OrderRecord(BaseModel):
    """Order header as written to the record store."""

    name: str = Field(default_factory=lambda: f"Order {get_timestamp()}")
    first_name: str
    last_name: str
    street_address: str
    apt_suite: str = ""
    city: str
    state: str
    zip_code: str
    country: str
    phone: str
    email: str
    subtotal: float
    shipping_fee: float
    tax: float
    discount: float = 0.0
    total: float
    promo_code: str = ""


class OrderItemRecord(BaseModel):
    """One order line as written to the record store, linked by ``order_id``."""

    name: str
    item_id: str
    title: str
    designer: str
    price: float
    image: str
    color: str
    size: str
    quantity: int = Field(..., ge=1)
    rental_days: int
    rental_start: Optional[str] = None
    rental_end: Optional[str] = None
    order_id: str

    @classmethod
    def from_line_item(cls, item: LineItem, order_id: str) -> "OrderItemRecord":
        """Create an order item record from a bag line item."""
        return cls(
            name=truncate_text(f"Order Item - {item.title}", max_length=255),
            item_id=item.product_id,
            title=item.title,
            designer=item.designer,
            price=item.unit_price,
            image=item.image,
            color=item.color,
            size=item.size,
            quantity=item.quantity,
            rental_days=item.rental_days,
            rental_start=item.rental_start,
            rental_end=item.rental_end,
            order_id=str(order_id),
        )


class PersistenceResult(BaseModel):
    """Outcome of a record store write."""

    success: bool
    id: Optional[str] = None
    error: Optional[str] = None


class CheckoutResult(BaseModel):
    """Outcome of a successful order placement."""

    order_id: str
    totals: OrderTotals
    promo_code: str = ""
    redirect_to: str
    item_count: int = 0
