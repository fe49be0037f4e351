"""Rental line item model."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from storefront.exceptions import ValidationError
from storefront.utils.helpers import get_timestamp

SIZE_REQUIRED_MESSAGE = "Please select a size first"


class LineItem(BaseModel):
    """One rental selection in the shopping bag.

    Display attributes are copied from the catalog when the item is added and
    are not re-synced afterwards. Two items occupy the same bag slot when
    ``product_id`` and ``size`` match.
    """

    product_id: str = Field(..., min_length=1, description="Rented product identifier")
    size: str = Field(..., min_length=1, description="Selected size")
    title: str = Field(default="", description="Product title")
    designer: str = Field(default="", description="Designer name")
    image: str = Field(default="", description="Product image URL")
    color: str = Field(default="", description="Selected color")
    unit_price: float = Field(..., ge=0, description="Price per rental at add time")
    rental_days: int = Field(default=4, ge=1, description="Length of the rental period")
    rental_start: Optional[str] = Field(default=None, description="Rental start date (ISO)")
    rental_end: Optional[str] = Field(default=None, description="Rental end date (ISO)")
    quantity: int = Field(default=1, ge=1, description="Units of this slot")
    added_at: str = Field(default_factory=get_timestamp)

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "productId": "42",
                "size": "M",
                "title": "Silk Wrap Gown",
                "designer": "Reformation",
                "image": "https://example.com/gown.jpg",
                "color": "Emerald",
                "unitPrice": 125.0,
                "rentalDays": 4,
                "quantity": 1,
                "addedAt": "2024-05-01T12:00:00+00:00",
            }
        },
    )

    @field_validator("product_id", mode="before")
    @classmethod
    def coerce_product_id(cls, v: Any) -> Any:
        """Catalog ids may arrive as integers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def slot(self) -> tuple[str, str]:
        """The (product_id, size) identity of this item."""
        return (self.product_id, self.size)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


def same_slot(a: LineItem, b: LineItem) -> bool:
    """Return True when both items occupy the same bag slot."""
    return a.product_id == b.product_id and a.size == b.size


def make_line_item(**fields: Any) -> LineItem:
    """Build a line item from a user selection.

    Raises:
        ValidationError: size not chosen, quantity below 1, or any other
            malformed field.
    """
    size = fields.get("size")
    if size is None or not str(size).strip():
        raise ValidationError(SIZE_REQUIRED_MESSAGE, {"size": SIZE_REQUIRED_MESSAGE})

    quantity = fields.get("quantity", 1)
    if isinstance(quantity, int) and quantity < 1:
        raise ValidationError("Quantity must be at least 1", {"quantity": "Quantity must be at least 1"})

    try:
        return LineItem(**fields)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic("Invalid line item", e) from e
