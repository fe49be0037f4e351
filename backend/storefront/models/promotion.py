"""Promotion models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PromotionKind(str, Enum):
    """Discount rule applied by a promotion."""

    PERCENTAGE_OFF = "percentage-off"
    FREE_SHIPPING = "free-shipping"


class Promotion(BaseModel):
    """A resolved promotion code."""

    code: str = Field(..., min_length=1, description="Upper-cased promotion code")
    kind: PromotionKind
    value: float = Field(
        ...,
        ge=0,
        description="Fraction off the subtotal for percentage-off; waived fee for free-shipping",
    )
    description: str = Field(default="", description="User-facing label")

    model_config = ConfigDict(frozen=True)
