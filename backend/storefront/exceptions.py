"""Domain exceptions raised by the bag, promotion and checkout services."""

from typing import Any, Optional


class StorefrontError(Exception):
    """Base class for storefront errors."""


class ValidationError(StorefrontError):
    """Input failed a validation gate.

    ``errors`` maps form field names to user-facing messages.
    """

    def __init__(self, message: str, errors: Optional[dict[str, str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors: dict[str, str] = dict(errors or {})

    @classmethod
    def from_pydantic(cls, message: str, error: Any) -> "ValidationError":
        """Wrap a pydantic validation error, keyed by dotted field location."""
        errors = {".".join(str(part) for part in err["loc"]): err["msg"] for err in error.errors()}
        return cls(message, errors)


class EmptyBagError(ValidationError):
    """Checkout attempted with nothing in the bag."""

    def __init__(self, message: str = "Your shopping bag is empty") -> None:
        super().__init__(message)


class UnknownPromotionError(StorefrontError):
    """Promotion code is not in the catalog."""

    def __init__(self, code: str) -> None:
        super().__init__("Invalid promo code. Please try again.")
        self.code = code


class PersistenceError(StorefrontError):
    """Order or order-item creation failed against the record store."""

    def __init__(self, message: str, phase: str, order_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.phase = phase
        self.order_id = order_id


class CheckoutStateError(StorefrontError):
    """Checkout operation called from the wrong step."""


class CheckoutInProgressError(StorefrontError):
    """An order placement is already running."""
