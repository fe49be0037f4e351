"""Promotion code resolution and the active-promotion holder."""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from storefront.config import get_settings
from storefront.database.local_storage import KeyValueStorage
from storefront.exceptions import UnknownPromotionError, ValidationError
from storefront.models.promotion import Promotion, PromotionKind

logger = logging.getLogger(__name__)
settings = get_settings()

PROMOTION_CATALOG: dict[str, Promotion] = {
    "WELCOME10": Promotion(
        code="WELCOME10",
        kind=PromotionKind.PERCENTAGE_OFF,
        value=0.10,
        description="10% off your order!",
    ),
    "FREESHIP": Promotion(
        code="FREESHIP",
        kind=PromotionKind.FREE_SHIPPING,
        value=settings.base_shipping_fee,
        description="Free shipping!",
    ),
}


def resolve_promotion(code: Optional[str]) -> Promotion:
    """Resolve a user-entered code.

    Raises:
        ValidationError: code is empty or whitespace.
        UnknownPromotionError: code is not in the catalog.
    """
    normalized = (code or "").strip().upper()
    if not normalized:
        raise ValidationError("code required", {"promo_code": "Please enter a promo code"})

    promotion = PROMOTION_CATALOG.get(normalized)
    if promotion is None:
        raise UnknownPromotionError(normalized)
    return promotion


class PromotionState:
    """Holds the single active promotion, optionally persisted to storage."""

    def __init__(self, storage: Optional[KeyValueStorage] = None, key: Optional[str] = None) -> None:
        self.storage = storage
        self.key = key or settings.promo_storage_key
        self._active: Optional[Promotion] = None

    @property
    def active(self) -> Optional[Promotion]:
        return self._active

    @property
    def code(self) -> str:
        return self._active.code if self._active else ""

    def load(self) -> Optional[Promotion]:
        """Restore the active promotion from storage. Never raises."""
        if self.storage is None:
            return self._active

        raw = self.storage.get(self.key)
        self._active = None
        if raw:
            try:
                stored = Promotion.model_validate_json(raw)
            except PydanticValidationError as e:
                logger.debug("Discarding malformed promotion data: %s", e)
            else:
                # Only codes still in the catalog are honoured.
                self._active = PROMOTION_CATALOG.get(stored.code)
        return self._active

    def apply(self, code: Optional[str]) -> Promotion:
        """Resolve ``code`` and make it the active promotion.

        On failure the previously active promotion is kept.
        """
        try:
            promotion = resolve_promotion(code)
        except UnknownPromotionError as e:
            logger.info("Rejected promo code %s", e.code)
            raise

        self._active = promotion
        if self.storage is not None:
            self.storage.set(self.key, promotion.model_dump_json())
        logger.info("Applied promo code %s", promotion.code)
        return promotion

    def clear(self) -> None:
        """Drop the active promotion."""
        self._active = None
        if self.storage is not None:
            self.storage.remove(self.key)
