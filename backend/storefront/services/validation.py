"""Shipping and payment form validation."""

import re
from datetime import UTC, datetime
from typing import Optional

from pydantic import BaseModel, Field

from storefront.config import get_settings
from storefront.utils.helpers import digits_only

settings = get_settings()

ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
CVV_PATTERN = re.compile(r"^\d{3,4}$")


class ShippingAddress(BaseModel):
    """Shipping form state."""

    first_name: str = ""
    last_name: str = ""
    street_address: str = ""
    apt_suite: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = Field(default_factory=lambda: settings.default_country)
    phone: str = ""
    email: str = ""
    save_address: bool = False


class PaymentInfo(BaseModel):
    """Payment form state. Never persisted."""

    card_number: str = ""
    name_on_card: str = ""
    expiry_date: str = ""
    cvv: str = ""
    billing_zip_code: str = ""
    save_payment_method: bool = False


def validate_shipping(address: ShippingAddress) -> dict[str, str]:
    """Return field errors for the shipping form; empty when valid."""
    errors: dict[str, str] = {}

    required = {
        "first_name": "First name is required",
        "last_name": "Last name is required",
        "street_address": "Street address is required",
        "city": "City is required",
        "state": "State is required",
    }
    for field, message in required.items():
        if not getattr(address, field).strip():
            errors[field] = message

    if not address.zip_code.strip():
        errors["zip_code"] = "ZIP code is required"
    elif not ZIP_CODE_PATTERN.fullmatch(address.zip_code):
        errors["zip_code"] = "Invalid ZIP code"

    if not address.phone.strip():
        errors["phone"] = "Phone number is required"
    elif len(digits_only(address.phone)) != 10:
        errors["phone"] = "Invalid phone number"

    if not address.email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.search(address.email):
        errors["email"] = "Invalid email address"

    return errors


def _expiry_error(expiry_date: str, now: datetime) -> Optional[str]:
    parts = expiry_date.strip().split("/")
    if len(parts) != 2:
        return "Invalid expiry date"
    month, year = parts
    if not month.isdigit() or not year.isdigit() or len(year) != 2:
        return "Invalid expiry date"
    if not 1 <= int(month) <= 12:
        return "Invalid expiry date"

    current_year = now.year % 100
    if int(year) < current_year or (int(year) == current_year and int(month) < now.month):
        return "Card has expired"
    return None


def validate_payment(payment: PaymentInfo, now: Optional[datetime] = None) -> dict[str, str]:
    """Return field errors for the payment form; empty when valid.

    The expiry month is compared against ``now`` (current UTC time by default).
    """
    now = now or datetime.now(UTC)
    errors: dict[str, str] = {}

    card_number = payment.card_number.replace(" ", "")
    if not card_number:
        errors["card_number"] = "Card number is required"
    elif len(card_number) != 16 or not card_number.isdigit():
        errors["card_number"] = "Invalid card number"

    if not payment.name_on_card.strip():
        errors["name_on_card"] = "Name on card is required"

    if not payment.expiry_date.strip():
        errors["expiry_date"] = "Expiry date is required"
    else:
        expiry_error = _expiry_error(payment.expiry_date, now)
        if expiry_error:
            errors["expiry_date"] = expiry_error

    if not payment.cvv.strip():
        errors["cvv"] = "CVV is required"
    elif not CVV_PATTERN.fullmatch(payment.cvv):
        errors["cvv"] = "Invalid CVV"

    if not payment.billing_zip_code.strip():
        errors["billing_zip_code"] = "Billing ZIP code is required"
    elif not ZIP_CODE_PATTERN.fullmatch(payment.billing_zip_code):
        errors["billing_zip_code"] = "Invalid ZIP code"

    return errors


def format_card_number(raw: str) -> str:
    """Group card digits in fours as the user types, e.g. ``4242 4242 ...``."""
    digits = raw.replace(" ", "")
    grouped = " ".join(digits[i:i + 4] for i in range(0, len(digits), 4))
    return grouped[:19]


def format_expiry(raw: str) -> str:
    """Keep digits and insert the slash after the month, e.g. ``0427`` -> ``04/27``."""
    digits = digits_only(raw)
    if len(digits) > 2:
        return f"{digits[:2]}/{digits[2:4]}"
    return digits
