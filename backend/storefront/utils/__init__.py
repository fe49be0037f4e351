"""Utilities package."""

from storefront.utils.helpers import (
    digits_only,
    get_timestamp,
    truncate_text,
)
from storefront.utils.logger import setup_logging

__all__ = [
    "setup_logging",
    "get_timestamp",
    "digits_only",
    "truncate_text",
]
