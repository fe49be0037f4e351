"""Utility helper functions."""

import re
from datetime import UTC, datetime

_NON_DIGITS = re.compile(r"\D")


def get_timestamp() -> str:
    """Get current UTC timestamp in ISO format."""
    return datetime.now(UTC).isoformat()


def digits_only(text: str) -> str:
    """Strip every non-digit character."""
    return _NON_DIGITS.sub("", text or "")


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """Truncate text to maximum length."""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)] + suffix
