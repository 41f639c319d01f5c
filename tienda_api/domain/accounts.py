"""Domain helpers for account registration rules."""
from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6


def is_valid_email(value: str | None) -> bool:
    """Return True for a basic local@domain.tld shaped address."""
    if not value:
        return False
    return bool(EMAIL_PATTERN.fullmatch(value))


def is_valid_name(value: str | None) -> bool:
    return len((value or "").strip()) >= MIN_NAME_LENGTH


def is_valid_password(value: str | None) -> bool:
    return len(value or "") >= MIN_PASSWORD_LENGTH


def email_key(value: str | None) -> str:
    """Comparison key used for the one-account-per-email rule."""
    return (value or "").strip().casefold()
