"""
Identity Utilities
==================
Validation and normalization of email identities.
"""

import re
from typing import Optional

from .errors import ValidationError

MAX_EMAIL_LENGTH = 254

_EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)


def validate_email(email: str) -> bool:
    """
    Validate email address format.

    Args:
        email: Email address

    Returns:
        True if the address is syntactically acceptable
    """
    if not email or len(email) > MAX_EMAIL_LENGTH:
        return False
    return bool(_EMAIL_PATTERN.match(email))


def normalize_email(email: str) -> str:
    """Strip surrounding whitespace and lowercase the address."""
    return email.strip().lower()


def require_identity(email: Optional[str]) -> str:
    """
    Normalize and validate an identity.

    Raises:
        ValidationError: If the identity is missing or malformed
    """
    if email is None or not isinstance(email, str) or not email.strip():
        raise ValidationError("Email is required")
    normalized = normalize_email(email)
    if not validate_email(normalized):
        raise ValidationError("Email is invalid")
    return normalized
