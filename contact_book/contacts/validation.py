"""Field validation for contact records."""
from __future__ import annotations

import re
from typing import Optional

from .models import ValidationError


# Optional leading "+", then at least 10 digits, spaces or hyphens
PHONE_PATTERN = re.compile(r"\+?[\d\s-]{10,}", re.ASCII)

# local@domain.tld, case-insensitive
EMAIL_PATTERN = re.compile(
    r"[\w+\-.]+@[a-z\d\-]+(?:\.[a-z\d\-]+)*\.[a-z]+",
    re.ASCII | re.IGNORECASE,
)


def is_valid_phone(phone: Optional[str]) -> bool:
    if phone is None:
        return False
    return PHONE_PATTERN.fullmatch(phone.strip()) is not None


def is_valid_email(email: Optional[str]) -> bool:
    if email is None:
        return False
    return EMAIL_PATTERN.fullmatch(email.strip()) is not None


def validate_contact_fields(
    name: Optional[str],
    phone: Optional[str],
    email: Optional[str],
) -> None:
    """Check the fields of a new contact.

    Name is checked first, so a blank name is always reported as such
    whatever the phone and email look like.

    Raises:
        ValidationError: with a message naming the first bad field.
    """
    if name is None or not name.strip():
        raise ValidationError("Name cannot be empty")
    if not is_valid_phone(phone):
        raise ValidationError("Invalid phone number")
    if not is_valid_email(email):
        raise ValidationError("Invalid email")
