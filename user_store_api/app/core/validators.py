"""
Field validators for user records.

Pure predicates with no side effects.  They accept arbitrary decoded
JSON values so that callers can hand over request data untouched and
let the type check be part of the validation.
"""

import re
from typing import Any

NAME_PATTERN = re.compile(r"[A-Za-z\s.]{2,50}")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MIN_AGE = 1
MAX_AGE = 120


def validate_name(value: Any) -> bool:
    """Letters, whitespace and periods only, 2-50 characters once trimmed."""
    return isinstance(value, str) and NAME_PATTERN.fullmatch(value.strip()) is not None


def validate_email(value: Any) -> bool:
    """A simple ``local@domain.tld`` shape check, not RFC 5322."""
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def is_integer(value: Any) -> bool:
    """True for ints and integral floats.  Booleans are not integers here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def validate_age(value: Any) -> bool:
    """An integer between 1 and 120 inclusive."""
    return is_integer(value) and MIN_AGE <= value <= MAX_AGE
