"""
Input sanitization - normalize raw request values before validation.
All helpers are pure and never raise; callers decide what is valid.
"""

import math
import re
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyUrl, TypeAdapter, ValidationError

MAX_STRING_LENGTH = 500

_ANGLE_BRACKETS = re.compile(r"[<>]")
_STRONG_PASSWORD = re.compile(r"^(?=.*[A-Z])(?=.*\d).{6,}$")
_url_adapter = TypeAdapter(AnyUrl)


def sanitize_string(value: Any) -> str:
    """Trim, drop angle brackets, cap at 500 chars. Non-strings become ''."""
    if not isinstance(value, str):
        return ""
    return _ANGLE_BRACKETS.sub("", value.strip())[:MAX_STRING_LENGTH]


def sanitize_email(value: Any) -> str:
    """Trim and lowercase. Format is checked separately (is_valid_email)."""
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def parse_number(value: Any) -> float | None:
    """Coerce to a finite float, or None when the value is not a number.

    Booleans are rejected even though they are ints in Python.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def sanitize_number(value: Any) -> float:
    """Numeric coercion that falls back to 0. Prefer parse_number for validation."""
    number = parse_number(value)
    return 0.0 if number is None else number


def sanitize_url(value: Any) -> str:
    """Return the canonical absolute URL, or '' if it does not parse."""
    if not isinstance(value, str):
        return ""
    try:
        return str(_url_adapter.validate_python(value.strip()))
    except ValidationError:
        return ""


def is_url(value: Any) -> bool:
    return sanitize_url(value) != ""


def is_valid_email(value: str) -> bool:
    """Syntax-only email check (no DNS lookups). Allows the reserved .test TLD."""
    if not value:
        return False
    try:
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        return False
    return True


def is_strong_password(value: str) -> bool:
    """At least 6 characters, one uppercase letter and one digit."""
    return bool(_STRONG_PASSWORD.match(value))
