"""
Input validation functions for TinySteps.

All validation functions follow the pattern:
1. Accept raw user input (string, int, etc.)
2. Normalize/clean the input
3. Validate against business rules
4. Return cleaned value or raise ValidationError

Every check runs before a service mints an id or adds a row.
"""

from collections.abc import Sequence
from typing import Any

from tinysteps.core.exceptions import ValidationError

MIN_AGE_MONTHS = 36
MAX_AGE_MONTHS = 71


# ============================================================================
# Login Identity
# ============================================================================


def normalize_email(email: Any) -> str | None:
    """Lowercase and trim an email; non-strings and blanks become None."""
    if not isinstance(email, str):
        return None
    cleaned = email.strip().lower()
    return cleaned or None


def normalize_phone(phone: Any) -> str | None:
    """Trim a phone number; non-strings and blanks become None."""
    if not isinstance(phone, str):
        return None
    cleaned = phone.strip()
    return cleaned or None


def build_login_key(email: Any, phone: Any) -> str:
    """
    Build the lookup key a parent signs in with.

    Email takes priority over phone when both are supplied.

    Examples:
        >>> build_login_key(" A@X.com ", None)
        'email:a@x.com'
        >>> build_login_key(None, " +6591234567 ")
        'phone:+6591234567'

    Raises:
        ValidationError: If neither email nor phone is usable
    """
    normalized_email = normalize_email(email)
    if normalized_email:
        return f"email:{normalized_email}"

    normalized_phone = normalize_phone(phone)
    if normalized_phone:
        return f"phone:{normalized_phone}"

    raise ValidationError("Provide email or phone.")


# ============================================================================
# Child Profile
# ============================================================================


def validate_display_name(name: Any) -> str:
    """
    Validate a child's display name.

    Raises:
        ValidationError: If name is missing or blank
    """
    cleaned = name.strip() if isinstance(name, str) else ""
    if not cleaned:
        raise ValidationError("display_name is required.")
    if len(cleaned) > 100:
        raise ValidationError("display_name cannot exceed 100 characters.")
    return cleaned


def validate_age_months(age: Any) -> int:
    """
    Validate child age in months.

    Accepts integers, integral floats and digit strings.

    Returns:
        Age as integer within [36, 71]

    Raises:
        ValidationError: If age is missing, not a whole number or out of range
    """
    message = f"age_months must be between {MIN_AGE_MONTHS} and {MAX_AGE_MONTHS}."

    # bool is an int subclass; True must not pass as 1
    if age is None or isinstance(age, bool):
        raise ValidationError(message)

    if isinstance(age, str):
        age = age.strip()
        if not age.isdigit():
            raise ValidationError(message)
        age = int(age)
    elif isinstance(age, float):
        if not age.is_integer():
            raise ValidationError(message)
        age = int(age)
    elif not isinstance(age, int):
        raise ValidationError(message)

    if age < MIN_AGE_MONTHS or age > MAX_AGE_MONTHS:
        raise ValidationError(message)

    return age


def validate_home_language(language: Any) -> str:
    """
    Validate the language spoken at home.

    Raises:
        ValidationError: If language is missing or blank
    """
    cleaned = language.strip() if isinstance(language, str) else ""
    if not cleaned:
        raise ValidationError("home_language is required.")
    return cleaned


def normalize_avatar_id(avatar_id: Any, allowed: Sequence[str]) -> str:
    """Return the avatar if it is one of ``allowed``, otherwise the first allowed id."""
    if isinstance(avatar_id, str) and avatar_id.strip() in allowed:
        return avatar_id.strip()
    return allowed[0]


# ============================================================================
# Session Completion
# ============================================================================


def clean_activity_ids(values: Any) -> list[str]:
    """Keep only the string entries of a completed-activity list."""
    if not isinstance(values, list | tuple):
        return []
    return [value for value in values if isinstance(value, str)]
