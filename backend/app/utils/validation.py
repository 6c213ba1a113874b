"""
Validation utilities for registration/login input.
"""
import re
from typing import Any

from ..models.user import USER_ROLES
from .error_handlers import ValidationError

_EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


def normalize_email(email: str | None) -> str:
    """Trimmed, lowercased email. Only presence is checked."""
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required")
    return email.strip().lower()


def validate_email(email: str | None) -> str:
    """Validate email format."""
    email = normalize_email(email)
    if len(email) > 255:
        raise ValidationError("Email too long (max 255 characters)")

    if not re.match(_EMAIL_PATTERN, email):
        raise ValidationError("Invalid email format")

    return email


def validate_string_field(
    value: Any,
    field_name: str,
    max_length: int = 255,
    required: bool = True,
) -> str | None:
    """Validate a string field with common rules."""
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required")
        return None

    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")

    value = value.strip()

    if required and not value:
        raise ValidationError(f"{field_name} cannot be empty")

    if len(value) > max_length:
        raise ValidationError(f"{field_name} must not exceed {max_length} characters")

    return value


def validate_password(password: str | None) -> str:
    # No strength policy: any non-empty password is accepted.
    if not password or not isinstance(password, str):
        raise ValidationError("Password is required")
    return password


def validate_role(role: str | None) -> str:
    """Validate user role."""
    if not role or not isinstance(role, str):
        raise ValidationError("Role is required")

    role = role.strip().lower()
    if role not in USER_ROLES:
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(USER_ROLES)}")

    return role
