# app/models/rules.py
"""
Reusable field rules for request and storage schemas.

Each rule takes the raw value and either returns the normalised value or
raises ValueError with the message the client will see. Optional variants
accept None so the same rule serves create (required) and update (partial)
schemas.
"""
import re
from typing import Any, Iterable, Optional

OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")
PHONE_RE = re.compile(r"^\d{10,15}$")
EMAIL_RE = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.\w{2,}$")
PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,50}$")


def is_object_id(value: Any) -> bool:
    return isinstance(value, str) and bool(OBJECT_ID_RE.match(value))


def required_text(value: Any, label: str, max_length: int) -> str:
    if value is None:
        raise ValueError(f"{label} is required")
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    return value


def non_empty_text(value: Any, label: str, max_length: int) -> Optional[str]:
    """Partial-update twin of required_text: absent is fine, blank is not."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        raise ValueError(f"{label} cannot be empty")
    return required_text(value, label, max_length)


def optional_text(value: Any, label: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    value = value.strip()
    if len(value) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    return value or None


def phone(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not PHONE_RE.match(value):
        raise ValueError("Please enter a valid phone number (10-15 digits)")
    return value


def email(value: Any, required: bool = False) -> Optional[str]:
    if value is None:
        if required:
            raise ValueError("Email is required")
        return None
    if not isinstance(value, str) or not EMAIL_RE.match(value.strip()):
        raise ValueError("Please enter a valid email")
    return value.strip().lower()


def one_of(value: Any, allowed: Iterable[str], label: str) -> Optional[str]:
    """Case-sensitive enum membership."""
    if value is None:
        return None
    allowed = tuple(allowed)
    if value not in allowed:
        raise ValueError(f"{label} must be one of: {', '.join(allowed)}")
    return value


def object_id(value: Any, label: str) -> Optional[str]:
    if value is None:
        return None
    if not is_object_id(value):
        raise ValueError(f"Invalid {label} ID format")
    return value


def non_negative(value: Any, label: str):
    if value is not None and value < 0:
        raise ValueError(f"{label} cannot be negative")
    return value


def at_least(value: Any, floor: Any, label: str, floor_label: str):
    """Cross-field rule: value must not be below another field's value."""
    if value is not None and floor is not None and value < floor:
        raise ValueError(f"{label} must be greater than or equal to {floor_label}")
    return value


def differs_from(value: Any, other: Any, message: str):
    """Cross-field rule: two references must not point at the same thing."""
    if value is not None and other is not None and value == other:
        raise ValueError(message)
    return value


def matches(value: Any, other: Any, message: str):
    """Cross-field rule: a confirmation field must equal its original."""
    if value != other:
        raise ValueError(message)
    return value


def min_value(value: Any, floor: Any, label: str):
    if value is not None and value < floor:
        raise ValueError(f"{label} must be at least {floor}")
    return value


def non_empty_list(value: Any, label: str):
    if value is None or (isinstance(value, list) and not value):
        raise ValueError(f"At least one {label} is required")
    return value


def password(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) or not PASSWORD_RE.match(value):
        raise ValueError(
            "Password must be 8-50 characters with at least one lowercase letter, "
            "one uppercase letter, one number and one special character (@$!%*?&)"
        )
    return value


def search_term(value: Any, min_length: int = 2) -> str:
    if value is None or not str(value).strip():
        raise ValueError("Search term is required")
    value = str(value).strip()
    if len(value) < min_length:
        raise ValueError(f"Search term must be at least {min_length} characters")
    return value


def required_value(value: Any, label: str):
    """Presence check for non-text fields; type coercion happens afterwards."""
    if value is None:
        raise ValueError(f"{label} is required")
    return value
