"""
Profile validation at the store boundary.

Profiles arrive as plain dicts (JSON imports, seed files). They are checked
here before an ORM User is built from them.
"""

import re
from typing import Any, Dict, List, Tuple

from .database import User
from .roles import ROLE_VALUES

REQUIRED_STR_FIELDS = ["first_name", "email"]
OPTIONAL_STR_FIELDS = [
    "id",
    "last_name",
    "organization",
    "location",
]
LIST_FIELDS = ["tags", "interests"]

NAME_MAX_LENGTH = 100
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_str_list(v: Any) -> bool:
    return isinstance(v, list) and all(isinstance(item, str) for item in v)


def validate_profile(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    # null is allowed: it means "not set", which matters for the tags/interests fallback
    for f in LIST_FIELDS:
        if data.get(f) is not None and not _is_str_list(data[f]):
            errors.append(f"Field '{f}' must be a list of strings if provided")

    if "role" in data and data["role"] not in ROLE_VALUES:
        errors.append(f"Unknown role: {data['role']!r}")

    return errors


def validate_profile_strict(data: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """
    Basic validation plus email shape and name length checks.

    Returns:
        Tuple of (is_valid, errors)
    """
    errors = validate_profile(data)

    email = data.get("email")
    if _is_non_empty_str(email) and not _EMAIL_RE.match(email.strip()):
        errors.append(f"Field 'email' is not a valid address: {email!r}")

    for f in ("first_name", "last_name"):
        value = data.get(f)
        if isinstance(value, str) and len(value.strip()) > NAME_MAX_LENGTH:
            errors.append(f"Field '{f}' exceeds maximum length of {NAME_MAX_LENGTH}")

    return (len(errors) == 0, errors)


def profile_to_user(data: Dict[str, Any]) -> User:
    """Build a User from a validated profile dict. Unset tags/interests stay None."""
    user = User(
        first_name=data["first_name"].strip(),
        last_name=(data.get("last_name") or "").strip(),
        email=data["email"].strip(),
        organization=data.get("organization"),
        location=data.get("location"),
        tags=list(data["tags"]) if data.get("tags") is not None else None,
        interests=list(data["interests"]) if data.get("interests") is not None else None,
    )
    if data.get("id"):
        user.id = data["id"]
    if data.get("role"):
        user.role = data["role"]
    return user
