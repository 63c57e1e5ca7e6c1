import re
from typing import Any

from src.attendees.dtos import InvalidInputError

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_rsvp_input(
    name: Any, email: Any, phone: Any = None, plus_one: Any = None
) -> tuple[str, str, str | None, bool]:
    """Return cleaned (name, email, phone, plus_one) or raise InvalidInputError."""
    if not isinstance(name, str) or not isinstance(email, str):
        raise InvalidInputError("Name and email are required.")

    name = name.strip()
    email = email.strip()
    if not name or not email:
        raise InvalidInputError("Name and email are required.")

    if not EMAIL_REGEX.match(email):
        raise InvalidInputError("Invalid email format.")

    if phone is not None and not isinstance(phone, str):
        raise InvalidInputError("Phone must be a string.")

    if plus_one is not None and not isinstance(plus_one, bool):
        raise InvalidInputError("Plus one must be true or false.")

    return name, email, (phone.strip() or None) if phone else None, bool(plus_one)
