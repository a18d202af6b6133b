from typing import List, Tuple
from userauth.core.errors import ValidationError
from userauth.schemas import UserPayload

LOGIN = "login"
CREATE = "create"

# (field, label) in the order they are checked; the first blank one wins
LOGIN_FIELDS: List[Tuple[str, str]] = [
    ("email", "Email"),
    ("password", "Password"),
]
CREATE_FIELDS: List[Tuple[str, str]] = [
    ("fname", "First Name"),
    ("lname", "Last Name"),
    ("email", "Email"),
    ("password", "Password"),
]


def prepare(payload: UserPayload) -> UserPayload:
    """Return a copy of the payload with whitespace stripped from every string field"""
    stripped = {
        name: value.strip() if isinstance(value, str) else value
        for name, value in payload.model_dump().items()
    }
    return UserPayload(**stripped)


def validate(payload: UserPayload, mode: str = CREATE) -> None:
    """
    Check required fields for the given mode.

    "login" needs email and password. Any other mode is treated as account
    creation and needs first name, last name, email and password.
    Raises ValidationError naming the first missing field.
    """
    fields = LOGIN_FIELDS if (mode or "").lower() == LOGIN else CREATE_FIELDS
    for name, label in fields:
        if not getattr(payload, name):
            raise ValidationError(f"{label} is required")
