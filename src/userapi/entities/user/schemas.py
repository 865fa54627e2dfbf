"""Input models accepted by the user operations.

`UserCreate` carries the full creation rules. `UserUpdate` is the permissive
partial shape used by default for updates, and `UserStrictUpdate` re-applies
the creation rules to whichever fields an update supplies.
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, EmailStr, Field

MAX_LENGTH = 255
MIN_PASSWORD_LENGTH = 6
MAX_PHONE_LENGTH = 20


def _strip(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def _require_content(value: str) -> str:
    if not value:
        raise ValueError("must not be blank")
    return value


def _check_email_length(value: str) -> str:
    if len(value) > MAX_LENGTH:
        raise ValueError(f"must be at most {MAX_LENGTH} characters")
    return value


def _empty_to_none(value: str | None) -> str | None:
    return value or None


# Passwords are never stripped.
RequiredText = Annotated[
    str,
    BeforeValidator(_strip),
    Field(max_length=MAX_LENGTH),
    AfterValidator(_require_content),
]
Email = Annotated[
    EmailStr,
    BeforeValidator(_strip),
    AfterValidator(_check_email_length),
]
Password = Annotated[str, Field(min_length=MIN_PASSWORD_LENGTH)]
Phone = Annotated[
    Annotated[str, BeforeValidator(_strip), Field(max_length=MAX_PHONE_LENGTH)]
    | None,
    AfterValidator(_empty_to_none),
]


class UserCreate(BaseModel):
    """Payload for creating a user."""

    first_name: RequiredText
    last_name: RequiredText
    username: RequiredText
    email: Email
    password: Password
    phone_no: Phone = None


class UserUpdate(BaseModel):
    """Partial update payload.

    Every field is optional. An explicit null for a required attribute means
    "leave unchanged", and an empty password means the same.
    """

    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    email: str | None = None
    password: str | None = None
    phone_no: str | None = None


class UserStrictUpdate(BaseModel):
    """Creation rules applied to the fields present in an update."""

    first_name: RequiredText | None = None
    last_name: RequiredText | None = None
    username: RequiredText | None = None
    email: Email | None = None
    password: Password | None = None
    phone_no: Phone = None
