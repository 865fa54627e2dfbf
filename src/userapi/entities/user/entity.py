"""User domain entity."""

from typing import Any

from pydantic import Field

from src.userapi.entities._base import Entity


class User(Entity):
    """User entity representing a person in the system.

    This is the plain data shape handed between the repository, the service
    and the HTTP layer. `password` always carries the stored one-way hash,
    never the plaintext.
    """

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    username: str = Field(description="Unique login name")
    email: str = Field(description="Unique email address")
    password: str = Field(description="One-way hash of the user's password")
    phone_no: str | None = Field(default=None, description="User's phone number")

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.username == other.username
            and self.email == other.email
            and self.password == other.password
            and self.phone_no == other.phone_no
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.first_name,
            self.last_name,
            self.username,
            self.email,
            self.password,
            self.phone_no,
        ))
