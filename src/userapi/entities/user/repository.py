"""User repository for data access operations."""

from sqlmodel import Session, select

from src.userapi.entities._base import utc_now

from .entity import User
from .table import UserTable


class UserRepository:
    """Repository for User entity data access operations.

    Rows are converted to `User` entities at this boundary so callers never
    hold a session-bound table object. Nothing here commits; the caller owns
    the transaction.
    """

    def __init__(self, session: Session):
        self._session = session

    def get(self, user_id: int) -> User | None:
        """Get user by ID."""
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def get_by_username(self, username: str) -> User | None:
        """Get user by username."""
        statement = select(UserTable).where(UserTable.username == username)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        statement = select(UserTable).where(UserTable.email == email)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def list_all(self) -> list[User]:
        """List all users in ascending id order."""
        statement = select(UserTable).order_by(UserTable.id)
        rows = self._session.exec(statement).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def create(self, user: User) -> User:
        """Persist a new user and return it with its assigned id.

        Raises:
            sqlalchemy.exc.IntegrityError: If a unique index rejects the row.
        """
        row = UserTable.model_validate(user.model_dump(exclude={"id"}))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def update(self, user: User) -> User:
        """Write every attribute of `user` to its stored row.

        Raises:
            ValueError: If no row exists for `user.id`.
            sqlalchemy.exc.IntegrityError: If a unique index rejects the row.
        """
        row = self._session.get(UserTable, user.id)
        if row is None:
            raise ValueError(f"User {user.id} not found")

        for field, value in user.model_dump(
            exclude={"id", "created_at", "updated_at"}
        ).items():
            setattr(row, field, value)
        row.updated_at = utc_now()

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def delete(self, user_id: int) -> bool:
        """Delete user by ID. Returns True if a row was removed."""
        row = self._session.get(UserTable, user_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
