from typing import Any

from loguru import logger
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from src.userapi.core.exceptions import UserNotFoundError, UserValidationError
from src.userapi.core.security import PasswordHasher, PasswordTooLongError
from src.userapi.entities.user import (
    User,
    UserCreate,
    UserRepository,
    UserStrictUpdate,
    UserUpdate,
)
from src.userapi.runtime.config.config_data import UsersConfig

# Attributes an update may not clear; a null for these is ignored.
_REQUIRED_FIELDS = ("first_name", "last_name", "username", "email")


def validation_errors_from(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic error messages by the top-level field they concern."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        errors.setdefault(field, []).append(error["msg"])
    return errors


class UserService:
    """Create, read, update and delete users.

    Each mutating operation commits its own transaction on the session it was
    given. Uniqueness of username and email is checked up front and enforced
    again by the storage unique indexes; a write that loses a race against a
    concurrent one is reported as the same field error.
    """

    def __init__(
        self,
        db_session: Session,
        password_hasher: PasswordHasher,
        users_config: UsersConfig | None = None,
    ):
        self._db_session = db_session
        self._password_hasher = password_hasher
        self._users_config = users_config or UsersConfig()
        self._user_repo = UserRepository(db_session)

    def list_users(self) -> list[User]:
        return self._user_repo.list_all()

    def get_user(self, user_id: int) -> User:
        user = self._user_repo.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def create_user(self, data: UserCreate) -> User:
        """Validate uniqueness, hash the password and persist a new user."""
        errors = self._uniqueness_errors(username=data.username, email=data.email)
        if errors:
            logger.warning("Rejected user creation: {} already taken", ", ".join(errors))
            raise UserValidationError(errors)

        new_user = User(
            first_name=data.first_name,
            last_name=data.last_name,
            username=data.username,
            email=data.email,
            password=self._hash_password(data.password),
            phone_no=data.phone_no,
        )

        try:
            created_user = self._user_repo.create(new_user)
            self._db_session.commit()
        except IntegrityError:
            self._db_session.rollback()
            errors = self._uniqueness_errors(username=data.username, email=data.email)
            if not errors:
                raise
            logger.warning(
                "Rejected user creation on concurrent write: {} already taken",
                ", ".join(errors),
            )
            raise UserValidationError(errors) from None

        logger.info("User {} created", created_user.id)
        return created_user

    def update_user(self, user_id: int, data: UserUpdate) -> User:
        """Apply the supplied fields of `data` to an existing user.

        Absent fields are left alone. A null for a required attribute is
        ignored, a null phone number clears it, and an empty or missing
        password keeps the current hash.
        """
        current = self.get_user(user_id)

        changes = self._collect_changes(data)
        password = changes.pop("password", None)

        if self._users_config.strict_update_validation:
            self._validate_strictly(user_id, changes, password)

        if password:
            changes["password"] = self._hash_password(password)

        candidate = current.model_copy(update=changes)
        try:
            updated_user = self._user_repo.update(candidate)
            self._db_session.commit()
        except IntegrityError:
            self._db_session.rollback()
            errors = self._uniqueness_errors(
                username=changes.get("username"),
                email=changes.get("email"),
                exclude_id=user_id,
            )
            if not errors:
                raise
            logger.warning(
                "Rejected update of user {}: {} already taken",
                user_id,
                ", ".join(errors),
            )
            raise UserValidationError(errors) from None

        logger.info("User {} updated ({})", user_id, ", ".join(sorted(changes)) or "no fields")
        return updated_user

    def delete_user(self, user_id: int) -> None:
        if not self._user_repo.delete(user_id):
            raise UserNotFoundError(user_id)
        self._db_session.commit()
        logger.info("User {} deleted", user_id)

    def _hash_password(self, password: str) -> str:
        try:
            return self._password_hasher.hash(password)
        except PasswordTooLongError as exc:
            raise UserValidationError({"password": [str(exc)]}) from None

    @staticmethod
    def _collect_changes(data: UserUpdate) -> dict[str, Any]:
        changes = data.model_dump(exclude_unset=True)
        for field in _REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                del changes[field]
        return changes

    def _validate_strictly(
        self, user_id: int, changes: dict[str, Any], password: str | None
    ) -> None:
        payload = dict(changes)
        if password:
            payload["password"] = password

        try:
            validated = UserStrictUpdate.model_validate(payload)
        except ValidationError as exc:
            raise UserValidationError(validation_errors_from(exc)) from None

        # Normalized values replace the raw ones.
        for field, value in validated.model_dump(exclude_unset=True).items():
            if field != "password":
                changes[field] = value

        errors = self._uniqueness_errors(
            username=changes.get("username"),
            email=changes.get("email"),
            exclude_id=user_id,
        )
        if errors:
            logger.warning(
                "Rejected update of user {}: {} already taken",
                user_id,
                ", ".join(errors),
            )
            raise UserValidationError(errors)

    def _uniqueness_errors(
        self,
        username: str | None = None,
        email: str | None = None,
        exclude_id: int | None = None,
    ) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}

        if username is not None:
            owner = self._user_repo.get_by_username(username)
            if owner is not None and owner.id != exclude_id:
                errors["username"] = ["The username has already been taken."]

        if email is not None:
            owner = self._user_repo.get_by_email(email)
            if owner is not None and owner.id != exclude_id:
                errors["email"] = ["The email has already been taken."]

        return errors
