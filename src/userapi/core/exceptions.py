"""Domain exceptions raised by the user operations."""


class UserApiError(Exception):
    """Base class for errors that map onto a client-facing response."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors
        super().__init__(self.message)


class UserNotFoundError(UserApiError):
    """No stored user has the requested id."""

    status_code = 404

    def __init__(self, user_id: int | None = None) -> None:
        self.user_id = user_id
        super().__init__("User not found")


class UserValidationError(UserApiError):
    """Submitted data broke a field rule or a uniqueness constraint."""

    status_code = 422

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__("The given data was invalid.", errors=errors)
