"""Password hashing for stored user credentials."""

from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher
from pwdlib.hashers.bcrypt import BcryptHasher

from src.userapi.runtime.config.config_data import SecurityConfig
from src.userapi.runtime.context import get_config

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordTooLongError(ValueError):
    """The password exceeds what the configured algorithm can hash."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__(f"Password must be at most {max_bytes} bytes long")


class PasswordHasher:
    """One-way password hashing backed by pwdlib.

    Hashes are salted, so hashing the same plaintext twice yields different
    strings; use `verify` to compare. Hashes produced by the other supported
    algorithm still verify, which keeps switching algorithms non-breaking.
    """

    def __init__(self, algorithm: str = "argon2"):
        if algorithm == "argon2":
            hashers = (Argon2Hasher(), BcryptHasher())
            self.max_password_bytes: int | None = None
        elif algorithm == "bcrypt":
            hashers = (BcryptHasher(), Argon2Hasher())
            self.max_password_bytes = BCRYPT_MAX_PASSWORD_BYTES
        else:
            raise ValueError(f"Unsupported password hashing algorithm: {algorithm}")

        self.algorithm = algorithm
        self._password_hash = PasswordHash(hashers)

    def hash(self, password: str) -> str:
        """Return a salted one-way hash of `password`.

        Raises:
            PasswordTooLongError: If the algorithm cannot hash a password this long.
        """
        if (
            self.max_password_bytes is not None
            and len(password.encode("utf-8")) > self.max_password_bytes
        ):
            raise PasswordTooLongError(self.max_password_bytes)
        return self._password_hash.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Check `password` against a stored hash."""
        return self._password_hash.verify(password, hashed)

    @classmethod
    def from_config(cls, config: SecurityConfig | None = None) -> "PasswordHasher":
        if config is None:
            config = get_config().security
        return cls(config.password_hasher)
