"""Tests for PasswordHasher."""

import pytest

from src.userapi.core.security import PasswordHasher, PasswordTooLongError
from src.userapi.runtime.config.config_data import SecurityConfig

HASH_PREFIXES = {"argon2": "$argon2", "bcrypt": "$2b$"}


class TestPasswordHasher:
    def test_hash_is_not_plaintext(self, password_hasher):
        hashed = password_hasher.hash("secret1")

        assert hashed != "secret1"
        assert hashed.startswith(HASH_PREFIXES[password_hasher.algorithm])

    def test_verify_matches_only_original(self, password_hasher):
        hashed = password_hasher.hash("secret1")

        assert password_hasher.verify("secret1", hashed) is True
        assert password_hasher.verify("secret2", hashed) is False

    def test_hashes_are_salted(self, password_hasher):
        assert password_hasher.hash("secret1") != password_hasher.hash("secret1")

    def test_bcrypt_algorithm(self):
        hasher = PasswordHasher("bcrypt")
        hashed = hasher.hash("secret1")

        assert hashed.startswith("$2b$")
        assert hasher.verify("secret1", hashed)

    def test_hashes_from_other_algorithm_still_verify(self, password_hasher):
        bcrypt_hash = PasswordHasher("bcrypt").hash("secret1")

        assert password_hasher.verify("secret1", bcrypt_hash)

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(ValueError, match="Unsupported"):
            PasswordHasher("md5")

    def test_from_config(self):
        hasher = PasswordHasher.from_config(SecurityConfig(password_hasher="bcrypt"))

        assert hasher.algorithm == "bcrypt"

    def test_bcrypt_rejects_password_over_72_bytes(self):
        with pytest.raises(PasswordTooLongError) as exc_info:
            PasswordHasher("bcrypt").hash("x" * 80)

        assert exc_info.value.max_bytes == 72

    def test_bcrypt_limit_counts_bytes_not_characters(self):
        hasher = PasswordHasher("bcrypt")

        assert hasher.verify("é" * 36, hasher.hash("é" * 36))
        with pytest.raises(PasswordTooLongError):
            hasher.hash("é" * 37)

    def test_argon2_hashes_long_passwords(self):
        hasher = PasswordHasher("argon2")
        hashed = hasher.hash("x" * 80)

        assert hasher.verify("x" * 80, hashed)
