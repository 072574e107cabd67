"""Tests for Argon2 password hashing."""

import pytest
from passlib.hash import pbkdf2_sha256

from blog_api.managers.password_manager import (
    PasswordHasher,
    hash_password,
    verify_and_update_password,
)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(level="low")


class TestPasswordHasher:
    def test_hash_is_argon2_and_not_plaintext(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("password123")

        assert hashed.startswith("$argon2id$")
        assert "password123" not in hashed

    def test_hash_is_salted(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("password123") != hasher.hash("password123")

    def test_verify(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("password123")

        assert hasher.verify("password123", hashed)
        assert not hasher.verify("wrong-password", hashed)

    def test_empty_password_rejected(self, hasher: PasswordHasher) -> None:
        with pytest.raises(ValueError, match="empty"):
            hasher.hash("")

    def test_verify_blank_hash_is_false(self, hasher: PasswordHasher) -> None:
        assert not hasher.verify("password123", "  ")

    def test_verify_unknown_hash_format_is_false(self, hasher: PasswordHasher) -> None:
        assert not hasher.verify("password123", "plain-text-not-a-hash")


class TestVerifyAndUpdate:
    def test_missing_hash_fails(self, hasher: PasswordHasher) -> None:
        assert hasher.verify_and_update("password123", None) == (False, None)

    def test_current_hash_not_upgraded(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("password123")
        assert hasher.verify_and_update("password123", hashed) == (True, None)

    def test_wrong_password_not_upgraded(self, hasher: PasswordHasher) -> None:
        legacy = pbkdf2_sha256.hash("password123")
        assert hasher.verify_and_update("wrong-password", legacy) == (False, None)

    def test_deprecated_scheme_upgraded(self, hasher: PasswordHasher) -> None:
        legacy = pbkdf2_sha256.hash("password123")

        is_valid, new_hash = hasher.verify_and_update("password123", legacy)

        assert is_valid
        assert new_hash is not None
        assert new_hash.startswith("$argon2id$")
        assert hasher.verify("password123", new_hash)


@pytest.mark.asyncio
async def test_async_helpers_round_trip() -> None:
    hashed = await hash_password("password123")

    assert await verify_and_update_password("password123", hashed) == (True, None)
    assert await verify_and_update_password("nope-nope", hashed) == (False, None)
