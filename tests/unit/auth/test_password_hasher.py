"""Unit tests for the Argon2 password hasher."""

import pytest

from taskbase.core.exceptions import HashingError
from taskbase.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    PasswordHasher,
    hash_password,
    needs_rehash,
    verify_password,
)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher()


def test_hash_produces_argon2id_string(hasher):
    """Test that hashes use the argon2id encoding."""
    hashed = hasher.hash("Password123")

    assert hashed.startswith("$argon2id$")
    assert "Password123" not in hashed


def test_verify_accepts_correct_password(hasher):
    hashed = hasher.hash("Password123")

    assert hasher.verify("Password123", hashed) is True


def test_verify_rejects_wrong_password(hasher):
    """A mismatch is a normal False, not an error."""
    hashed = hasher.hash("Password123")

    assert hasher.verify("Password124", hashed) is False
    assert hasher.verify("", hashed) is False


def test_same_password_hashes_differently(hasher):
    """Test that each hash gets a fresh salt."""
    first = hasher.hash("Password123")
    second = hasher.hash("Password123")

    assert first != second
    assert hasher.verify("Password123", first)
    assert hasher.verify("Password123", second)


def test_verify_malformed_hash_raises_hashing_error(hasher):
    with pytest.raises(HashingError):
        hasher.verify("Password123", "not-a-valid-hash")


def test_verify_empty_hash_raises_hashing_error(hasher):
    with pytest.raises(HashingError):
        hasher.verify("Password123", "")


def test_needs_rehash_false_for_current_parameters(hasher):
    assert hasher.needs_rehash(hasher.hash("Password123")) is False


def test_dummy_hash_never_matches_user_passwords():
    assert DUMMY_PASSWORD_HASH.startswith("$argon2id$")
    assert verify_password("Password123", DUMMY_PASSWORD_HASH) is False


def test_module_level_helpers_round_trip():
    hashed = hash_password("Secret99Pass")

    assert verify_password("Secret99Pass", hashed) is True
    assert needs_rehash(hashed) is False


@pytest.mark.asyncio
async def test_async_wrappers(hasher):
    """Test hashing and verification on a worker thread."""
    hashed = await hasher.hash_async("Password123")

    assert await hasher.verify_async("Password123", hashed) is True
    assert await hasher.verify_async("WrongPass1", hashed) is False


@pytest.mark.asyncio
async def test_async_verify_propagates_hashing_error(hasher):
    with pytest.raises(HashingError):
        await hasher.verify_async("Password123", "$argon2id$broken")
