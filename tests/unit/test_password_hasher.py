from __future__ import annotations

import secrets

import pytest

from credential_auth.domain.auth.password_hash import (
    MalformedPasswordHashError,
    decode_password_hash,
)
from credential_auth.infrastructure.security.password_hasher import (
    BcryptKdfPasswordHasher,
    PasswordHashingConfig,
)

_FAST_CONFIG = PasswordHashingConfig(rounds=1)


def test_hash_password_never_stores_plaintext_and_verifies() -> None:
    hasher = BcryptKdfPasswordHasher(_FAST_CONFIG)
    password = "super-secret-password"

    password_hash = hasher.hash_password(password)

    assert password_hash != password
    assert password not in password_hash
    assert hasher.verify_password(password=password, password_hash=password_hash) is True


@pytest.mark.parametrize(
    ("stored_password", "candidate"),
    [
        ("correct", "wrong"),
        ("password", "password1"),
        ("password", "passwor"),
        ("password", "Password"),
        ("PASSWORD", "password"),
        ("secret ", "secret"),
        ("pässwörd", "passwörd"),
        ("pässwörd", "pa\u0308sswo\u0308rd"),
        ("a" * 72 + "x", "a" * 72 + "y"),
    ],
)
def test_wrong_password_fails_verification(stored_password: str, candidate: str) -> None:
    hasher = BcryptKdfPasswordHasher(_FAST_CONFIG)
    password_hash = hasher.hash_password(stored_password)

    assert hasher.verify_password(password=candidate, password_hash=password_hash) is False
    assert hasher.verify_password(password=stored_password, password_hash=password_hash) is True


@pytest.mark.parametrize("password", ["password", "pässwörd", "a", "with.dots.inside", " padded "])
def test_same_plaintext_hashes_differently_each_call(password: str) -> None:
    hasher = BcryptKdfPasswordHasher(_FAST_CONFIG)

    first = hasher.hash_password(password)
    second = hasher.hash_password(password)

    assert first != second
    assert hasher.verify_password(password=password, password_hash=first) is True
    assert hasher.verify_password(password=password, password_hash=second) is True


def test_random_plaintexts_hash_uniquely_without_leaking() -> None:
    hasher = BcryptKdfPasswordHasher(_FAST_CONFIG)
    seen: set[str] = set()

    for length in range(1, 33):
        password = f"pw-{secrets.token_urlsafe(length)}"
        first = hasher.hash_password(password)
        second = hasher.hash_password(password)

        assert first != second
        assert password not in first
        assert password not in second
        assert hasher.verify_password(password=password, password_hash=first) is True
        assert hasher.verify_password(password=password + "!", password_hash=first) is False
        assert first not in seen and second not in seen
        seen.update((first, second))


def test_hash_uses_salt_dot_hash_layout_with_configured_sizes() -> None:
    hasher = BcryptKdfPasswordHasher(PasswordHashingConfig(rounds=1, salt_bytes=8, key_bytes=24))

    password_hash = hasher.hash_password("password")
    salt, derived_key = password_hash.split(".")

    assert len(bytes.fromhex(salt)) == 8
    assert len(bytes.fromhex(derived_key)) == 24
    decoded = decode_password_hash(password_hash)
    assert decoded.salt.hex() == salt


def test_verification_depends_on_stored_salt() -> None:
    hasher = BcryptKdfPasswordHasher(_FAST_CONFIG)
    salt, derived_key = hasher.hash_password("password").split(".")
    other_salt, _ = hasher.hash_password("password").split(".")

    swapped = f"{other_salt}.{derived_key}"

    assert salt != other_salt
    assert hasher.verify_password(password="password", password_hash=swapped) is False


def test_empty_candidate_password_never_verifies() -> None:
    hasher = BcryptKdfPasswordHasher(_FAST_CONFIG)
    password_hash = hasher.hash_password("password")

    assert hasher.verify_password(password="", password_hash=password_hash) is False


def test_hash_password_rejects_empty_plaintext() -> None:
    hasher = BcryptKdfPasswordHasher(_FAST_CONFIG)

    with pytest.raises(ValueError):
        hasher.hash_password("")


@pytest.mark.parametrize(
    "stored",
    ["no-separator", "abcd.", ".abcd", "ab.cd.ef", "zz.abcd", "abcd.not-hex"],
)
def test_malformed_stored_hash_raises(stored: str) -> None:
    hasher = BcryptKdfPasswordHasher(_FAST_CONFIG)

    with pytest.raises(MalformedPasswordHashError):
        hasher.verify_password(password="password", password_hash=stored)


def test_cost_parameters_must_match_to_verify() -> None:
    password_hash = BcryptKdfPasswordHasher(PasswordHashingConfig(rounds=1)).hash_password("pw")
    other_cost = BcryptKdfPasswordHasher(PasswordHashingConfig(rounds=2))

    assert other_cost.verify_password(password="pw", password_hash=password_hash) is False
