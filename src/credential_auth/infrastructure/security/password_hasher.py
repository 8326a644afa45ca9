"""Bcrypt-pbkdf password hasher adapter producing `<salt>.<hash>` strings."""

from __future__ import annotations

import hmac
import secrets
from dataclasses import dataclass

import bcrypt

from credential_auth.application.ports.password_hasher_port import PasswordHasherPort
from credential_auth.domain.auth.password_hash import (
    EncodedPasswordHash,
    MalformedPasswordHashError,
    decode_password_hash,
)

_MAX_DERIVED_KEY_BYTES = 512


@dataclass(frozen=True)
class PasswordHashingConfig:
    """Process-wide KDF cost and sizing parameters."""

    rounds: int = 64
    salt_bytes: int = 16
    key_bytes: int = 32


class BcryptKdfPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using the bcrypt-pbkdf key-derivation function."""

    def __init__(self, config: PasswordHashingConfig | None = None) -> None:
        self._config = config or PasswordHashingConfig()

    def hash_password(self, password: str) -> str:
        if not password:
            raise ValueError("password cannot be empty")

        salt = secrets.token_bytes(self._config.salt_bytes)
        derived_key = self._derive_key(
            password=password,
            salt=salt,
            key_bytes=self._config.key_bytes,
        )
        return EncodedPasswordHash(salt=salt, derived_key=derived_key).encode()

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        stored = decode_password_hash(password_hash)
        if len(stored.derived_key) > _MAX_DERIVED_KEY_BYTES:
            raise MalformedPasswordHashError("password hash key is too long")
        if not password:
            return False

        candidate = self._derive_key(
            password=password,
            salt=stored.salt,
            key_bytes=len(stored.derived_key),
        )
        return hmac.compare_digest(candidate, stored.derived_key)

    def _derive_key(self, *, password: str, salt: bytes, key_bytes: int) -> bytes:
        # Settings enforce the 50-round floor; lower costs arrive only via an
        # explicitly injected PasswordHashingConfig.
        return bcrypt.kdf(
            password=password.encode("utf-8"),
            salt=salt,
            desired_key_bytes=key_bytes,
            rounds=self._config.rounds,
            ignore_few_rounds=True,
        )
