"""Encoding rules for stored `<salt>.<hash>` password representations."""

from __future__ import annotations

from dataclasses import dataclass

PASSWORD_HASH_SEPARATOR = "."


class MalformedPasswordHashError(ValueError):
    """Raised when a persisted password hash does not parse into `salt.hash`."""


@dataclass(frozen=True)
class EncodedPasswordHash:
    """Decoded salt and derived key of one stored password hash."""

    salt: bytes
    derived_key: bytes

    def encode(self) -> str:
        """Render the storable `<salt-hex>.<key-hex>` string."""

        return f"{self.salt.hex()}{PASSWORD_HASH_SEPARATOR}{self.derived_key.hex()}"


def decode_password_hash(value: str) -> EncodedPasswordHash:
    """Parse one stored password hash or raise `MalformedPasswordHashError`."""

    parts = value.split(PASSWORD_HASH_SEPARATOR)
    if len(parts) != 2:
        raise MalformedPasswordHashError("password hash must contain exactly one separator")

    raw_salt, raw_key = parts
    if not raw_salt or not raw_key:
        raise MalformedPasswordHashError("password hash salt and key cannot be empty")

    try:
        salt = bytes.fromhex(raw_salt)
        derived_key = bytes.fromhex(raw_key)
    except ValueError as exc:
        raise MalformedPasswordHashError("password hash segments must be hex encoded") from exc

    return EncodedPasswordHash(salt=salt, derived_key=derived_key)
