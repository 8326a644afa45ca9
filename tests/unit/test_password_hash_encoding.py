from __future__ import annotations

import pytest

from credential_auth.domain.auth.password_hash import (
    EncodedPasswordHash,
    MalformedPasswordHashError,
    decode_password_hash,
)


def test_encode_joins_hex_salt_and_key_with_dot() -> None:
    encoded = EncodedPasswordHash(salt=b"\x00\x01", derived_key=b"\xff\x10").encode()

    assert encoded == "0001.ff10"


def test_decode_recovers_salt_and_key_bytes() -> None:
    decoded = decode_password_hash("0001.ff10")

    assert decoded == EncodedPasswordHash(salt=b"\x00\x01", derived_key=b"\xff\x10")


def test_decode_missing_separator_raises() -> None:
    with pytest.raises(MalformedPasswordHashError, match="exactly one separator"):
        decode_password_hash("0001ff10")


def test_decode_non_hex_hash_segment_raises_value_error_subclass() -> None:
    with pytest.raises(ValueError, match="hex encoded"):
        decode_password_hash("0001.xyz0")
