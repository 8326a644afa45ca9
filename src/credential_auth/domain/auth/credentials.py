"""Shared normalization helpers for user credential inputs."""

from __future__ import annotations


def normalize_user_email(*, email: str) -> str:
    """Normalize one user email and reject blank values."""

    normalized = email.strip().lower()
    if not normalized:
        raise ValueError("email cannot be blank")
    return normalized


def require_user_password(*, password: str) -> str:
    """Reject blank plaintext passwords while keeping the value byte-exact."""

    if not password.strip():
        raise ValueError("password cannot be blank")
    return password
