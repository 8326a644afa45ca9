"""Port for user store operations used by authentication services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """User persistence model."""

    user_id: UUID
    email: str
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class UserCreateInput:
    """Insert payload for one new user account."""

    email: str
    password_hash: str


class DuplicateUserEmailError(ValueError):
    """Raised when the store rejects a user whose email is already persisted."""


class UserRepositoryPort(Protocol):
    """User repository contract."""

    async def find(self, *, email: str) -> list[UserRecord]:
        """Return every user stored under the exact email."""

    async def create(self, payload: UserCreateInput) -> UserRecord:
        """Persist one user, assigning its id, and return the stored row."""

    async def get_by_id(self, *, user_id: UUID) -> UserRecord | None:
        """Return user by id or None."""
