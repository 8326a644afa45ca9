"""SQLAlchemy adapter for the user store."""

from __future__ import annotations

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from credential_auth.application.ports.user_repository_port import (
    DuplicateUserEmailError,
    UserCreateInput,
    UserRecord,
    UserRepositoryPort,
)
from credential_auth.infrastructure.db.metadata import users

_USER_COLUMNS = (
    users.c.id,
    users.c.email,
    users.c.password_hash,
    users.c.created_at,
)


def _is_duplicate_email_error(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "email" in message


class SqlAlchemyUserRepository(UserRepositoryPort):
    """User repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find(self, *, email: str) -> list[UserRecord]:
        """Return every user stored under the exact email."""

        statement = (
            sa.select(*_USER_COLUMNS)
            .where(users.c.email == email)
            .order_by(users.c.created_at, users.c.id)
        )

        async with self._session_factory() as session:
            result = await session.execute(statement)

        return [_to_user_record(row) for row in result.mappings().all()]

    async def create(self, payload: UserCreateInput) -> UserRecord:
        """Insert one user row and return the persisted record."""

        statement = (
            sa.insert(users)
            .values(
                id=uuid4(),
                email=payload.email,
                password_hash=payload.password_hash,
            )
            .returning(*_USER_COLUMNS)
        )

        async with self._session_factory() as session:
            try:
                result = await session.execute(statement)
                await session.commit()
            except IntegrityError as error:
                await session.rollback()
                if _is_duplicate_email_error(error):
                    raise DuplicateUserEmailError("Duplicate users.email") from error
                raise

        row = result.mappings().one()
        return _to_user_record(row)

    async def get_by_id(self, *, user_id: UUID) -> UserRecord | None:
        """Return user by id or None."""

        statement = sa.select(*_USER_COLUMNS).where(users.c.id == user_id).limit(1)

        async with self._session_factory() as session:
            result = await session.execute(statement)

        row = result.mappings().first()
        if row is None:
            return None
        return _to_user_record(row)


def _to_user_record(row: sa.RowMapping) -> UserRecord:
    raw_user_id = row["id"]
    user_id = raw_user_id if isinstance(raw_user_id, UUID) else UUID(str(raw_user_id))
    return UserRecord(
        user_id=user_id,
        email=cast(str, row["email"]),
        password_hash=cast(str, row["password_hash"]),
        created_at=cast(datetime, row["created_at"]),
    )
