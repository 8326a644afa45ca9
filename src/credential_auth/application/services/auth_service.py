"""Application authentication service for signup and credential verification."""

from __future__ import annotations

import asyncio
import logging
from uuid import UUID

from credential_auth.application.ports.password_hasher_port import PasswordHasherPort
from credential_auth.application.ports.user_repository_port import (
    DuplicateUserEmailError,
    UserCreateInput,
    UserRecord,
    UserRepositoryPort,
)
from credential_auth.domain.auth.password_hash import MalformedPasswordHashError

logger = logging.getLogger(__name__)


class EmailInUseError(ValueError):
    """Raised when signup targets an email that already has an account."""

    def __init__(self, *, email: str) -> None:
        super().__init__(f"email in use: {email}")
        self.email = email


class UserNotFoundError(LookupError):
    """Raised when signin targets an email without an account."""

    def __init__(self, *, email: str) -> None:
        super().__init__(f"user not found: {email}")
        self.email = email


class InvalidCredentialsError(PermissionError):
    """Raised when the supplied password does not match the stored hash."""

    def __init__(self) -> None:
        super().__init__("invalid credentials")


class DuplicateAccountError(RuntimeError):
    """Raised when more than one stored account shares one email."""

    def __init__(self, *, email: str, count: int) -> None:
        super().__init__(f"{count} accounts share email: {email}")
        self.email = email
        self.count = count


class AuthService:
    """Enforce account uniqueness on signup and credential checks on signin."""

    def __init__(
        self,
        *,
        users: UserRepositoryPort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    async def signup(self, *, email: str, password: str) -> UserRecord:
        """Create one account for an unused email with a salted password hash."""

        existing = await self._users.find(email=email)
        if existing:
            logger.info("auth_signup_rejected reason=email_in_use")
            raise EmailInUseError(email=email)

        password_hash = await asyncio.to_thread(self._password_hasher.hash_password, password)

        try:
            user = await self._users.create(
                UserCreateInput(email=email, password_hash=password_hash)
            )
        except DuplicateUserEmailError as exc:
            logger.info("auth_signup_rejected reason=email_in_use_concurrent")
            raise EmailInUseError(email=email) from exc

        logger.info("auth_signup_created user_id=%s", user.user_id)
        return user

    async def signin(self, *, email: str, password: str) -> UserRecord:
        """Return the account matching email and password or raise."""

        matches = await self._users.find(email=email)
        if not matches:
            logger.info("auth_signin_rejected reason=user_not_found")
            raise UserNotFoundError(email=email)
        if len(matches) > 1:
            logger.error(
                "auth_signin_integrity_error reason=duplicate_accounts count=%s",
                len(matches),
            )
            raise DuplicateAccountError(email=email, count=len(matches))

        user = matches[0]
        try:
            is_valid = await asyncio.to_thread(
                self._verify_password,
                password,
                user.password_hash,
            )
        except MalformedPasswordHashError:
            logger.error(
                "auth_signin_integrity_error reason=malformed_password_hash user_id=%s",
                user.user_id,
            )
            raise
        if not is_valid:
            logger.info("auth_signin_rejected reason=invalid_credentials user_id=%s", user.user_id)
            raise InvalidCredentialsError()

        logger.info("auth_signin_succeeded user_id=%s", user.user_id)
        return user

    async def get_user(self, *, user_id: UUID) -> UserRecord | None:
        """Resolve one session user id to its stored account."""

        return await self._users.get_by_id(user_id=user_id)

    async def find_users(self, *, email: str) -> list[UserRecord]:
        """Return every stored account under one email."""

        return await self._users.find(email=email)

    def _verify_password(self, password: str, password_hash: str) -> bool:
        return self._password_hasher.verify_password(
            password=password,
            password_hash=password_hash,
        )
