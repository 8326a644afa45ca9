"""Session cookie resolution for authenticated routes."""

from __future__ import annotations

from credential_auth.application.ports.user_repository_port import UserRecord
from credential_auth.application.services.auth_service import AuthService
from credential_auth.infrastructure.http.session_cookie import SessionCookieCodec


class NotAuthenticatedError(PermissionError):
    """Raised when a request carries no valid session for a stored user."""


class SessionAuthGuard:
    """Resolve the session's current user id to a persisted user record."""

    def __init__(self, *, auth_service: AuthService, session_codec: SessionCookieCodec) -> None:
        self._auth_service = auth_service
        self._session_codec = session_codec

    async def current_user(self, *, session_token: str | None) -> UserRecord:
        """Return the signed-in user or raise `NotAuthenticatedError`."""

        user_id = self._session_codec.read(session_token)
        if user_id is None:
            raise NotAuthenticatedError("not authenticated")

        user = await self._auth_service.get_user(user_id=user_id)
        if user is None:
            raise NotAuthenticatedError("not authenticated")
        return user
