"""Signed session cookie codec carrying the current user id."""

from __future__ import annotations

from uuid import UUID

from itsdangerous import BadData, URLSafeTimedSerializer

DEFAULT_SESSION_COOKIE_NAME = "auth_session"
DEFAULT_SESSION_MAX_AGE_SECONDS = 8 * 60 * 60
_SESSION_SALT = "credential-auth.session.v1"


class SessionCookieCodec:
    """Sign and read the user id stored in the session cookie."""

    def __init__(
        self,
        *,
        secret_key: str,
        cookie_name: str = DEFAULT_SESSION_COOKIE_NAME,
        max_age_seconds: int = DEFAULT_SESSION_MAX_AGE_SECONDS,
        secure: bool = False,
    ) -> None:
        if not secret_key:
            raise ValueError("session secret key cannot be blank")
        self._serializer = URLSafeTimedSerializer(secret_key=secret_key, salt=_SESSION_SALT)
        self.cookie_name = cookie_name
        self.max_age_seconds = max_age_seconds
        self.secure = secure

    def sign(self, user_id: UUID) -> str:
        """Return a signed, timestamped token for one user id."""

        return self._serializer.dumps({"uid": str(user_id)})

    def read(self, token: str | None) -> UUID | None:
        """Return the user id in a valid token, or None when absent or invalid."""

        if not token:
            return None
        try:
            data = self._serializer.loads(token, max_age=self.max_age_seconds)
        except BadData:
            return None

        raw_user_id = data.get("uid") if isinstance(data, dict) else None
        if not isinstance(raw_user_id, str):
            return None
        try:
            return UUID(raw_user_id)
        except ValueError:
            return None
