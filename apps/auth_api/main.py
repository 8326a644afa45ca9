"""auth-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from credential_auth.application.services.auth_service import AuthService
from credential_auth.config.settings import Settings, load_settings
from credential_auth.infrastructure.db.session import Database, create_database
from credential_auth.infrastructure.db.user_repository import SqlAlchemyUserRepository
from credential_auth.infrastructure.http.auth_router import build_auth_router
from credential_auth.infrastructure.http.session_cookie import SessionCookieCodec
from credential_auth.infrastructure.logging import configure_logging
from credential_auth.infrastructure.security.password_hasher import (
    BcryptKdfPasswordHasher,
    PasswordHashingConfig,
)

AUTH_API_HOST = "0.0.0.0"
AUTH_API_PORT = 8000
logger = logging.getLogger(__name__)


def build_password_hasher(settings: Settings) -> BcryptKdfPasswordHasher:
    """Build password hasher with process-wide KDF parameters from settings."""

    return BcryptKdfPasswordHasher(
        PasswordHashingConfig(
            rounds=settings.password_kdf_rounds,
            salt_bytes=settings.password_salt_bytes,
            key_bytes=settings.password_key_bytes,
        )
    )


def build_auth_service(settings: Settings, database: Database) -> AuthService:
    """Build authentication service with SQLAlchemy-backed dependencies."""

    return AuthService(
        users=SqlAlchemyUserRepository(database.session_factory),
        password_hasher=build_password_hasher(settings),
    )


def build_session_codec(settings: Settings) -> SessionCookieCodec:
    """Build signed session cookie codec from settings."""

    return SessionCookieCodec(
        secret_key=settings.session_secret_key,
        cookie_name=settings.session_cookie_name,
        max_age_seconds=settings.session_max_age_seconds,
        secure=settings.session_cookie_secure,
    )


def create_app(
    *,
    auth_service: AuthService | None = None,
    session_codec: SessionCookieCodec | None = None,
    database: Database | None = None,
) -> FastAPI:
    """Create FastAPI app exposing the `/auth` routes.

    The app owns `database` (built from settings when an auth service has to
    be built) and disposes its engine on shutdown.
    """

    if auth_service is None or session_codec is None:
        settings = load_settings()
        configure_logging(settings)
        if auth_service is None:
            if database is None:
                database = create_database(settings.database_url)
            auth_service = build_auth_service(settings, database)
        if session_codec is None:
            session_codec = build_session_codec(settings)
        logger.info(
            "auth_api_configured cookie_name=%s kdf_rounds=%s",
            settings.session_cookie_name,
            settings.password_kdf_rounds,
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        if database is not None:
            await database.dispose()
            logger.info("auth_api_database_disposed")

    app = FastAPI(lifespan=lifespan)
    app.include_router(
        build_auth_router(
            auth_service=auth_service,
            session_codec=session_codec,
        )
    )
    return app


def run_asgi_server(*, host: str = AUTH_API_HOST, port: int = AUTH_API_PORT) -> None:
    """Run auth-api as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.auth_api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run auth-api runtime process."""

    run_asgi_server()


if __name__ == "__main__":
    main()
