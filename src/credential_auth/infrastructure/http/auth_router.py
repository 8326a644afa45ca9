"""FastAPI router for signup, signin, signout, and session identity endpoints."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Request, Response

from credential_auth.application.dto.auth_models import CredentialsRequest, UserResponse
from credential_auth.application.ports.user_repository_port import UserRecord
from credential_auth.application.services.auth_service import (
    AuthService,
    DuplicateAccountError,
    EmailInUseError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from credential_auth.domain.auth.credentials import normalize_user_email
from credential_auth.infrastructure.http.auth_guard import NotAuthenticatedError, SessionAuthGuard
from credential_auth.infrastructure.http.session_cookie import SessionCookieCodec


def build_auth_router(
    *,
    auth_service: AuthService,
    session_codec: SessionCookieCodec,
    auth_guard: SessionAuthGuard | None = None,
) -> APIRouter:
    """Build router exposing the `/auth` endpoints."""

    router = APIRouter(prefix="/auth", tags=["auth"])
    guard = auth_guard or SessionAuthGuard(auth_service=auth_service, session_codec=session_codec)

    @router.post("/signup", response_model=UserResponse, status_code=201)
    async def signup(payload: CredentialsRequest, response: Response) -> UserResponse:
        try:
            user = await auth_service.signup(email=payload.email, password=payload.password)
        except EmailInUseError as exc:
            raise HTTPException(status_code=400, detail="email in use") from exc

        _set_session_cookie(response, session_codec=session_codec, user=user)
        return UserResponse.from_record(user)

    @router.post("/signin", response_model=UserResponse)
    async def signin(payload: CredentialsRequest, response: Response) -> UserResponse:
        try:
            user = await auth_service.signin(email=payload.email, password=payload.password)
        except UserNotFoundError as exc:
            raise HTTPException(status_code=404, detail="user not found") from exc
        except InvalidCredentialsError as exc:
            raise HTTPException(status_code=400, detail="invalid credentials") from exc
        except DuplicateAccountError as exc:
            raise HTTPException(status_code=409, detail="account state conflict") from exc

        _set_session_cookie(response, session_codec=session_codec, user=user)
        return UserResponse.from_record(user)

    @router.post("/signout", status_code=204)
    async def signout() -> Response:
        response = Response(status_code=204)
        response.delete_cookie(session_codec.cookie_name, path="/")
        return response

    @router.get("/whoami", response_model=UserResponse)
    async def whoami(request: Request) -> UserResponse:
        try:
            user = await guard.current_user(
                session_token=request.cookies.get(session_codec.cookie_name),
            )
        except NotAuthenticatedError as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc
        return UserResponse.from_record(user)

    @router.get("", response_model=list[UserResponse])
    async def find_users(email: Annotated[str, Query(min_length=1)]) -> list[UserResponse]:
        try:
            normalized_email = normalize_user_email(email=email)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        users = await auth_service.find_users(email=normalized_email)
        return [UserResponse.from_record(user) for user in users]

    @router.get("/{user_id}", response_model=UserResponse)
    async def get_user(user_id: UUID) -> UserResponse:
        user = await auth_service.get_user(user_id=user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="user not found")
        return UserResponse.from_record(user)

    return router


def _set_session_cookie(
    response: Response,
    *,
    session_codec: SessionCookieCodec,
    user: UserRecord,
) -> None:
    """Store the signed-in user id in the session cookie."""

    response.set_cookie(
        key=session_codec.cookie_name,
        value=session_codec.sign(user.user_id),
        max_age=session_codec.max_age_seconds,
        httponly=True,
        secure=session_codec.secure,
        samesite="lax",
        path="/",
    )
