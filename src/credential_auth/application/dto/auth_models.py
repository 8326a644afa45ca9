"""Pydantic models for the `/auth` HTTP contracts."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from credential_auth.application.ports.user_repository_port import UserRecord
from credential_auth.domain.auth.credentials import normalize_user_email, require_user_password


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection."""

    model_config = ConfigDict(extra="forbid")


class CredentialsRequest(StrictModel):
    """HTTP request model shared by signup and signin."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_user_email(email=value)

    @field_validator("password")
    @classmethod
    def _require_password(cls, value: str) -> str:
        return require_user_password(password=value)


class UserResponse(StrictModel):
    """Public user representation; never carries password material."""

    id: UUID
    email: str

    @classmethod
    def from_record(cls, user: UserRecord) -> UserResponse:
        """Strip stored credentials from one user record."""

        return cls(id=user.user_id, email=user.email)
