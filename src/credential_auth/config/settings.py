"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveInt = Annotated[int, Field(gt=0)]


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: NonEmptyStr = Field(validation_alias="DATABASE_URL")
    session_secret_key: NonEmptyStr = Field(validation_alias="SESSION_SECRET_KEY")
    session_cookie_name: NonEmptyStr = Field(
        default="auth_session",
        validation_alias="SESSION_COOKIE_NAME",
    )
    session_max_age_seconds: PositiveInt = Field(
        default=8 * 60 * 60,
        validation_alias="SESSION_MAX_AGE_SECONDS",
    )
    session_cookie_secure: bool = Field(
        default=False,
        validation_alias="SESSION_COOKIE_SECURE",
    )
    # bcrypt-pbkdf warns below 50 rounds; smaller costs are only injected in tests.
    password_kdf_rounds: Annotated[int, Field(ge=50)] = Field(
        default=64,
        validation_alias="PASSWORD_KDF_ROUNDS",
    )
    password_salt_bytes: Annotated[int, Field(ge=8, le=64)] = Field(
        default=16,
        validation_alias="PASSWORD_SALT_BYTES",
    )
    password_key_bytes: Annotated[int, Field(ge=16, le=512)] = Field(
        default=32,
        validation_alias="PASSWORD_KEY_BYTES",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()  # type: ignore[call-arg]
