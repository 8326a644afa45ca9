"""Process logging configuration driven by application settings."""

from __future__ import annotations

import logging

from credential_auth.config.settings import Settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
# Library loggers that echo SQL or per-request lines at INFO.
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "uvicorn.access")


def resolve_log_level(raw_level: str) -> int:
    """Map a LOG_LEVEL value onto a stdlib level, falling back to INFO."""

    resolved = logging.getLevelName(raw_level.strip().upper() or "INFO")
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(settings: Settings) -> int:
    """Configure root logging from settings and return the applied level.

    Library loggers stay at WARNING unless the process runs at DEBUG.
    """

    level = resolve_log_level(settings.log_level)
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger("credential_auth").setLevel(level)

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
    return level
