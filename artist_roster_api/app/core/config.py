"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables; defaults are provided for all fields so the API
starts without any configuration in development.  Tests and embedding
applications construct their own ``Settings`` instance and pass it to
``create_app`` instead of relying on the module-level ``settings``.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _env_list(name: str, default: str = "") -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Artist Roster API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_bool("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # JWT_SECRET is accepted for compatibility with older deployments.
    secret_key: str = os.getenv("SECRET_KEY", os.getenv("JWT_SECRET", "change_me"))
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "120"))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # ``token`` issues bearer JWTs at login; ``session`` keeps a
    # server-side session row and hands the browser a cookie.
    auth_mode: str = os.getenv("AUTH_MODE", "token")
    session_expire_minutes: int = int(os.getenv("SESSION_EXPIRE_MINUTES", "120"))
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "admin_session")
    cookie_secure: bool = _env_bool("COOKIE_SECURE", "true")
    cookie_samesite: str = os.getenv("COOKIE_SAMESITE", "none")

    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS"))

    # When false, /api/register only accepts anonymous callers while the
    # admins table is empty.
    allow_open_registration: bool = _env_bool("ALLOW_OPEN_REGISTRATION", "false")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "artist_roster.db")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    def __post_init__(self) -> None:
        if self.auth_mode not in {"token", "session"}:
            raise ValueError(f"Unsupported AUTH_MODE: {self.auth_mode!r}")
        if self.cookie_samesite.lower() not in {"lax", "strict", "none"}:
            raise ValueError(f"Unsupported COOKIE_SAMESITE: {self.cookie_samesite!r}")


# Environment variables must be set before this module is imported
# because the dataclass defaults are computed at class creation time.
settings = Settings()
