"""
FastAPI dependencies shared by the route modules.

Settings come from ``app.state.settings`` (set by ``create_app``) and a
fresh SQLite connection is opened per request and closed when the
response has been sent.  Services are built on top of that connection,
so overriding ``get_db`` or the settings swaps the store for every
route at once.

``get_current_admin`` is the authentication gate for ``/api/admin``
routes.  It checks a bearer JWT in token mode and the session cookie in
session mode.
"""

import sqlite3
from typing import AsyncIterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.config import Settings
from ..core.db import get_connection, store_errors
from ..core.errors import AuthError
from ..core.security import AdminIdentity, decode_access_token
from ..services.admin_service import AdminService
from ..services.artist_service import ArtistService
from ..services.session_service import SessionService


bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db(settings: Settings = Depends(get_settings)) -> AsyncIterator[sqlite3.Connection]:
    with store_errors("open connection"):
        conn = get_connection(settings.database_url)
    try:
        yield conn
    finally:
        conn.close()


def get_artist_service(conn: sqlite3.Connection = Depends(get_db)) -> ArtistService:
    return ArtistService(conn)


def get_admin_service(conn: sqlite3.Connection = Depends(get_db)) -> AdminService:
    return AdminService(conn)


def get_session_service(
    conn: sqlite3.Connection = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SessionService:
    return SessionService(conn, ttl_seconds=settings.session_expire_minutes * 60)


async def _resolve_admin(
    request: Request,
    settings: Settings,
    credentials: Optional[HTTPAuthorizationCredentials],
    admins: AdminService,
    sessions: SessionService,
) -> AdminIdentity:
    if settings.auth_mode == "session":
        session_id = request.cookies.get(settings.session_cookie_name)
        if not session_id:
            raise AuthError("Not authenticated")
        username = await sessions.resolve(session_id)
        if username is None:
            raise AuthError("Invalid or expired session")
    else:
        if credentials is None:
            raise AuthError("Token missing")
        payload = decode_access_token(credentials.credentials, settings)
        if payload is None:
            raise AuthError("Invalid or expired token")
        username = payload["sub"]

    # Tokens and sessions outlive the admin row if it is deleted by hand.
    admin = await admins.get_admin(username)
    if admin is None:
        raise AuthError("Admin no longer exists")
    return AdminIdentity(username=admin.username, admin_id=admin.id)


async def get_current_admin(
    request: Request,
    settings: Settings = Depends(get_settings),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    admins: AdminService = Depends(get_admin_service),
    sessions: SessionService = Depends(get_session_service),
) -> AdminIdentity:
    """Return the authenticated admin or raise ``AuthError`` (401)."""
    return await _resolve_admin(request, settings, credentials, admins, sessions)


async def get_optional_admin(
    request: Request,
    settings: Settings = Depends(get_settings),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    admins: AdminService = Depends(get_admin_service),
    sessions: SessionService = Depends(get_session_service),
) -> Optional[AdminIdentity]:
    """Like ``get_current_admin`` but anonymous callers get ``None``."""
    try:
        return await _resolve_admin(request, settings, credentials, admins, sessions)
    except AuthError:
        return None
