"""
Login, logout and registration endpoints.

What ``/login`` hands back depends on ``Settings.auth_mode``:

* ``token``: a JSON body ``{"token": ..., "token_type": "bearer"}``.
  The token expires after ``ACCESS_TOKEN_EXPIRE_MINUTES``.
* ``session``: a session cookie; the body only confirms the login.

``/register`` is open while no admin exists, so the first account can
be created on a fresh install.  After that it requires an
authenticated admin unless ``ALLOW_OPEN_REGISTRATION`` is set.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Request, Response, status

from ...core.config import Settings
from ...core.errors import AuthError
from ...core.security import AdminIdentity, create_access_token
from ...schemas.admin import AdminCredentials, AdminRead, TokenResponse
from ...schemas.common import MessageResponse
from ...services.admin_service import AdminService
from ...services.session_service import SessionService
from ..deps import get_admin_service, get_optional_admin, get_session_service, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=Union[TokenResponse, MessageResponse])
async def login(
    credentials: AdminCredentials,
    response: Response,
    settings: Settings = Depends(get_settings),
    admins: AdminService = Depends(get_admin_service),
    sessions: SessionService = Depends(get_session_service),
) -> Union[TokenResponse, MessageResponse]:
    """Authenticate an admin by username and password.

    Wrong usernames and wrong passwords get the same 401 response.
    """
    identity = await admins.authenticate(credentials.username, credentials.password)

    if settings.auth_mode == "session":
        session_id = await sessions.create(identity.username)
        response.set_cookie(
            key=settings.session_cookie_name,
            value=session_id,
            max_age=settings.session_expire_minutes * 60,
            httponly=True,
            secure=settings.cookie_secure,
            samesite=settings.cookie_samesite.lower(),
        )
        return MessageResponse(message="Logged in")

    token = create_access_token({"sub": identity.username, "admin_id": identity.admin_id}, settings)
    logger.info("Issued token for admin %s", identity.username)
    return TokenResponse(token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    sessions: SessionService = Depends(get_session_service),
) -> MessageResponse:
    """End the caller's session.

    Succeeds whether or not a session existed.  In token mode there is
    nothing to destroy on the server and the call is a no-op.
    """
    if settings.auth_mode == "session":
        session_id = request.cookies.get(settings.session_cookie_name)
        if session_id:
            await sessions.destroy(session_id)
        response.delete_cookie(
            key=settings.session_cookie_name,
            httponly=True,
            secure=settings.cookie_secure,
            samesite=settings.cookie_samesite.lower(),
        )
    return MessageResponse(message="Logged out")


@router.post("/register", response_model=AdminRead, status_code=status.HTTP_201_CREATED)
async def register(
    data: AdminCredentials,
    settings: Settings = Depends(get_settings),
    admins: AdminService = Depends(get_admin_service),
    current_admin: Optional[AdminIdentity] = Depends(get_optional_admin),
) -> AdminRead:
    """Create an admin account.

    Returns 409 if the username is already taken.
    """
    if current_admin is None and not settings.allow_open_registration:
        if await admins.count_admins() > 0:
            raise AuthError("Registration requires an authenticated admin")
    return await admins.register(data)
