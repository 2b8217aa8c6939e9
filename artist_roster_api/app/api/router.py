"""
Top-level router mounted under ``/api``.

Public and auth routes live at the root of the prefix; everything that
changes the roster is grouped under ``/admin`` and guarded by the
admin dependency declared in ``endpoints.admin_artists``.
"""

from fastapi import APIRouter

from .endpoints import admin_artists, artists, auth

router = APIRouter()

router.include_router(artists.router, tags=["artists"])
router.include_router(auth.router, tags=["auth"])
router.include_router(admin_artists.router, prefix="/admin", tags=["admin"])
