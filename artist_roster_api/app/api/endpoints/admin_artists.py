"""
Admin endpoints for managing the artist roster.

Every route in this module sits behind ``get_current_admin``; requests
without a valid token (token mode) or session cookie (session mode) are
rejected with 401 before the handler runs.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ...core.security import AdminIdentity
from ...schemas.admin import AdminRead
from ...schemas.artist import ArtistCreate, ArtistRead, ReorderRequest
from ...schemas.common import MessageResponse
from ...services.artist_service import ArtistService
from ..deps import get_artist_service, get_current_admin

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("/me", response_model=AdminRead)
async def current_admin(admin: AdminIdentity = Depends(get_current_admin)) -> AdminRead:
    """Return the admin the request is authenticated as."""
    return AdminRead(id=admin.admin_id, username=admin.username)


@router.get("/artists", response_model=List[ArtistRead])
async def list_artists(service: ArtistService = Depends(get_artist_service)) -> List[ArtistRead]:
    """Same listing as the public endpoint, for the admin panel."""
    return await service.list_artists()


@router.post("/artists/add", response_model=ArtistRead, status_code=status.HTTP_201_CREATED)
async def add_artist(
    artist_in: ArtistCreate,
    service: ArtistService = Depends(get_artist_service),
) -> ArtistRead:
    """Add an artist at the given ``order``.

    Existing orders are left alone, so two artists may end up sharing
    a position.
    """
    return await service.add_artist(artist_in)


@router.delete("/artists/delete/{artist_id}", response_model=MessageResponse)
async def delete_artist(
    artist_id: str,
    service: ArtistService = Depends(get_artist_service),
) -> MessageResponse:
    await service.delete_artist(artist_id)
    return MessageResponse(message="Artist deleted successfully")


@router.post("/artists/reorder", response_model=MessageResponse)
async def reorder_artists(
    payload: ReorderRequest,
    service: ArtistService = Depends(get_artist_service),
) -> MessageResponse:
    """Save a new order for the submitted artists.

    Each pair is applied on its own.  If any ``_id`` is unknown the
    response is a 500, but updates for the known ids are kept.
    """
    await service.reorder_artists(payload.reordered_artists)
    return MessageResponse(message="Reorder saved successfully")
