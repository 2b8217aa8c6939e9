"""
Public artist endpoints.

The public site reads the roster from here; no authentication is
required and nothing is modified.
"""

from typing import List

from fastapi import APIRouter, Depends

from ...schemas.artist import ArtistRead
from ...services.artist_service import ArtistService
from ..deps import get_artist_service

router = APIRouter()


@router.get("/artists", response_model=List[ArtistRead])
async def list_artists(service: ArtistService = Depends(get_artist_service)) -> List[ArtistRead]:
    """Return all artists ordered by ascending ``order``.

    Artists sharing the same ``order`` are returned in the order they
    were added.
    """
    return await service.list_artists()
