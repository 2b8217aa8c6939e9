"""
Pydantic schemas for artist records.

Field aliases follow the wire format used by the public site and the
admin panel: the identifier is ``_id`` and the social link is
``instagramUrl``.  Python code uses the snake_case attribute names.
"""

import math
from typing import Annotated, List, Optional, Union

from pydantic import AfterValidator, BaseModel, Field, field_validator

# SQLite INTEGER is a signed 64-bit value.
ORDER_INT_MIN = -(2**63)
ORDER_INT_MAX = 2**63 - 1


def _storable_order(v: Union[int, float]) -> Union[int, float]:
    if isinstance(v, float) and not math.isfinite(v):
        raise ValueError("Order must be a finite number")
    if isinstance(v, int) and not ORDER_INT_MIN <= v <= ORDER_INT_MAX:
        raise ValueError("Order is out of range")
    return v


# Integral orders stay ints on the wire; fractional ones stay floats.
OrderValue = Annotated[Union[int, float], AfterValidator(_storable_order)]


class ArtistCreate(BaseModel):
    """Payload for adding an artist."""

    name: str = Field(..., description="Display name", examples=["Jane Doe"])
    instagram_url: Optional[str] = Field(
        None,
        alias="instagramUrl",
        description="Link to the artist's social profile",
    )
    order: OrderValue = Field(..., description="Display position; lower values are listed first")

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("instagram_url")
    @classmethod
    def empty_url_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class ArtistRead(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    instagram_url: Optional[str] = Field(None, alias="instagramUrl")
    order: OrderValue

    model_config = {"populate_by_name": True}


class ReorderItem(BaseModel):
    id: str = Field(..., alias="_id", min_length=1)
    order: OrderValue

    model_config = {"populate_by_name": True}


class ReorderRequest(BaseModel):
    """Batch of ``{_id, order}`` pairs submitted by the drag-and-drop list."""

    reordered_artists: List[ReorderItem] = Field(..., alias="reorderedArtists")

    model_config = {"populate_by_name": True}
