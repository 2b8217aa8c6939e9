"""
Response models shared by several endpoint modules.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation body, e.g. ``{"message": "Logged out"}``."""

    message: str
