"""
Pydantic models for admin accounts and authentication.

Login and registration share the same ``{username, password}`` body.
Passwords are never part of a response model.
"""

from pydantic import BaseModel, Field


class AdminCredentials(BaseModel):
    username: str = Field(..., min_length=1, examples=["admin"])
    password: str = Field(..., min_length=1, examples=["strongpassword"])


class AdminRead(BaseModel):
    """Public view of an admin account."""

    id: int
    username: str


class TokenResponse(BaseModel):
    """Returned by ``/api/login`` in token mode."""

    token: str
    token_type: str = "bearer"
