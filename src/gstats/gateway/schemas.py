"""Request schemas for the game gateway proxy."""

from __future__ import annotations

from pydantic import BaseModel, Field


class GameTokenRequest(BaseModel):
    """A pre-signed lite token request, forwarded as-is."""

    encoded_payload: str = Field(..., min_length=1)
    sign: str = Field(..., min_length=1)
