"""Request/response schemas for game profile endpoints.

The wire format is camelCase; snake_case field names are accepted too.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_none(v: Any) -> Any:  # noqa: ANN401
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class GameDataRequest(BaseModel):
    """Game data for the current user's character."""

    model_config = _CAMEL

    character_id: str
    nickname: str
    server: str | None = None
    alliance: str | None = None
    level: int | None = Field(None, ge=0)
    power_now: int | None = Field(None, ge=0)
    power_max: int | None = Field(None, ge=0)
    hidden_power: int | None = None

    @field_validator("server", "alliance", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> Any:  # noqa: ANN401
        """An empty server or alliance means "not supplied"."""
        return _blank_to_none(v)


class LinkCharacterRequest(BaseModel):
    """Character to look up through the game gateway."""

    model_config = _CAMEL

    character_id: str = Field(..., min_length=1)
    nickname: str = Field(..., min_length=1)
    alliance: str | None = None

    @field_validator("alliance", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> Any:  # noqa: ANN401
        return _blank_to_none(v)


class AllianceUpdateRequest(BaseModel):
    model_config = _CAMEL

    alliance: str | None = None

    @field_validator("alliance", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> Any:  # noqa: ANN401
        return _blank_to_none(v)


class GameProfileResponse(BaseModel):
    model_config = ConfigDict(**_CAMEL, from_attributes=True)

    id: int
    user_id: int
    character_id: str
    nickname: str
    server: str | None = None
    alliance: str | None = None
    level: int | None = None
    power_now: int | None = None
    power_max: int | None = None
    hidden_power: int | None = None
