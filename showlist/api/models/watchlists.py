"""
Watchlist request models.

Item payloads accept both snake_case and the camelCase names older clients
send (`tmdbId`, `mediaType`, `scheduledAt`).
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from showlist.core.config.constants import WATCHLIST_NAME_MAX_LENGTH
from showlist.infrastructure.database.models import MediaType, WatchStatus


class WatchlistNameRequest(BaseModel):
    """Body of watchlist create and rename."""

    name: str = Field(..., max_length=WATCHLIST_NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Watchlist name is required")
        return v


def _upper(value):
    return value.upper() if isinstance(value, str) else value


class ItemCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tmdb_id: int = Field(..., gt=0, strict=True, validation_alias=AliasChoices("tmdb_id", "tmdbId"))
    media_type: MediaType = Field(..., validation_alias=AliasChoices("media_type", "mediaType"))
    status: WatchStatus | None = None
    scheduled_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("scheduled_at", "scheduledAt")
    )

    @field_validator("media_type", "status", mode="before")
    @classmethod
    def uppercase_enums(cls, v):
        return _upper(v)


class ItemUpdateRequest(BaseModel):
    """
    Partial item update.

    `scheduled_at: null` clears the schedule; omitting it leaves the
    schedule alone. Use `model_fields_set` to tell the two apart.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: WatchStatus | None = None
    scheduled_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("scheduled_at", "scheduledAt")
    )

    @field_validator("status", mode="before")
    @classmethod
    def uppercase_status(cls, v):
        return _upper(v)
