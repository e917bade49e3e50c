"""
TMDB record mappers.

TMDB movie and TV records name the same things differently
(`original_title`/`release_date` vs `original_name`/`first_air_date`). The
mappers fold both into one immutable `MediaItem` so nothing above this
module needs to know which kind it is looking at.
"""

from collections.abc import Callable, Iterable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from showlist.core.logging import get_logger
from showlist.infrastructure.tmdb.endpoints import MediaKind

logger = get_logger(__name__)


class MediaItem(BaseModel):
    """Normalized movie or TV title."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    poster_path: str | None = Field(default=None, description="Absolute poster URL")
    release_date: str = ""
    media_type: Literal["movie", "tv"]


class Pagination(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int
    total_pages: int
    total_results: int


class PaginatedMedia(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: list[MediaItem]
    pagination: Pagination


Mapper = Callable[[dict[str, Any], str], MediaItem | None]


def poster_url(path: str | None, image_base_url: str) -> str | None:
    if not path:
        return None
    return f"{image_base_url}{path}"


def _valid_id(record: dict[str, Any]) -> bool:
    tmdb_id = record.get("id")
    return isinstance(tmdb_id, int) and not isinstance(tmdb_id, bool)


def _build(**fields: Any) -> MediaItem | None:
    """MediaItem from mapped fields, or None when TMDB sent a malformed record."""
    try:
        return MediaItem(**fields)
    except ValidationError as e:
        logger.warning(
            "Dropping malformed TMDB record",
            stage="TMDB.MAP",
            tmdb_id=fields.get("id"),
            error_count=e.error_count(),
        )
        return None


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value or default)
    except (TypeError, ValueError):
        return default


def map_movie(record: dict[str, Any], image_base_url: str) -> MediaItem | None:
    """List-endpoint movie record → MediaItem (None if it has no id)."""
    if not _valid_id(record):
        return None
    return _build(
        id=record["id"],
        title=record.get("original_title") or record.get("title") or "",
        poster_path=poster_url(record.get("poster_path"), image_base_url),
        release_date=record.get("release_date") or "",
        media_type="movie",
    )


def map_tv(record: dict[str, Any], image_base_url: str) -> MediaItem | None:
    """List-endpoint TV record → MediaItem (None if it has no id)."""
    if not _valid_id(record):
        return None
    return _build(
        id=record["id"],
        title=record.get("original_name") or record.get("name") or "",
        poster_path=poster_url(record.get("poster_path"), image_base_url),
        release_date=record.get("first_air_date") or "",
        media_type="tv",
    )


def map_search_result(record: dict[str, Any], image_base_url: str) -> MediaItem | None:
    """Multi-search record; people and other non-title results map to None."""
    media_type = record.get("media_type")
    if media_type == MediaKind.MOVIE.value:
        return map_movie(record, image_base_url)
    if media_type == MediaKind.TV.value:
        return map_tv(record, image_base_url)
    return None


def map_detail(kind: MediaKind, record: dict[str, Any], image_base_url: str) -> MediaItem | None:
    """Detail-endpoint record → MediaItem, preferring the localized title."""
    if not _valid_id(record):
        return None
    if kind is MediaKind.MOVIE:
        title = record.get("title") or record.get("original_title") or ""
        release_date = record.get("release_date") or ""
    else:
        title = record.get("name") or record.get("original_name") or ""
        release_date = record.get("first_air_date") or ""
    return _build(
        id=record["id"],
        title=title,
        poster_path=poster_url(record.get("poster_path"), image_base_url),
        release_date=release_date,
        media_type=kind.value,
    )


def mapper_for(kind: MediaKind) -> Mapper:
    return map_movie if kind is MediaKind.MOVIE else map_tv


def map_records(
    records: Iterable[dict[str, Any]] | None, mapper: Mapper, image_base_url: str
) -> list[MediaItem]:
    """Map a `results` array, dropping records the mapper rejects or cannot parse."""
    items = []
    if not isinstance(records, (list, tuple)):
        return items
    for record in records:
        if not isinstance(record, dict):
            continue
        item = mapper(record, image_base_url)
        if item is not None:
            items.append(item)
    return items


def map_page(payload: dict[str, Any], mapper: Mapper, image_base_url: str) -> PaginatedMedia:
    """TMDB paged collection → PaginatedMedia."""
    return PaginatedMedia(
        results=map_records(payload.get("results"), mapper, image_base_url),
        pagination=Pagination(
            page=_as_int(payload.get("page"), 1),
            total_pages=_as_int(payload.get("total_pages"), 0),
            total_results=_as_int(payload.get("total_results"), 0),
        ),
    )
