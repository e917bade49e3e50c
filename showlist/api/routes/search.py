"""
Search and Detail Routes

- GET /search?query=&page=&include_adult=&language=&media_type=
- GET /search/movie/{tmdb_id}   details, watch providers
- GET /search/tv/{tmdb_id}      details, watch providers, seasons
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Path, Query
from pydantic import AfterValidator

from showlist.api.dependencies import CatalogServiceDep, get_current_user_id
from showlist.core.config.constants import MAX_PAGE, MIN_PAGE

router = APIRouter(prefix="/search", tags=["Search"], dependencies=[Depends(get_current_user_id)])

TmdbId = Annotated[int, Path(gt=0)]


def _strip_query(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("query must not be blank")
    return value


SearchQuery = Annotated[str, Query(max_length=200), AfterValidator(_strip_query)]


@router.get("")
async def search(
    catalog: CatalogServiceDep,
    query: SearchQuery,
    page: Annotated[int, Query(ge=MIN_PAGE, le=MAX_PAGE)] = 1,
    include_adult: bool = False,
    language: Annotated[str | None, Query(min_length=2, max_length=10)] = None,
    media_type: Literal["movie", "tv"] | None = None,
):
    """Search movies and TV; `media_type` narrows to one kind."""
    results = await catalog.search(
        query,
        page=page,
        include_adult=include_adult,
        language=language,
        media_type=media_type,
    )
    return {"success": True, "data": results}


@router.get("/movie/{tmdb_id}")
async def movie_details(tmdb_id: TmdbId, catalog: CatalogServiceDep):
    return {"success": True, "data": await catalog.movie_details(tmdb_id)}


@router.get("/tv/{tmdb_id}")
async def tv_details(tmdb_id: TmdbId, catalog: CatalogServiceDep):
    return {"success": True, "data": await catalog.tv_details(tmdb_id)}
