"""
TMDB endpoint table.

Eight listing categories feed the home page and the paginated category
routes. Each maps to a TMDB list path and the media kind its records have.
"""

from dataclasses import dataclass
from enum import Enum


class MediaKind(str, Enum):
    MOVIE = "movie"
    TV = "tv"


@dataclass(frozen=True)
class Category:
    name: str
    path: str
    kind: MediaKind


CATEGORIES: dict[str, Category] = {
    category.name: category
    for category in (
        Category("trending_movies", "/trending/movie/day", MediaKind.MOVIE),
        Category("trending_tv", "/trending/tv/day", MediaKind.TV),
        Category("popular_movies", "/movie/popular", MediaKind.MOVIE),
        Category("popular_tv", "/tv/popular", MediaKind.TV),
        Category("upcoming_movies", "/movie/upcoming", MediaKind.MOVIE),
        Category("on_air_tv", "/tv/on_the_air", MediaKind.TV),
        Category("top_rated_movies", "/movie/top_rated", MediaKind.MOVIE),
        Category("top_rated_tv", "/tv/top_rated", MediaKind.TV),
    )
}

DETAIL_APPENDS = "videos,similar,recommendations,reviews"

SEARCH_PATHS: dict[str | None, str] = {
    None: "/search/multi",
    MediaKind.MOVIE.value: "/search/movie",
    MediaKind.TV.value: "/search/tv",
}


def details_path(kind: MediaKind, tmdb_id: int) -> str:
    return f"/{kind.value}/{tmdb_id}"


def watch_providers_path(kind: MediaKind, tmdb_id: int) -> str:
    return f"/{kind.value}/{tmdb_id}/watch/providers"


def season_path(tmdb_id: int, season_number: int) -> str:
    return f"/tv/{tmdb_id}/season/{season_number}"
