from showlist.infrastructure.tmdb.client import TMDBClient
from showlist.infrastructure.tmdb.endpoints import CATEGORIES, Category, MediaKind
from showlist.infrastructure.tmdb.mappers import MediaItem, PaginatedMedia, Pagination

__all__ = [
    "CATEGORIES",
    "Category",
    "MediaItem",
    "MediaKind",
    "PaginatedMedia",
    "Pagination",
    "TMDBClient",
]
