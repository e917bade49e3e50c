"""
Home Routes

- GET /home                        first page of all eight categories
- GET /home/{category}?page=N      one page of a category

Categories: trending_movies, trending_tv, popular_movies, popular_tv,
upcoming_movies, on_air_tv, top_rated_movies, top_rated_tv.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from showlist.api.dependencies import CatalogServiceDep, get_current_user_id
from showlist.core.config.constants import MAX_PAGE, MIN_PAGE
from showlist.infrastructure.tmdb.endpoints import CATEGORIES

router = APIRouter(prefix="/home", tags=["Home"], dependencies=[Depends(get_current_user_id)])

CATEGORY_PATTERN = "^(" + "|".join(CATEGORIES) + ")$"


@router.get("")
async def home_feed(catalog: CatalogServiceDep):
    return {"success": True, "data": await catalog.home_feed()}


@router.get("/{category}")
async def category_page(
    catalog: CatalogServiceDep,
    category: Annotated[str, Path(pattern=CATEGORY_PATTERN)],
    page: Annotated[int, Query(ge=MIN_PAGE, le=MAX_PAGE)] = 1,
):
    return {"success": True, "data": await catalog.category_page(category, page)}
