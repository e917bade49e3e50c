"""
Watchlist Routes

Watchlists:
- GET    /watchlists              caller's watchlists with items
- POST   /watchlists              create
- GET    /watchlists/{id}         one watchlist with items
- PUT    /watchlists/{id}         rename
- DELETE /watchlists/{id}         delete with its items

Items:
- GET    /watchlists/{id}/items              items with `media_details`
- POST   /watchlists/{id}/items              add a TMDB title
- PUT    /watchlists/{id}/items/{item_id}    update status / schedule
- DELETE /watchlists/{id}/items/{item_id}    remove
"""

from fastapi import APIRouter, status

from showlist.api.dependencies import CurrentUserDep, WatchlistServiceDep
from showlist.api.models.watchlists import ItemCreateRequest, ItemUpdateRequest, WatchlistNameRequest
from showlist.services.watchlist_service import UNSET

router = APIRouter(prefix="/watchlists", tags=["Watchlists"])


@router.get("")
async def list_watchlists(user_id: CurrentUserDep, service: WatchlistServiceDep):
    return {"success": True, "watchlists": await service.list_watchlists(user_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_watchlist(body: WatchlistNameRequest, user_id: CurrentUserDep, service: WatchlistServiceDep):
    return {"success": True, "watchlist": await service.create_watchlist(user_id, body.name)}


@router.get("/{watchlist_id}")
async def get_watchlist(watchlist_id: str, user_id: CurrentUserDep, service: WatchlistServiceDep):
    return {"success": True, "watchlist": await service.get_watchlist(user_id, watchlist_id)}


@router.put("/{watchlist_id}")
async def update_watchlist(
    watchlist_id: str,
    body: WatchlistNameRequest,
    user_id: CurrentUserDep,
    service: WatchlistServiceDep,
):
    return {"success": True, "watchlist": await service.update_watchlist(user_id, watchlist_id, body.name)}


@router.delete("/{watchlist_id}")
async def delete_watchlist(watchlist_id: str, user_id: CurrentUserDep, service: WatchlistServiceDep):
    await service.delete_watchlist(user_id, watchlist_id)
    return {"success": True, "message": "Watchlist deleted successfully"}


@router.get("/{watchlist_id}/items")
async def list_items(watchlist_id: str, user_id: CurrentUserDep, service: WatchlistServiceDep):
    return {"success": True, "items": await service.get_items(user_id, watchlist_id)}


@router.post("/{watchlist_id}/items", status_code=status.HTTP_201_CREATED)
async def add_item(
    watchlist_id: str,
    body: ItemCreateRequest,
    user_id: CurrentUserDep,
    service: WatchlistServiceDep,
):
    item = await service.add_item(
        user_id,
        watchlist_id,
        tmdb_id=body.tmdb_id,
        media_type=body.media_type,
        status=body.status,
        scheduled_at=body.scheduled_at,
    )
    return {"success": True, "item": item}


@router.put("/{watchlist_id}/items/{item_id}")
async def update_item(
    watchlist_id: str,
    item_id: str,
    body: ItemUpdateRequest,
    user_id: CurrentUserDep,
    service: WatchlistServiceDep,
):
    item = await service.update_item(
        user_id,
        watchlist_id,
        item_id,
        status=body.status,
        scheduled_at=body.scheduled_at if "scheduled_at" in body.model_fields_set else UNSET,
    )
    return {"success": True, "item": item}


@router.delete("/{watchlist_id}/items/{item_id}")
async def delete_item(
    watchlist_id: str,
    item_id: str,
    user_id: CurrentUserDep,
    service: WatchlistServiceDep,
):
    await service.delete_item(user_id, watchlist_id, item_id)
    return {"success": True, "message": "Item removed from watchlist successfully"}
