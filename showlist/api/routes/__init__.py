from showlist.api.routes.auth import router as auth_router
from showlist.api.routes.health import router as health_router
from showlist.api.routes.home import router as home_router
from showlist.api.routes.search import router as search_router
from showlist.api.routes.user import router as user_router
from showlist.api.routes.watchlists import router as watchlists_router

__all__ = [
    "auth_router",
    "health_router",
    "home_router",
    "search_router",
    "user_router",
    "watchlists_router",
]
