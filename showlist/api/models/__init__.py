"""
API Models Package
==================

Pydantic request models for the HTTP surface.

ORGANIZATION:
-------------
- auth.py: register, login, onboarding and profile bodies
- watchlists.py: watchlist and watchlist-item bodies
"""

from showlist.api.models.auth import (
    LoginRequest,
    OnboardRequest,
    ProfileUpdateRequest,
    RegisterRequest,
)
from showlist.api.models.watchlists import ItemCreateRequest, ItemUpdateRequest, WatchlistNameRequest

__all__ = [
    "ItemCreateRequest",
    "ItemUpdateRequest",
    "LoginRequest",
    "OnboardRequest",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "WatchlistNameRequest",
]
