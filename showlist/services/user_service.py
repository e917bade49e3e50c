"""
User Service
============

Registration, login, onboarding and the profile endpoints.

PROFILE CACHING
---------------
The profile is cached under `user_profile_{id}` for CACHE_PROFILE_TTL
(30 minutes). Updates write the new profile through to the cache after the
commit; account deletion removes the profile along with every watchlist
key the user owned.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from showlist.caching.accessor import CacheAccessor
from showlist.caching.invalidation import CacheInvalidator
from showlist.caching.keys import user_profile_key
from showlist.core.config.settings import Settings
from showlist.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from showlist.core.logging import get_logger, log_stage
from showlist.core.security import create_access_token, hash_password, verify_password
from showlist.infrastructure.database.models import User
from showlist.infrastructure.database.repositories import (
    UserRepository,
    WatchlistItemRepository,
    WatchlistRepository,
)
from showlist.services.serializers import serialize_profile, serialize_user_summary

logger = get_logger(__name__)


class UserService:
    """
    Usage:
        users = UserService(session, accessor, settings)

        await users.register("ada@example.com", "secret1", "Ada", "Lovelace")
        token = await users.login("ada@example.com", "secret1")
        profile = await users.get_profile(user_id)
    """

    def __init__(self, session: AsyncSession, accessor: CacheAccessor, settings: Settings):
        self._session = session
        self._accessor = accessor
        self._invalidator = CacheInvalidator(accessor)
        self._auth = settings.auth
        self._profile_ttl = settings.cache.CACHE_PROFILE_TTL
        self._users = UserRepository(session)
        self._watchlists = WatchlistRepository(session)
        self._items = WatchlistItemRepository(session)

    async def _require_user(self, user_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _token_for(self, user: User) -> str:
        return create_access_token(user.id, user.on_boarded, self._auth)

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    async def register(self, email: str, password: str, first_name: str, last_name: str) -> dict[str, Any]:
        """
        Raises:
            ConflictError: The email is already registered
        """
        if await self._users.get_by_email(email) is not None:
            raise ConflictError("User already exists")

        user = await self._users.create(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
        )
        await self._session.commit()

        log_stage(logger, "A.2", "User registered", user_id=user.id)
        return serialize_user_summary(user)

    async def login(self, email: str, password: str) -> str:
        """
        Returns:
            A signed access token

        Raises:
            NotFoundError: No user with that email
            AuthenticationError: Wrong password
        """
        user = await self._users.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")

        if not verify_password(password, user.password_hash):
            log_stage(logger, "A.3", "Login rejected", level="warning", user_id=user.id)
            raise AuthenticationError("Invalid password")

        return self._token_for(user)

    async def onboard(self, user_id: str, bio: str, country: str) -> str:
        """Set bio and country, mark the user onboarded and return a fresh token."""
        user = await self._require_user(user_id)
        user = await self._users.update(user, bio=bio, country=country, on_boarded=True)
        await self._session.commit()
        await self._accessor.delete(user_profile_key(user.id))

        log_stage(logger, "A.4", "User onboarded", user_id=user.id)
        return self._token_for(user)

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    async def get_profile(self, user_id: str) -> dict[str, Any]:
        async def produce() -> dict[str, Any] | None:
            user = await self._users.get_by_id(user_id)
            return serialize_profile(user) if user is not None else None

        profile = await self._accessor.get_or_fetch(user_profile_key(user_id), produce, self._profile_ttl)
        if profile is None:
            raise NotFoundError("User not found")
        return profile

    async def update_profile(
        self,
        user_id: str,
        first_name: str,
        last_name: str,
        email: str,
        bio: str,
        country: str,
    ) -> dict[str, Any]:
        """
        Replace the editable profile fields.

        Raises:
            ConflictError: `email` belongs to another user
        """
        user = await self._require_user(user_id)

        other = await self._users.get_by_email(email)
        if other is not None and other.id != user.id:
            raise ConflictError("Email already in use")

        user = await self._users.update(
            user,
            first_name=first_name,
            last_name=last_name,
            email=email.strip().lower(),
            bio=bio,
            country=country,
        )
        await self._session.commit()

        profile = serialize_profile(user)
        await self._accessor.write(user_profile_key(user.id), profile, self._profile_ttl)
        return profile

    async def delete_account(self, user_id: str) -> None:
        """Delete the user with all watchlists and items (children first)."""
        user = await self._require_user(user_id)

        watchlist_ids = await self._watchlists.list_ids_for_owner(user.id)
        items_removed = await self._items.delete_for_watchlists(watchlist_ids)
        await self._watchlists.delete_for_owner(user.id)
        await self._users.delete(user)
        await self._session.commit()

        await self._invalidator.invalidate_user(user_id, watchlist_ids)
        log_stage(
            logger,
            "A.5",
            "Account deleted",
            user_id=user_id,
            watchlists_removed=len(watchlist_ids),
            items_removed=items_removed,
        )
