"""
Cache Key Derivation

Keys are readable strings built from a namespace token, an optional entity
id and every parameter that changes the cached response. Nothing is hashed:
two different requests can only share a key if every rendered part is
identical.

Rendering rules:
- parts are joined with "_"
- booleans render as "true"/"false", None renders as "all"
- every other value is str()-ed and percent-escaped, including "_", so a
  value can never contain a separator
- parameters are ordered by the namespace's declared order (or by name when
  the namespace declares none), never by the caller's argument order
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any
from urllib.parse import quote

from showlist.core.config.constants import (
    CACHE_NS_DETAILS,
    CACHE_NS_HOME,
    CACHE_NS_MEDIA,
    CACHE_NS_PAGE,
    CACHE_NS_SEARCH,
    CACHE_NS_USER_PROFILE,
    CACHE_NS_USER_WATCHLISTS,
    CACHE_NS_WATCHLIST,
    CACHE_NS_WATCHLIST_ITEMS,
)

SEPARATOR = "_"

Params = Mapping[str, Any] | Iterable[tuple[str, Any]]

# Declared parameter order per namespace
PARAM_ORDER: dict[str, tuple[str, ...]] = {
    CACHE_NS_SEARCH: ("query", "page", "include_adult", "language", "media_type"),
}

HOME_FEED_KEY = CACHE_NS_HOME


def render_value(value: Any) -> str:
    """Render one key part."""
    if value is None:
        return "all"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    return quote(str(value), safe="").replace(SEPARATOR, "%5F")


def _ordered(namespace: str, params: Params) -> list[tuple[str, Any]]:
    pairs = list(params.items()) if isinstance(params, Mapping) else list(params)

    names = [name for name, _ in pairs]
    if len(names) != len(set(names)):
        raise ValueError(f"duplicate cache key parameter in {names!r}")

    declared = PARAM_ORDER.get(namespace, ())
    rank = {name: position for position, name in enumerate(declared)}
    # Undeclared names go after declared ones, alphabetically
    return sorted(pairs, key=lambda pair: (rank.get(pair[0], len(declared)), pair[0]))


def key_for(namespace: str, entity_id: Any = None, params: Params = ()) -> str:
    """
    Build the cache key for `namespace`.

    Args:
        namespace: Fixed namespace token (not escaped)
        entity_id: Optional identity of the cached entity
        params: Mapping or (name, value) pairs; order is irrelevant

    Returns:
        Deterministic key string

    Example:
        >>> key_for("search", params=[("media_type", "movie"), ("query", "dune"),
        ...     ("page", 2), ("include_adult", False), ("language", "en-US")])
        'search_dune_2_false_en-US_movie'
    """
    parts = [namespace]
    if entity_id is not None:
        parts.append(render_value(entity_id))
    parts.extend(render_value(value) for _, value in _ordered(namespace, params))
    return SEPARATOR.join(parts)


# ----------------------------------------------------------------------------
# Concrete derivations
# ----------------------------------------------------------------------------


def page_key(category: str, page: int) -> str:
    """`{category}_page_{page}`"""
    return SEPARATOR.join((category, CACHE_NS_PAGE, render_value(page)))


def details_key(kind: str, entity_id: int) -> str:
    """`{kind}_details_{id}`"""
    return SEPARATOR.join((kind, CACHE_NS_DETAILS, render_value(entity_id)))


def search_key(
    query: str,
    page: int,
    include_adult: bool,
    language: str,
    media_type: str | None,
) -> str:
    """`search_{query}_{page}_{include_adult}_{language}_{media_type|all}`"""
    return key_for(
        CACHE_NS_SEARCH,
        params={
            "query": query,
            "page": page,
            "include_adult": include_adult,
            "language": language,
            "media_type": media_type,
        },
    )


def user_watchlists_key(user_id: str) -> str:
    return key_for(CACHE_NS_USER_WATCHLISTS, user_id)


def watchlist_key(watchlist_id: str) -> str:
    return key_for(CACHE_NS_WATCHLIST, watchlist_id)


def watchlist_items_key(watchlist_id: str) -> str:
    return key_for(CACHE_NS_WATCHLIST_ITEMS, watchlist_id)


def media_key(media_type: str, tmdb_id: int) -> str:
    """`media_{media_type}_{id}` with the media type lowercased."""
    if isinstance(media_type, Enum):
        media_type = media_type.value
    return SEPARATOR.join((CACHE_NS_MEDIA, render_value(str(media_type).lower()), render_value(tmdb_id)))


def user_profile_key(user_id: str) -> str:
    return key_for(CACHE_NS_USER_PROFILE, user_id)
