"""
System Constants

System-wide constants for the Showlist API: HTTP header names, cache
namespaces and the limits the request layer enforces.
"""

# ============================================================================
# HTTP Headers
# ============================================================================

HEADER_REQUEST_ID = "X-Request-ID"


# ============================================================================
# Cache Namespaces
# ============================================================================

CACHE_NS_HOME = "home_data"
CACHE_NS_PAGE = "page"
CACHE_NS_DETAILS = "details"
CACHE_NS_SEARCH = "search"
CACHE_NS_USER_WATCHLISTS = "user_watchlists"
CACHE_NS_WATCHLIST = "watchlist"
CACHE_NS_WATCHLIST_ITEMS = "watchlist_items"
CACHE_NS_MEDIA = "media"
CACHE_NS_USER_PROFILE = "user_profile"

# Physical expiry = logical TTL * this factor
CACHE_PHYSICAL_TTL_FACTOR = 2


# ============================================================================
# Request Limits
# ============================================================================

MIN_PAGE = 1
MAX_PAGE = 500  # TMDB rejects pages above 500

WATCHLIST_NAME_MAX_LENGTH = 100
BIO_MIN_LENGTH = 1
BIO_MAX_LENGTH = 500
COUNTRY_MIN_LENGTH = 2
COUNTRY_MAX_LENGTH = 3
PASSWORD_MIN_LENGTH = 6
