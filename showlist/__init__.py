"""
Showlist API

Backend-for-frontend for movie/TV discovery and personal watchlists. Catalog
data comes from TMDB and is served through a cache-aside layer with
TTL-based freshness and explicit invalidation.
"""

__version__ = "1.0.0"
