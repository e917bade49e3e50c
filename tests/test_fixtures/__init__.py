"""
Test Fixtures Package

Factories shared by the unit tests:
- cache_factory: fake clock, memory/failing/raw stores
- tmdb_factory: canned TMDB records and a fake TMDB client
"""
