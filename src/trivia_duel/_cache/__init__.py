# Area: Cache
"""
Local cache - survives relaunches between answering and sending.

This package contains:
- Key-value store interface with in-memory and SQLite backends
- Response cache for the active player's unsent answers
- Recent category list
"""

from .store import KeyValueStore, InMemoryStore, SQLiteStore, init_database
from .response_cache import ResponseCache, RecentCategories, storage_key

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "SQLiteStore",
    "init_database",
    "ResponseCache",
    "RecentCategories",
    "storage_key",
]
