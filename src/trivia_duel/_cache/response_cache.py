# Area: Cache
"""
trivia_duel._cache.response_cache - In-flight response cache
============================================================

Keeps the active player's answers between tapping an option and the
message actually going out, so a relaunch or a freshly decoded snapshot
does not lose them. Cached answers only ever fill empty slots: anything
that arrived in a message payload wins over the local cache.
"""

import logging
from typing import List, Optional

from .store import KeyValueStore
from .._model.game import TriviaGame

logger = logging.getLogger("trivia_duel.cache.responses")

RECENT_CATEGORIES_KEY = "recent_categories"
MAX_RECENT_CATEGORIES = 5


def storage_key(game: TriviaGame) -> Optional[str]:
    """Cache key for the game's active player, None without one."""
    player = game.active_player
    if player is None:
        return None
    return f"{game.id}{player.id}"


class ResponseCache:
    """
    Write-through cache of the active player's responses.

    Entries are option-index lists keyed by game id + player id.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def cache_responses(self, game: TriviaGame) -> None:
        """Replace the cached entry with the active player's responses."""
        key = storage_key(game)
        if key is None:
            return
        indices = game.active_player.response_indices()
        self.store.set(key, indices)
        logger.debug(f"[{game.id}] Cached {len(indices)} response slot(s)")

    def load_responses(self, game: TriviaGame) -> int:
        """
        Fill the active player's empty slots from the cache.

        Returns:
            Number of responses restored
        """
        key = storage_key(game)
        if key is None:
            return 0
        cached = self.store.get(key)
        if not cached:
            return 0

        indices = [i if isinstance(i, int) else None for i in cached]
        filled = game.active_player.fill_from_indices(indices, game.questions)
        if filled:
            logger.info(f"[{game.id}] Restored {filled} cached response(s)")
        return filled

    def empty_cache(self, game: TriviaGame, if_outdated: bool = False) -> None:
        """
        Clear the cached entry.

        Args:
            game: The game whose active player's entry should go
            if_outdated: Only clear when the cache holds fewer answers than
                the player has in memory; a more complete cache is kept
        """
        key = storage_key(game)
        if key is None:
            return

        if if_outdated:
            answered = game.active_player.answered_count
            cached = self.store.get(key) or []
            cached_count = sum(1 for i in cached if i is not None)
            if cached_count >= answered:
                return

        self.store.remove(key)
        logger.debug(f"[{game.id}] Cleared response cache")


class RecentCategories:
    """Most recently played categories, newest first."""

    def __init__(self, store: KeyValueStore, limit: int = MAX_RECENT_CATEGORIES):
        self.store = store
        self.limit = limit

    def list(self) -> List[str]:
        return [str(c) for c in self.store.get(RECENT_CATEGORIES_KEY) or []]

    def add(self, category_id: str) -> List[str]:
        """Move a category to the front, dropping the oldest beyond the limit."""
        recent = [c for c in self.list() if c != category_id]
        recent.insert(0, category_id)
        recent = recent[:self.limit]
        self.store.set(RECENT_CATEGORIES_KEY, recent)
        return recent
