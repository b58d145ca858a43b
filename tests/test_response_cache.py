# Area: Cache Tests
"""Tests for the response cache and recent categories."""

import pytest

from trivia_duel._cache.response_cache import (
    RECENT_CATEGORIES_KEY,
    RecentCategories,
    ResponseCache,
    storage_key,
)
from trivia_duel._cache.store import InMemoryStore

from conftest import CORRECT, WRONG


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def cache(store):
    return ResponseCache(store)


class TestStorageKey:
    """Tests for storage_key()."""

    def test_key_is_game_and_player(self, make_game):
        """The key combines game id and player id."""
        game = make_game(active="bob")
        assert storage_key(game) == f"{game.id}bob"

    def test_no_active_player(self, make_game):
        """No active player, no key."""
        assert storage_key(make_game(active=None)) is None


class TestResponseCache:
    """Tests for ResponseCache."""

    def test_cache_writes_option_indices(self, make_game, cache, store):
        """Cached entries are option indices."""
        game = make_game()
        game.record_answer(CORRECT)
        cache.cache_responses(game)
        assert store.get(storage_key(game)) == [CORRECT]

    def test_load_fills_empty_slots(self, make_game, cache, store):
        """Loading fills only empty slots."""
        game = make_game()
        store.set(storage_key(game), [CORRECT, WRONG])

        assert cache.load_responses(game) == 2
        assert game.active_player.responses[0].text == "30"
        assert game.active_player.responses[1].text == "10"

    def test_payload_wins_over_cache(self, make_game, cache, store):
        """Answers from the payload are never replaced by cached ones."""
        game = make_game()
        game.record_answer(WRONG)
        store.set(storage_key(game), [CORRECT, CORRECT])

        assert cache.load_responses(game) == 1
        assert game.active_player.responses[0].text == "10"
        assert game.active_player.responses[1].text == "30"

    def test_load_without_entry(self, make_game, cache):
        """Nothing cached restores nothing."""
        assert cache.load_responses(make_game()) == 0

    def test_load_ignores_bad_entries(self, make_game, cache, store):
        """Non-integer entries are skipped."""
        game = make_game()
        store.set(storage_key(game), ["x", None, 9, CORRECT])
        assert cache.load_responses(game) == 1
        assert game.active_player.has_answered(3)

    def test_empty_cache(self, make_game, cache, store):
        """empty_cache() removes the entry."""
        game = make_game()
        store.set(storage_key(game), [CORRECT])
        cache.empty_cache(game)
        assert store.get(storage_key(game)) is None

    def test_empty_if_outdated_keeps_complete_cache(self, make_game, cache, store):
        """A cache covering every recorded answer is kept."""
        game = make_game()
        game.record_answer(CORRECT)
        store.set(storage_key(game), [CORRECT])
        cache.empty_cache(game, if_outdated=True)
        assert store.get(storage_key(game)) == [CORRECT]

    def test_empty_if_outdated_clears_stale_cache(self, make_game, cache, store):
        """A cache holding fewer answers than the game is cleared."""
        game = make_game()
        game.record_answer(CORRECT)
        game.current_index = 1
        game.record_answer(CORRECT)
        store.set(storage_key(game), [CORRECT])
        cache.empty_cache(game, if_outdated=True)
        assert store.get(storage_key(game)) is None

    def test_no_active_player_is_noop(self, make_game, cache, store):
        """Every cache call is a no-op without an active player."""
        game = make_game(active=None)
        cache.cache_responses(game)
        cache.empty_cache(game)
        assert cache.load_responses(game) == 0


class TestRecentCategories:
    """Tests for RecentCategories."""

    def test_most_recent_first(self, store):
        """Categories are listed newest first."""
        recent = RecentCategories(store)
        recent.add("9")
        recent.add("21")
        assert recent.list() == ["21", "9"]

    def test_reuse_moves_to_front(self, store):
        """Reusing a category moves it to the front."""
        recent = RecentCategories(store)
        for category in ["9", "21", "17"]:
            recent.add(category)
        assert recent.add("9") == ["9", "17", "21"]

    def test_limited_to_five(self, store):
        """Only five categories are kept."""
        recent = RecentCategories(store)
        for category in range(8):
            recent.add(str(category))
        assert recent.list() == ["7", "6", "5", "4", "3"]
        assert len(store.get(RECENT_CATEGORIES_KEY)) == 5

    def test_empty(self, store):
        """No categories yet gives an empty list."""
        assert RecentCategories(store).list() == []
