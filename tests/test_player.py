# Area: Model Tests
"""Tests for Player response tracking."""

from trivia_duel._model.player import Player
from trivia_duel._wire.schemas import CompactPlayer

from conftest import CORRECT, WRONG, build_questions


class TestPlayerResponses:
    """Tests for recording responses."""

    def test_new_player_has_empty_slots(self):
        """A new player has one empty slot per question."""
        player = Player.new("alice", 4)
        assert player.responses == [None] * 4
        assert player.answered_count == 0

    def test_record_response(self):
        """Recording fills the slot once."""
        questions = build_questions(4)
        player = Player.new("alice", 4)
        assert player.record_response(1, questions[1].options[CORRECT]) is True
        assert player.has_answered(1)
        assert player.score == 1

    def test_filled_slot_is_immutable(self):
        """A second answer to the same question is ignored."""
        questions = build_questions(4)
        player = Player.new("alice", 4)
        player.record_response(0, questions[0].options[WRONG])
        assert player.record_response(0, questions[0].options[CORRECT]) is False
        assert player.responses[0].text == "10"

    def test_out_of_range_index_ignored(self):
        """Out-of-range slots are ignored."""
        player = Player.new("alice", 4)
        assert player.record_response(4, build_questions(1)[0].options[0]) is False
        assert len(player.responses) == 4

    def test_score_counts_correct_only(self):
        """Only correct answers score."""
        questions = build_questions(4)
        player = Player.new("alice", 4)
        player.record_response(0, questions[0].options[CORRECT])
        player.record_response(1, questions[1].options[WRONG])
        player.record_response(2, questions[2].options[CORRECT])
        assert player.score == 2
        assert player.answered_count == 3


class TestPlayerCompression:
    """Tests for compress() and expand()."""

    def test_compress_keeps_gaps_and_trims_tail(self):
        """Compression keeps inner gaps and trims the tail."""
        questions = build_questions(4)
        player = Player.new("alice", 4)
        player.record_response(0, questions[0].options[1])
        player.record_response(2, questions[2].options[3])
        player.is_active = True

        compact = player.compress()
        assert compact.responses == [1, None, 3]
        assert compact.id == "alice"

    def test_expand_resolves_indices(self):
        """Expansion maps indices back to answers."""
        questions = build_questions(4)
        compact = CompactPlayer(id="bob", responses=[2, None, 0], completion_time=9.5, last_reveal=1)

        player = Player.expand(compact, questions, 4)
        assert player.responses[0] is questions[0].options[2]
        assert player.responses[1] is None
        assert player.responses[2] is questions[2].options[0]
        assert player.responses[3] is None
        assert player.completion_time == 9.5
        assert player.last_reveal == 1
        assert player.is_active is None

    def test_expand_drops_unresolvable_indices(self):
        """Indices with no matching option become gaps."""
        questions = build_questions(2)
        compact = CompactPlayer(id="bob", responses=[7, 1, 1])

        player = Player.expand(compact, questions, 4)
        assert player.responses[0] is None
        assert player.responses[1].text == "20"
        assert player.responses[2] is None
        assert len(player.responses) == 4


class TestPlayerMerge:
    """Tests for merge_with()."""

    def test_merge_fills_gaps(self):
        """Merging fills only empty slots."""
        questions = build_questions(4)
        local = Player.new("bob", 4)
        local.record_response(0, questions[0].options[0])
        incoming = Player.new("bob", 4)
        incoming.record_response(0, questions[0].options[3])
        incoming.record_response(1, questions[1].options[2])

        local.merge_with(incoming)
        assert local.responses[0].text == "10"
        assert local.responses[1].text == "30"

    def test_merge_is_idempotent(self):
        """Merging twice changes nothing more."""
        questions = build_questions(4)
        local = Player.new("bob", 4)
        incoming = Player.new("bob", 4)
        incoming.record_response(2, questions[2].options[1])

        local.merge_with(incoming)
        snapshot = list(local.responses)
        local.merge_with(incoming)
        assert local.responses == snapshot

    def test_merge_with_none(self):
        """Merging with None is a no-op."""
        local = Player.new("bob", 4)
        local.merge_with(None)
        assert local.responses == [None] * 4
