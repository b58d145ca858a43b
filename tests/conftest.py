# Area: Test Fixtures
"""Shared builders for trivia_duel tests."""

from typing import List, Optional, Tuple

import pytest

from trivia_duel._model.game import TriviaGame
from trivia_duel._model.modes import GameMode
from trivia_duel._model.question import Question

# Options "10", "20", "30", "40" sort numerically; "30" is correct
CORRECT = 2
WRONG = 0


def build_questions(count: int) -> List[Question]:
    """Deterministic questions whose correct option is always index 2."""
    return [
        Question.build(
            text=f"Question {i}",
            correct_text="30",
            incorrect_texts=["10", "20", "40"],
            difficulty_level=i % 3,
        )
        for i in range(count)
    ]


class FakeQuestionSource:
    """Question source returning deterministic questions."""

    def __init__(self, short_by: int = 0):
        self.short_by = short_by
        self.calls: List[Tuple[str, int]] = []

    def fetch(self, category_id: str, count: int) -> List[Question]:
        self.calls.append((category_id, count))
        return build_questions(count - self.short_by)


class RecordingTransport:
    """Message transport that remembers what it was given."""

    def __init__(self):
        self.inserted: List[Tuple[str, Optional[str]]] = []
        self.sent: List[Tuple[str, Optional[str]]] = []

    def insert(self, payload: str, caption: Optional[str]) -> None:
        self.inserted.append((payload, caption))

    def send(self, payload: str, caption: Optional[str]) -> None:
        self.sent.append((payload, caption))

    @property
    def last_payload(self) -> str:
        return self.sent[-1][0] if self.sent else self.inserted[-1][0]


@pytest.fixture
def make_game():
    """Factory for a populated game with players already seated."""
    def _make(
        mode: GameMode = GameMode.TURN_BASED,
        players=("alice", "bob"),
        active: Optional[str] = "alice",
    ) -> TriviaGame:
        game = TriviaGame(category_id="9", mode_index=mode.index)
        game.questions = build_questions(mode.num_questions)
        for player_id in players:
            game.add_player(player_id)
        game.set_active_player(active)
        return game
    return _make
