# Area: Model
"""
trivia_duel._model.player - Player response tracking
====================================================

One participant of a game: their responses (one slot per question, empty
until answered), their rapid-fire completion time and the last question
whose answer they have seen revealed.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .answer import Answer
from .question import Question
from .._wire.schemas import CompactPlayer


@dataclass
class Player:
    """
    Tracks one player's answers.

    The responses list always has one slot per question of the game.
    Slots are filled at most once and are never removed.

    Attributes:
        id: Opaque participant identifier from the conversation
        responses: One optional Answer per question
        is_active: True for the player operating this device
        completion_time: Seconds taken to finish (rapid-fire only)
        last_reveal: Index of the last question revealed to this player
    """

    id: str
    responses: List[Optional[Answer]] = field(default_factory=list)
    is_active: Optional[bool] = None
    completion_time: Optional[float] = None
    last_reveal: Optional[int] = None

    @classmethod
    def new(cls, player_id: str, question_count: int) -> "Player":
        return cls(id=player_id, responses=[None] * question_count)

    @property
    def score(self) -> int:
        return sum(1 for r in self.responses if r is not None and r.is_correct)

    @property
    def answered_count(self) -> int:
        return sum(1 for r in self.responses if r is not None)

    def has_answered(self, index: int) -> bool:
        return 0 <= index < len(self.responses) and self.responses[index] is not None

    def record_response(self, index: int, answer: Answer) -> bool:
        """
        Record an answer for a question.

        Args:
            index: Question index
            answer: The chosen option

        Returns:
            True if recorded, False if the slot was already answered
            or the index is out of range
        """
        if not 0 <= index < len(self.responses):
            return False
        if self.responses[index] is not None:
            return False
        self.responses[index] = answer
        return True

    def response_indices(self) -> List[Optional[int]]:
        """Option indices of the responses, trailing empty slots trimmed."""
        indices = [r.option_index if r is not None else None for r in self.responses]
        while indices and indices[-1] is None:
            indices.pop()
        return indices

    def compress(self) -> CompactPlayer:
        """Reduce to the wire form; Answer objects and is_active are dropped."""
        return CompactPlayer(
            id=self.id,
            completion_time=self.completion_time,
            last_reveal=self.last_reveal,
            responses=self.response_indices(),
        )

    @classmethod
    def expand(
        cls,
        compact: CompactPlayer,
        questions: Sequence[Question],
        question_count: int,
    ) -> "Player":
        """
        Rebuild a player from its wire form.

        Each saved index is resolved against the question's options.
        Slots beyond the saved list, empty entries and indices that do
        not resolve stay unanswered.
        """
        player = cls.new(compact.id, question_count)
        player.completion_time = compact.completion_time
        player.last_reveal = compact.last_reveal
        player.fill_from_indices(compact.responses, questions)
        return player

    def fill_from_indices(
        self,
        indices: Sequence[Optional[int]],
        questions: Sequence[Question],
    ) -> int:
        """
        Fill empty slots from saved option indices.

        Returns:
            Number of slots filled
        """
        filled = 0
        for i, option_index in enumerate(indices):
            if i >= len(self.responses) or i >= len(questions):
                break
            if self.responses[i] is not None:
                continue
            answer = questions[i].option(option_index)
            if answer is not None:
                self.responses[i] = answer
                filled += 1
        return filled

    def merge_with(self, other: Optional["Player"]) -> None:
        """
        Fill this player's empty slots from another copy of the player.

        Existing responses always win, so merging is idempotent and
        replaying an older snapshot never rolls anything back.
        """
        if other is None:
            return
        for i, (mine, theirs) in enumerate(zip(self.responses, other.responses)):
            if mine is None:
                self.responses[i] = theirs
