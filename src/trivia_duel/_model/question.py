# Area: Model
"""
trivia_duel._model.question - Question value type
=================================================

A question with its fixed, already ordered option list. Questions are
created once per game from the question bank and never change afterwards.
"""

import random
from dataclasses import dataclass, field
from functools import total_ordering
from typing import List, Optional, Sequence, Tuple

from .answer import Answer, build_options

DIFFICULTY_LEVELS = ["easy", "medium", "hard"]


@total_ordering
@dataclass(eq=False)
class Question:
    """
    A multiple choice question.

    Questions compare by (difficulty_level, text) when both have a
    difficulty, otherwise by text alone. Equality is by text.

    Attributes:
        text: The question text
        options: Ordered options, exactly one of them correct
        difficulty_level: 0 (easy) to 2 (hard), None when unknown
    """

    text: str
    options: List[Answer] = field(default_factory=list)
    difficulty_level: Optional[int] = None

    @classmethod
    def build(
        cls,
        text: str,
        correct_text: str,
        incorrect_texts: Sequence[str],
        difficulty_level: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "Question":
        """Create a question, ordering and numbering its options."""
        return cls(
            text=text,
            options=build_options(correct_text, incorrect_texts, rng=rng),
            difficulty_level=difficulty_level,
        )

    @property
    def correct_answer(self) -> Optional[Answer]:
        for option in self.options:
            if option.is_correct:
                return option
        return None

    def option(self, index: Optional[int]) -> Optional[Answer]:
        """Return the option at a display position, None if out of range."""
        if index is None or not 0 <= index < len(self.options):
            return None
        return self.options[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Question):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    def _sort_key(self) -> Tuple[bool, int, str]:
        # Unknown difficulty sorts after every known level
        unknown = self.difficulty_level is None
        return (unknown, 0 if unknown else self.difficulty_level, self.text)

    def __lt__(self, other: "Question") -> bool:
        return self._sort_key() < other._sort_key()


def difficulty_from_name(name: Optional[str]) -> Optional[int]:
    """Map a question bank difficulty tag to its level, None if unknown."""
    if name is None:
        return None
    try:
        return DIFFICULTY_LEVELS.index(name.strip().lower())
    except ValueError:
        return None
