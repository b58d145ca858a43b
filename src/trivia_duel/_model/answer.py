# Area: Model
"""
trivia_duel._model.answer - Answer options and their ordering
=============================================================

An Answer is one selectable option of a question. Options are built once
per game from the question bank's correct/incorrect texts, ordered for
display, and then numbered. The option number is all that survives when
a response travels over the wire.
"""

import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

LETTERS = ["a", "b", "c", "d"]


@dataclass(eq=False)
class Answer:
    """
    One option of a question.

    Two answers are the same answer when their text matches, even if they
    were rebuilt independently on different devices.

    Attributes:
        is_correct: True for the single correct option of a question
        text: Display text of the option
        option_index: 0-based display position, assigned after ordering
    """

    is_correct: bool
    text: str
    option_index: Optional[int] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Answer):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    @classmethod
    def correct(cls, text: str) -> "Answer":
        return cls(is_correct=True, text=text)

    @classmethod
    def incorrect(cls, text: str) -> "Answer":
        return cls(is_correct=False, text=text)

    @property
    def letter(self) -> str:
        return LETTERS[self.option_index or 0]

    @property
    def numeric_value(self) -> Optional[float]:
        """Numeric reading of the text (commas ignored), or None."""
        try:
            return float(self.text.replace(",", ""))
        except ValueError:
            return None


def build_options(
    correct_text: str,
    incorrect_texts: Sequence[str],
    rng: Optional[random.Random] = None,
) -> List[Answer]:
    """
    Build the ordered, numbered option list for one question.

    Ordering, first match wins:
    1. All options numeric: ascending by value.
    2. Correct text is "False": natural order reversed (True, False).
    3. Correct text is "True": natural order kept (True, False).
    4. Anything else: shuffled.

    Args:
        correct_text: Text of the correct option
        incorrect_texts: Texts of the incorrect options
        rng: Random source for the shuffle (defaults to the module RNG)

    Returns:
        Options with option_index equal to their display position
    """
    options = [Answer.correct(correct_text)]
    options += [Answer.incorrect(text) for text in incorrect_texts]
    numeric = [option.numeric_value for option in options]

    if all(value is not None for value in numeric):
        options.sort(key=lambda option: option.numeric_value)
    elif correct_text == "False":
        options.reverse()
    elif correct_text != "True":
        (rng or random).shuffle(options)

    return [replace(option, option_index=i) for i, option in enumerate(options)]
