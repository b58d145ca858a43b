"""
trivia_duel.types - TypedDict schemas for external records
==========================================================

Documents the raw records received from the question bank and the
summary dictionary produced for display. All types are exported from
the main package:

    from trivia_duel import RawQuestion, GameSummary
"""

from typing import List, Optional, TypedDict


# ============================================
# Question bank records
# ============================================

class RawQuestion(TypedDict):
    """One question record as returned by the question bank.

    With ``encode=base64`` every text field is base64 encoded.

    Fields
    ------
    category : str
        Category name, e.g. "Science: Computers".
    type : str
        "multiple" or "boolean".
    difficulty : str
        "easy", "medium" or "hard".
    question : str
        The question text.
    correct_answer : str
        Text of the correct option.
    incorrect_answers : List[str]
        Texts of the incorrect options (1 for boolean, 3 for multiple).
    """
    category: str
    type: str
    difficulty: str
    question: str
    correct_answer: str
    incorrect_answers: List[str]


class QuestionBankResponse(TypedDict):
    """Envelope returned by the question bank.

    ``response_code`` is 0 on success; any other value means the bank
    could not satisfy the request (no results, invalid parameter, ...).
    """
    response_code: int
    results: List[RawQuestion]


# ============================================
# Display summary
# ============================================

class PlayerSummary(TypedDict):
    """One player's standing."""
    id: str
    is_active: bool
    score: int
    answered: int
    completion_time: Optional[float]


class GameSummary(TypedDict):
    """Snapshot of a game for display.

    Fields
    ------
    game_id : str
    category_id : str
    mode : str
        Mode display name.
    question_number : int
        1-based number of the current question.
    total_questions : int
    screen : str
        Which view the game should show (see Screen).
    result : str
        "win", "lose", "draw" or "tbd".
    caption : Optional[str]
        Caption for the message bubble.
    question : Optional[str]
        Text of the current question, if loaded.
    options : List[str]
        Option texts of the current question in display order.
    players : List[PlayerSummary]
    """
    game_id: str
    category_id: str
    mode: str
    question_number: int
    total_questions: int
    screen: str
    result: str
    caption: Optional[str]
    question: Optional[str]
    options: List[str]
    players: List[PlayerSummary]
