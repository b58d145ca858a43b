# Area: Model
"""
Game model - questions, players, modes and the game aggregate.

This package handles:
- Option ordering and numbering for questions
- Per-player response tracking and merging
- Mode rules (turn-based and rapid-fire)
- Completion and result derivation
"""

from .answer import Answer, build_options
from .question import Question, difficulty_from_name
from .player import Player
from .modes import GameMode, StartAction
from .result import GameResult, break_tie, derive_result
from .game import TriviaGame

__all__ = [
    "Answer",
    "build_options",
    "Question",
    "difficulty_from_name",
    "Player",
    "GameMode",
    "StartAction",
    "GameResult",
    "break_tie",
    "derive_result",
    "TriviaGame",
]
