# Area: Model
"""
trivia_duel._model.modes - Game mode rulesets
=============================================

The closed set of game modes and the behavior that differs between them.
A game stores only the mode's index; every mode-specific decision goes
through one of the dispatch functions below.

TURN_BASED: players alternate, one question at a time, no clock.
RAPID_FIRE: each player answers every question against the clock on
their own, then the two runs are compared.
"""

from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, Optional

from . import captions

if TYPE_CHECKING:
    from .game import TriviaGame


class GameMode(Enum):
    """Available game modes. The value is the wire index."""
    TURN_BASED = 0
    RAPID_FIRE = 1

    @classmethod
    def from_index(cls, index: int) -> Optional["GameMode"]:
        try:
            return cls(index)
        except ValueError:
            return None

    @property
    def index(self) -> int:
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @property
    def num_questions(self) -> int:
        return _QUESTION_COUNTS[self]

    @property
    def time_limit(self) -> Optional[float]:
        """Seconds allowed for a rapid-fire run, None without a clock."""
        if self is GameMode.RAPID_FIRE:
            return float(10 * self.num_questions)
        return None

    @property
    def rules(self) -> str:
        if self is GameMode.RAPID_FIRE:
            return (
                f"Answer {self.num_questions} questions in a row within "
                f"{int(self.time_limit)} seconds, then challenge your "
                f"opponent to do the same."
            )
        return f"Take turns answering {self.num_questions} questions with no time limit"


_DISPLAY_NAMES = {
    GameMode.TURN_BASED: "Trivia duel",
    GameMode.RAPID_FIRE: "Rapid-fire",
}

_ICONS = {
    GameMode.TURN_BASED: "arrow.triangle.2.circlepath",
    GameMode.RAPID_FIRE: "hourglass",
}

_QUESTION_COUNTS = {
    GameMode.TURN_BASED: 4,
    GameMode.RAPID_FIRE: 6,
}


class StartAction(Enum):
    """What a freshly populated game should do first."""
    SEND_CHALLENGE = "send_challenge"    # Transmit before anyone answers
    PLAY_LOCALLY = "play_locally"        # Queue for local play, send later


def is_complete(game: "TriviaGame") -> bool:
    """
    Check whether a game is over.

    Args:
        game: The game to evaluate

    Returns:
        True if no more answers can change the outcome
    """
    if game.mode is GameMode.TURN_BASED:
        return not game.has_next_question and game.all_players_answered

    if len(game.players) < 2:
        return False
    return all(p.completion_time is not None for p in game.players)


def caption(game: Optional["TriviaGame"], is_challenger: bool) -> Optional[str]:
    """
    Caption for a game that is still in progress.

    Args:
        game: The game in progress
        is_challenger: True if the local player sent the challenge

    Returns:
        Caption text, or None when there is nothing to say
    """
    if game is None:
        return None

    if game.mode is GameMode.RAPID_FIRE:
        return _rapid_fire_caption(game, is_challenger)
    return _turn_based_caption(game, is_challenger)


def _turn_based_caption(game: "TriviaGame", is_challenger: bool) -> str:
    self_answered = game.has_answered(game.active_player)
    others_answered = game.have_answered(game.inactive_players)

    if self_answered and not others_answered:
        return captions.WAITING
    if not self_answered and game.nudge_index == game.current_index:
        return captions.NUDGED
    if game.current_index == 0 and not self_answered and not others_answered:
        return captions.CHALLENGE_SENT if is_challenger else captions.CHALLENGE
    return captions.READY


def _rapid_fire_caption(game: "TriviaGame", is_challenger: bool) -> Optional[str]:
    challenger = game.challenger
    if challenger is None:
        return None

    score = f"{challenger.score}/{len(challenger.responses)}"
    if is_challenger:
        return captions.RAPID_FIRE_SENT.format(score=score)
    return captions.RAPID_FIRE_RECEIVED.format(score=score)


def start(game: "TriviaGame") -> StartAction:
    """Decide how a newly populated game begins."""
    if game.mode is GameMode.RAPID_FIRE:
        return StartAction.PLAY_LOCALLY
    return StartAction.SEND_CHALLENGE


def ready(game: "TriviaGame") -> None:
    """Restore the question cursor when a game is reopened."""
    if game.mode is GameMode.TURN_BASED:
        game.current_index = game.initial_index
