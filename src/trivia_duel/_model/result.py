# Area: Model
"""
trivia_duel._model.result - Outcome of a game
=============================================

Derives win/lose/draw for the local player from a finished game. Ties on
score are draws in turn-based games; in rapid-fire games the faster
completion time breaks them.
"""

from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from . import captions
from .modes import GameMode

if TYPE_CHECKING:
    from .game import TriviaGame
    from .player import Player


class GameResult(Enum):
    """Outcome from the local player's point of view."""
    WIN = "win"
    LOSE = "lose"
    DRAW = "draw"
    TBD = "tbd"

    @property
    def caption(self) -> Optional[str]:
        return _CAPTIONS.get(self)


_CAPTIONS = {
    GameResult.WIN: captions.WIN,
    GameResult.LOSE: captions.LOSE,
    GameResult.DRAW: captions.TIE,
}


def fastest_time(players: Sequence["Player"]) -> Optional[float]:
    times = [p.completion_time for p in players if p.completion_time is not None]
    return min(times) if times else None


def break_tie(winners: Sequence["Player"]) -> GameResult:
    """
    Resolve a score tie by completion time.

    Args:
        winners: Players sharing the top score, including the active one

    Returns:
        WIN or LOSE if exactly one player was fastest, DRAW otherwise
    """
    fastest = fastest_time(winners)
    fastest_players = [p for p in winners if p.completion_time == fastest]

    if len(fastest_players) == 1:
        active = next((p for p in winners if p.is_active), None)
        own_time = active.completion_time if active else None
        return GameResult.WIN if own_time == fastest else GameResult.LOSE

    return GameResult.DRAW


def derive_result(game: "TriviaGame") -> GameResult:
    """Compute the outcome of a game for its active player."""
    if not game.is_complete:
        return GameResult.TBD

    top_score = max((p.score for p in game.players), default=None)
    active = game.active_player

    if active is None or active.score != top_score:
        return GameResult.LOSE

    winners = [p for p in game.players if p.score == top_score]
    if len(winners) == 1:
        return GameResult.WIN
    if game.mode is GameMode.TURN_BASED:
        return GameResult.DRAW

    return break_tie(winners)
