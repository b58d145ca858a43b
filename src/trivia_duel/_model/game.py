# Area: Model
"""
trivia_duel._model.game - Trivia game aggregate
===============================================

The root entity of a game: category, mode, questions, up to two players
and the question cursor. Each device holds its own instance; instances
are only ever reconciled through the message payload and the merge
operations, never shared.

Everything UI-facing (whose turn it is, whether the game is over, who
won) is derived from this data on demand.
"""

from __future__ import annotations
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import ClassVar, List, Optional, Union

from . import modes
from .modes import GameMode
from .player import Player
from .question import Question
from .result import GameResult, derive_result

logger = logging.getLogger("trivia_duel.model.game")


def new_game_id() -> str:
    return uuid.uuid4().hex[:12]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TriviaGame:
    """
    Full state of one game between two players.

    Attributes:
        category_id: Question bank category identifier
        mode_index: Index of the GameMode
        id: Game identifier, stable across devices
        current_index: Question the game is currently on
        nudge_index: Question index at which the last nudge was sent
        players: Up to two players, the challenger first
        questions: Question list, populated once from the question bank
        sent_time: When the game was last transmitted
        time_remaining: Rapid-fire clock, only set while a run is live
        sender_id: Player who last transmitted the game
    """

    MAX_PLAYERS: ClassVar[int] = 2

    category_id: str
    mode_index: int = 0
    id: str = field(default_factory=new_game_id)
    current_index: int = 0
    nudge_index: Optional[int] = None
    players: List[Player] = field(default_factory=list)
    questions: List[Question] = field(default_factory=list)
    sent_time: datetime = field(default_factory=_utcnow)
    time_remaining: Optional[float] = None
    sender_id: Optional[str] = None

    def __post_init__(self):
        if GameMode.from_index(self.mode_index) is None:
            raise ValueError(f"Unknown game mode index: {self.mode_index}")

    # ── Mode and questions ───────────────────────────────────

    @property
    def mode(self) -> GameMode:
        return GameMode(self.mode_index)

    @property
    def num_questions(self) -> int:
        return self.mode.num_questions

    @property
    def is_ready(self) -> bool:
        """True once the question list matches the mode's question count."""
        return len(self.questions) == self.num_questions

    @property
    def current_question(self) -> Optional[Question]:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def has_next_question(self) -> bool:
        return self.current_index + 1 < self.num_questions

    @property
    def initial_index(self) -> int:
        """
        Question to resume on when the game is reopened.

        The latest question the active player has answered since their
        last reveal, or the last revealed question if there is none.
        """
        player = self.active_player
        if player is None or player.last_reveal is None:
            return self.current_index

        i = self.num_questions
        while i > player.last_reveal and i > 0:
            i -= 1
            if player.has_answered(i):
                break
        return i

    # ── Players ──────────────────────────────────────────────

    @property
    def active_player(self) -> Optional[Player]:
        return next((p for p in self.players if p.is_active), None)

    @property
    def inactive_players(self) -> List[Player]:
        return [p for p in self.players if not p.is_active]

    @property
    def challenger(self) -> Optional[Player]:
        return self.players[0] if self.players else None

    def find_player(self, player_id: Optional[str]) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def set_active_player(self, player: Union[Player, str, None]) -> None:
        """Mark one player active (by object or id) and all others inactive."""
        player_id = player.id if isinstance(player, Player) else player
        for p in self.players:
            p.is_active = player_id is not None and p.id == player_id

    def add_player(self, participant_id: str) -> Optional[Player]:
        """
        Make the local participant the active player.

        A new player is created when there is a free seat; a participant
        arriving after both seats are taken gets no active player.

        Returns:
            The active player, or None if the game is full
        """
        if len(self.players) < self.MAX_PLAYERS and self.find_player(participant_id) is None:
            self.players.append(Player.new(participant_id, self.num_questions))
            logger.info(f"[{self.id}] Player {participant_id} joined as player {len(self.players)}")

        player = self.find_player(participant_id)
        self.set_active_player(player)
        return player

    def has_answered(self, player: Optional[Player]) -> bool:
        """Whether a player has answered the current question."""
        return player is not None and player.has_answered(self.current_index)

    def have_answered(self, players: Optional[List[Player]], minimum: int = 1) -> bool:
        """Whether at least `minimum` players were given and all answered."""
        if players is None:
            return False
        return len(players) >= minimum and all(self.has_answered(p) for p in players)

    @property
    def all_players_answered(self) -> bool:
        return self.have_answered(self.players, minimum=self.MAX_PLAYERS)

    # ── Derived state ────────────────────────────────────────

    @property
    def is_complete(self) -> bool:
        return modes.is_complete(self)

    @property
    def is_waiting(self) -> bool:
        """True when the local player answered and the opponent has not."""
        inactive = self.inactive_players
        if inactive and self.have_answered(inactive):
            return False
        return self.has_answered(self.active_player)

    @property
    def result(self) -> GameResult:
        return derive_result(self)

    # ── Mutations ────────────────────────────────────────────

    def record_answer(self, option_index: int) -> bool:
        """
        Record the active player's answer to the current question.

        Returns:
            True if recorded; False when questions are not loaded, there
            is no active player, the option does not exist or the
            question was already answered
        """
        player = self.active_player
        question = self.current_question
        if not self.is_ready or player is None or question is None:
            return False

        answer = question.option(option_index)
        if answer is None:
            return False

        recorded = player.record_response(self.current_index, answer)
        if recorded:
            logger.debug(
                f"[{self.id}] {player.id} answered Q{self.current_index} "
                f"with option {option_index}"
            )
        return recorded

    def reveal(self) -> bool:
        """
        Mark the current question revealed and move to the next one.

        Returns:
            True if there was a next question to move to
        """
        player = self.active_player
        if player is not None:
            player.last_reveal = self.current_index

        has_next = self.has_next_question
        if has_next:
            self.current_index += 1
        return has_next

    def reset_time(self) -> None:
        """Start the rapid-fire clock unless it is already running."""
        if self.time_remaining is None and self.mode.time_limit is not None:
            self.time_remaining = self.mode.time_limit

    def tick(self, seconds: float) -> bool:
        """
        Run the clock down.

        Returns:
            True while time remains
        """
        if self.time_remaining is None:
            return False
        self.time_remaining = max(0.0, self.time_remaining - seconds)
        return self.time_remaining > 0

    def record_time(self) -> None:
        """Store the active player's completion time from the clock."""
        limit = self.mode.time_limit
        player = self.active_player
        if self.time_remaining is None or limit is None or player is None:
            return
        player.completion_time = round(limit - self.time_remaining, 2)

    def prepare_to_send(self, now: Optional[datetime] = None) -> None:
        """
        Strip device-local state before the game is transmitted.

        The receiving device works out its own active player. A rapid-fire
        game that is not finished goes out at question 0 so the opponent
        starts a fresh run.
        """
        active = self.active_player
        self.sent_time = now or _utcnow()
        self.sender_id = active.id if active else None
        self.time_remaining = None
        self.set_active_player(None)

        if self.mode is GameMode.RAPID_FIRE and not self.is_complete:
            self.current_index = 0

    def nudge(self, now: Optional[datetime] = None) -> None:
        """Mark a resend that only reminds the opponent; no turn advances."""
        self.sent_time = now or _utcnow()
        self.nudge_index = self.current_index

    def merge_players(self, other: Optional["TriviaGame"]) -> None:
        """
        Merge another copy of this game's players into this one.

        Incoming players are matched by id; unknown ids are ignored.
        """
        if other is None:
            return
        for incoming in other.players:
            existing = self.find_player(incoming.id)
            if existing is None:
                continue
            existing.merge_with(incoming)
            if existing.completion_time is None:
                existing.completion_time = incoming.completion_time
