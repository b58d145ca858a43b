"""
trivia_duel.session - Device-side game flow
===========================================

GameSession drives one device's view of a conversation: creating a game,
opening a received message, answering, revealing, sending and nudging.
It owns no UI; each step returns what the caller should show next.

Usage:
    session = GameSession("alice", transport, ResponseCache(store), source)
    session.start_game("9", GameMode.TURN_BASED.index)
    screen = session.open(payload)
    action = session.answer(2)
"""

from __future__ import annotations
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional, Protocol

from ._cache.response_cache import RecentCategories, ResponseCache
from ._model import captions, modes
from ._model.game import TriviaGame
from ._model.modes import GameMode, StartAction
from ._wire.codec import decode, encode_game
from .errors import QuestionSourceError
from .question_source import QuestionSource, populate_questions
from .types import GameSummary, PlayerSummary

logger = logging.getLogger("trivia_duel.session")

DEFAULT_NUDGE_DELAY = timedelta(minutes=10)
TICK_INTERVAL = 0.1


class MessageTransport(Protocol):
    """Where outgoing game payloads go."""

    def insert(self, payload: str, caption: Optional[str]) -> None:
        """Stage a message for the user to send."""
        ...

    def send(self, payload: str, caption: Optional[str]) -> None:
        """Send a message immediately."""
        ...


class Screen(Enum):
    """Which view a game should be shown in."""
    CATEGORY_SELECT = "category_select"
    RESULTS = "results"
    WAITING = "waiting"
    QUESTION = "question"


class TurnAction(Enum):
    """What happens after the local player picks an option."""
    REVEAL = "reveal"      # Show the correct answer, then call reveal()
    WAIT = "wait"          # Challenger's opening answer, held until the opponent joins
    SEND = "send"          # Answer sent to the opponent
    IGNORED = "ignored"    # Answer refused


class GameSession:
    """
    One participant's session in a conversation.

    Holds at most one open game plus a queue of locally created games
    that have not been opened yet (rapid-fire runs played before sending).
    """

    def __init__(
        self,
        participant_id: str,
        transport: MessageTransport,
        cache: ResponseCache,
        question_source: Optional[QuestionSource] = None,
        recent: Optional[RecentCategories] = None,
        nudge_delay: timedelta = DEFAULT_NUDGE_DELAY,
    ):
        self.participant_id = participant_id
        self.transport = transport
        self.cache = cache
        self.question_source = question_source
        self.recent = recent
        self.nudge_delay = nudge_delay

        self.game: Optional[TriviaGame] = None
        self.screen: Optional[Screen] = None
        self.game_queue: List[TriviaGame] = []
        self._clock_running = False

    # ── Creating a game ──────────────────────────────────────

    def start_game(self, category_id: str, mode_index: int) -> TriviaGame:
        """
        Create a game, fetch its questions and start it per its mode.

        A turn-based game is staged as a challenge message straight away;
        a rapid-fire game is queued so the challenger plays first.

        Raises:
            QuestionSourceError: If no questions could be loaded; nothing
                is staged or queued in that case
            ValueError: If mode_index is not a known mode
        """
        game = TriviaGame(category_id=category_id, mode_index=mode_index)
        game.add_player(self.participant_id)

        if self.question_source is None:
            raise QuestionSourceError(category_id, game.num_questions, "no question source configured")
        populate_questions(game, self.question_source)

        if self.recent is not None:
            self.recent.add(category_id)

        action = modes.start(game)
        game.prepare_to_send()

        if action is StartAction.SEND_CHALLENGE:
            self.transport.insert(encode_game(game), captions.CHALLENGE)
            game.add_player(self.participant_id)
            logger.info(
                f"[{game.id}] Challenge staged ({game.mode.display_name})",
                extra={"game_id": game.id},
            )
        else:
            game.add_player(self.participant_id)
            self.game_queue.append(game)
            logger.info(
                f"[{game.id}] Queued for local play ({game.mode.display_name})",
                extra={"game_id": game.id},
            )

        return game

    # ── Opening and receiving ────────────────────────────────

    def open(self, payload: Optional[str] = None) -> Screen:
        """
        Open the queued game or the game in a selected message.

        Args:
            payload: Payload of the selected message, if any

        Returns:
            The screen to show
        """
        self.stop_clock(record=False)

        if self.game_queue:
            self.game = self.game_queue.pop()
            self.game.add_player(self.participant_id)
            self.screen = Screen.QUESTION
            return self.screen

        game = decode(payload, self.participant_id)
        self.game = game
        if game is None:
            self.screen = Screen.CATEGORY_SELECT
            return self.screen

        self.cache.load_responses(game)
        self.cache.empty_cache(game, if_outdated=True)

        if game.is_complete:
            self.screen = Screen.RESULTS
        elif game.is_waiting:
            self.screen = Screen.WAITING
        else:
            self.screen = Screen.QUESTION
            active = game.active_player
            # Replay the previous round's reveal for the receiving player
            if active is not None and active.id != game.sender_id and game.current_index != 0:
                game.current_index -= 1
            modes.ready(game)

        logger.info(
            f"[{game.id}] Opened on {self.screen.value} at Q{game.current_index}",
            extra={"game_id": game.id},
        )
        return self.screen

    def receive(self, payload: Optional[str]) -> Optional[Screen]:
        """
        Merge a message that arrived while the game is open.

        Returns:
            The new screen if the game moved on, None otherwise
        """
        game = self.game
        if game is None or self.screen is Screen.RESULTS:
            return None

        incoming = decode(payload)
        if incoming is None or incoming.id != game.id:
            return None

        game.merge_players(incoming)
        logger.debug(f"[{game.id}] Merged incoming players", extra={"game_id": game.id})

        if game.all_players_answered:
            return self.validate()
        return None

    def validate(self) -> Optional[Screen]:
        """Pick the screen the open game belongs on now."""
        game = self.game
        if game is None:
            return None
        if game.is_complete:
            self.screen = Screen.RESULTS
        elif game.is_waiting:
            self.screen = Screen.WAITING
        else:
            self.screen = Screen.QUESTION
        return self.screen

    # ── Playing ──────────────────────────────────────────────

    def answer(self, option_index: int) -> TurnAction:
        """
        Answer the current question with the given option.

        Returns:
            What the caller should do next
        """
        game = self.game
        if game is None or self.screen is not Screen.QUESTION:
            return TurnAction.IGNORED
        player = game.active_player
        if player is None or player.completion_time is not None:
            return TurnAction.IGNORED
        question = game.current_question
        if question is None or question.option(option_index) is None or game.has_answered(player):
            return TurnAction.IGNORED

        if game.mode is GameMode.RAPID_FIRE and not game.has_next_question:
            self.stop_clock()

        if not game.record_answer(option_index):
            return TurnAction.IGNORED
        self.cache.cache_responses(game)

        if game.mode is GameMode.RAPID_FIRE or game.all_players_answered:
            return TurnAction.REVEAL
        if player is game.challenger and game.current_index == 0:
            self.screen = Screen.WAITING
            return TurnAction.WAIT

        self.send()
        return TurnAction.SEND

    def reveal(self) -> bool:
        """
        Finish the current question's reveal.

        Moves to the next question, or sends the game when this was the
        last one.

        Returns:
            True if there is another question to answer
        """
        game = self.game
        if game is None:
            return False

        has_next = game.reveal()
        if not has_next:
            if game.mode is GameMode.RAPID_FIRE:
                self.stop_clock()
            self.send()
        return has_next

    def send(self) -> None:
        """
        Send the open game to the opponent.

        Raises:
            GameEncodingError: If the game cannot be serialized
        """
        game = self.game
        if game is None:
            return

        game.prepare_to_send()
        self.transport.send(encode_game(game), captions.READY)
        game.add_player(self.participant_id)
        self.cache.empty_cache(game)
        self.screen = Screen.RESULTS if game.is_complete else Screen.WAITING
        logger.info(f"[{game.id}] Sent at Q{game.current_index}", extra={"game_id": game.id})

    def can_nudge(self, now: Optional[datetime] = None) -> bool:
        """Whether a reminder may be sent for the open game."""
        game = self.game
        if game is None or self.screen is not Screen.WAITING:
            return False
        if game.nudge_index == game.current_index:
            return False
        now = now or datetime.now(timezone.utc)
        return now - game.sent_time >= self.nudge_delay

    def nudge(self, now: Optional[datetime] = None) -> bool:
        """
        Resend the open game as a reminder.

        Returns:
            True if a reminder was sent
        """
        if not self.can_nudge(now):
            return False
        game = self.game
        game.nudge(now)
        self.transport.send(encode_game(game), captions.NUDGED)
        logger.info(
            f"[{game.id}] Nudged opponent at Q{game.current_index}",
            extra={"game_id": game.id},
        )
        return True

    # ── Rapid-fire clock ─────────────────────────────────────

    def start_clock(self) -> Optional[float]:
        """
        Start the rapid-fire clock.

        Returns:
            Seconds remaining, None if the open game has no clock
        """
        game = self.game
        if game is None or game.mode.time_limit is None:
            return None
        game.reset_time()
        self._clock_running = True
        return game.time_remaining

    def tick(self, seconds: float = TICK_INTERVAL) -> bool:
        """
        Advance the clock. When time runs out the run is sent.

        Returns:
            True while the clock is still running
        """
        game = self.game
        if game is None or not self._clock_running:
            return False
        if game.tick(seconds):
            return True

        logger.info(f"[{game.id}] Time expired", extra={"game_id": game.id})
        self.stop_clock()
        self.send()
        return False

    def stop_clock(self, record: bool = True) -> None:
        """Stop the clock, storing the completion time unless told not to."""
        if not self._clock_running:
            return
        self._clock_running = False
        if record and self.game is not None:
            self.game.record_time()

    # ── Display ──────────────────────────────────────────────

    def preview_caption(self, payload: Optional[str], is_pending: bool = False) -> Optional[str]:
        """
        Caption for a message bubble in the transcript.

        Args:
            payload: The message's payload
            is_pending: True for a staged message not sent yet

        Returns:
            The caption, None if the payload holds no game
        """
        game = decode(payload, self.participant_id)
        if game is None:
            return None
        self.cache.load_responses(game)

        result_caption = game.result.caption
        if result_caption is not None:
            return result_caption
        if is_pending:
            return captions.CHALLENGE

        challenger = game.challenger
        is_challenger = challenger is not None and challenger.id == self.participant_id
        return modes.caption(game, is_challenger)

    def summary(self) -> Optional[GameSummary]:
        """Snapshot of the open game for display."""
        game = self.game
        if game is None:
            return None

        question = game.current_question
        challenger = game.challenger
        is_challenger = challenger is not None and challenger.id == self.participant_id
        result = game.result

        players: List[PlayerSummary] = [
            {
                "id": p.id,
                "is_active": bool(p.is_active),
                "score": p.score,
                "answered": p.answered_count,
                "completion_time": p.completion_time,
            }
            for p in game.players
        ]

        return {
            "game_id": game.id,
            "category_id": game.category_id,
            "mode": game.mode.display_name,
            "question_number": game.current_index + 1,
            "total_questions": game.num_questions,
            "screen": (self.screen or Screen.QUESTION).value,
            "result": result.value,
            "caption": result.caption or modes.caption(game, is_challenger),
            "question": question.text if question else None,
            "options": [o.text for o in question.options] if question else [],
            "players": players,
        }
