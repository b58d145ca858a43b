"""
trivia_duel - Two-player trivia played over chat messages
=========================================================

The whole game travels inside a message payload. Each device decodes
it, plays its turn and sends the updated game back; nothing is shared
except the payload.

Quick Start:
    from trivia_duel import (
        GameSession, GameMode, ResponseCache, InMemoryStore,
        OpenTDBQuestionSource,
    )
    session = GameSession(
        "alice", transport, ResponseCache(InMemoryStore()),
        question_source=OpenTDBQuestionSource(),
    )
    session.start_game("9", GameMode.TURN_BASED.index)

Model Only:
    from trivia_duel import decode, encode_game
    game = decode(payload, participant_id="bob")
    game.record_answer(2)
    game.prepare_to_send()
    payload = encode_game(game)

Type Definitions
----------------
    from trivia_duel import RawQuestion, QuestionBankResponse, GameSummary
"""

from ._model import (
    Answer,
    build_options,
    Question,
    difficulty_from_name,
    Player,
    GameMode,
    StartAction,
    GameResult,
    break_tie,
    derive_result,
    TriviaGame,
)
from ._wire import CompactAnswer, CompactQuestion, CompactPlayer, CompactGame
from ._wire.codec import compress, expand, encode, encode_game, decode, PAYLOAD_KEY
from ._cache import (
    KeyValueStore,
    InMemoryStore,
    SQLiteStore,
    ResponseCache,
    RecentCategories,
)
from .question_source import QuestionSource, OpenTDBQuestionSource, populate_questions
from .session import GameSession, MessageTransport, Screen, TurnAction
from .config import load_config, validate_config
from .errors import (
    TriviaDuelError,
    PayloadDecodeError,
    QuestionSourceError,
    GameEncodingError,
    ConfigError,
)
from .types import RawQuestion, QuestionBankResponse, PlayerSummary, GameSummary
from ._shared import setup_logging

__version__ = "1.0.0"

__all__ = [
    # Model
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
    # Wire
    "CompactAnswer",
    "CompactQuestion",
    "CompactPlayer",
    "CompactGame",
    "compress",
    "expand",
    "encode",
    "encode_game",
    "decode",
    "PAYLOAD_KEY",
    # Cache
    "KeyValueStore",
    "InMemoryStore",
    "SQLiteStore",
    "ResponseCache",
    "RecentCategories",
    # Questions
    "QuestionSource",
    "OpenTDBQuestionSource",
    "populate_questions",
    # Session
    "GameSession",
    "MessageTransport",
    "Screen",
    "TurnAction",
    # Config and logging
    "load_config",
    "validate_config",
    "setup_logging",
    # Errors
    "TriviaDuelError",
    "PayloadDecodeError",
    "QuestionSourceError",
    "GameEncodingError",
    "ConfigError",
    # Types
    "RawQuestion",
    "QuestionBankResponse",
    "PlayerSummary",
    "GameSummary",
]
