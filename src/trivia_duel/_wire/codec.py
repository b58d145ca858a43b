# Area: Wire
"""
trivia_duel._wire.codec - Game payload encoding and decoding
============================================================

Turns a TriviaGame into the compact payload attached to a message and
back. The payload is a URL query string with a single ``g`` item that
holds the compact game as JSON.

Decoding never raises: a missing or malformed payload means "no game",
and the caller falls back to creating one.
"""

from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlsplit

from pydantic import ValidationError

from .schemas import CompactAnswer, CompactGame, CompactQuestion
from .._model.answer import Answer
from .._model.game import TriviaGame
from .._model.modes import GameMode
from .._model.player import Player
from .._model.question import Question
from ..errors import GameEncodingError, PayloadDecodeError

logger = logging.getLogger("trivia_duel.wire.codec")

PAYLOAD_KEY = "g"


# ══════════════════════════════════════════════════════════════
# COMPRESS / EXPAND
# ══════════════════════════════════════════════════════════════

def compress(game: TriviaGame) -> CompactGame:
    """
    Build the compact wire form of a game.

    The game itself is left untouched. Responses are reduced to option
    indices and active-player flags are dropped.
    """
    return CompactGame(
        id=game.id,
        category_id=game.category_id,
        current_index=game.current_index,
        mode_index=game.mode_index,
        nudge_index=game.nudge_index,
        players=[p.compress() for p in game.players],
        questions=[_compress_question(q) for q in game.questions],
        sent_time=game.sent_time.timestamp(),
        time_remaining=game.time_remaining,
        sender_id=game.sender_id,
    )


def _compress_question(question: Question) -> CompactQuestion:
    return CompactQuestion(
        difficulty=question.difficulty_level,
        text=question.text,
        options=[
            CompactAnswer(
                correct=1 if option.is_correct else 0,
                option_index=option.option_index,
                text=option.text,
            )
            for option in question.options
        ],
    )


def expand(compact: CompactGame) -> TriviaGame:
    """
    Rebuild a full game from its compact form.

    Raises:
        PayloadDecodeError: If the compact game breaks a game invariant
    """
    mode = GameMode.from_index(compact.mode_index)
    if mode is None:
        raise PayloadDecodeError(f"unknown mode index {compact.mode_index}")
    if compact.current_index >= mode.num_questions:
        raise PayloadDecodeError(
            f"question index {compact.current_index} out of range "
            f"for {mode.num_questions} questions"
        )

    try:
        sent_time = datetime.fromtimestamp(compact.sent_time, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise PayloadDecodeError(f"invalid sent time: {e}")

    questions = [_expand_question(q) for q in compact.questions]
    players = [
        Player.expand(cp, questions, mode.num_questions)
        for cp in compact.players[:TriviaGame.MAX_PLAYERS]
    ]

    return TriviaGame(
        category_id=compact.category_id,
        mode_index=compact.mode_index,
        id=compact.id,
        current_index=compact.current_index,
        nudge_index=compact.nudge_index,
        players=players,
        questions=questions,
        sent_time=sent_time,
        time_remaining=compact.time_remaining,
        sender_id=compact.sender_id,
    )


def _expand_question(compact: CompactQuestion) -> Question:
    options = [
        Answer(
            is_correct=option.correct == 1,
            text=option.text,
            option_index=option.option_index if option.option_index is not None else i,
        )
        for i, option in enumerate(compact.options)
    ]
    return Question(text=compact.text, options=options, difficulty_level=compact.difficulty)


# ══════════════════════════════════════════════════════════════
# PAYLOAD ENCODING
# ══════════════════════════════════════════════════════════════

def encode(compact: CompactGame) -> str:
    """
    Serialize a compact game into a message payload.

    Raises:
        GameEncodingError: If serialization fails (a programming defect)
    """
    try:
        data = compact.model_dump_json(by_alias=True, exclude_none=True)
    except (TypeError, ValueError) as e:
        raise GameEncodingError(compact.id, str(e))
    return "?" + urlencode({PAYLOAD_KEY: data})


def encode_game(game: TriviaGame) -> str:
    """Compress and serialize a game in one step."""
    return encode(compress(game))


def parse_payload(payload: Optional[str]) -> CompactGame:
    """
    Extract and validate the compact game from a payload.

    Accepts a full URL, a bare query string, or the JSON itself.

    Raises:
        PayloadDecodeError: If the payload is missing or malformed
    """
    if not payload or not payload.strip():
        raise PayloadDecodeError("empty payload", payload)

    text = payload.strip()
    if text.startswith("{"):
        raw = text
    else:
        items = parse_qs(urlsplit(text).query).get(PAYLOAD_KEY)
        if not items:
            raise PayloadDecodeError(f"no '{PAYLOAD_KEY}' item in payload", payload)
        raw = items[0]

    try:
        return CompactGame.model_validate_json(raw)
    except ValidationError as e:
        raise PayloadDecodeError(f"{e.error_count()} validation error(s)", payload)


def decode(payload: Optional[str], participant_id: Optional[str] = None) -> Optional[TriviaGame]:
    """
    Decode a message payload into a game.

    Args:
        payload: The message payload (URL, query string or JSON)
        participant_id: Local participant; when given, the matching
            player (added if a seat is free) becomes the active player

    Returns:
        The decoded game, or None if there is no usable game
    """
    try:
        game = expand(parse_payload(payload))
    except PayloadDecodeError as e:
        logger.warning(f"Ignoring message payload: {e.reason}")
        return None

    if participant_id is not None:
        game.add_player(participant_id)
    return game
